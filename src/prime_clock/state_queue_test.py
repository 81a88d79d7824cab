import threading

import pytest

from prime_clock.state_queue import SnapshotChannel


class TestSnapshotChannel:
    """Test suite for SnapshotChannel"""

    def test_latest_wins(self):
        """Test that an unread item is replaced by the next publish"""
        channel = SnapshotChannel()
        channel.publish(1)
        channel.publish(2)
        assert channel.get(timeout=1) == 2

    def test_get_times_out(self):
        """Test that get raises once nothing new arrives"""
        channel = SnapshotChannel()
        channel.publish(1)
        channel.get(timeout=1)
        with pytest.raises(TimeoutError):
            channel.get(timeout=0.01)

    def test_latest_survives_get(self):
        """Test the non-blocking view of the last item"""
        channel = SnapshotChannel()
        assert channel.latest is None
        channel.publish("a")
        channel.get(timeout=1)
        assert channel.latest == "a"

    def test_drains_before_close(self):
        """Test that a pending item is still delivered after close"""
        channel = SnapshotChannel()
        channel.publish(1)
        channel.close()
        assert channel.get(timeout=1) == 1
        assert channel.get(timeout=1) is None
        assert channel.closed

    def test_publish_after_close_ignored(self):
        """Test that publishing to a closed channel is a no-op"""
        channel = SnapshotChannel()
        channel.close()
        channel.publish(1)
        assert channel.get(timeout=1) is None

    def test_close_wakes_consumer(self):
        """Test that a blocked consumer returns None on close"""
        channel = SnapshotChannel()
        result = []
        consumer = threading.Thread(target=lambda: result.append(channel.get(timeout=10)))
        consumer.start()
        channel.close()
        consumer.join(timeout=10)
        assert result == [None]
