import io
import logging

import pytest

from prime_clock.clock import SequenceClock
from prime_clock.commands import interpret_command, read_commands, start_command_reader
from prime_clock.logs import configure_logging
from prime_clock.ui import Screen, ScreenSelector, UILogHandler


@pytest.fixture
def events():
    handler = UILogHandler()
    configure_logging(False, handler)
    return handler


@pytest.fixture
def running_clock():
    clock = SequenceClock()
    for _ in range(20):
        clock.advance()
    return clock


class TestCommands:
    """Test suite for the stdin command handling"""

    def test_number_restarts_clock(self, running_clock):
        """Test that a numeric line restarts the clock from that value"""
        selector = ScreenSelector()
        interpret_command("500\n", running_clock, selector)

        snapshot = running_clock.snapshot()
        assert snapshot.candidate == 500
        assert snapshot.primes_found == 0
        assert running_clock.advance().candidate == 501
        assert selector.current == Screen.CLOCK

    def test_other_lines_switch_screens(self, running_clock):
        """Test that non-numeric lines toggle the screen and leave the clock alone"""
        before = running_clock.snapshot()
        selector = ScreenSelector()

        interpret_command("s\n", running_clock, selector)
        assert selector.current == Screen.STATS
        interpret_command("toggle\n", running_clock, selector)
        assert selector.current == Screen.CLOCK
        assert running_clock.snapshot() is before

    def test_blank_lines_ignored(self, running_clock):
        before = running_clock.snapshot()
        selector = ScreenSelector(Screen.STATS)
        read_commands(["\n", "   \n", ""], running_clock, selector)
        assert selector.current == Screen.STATS
        assert running_clock.snapshot() is before

    @pytest.mark.parametrize("line", ["-3", str(2**32)])
    def test_out_of_range_rejected(self, running_clock, events, line):
        """Test that a value outside the width is logged and ignored"""
        before = running_clock.snapshot()
        interpret_command(line, running_clock, ScreenSelector())

        assert running_clock.snapshot() is before
        level, msg = events.buffer[-1]
        assert level == logging.WARNING
        assert "command.rejected" in msg
        assert "out of range" in msg

    def test_screen_switch_logged(self, events):
        interpret_command("stats", SequenceClock(), ScreenSelector())
        assert any("command.screen_switched" in msg for _, msg in events.buffer)

    def test_reader_thread(self, running_clock):
        """Test that the background reader applies every line until end of input"""
        selector = ScreenSelector()
        reader = start_command_reader(io.StringIO("42\nstats\n"), running_clock, selector)
        reader.join(timeout=10)

        assert not reader.is_alive()
        assert reader.daemon
        assert running_clock.snapshot().candidate == 42
        assert selector.current == Screen.STATS
