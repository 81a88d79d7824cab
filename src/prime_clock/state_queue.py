from typing import Generic, TypeVar, Optional
import threading


T = TypeVar("T")


class SnapshotChannel(Generic[T]):
    """Thread-safe, size=1, latest-wins hand-off from the clock worker to one renderer."""

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._pending = False
        self._latest: Optional[T] = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def latest(self) -> Optional[T]:
        """Most recently published item, consumed or not. Never blocks."""
        return self._latest

    def publish(self, item: T) -> None:
        """Replace whatever the renderer has not picked up yet."""
        with self._condition:
            if self._closed:
                return
            self._latest = item
            self._pending = True
            self._condition.notify()

    def close(self) -> None:
        with self._condition:
            self._closed = True
            self._condition.notify_all()

    def get(self, timeout: Optional[float] = None) -> Optional[T]:
        """Block for the next unseen item. Returns None once closed and drained.

        Raises TimeoutError if nothing new arrives within timeout, which the
        renderer uses as its cue for a progress-only redraw.
        """
        with self._condition:
            ok = self._condition.wait_for(lambda: self._pending or self._closed, timeout)
            if not ok:
                raise TimeoutError("channel get() timed out")
            if not self._pending:
                return None
            self._pending = False
            return self._latest
