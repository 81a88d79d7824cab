from dataclasses import dataclass
from math import isqrt
import threading

NO_PROGRESS = 0  # trials_done sentinel after a cancelled test


@dataclass(frozen=True, slots=True)
class TestProgress:
    """How far the trial loop has got for the candidate under test."""

    __test__ = False  # not a pytest class

    trials_done: int = NO_PROGRESS
    trials_required: int = 1

    @property
    def fraction_tested(self) -> float:
        fraction = (self.trials_done - 1) / self.trials_required
        return min(max(fraction, 0.0), 1.0)


class CancellationToken:
    """Flag shared between the trial loop and whoever wants it to stop.

    The loop polls it once per trial iteration, never mid-division.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def set(self) -> None:
        self._event.set()

    def clear(self) -> None:
        self._event.clear()

    def is_set(self) -> bool:
        return self._event.is_set()


def trial_bound(m: int) -> int:
    """Largest k such that 6k - 1 <= isqrt(m)."""
    return (isqrt(m) + 1) // 6


class PrimalityTester:
    """Trial division by 6k +/- 1 with live, readable progress.

    trials_done and trials_required are plain attributes so that another
    thread can peek at them while test() runs. The two reads are not atomic
    together; a progress bar tolerates that.
    """

    def __init__(self) -> None:
        self.trials_done = NO_PROGRESS
        self.trials_required = 1
        self.last_test_cancelled = False

    def reset(self) -> None:
        self.trials_done = NO_PROGRESS
        self.trials_required = 1
        self.last_test_cancelled = False

    def progress(self) -> TestProgress:
        return TestProgress(self.trials_done, self.trials_required)

    def fraction_tested(self) -> float:
        return self.progress().fraction_tested

    def test(self, m: int, cancel: CancellationToken | None = None) -> bool:
        self.last_test_cancelled = False
        self.trials_done = 1
        self.trials_required = 1

        if m == 2 or m == 3:
            return True
        if m < 2 or m % 2 == 0 or m % 3 == 0:
            return False

        bound = trial_bound(m)
        self.trials_required = max(bound, 1)
        for k in range(1, bound + 1):
            if cancel is not None and cancel.is_set():
                # A cancelled test reports no progress.
                self.trials_done = NO_PROGRESS
                self.last_test_cancelled = True
                return False
            self.trials_done = k
            k6 = 6 * k
            if m % (k6 - 1) == 0 or m % (k6 + 1) == 0:
                return False

        return True
