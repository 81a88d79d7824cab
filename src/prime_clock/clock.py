from dataclasses import replace
import threading

import structlog

from prime_clock.algorithm.prime_stats import PrimeStats, StatisticsAggregator
from prime_clock.algorithm.trial_division import CancellationToken, PrimalityTester, TestProgress
from prime_clock.clock_snapshot import ClockSnapshot
from prime_clock.digits import DecimalBuffer, IntegerWidth, encode

log = structlog.get_logger()

DEFAULT_START = 1
INITIAL_LAST_PRIME = 1


class SequenceClock:
    """Walks the integers one candidate at a time, testing each for primality.

    advance() is meant to be driven from a single worker thread. The other
    methods may be called from anywhere: restart_from() and cancel() reach the
    running trial loop through the cancellation token, and the progress
    accessors read the tester's counters without locking.

    Committed state is only ever published as a whole ClockSnapshot, swapped
    under the lock, so a reader never sees counters from one candidate next
    to flags from another.

    Overflow: the clock saturates. Once the candidate reaches the width's
    maximum value, advance() stops moving and keeps returning the last
    snapshot, which has saturated=True.
    """

    def __init__(
        self,
        start: int = DEFAULT_START,
        *,
        width: IntegerWidth = IntegerWidth.U32,
    ) -> None:
        self.width = width
        self._check_range(start)

        self._tester = PrimalityTester()
        self._aggregator = StatisticsAggregator(width)
        self._buffer = DecimalBuffer(width)
        self._cancel = CancellationToken()
        self._lock = threading.Lock()

        self._version = 0
        self._generation = 0
        self._saturation_logged = False

        with self._lock:
            self._reset(start)

    @property
    def candidate(self) -> int:
        """The candidate being tested now, possibly ahead of the latest snapshot."""
        return self._candidate

    def snapshot(self) -> ClockSnapshot:
        return self._snapshot

    def progress(self) -> TestProgress:
        return self._tester.progress()

    def fraction_tested(self) -> float:
        return self._tester.fraction_tested()

    def advance(self) -> ClockSnapshot:
        """Move to the next candidate, test it and publish the outcome."""
        with self._lock:
            if self._candidate >= self.width.max_value:
                if not self._saturation_logged:
                    log.warning("clock.saturated", candidate=self._candidate, width=self.width.name)
                    self._saturation_logged = True
                return self._snapshot

            self._cancel.clear()
            self._candidate += 1
            candidate = self._candidate
            generation = self._generation

        is_prime = self._tester.test(candidate, self._cancel)
        cancelled = self._tester.last_test_cancelled

        with self._lock:
            if generation != self._generation:
                # A restart landed while we were testing; its snapshot wins.
                log.debug("clock.stale_result_discarded", candidate=candidate)
                # The stale loop can write trials_done after the restart reset it.
                self._tester.reset()
                return self._snapshot

            if cancelled:
                log.info("clock.cancelled", candidate=candidate)
                self._stats = replace(self._stats, is_twin_prime=False, is_palindromic_prime=False)
                return self._publish(is_prime=False, cancelled=True)

            self._stats = self._aggregator.record(candidate, is_prime, self._last_prime, self._stats)
            if is_prime:
                self._last_prime = candidate
                log.debug(
                    "clock.prime_found",
                    prime=candidate,
                    twin=self._stats.is_twin_prime,
                    palindromic=self._stats.is_palindromic_prime,
                )
            return self._publish(is_prime=is_prime)

    def restart_from(self, m: int) -> ClockSnapshot:
        """Abort any test in flight and start over from m with zeroed statistics.

        The first advance() afterwards tests m + 1.
        """
        self._check_range(m)
        with self._lock:
            self._cancel.set()
            self._generation += 1
            snapshot = self._reset(m)
        log.info("clock.restarted", start=m, width=self.width.name)
        return snapshot

    def cancel(self) -> None:
        """Abort the test in flight, if any; the candidate under test is skipped."""
        self._cancel.set()

    def _check_range(self, m: int) -> None:
        if not 0 <= m <= self.width.max_value:
            raise ValueError(
                f"Start value {m} out of range for {self.width.name} (0..{self.width.max_value})"
            )

    def _reset(self, m: int) -> ClockSnapshot:
        self._candidate = m
        self._last_prime = INITIAL_LAST_PRIME
        self._stats = PrimeStats()
        self._tester.reset()
        self._saturation_logged = False
        return self._publish(is_prime=False)

    def _publish(self, *, is_prime: bool, cancelled: bool = False) -> ClockSnapshot:
        # Caller holds self._lock.
        self._version += 1
        snapshot = ClockSnapshot.from_stats(
            self._stats,
            version=self._version,
            width=self.width,
            candidate=self._candidate,
            last_prime=self._last_prime,
            last_prime_decimal=encode(self._last_prime, self._buffer),
            is_prime=is_prime,
            cancelled=cancelled,
            saturated=self._candidate >= self.width.max_value,
        )
        self._snapshot = snapshot
        return snapshot
