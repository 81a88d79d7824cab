from dataclasses import dataclass, field, replace
from typing import Tuple

from prime_clock.digits import (
    HIST_BUCKETS,
    DecimalBuffer,
    IntegerWidth,
    encode,
    first_digit,
    is_palindrome,
    last_digit,
)


def empty_hist() -> Tuple[int, ...]:
    return (0,) * HIST_BUCKETS


@dataclass(frozen=True, slots=True)
class PrimeStats:
    """Cumulative prime counters plus the flags for the latest candidate."""

    primes_found: int = 0
    twin_primes_found: int = 0
    palindromic_primes_found: int = 0
    first_digit_hist: Tuple[int, ...] = field(default_factory=empty_hist)
    last_digit_hist: Tuple[int, ...] = field(default_factory=empty_hist)
    is_twin_prime: bool = False
    is_palindromic_prime: bool = False


def _bump(hist: Tuple[int, ...], digit: int) -> Tuple[int, ...]:
    # Buckets hold digits 1-9; a prime never starts or ends in 0.
    index = digit - 1
    return hist[:index] + (hist[index] + 1,) + hist[index + 1:]


class StatisticsAggregator:
    """Folds each discovered prime into a new PrimeStats.

    Calling record() twice for the same prime counts it twice; the clock is
    responsible for calling it once per discovery.
    """

    def __init__(self, width: IntegerWidth = IntegerWidth.U32) -> None:
        self._buffer = DecimalBuffer(width)

    def record(self, candidate: int, is_prime: bool, last_prime_before: int, state: PrimeStats) -> PrimeStats:
        if not is_prime:
            return replace(state, is_twin_prime=False, is_palindromic_prime=False)

        decimal = encode(candidate, self._buffer)
        is_twin_prime = candidate - last_prime_before == 2
        is_palindromic_prime = is_palindrome(decimal)

        return PrimeStats(
            primes_found=state.primes_found + 1,
            twin_primes_found=state.twin_primes_found + is_twin_prime,
            palindromic_primes_found=state.palindromic_primes_found + is_palindromic_prime,
            first_digit_hist=_bump(state.first_digit_hist, first_digit(decimal)),
            last_digit_hist=_bump(state.last_digit_hist, last_digit(decimal)),
            is_twin_prime=is_twin_prime,
            is_palindromic_prime=is_palindromic_prime,
        )
