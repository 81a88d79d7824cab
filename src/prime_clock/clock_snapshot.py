from dataclasses import dataclass, field
from enum import Flag, auto
from typing import Tuple

from prime_clock.algorithm.prime_stats import PrimeStats, empty_hist
from prime_clock.digits import IntegerWidth


class PrimeKind(Flag):
    """Classification of a tested candidate, combinable for display."""

    COMPOSITE = 0
    PRIME = auto()
    TWIN = auto()
    PALINDROMIC = auto()


@dataclass(frozen=True, slots=True)
class ClockSnapshot:
    """Immutable view of the clock, published once per advance or restart."""

    version: int
    width: IntegerWidth
    candidate: int
    last_prime: int
    last_prime_decimal: str

    primes_found: int = 0
    twin_primes_found: int = 0
    palindromic_primes_found: int = 0
    first_digit_hist: Tuple[int, ...] = field(default_factory=empty_hist)
    last_digit_hist: Tuple[int, ...] = field(default_factory=empty_hist)

    is_prime: bool = False
    is_twin_prime: bool = False
    is_palindromic_prime: bool = False
    cancelled: bool = False
    saturated: bool = False

    @classmethod
    def from_stats(
        cls,
        stats: PrimeStats,
        *,
        version: int,
        width: IntegerWidth,
        candidate: int,
        last_prime: int,
        last_prime_decimal: str,
        is_prime: bool,
        cancelled: bool = False,
        saturated: bool = False,
    ) -> "ClockSnapshot":
        return cls(
            version=version,
            width=width,
            candidate=candidate,
            last_prime=last_prime,
            last_prime_decimal=last_prime_decimal,
            primes_found=stats.primes_found,
            twin_primes_found=stats.twin_primes_found,
            palindromic_primes_found=stats.palindromic_primes_found,
            first_digit_hist=stats.first_digit_hist,
            last_digit_hist=stats.last_digit_hist,
            is_prime=is_prime,
            is_twin_prime=is_prime and stats.is_twin_prime,
            is_palindromic_prime=is_prime and stats.is_palindromic_prime,
            cancelled=cancelled,
            saturated=saturated,
        )

    @property
    def kind(self) -> PrimeKind:
        if not self.is_prime:
            return PrimeKind.COMPOSITE
        kind = PrimeKind.PRIME
        if self.is_twin_prime:
            kind |= PrimeKind.TWIN
        if self.is_palindromic_prime:
            kind |= PrimeKind.PALINDROMIC
        return kind
