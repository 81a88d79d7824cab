import logging

import pytest
import structlog

from prime_clock.logs import LOGGER_NAME

# http://www.primos.mat.br/indexen.html
PRIMES_BELOW_1000 = (
    2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47, 53, 59, 61, 67, 71,
    73, 79, 83, 89, 97, 101, 103, 107, 109, 113, 127, 131, 137, 139, 149, 151, 157, 163, 167, 173,
    179, 181, 191, 193, 197, 199, 211, 223, 227, 229, 233, 239, 241, 251, 257, 263, 269, 271, 277, 281,
    283, 293, 307, 311, 313, 317, 331, 337, 347, 349, 353, 359, 367, 373, 379, 383, 389, 397, 401, 409,
    419, 421, 431, 433, 439, 443, 449, 457, 461, 463, 467, 479, 487, 491, 499, 503, 509, 521, 523, 541,
    547, 557, 563, 569, 571, 577, 587, 593, 599, 601, 607, 613, 617, 619, 631, 641, 643, 647, 653, 659,
    661, 673, 677, 683, 691, 701, 709, 719, 727, 733, 739, 743, 751, 757, 761, 769, 773, 787, 797, 809,
    811, 821, 823, 827, 829, 839, 853, 857, 859, 863, 877, 881, 883, 887, 907, 911, 919, 929, 937, 941,
    947, 953, 967, 971, 977, 983, 991, 997,
)

# Lower members of the twin pairs below 1000 (https://primes.utm.edu/lists/small/1ktwins.txt)
TWIN_PRIME_PAIRS_BELOW_1000 = (
    3, 5, 11, 17, 29, 41, 59, 71, 101, 107, 137, 149, 179, 191, 197,
    227, 239, 269, 281, 311, 347, 419, 431, 461, 521, 569, 599, 617, 641, 659, 809,
    821, 827, 857, 881,
)

# https://oeis.org/A002385
PALINDROMIC_PRIMES_BELOW_1000 = (
    2, 3, 5, 7, 11, 101, 131, 151, 181, 191, 313, 353, 373, 383, 727, 757, 787, 797, 919, 929,
)


@pytest.fixture
def primes_below_1000():
    return PRIMES_BELOW_1000


@pytest.fixture
def twin_prime_pairs_below_1000():
    return TWIN_PRIME_PAIRS_BELOW_1000


@pytest.fixture
def palindromic_primes_below_1000():
    return PALINDROMIC_PRIMES_BELOW_1000


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo whatever configure_logging() a test triggered."""
    yield
    structlog.reset_defaults()
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
