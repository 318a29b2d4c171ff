"""
Prime table used to key character positions.

The table is built once by trial division and shared read-only by every
encoder in the process.
"""

import logging
import math
from functools import lru_cache
from typing import Iterator, List, Tuple

logger = logging.getLogger(__name__)

DEFAULT_PRIME_COUNT = 1000


def generate_primes(count: int) -> List[int]:
    """Return the first ``count`` primes in ascending order, starting at 2.

    Plain trial division up to the square root of each candidate. Every
    integer is tried, evens included. A zero or negative count yields an
    empty list.

    Args:
        count: Number of primes to produce.

    Returns:
        List of primes.
    """
    primes: List[int] = []
    candidate = 2
    while len(primes) < count:
        limit = math.isqrt(candidate)
        if all(candidate % d for d in range(2, limit + 1)):
            primes.append(candidate)
        candidate += 1
    return primes


class PrimeTable:
    """Immutable, 1-indexed view over the first N primes.

    Example:
        >>> table = PrimeTable(5)
        >>> table.nth(1), table.nth(5)
        (2, 11)
    """

    __slots__ = ("_primes",)

    def __init__(self, count: int = DEFAULT_PRIME_COUNT):
        self._primes: Tuple[int, ...] = tuple(generate_primes(count))
        logger.debug("Generated prime table with %d entries", len(self._primes))

    def __len__(self) -> int:
        return len(self._primes)

    def __iter__(self) -> Iterator[int]:
        return iter(self._primes)

    def __getitem__(self, index: int) -> int:
        return self._primes[index]

    def __repr__(self) -> str:
        return "PrimeTable(size={})".format(len(self._primes))

    def nth(self, position: int) -> int:
        """Return the prime for 1-based ``position``."""
        if position < 1 or position > len(self._primes):
            raise IndexError(
                "position {} outside prime table of size {}".format(position, len(self._primes))
            )
        return self._primes[position - 1]

    @property
    def primes(self) -> Tuple[int, ...]:
        """All primes in the table."""
        return self._primes


@lru_cache(maxsize=None)
def default_prime_table(count: int = DEFAULT_PRIME_COUNT) -> PrimeTable:
    """Process-wide prime table, built on first use and reused afterwards."""
    return PrimeTable(count)
