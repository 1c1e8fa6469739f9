"""
Small-prime tables for trial division.

The tables are built on first use and cached for the life of the process.
`functools.lru_cache` publishes the finished tuple atomically, so concurrent
first callers never observe a half-built table.
"""

from __future__ import annotations

from functools import lru_cache

# Trial division covers primes below this bound.
SMALL_PRIME_LIMIT = 2048


@lru_cache(maxsize=1)
def small_primes() -> tuple[int, ...]:
    """All primes below `SMALL_PRIME_LIMIT`, by the sieve of Eratosthenes."""
    sieve = bytearray([1]) * SMALL_PRIME_LIMIT
    sieve[0] = sieve[1] = 0
    p = 2
    while p * p < SMALL_PRIME_LIMIT:
        if sieve[p]:
            sieve[p * p::p] = bytes(len(range(p * p, SMALL_PRIME_LIMIT, p)))
        p += 1
    return tuple(i for i, flag in enumerate(sieve) if flag)


@lru_cache(maxsize=1)
def small_prime_set() -> frozenset[int]:
    return frozenset(small_primes())


@lru_cache(maxsize=1)
def odd_small_primes() -> tuple[int, ...]:
    return small_primes()[1:]
