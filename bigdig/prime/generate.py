"""
Random prime generation.

Each attempt draws a fresh candidate with exactly `bit_length` bits (top bit
forced) that is odd (bottom bit forced), rejects it cheaply against the
small-prime table and only then runs the full probable-prime test. The number
of attempts is bounded by the `max_prime_attempts` setting; running out raises
`PrimeGenerationError`, which is distinct from any "not prime" verdict.

The quality of the result rests entirely on the caller's `rng`.
"""

from __future__ import annotations

import logging

from ..config import get_config
from ..core.biguint import KERNEL, BigUint
from ..errors import PrimeGenerationError
from .bigrand import RandomSource, _require_source, random_digits
from .probable import is_probably_prime
from .tables import odd_small_primes

log = logging.getLogger(__name__)


def _sieve_rejects(digits: list[int]) -> bool:
    for p in odd_small_primes():
        if KERNEL.rem_digit(digits, p) == 0:
            return True
    return False


def random_prime(
    rng: RandomSource,
    bit_length: int,
    rounds: int | None = None,
    *,
    max_attempts: int | None = None,
) -> BigUint:
    """Random probable prime with exactly `bit_length` significant bits."""
    rng = _require_source(rng)
    if bit_length < 2:
        raise ValueError("prime bit length must be at least 2")
    cfg = get_config()
    max_attempts = cfg.max_prime_attempts if max_attempts is None else max_attempts
    if max_attempts <= 0:
        raise ValueError("max_attempts must be positive")

    if bit_length == 2:
        # Only 2 and 3 have two bits; 3 is the odd one.
        return BigUint(3)

    top = bit_length - 1
    top_digit, top_bit = divmod(top, KERNEL.bits)
    for attempt in range(1, max_attempts + 1):
        digits = random_digits(rng, bit_length)
        digits.extend([0] * (top_digit + 1 - len(digits)))
        digits[top_digit] |= 1 << top_bit
        digits[0] |= 1
        candidate = BigUint._wrap(digits)

        # Small candidates may themselves be table primes; let the full test decide.
        if candidate.bits() > 11 and _sieve_rejects(digits):
            continue
        if is_probably_prime(candidate, rounds, rng=rng):
            log.debug("found %d-bit prime after %d candidates", bit_length, attempt)
            return candidate

    log.warning("gave up on %d-bit prime after %d candidates", bit_length, max_attempts)
    raise PrimeGenerationError(bit_length, max_attempts)
