"""
Primality testing and random generation.

Public API:
- `is_probably_prime(n, rounds=None, *, rng=None, lucas=None) -> bool`
- `random_prime(rng, bit_length, rounds=None) -> BigUint`
- `gen_biguint`, `gen_bigint`, `gen_biguint_below`, `gen_biguint_range`,
  `gen_bigint_range`, `RandomBits`, `UniformBigUint`, `UniformBigInt`
- `small_primes()` (lazily built trial-division table)
"""

from .bigrand import (
    RandomBits,
    RandomSource,
    UniformBigInt,
    UniformBigUint,
    gen_bigint,
    gen_bigint_range,
    gen_biguint,
    gen_biguint_below,
    gen_biguint_range,
)
from .generate import random_prime
from .probable import (
    is_probably_prime,
    probably_prime_lucas,
    probably_prime_miller_rabin,
    trial_division,
)
from .tables import SMALL_PRIME_LIMIT, small_primes

__all__ = [
    "RandomBits",
    "RandomSource",
    "UniformBigInt",
    "UniformBigUint",
    "gen_bigint",
    "gen_bigint_range",
    "gen_biguint",
    "gen_biguint_below",
    "gen_biguint_range",
    "random_prime",
    "is_probably_prime",
    "probably_prime_lucas",
    "probably_prime_miller_rabin",
    "trial_division",
    "SMALL_PRIME_LIMIT",
    "small_primes",
]
