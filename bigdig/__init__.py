"""
bigdig: arbitrary-precision integers on fixed-width digit vectors.

Public API:
- `BigUint`, `BigInt`, `Sign`
- `from_str_radix(text, radix)`, `to_str_radix(value, radix)`
- `modpow`, `Montgomery`, `extended_gcd`, `gcd`, `lcm`, `mod_inverse`, `jacobi`
- `is_probably_prime`, `random_prime`, `gen_biguint` and friends
- `Zeroizing` for scoped wiping of secret values
- `get_config()` / `load_config()` for the process settings
"""

from .config import BigDigConfig, get_config, load_config
from .core import (
    BigDigError,
    BigInt,
    BigUint,
    CanonicalFormError,
    ConfigError,
    DivisionByZeroError,
    EncodingOverflowError,
    InvalidRadixError,
    NoInverseError,
    ParseBigIntError,
    ParseErrorKind,
    PrimeGenerationError,
    ShiftOverflowError,
    Sign,
    UnderflowError,
    Zeroizing,
    from_str_radix,
    to_str_radix,
)
from .modular import Montgomery, checked_mod_inverse, extended_gcd, gcd, jacobi, lcm, mod_inverse, modpow
from .prime import (
    RandomBits,
    RandomSource,
    gen_bigint,
    gen_bigint_range,
    gen_biguint,
    gen_biguint_below,
    gen_biguint_range,
    is_probably_prime,
    random_prime,
)

__all__ = [
    "BigDigConfig",
    "get_config",
    "load_config",
    "BigDigError",
    "BigInt",
    "BigUint",
    "CanonicalFormError",
    "ConfigError",
    "DivisionByZeroError",
    "EncodingOverflowError",
    "InvalidRadixError",
    "NoInverseError",
    "ParseBigIntError",
    "ParseErrorKind",
    "PrimeGenerationError",
    "ShiftOverflowError",
    "Sign",
    "UnderflowError",
    "Zeroizing",
    "from_str_radix",
    "to_str_radix",
    "Montgomery",
    "checked_mod_inverse",
    "extended_gcd",
    "gcd",
    "jacobi",
    "lcm",
    "mod_inverse",
    "modpow",
    "RandomBits",
    "RandomSource",
    "gen_bigint",
    "gen_bigint_range",
    "gen_biguint",
    "gen_biguint_below",
    "gen_biguint_range",
    "is_probably_prime",
    "random_prime",
]
