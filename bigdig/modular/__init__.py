"""
Modular arithmetic on top of the digit kernel.

Public API:
- `modpow(base, exponent, modulus)` and `modpow_uint(...)`
- `Montgomery(modulus)` for repeated work against one odd modulus
- `extended_gcd`, `gcd`, `lcm`, `mod_inverse`, `checked_mod_inverse`, `jacobi`
"""

from .gcd import checked_mod_inverse, extended_gcd, gcd, jacobi, lcm, mod_inverse
from .modpow import modpow, modpow_uint
from .monty import Montgomery

__all__ = [
    "modpow",
    "modpow_uint",
    "Montgomery",
    "extended_gcd",
    "gcd",
    "lcm",
    "mod_inverse",
    "checked_mod_inverse",
    "jacobi",
]
