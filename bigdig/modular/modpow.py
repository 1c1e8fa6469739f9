"""
Modular exponentiation.

Odd moduli go through `Montgomery` when the `montgomery` setting is on (the
default); even moduli, or all moduli with it off, use plain square-and-multiply
with a full reduction after every step. Both scan the exponent from the most
significant bit.
"""

from __future__ import annotations

from ..config import get_config
from ..core.algorithms import Digits
from ..core.bigint import BigInt, IntLike, Sign
from ..core.biguint import KERNEL, BigUint
from ..errors import DivisionByZeroError
from .gcd import mod_inverse
from .monty import Montgomery


def plain_modpow_digits(base: Digits, exp: Digits, n: Digits) -> Digits:
    k = KERNEL
    base = k.div_rem(base, n)[1]
    acc = k.div_rem([1], n)[1]
    for i in range(k.bit_length(exp) - 1, -1, -1):
        acc = k.div_rem(k.sqr(acc), n)[1]
        if k.test_bit(exp, i):
            acc = k.div_rem(k.mul(acc, base), n)[1]
    return acc


def modpow_uint(base: BigUint, exponent: BigUint, modulus: BigUint) -> BigUint:
    """``base ** exponent mod modulus`` for unsigned operands."""
    n = modulus._digits
    if not n:
        raise DivisionByZeroError("modulus is zero")
    if n == [1]:
        return BigUint.zero()
    if n[0] & 1 and get_config().montgomery:
        return BigUint._wrap(Montgomery(modulus).pow_digits(base._digits, exponent._digits))
    return BigUint._wrap(plain_modpow_digits(base._digits, exponent._digits, n))


def modpow(base: IntLike, exponent: IntLike, modulus: IntLike) -> BigInt:
    """
    ``base ** exponent mod modulus`` with the result in ``[0, |modulus|)``.

    A negative exponent uses the modular inverse of `base`; `NoInverseError`
    is raised when `base` and `modulus` are not coprime.
    """
    b, e, m = BigInt(base), BigInt(exponent), abs(BigInt(modulus))
    if m.is_zero():
        raise DivisionByZeroError("modulus is zero")
    if e.sign is Sign.NEGATIVE:
        b = mod_inverse(b, m)
        e = -e
    else:
        b = b.mod_floor(m)
    return BigInt(modpow_uint(b.magnitude, e.magnitude, m.magnitude))
