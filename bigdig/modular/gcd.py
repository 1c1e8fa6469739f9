"""GCD family: extended Euclid, modular inverse and the Jacobi symbol."""

from __future__ import annotations

from ..core.bigint import BigInt, IntLike, Sign
from ..core.biguint import BigUint
from ..errors import DivisionByZeroError, NoInverseError


def _low_digit(x: BigUint) -> int:
    return x._digits[0] if x._digits else 0


def gcd(a: IntLike, b: IntLike) -> BigInt:
    """Non-negative greatest common divisor; ``gcd(0, 0) == 0``."""
    return BigInt(abs(BigInt(a)).magnitude.gcd(abs(BigInt(b)).magnitude))


def lcm(a: IntLike, b: IntLike) -> BigInt:
    return BigInt(abs(BigInt(a)).magnitude.lcm(abs(BigInt(b)).magnitude))


def extended_gcd(a: IntLike, b: IntLike) -> tuple[BigInt, BigInt, BigInt]:
    """
    Return ``(g, x, y)`` with ``a*x + b*y == g`` and ``g == gcd(a, b) >= 0``.

    Runs the iterative extended Euclidean algorithm on ``|a|`` and ``|b|`` and
    folds the operand signs back into the cofactors.
    """
    a, b = BigInt(a), BigInt(b)
    old_r, r = abs(a), abs(b)
    old_s, s = BigInt.one(), BigInt.zero()
    old_t, t = BigInt.zero(), BigInt.one()
    while r:
        q, rem = old_r.div_rem(r)
        old_r, r = r, rem
        old_s, s = s, old_s - q * s
        old_t, t = t, old_t - q * t
    if a.sign is Sign.NEGATIVE:
        old_s = -old_s
    if b.sign is Sign.NEGATIVE:
        old_t = -old_t
    return old_r, old_s, old_t


def checked_mod_inverse(a: IntLike, modulus: IntLike) -> BigInt | None:
    """Inverse of `a` in ``[0, |modulus|)``, or None when ``gcd(a, modulus) != 1``."""
    m = abs(BigInt(modulus))
    if m.is_zero():
        raise DivisionByZeroError("modulus is zero")
    if m == 1:
        return BigInt.zero()
    g, x, _ = extended_gcd(BigInt(a).mod_floor(m), m)
    if g != 1:
        return None
    return x.mod_floor(m)


def mod_inverse(a: IntLike, modulus: IntLike) -> BigInt:
    inv = checked_mod_inverse(a, modulus)
    if inv is None:
        raise NoInverseError(f"{a} has no inverse modulo {modulus}")
    return inv


def jacobi(a: IntLike, n: IntLike) -> int:
    """Jacobi symbol ``(a / n)`` for odd positive `n`."""
    n_int = BigInt(n)
    if n_int.sign is not Sign.POSITIVE or n_int.is_even():
        raise ValueError(f"jacobi symbol needs an odd positive modulus, got {n}")
    x = BigInt(a).mod_floor(n_int).magnitude
    y = n_int.magnitude
    j = 1
    while x:
        tz = x.trailing_zeros() or 0
        x = x >> tz
        # (2 / y) = -1 when y = 3 or 5 (mod 8)
        if tz & 1 and _low_digit(y) & 7 in (3, 5):
            j = -j
        # Quadratic reciprocity: flip when both are 3 (mod 4).
        if _low_digit(x) & 3 == 3 and _low_digit(y) & 3 == 3:
            j = -j
        x, y = y % x, x
    return j if y.is_one() else 0
