"""
Montgomery arithmetic for a fixed odd modulus.

With ``R = 2**(bits * len(n))``, a residue ``a`` is held as ``a * R mod n``.
Products are reduced with REDC (Brent & Zimmermann, Modern Computer Arithmetic,
Algorithm 2.6), which needs only digit multiplications and one conditional
subtraction instead of a full division.

A `Montgomery` instance precomputes everything that depends on the modulus, so
it is worth keeping around for many exponentiations against the same modulus.
"""

from __future__ import annotations

from ..core.algorithms import Digits, trim
from ..core.biguint import KERNEL, BigUint, UintLike
from ..errors import DivisionByZeroError


def inv_mod_digit(num: int, bits: int) -> int:
    """Inverse of odd `num` modulo ``2**bits`` by the extended Euclidean algorithm
    (Brent & Zimmermann, Algorithm 1.20; the second cofactor is not needed)."""
    if num % 2 == 0:
        raise ValueError("digit inverse needs an odd value")
    a, b = num, 1 << bits
    u, w = 1, 0
    while b:
        q, r = divmod(a, b)
        a, b = b, r
        u, w = w, u - q * w
    if a != 1:
        raise ValueError("digit has no inverse")
    return u % (1 << bits)


class Montgomery:
    __slots__ = ("kernel", "n", "n_len", "mu", "r_mod_n", "r2_mod_n")

    def __init__(self, modulus: UintLike) -> None:
        kernel = KERNEL
        n = BigUint(modulus)._digits
        if not n:
            raise DivisionByZeroError("modulus is zero")
        if not n[0] & 1:
            raise ValueError("Montgomery form needs an odd modulus")
        self.kernel = kernel
        self.n: Digits = list(n)
        self.n_len = len(n)
        # mu = -n^{-1} mod 2**bits
        self.mu = (-inv_mod_digit(n[0], kernel.bits)) & kernel.mask
        r = [0] * self.n_len + [1]
        self.r_mod_n = kernel.div_rem(r, self.n)[1]
        self.r2_mod_n = kernel.div_rem(kernel.sqr(self.r_mod_n), self.n)[1]

    @property
    def modulus(self) -> BigUint:
        return BigUint._wrap(list(self.n))

    def _redc(self, c: Digits) -> Digits:
        """``c * R^{-1} mod n`` for ``c < n * R``."""
        k = self.kernel
        size = self.n_len
        t = list(c) + [0] * (2 * size + 2 - len(c))
        mask, mu, n = k.mask, self.mu, self.n
        for i in range(size):
            q = (t[i] * mu) & mask
            k.mac_digit_into(t, i, n, q)
        ret = trim(t[size:])
        if k.cmp(ret, n) >= 0:
            k.sub_into(ret, n)
        return ret

    def _mul_digits(self, a: Digits, b: Digits) -> Digits:
        return self._redc(self.kernel.mul(a, b))

    def _sqr_digits(self, a: Digits) -> Digits:
        return self._redc(self.kernel.sqr(a))

    def _to_montgomery_digits(self, a: Digits) -> Digits:
        k = self.kernel
        if k.cmp(a, self.n) >= 0:
            a = k.div_rem(a, self.n)[1]
        return self._mul_digits(a, self.r2_mod_n)

    def _residue(self, a: UintLike) -> Digits:
        # Reduce into [0, n) so the REDC input bound holds.
        k = self.kernel
        d = BigUint(a)._digits
        if k.cmp(d, self.n) >= 0:
            d = k.div_rem(d, self.n)[1]
        return d

    # -- Public API on BigUint values ----------------------------------------

    def to_montgomery(self, a: UintLike) -> BigUint:
        """``a * R mod n``; `a` may be any non-negative value."""
        return BigUint._wrap(self._to_montgomery_digits(BigUint(a)._digits))

    def from_montgomery(self, a: UintLike) -> BigUint:
        """``a * R^{-1} mod n``, undoing `to_montgomery`."""
        return BigUint._wrap(self._redc(self._residue(a)))

    def mul(self, a: UintLike, b: UintLike) -> BigUint:
        """Montgomery product of two values in Montgomery form."""
        return BigUint._wrap(self._mul_digits(self._residue(a), self._residue(b)))

    def sqr(self, a: UintLike) -> BigUint:
        return BigUint._wrap(self._sqr_digits(self._residue(a)))

    def pow_digits(self, base: Digits, exp: Digits) -> Digits:
        """``base ** exp mod n`` on raw digit lists, scanning the exponent from the top bit down."""
        k = self.kernel
        if not exp:
            return k.div_rem([1], self.n)[1]
        b = self._to_montgomery_digits(base)
        acc = list(self.r_mod_n)
        for i in range(k.bit_length(exp) - 1, -1, -1):
            acc = self._sqr_digits(acc)
            if k.test_bit(exp, i):
                acc = self._mul_digits(acc, b)
        return self._redc(acc)

    def pow(self, base: UintLike, exponent: UintLike) -> BigUint:
        return BigUint._wrap(self.pow_digits(BigUint(base)._digits, BigUint(exponent)._digits))


def monty_modpow(base: BigUint, exponent: BigUint, modulus: BigUint) -> BigUint:
    return Montgomery(modulus).pow(base, exponent)
