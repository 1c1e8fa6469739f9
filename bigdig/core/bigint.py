"""
`BigInt`: signed arbitrary-precision integer.

A `BigInt` is a `(Sign, BigUint)` pair. `Sign.ZERO` is its own tag: it is used
exactly when the magnitude is zero, so there is no negative zero.

Division conventions:
- ``//``, ``%``, ``divmod`` and `div_rem` truncate toward zero; the remainder
  takes the sign of the dividend and ``a == (a // d) * d + a % d``.
- `div_floor`, `mod_floor` and `div_mod_floor` round toward negative infinity
  (the remainder takes the sign of the divisor), matching Python ints.

Bitwise operators act on the infinite two's complement representation and
``>>`` is an arithmetic shift, again matching Python ints.
"""

from __future__ import annotations

from enum import Enum, unique
from typing import Union

from ..errors import CanonicalFormError
from .algorithms import Digits
from .biguint import KERNEL, BigUint, _shift_amount, check_shl
from .roots import pow_digits

IntLike = Union["BigInt", BigUint, int]

# (negative, magnitude digits)
_Signed = tuple[bool, Digits]


@unique
class Sign(Enum):
    NEGATIVE = -1
    ZERO = 0
    POSITIVE = 1

    def __neg__(self) -> Sign:
        return Sign(-self.value)

    def __mul__(self, other: Sign) -> Sign:
        return Sign(self.value * other.value)


def _parts(value: object) -> _Signed | None:
    if isinstance(value, BigInt):
        return value._sign is Sign.NEGATIVE, value._mag._digits
    if isinstance(value, BigUint):
        return False, value._digits
    if isinstance(value, int) and not isinstance(value, bool):
        return value < 0, KERNEL.from_int(-value if value < 0 else value)
    return None


def _signed_add(na: bool, a: Digits, nb: bool, b: Digits) -> _Signed:
    if na == nb:
        return na, KERNEL.add(a, b)
    c = KERNEL.cmp(a, b)
    if c == 0:
        return False, []
    if c > 0:
        return na, KERNEL.sub(a, b)
    return nb, KERNEL.sub(b, a)


class BigInt:
    __slots__ = ("_sign", "_mag")

    def __init__(self, value: IntLike = 0) -> None:
        parts = _parts(value)
        if parts is None:
            raise TypeError(f"cannot build BigInt from {type(value).__name__}")
        negative, digits = parts
        self._mag = BigUint._wrap(list(digits))
        if not digits:
            self._sign = Sign.ZERO
        else:
            self._sign = Sign.NEGATIVE if negative else Sign.POSITIVE

    @classmethod
    def _wrap(cls, negative: bool, digits: Digits) -> BigInt:
        obj = object.__new__(cls)
        obj._mag = BigUint._wrap(digits)
        if not digits:
            obj._sign = Sign.ZERO
        else:
            obj._sign = Sign.NEGATIVE if negative else Sign.POSITIVE
        return obj

    @classmethod
    def from_biguint(cls, sign: Sign, magnitude: BigUint) -> BigInt:
        """Pair a sign with a copy of `magnitude`. A zero sign or a zero magnitude gives zero."""
        if not isinstance(sign, Sign):
            raise TypeError("sign must be a Sign")
        if sign is Sign.ZERO or magnitude.is_zero():
            return cls._wrap(False, [])
        return cls._wrap(sign is Sign.NEGATIVE, list(magnitude._digits))

    @classmethod
    def from_parts(cls, sign: Sign, digits: tuple[int, ...] | list[int]) -> BigInt:
        """Strict constructor for already-canonical parts (used by deserializers)."""
        ds = list(digits)
        if not KERNEL.is_canonical(ds):
            raise CanonicalFormError("digits are not canonical")
        if (sign is Sign.ZERO) != (not ds):
            raise CanonicalFormError(f"sign {sign.name} does not match magnitude")
        return cls._wrap(sign is Sign.NEGATIVE, ds)

    @classmethod
    def zero(cls) -> BigInt:
        return cls._wrap(False, [])

    @classmethod
    def one(cls) -> BigInt:
        return cls._wrap(False, [1])

    # -- Queries -------------------------------------------------------------

    @property
    def sign(self) -> Sign:
        return self._sign

    @property
    def magnitude(self) -> BigUint:
        return BigUint._wrap(list(self._mag._digits))

    def signum(self) -> BigInt:
        return BigInt(self._sign.value)

    def is_negative(self) -> bool:
        return self._sign is Sign.NEGATIVE

    def is_positive(self) -> bool:
        return self._sign is Sign.POSITIVE

    def is_zero(self) -> bool:
        return self._sign is Sign.ZERO

    def is_even(self) -> bool:
        return self._mag.is_even()

    def is_odd(self) -> bool:
        return self._mag.is_odd()

    def bits(self) -> int:
        return self._mag.bits()

    def trailing_zeros(self) -> int | None:
        return self._mag.trailing_zeros()

    def to_biguint(self) -> BigUint | None:
        if self._sign is Sign.NEGATIVE:
            return None
        return BigUint._wrap(list(self._mag._digits))

    def __bool__(self) -> bool:
        return self._sign is not Sign.ZERO

    def __int__(self) -> int:
        return self._sign.value * int(self._mag)

    def __index__(self) -> int:
        return int(self)

    def __hash__(self) -> int:
        return hash(int(self))

    def __repr__(self) -> str:
        return f"BigInt({self})"

    def __str__(self) -> str:
        return self.to_str_radix(10)

    def _signed(self) -> _Signed:
        return self._sign is Sign.NEGATIVE, self._mag._digits

    # -- Comparison ----------------------------------------------------------

    def _cmp(self, other: object) -> int | None:
        parts = _parts(other)
        if parts is None:
            return None
        na, a = self._signed()
        nb, b = parts
        sa = 0 if not a else (-1 if na else 1)
        sb = 0 if not b else (-1 if nb else 1)
        if sa != sb:
            return -1 if sa < sb else 1
        c = KERNEL.cmp(a, b)
        return -c if sa < 0 else c

    def __eq__(self, other: object) -> bool:
        c = self._cmp(other)
        if c is None:
            return NotImplemented
        return c == 0

    def __lt__(self, other: object) -> bool:
        c = self._cmp(other)
        if c is None:
            return NotImplemented
        return c < 0

    def __le__(self, other: object) -> bool:
        c = self._cmp(other)
        if c is None:
            return NotImplemented
        return c <= 0

    def __gt__(self, other: object) -> bool:
        c = self._cmp(other)
        if c is None:
            return NotImplemented
        return c > 0

    def __ge__(self, other: object) -> bool:
        c = self._cmp(other)
        if c is None:
            return NotImplemented
        return c >= 0

    # -- Unary ---------------------------------------------------------------

    def __neg__(self) -> BigInt:
        return BigInt.from_biguint(-self._sign, self._mag)

    def __pos__(self) -> BigInt:
        return BigInt._wrap(self._sign is Sign.NEGATIVE, list(self._mag._digits))

    def __abs__(self) -> BigInt:
        return BigInt._wrap(False, list(self._mag._digits))

    def __invert__(self) -> BigInt:
        # ~x == -x - 1
        na, a = self._signed()
        return BigInt._wrap(*_signed_add(not na, a, True, [1]))

    # -- Arithmetic ----------------------------------------------------------

    def __add__(self, other: object) -> BigInt:
        parts = _parts(other)
        if parts is None:
            return NotImplemented
        na, a = self._signed()
        return BigInt._wrap(*_signed_add(na, a, *parts))

    __radd__ = __add__

    def __sub__(self, other: object) -> BigInt:
        parts = _parts(other)
        if parts is None:
            return NotImplemented
        na, a = self._signed()
        nb, b = parts
        return BigInt._wrap(*_signed_add(na, a, not nb, b))

    def __rsub__(self, other: object) -> BigInt:
        parts = _parts(other)
        if parts is None:
            return NotImplemented
        na, a = self._signed()
        nb, b = parts
        return BigInt._wrap(*_signed_add(nb, b, not na, a))

    def __mul__(self, other: object) -> BigInt:
        parts = _parts(other)
        if parts is None:
            return NotImplemented
        na, a = self._signed()
        nb, b = parts
        return BigInt._wrap(na != nb, KERNEL.mul(a, b))

    __rmul__ = __mul__

    @staticmethod
    def _div_rem_parts(n: _Signed, d: _Signed) -> tuple[BigInt, BigInt]:
        nn, a = n
        nd, b = d
        q, r = KERNEL.div_rem(a, b)
        return BigInt._wrap(nn != nd, q), BigInt._wrap(nn, r)

    def div_rem(self, other: IntLike) -> tuple[BigInt, BigInt]:
        """Truncating division: ``(quotient, remainder)``."""
        parts = _parts(other)
        if parts is None:
            raise TypeError("div_rem expects a BigInt, BigUint or int")
        return self._div_rem_parts(self._signed(), parts)

    def __divmod__(self, other: object) -> tuple[BigInt, BigInt]:
        parts = _parts(other)
        if parts is None:
            return NotImplemented
        return self._div_rem_parts(self._signed(), parts)

    def __rdivmod__(self, other: object) -> tuple[BigInt, BigInt]:
        parts = _parts(other)
        if parts is None:
            return NotImplemented
        return self._div_rem_parts(parts, self._signed())

    def __floordiv__(self, other: object) -> BigInt:
        parts = _parts(other)
        if parts is None:
            return NotImplemented
        return self._div_rem_parts(self._signed(), parts)[0]

    def __rfloordiv__(self, other: object) -> BigInt:
        parts = _parts(other)
        if parts is None:
            return NotImplemented
        return self._div_rem_parts(parts, self._signed())[0]

    def __mod__(self, other: object) -> BigInt:
        parts = _parts(other)
        if parts is None:
            return NotImplemented
        return self._div_rem_parts(self._signed(), parts)[1]

    def __rmod__(self, other: object) -> BigInt:
        parts = _parts(other)
        if parts is None:
            return NotImplemented
        return self._div_rem_parts(parts, self._signed())[1]

    def div_mod_floor(self, other: IntLike) -> tuple[BigInt, BigInt]:
        """Floored division: the remainder takes the sign of the divisor."""
        d = BigInt(other)
        q, r = self.div_rem(d)
        if r and (r._sign is not d._sign):
            return q - 1, r + d
        return q, r

    def div_floor(self, other: IntLike) -> BigInt:
        return self.div_mod_floor(other)[0]

    def mod_floor(self, other: IntLike) -> BigInt:
        return self.div_mod_floor(other)[1]

    def pow(self, exp: IntLike) -> BigInt:
        if isinstance(exp, (BigInt, BigUint)):
            exp = int(exp)
        if not isinstance(exp, int) or isinstance(exp, bool):
            raise TypeError("exponent must be a BigInt, BigUint or int")
        if exp < 0:
            raise ValueError("BigInt exponent cannot be negative; use modpow for modular inverses")
        b = self._mag.bits()
        if exp and b > 1:
            check_shl(b, (b - 1) * (exp - 1))
        na, a = self._signed()
        return BigInt._wrap(na and bool(exp & 1), pow_digits(KERNEL, a, exp))

    def modpow(self, exponent: IntLike, modulus: IntLike) -> BigInt:
        from ..modular.modpow import modpow

        return modpow(self, exponent, modulus)

    def __pow__(self, exp: object, mod: object = None) -> BigInt:
        if _parts(exp) is None:
            return NotImplemented
        if mod is not None:
            if _parts(mod) is None:
                return NotImplemented
            return self.modpow(exp, mod)  # type: ignore[arg-type]
        return self.pow(exp)  # type: ignore[arg-type]

    def __rpow__(self, base: object) -> BigInt:
        if _parts(base) is None:
            return NotImplemented
        return BigInt(base).pow(self)  # type: ignore[arg-type]

    # -- Shifts --------------------------------------------------------------

    def __lshift__(self, n: int) -> BigInt:
        n = _shift_amount(n)
        check_shl(self.bits(), n)
        na, a = self._signed()
        return BigInt._wrap(na, KERNEL.shl_bits(a, n))

    def __rshift__(self, n: int) -> BigInt:
        n = _shift_amount(n)
        na, a = self._signed()
        shifted = KERNEL.shr_bits(a, n)
        if na:
            tz = KERNEL.trailing_zeros(a)
            if tz is not None and tz < n:
                # One bits were shifted out: round toward negative infinity.
                shifted = KERNEL.add(shifted, [1])
        return BigInt._wrap(na, shifted)

    # -- Bitwise (two's complement) ------------------------------------------

    def _bitwise(self, other: object, op: str) -> BigInt:
        parts = _parts(other)
        if parts is None:
            return NotImplemented
        na, a = self._signed()
        nb, b = parts
        width = max(len(a), len(b)) + 1
        ta = KERNEL.to_twos_complement(a, na, width)
        tb = KERNEL.to_twos_complement(b, nb, width)
        if op == "and":
            out = [x & y for x, y in zip(ta, tb)]
        elif op == "or":
            out = [x | y for x, y in zip(ta, tb)]
        else:
            out = [x ^ y for x, y in zip(ta, tb)]
        negative, mag = KERNEL.from_twos_complement(out)
        return BigInt._wrap(negative, mag)

    def __and__(self, other: object) -> BigInt:
        return self._bitwise(other, "and")

    __rand__ = __and__

    def __or__(self, other: object) -> BigInt:
        return self._bitwise(other, "or")

    __ror__ = __or__

    def __xor__(self, other: object) -> BigInt:
        return self._bitwise(other, "xor")

    __rxor__ = __xor__

    # -- Number theory -------------------------------------------------------

    def gcd(self, other: IntLike) -> BigInt:
        from ..modular.gcd import gcd

        return gcd(self, other)

    def lcm(self, other: IntLike) -> BigInt:
        from ..modular.gcd import lcm

        return lcm(self, other)

    def extended_gcd(self, other: IntLike) -> tuple[BigInt, BigInt, BigInt]:
        from ..modular.gcd import extended_gcd

        return extended_gcd(self, other)

    def mod_inverse(self, modulus: IntLike) -> BigInt:
        from ..modular.gcd import mod_inverse

        return mod_inverse(self, modulus)

    def sqrt(self) -> BigInt:
        if self._sign is Sign.NEGATIVE:
            raise ValueError("square root of a negative number")
        return BigInt(self._mag.sqrt())

    def nth_root(self, n: int) -> BigInt:
        """Root truncated toward zero; odd roots of negative values are negative."""
        if self._sign is Sign.NEGATIVE:
            if n % 2 == 0:
                raise ValueError("even root of a negative number")
            return -BigInt(self._mag.nth_root(n))
        return BigInt(self._mag.nth_root(n))

    # -- Conversion ----------------------------------------------------------

    def to_str_radix(self, radix: int) -> str:
        from .convert import format_digits

        text = format_digits(self._mag._digits, radix)
        return "-" + text if self._sign is Sign.NEGATIVE else text

    @classmethod
    def from_str_radix(cls, text: str, radix: int) -> BigInt:
        from .convert import parse_bigint

        return parse_bigint(text, radix)

    def to_bytes_be(self) -> tuple[Sign, bytes]:
        """Sign and big-endian magnitude bytes."""
        return self._sign, self._mag.to_bytes_be()

    def to_bytes_le(self) -> tuple[Sign, bytes]:
        return self._sign, self._mag.to_bytes_le()

    @classmethod
    def from_bytes_be(cls, sign: Sign, data: bytes) -> BigInt:
        return cls.from_biguint(sign, BigUint.from_bytes_be(data))

    @classmethod
    def from_bytes_le(cls, sign: Sign, data: bytes) -> BigInt:
        return cls.from_biguint(sign, BigUint.from_bytes_le(data))

    def to_signed_bytes_be(self, length: int | None = None) -> bytes:
        from .convert import int_to_signed_bytes

        return int_to_signed_bytes(self._sign is Sign.NEGATIVE, self._mag._digits, "big", length)

    def to_signed_bytes_le(self, length: int | None = None) -> bytes:
        from .convert import int_to_signed_bytes

        return int_to_signed_bytes(self._sign is Sign.NEGATIVE, self._mag._digits, "little", length)

    @classmethod
    def from_signed_bytes_be(cls, data: bytes) -> BigInt:
        from .convert import signed_bytes_to_parts

        return cls._wrap(*signed_bytes_to_parts(bytes(data), "big"))

    @classmethod
    def from_signed_bytes_le(cls, data: bytes) -> BigInt:
        from .convert import signed_bytes_to_parts

        return cls._wrap(*signed_bytes_to_parts(bytes(data), "little"))

    # -- Secure clear --------------------------------------------------------

    def zeroize(self) -> None:
        """Wipe the magnitude storage and reset to canonical zero."""
        self._mag.zeroize()
        self._sign = Sign.ZERO
