"""
`BigUint`: canonical unsigned arbitrary-precision integer.

A `BigUint` owns a trimmed little-endian digit list built by the process-wide
`DigitKernel`. Instances are immutable from the outside: every operation returns
a new value, and `digits` hands out a tuple copy. The only in-place mutation is
the opt-in `zeroize()` used for secret material.

Operators accept non-negative Python ints on either side. Mixing with `BigInt`
defers to `BigInt`, so ``BigUint + BigInt`` is a `BigInt`.
"""

from __future__ import annotations

from typing import Iterable, Union

from ..config import get_config
from ..errors import CanonicalFormError, ShiftOverflowError
from .algorithms import Digits, kernel_for, trim
from .roots import nth_root_digits, pow_digits, sqrt_digits

KERNEL = kernel_for(get_config().digit_bits)

UintLike = Union["BigUint", int]


def _digits_of(value: object) -> Digits | None:
    """Digits of a BigUint or non-negative int; None for unsupported operand types."""
    if isinstance(value, BigUint):
        return value._digits
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            raise ValueError("BigUint operand cannot be negative")
        return KERNEL.from_int(value)
    return None


def _shift_amount(n: object) -> int:
    if not isinstance(n, int) or isinstance(n, bool):
        raise TypeError("shift amount must be an int")
    if n < 0:
        raise ShiftOverflowError(f"negative shift amount: {n}")
    return n


def check_shl(bit_length: int, n: int) -> None:
    if bit_length and bit_length + n > get_config().max_bits:
        raise ShiftOverflowError(f"left shift by {n} exceeds max_bits={get_config().max_bits}")


class BigUint:
    __slots__ = ("_digits",)

    def __init__(self, value: UintLike = 0) -> None:
        if isinstance(value, BigUint):
            self._digits = list(value._digits)
            return
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"cannot build BigUint from {type(value).__name__}")
        if value < 0:
            raise ValueError("BigUint cannot hold a negative value")
        self._digits = KERNEL.from_int(value)

    @classmethod
    def _wrap(cls, digits: Digits) -> BigUint:
        # `digits` must be canonical and not shared with any other value.
        obj = object.__new__(cls)
        obj._digits = digits
        return obj

    @classmethod
    def from_digits(cls, digits: Iterable[int]) -> BigUint:
        """Build from little-endian digits; trailing zero digits are dropped."""
        ds = trim(list(digits))
        if not KERNEL.is_canonical(ds):
            raise CanonicalFormError(f"digits must be ints in [0, 2**{KERNEL.bits})")
        return cls._wrap(ds)

    @classmethod
    def zero(cls) -> BigUint:
        return cls._wrap([])

    @classmethod
    def one(cls) -> BigUint:
        return cls._wrap([1])

    @property
    def digits(self) -> tuple[int, ...]:
        return tuple(self._digits)

    @staticmethod
    def digit_bits() -> int:
        return KERNEL.bits

    # -- Queries -------------------------------------------------------------

    def bits(self) -> int:
        """Number of significant bits; zero has none."""
        return KERNEL.bit_length(self._digits)

    def trailing_zeros(self) -> int | None:
        return KERNEL.trailing_zeros(self._digits)

    def bit(self, index: int) -> bool:
        if index < 0:
            raise ValueError("bit index must be non-negative")
        return KERNEL.test_bit(self._digits, index)

    def is_zero(self) -> bool:
        return not self._digits

    def is_one(self) -> bool:
        return self._digits == [1]

    def is_even(self) -> bool:
        return not self._digits or not (self._digits[0] & 1)

    def is_odd(self) -> bool:
        return not self.is_even()

    def __bool__(self) -> bool:
        return bool(self._digits)

    def __int__(self) -> int:
        return KERNEL.to_int(self._digits)

    def __index__(self) -> int:
        return KERNEL.to_int(self._digits)

    def __hash__(self) -> int:
        return hash(int(self))

    def __repr__(self) -> str:
        return f"BigUint({self})"

    def __str__(self) -> str:
        return self.to_str_radix(10)

    # -- Comparison ----------------------------------------------------------

    def _cmp(self, other: object) -> int | None:
        if isinstance(other, int) and not isinstance(other, bool) and other < 0:
            return 1
        od = _digits_of(other)
        if od is None:
            return None
        return KERNEL.cmp(self._digits, od)

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

    # -- Arithmetic ----------------------------------------------------------

    def __add__(self, other: object) -> BigUint:
        od = _digits_of(other)
        if od is None:
            return NotImplemented
        return BigUint._wrap(KERNEL.add(self._digits, od))

    __radd__ = __add__

    def __sub__(self, other: object) -> BigUint:
        od = _digits_of(other)
        if od is None:
            return NotImplemented
        return BigUint._wrap(KERNEL.sub(self._digits, od))

    def __rsub__(self, other: object) -> BigUint:
        od = _digits_of(other)
        if od is None:
            return NotImplemented
        return BigUint._wrap(KERNEL.sub(od, self._digits))

    def checked_sub(self, other: UintLike) -> BigUint | None:
        """``self - other``, or None when the result would be negative."""
        od = _digits_of(other)
        if od is None:
            raise TypeError("checked_sub expects a BigUint or int")
        if KERNEL.cmp(self._digits, od) < 0:
            return None
        return BigUint._wrap(KERNEL.sub(self._digits, od))

    def __mul__(self, other: object) -> BigUint:
        od = _digits_of(other)
        if od is None:
            return NotImplemented
        return BigUint._wrap(KERNEL.mul(self._digits, od))

    __rmul__ = __mul__

    def div_rem(self, other: UintLike) -> tuple[BigUint, BigUint]:
        od = _digits_of(other)
        if od is None:
            raise TypeError("div_rem expects a BigUint or int")
        q, r = KERNEL.div_rem(self._digits, od)
        return BigUint._wrap(q), BigUint._wrap(r)

    def __divmod__(self, other: object) -> tuple[BigUint, BigUint]:
        if _digits_of(other) is None:
            return NotImplemented
        return self.div_rem(other)  # type: ignore[arg-type]

    def __rdivmod__(self, other: object) -> tuple[BigUint, BigUint]:
        od = _digits_of(other)
        if od is None:
            return NotImplemented
        q, r = KERNEL.div_rem(od, self._digits)
        return BigUint._wrap(q), BigUint._wrap(r)

    def __floordiv__(self, other: object) -> BigUint:
        od = _digits_of(other)
        if od is None:
            return NotImplemented
        return BigUint._wrap(KERNEL.div_rem(self._digits, od)[0])

    def __rfloordiv__(self, other: object) -> BigUint:
        od = _digits_of(other)
        if od is None:
            return NotImplemented
        return BigUint._wrap(KERNEL.div_rem(od, self._digits)[0])

    def __mod__(self, other: object) -> BigUint:
        od = _digits_of(other)
        if od is None:
            return NotImplemented
        return BigUint._wrap(KERNEL.div_rem(self._digits, od)[1])

    def __rmod__(self, other: object) -> BigUint:
        od = _digits_of(other)
        if od is None:
            return NotImplemented
        return BigUint._wrap(KERNEL.div_rem(od, self._digits)[1])

    def pow(self, exp: UintLike) -> BigUint:
        if isinstance(exp, BigUint):
            exp = int(exp)
        if not isinstance(exp, int) or isinstance(exp, bool):
            raise TypeError("exponent must be a BigUint or int")
        if exp < 0:
            raise ValueError("BigUint exponent cannot be negative")
        if exp and self.bits() > 1:
            check_shl(self.bits(), (self.bits() - 1) * (exp - 1))
        return BigUint._wrap(pow_digits(KERNEL, self._digits, exp))

    def modpow(self, exponent: UintLike, modulus: UintLike) -> BigUint:
        from ..modular.modpow import modpow_uint

        return modpow_uint(self, BigUint(exponent), BigUint(modulus))

    def __pow__(self, exp: object, mod: object = None) -> BigUint:
        if _digits_of(exp) is None:
            return NotImplemented
        if mod is not None:
            if _digits_of(mod) is None:
                return NotImplemented
            return self.modpow(exp, mod)  # type: ignore[arg-type]
        return self.pow(exp)  # type: ignore[arg-type]

    def __rpow__(self, base: object) -> BigUint:
        if _digits_of(base) is None:
            return NotImplemented
        return BigUint(base).pow(self)  # type: ignore[arg-type]

    # -- Shifts and bitwise --------------------------------------------------

    def __lshift__(self, n: int) -> BigUint:
        n = _shift_amount(n)
        check_shl(self.bits(), n)
        return BigUint._wrap(KERNEL.shl_bits(self._digits, n))

    def __rshift__(self, n: int) -> BigUint:
        n = _shift_amount(n)
        return BigUint._wrap(KERNEL.shr_bits(self._digits, n))

    def __and__(self, other: object) -> BigUint:
        od = _digits_of(other)
        if od is None:
            return NotImplemented
        return BigUint._wrap(KERNEL.bitand(self._digits, od))

    __rand__ = __and__

    def __or__(self, other: object) -> BigUint:
        od = _digits_of(other)
        if od is None:
            return NotImplemented
        return BigUint._wrap(KERNEL.bitor(self._digits, od))

    __ror__ = __or__

    def __xor__(self, other: object) -> BigUint:
        od = _digits_of(other)
        if od is None:
            return NotImplemented
        return BigUint._wrap(KERNEL.bitxor(self._digits, od))

    __rxor__ = __xor__

    # -- Number theory helpers -----------------------------------------------

    def sqrt(self) -> BigUint:
        return BigUint._wrap(sqrt_digits(KERNEL, self._digits))

    def cbrt(self) -> BigUint:
        return BigUint._wrap(nth_root_digits(KERNEL, self._digits, 3))

    def nth_root(self, n: int) -> BigUint:
        return BigUint._wrap(nth_root_digits(KERNEL, self._digits, n))

    def gcd(self, other: UintLike) -> BigUint:
        a = list(self._digits)
        od = _digits_of(other)
        if od is None:
            raise TypeError("gcd expects a BigUint or int")
        b = list(od)
        while b:
            a, b = b, KERNEL.div_rem(a, b)[1]
        return BigUint._wrap(a)

    def lcm(self, other: UintLike) -> BigUint:
        other = BigUint(other)
        if self.is_zero() or other.is_zero():
            return BigUint.zero()
        return (self // self.gcd(other)) * other

    # -- Conversion ----------------------------------------------------------

    def to_str_radix(self, radix: int) -> str:
        from .convert import format_digits

        return format_digits(self._digits, radix)

    @classmethod
    def from_str_radix(cls, text: str, radix: int) -> BigUint:
        from .convert import parse_biguint

        return parse_biguint(text, radix)

    def to_bytes_be(self, length: int | None = None) -> bytes:
        from .convert import uint_to_bytes

        return uint_to_bytes(self._digits, "big", length)

    def to_bytes_le(self, length: int | None = None) -> bytes:
        from .convert import uint_to_bytes

        return uint_to_bytes(self._digits, "little", length)

    @classmethod
    def from_bytes_be(cls, data: bytes) -> BigUint:
        return cls._wrap(KERNEL.from_bytes_le(bytes(data)[::-1]))

    @classmethod
    def from_bytes_le(cls, data: bytes) -> BigUint:
        return cls._wrap(KERNEL.from_bytes_le(bytes(data)))

    # -- Secure clear --------------------------------------------------------

    def zeroize(self) -> None:
        """Overwrite the digit storage with zeros; the value becomes zero.

        Opt-in for secret material. Any value sharing this storage observes the wipe.
        """
        ds = self._digits
        for i in range(len(ds)):
            ds[i] = 0
        ds.clear()
