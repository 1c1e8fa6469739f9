"""
Digit-vector arithmetic kernel.

Magnitudes are plain Python lists of digits, least significant first, each digit
in ``[0, 2**bits)``. A list is canonical when its last element is non-zero; the
empty list is zero.

All algorithms are methods of `DigitKernel`, which is built for one digit width.
`kernel_for(bits)` hands out one shared kernel per width. Functions that return
a magnitude always return a fresh, canonical list; functions whose name ends in
``_into`` mutate their first argument and document it.
"""

from __future__ import annotations

from functools import lru_cache

from ..errors import DivisionByZeroError, UnderflowError

Digits = list[int]

# Operands shorter than this (in digits) use schoolbook multiplication.
KARATSUBA_THRESHOLD = 32


def trim(a: Digits) -> Digits:
    """Drop most significant zero digits in place; returns `a`."""
    while a and a[-1] == 0:
        a.pop()
    return a


class DigitKernel:
    """Arithmetic over canonical digit lists for a fixed digit width."""

    __slots__ = ("bits", "base", "mask", "bytes_per_digit")

    def __init__(self, bits: int) -> None:
        if bits not in (32, 64):
            raise ValueError(f"unsupported digit width: {bits}")
        self.bits = bits
        self.base = 1 << bits
        self.mask = self.base - 1
        self.bytes_per_digit = bits // 8

    def __repr__(self) -> str:
        return f"DigitKernel(bits={self.bits})"

    # -- Native int bridge ---------------------------------------------------

    def from_int(self, value: int) -> Digits:
        if value < 0:
            raise ValueError("magnitude cannot be negative")
        out: Digits = []
        while value:
            out.append(value & self.mask)
            value >>= self.bits
        return out

    def to_int(self, a: Digits) -> int:
        value = 0
        for d in reversed(a):
            value = (value << self.bits) | d
        return value

    def is_canonical(self, a: list[int] | tuple[int, ...]) -> bool:
        if a and a[-1] == 0:
            return False
        return all(isinstance(d, int) and not isinstance(d, bool) and 0 <= d <= self.mask for d in a)

    # -- Bit queries ---------------------------------------------------------

    def bit_length(self, a: Digits) -> int:
        if not a:
            return 0
        return (len(a) - 1) * self.bits + a[-1].bit_length()

    def trailing_zeros(self, a: Digits) -> int | None:
        """Number of low zero bits, or None for zero."""
        for i, d in enumerate(a):
            if d:
                return i * self.bits + ((d & -d).bit_length() - 1)
        return None

    def test_bit(self, a: Digits, index: int) -> bool:
        q, r = divmod(index, self.bits)
        if q >= len(a):
            return False
        return bool((a[q] >> r) & 1)

    # -- Comparison ----------------------------------------------------------

    def cmp(self, a: Digits, b: Digits) -> int:
        la, lb = len(a), len(b)
        if la != lb:
            return -1 if la < lb else 1
        for i in range(la - 1, -1, -1):
            x, y = a[i], b[i]
            if x != y:
                return -1 if x < y else 1
        return 0

    # -- Addition / subtraction ---------------------------------------------

    def add(self, a: Digits, b: Digits) -> Digits:
        if len(a) < len(b):
            a, b = b, a
        bits, mask = self.bits, self.mask
        out: Digits = []
        carry = 0
        lb = len(b)
        for i, x in enumerate(a):
            s = x + carry
            if i < lb:
                s += b[i]
            out.append(s & mask)
            carry = s >> bits
        if carry:
            out.append(carry)
        return out

    def add_into(self, acc: Digits, b: Digits, offset: int = 0) -> None:
        """``acc += b << (offset digits)`` in place; `acc` grows as needed."""
        bits, mask = self.bits, self.mask
        need = offset + len(b)
        if len(acc) < need:
            acc.extend([0] * (need - len(acc)))
        carry = 0
        i = offset
        for x in b:
            s = acc[i] + x + carry
            acc[i] = s & mask
            carry = s >> bits
            i += 1
        while carry:
            if i == len(acc):
                acc.append(carry)
                return
            s = acc[i] + carry
            acc[i] = s & mask
            carry = s >> bits
            i += 1

    def sub(self, a: Digits, b: Digits) -> Digits:
        """``a - b``; raises `UnderflowError` when ``b > a``."""
        if self.cmp(a, b) < 0:
            raise UnderflowError("unsigned subtraction underflow")
        out = list(a)
        self._sub_into_unchecked(out, b, 0)
        return trim(out)

    def _sub_into_unchecked(self, acc: Digits, b: Digits, offset: int) -> None:
        mask = self.mask
        borrow = 0
        i = offset
        for x in b:
            t = acc[i] - x - borrow
            acc[i] = t & mask
            borrow = 1 if t < 0 else 0
            i += 1
        while borrow:
            t = acc[i] - 1
            acc[i] = t & mask
            borrow = 1 if t < 0 else 0
            i += 1

    def sub_into(self, acc: Digits, b: Digits, offset: int = 0) -> None:
        """``acc -= b << (offset digits)`` in place, then trims `acc`.

        The caller guarantees the result is non-negative.
        """
        self._sub_into_unchecked(acc, b, offset)
        trim(acc)

    # -- Multiplication ------------------------------------------------------

    def mul_digit(self, a: Digits, d: int) -> Digits:
        if not a or not d:
            return []
        bits, mask = self.bits, self.mask
        out: Digits = []
        carry = 0
        for x in a:
            t = x * d + carry
            out.append(t & mask)
            carry = t >> bits
        if carry:
            out.append(carry)
        return out

    def mac_digit_into(self, acc: Digits, offset: int, b: Digits, d: int) -> None:
        """``acc += b * d << (offset digits)`` in place. `acc` must be long enough
        to absorb the final carry."""
        if not d:
            return
        bits, mask = self.bits, self.mask
        carry = 0
        i = offset
        for x in b:
            t = acc[i] + x * d + carry
            acc[i] = t & mask
            carry = t >> bits
            i += 1
        while carry:
            t = acc[i] + carry
            acc[i] = t & mask
            carry = t >> bits
            i += 1

    def mul_schoolbook(self, a: Digits, b: Digits) -> Digits:
        if not a or not b:
            return []
        if len(a) < len(b):
            a, b = b, a
        bits, mask = self.bits, self.mask
        lb = len(b)
        out = [0] * (len(a) + lb)
        # Row i only touches out[i : i + len(a) + 1]; out[i + len(a)] is still zero.
        for i, x in enumerate(b):
            if not x:
                continue
            carry = 0
            k = i
            for y in a:
                t = out[k] + x * y + carry
                out[k] = t & mask
                carry = t >> bits
                k += 1
            out[k] = carry
        return trim(out)

    def mul(self, a: Digits, b: Digits) -> Digits:
        if not a or not b:
            return []
        if len(a) < len(b):
            a, b = b, a
        la, lb = len(a), len(b)
        if lb == 1:
            return self.mul_digit(a, b[0])
        if lb < KARATSUBA_THRESHOLD:
            return self.mul_schoolbook(a, b)
        if 2 * lb <= la:
            # Unbalanced: multiply `a` in slices as long as `b`.
            out: Digits = []
            for start in range(0, la, lb):
                chunk = trim(a[start:start + lb])
                if chunk:
                    self.add_into(out, self.mul(chunk, b), start)
            return trim(out)
        return self._karatsuba(a, b)

    def _karatsuba(self, a: Digits, b: Digits) -> Digits:
        # len(a) >= len(b) > len(a) / 2, so both operands have a non-empty high half.
        m = len(a) // 2
        a0, a1 = trim(a[:m]), a[m:]
        b0, b1 = trim(b[:m]), b[m:]

        z0 = self.mul(a0, b0)
        z2 = self.mul(a1, b1)
        z1 = self.mul(self.add(a0, a1), self.add(b0, b1))
        self.sub_into(z1, z0)
        self.sub_into(z1, z2)

        out = list(z0)
        self.add_into(out, z1, m)
        self.add_into(out, z2, 2 * m)
        return trim(out)

    def sqr(self, a: Digits) -> Digits:
        return self.mul(a, a)

    # -- Division ------------------------------------------------------------

    def div_rem_digit(self, a: Digits, d: int) -> tuple[Digits, int]:
        if not d:
            raise DivisionByZeroError("division by zero")
        bits = self.bits
        q = [0] * len(a)
        r = 0
        for i in range(len(a) - 1, -1, -1):
            q[i], r = divmod((r << bits) | a[i], d)
        return trim(q), r

    def rem_digit(self, a: Digits, d: int) -> int:
        if not d:
            raise DivisionByZeroError("division by zero")
        bits = self.bits
        r = 0
        for i in range(len(a) - 1, -1, -1):
            r = ((r << bits) | a[i]) % d
        return r

    def div_rem(self, u: Digits, v: Digits) -> tuple[Digits, Digits]:
        """Quotient and remainder of ``u / v`` (Knuth, TAOCP vol. 2, 4.3.1 D)."""
        if not v:
            raise DivisionByZeroError("division by zero")
        if not u:
            return [], []
        c = self.cmp(u, v)
        if c < 0:
            return [], list(u)
        if c == 0:
            return [1], []
        if len(v) == 1:
            q, r = self.div_rem_digit(u, v[0])
            return q, ([r] if r else [])

        bits, mask, base = self.bits, self.mask, self.base

        # D1: normalize so the divisor's top bit is set.
        shift = bits - v[-1].bit_length()
        vn = self.shl_bits(v, shift)
        un = self.shl_bits(u, shift)
        if len(un) == len(u):
            un.append(0)
        n = len(vn)
        m = len(un) - n
        q = [0] * m
        v_top, v_next = vn[-1], vn[-2]

        for j in range(m - 1, -1, -1):
            # D3: estimate the quotient digit from the top two divisor digits.
            qhat, rhat = divmod((un[j + n] << bits) | un[j + n - 1], v_top)
            while qhat >= base or qhat * v_next > ((rhat << bits) | un[j + n - 2]):
                qhat -= 1
                rhat += v_top
                if rhat >= base:
                    break

            # D4: multiply and subtract.
            carry = 0
            borrow = 0
            for i in range(n):
                p = qhat * vn[i] + carry
                carry = p >> bits
                t = un[i + j] - (p & mask) - borrow
                un[i + j] = t & mask
                borrow = 1 if t < 0 else 0
            t = un[j + n] - carry - borrow
            un[j + n] = t & mask

            # D6: the estimate was one too large; add the divisor back.
            if t < 0:
                qhat -= 1
                carry = 0
                for i in range(n):
                    s = un[i + j] + vn[i] + carry
                    un[i + j] = s & mask
                    carry = s >> bits
                un[j + n] = (un[j + n] + carry) & mask

            q[j] = qhat

        # D8: denormalize the remainder.
        r = self.shr_bits(trim(un[:n]), shift)
        return trim(q), r

    # -- Shifts --------------------------------------------------------------

    def shl_bits(self, a: Digits, n: int) -> Digits:
        if not a:
            return []
        digit_shift, bit_shift = divmod(n, self.bits)
        out = [0] * digit_shift
        if not bit_shift:
            out.extend(a)
            return out
        mask = self.mask
        back = self.bits - bit_shift
        carry = 0
        for d in a:
            out.append(((d << bit_shift) & mask) | carry)
            carry = d >> back
        if carry:
            out.append(carry)
        return out

    def shr_bits(self, a: Digits, n: int) -> Digits:
        digit_shift, bit_shift = divmod(n, self.bits)
        if digit_shift >= len(a):
            return []
        src = a[digit_shift:]
        if not bit_shift:
            return list(src)
        mask = self.mask
        back = self.bits - bit_shift
        last = len(src) - 1
        out = [0] * len(src)
        for i in range(last):
            out[i] = (src[i] >> bit_shift) | ((src[i + 1] << back) & mask)
        out[last] = src[last] >> bit_shift
        return trim(out)

    # -- Bitwise (non-negative magnitudes) -----------------------------------

    def bitand(self, a: Digits, b: Digits) -> Digits:
        return trim([x & y for x, y in zip(a, b)])

    def bitor(self, a: Digits, b: Digits) -> Digits:
        if len(a) < len(b):
            a, b = b, a
        out = list(a)
        for i, y in enumerate(b):
            out[i] |= y
        return out

    def bitxor(self, a: Digits, b: Digits) -> Digits:
        if len(a) < len(b):
            a, b = b, a
        out = list(a)
        for i, y in enumerate(b):
            out[i] ^= y
        return trim(out)

    # -- Two's complement helpers --------------------------------------------

    def to_twos_complement(self, a: Digits, negative: bool, width: int) -> Digits:
        """Encode ``±a`` as `width` digits of two's complement.

        `width` must leave at least one spare bit for the sign.
        """
        out = list(a) + [0] * (width - len(a))
        if not negative:
            return out
        mask, bits = self.mask, self.bits
        carry = 1
        for i in range(width):
            t = (out[i] ^ mask) + carry
            out[i] = t & mask
            carry = t >> bits
        return out

    def from_twos_complement(self, a: Digits) -> tuple[bool, Digits]:
        """Decode `a` as a two's complement digit vector into ``(negative, magnitude)``."""
        if not a or not (a[-1] >> (self.bits - 1)):
            return False, trim(list(a))
        mask, bits = self.mask, self.bits
        out = list(a)
        carry = 1
        for i in range(len(out)):
            t = (out[i] ^ mask) + carry
            out[i] = t & mask
            carry = t >> bits
        return True, trim(out)

    # -- Byte packing --------------------------------------------------------

    def to_bytes_le(self, a: Digits) -> bytes:
        n = self.bytes_per_digit
        raw = b"".join(d.to_bytes(n, "little") for d in a)
        return raw.rstrip(b"\x00")

    def from_bytes_le(self, data: bytes) -> Digits:
        n = self.bytes_per_digit
        out = [int.from_bytes(data[i:i + n], "little") for i in range(0, len(data), n)]
        return trim(out)


@lru_cache(maxsize=None)
def kernel_for(bits: int) -> DigitKernel:
    """Shared kernel for one digit width."""
    return DigitKernel(bits)
