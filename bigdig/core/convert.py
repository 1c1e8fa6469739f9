"""
Textual and binary encodings for `BigUint` and `BigInt`.

Text:
- radix 2..36, letters case-insensitive on input, lowercase on output,
- an optional leading ``-`` for signed values only,
- no whitespace, no ``+``, no digit separators.

Bytes:
- unsigned magnitudes and two's complement signed values, big or little endian,
- decoding is total (empty input is zero),
- encoding is minimal unless a fixed `length` is requested; zero encodes as a
  single zero byte.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from ..errors import EncodingOverflowError, InvalidRadixError, ParseBigIntError, ParseErrorKind
from .algorithms import Digits
from .bigint import BigInt
from .biguint import KERNEL, BigUint

ByteOrder = Literal["big", "little"]

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_DIGIT_VALUES = {ch: i for i, ch in enumerate(_ALPHABET)}
_DIGIT_VALUES.update({ch.upper(): i for i, ch in enumerate(_ALPHABET) if ch.isalpha()})


def check_radix(radix: int) -> None:
    if not isinstance(radix, int) or isinstance(radix, bool) or not 2 <= radix <= 36:
        raise InvalidRadixError(radix)


@lru_cache(maxsize=None)
def radix_chunk(radix: int, bits: int) -> tuple[int, int]:
    """Largest `n` with ``radix**n`` below ``2**bits``, and that power."""
    n, power = 1, radix
    while power * radix < (1 << bits):
        power *= radix
        n += 1
    return n, power


# -- Text ----------------------------------------------------------------------


def _parse_magnitude(text: str, radix: int) -> Digits:
    if not text:
        raise ParseBigIntError(ParseErrorKind.EMPTY)
    values = []
    for i, ch in enumerate(text):
        v = _DIGIT_VALUES.get(ch)
        if v is None or v >= radix:
            raise ParseBigIntError(ParseErrorKind.INVALID_DIGIT, f"{ch!r} at position {i} for radix {radix}")
        values.append(v)

    chunk_len, chunk_pow = radix_chunk(radix, KERNEL.bits)
    acc: Digits = []
    pos = 0
    size = len(values) % chunk_len or chunk_len
    while pos < len(values):
        chunk = 0
        for v in values[pos:pos + size]:
            chunk = chunk * radix + v
        acc = KERNEL.mul_digit(acc, chunk_pow if size == chunk_len else radix**size)
        if chunk:
            KERNEL.add_into(acc, [chunk])
        pos += size
        size = chunk_len
    return acc


def parse_biguint(text: str, radix: int) -> BigUint:
    check_radix(radix)
    if not isinstance(text, str):
        raise TypeError("text must be a str")
    if text.startswith("-"):
        if len(text) == 1:
            raise ParseBigIntError(ParseErrorKind.DANGLING_SIGN)
        raise ParseBigIntError(ParseErrorKind.NEGATIVE_UNSIGNED)
    return BigUint._wrap(_parse_magnitude(text, radix))


def parse_bigint(text: str, radix: int) -> BigInt:
    check_radix(radix)
    if not isinstance(text, str):
        raise TypeError("text must be a str")
    negative = text.startswith("-")
    if negative:
        text = text[1:]
        if not text:
            raise ParseBigIntError(ParseErrorKind.DANGLING_SIGN)
    return BigInt._wrap(negative, _parse_magnitude(text, radix))


def _chunk_str(value: int, radix: int, width: int) -> str:
    chars = []
    while value:
        value, r = divmod(value, radix)
        chars.append(_ALPHABET[r])
    if len(chars) < width:
        chars.extend("0" * (width - len(chars)))
    return "".join(reversed(chars))


def format_digits(digits: Digits, radix: int) -> str:
    """Render a magnitude in `radix` by repeated division by the chunk power."""
    check_radix(radix)
    if not digits:
        return "0"
    chunk_len, chunk_pow = radix_chunk(radix, KERNEL.bits)
    chunks = []
    cur = digits
    while cur:
        cur, r = KERNEL.div_rem_digit(cur, chunk_pow)
        chunks.append(r)
    head = _chunk_str(chunks[-1], radix, 0)
    return head + "".join(_chunk_str(c, radix, chunk_len) for c in reversed(chunks[:-1]))


def from_str_radix(text: str, radix: int) -> BigInt:
    return parse_bigint(text, radix)


def to_str_radix(value: BigUint | BigInt, radix: int) -> str:
    return value.to_str_radix(radix)


# -- Bytes ---------------------------------------------------------------------


def _fit(body_le: bytes, fill: int, length: int | None) -> bytes:
    if length is None:
        return body_le
    if length < 0:
        raise ValueError("length must be non-negative")
    if len(body_le) > length:
        raise EncodingOverflowError(f"value needs {len(body_le)} bytes, {length} requested")
    return body_le + bytes([fill]) * (length - len(body_le))


def uint_to_bytes(digits: Digits, order: ByteOrder, length: int | None = None) -> bytes:
    body = KERNEL.to_bytes_le(digits)
    if not body and length is None:
        body = b"\x00"
    out = _fit(body, 0x00, length)
    return out if order == "little" else out[::-1]


def _negate_le(data: bytes) -> bytearray:
    out = bytearray()
    carry = 1
    for b in data:
        t = (b ^ 0xFF) + carry
        out.append(t & 0xFF)
        carry = t >> 8
    return out


def int_to_signed_bytes(negative: bool, digits: Digits, order: ByteOrder, length: int | None = None) -> bytes:
    mag = KERNEL.to_bytes_le(digits)
    if not mag:
        # Zero needs no bytes at a fixed width; the minimal form is one zero byte.
        body = bytearray(b"" if length is not None else b"\x00")
        fill = 0x00
    elif not negative:
        body = bytearray(mag)
        if body[-1] & 0x80:
            body.append(0x00)
        fill = 0x00
    else:
        body = _negate_le(mag)
        if not body[-1] & 0x80:
            body.append(0xFF)
        fill = 0xFF
    out = _fit(bytes(body), fill, length)
    return out if order == "little" else out[::-1]


def signed_bytes_to_parts(data: bytes, order: ByteOrder) -> tuple[bool, Digits]:
    le = data if order == "little" else data[::-1]
    if not le or not le[-1] & 0x80:
        return False, KERNEL.from_bytes_le(le)
    return True, KERNEL.from_bytes_le(bytes(_negate_le(le)))
