"""
Canonical serialized form for `BigUint` and `BigInt`.

A value is persisted as exactly its canonical ``(sign, digits)`` pair:

    {"type": "bigint", "sign": -1, "digit_bits": 64, "digits": ["0x2a"]}

- `digits` are least significant first, lowercase ``0x`` hex without leading zeros,
- the last digit is non-zero and zero has no digits,
- `sign` is 0 exactly when `digits` is empty; a `biguint` is never negative.

`from_canonical` rejects anything else, so ``from_canonical(to_canonical(x)) == x``
and no non-canonical value (or negative zero) can be smuggled in. Values written
under the other digit width are re-chunked on load.
"""

from __future__ import annotations

import json
import re
from typing import Any, Mapping

from ..core.bigint import BigInt, Sign
from ..core.biguint import KERNEL, BigUint
from ..errors import CanonicalFormError


_KEYS = frozenset({"type", "sign", "digit_bits", "digits"})
_HEX_DIGIT_RE = re.compile(r"^0x[1-9a-f][0-9a-f]*$|^0x0$")


def _reject_floats(value: Any) -> None:
    if isinstance(value, float):
        raise TypeError("floats are not allowed in canonical encoding")
    if isinstance(value, dict):
        for k in value.keys():
            if not isinstance(k, str):
                raise TypeError("dict keys must be str for canonical encoding")
        for v in value.values():
            _reject_floats(v)
        return
    if isinstance(value, (list, tuple)):
        for item in value:
            _reject_floats(item)


def canonical_json_bytes(value: Any) -> bytes:
    """
    Canonical JSON encoding.

    Rules:
    - UTF-8
    - sort_keys=True
    - separators=(',', ':') (no whitespace)
    - allow_nan=False
    - floats rejected
    - `BigUint` / `BigInt` values are replaced by their canonical mapping
    """
    if isinstance(value, (BigUint, BigInt)):
        value = to_canonical(value)
    _reject_floats(value)
    text = json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return text.encode("utf-8")


def to_canonical(value: BigUint | BigInt) -> dict[str, Any]:
    if isinstance(value, BigUint):
        kind, sign, digits = "biguint", Sign.POSITIVE if value else Sign.ZERO, value.digits
    elif isinstance(value, BigInt):
        kind, sign, digits = "bigint", value.sign, value.magnitude.digits
    else:
        raise TypeError(f"cannot serialize {type(value).__name__}")
    return {
        "type": kind,
        "sign": sign.value,
        "digit_bits": KERNEL.bits,
        "digits": [hex(d) for d in digits],
    }


def _rechunk(digits: list[int], from_bits: int) -> list[int]:
    if from_bits == KERNEL.bits:
        return digits
    width = from_bits // 8
    raw = b"".join(d.to_bytes(width, "little") for d in digits)
    return KERNEL.from_bytes_le(raw)


def from_canonical(obj: Mapping[str, Any]) -> BigUint | BigInt:
    if not isinstance(obj, Mapping):
        raise CanonicalFormError("canonical value must be a mapping")
    keys = set(obj.keys())
    if keys != _KEYS:
        raise CanonicalFormError(f"canonical value must have keys {sorted(_KEYS)}, got {sorted(map(str, keys))}")

    kind = obj["type"]
    if kind not in ("biguint", "bigint"):
        raise CanonicalFormError(f"unknown type: {kind!r}")

    raw_sign = obj["sign"]
    if not isinstance(raw_sign, int) or isinstance(raw_sign, bool) or raw_sign not in (-1, 0, 1):
        raise CanonicalFormError(f"sign must be -1, 0 or 1, got {raw_sign!r}")
    sign = Sign(raw_sign)
    if kind == "biguint" and sign is Sign.NEGATIVE:
        raise CanonicalFormError("biguint cannot be negative")

    digit_bits = obj["digit_bits"]
    if not isinstance(digit_bits, int) or isinstance(digit_bits, bool) or digit_bits not in (32, 64):
        raise CanonicalFormError(f"digit_bits must be 32 or 64, got {digit_bits!r}")

    raw_digits = obj["digits"]
    if not isinstance(raw_digits, list):
        raise CanonicalFormError("digits must be a list")
    digits: list[int] = []
    for d in raw_digits:
        if not isinstance(d, str) or not _HEX_DIGIT_RE.fullmatch(d):
            raise CanonicalFormError(f"digit must be lowercase 0x hex without leading zeros, got {d!r}")
        v = int(d, 16)
        if v >> digit_bits:
            raise CanonicalFormError(f"digit {d} does not fit in {digit_bits} bits")
        digits.append(v)
    if digits and digits[-1] == 0:
        raise CanonicalFormError("most significant digit must be non-zero")
    if (sign is Sign.ZERO) != (not digits):
        raise CanonicalFormError("sign must be 0 exactly when there are no digits")

    digits = _rechunk(digits, digit_bits)
    if kind == "biguint":
        return BigUint.from_digits(digits)
    return BigInt.from_parts(sign, digits)


def loads(data: bytes | str) -> BigUint | BigInt:
    return from_canonical(json.loads(data))


def dumps(value: BigUint | BigInt) -> bytes:
    return canonical_json_bytes(to_canonical(value))
