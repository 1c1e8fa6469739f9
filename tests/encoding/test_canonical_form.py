from __future__ import annotations

import random

import pytest

from bigdig import BigInt, BigUint, Sign
from bigdig.core.algorithms import kernel_for
from bigdig.encoding import canonical_json_bytes, dumps, from_canonical, loads, to_canonical
from bigdig.errors import CanonicalFormError


def _good(**overrides: object) -> dict:
    obj = {"type": "bigint", "sign": -1, "digit_bits": BigUint.digit_bits(), "digits": ["0x2a"]}
    obj.update(overrides)
    return obj


def test_to_canonical_shape() -> None:
    assert to_canonical(BigInt(-42)) == _good()
    assert to_canonical(BigUint(0)) == {
        "type": "biguint",
        "sign": 0,
        "digit_bits": BigUint.digit_bits(),
        "digits": [],
    }


def test_round_trip_preserves_type_and_value() -> None:
    rng = random.Random(0)
    for _ in range(100):
        x = rng.getrandbits(rng.randrange(0, 400))
        u = BigUint(x)
        back = from_canonical(to_canonical(u))
        assert isinstance(back, BigUint)
        assert back == u
        s = BigInt(-x)
        back_s = loads(dumps(s))
        assert isinstance(back_s, BigInt)
        assert back_s == s


def test_dumps_is_stable_bytes() -> None:
    raw = dumps(BigInt(-42))
    assert raw == canonical_json_bytes(_good())
    assert b" " not in raw
    assert raw.startswith(b'{"digit_bits":')
    assert canonical_json_bytes(BigUint(1)) == dumps(BigUint(1))


def test_canonical_json_rejects_floats() -> None:
    with pytest.raises(TypeError):
        canonical_json_bytes({"x": 1.5})
    with pytest.raises(TypeError):
        canonical_json_bytes({1: "a"})


def test_other_digit_width_is_rechunked() -> None:
    x = 2**100 + 12345
    for bits in (32, 64):
        k = kernel_for(bits)
        obj = {"type": "biguint", "sign": 1, "digit_bits": bits, "digits": [hex(d) for d in k.from_int(x)]}
        assert from_canonical(obj) == x


@pytest.mark.parametrize(
    "obj",
    [
        _good(sign=0),
        _good(sign=1, digits=[]),
        _good(sign=-2),
        _good(sign=True),
        _good(type="biguint"),
        _good(type="float"),
        _good(digits=["0x2a", "0x0"]),
        _good(digits=["0x02a"]),
        _good(digits=["0x2A"]),
        _good(digits=["42"]),
        _good(digits=[42]),
        _good(digits="0x2a"),
        _good(digits=["0x1" + "0" * 16]),
        _good(digit_bits=16),
        _good(digit_bits=32.0),
        _good(extra=1),
    ],
)
def test_from_canonical_rejects_non_canonical(obj: dict) -> None:
    with pytest.raises(CanonicalFormError):
        from_canonical(obj)


def test_from_canonical_rejects_missing_keys_and_non_mappings() -> None:
    obj = _good()
    del obj["digits"]
    with pytest.raises(CanonicalFormError):
        from_canonical(obj)
    with pytest.raises(CanonicalFormError):
        from_canonical(["bigint"])  # type: ignore[arg-type]
    with pytest.raises(CanonicalFormError):
        loads('{"type":"bigint","sign":1,"digit_bits":64,"digits":[]}')


def test_zero_is_unique() -> None:
    zero = from_canonical(_good(sign=0, digits=[]))
    assert zero == 0
    assert zero.sign is Sign.ZERO
