from __future__ import annotations

import random

import pytest

from bigdig import BigInt, BigUint, Sign
from bigdig.errors import CanonicalFormError, DivisionByZeroError, ShiftOverflowError


def _rand(rng: random.Random, max_bits: int = 400) -> int:
    x = rng.getrandbits(rng.randrange(0, max_bits + 1))
    return -x if rng.getrandbits(1) else x


def _trunc_divmod(x: int, y: int) -> tuple[int, int]:
    q = abs(x) // abs(y)
    if (x < 0) != (y < 0):
        q = -q
    return q, x - q * y


def test_sign_tracks_value() -> None:
    assert BigInt(0).sign is Sign.ZERO
    assert BigInt(5).sign is Sign.POSITIVE
    assert BigInt(-5).sign is Sign.NEGATIVE
    assert (-BigInt(0)).sign is Sign.ZERO
    assert (BigInt(5) - 5).sign is Sign.ZERO
    assert (BigInt(-3) * 0).sign is Sign.ZERO
    assert -Sign.POSITIVE is Sign.NEGATIVE
    assert Sign.NEGATIVE * Sign.NEGATIVE is Sign.POSITIVE


def test_from_biguint_normalizes_zero() -> None:
    assert BigInt.from_biguint(Sign.NEGATIVE, BigUint(0)).sign is Sign.ZERO
    assert BigInt.from_biguint(Sign.ZERO, BigUint(9)) == 0
    assert BigInt.from_biguint(Sign.NEGATIVE, BigUint(9)) == -9
    with pytest.raises(TypeError):
        BigInt.from_biguint(-1, BigUint(9))  # type: ignore[arg-type]


def test_from_parts_is_strict() -> None:
    assert BigInt.from_parts(Sign.NEGATIVE, (7,)) == -7
    assert BigInt.from_parts(Sign.ZERO, ()) == 0
    with pytest.raises(CanonicalFormError):
        BigInt.from_parts(Sign.ZERO, (1,))
    with pytest.raises(CanonicalFormError):
        BigInt.from_parts(Sign.NEGATIVE, ())
    with pytest.raises(CanonicalFormError):
        BigInt.from_parts(Sign.POSITIVE, (1, 0))


def test_queries() -> None:
    v = BigInt(-40)
    assert v.is_negative()
    assert not v.is_positive()
    assert v.is_even()
    assert v.bits() == 6
    assert v.trailing_zeros() == 3
    assert v.signum() == -1
    assert v.magnitude == 40
    assert v.to_biguint() is None
    assert BigInt(40).to_biguint() == 40
    assert repr(v) == "BigInt(-40)"
    assert str(v) == "-40"
    assert hash(v) == hash(-40)


def test_add_sub_mul_against_int() -> None:
    rng = random.Random(0)
    for _ in range(300):
        x, y = _rand(rng), _rand(rng)
        a, b = BigInt(x), BigInt(y)
        assert a + b == x + y
        assert a - b == x - y
        assert a * b == x * y
        assert x - b == x - y
        assert -a == -x
        assert abs(a) == abs(x)


def test_truncating_division() -> None:
    assert BigInt(-7) // 2 == -3
    assert BigInt(-7) % 2 == -1
    assert BigInt(7) // -2 == -3
    assert BigInt(7) % -2 == 1
    assert divmod(BigInt(-7), BigInt(-2)) == (3, -1)

    rng = random.Random(1)
    for _ in range(300):
        x, y = _rand(rng), _rand(rng) or 3
        q, r = BigInt(x).div_rem(y)
        assert (int(q), int(r)) == _trunc_divmod(x, y)
        assert q * y + r == x
        assert r.is_zero() or r.sign is BigInt(x).sign


def test_floored_division_matches_python() -> None:
    assert BigInt(-7).div_mod_floor(2) == (-4, 1)
    assert BigInt(-7).div_floor(2) == -4
    assert BigInt(-7).mod_floor(2) == 1
    assert BigInt(7).mod_floor(-2) == -1

    rng = random.Random(2)
    for _ in range(300):
        x, y = _rand(rng), _rand(rng) or -5
        q, r = BigInt(x).div_mod_floor(y)
        assert (int(q), int(r)) == divmod(x, y)


def test_division_by_zero() -> None:
    with pytest.raises(DivisionByZeroError):
        BigInt(5) // 0
    with pytest.raises(DivisionByZeroError):
        BigInt(-5).mod_floor(0)


def test_mixed_operands() -> None:
    a = BigInt(-10)
    assert a + BigUint(3) == -7
    assert BigUint(3) - BigInt(10) == -7
    assert 3 * a == -30
    assert 25 // a == -2
    assert 25 % a == 5
    assert BigInt(BigUint(12)) == 12


def test_comparisons() -> None:
    vals = sorted([BigInt(5), BigInt(-2**100), BigInt(0), BigInt(-1), BigInt(2**70)])
    assert [int(v) for v in vals] == [-(2**100), -1, 0, 5, 2**70]
    assert BigInt(-1) < 0 < BigInt(1)
    assert BigInt(-(2**65)) < BigInt(-(2**64))
    assert BigInt(3) == BigUint(3)


def test_pow() -> None:
    assert BigInt(-3).pow(3) == -27
    assert BigInt(-3) ** 4 == 81
    assert BigInt(-3).pow(0) == 1
    assert BigInt(0).pow(0) == 1
    with pytest.raises(ValueError):
        BigInt(2).pow(-1)
    with pytest.raises(TypeError):
        BigInt(2).pow(2.7)  # type: ignore[arg-type]
    assert BigInt(-2).pow(BigUint(5)) == -32
    assert pow(BigInt(-4), 13, 497) == (-4) ** 13 % 497


def test_shifts_match_python() -> None:
    rng = random.Random(3)
    for _ in range(300):
        x = _rand(rng, 300)
        n = rng.randrange(0, 200)
        assert BigInt(x) << n == x << n
        assert BigInt(x) >> n == x >> n
    assert BigInt(-1) >> 10 == -1
    assert BigInt(-5) >> 1 == -3
    assert BigInt(-4) >> 1 == -2
    with pytest.raises(ShiftOverflowError):
        BigInt(1) << -3


def test_bitwise_twos_complement() -> None:
    rng = random.Random(4)
    for _ in range(300):
        x, y = _rand(rng, 200), _rand(rng, 200)
        a, b = BigInt(x), BigInt(y)
        assert a & b == x & y
        assert a | b == x | y
        assert a ^ b == x ^ y
        assert ~a == ~x
    assert BigInt(-1) & 0xFF == 0xFF
    assert BigInt(-256) | 1 == -255
    assert 0xF0 ^ BigInt(-1) == ~0xF0


def test_number_theory_methods() -> None:
    assert BigInt(-48).gcd(18) == 6
    assert BigInt(-4).lcm(6) == 12
    g, x, y = BigInt(240).extended_gcd(46)
    assert g == 2
    assert 240 * x + 46 * y == g
    assert BigInt(3).mod_inverse(11) == 4
    assert BigInt(-27).nth_root(3) == -3
    assert BigInt(17).sqrt() == 4
    with pytest.raises(ValueError):
        BigInt(-4).sqrt()
    with pytest.raises(ValueError):
        BigInt(-16).nth_root(4)


def test_zeroize_resets_sign() -> None:
    v = BigInt(-(2**200))
    v.zeroize()
    assert v.is_zero()
    assert v.sign is Sign.ZERO
    assert v == 0
