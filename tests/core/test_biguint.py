from __future__ import annotations

import random

import pytest

from bigdig import BigInt, BigUint
from bigdig.errors import (
    CanonicalFormError,
    DivisionByZeroError,
    ShiftOverflowError,
    UnderflowError,
)


def _rand(rng: random.Random, max_bits: int = 512) -> int:
    return rng.getrandbits(rng.randrange(0, max_bits + 1))


def test_construction_and_int_round_trip() -> None:
    rng = random.Random(0)
    for _ in range(200):
        x = _rand(rng)
        v = BigUint(x)
        assert int(v) == x
        assert BigUint(v) == v
        assert v.bits() == x.bit_length()
    assert BigUint() == 0
    assert BigUint.zero().is_zero()
    assert BigUint.one().is_one()


def test_construction_rejects_bad_input() -> None:
    with pytest.raises(ValueError):
        BigUint(-1)
    with pytest.raises(TypeError):
        BigUint(1.5)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        BigUint(True)  # type: ignore[arg-type]


def test_from_digits_trims_and_validates() -> None:
    v = BigUint.from_digits([5, 0, 0])
    assert v.digits == (5,)
    assert BigUint.from_digits([]) == 0
    with pytest.raises(CanonicalFormError):
        BigUint.from_digits([1 << BigUint.digit_bits()])
    with pytest.raises(CanonicalFormError):
        BigUint.from_digits([-1])


def test_digits_are_a_copy() -> None:
    v = BigUint(2**200 + 1)
    d = v.digits
    assert isinstance(d, tuple)
    assert d[-1] != 0
    assert int(BigUint.from_digits(d)) == 2**200 + 1


def test_arithmetic_against_int() -> None:
    rng = random.Random(1)
    for _ in range(200):
        x, y = _rand(rng), _rand(rng)
        a, b = BigUint(x), BigUint(y)
        assert a + b == x + y
        assert a * b == x * y
        if x >= y:
            assert a - b == x - y
        if y:
            assert a // b == x // y
            assert a % b == x % y
            assert divmod(a, b) == divmod(x, y)
            q, r = a.div_rem(b)
            assert q * b + r == a


def test_mixed_int_operands() -> None:
    a = BigUint(10)
    assert a + 5 == 15
    assert 5 + a == 15
    assert 25 - a == 15
    assert 3 * a == 30
    assert 100 // a == 10
    assert 105 % a == 5
    assert isinstance(5 + a, BigUint)


def test_mixing_with_bigint_gives_bigint() -> None:
    r = BigUint(3) + BigInt(-5)
    assert isinstance(r, BigInt)
    assert r == -2
    assert BigUint(3) == BigInt(3)


def test_subtraction_underflow() -> None:
    with pytest.raises(UnderflowError):
        BigUint(3) - BigUint(4)
    assert BigUint(3).checked_sub(4) is None
    assert BigUint(4).checked_sub(3) == 1


def test_division_by_zero() -> None:
    with pytest.raises(DivisionByZeroError):
        BigUint(1) // 0
    with pytest.raises(ZeroDivisionError):
        BigUint(1) % BigUint(0)


def test_comparisons_and_hash() -> None:
    a, b = BigUint(2**100), BigUint(2**100 + 1)
    assert a < b <= b
    assert b > a >= a
    assert a != b
    assert a > -1
    assert a != -5
    assert hash(BigUint(12345)) == hash(12345)
    assert len({BigUint(7), BigUint(7), 7}) == 1


def test_parity_and_bits() -> None:
    v = BigUint(0b1011000)
    assert v.is_even()
    assert not v.is_odd()
    assert v.trailing_zeros() == 3
    assert v.bit(3) and v.bit(4) and not v.bit(5)
    assert BigUint(0).trailing_zeros() is None
    assert BigUint(0).bits() == 0
    assert BigUint(0).is_even()
    with pytest.raises(ValueError):
        v.bit(-1)


def test_pow_and_modpow() -> None:
    assert BigUint(3).pow(5) == 243
    assert BigUint(3) ** 5 == 243
    assert 2 ** BigUint(100) == 2**100
    assert BigUint(0).pow(0) == 1
    assert BigUint(4).modpow(13, 497) == 445
    assert pow(BigUint(4), 13, 497) == 445
    with pytest.raises(ValueError):
        BigUint(2).pow(-1)


def test_shifts() -> None:
    rng = random.Random(2)
    for _ in range(100):
        x = _rand(rng, 300)
        n = rng.randrange(0, 200)
        assert BigUint(x) << n == x << n
        assert BigUint(x) >> n == x >> n
    with pytest.raises(ShiftOverflowError):
        BigUint(1) << -1
    with pytest.raises(ShiftOverflowError):
        BigUint(1) >> -1


def test_shift_past_max_bits_is_rejected() -> None:
    with pytest.raises(ShiftOverflowError):
        BigUint(1) << (1 << 40)
    # Zero never grows, so any shift is fine.
    assert BigUint(0) << (1 << 40) == 0


def test_bitwise_against_int() -> None:
    rng = random.Random(3)
    for _ in range(100):
        x, y = _rand(rng, 300), _rand(rng, 300)
        a, b = BigUint(x), BigUint(y)
        assert a & b == x & y
        assert a | b == x | y
        assert a ^ b == x ^ y


def test_roots() -> None:
    rng = random.Random(4)
    for _ in range(50):
        x = _rand(rng, 400)
        s = int(BigUint(x).sqrt())
        assert s * s <= x < (s + 1) * (s + 1)
        c = int(BigUint(x).cbrt())
        assert c**3 <= x < (c + 1) ** 3
        r = int(BigUint(x).nth_root(5))
        assert r**5 <= x < (r + 1) ** 5
    assert BigUint(0).sqrt() == 0
    assert BigUint(3).sqrt() == 1
    assert BigUint(4).sqrt() == 2


def test_gcd_lcm() -> None:
    assert BigUint(48).gcd(18) == 6
    assert BigUint(0).gcd(7) == 7
    assert BigUint(0).gcd(0) == 0
    assert BigUint(4).lcm(6) == 12
    assert BigUint(0).lcm(6) == 0


def test_str_and_repr() -> None:
    v = BigUint(10**30)
    assert str(v) == "1" + "0" * 30
    assert repr(v) == f"BigUint({10**30})"
    assert str(BigUint(0)) == "0"
    assert v.to_str_radix(16) == format(10**30, "x")


def test_zeroize_clears_value() -> None:
    v = BigUint(2**300 - 1)
    storage = v._digits
    v.zeroize()
    assert v.is_zero()
    assert storage == []
    assert v == 0
