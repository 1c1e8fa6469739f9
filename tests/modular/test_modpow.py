from __future__ import annotations

import importlib
import random
from dataclasses import replace

import pytest

from bigdig import BigInt, BigUint
from bigdig.config import get_config
from bigdig.errors import DivisionByZeroError, NoInverseError
from bigdig.modular import modpow, modpow_uint

# The package re-exports the function under the module name.
modpow_module = importlib.import_module("bigdig.modular.modpow")


def test_known_value() -> None:
    assert modpow(4, 13, 497) == 445
    assert modpow_uint(BigUint(4), BigUint(13), BigUint(497)) == 445


def test_result_range_follows_modulus_magnitude() -> None:
    assert modpow(-4, 13, 497) == pow(-4, 13, 497)
    assert modpow(4, 13, -497) == 445
    assert modpow(-2, 3, 5) == 2
    r = modpow(-7, 5, -11)
    assert 0 <= r < 11


def test_degenerate_arguments() -> None:
    assert modpow(0, 0, 7) == 1
    assert modpow(5, 0, 1) == 0
    assert modpow(0, 5, 7) == 0
    with pytest.raises(DivisionByZeroError):
        modpow(2, 3, 0)
    with pytest.raises(ZeroDivisionError):
        modpow_uint(BigUint(2), BigUint(3), BigUint(0))


def test_negative_exponent_uses_inverse() -> None:
    assert modpow(3, -1, 11) == 4
    assert modpow(3, -2, 11) == pow(3, -2, 11)
    with pytest.raises(NoInverseError):
        modpow(6, -1, 9)


def test_against_builtin_odd_and_even_moduli() -> None:
    rng = random.Random(0)
    for _ in range(100):
        m = rng.getrandbits(rng.randrange(2, 300)) or 3
        b = rng.getrandbits(rng.randrange(0, 300)) - (1 << 150)
        e = rng.getrandbits(rng.randrange(0, 200))
        got = modpow(b, e, m)
        assert isinstance(got, BigInt)
        assert got == pow(b, e, m)


def test_plain_path_matches_montgomery(monkeypatch: pytest.MonkeyPatch) -> None:
    rng = random.Random(1)
    cases = []
    for _ in range(30):
        m = rng.getrandbits(256) | 1
        cases.append((rng.getrandbits(256), rng.getrandbits(128), m))
    fast = [modpow(b, e, m) for b, e, m in cases]

    plain_cfg = replace(get_config(), montgomery=False)
    monkeypatch.setattr(modpow_module, "get_config", lambda: plain_cfg)
    slow = [modpow(b, e, m) for b, e, m in cases]
    assert fast == slow == [pow(b, e, m) for b, e, m in cases]


def test_operator_forms() -> None:
    assert pow(BigInt(4), 13, 497) == 445
    assert BigInt(4).modpow(BigInt(13), BigUint(497)) == 445
    assert BigUint(4).modpow(13, 497) == 445
