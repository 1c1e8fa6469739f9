from __future__ import annotations

import json
from pathlib import Path

import pytest

from bigdig.config import CONFIG_PATH_ENV, DEFAULT_PRIME_ROUNDS, BigDigConfig, get_config, load_config
from bigdig.errors import ConfigError


def test_defaults() -> None:
    cfg = load_config(environ={})
    assert cfg == BigDigConfig()
    assert cfg.digit_bits == 64
    assert cfg.prime_rounds == DEFAULT_PRIME_ROUNDS
    assert cfg.lucas is True
    assert cfg.montgomery is True


def test_yaml_file(tmp_path: Path) -> None:
    p = tmp_path / "bigdig.yaml"
    p.write_text("bigdig:\n  digit_bits: 32\n  prime_rounds: 20\n  lucas: false\n", encoding="utf-8")
    cfg = load_config(p, environ={})
    assert cfg.digit_bits == 32
    assert cfg.prime_rounds == 20
    assert cfg.lucas is False
    assert cfg.montgomery is True


def test_json_file_named_by_environment(tmp_path: Path) -> None:
    p = tmp_path / "bigdig.json"
    p.write_text(json.dumps({"max_prime_attempts": 50, "montgomery": False}), encoding="utf-8")
    cfg = load_config(environ={CONFIG_PATH_ENV: str(p)})
    assert cfg.max_prime_attempts == 50
    assert cfg.montgomery is False


def test_environment_overrides_file(tmp_path: Path) -> None:
    p = tmp_path / "bigdig.yml"
    p.write_text("digit_bits: 32\nprime_rounds: 20\n", encoding="utf-8")
    env = {
        "BIGDIG_PRIME_ROUNDS": "8",
        "BIGDIG_LUCAS": "off",
        "BIGDIG_MAX_BITS": "0x10000",
    }
    cfg = load_config(p, environ=env)
    assert cfg.digit_bits == 32
    assert cfg.prime_rounds == 8
    assert cfg.lucas is False
    assert cfg.max_bits == 0x10000


def test_blank_environment_values_are_ignored() -> None:
    cfg = load_config(environ={"BIGDIG_DIGIT_BITS": "  ", CONFIG_PATH_ENV: ""})
    assert cfg.digit_bits == 64


@pytest.mark.parametrize(
    "env",
    [
        {"BIGDIG_DIGIT_BITS": "16"},
        {"BIGDIG_DIGIT_BITS": "sixty-four"},
        {"BIGDIG_PRIME_ROUNDS": "-1"},
        {"BIGDIG_LUCAS": "maybe"},
        {"BIGDIG_MAX_PRIME_ATTEMPTS": "0"},
        {"BIGDIG_MAX_BITS": "0"},
    ],
)
def test_invalid_environment_values(env: dict[str, str]) -> None:
    with pytest.raises(ConfigError):
        load_config(environ=env)


def test_invalid_files(tmp_path: Path) -> None:
    missing = tmp_path / "nope.yaml"
    with pytest.raises(ConfigError):
        load_config(missing, environ={})

    unknown = tmp_path / "unknown.yaml"
    unknown.write_text("digit_bits: 32\nfast: true\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(unknown, environ={})

    wrong_suffix = tmp_path / "bigdig.toml"
    wrong_suffix.write_text("digit_bits = 32\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(wrong_suffix, environ={})

    not_mapping = tmp_path / "list.json"
    not_mapping.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(not_mapping, environ={})

    wrong_type = tmp_path / "wrong.yaml"
    wrong_type.write_text("lucas: 1\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(wrong_type, environ={})


def test_empty_yaml_gives_defaults(tmp_path: Path) -> None:
    p = tmp_path / "empty.yaml"
    p.write_text("", encoding="utf-8")
    assert load_config(p, environ={}) == BigDigConfig()


def test_config_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        BigDigConfig(digit_bits=48)


def test_get_config_is_cached() -> None:
    assert get_config() is get_config()
