"""
Process configuration for bigdig.

Settings are resolved from three layers, lowest precedence first:

1. the defaults on `BigDigConfig`,
2. a YAML or JSON file named by the `BIGDIG_CONFIG` environment variable,
3. individual `BIGDIG_*` environment variables.

`get_config()` resolves once per process and caches the result. The digit width
in particular is a single global choice: every value built in a process uses the
same width, so it must not change after the first value is created.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import ConfigError

log = logging.getLogger(__name__)

SUPPORTED_DIGIT_BITS = (32, 64)

# Miller-Rabin error bound is 4^-rounds; 64 rounds gives 2^-128.
DEFAULT_PRIME_ROUNDS = 64

CONFIG_PATH_ENV = "BIGDIG_CONFIG"

_ENV_FIELDS = {
    "digit_bits": "BIGDIG_DIGIT_BITS",
    "prime_rounds": "BIGDIG_PRIME_ROUNDS",
    "lucas": "BIGDIG_LUCAS",
    "montgomery": "BIGDIG_MONTGOMERY",
    "max_prime_attempts": "BIGDIG_MAX_PRIME_ATTEMPTS",
    "max_bits": "BIGDIG_MAX_BITS",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class BigDigConfig:
    digit_bits: int = 64
    prime_rounds: int = DEFAULT_PRIME_ROUNDS
    lucas: bool = True
    montgomery: bool = True
    max_prime_attempts: int = 100_000
    max_bits: int = 1 << 32

    def __post_init__(self) -> None:
        if self.digit_bits not in SUPPORTED_DIGIT_BITS:
            raise ConfigError(f"digit_bits must be one of {SUPPORTED_DIGIT_BITS}, got {self.digit_bits!r}")
        for name in ("prime_rounds", "max_prime_attempts", "max_bits"):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise ConfigError(f"{name} must be an int, got {v!r}")
        if self.prime_rounds < 0:
            raise ConfigError("prime_rounds must be non-negative")
        if self.max_prime_attempts <= 0:
            raise ConfigError("max_prime_attempts must be positive")
        if self.max_bits <= 0:
            raise ConfigError("max_bits must be positive")
        for name in ("lucas", "montgomery"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"{name} must be a bool")


def _parse_bool(name: str, raw: str) -> bool:
    v = raw.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip(), 0)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def _read_file(path: Path) -> dict[str, Any]:
    match path.suffix:
        case ".yaml" | ".yml":
            obj = yaml.safe_load(path.read_text(encoding="utf-8"))
        case ".json":
            obj = json.loads(path.read_text(encoding="utf-8"))
        case _:
            raise ConfigError(f"config file must be .yaml, .yml or .json: {path}")
    if obj is None:
        return {}
    if not isinstance(obj, Mapping):
        raise ConfigError(f"config file must hold a mapping: {path}")
    # Allow the settings to live under a top-level `bigdig:` key.
    if "bigdig" in obj and isinstance(obj["bigdig"], Mapping):
        obj = obj["bigdig"]
    known = {f.name for f in fields(BigDigConfig)}
    unknown = sorted(set(obj) - known)
    if unknown:
        raise ConfigError(f"unknown config keys in {path}: {', '.join(map(str, unknown))}")
    return dict(obj)


def _from_environ(environ: Mapping[str, str]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for field_name, env_name in _ENV_FIELDS.items():
        raw = environ.get(env_name)
        if raw is None or not raw.strip():
            continue
        if field_name in ("lucas", "montgomery"):
            out[field_name] = _parse_bool(env_name, raw)
        else:
            out[field_name] = _parse_int(env_name, raw)
    return out


def load_config(path: str | Path | None = None, environ: Mapping[str, str] | None = None) -> BigDigConfig:
    """
    Resolve a configuration without touching the process-wide cache.

    `path` overrides `BIGDIG_CONFIG`; `environ` defaults to `os.environ`.
    """
    env = os.environ if environ is None else environ
    cfg = BigDigConfig()

    if path is None:
        raw_path = env.get(CONFIG_PATH_ENV)
        path = raw_path.strip() if raw_path and raw_path.strip() else None
    if path is not None:
        p = Path(path)
        if not p.is_file():
            raise ConfigError(f"config file not found: {p}")
        log.debug("loading bigdig config from %s", p)
        cfg = replace(cfg, **_read_file(p))

    overrides = _from_environ(env)
    if overrides:
        cfg = replace(cfg, **overrides)
    return cfg


@lru_cache(maxsize=1)
def get_config() -> BigDigConfig:
    cfg = load_config()
    log.info(
        "bigdig config: digit_bits=%d prime_rounds=%d lucas=%s montgomery=%s",
        cfg.digit_bits,
        cfg.prime_rounds,
        cfg.lucas,
        cfg.montgomery,
    )
    return cfg
