"""Fixture configuration.

Frozen dataclass with environment variable overrides, loaded from an
optional .env file.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from orgfixture.errors import ConfigError


@dataclass(frozen=True)
class FixtureConfig:
    fixture_dir: Path | None = None  # None = in-memory store
    setup_timeout: float | None = 5.0
    busy_timeout: float = 5.0
    keep_files: bool = False
    max_attempts: int = 3


def _float_env(name: str, default: float | None) -> float | None:
    raw = os.environ.get(name)
    if raw is None:
        return default
    raw = raw.strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {raw!r}")
    return value


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ConfigError(f"{name} must be at least 1, got {raw!r}")
    return value


def _bool_env(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def load_config(env_file: Path | None = None) -> FixtureConfig:
    """Load configuration from environment variables + defaults.

    Args:
        env_file: Path to .env file. If None, uses ./.env when present.
    """
    if env_file and env_file.exists():
        load_dotenv(env_file)
    elif Path(".env").exists():
        load_dotenv(Path(".env"))

    fixture_dir = os.environ.get("ORGFIXTURE_DIR", "").strip()
    busy_timeout = _float_env("ORGFIXTURE_BUSY_TIMEOUT", 5.0)

    return FixtureConfig(
        fixture_dir=Path(fixture_dir) if fixture_dir else None,
        setup_timeout=_float_env("ORGFIXTURE_SETUP_TIMEOUT", 5.0),
        busy_timeout=busy_timeout if busy_timeout is not None else 0.0,
        keep_files=_bool_env("ORGFIXTURE_KEEP_FILES", False),
        max_attempts=_int_env("ORGFIXTURE_MAX_ATTEMPTS", 3),
    )
