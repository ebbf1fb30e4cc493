"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from versionring.models.config import (
    MAX_CAPACITY,
    MIN_CAPACITY,
    LogConfig,
    RingConfig,
    VersionRingConfig,
)


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"VERSIONRING_{key}", default)


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    val = int(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def _validate_log_format(value: str) -> str:
    valid = {"json", "console"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log format: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> VersionRingConfig:
    """Load configuration from VERSIONRING_* environment variables."""
    return VersionRingConfig(
        ring=RingConfig(
            default_capacity=_env_int(
                "DEFAULT_CAPACITY", 10, min_val=MIN_CAPACITY, max_val=MAX_CAPACITY
            ),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
            format=_validate_log_format(_env("LOG_FORMAT", "json")),
        ),
    )
