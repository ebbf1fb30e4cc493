"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field

MIN_CAPACITY = 1
MAX_CAPACITY = 10_000


@dataclass
class RingConfig:
    """Version ring configuration."""

    default_capacity: int = 10
    schema_version: str = "0.1.0"


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"
    format: str = "json"  # "json" or "console"


@dataclass
class VersionRingConfig:
    """Top-level versionring configuration."""

    ring: RingConfig = field(default_factory=RingConfig)
    log: LogConfig = field(default_factory=LogConfig)
