"""Core data structures for versionring."""

from versionring.models.config import (
    MAX_CAPACITY,
    MIN_CAPACITY,
    LogConfig,
    RingConfig,
    VersionRingConfig,
)
from versionring.models.metadata import RingState, SlotRecord, VersionInfo

__all__ = [
    "MAX_CAPACITY",
    "MIN_CAPACITY",
    "LogConfig",
    "RingConfig",
    "RingState",
    "SlotRecord",
    "VersionInfo",
    "VersionRingConfig",
]
