"""versionring -- fixed-capacity, disk-backed undo/redo history.

Usage::

    from versionring import open_ring

    ring = open_ring("data/history")
    ring.push(b"first draft")
    ring.push(b"second draft")
    ring.back()
    assert ring.pick(0) == b"first draft"
"""

from __future__ import annotations

from pathlib import Path

from versionring.config import load_config
from versionring.errors import (
    DecodeError,
    EncodeError,
    InvalidArgumentError,
    NavigationError,
    RingIOError,
    ValidationFailedError,
    VersionRingError,
)
from versionring.models.config import VersionRingConfig
from versionring.ring import JsonCodec, SchemaValidator, VersionRing

__version__ = "0.1.0"

__all__ = [
    "DecodeError",
    "EncodeError",
    "InvalidArgumentError",
    "JsonCodec",
    "NavigationError",
    "RingIOError",
    "SchemaValidator",
    "ValidationFailedError",
    "VersionRing",
    "VersionRingError",
    "open_ring",
]


def open_ring(
    directory: str | Path,
    *,
    config: VersionRingConfig | None = None,
    codec: JsonCodec | None = None,
    validator: SchemaValidator | None = None,
) -> VersionRing:
    """Open (or initialise) the ring stored in *directory*.

    Falls back to :func:`versionring.config.load_config` when no config is
    given, so ``VERSIONRING_DEFAULT_CAPACITY`` applies to fresh rings.
    """
    return VersionRing.open(
        directory,
        config=config or load_config(),
        codec=codec,
        validator=validator,
    )
