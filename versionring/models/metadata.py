"""Persisted ring state and ledger records."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SlotRecord:
    """Ledger entry for one slot: content fingerprint and write time."""

    sha1: str
    time: str  # ISO-8601 UTC


@dataclass
class RingState:
    """Everything written to the metadata slot.

    Field names follow the on-disk keys of ``0.json``; ``length`` is the ring
    capacity and ``once`` the instance identifier.
    """

    dir: str
    once: str
    version: str = "0.1.0"
    length: int = 10
    current: int = 0
    left: int = 0
    right: int = 0
    files: dict[str, SlotRecord] = field(default_factory=dict)


@dataclass(frozen=True)
class VersionInfo:
    """A reachable version, as reported by ``VersionRing.history()``."""

    offset: int  # relative to the current version
    slot: int
    fingerprint: str | None
    timestamp: str | None
