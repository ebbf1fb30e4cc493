"""Shared fixtures for versionring integration tests.

Rings are opened in pytest's ``tmp_path`` and reopened from disk to exercise
the persistence path the same way a restarted process would.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from versionring import open_ring
from versionring.models.config import RingConfig, VersionRingConfig
from versionring.ring.version_ring import VersionRing


def make_config(capacity: int = 10) -> VersionRingConfig:
    """Create a config whose fresh rings have *capacity* slots."""
    return VersionRingConfig(ring=RingConfig(default_capacity=capacity))


@pytest.fixture()
def ring_dir(tmp_path: Path) -> Path:
    return tmp_path / "history"


@pytest.fixture()
def open_at(ring_dir: Path) -> Callable[..., VersionRing]:
    """Open the ring in ``ring_dir``; call again to simulate a restart."""

    def _open(capacity: int = 10) -> VersionRing:
        return open_ring(ring_dir, config=make_config(capacity))

    return _open
