"""Integration tests for reopening rings from disk."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from versionring import DecodeError, NavigationError, RingIOError, open_ring
from versionring.ring.codec import fingerprint
from versionring.ring.version_ring import VersionRing

# ---------------------------------------------------------------------------
# Round trip
# ---------------------------------------------------------------------------


class TestReopen:
    def test_pushed_bytes_survive_reopen(self, open_at: Callable[..., VersionRing]) -> None:
        blob = b"\x00binary\xffpayload"
        open_at().push(blob)

        reopened = open_at()
        assert reopened.pick(0) == blob
        assert reopened.ledger["1"].sha1 == fingerprint(blob)

    def test_counters_and_instance_id_survive(self, open_at: Callable[..., VersionRing]) -> None:
        ring = open_at(capacity=4)
        for blob in (b"a", b"b", b"c"):
            ring.push(blob)
        ring.back()

        reopened = open_at(capacity=99)
        assert (reopened.capacity, reopened.current, reopened.left, reopened.right) == (4, 2, 1, 1)
        assert reopened.instance_id == ring.instance_id
        reopened.forward()
        assert reopened.pick(0) == b"c"

    def test_fresh_directory_gets_new_instance_id(self, tmp_path: Path) -> None:
        first = open_ring(tmp_path / "a")
        second = open_ring(tmp_path / "b")
        assert first.instance_id != second.instance_id

    def test_reinitialised_directory_is_detectable(self, ring_dir: Path) -> None:
        ring = open_ring(ring_dir)
        (ring_dir / "0.json").unlink()
        assert open_ring(ring_dir).instance_id != ring.instance_id

    def test_moved_directory_rewrites_dir_field(self, ring_dir: Path, tmp_path: Path) -> None:
        open_ring(ring_dir).push(b"a")
        moved = ring_dir.rename(tmp_path / "moved")

        ring = open_ring(moved)
        assert ring.pick(0) == b"a"
        ring.push(b"b")
        assert json.loads((moved / "0.json").read_bytes())["dir"] == str(moved)

    def test_environment_default_capacity(
        self, ring_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("VERSIONRING_DEFAULT_CAPACITY", "3")
        assert open_ring(ring_dir).capacity == 3


# ---------------------------------------------------------------------------
# Corrupt or unreadable state
# ---------------------------------------------------------------------------


class TestBrokenState:
    def test_malformed_metadata_is_not_repaired(self, ring_dir: Path) -> None:
        open_ring(ring_dir).push(b"a")
        (ring_dir / "0.json").write_bytes(b"{truncated")

        with pytest.raises(DecodeError):
            open_ring(ring_dir)
        assert (ring_dir / "0.json").read_bytes() == b"{truncated"

    def test_missing_content_file(self, open_at: Callable[..., VersionRing], ring_dir: Path) -> None:
        ring = open_at()
        ring.push(b"a")
        ring.push(b"b")
        (ring_dir / "1.json").unlink()

        with pytest.raises(RingIOError) as excinfo:
            open_at().pick(-1)
        assert excinfo.value.path == ring_dir / "1.json"

    def test_directory_path_is_a_file(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(RingIOError):
            open_ring(blocker)


# ---------------------------------------------------------------------------
# Capacity changes across restarts
# ---------------------------------------------------------------------------


class TestCapacityAcrossRestart:
    def test_set_length_then_reopen(self, open_at: Callable[..., VersionRing]) -> None:
        ring = open_at(capacity=2)
        for blob in (b"one", b"two", b"three"):
            ring.push(blob)
        ring.set_length(6)

        reopened = open_at()
        assert (reopened.capacity, reopened.current, reopened.left, reopened.right) == (6, 1, 0, 0)
        assert reopened.pick(0) == b"three"
        with pytest.raises(NavigationError):
            reopened.back()

    def test_prune_then_reopen(self, open_at: Callable[..., VersionRing], ring_dir: Path) -> None:
        ring = open_at()
        for blob in (b"a", b"b", b"c", b"d"):
            ring.push(blob)
        ring.set_length(2)
        ring.prune()

        reopened = open_at()
        assert reopened.history()[0].slot == 1
        assert reopened.verify() is True
        assert sorted(p.name for p in ring_dir.iterdir()) == ["0.json", "1.json"]
