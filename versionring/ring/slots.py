"""Slot arithmetic and slot file I/O.

Slot ``0`` is the metadata record; slots ``1..capacity`` hold content.  All
stepping through the ring goes through :func:`wrap_slot` so the wrap boundary
is handled in one place.
"""

from __future__ import annotations

import contextlib
import os
import re
from pathlib import Path

from versionring.errors import RingIOError

METADATA_SLOT = 0

_SLOT_FILE_RE = re.compile(r"^(\d+)\.json$")


def wrap_slot(index: int, capacity: int) -> int:
    """Map any integer onto the content slots ``[1, capacity]``."""
    return ((index - 1) % capacity) + 1


class SlotStore:
    """Reads and writes ``<n>.json`` files inside one directory."""

    def __init__(self, directory: Path) -> None:
        self._directory = directory

    @property
    def directory(self) -> Path:
        return self._directory

    def path(self, slot: int) -> Path:
        return self._directory / f"{slot}.json"

    def ensure_directory(self) -> None:
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise RingIOError("directory.create", self._directory, exc) from exc

    def exists(self, slot: int) -> bool:
        path = self.path(slot)
        try:
            path.stat()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise RingIOError("slot.stat", path, exc) from exc
        return True

    def read(self, slot: int) -> bytes:
        path = self.path(slot)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise RingIOError("slot.read", path, exc) from exc

    def write(self, slot: int, data: bytes) -> None:
        """Replace the slot file; readers see either the old or new bytes."""
        path = self.path(slot)
        tmp = path.with_name(path.name + ".tmp")
        try:
            tmp.write_bytes(data)
            os.replace(tmp, path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise RingIOError("slot.write", path, exc) from exc

    def remove(self, slot: int) -> None:
        path = self.path(slot)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise RingIOError("slot.remove", path, exc) from exc

    def content_slots(self) -> list[int]:
        """Return every content slot number that has a file on disk."""
        try:
            names = os.listdir(self._directory)
        except OSError as exc:
            raise RingIOError("directory.list", self._directory, exc) from exc
        slots = []
        for name in names:
            match = _SLOT_FILE_RE.match(name)
            if match and int(match.group(1)) != METADATA_SLOT:
                slots.append(int(match.group(1)))
        return sorted(slots)
