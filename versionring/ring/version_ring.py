"""Fixed-capacity, disk-backed version history.

Layout inside the ring directory::

    0.json          metadata record (RingState)
    1.json .. N.json  pushed versions, N = capacity

The cursor is described by three counters.  ``current`` is the slot of the
active version (0 until the first push), ``left`` is how many older versions
``back`` can reach, ``right`` how many newer versions ``forward`` can reach.
``left + right`` never exceeds ``capacity - 1``.

Every mutating call updates the counters and then rewrites ``0.json`` in
full.  The content write and the metadata write are two separate file
replacements; a crash between them leaves the ledger one step behind.
"""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from uuid import uuid4

from versionring.errors import InvalidArgumentError, NavigationError
from versionring.models.config import MAX_CAPACITY, MIN_CAPACITY, VersionRingConfig
from versionring.models.metadata import RingState, SlotRecord, VersionInfo
from versionring.observability.logging import get_logger
from versionring.ring.codec import JsonCodec, fingerprint
from versionring.ring.slots import METADATA_SLOT, SlotStore, wrap_slot
from versionring.ring.validation import SchemaValidator

_log = get_logger("ring.version_ring")


def _now() -> str:
    return datetime.now(tz=UTC).isoformat()


def _new_instance_id() -> str:
    return f"{int(datetime.now(tz=UTC).timestamp())}.{uuid4().hex}"


class VersionRing:
    """Undo/redo history of one document stored as a ring of slot files.

    Use :meth:`open` (or :func:`versionring.open_ring`) rather than the
    constructor; it loads or initialises the metadata record.
    """

    def __init__(
        self,
        store: SlotStore,
        state: RingState,
        *,
        codec: JsonCodec,
        validator: SchemaValidator,
    ) -> None:
        self._store = store
        self._state = state
        self._codec = codec
        self._validator = validator

    @classmethod
    def open(
        cls,
        directory: str | Path,
        *,
        config: VersionRingConfig | None = None,
        codec: JsonCodec | None = None,
        validator: SchemaValidator | None = None,
    ) -> VersionRing:
        """Load the ring stored in *directory*, initialising it if absent.

        Raises:
            RingIOError: the directory or metadata file cannot be accessed.
            DecodeError: ``0.json`` exists but is not a valid record.
        """
        config = config or VersionRingConfig()
        codec = codec or JsonCodec()
        validator = validator or SchemaValidator()
        path = Path(directory)
        store = SlotStore(path)
        store.ensure_directory()

        if not store.exists(METADATA_SLOT):
            state = RingState(
                dir=str(path),
                once=_new_instance_id(),
                version=config.ring.schema_version,
                length=config.ring.default_capacity,
            )
            ring = cls(store, state, codec=codec, validator=validator)
            ring._note()
            _log.debug("ring_initialized", dir=str(path), length=state.length, once=state.once)
            return ring

        state = codec.decode_state(store.read(METADATA_SLOT))
        # The opened path wins over a stale "dir" if the directory was moved.
        state.dir = str(path)
        _log.debug(
            "ring_loaded",
            dir=str(path),
            length=state.length,
            current=state.current,
            left=state.left,
            right=state.right,
        )
        return cls(store, state, codec=codec, validator=validator)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def directory(self) -> Path:
        return self._store.directory

    @property
    def capacity(self) -> int:
        return self._state.length

    @property
    def current(self) -> int:
        return self._state.current

    @property
    def left(self) -> int:
        return self._state.left

    @property
    def right(self) -> int:
        return self._state.right

    @property
    def instance_id(self) -> str:
        """Changes whenever the directory is initialised afresh."""
        return self._state.once

    @property
    def ledger(self) -> dict[str, SlotRecord]:
        return dict(self._state.files)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set_length(self, n: int) -> None:
        """Change the capacity, keeping only the active version.

        The active version moves to slot 1.  Every other slot file stays on
        disk but drops out of the ledger; see :meth:`prune`.
        """
        if not isinstance(n, int) or isinstance(n, bool):
            raise InvalidArgumentError(f"history length must be an integer, got {n!r}")
        if n < MIN_CAPACITY:
            raise InvalidArgumentError("history length should be at least 1")
        if n > MAX_CAPACITY:
            raise InvalidArgumentError(f"history length is too long (max {MAX_CAPACITY})")

        state = self._state
        if state.current != METADATA_SLOT:
            data = self.pick(0)
            record = state.files.get(str(state.current))
            self._store.write(1, data)
            state.current = 1
            state.files = {
                "1": SlotRecord(sha1=fingerprint(data), time=record.time if record else _now())
            }
        state.left = 0
        state.right = 0
        old = state.length
        state.length = n
        self._note()
        _log.debug("length_changed", old_length=old, length=n, current=state.current)

    def push(self, data: bytes) -> None:
        """Store *data* as the newest version and make it current.

        Any versions reachable through :meth:`forward` become unreachable.
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise InvalidArgumentError(f"push expects bytes, got {type(data).__name__}")
        data = bytes(data)
        state = self._state
        slot = wrap_slot(state.current + 1, state.length)
        self._store.write(slot, data)

        had_version = state.current != METADATA_SLOT
        state.current = slot
        state.right = 0
        state.left = min(state.left + 1, state.length - 1) if had_version else 0
        digest = fingerprint(data)
        state.files[str(slot)] = SlotRecord(sha1=digest, time=_now())
        self._note()
        _log.debug("version_pushed", slot=slot, sha1=digest, left=state.left, size=len(data))

    def push_json(self, obj: Any) -> None:
        """Validate and encode *obj*, then :meth:`push` it.

        Raises ValidationFailedError before anything is written when a
        required field is missing or zero.
        """
        self._validator.validate(obj)
        self.push(self._codec.encode_object(obj))

    def back(self) -> None:
        state = self._state
        if state.left == 0:
            raise NavigationError("no backward steps")
        state.current = wrap_slot(state.current - 1, state.length)
        state.left -= 1
        state.right += 1
        self._note()
        _log.debug("moved_back", current=state.current, left=state.left, right=state.right)

    def forward(self) -> None:
        state = self._state
        if state.right == 0:
            raise NavigationError("no forward steps")
        state.current = wrap_slot(state.current + 1, state.length)
        state.left += 1
        state.right -= 1
        self._note()
        _log.debug("moved_forward", current=state.current, left=state.left, right=state.right)

    def reset(self, n: int) -> bytes:
        """Make the version at offset *n* current and return its bytes."""
        data = self.pick(n)
        state = self._state
        state.current = wrap_slot(state.current + n, state.length)
        state.left += n
        state.right -= n
        self._note()
        _log.debug("ring_reset", offset=n, current=state.current, left=state.left, right=state.right)
        return data

    def prune(self) -> list[int]:
        """Delete slot files that no longer hold a reachable version.

        Returns the removed slot numbers in ascending order.
        """
        reachable = {info.slot for info in self.history()}
        removed = [slot for slot in self._store.content_slots() if slot not in reachable]
        for slot in removed:
            self._store.remove(slot)
        stale = [key for key in self._state.files if int(key) not in reachable]
        for key in stale:
            del self._state.files[key]
        if removed or stale:
            self._note()
        _log.debug("slots_pruned", removed=removed, ledger_dropped=len(stale))
        return removed

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def pick(self, n: int) -> bytes:
        """Return the bytes of the version *n* steps from the current one.

        Negative offsets look back, positive ones forward; ``0`` is the
        current version.
        """
        return self._store.read(self._slot_at(n))

    def verify(self, n: int = 0) -> bool:
        """Check the version at offset *n* against its recorded fingerprint."""
        slot = self._slot_at(n)
        record = self._state.files.get(str(slot))
        if record is None:
            return False
        return fingerprint(self._store.read(slot)) == record.sha1

    def history(self) -> list[VersionInfo]:
        """Every reachable version, oldest first."""
        state = self._state
        if state.current == METADATA_SLOT:
            return []
        versions = []
        for offset in range(-state.left, state.right + 1):
            slot = wrap_slot(state.current + offset, state.length)
            record = state.files.get(str(slot))
            versions.append(
                VersionInfo(
                    offset=offset,
                    slot=slot,
                    fingerprint=record.sha1 if record else None,
                    timestamp=record.time if record else None,
                )
            )
        return versions

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _slot_at(self, n: int) -> int:
        state = self._state
        if state.current == METADATA_SLOT:
            raise NavigationError("no version has been pushed")
        if n < -state.left:
            raise NavigationError("no such older version")
        if n > state.right:
            raise NavigationError("no such newer version")
        return wrap_slot(state.current + n, state.length)

    def _note(self) -> None:
        self._store.write(METADATA_SLOT, self._codec.encode_state(self._state))

    def __repr__(self) -> str:
        s = self._state
        return (
            f"VersionRing(dir={s.dir!r}, length={s.length}, current={s.current}, "
            f"left={s.left}, right={s.right})"
        )
