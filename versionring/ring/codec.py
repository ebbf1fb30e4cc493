"""JSON encoding for the metadata record and pushed objects."""

from __future__ import annotations

import dataclasses
import hashlib
import json
import re
from typing import Any

from pydantic import BaseModel

from versionring.errors import DecodeError, EncodeError
from versionring.models.config import MAX_CAPACITY, MIN_CAPACITY
from versionring.models.metadata import RingState, SlotRecord

_REQUIRED_STRING_KEYS = ("dir", "once")
_COUNTER_KEYS = ("length", "current", "left", "right")
_SLOT_KEY_RE = re.compile(r"[0-9]+")


def fingerprint(data: bytes) -> str:
    """Return the lowercase hex SHA-1 of *data*."""
    return hashlib.sha1(data).hexdigest()  # noqa: S324 - content fingerprint, not security


class JsonCodec:
    """Serialises :class:`RingState` and user objects to JSON bytes.

    One instance is handed to each ring; there is no shared module state.
    """

    def __init__(self, *, sort_keys: bool = False) -> None:
        self._sort_keys = sort_keys

    # ------------------------------------------------------------------
    # Metadata record
    # ------------------------------------------------------------------

    def encode_state(self, state: RingState) -> bytes:
        doc = dataclasses.asdict(state)
        return json.dumps(doc, sort_keys=self._sort_keys).encode("utf-8")

    def decode_state(self, raw: bytes) -> RingState:
        """Parse and check a metadata record.

        Raises DecodeError on malformed JSON, missing or mistyped fields, or
        counters that cannot describe a valid ring.
        """
        try:
            doc = json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DecodeError(f"metadata is not valid JSON: {exc}") from exc
        if not isinstance(doc, dict):
            raise DecodeError("metadata must be a JSON object")

        for key in _REQUIRED_STRING_KEYS:
            value = doc.get(key)
            if not isinstance(value, str) or not value:
                raise DecodeError(f"metadata field {key!r} is required")
        for key in _COUNTER_KEYS:
            value = doc.get(key, 0)
            if not isinstance(value, int) or isinstance(value, bool):
                raise DecodeError(f"metadata field {key!r} must be an integer")
        version = doc.get("version", "")
        if not isinstance(version, str):
            raise DecodeError("metadata field 'version' must be a string")

        state = RingState(
            dir=doc["dir"],
            once=doc["once"],
            version=version,
            length=doc.get("length", 0),
            current=doc.get("current", 0),
            left=doc.get("left", 0),
            right=doc.get("right", 0),
            files=self._decode_files(doc.get("files"), doc.get("length", 0)),
        )
        self._check_counters(state)
        return state

    @staticmethod
    def _decode_files(raw: Any, length: int) -> dict[str, SlotRecord]:
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise DecodeError("metadata field 'files' must be an object")
        files: dict[str, SlotRecord] = {}
        for key, entry in raw.items():
            if not _SLOT_KEY_RE.fullmatch(key) or not isinstance(entry, dict):
                raise DecodeError(f"malformed ledger entry for slot {key!r}")
            if not 1 <= int(key) <= length:
                raise DecodeError(f"ledger entry for slot {key!r} outside 1..{length}")
            sha1 = entry.get("sha1")
            time = entry.get("time")
            if not isinstance(sha1, str) or not sha1 or not isinstance(time, str) or not time:
                raise DecodeError(f"ledger entry for slot {key!r} needs sha1 and time")
            files[key] = SlotRecord(sha1=sha1, time=time)
        return files

    @staticmethod
    def _check_counters(state: RingState) -> None:
        if not MIN_CAPACITY <= state.length <= MAX_CAPACITY:
            raise DecodeError(f"metadata length {state.length} out of range")
        if not 0 <= state.current <= state.length:
            raise DecodeError(f"metadata current {state.current} out of range")
        if state.left < 0 or state.right < 0 or state.left + state.right > state.length - 1:
            raise DecodeError(
                f"metadata window left={state.left} right={state.right} "
                f"does not fit length {state.length}"
            )
        if state.current == 0 and (state.left or state.right):
            raise DecodeError("metadata has history but no current version")

    # ------------------------------------------------------------------
    # User objects
    # ------------------------------------------------------------------

    def encode_object(self, obj: Any) -> bytes:
        """Encode a pydantic model, dataclass instance or plain JSON value."""
        try:
            if isinstance(obj, BaseModel):
                return obj.model_dump_json(by_alias=True).encode("utf-8")
            if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
                obj = dataclasses.asdict(obj)
            return json.dumps(obj, sort_keys=self._sort_keys, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise EncodeError(f"cannot encode {type(obj).__name__}: {exc}") from exc
