"""Disk-backed version ring.

Stores up to ``capacity`` snapshots of a byte blob as numbered files in one
directory, with slot ``0`` reserved for the metadata record.

Submodules:
    slots         -- wrap_slot helper and slot file I/O.
    codec         -- JSON encoding of the metadata record and pushed objects.
    validation    -- required-field checks for push_json.
    version_ring  -- VersionRing: push / back / forward / pick / reset.
"""

from versionring.ring.codec import JsonCodec, fingerprint
from versionring.ring.slots import SlotStore, wrap_slot
from versionring.ring.validation import SchemaValidator
from versionring.ring.version_ring import VersionRing

__all__ = [
    "JsonCodec",
    "SchemaValidator",
    "SlotStore",
    "VersionRing",
    "fingerprint",
    "wrap_slot",
]
