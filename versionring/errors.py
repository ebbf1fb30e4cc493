"""Typed exceptions raised by the version ring.

Every failure surfaces to the immediate caller as a subclass of
:class:`VersionRingError`.  Nothing is retried or logged as an error inside
the library.

InvalidArgumentError  -- capacity or payload argument out of range.
NavigationError       -- back/forward/pick outside the reachable window.
ValidationFailedError -- push_json object is missing required fields.
RingIOError           -- underlying filesystem failure, original exception
                         chained as ``__cause__``.
DecodeError           -- metadata or pushed object could not be (de)serialised.
EncodeError           -- DecodeError raised while encoding an object.
"""

from __future__ import annotations

from pathlib import Path


class VersionRingError(Exception):
    """Base exception for all version ring failures."""


class InvalidArgumentError(VersionRingError, ValueError):
    """An argument is outside its permitted domain."""


class NavigationError(VersionRingError):
    """The requested step or offset lies outside the available history."""


class ValidationFailedError(VersionRingError):
    """An object failed its required-field constraints.

    Attributes:
        violations: One human-readable entry per violated constraint.
    """

    def __init__(self, violations: list[str]) -> None:
        super().__init__("validation failed: " + "; ".join(violations))
        self.violations = violations


class RingIOError(VersionRingError):
    """A read, write or stat of a slot file failed.

    Attributes:
        operation: Stable operation identifier, e.g. ``"slot.write"``.
        path: The file the operation targeted.
    """

    def __init__(self, operation: str, path: Path, cause: OSError) -> None:
        super().__init__(f"{operation} {path}: {cause}")
        self.operation = operation
        self.path = path


class DecodeError(VersionRingError):
    """Bytes could not be decoded into the expected structure."""


class EncodeError(DecodeError):
    """An object could not be encoded to bytes."""
