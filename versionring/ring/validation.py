"""Required-field validation for objects passed to ``push_json``.

"Required" is opt-in per field, and means present and non-zero:

* pydantic model -- ``Field(json_schema_extra={"required": True})``;
* dataclass      -- ``field(metadata={"required": True})``.

A marked field fails when it holds its type's zero value (``None``, ``0``,
``False``, empty string or empty container).  Unmarked pydantic fields keep
pydantic's own rules: they must be present and satisfy their declared
constraints (``min_length``, ``ge``, ...), but zero is a valid value.
Nested models and dataclasses are checked recursively and reported by dotted
path.  Plain JSON values (dicts, lists, scalars) carry no constraints.
"""

from __future__ import annotations

import dataclasses
from functools import lru_cache
from typing import Annotated, Any

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic.fields import FieldInfo

from versionring.errors import ValidationFailedError

_MISSING = object()

_ZEROABLE = (bool, int, float, complex, str, bytes, bytearray, list, tuple, dict, set, frozenset)


def _is_zero(value: Any) -> bool:
    if value is None or value is _MISSING:
        return True
    if isinstance(value, _ZEROABLE):
        return not value
    return False


def _marked_required(info: FieldInfo) -> bool:
    extra = info.json_schema_extra
    return isinstance(extra, dict) and extra.get("required") is True


@lru_cache(maxsize=256)
def _field_adapter(model: type[BaseModel], name: str) -> TypeAdapter[Any]:
    """Adapter for one field's annotation plus its declared constraints."""
    info = model.model_fields[name]
    if info.metadata:
        return TypeAdapter(Annotated[(info.annotation, *info.metadata)])
    return TypeAdapter(info.annotation)


class SchemaValidator:
    """Collects every required-field violation of an object."""

    def validate(self, obj: Any) -> None:
        """Raise ValidationFailedError when *obj* violates any constraint."""
        violations = self.check(obj)
        if violations:
            raise ValidationFailedError(violations)

    def check(self, obj: Any, prefix: str = "") -> list[str]:
        if isinstance(obj, BaseModel):
            return self._check_model(obj, prefix)
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return self._check_dataclass(obj, prefix)
        return []

    def _check_model(self, obj: BaseModel, prefix: str) -> list[str]:
        violations: list[str] = []
        model = type(obj)
        for name, info in model.model_fields.items():
            value = getattr(obj, name, _MISSING)
            if value is _MISSING:
                if info.is_required():
                    violations.append(f"{prefix}{name}: missing")
                continue
            if _marked_required(info) and _is_zero(value):
                violations.append(f"{prefix}{name}: required")
                continue
            # Checked against the instance's own values, so aliases and
            # exclude=True fields do not matter here.
            try:
                _field_adapter(model, name).validate_python(value)
            except ValidationError as exc:
                for err in exc.errors():
                    loc = ".".join(str(part) for part in (name, *err["loc"]))
                    violations.append(f"{prefix}{loc}: {err['msg']}")
                continue
            violations.extend(self.check(value, f"{prefix}{name}."))
        return violations

    def _check_dataclass(self, obj: Any, prefix: str) -> list[str]:
        violations: list[str] = []
        for f in dataclasses.fields(obj):
            value = getattr(obj, f.name, _MISSING)
            if f.metadata.get("required") is True and _is_zero(value):
                violations.append(f"{prefix}{f.name}: required")
                continue
            violations.extend(self.check(value, f"{prefix}{f.name}."))
        return violations
