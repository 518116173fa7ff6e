"""Field specifications describing the validity domain of one payload field."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import yaml


class FieldSpecError(Exception):
    """Raised when a field specification file cannot be interpreted."""


class FieldType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    EMAIL = "email"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class FieldSpec:  # pylint: disable=too-many-instance-attributes
    name: str
    type: FieldType
    min_length: int | None = None
    max_length: int | None = None
    min: float | None = None
    max: float | None = None
    required: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> FieldSpec:
        """Build a spec from a document using either camelCase or snake_case keys."""
        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            raise FieldSpecError("Field spec requires a non-empty 'name'.")
        try:
            field_type = FieldType(data.get("type"))
        except ValueError as exc:
            allowed = ", ".join(member.value for member in FieldType)
            raise FieldSpecError(
                f"Field '{name}' has unsupported type {data.get('type')!r}; "
                f"expected one of {allowed}."
            ) from exc
        return cls(
            name=name,
            type=field_type,
            min_length=_optional_int(data, "minLength", "min_length", name),
            max_length=_optional_int(data, "maxLength", "max_length", name),
            min=_optional_number(data, "min", name),
            max=_optional_number(data, "max", name),
            required=bool(data.get("required", False)),
        )


def load_field_specs(path: Path | str) -> tuple[FieldSpec, ...]:
    """Read a YAML or JSON list of field specs (or a mapping with a `fields` list)."""
    spec_path = Path(path)
    if not spec_path.exists():
        raise FieldSpecError(f"Field spec file not found: {spec_path}")
    try:
        data = yaml.safe_load(spec_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise FieldSpecError(f"Unable to parse field spec file {spec_path}: {exc}") from exc
    if isinstance(data, Mapping):
        data = data.get("fields")
    if not isinstance(data, list) or not data:
        raise FieldSpecError("Field spec file must contain a non-empty list of fields.")
    specs = []
    for entry in data:
        if not isinstance(entry, Mapping):
            raise FieldSpecError("Each field spec must be a mapping.")
        specs.append(FieldSpec.from_mapping(entry))
    return tuple(specs)


def _optional_int(data: Mapping[str, Any], camel: str, snake: str, name: str) -> int | None:
    value = data.get(camel, data.get(snake))
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise FieldSpecError(f"Field '{name}': '{camel}' must be a non-negative integer.")
    return value


def _optional_number(data: Mapping[str, Any], key: str, name: str) -> float | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise FieldSpecError(f"Field '{name}': '{key}' must be a number.")
    return value
