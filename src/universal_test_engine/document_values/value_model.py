"""JSON value model shared by interpolation, comparison and generation."""

from __future__ import annotations

import json
import math
from collections.abc import Mapping, Sequence
from typing import Any, Final

JsonValue = Any


class _Missing:
    """Marker for a value that is absent, as opposed to an explicit null."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()


def is_sequence(value: object) -> bool:
    """Return True for JSON arrays (lists and tuples, never strings or bytes)."""
    return isinstance(value, Sequence) and not isinstance(value, str | bytes | bytearray)


def is_number(value: object) -> bool:
    """Return True for ints and floats, excluding booleans."""
    return isinstance(value, int | float) and not isinstance(value, bool)


def runtime_type_tags(value: object) -> frozenset[str]:
    """Return every type name a `type` assertion may use to describe the value.

    `object` covers mappings, arrays and null so suites written against
    JavaScript `typeof` keep working; `array`, `null` and `integer` are the
    more precise JSON names.
    """
    if value is MISSING:
        return frozenset({"undefined"})
    if value is None:
        return frozenset({"object", "null"})
    if isinstance(value, bool):
        return frozenset({"boolean"})
    if isinstance(value, int):
        return frozenset({"number", "integer"})
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return frozenset({"number", "integer"})
        return frozenset({"number"})
    if isinstance(value, str):
        return frozenset({"string"})
    if isinstance(value, Mapping):
        return frozenset({"object"})
    if is_sequence(value):
        return frozenset({"object", "array"})
    return frozenset({type(value).__name__})


def display_value(value: object) -> str:
    """Render a value for assertion messages and string casts."""
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping) or is_sequence(value):
        return json.dumps(_jsonable(value), ensure_ascii=False, sort_keys=True)
    return str(value)


def _jsonable(value: object) -> object:
    if isinstance(value, Mapping):
        return {
            str(key): _jsonable(item) for key, item in value.items() if item is not MISSING
        }
    if is_sequence(value):
        return [None if item is MISSING else _jsonable(item) for item in value]
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def to_jsonable(value: object) -> object:
    """Return a copy of the value safe to pass to `json.dumps`.

    Non-finite floats become null, as JSON has no spelling for them.
    """
    if value is MISSING:
        return None
    return _jsonable(value)
