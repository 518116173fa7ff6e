"""Document value utilities exports."""

from .deep_comparison import deep_contains, deep_equal, deep_get
from .interpolation import PLACEHOLDER_PATTERN, interpolate, merge_variables
from .value_model import (
    MISSING,
    JsonValue,
    display_value,
    is_number,
    is_sequence,
    runtime_type_tags,
    to_jsonable,
)

__all__ = [
    "MISSING",
    "JsonValue",
    "PLACEHOLDER_PATTERN",
    "deep_contains",
    "deep_equal",
    "deep_get",
    "display_value",
    "interpolate",
    "is_number",
    "is_sequence",
    "merge_variables",
    "runtime_type_tags",
    "to_jsonable",
]
