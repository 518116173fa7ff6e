"""Test data generation exports."""

from .boundary_generator import (
    BOUNDARY_NUMBERS,
    BOUNDARY_STRINGS,
    BoundaryCase,
    NegativePayload,
    generate_boundary_cases,
    generate_negative_payloads,
    integer_boundaries,
    string_length_boundaries,
)
from .field_specs import FieldSpec, FieldSpecError, FieldType, load_field_specs

__all__ = [
    "BOUNDARY_NUMBERS",
    "BOUNDARY_STRINGS",
    "BoundaryCase",
    "FieldSpec",
    "FieldSpecError",
    "FieldType",
    "NegativePayload",
    "generate_boundary_cases",
    "generate_negative_payloads",
    "integer_boundaries",
    "string_length_boundaries",
    "load_field_specs",
]
