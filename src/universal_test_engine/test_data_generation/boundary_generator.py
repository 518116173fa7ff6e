"""Boundary values and one-field-at-a-time negative payloads.

Case order is part of the contract: generated test identifiers are derived
from it, so reruns must produce the same sequence. Ranges are trusted; a field
spec with `min > max` yields whatever the arithmetic produces.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from universal_test_engine.document_values import MISSING

from .field_specs import FieldSpec, FieldType

MAX_SAFE_INTEGER = 2**53 - 1
MIN_SAFE_INTEGER = -MAX_SAFE_INTEGER
DEFAULT_MAX_LENGTH = 255
FILLER = "a"

BOUNDARY_STRINGS: Mapping[str, str] = MappingProxyType(
    {
        "empty": "",
        "single_char": "a",
        "max_ascii": "a" * 255,
        "long_string": "a" * 10_000,
        "unicode": "日本語テスト 🎉🚀",
        "emoji": "😀😂🤣😍🥰",
        "html_injection": '<script>alert("xss")</script>',
        "sql_injection": "' OR 1=1; DROP TABLE users; --",
        "null_byte": "hello\x00world",
        "newlines": "line1\nline2\rline3\r\nline4",
        "tabs": "col1\tcol2\tcol3",
        "whitespace_only": "   \t\n  ",
        "special_chars": "!@#$%^&*()_+-=[]{}|;:'\"<>?,./~`",
        "rtl_text": "\u202eright-to-left",
        "backslash": "path\\to\\file",
        "url_encoded": "%3Cscript%3Ealert(1)%3C/script%3E",
    }
)

BOUNDARY_NUMBERS: Mapping[str, float] = MappingProxyType(
    {
        "zero": 0,
        "one": 1,
        "negative_one": -1,
        "max_safe": MAX_SAFE_INTEGER,
        "min_safe": MIN_SAFE_INTEGER,
        "max_float": sys.float_info.max,
        "min_float": 5e-324,
        "infinity": float("inf"),
        "negative_infinity": float("-inf"),
        "nan": float("nan"),
        "epsilon": sys.float_info.epsilon,
    }
)

EMAIL_SAMPLES: tuple[tuple[str, str, bool], ...] = (
    ("valid email", "user@example.com", True),
    ("no @", "userexample.com", False),
    ("double @", "user@@example.com", False),
    ("no domain", "user@", False),
    ("no local", "@example.com", False),
    ("spaces", "user @example.com", False),
    ("unicode domain", "user@例え.jp", True),
)


@dataclass(frozen=True)
class BoundaryCase:
    description: str
    field: str
    value: Any
    expect_valid: bool


@dataclass(frozen=True)
class NegativePayload:
    description: str
    field: str
    payload: Mapping[str, Any]


def generate_boundary_cases(spec: FieldSpec) -> tuple[BoundaryCase, ...]:
    """Return the ordered boundary cases for one field.

    Required fields start with a missing case (value `MISSING`) and a null
    case; the type specific cases follow.
    """
    cases: list[BoundaryCase] = []
    if spec.required:
        cases.append(_case(spec, "missing (undefined)", MISSING, False))
        cases.append(_case(spec, "null", None, False))
    cases.extend(_TYPE_GENERATORS[FieldType(spec.type)](spec))
    return tuple(cases)


def generate_negative_payloads(
    valid_payload: Mapping[str, Any], specs: Sequence[FieldSpec]
) -> tuple[NegativePayload, ...]:
    """Derive one payload per invalid case, mutating a single field each time.

    A missing case removes the key from the payload instead of setting a value.
    """
    payloads: list[NegativePayload] = []
    for spec in specs:
        for case in generate_boundary_cases(spec):
            if case.expect_valid:
                continue
            payload = dict(valid_payload)
            if case.value is MISSING:
                payload.pop(case.field, None)
            else:
                payload[case.field] = case.value
            payloads.append(
                NegativePayload(description=case.description, field=case.field, payload=payload)
            )
    return tuple(payloads)


def integer_boundaries(minimum: int, maximum: int) -> list[int]:
    """Seven probe values around and between the edges of an integer range."""
    return [
        minimum - 1,
        minimum,
        minimum + 1,
        (minimum + maximum) // 2,
        maximum - 1,
        maximum,
        maximum + 1,
    ]


def string_length_boundaries(min_length: int, max_length: int) -> list[str]:
    """Eight filler strings probing the edges of a length range."""
    lengths = (
        0,
        max(0, min_length - 1),
        min_length,
        min_length + 1,
        (min_length + max_length) // 2,
        max_length - 1,
        max_length,
        max_length + 1,
    )
    return [FILLER * length for length in lengths]


def _string_cases(spec: FieldSpec) -> list[BoundaryCase]:
    minimum = spec.min_length if spec.min_length is not None else 0
    maximum = spec.max_length if spec.max_length is not None else DEFAULT_MAX_LENGTH
    return [
        _case(spec, "empty string", "", minimum == 0),
        _case(spec, f"at minLength ({minimum})", FILLER * minimum, True),
        _case(spec, "below minLength", FILLER * max(0, minimum - 1), minimum <= 1),
        _case(spec, f"at maxLength ({maximum})", FILLER * maximum, True),
        _case(spec, "above maxLength", FILLER * (maximum + 1), False),
        _case(spec, "unicode", BOUNDARY_STRINGS["unicode"], True),
        _case(spec, "XSS attempt", BOUNDARY_STRINGS["html_injection"], False),
        _case(spec, "SQL injection", BOUNDARY_STRINGS["sql_injection"], False),
    ]


def _email_cases(spec: FieldSpec) -> list[BoundaryCase]:
    return [_case(spec, label, value, valid) for label, value, valid in EMAIL_SAMPLES]


def _numeric_cases(spec: FieldSpec) -> list[BoundaryCase]:
    minimum = spec.min if spec.min is not None else MIN_SAFE_INTEGER
    maximum = spec.max if spec.max is not None else MAX_SAFE_INTEGER
    cases = [
        _case(spec, "zero", 0, minimum <= 0 <= maximum),
        _case(spec, f"at min ({_format_number(minimum)})", minimum, True),
        _case(spec, "below min", minimum - 1, False),
        _case(spec, f"at max ({_format_number(maximum)})", maximum, True),
        _case(spec, "above max", maximum + 1, False),
        _case(spec, "negative", -1, minimum <= -1),
        _case(spec, "NaN", float("nan"), False),
        _case(spec, "string instead", "not-a-number", False),
    ]
    if FieldType(spec.type) is FieldType.INTEGER:
        cases.append(_case(spec, "float", 1.5, False))
    return cases


def _boolean_cases(spec: FieldSpec) -> list[BoundaryCase]:
    return [
        _case(spec, "true", True, True),
        _case(spec, "false", False, True),
        _case(spec, 'string "true"', "true", False),
        _case(spec, "number 1", 1, False),
        _case(spec, "number 0", 0, False),
    ]


_TYPE_GENERATORS: Mapping[FieldType, Callable[[FieldSpec], list[BoundaryCase]]] = {
    FieldType.STRING: _string_cases,
    FieldType.EMAIL: _email_cases,
    FieldType.NUMBER: _numeric_cases,
    FieldType.INTEGER: _numeric_cases,
    FieldType.BOOLEAN: _boolean_cases,
}


def _case(spec: FieldSpec, label: str, value: Any, expect_valid: bool) -> BoundaryCase:
    return BoundaryCase(
        description=f"{spec.name}: {label}",
        field=spec.name,
        value=value,
        expect_valid=expect_valid,
    )


def _format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
