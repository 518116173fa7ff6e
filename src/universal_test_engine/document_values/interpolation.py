"""`{{name}}` placeholder substitution over document trees."""

from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType

from .value_model import is_sequence

PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")


def interpolate(value: object, variables: Mapping[str, str]) -> object:
    """Return a copy of `value` with every known placeholder replaced.

    Unknown names stay as the literal `{{name}}` so they remain visible in the
    request diagnostics.
    """
    if isinstance(value, str):
        return PLACEHOLDER_PATTERN.sub(lambda match: _resolve(match, variables), value)
    if isinstance(value, Mapping):
        return {key: interpolate(item, variables) for key, item in value.items()}
    if is_sequence(value):
        return [interpolate(item, variables) for item in value]  # type: ignore[attr-defined]
    return value


def merge_variables(
    suite_variables: Mapping[str, str], injection: Mapping[str, str] | None
) -> Mapping[str, str]:
    """Overlay one test case's injected data on the suite variables."""
    merged = dict(suite_variables)
    merged.update(injection or {})
    return MappingProxyType(merged)


def _resolve(match: re.Match[str], variables: Mapping[str, str]) -> str:
    name = match.group(1)
    replacement = variables.get(name)
    if replacement is None:
        return match.group(0)
    return str(replacement)
