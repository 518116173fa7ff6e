"""Path extraction, partial containment and exact equality over nested values."""

from __future__ import annotations

from collections.abc import Mapping

from .value_model import MISSING, is_number, is_sequence


def deep_get(value: object, path: str) -> object:
    """Resolve a dotted path such as `data.items.0.id`.

    Array steps need an integer key. Returns `MISSING` whenever the path does
    not resolve; never raises.
    """
    current = value
    for key in path.split("."):
        if current is None or current is MISSING:
            return MISSING
        if is_sequence(current):
            index = _parse_index(key)
            if index is None or index < 0 or index >= len(current):  # type: ignore[arg-type]
                return MISSING
            current = current[index]  # type: ignore[index]
        elif isinstance(current, Mapping):
            current = current.get(key, MISSING)
        else:
            return MISSING
    return current


def deep_contains(superset: object, subset: object) -> bool:
    """Return True when `subset` is structurally contained in `superset`.

    Mappings: every key of `subset` must exist in `superset` with a contained
    value. Arrays: every element of `subset` must be contained in some element
    of `superset`, regardless of position.
    """
    if subset is MISSING or subset is None:
        return superset is subset
    if isinstance(subset, Mapping):
        if not isinstance(superset, Mapping):
            return False
        return all(
            deep_contains(superset.get(key, MISSING), item) for key, item in subset.items()
        )
    if is_sequence(subset):
        if not is_sequence(superset):
            return False
        candidates = list(superset)  # type: ignore[call-overload]
        return all(
            any(deep_contains(candidate, item) for candidate in candidates)
            for item in subset  # type: ignore[attr-defined]
        )
    return _scalars_equal(superset, subset)


def deep_equal(left: object, right: object) -> bool:
    """Return True when both values have the same structure and scalars."""
    if isinstance(left, Mapping) or isinstance(right, Mapping):
        if not (isinstance(left, Mapping) and isinstance(right, Mapping)):
            return False
        if left.keys() != right.keys():
            return False
        return all(deep_equal(left[key], right[key]) for key in left)
    if is_sequence(left) or is_sequence(right):
        if not (is_sequence(left) and is_sequence(right)):
            return False
        if len(left) != len(right):  # type: ignore[arg-type]
            return False
        return all(deep_equal(a, b) for a, b in zip(left, right))  # type: ignore[call-overload]
    return _scalars_equal(left, right)


def _scalars_equal(left: object, right: object) -> bool:
    if left is right:
        return True
    if left is None or right is None or left is MISSING or right is MISSING:
        return False
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if is_number(left) or is_number(right):
        return is_number(left) and is_number(right) and left == right
    return type(left) is type(right) and left == right


def _parse_index(key: str) -> int | None:
    try:
        return int(key)
    except ValueError:
        return None
