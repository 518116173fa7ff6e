"""Schema management entities."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SuiteKind(str, Enum):
    """Families of suite documents, each with its own bundled schema."""

    API = "api"
    UI = "ui"


@dataclass(frozen=True)
class SchemaIssue:
    """One schema violation found in a validated document."""

    instance_path: str
    message: str
    params: Mapping[str, Any] = field(default_factory=dict)

    def render(self) -> str:
        params = json.dumps(self.params, ensure_ascii=False, sort_keys=True, default=str)
        return f"{self.instance_path or '/'} {self.message} {params}"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one value against one schema."""

    issues: tuple[SchemaIssue, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.issues

    @property
    def errors(self) -> tuple[str, ...]:
        """Rendered issues, one line each."""
        return tuple(issue.render() for issue in self.issues)
