"""Assertion vocabulary of an HTTP expectation."""

from __future__ import annotations

from enum import Enum


class ExpectationRuleKind(str, Enum):
    """Checks an expectation can activate; values name the document keys."""

    STATUS = "status"
    STATUS_RANGE = "statusRange"
    BODY_CONTAINS = "bodyContains"
    BODY_EXACT = "bodyExact"
    BODY_SCHEMA = "bodySchema"
    BODY_PATH = "bodyPath"
    HEADERS = "headers"
    RESPONSE_TIME = "responseTime"


class BodyPathCheck(str, Enum):
    """Checks applicable to the value found at one body path."""

    EQUALS = "equals"
    CONTAINS = "contains"
    TYPE = "type"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    REGEX = "regex"
