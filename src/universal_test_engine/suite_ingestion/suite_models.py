"""Suite ingestion entities.

Documents are schema-validated before any of these are built, so the
`from_document` constructors only normalize shapes and never re-check them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from universal_test_engine.document_values import MISSING
from universal_test_engine.schema_management import SuiteKind


@dataclass(frozen=True)
class StatusRange:
    """Inclusive accepted status code range."""

    min: int
    max: int


@dataclass(frozen=True)
class BodyPathExpectation:  # pylint: disable=too-many-instance-attributes
    """Checks applied to the value found at one dotted body path."""

    path: str
    equals: object = MISSING
    contains: object = MISSING
    type: str | None = None
    min_length: int | None = None
    max_length: int | None = None
    regex: str | None = None

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> BodyPathExpectation:
        return cls(
            path=document["path"],
            equals=document.get("equals", MISSING),
            contains=document.get("contains", MISSING),
            type=document.get("type"),
            min_length=document.get("minLength"),
            max_length=document.get("maxLength"),
            regex=document.get("regex"),
        )


@dataclass(frozen=True)
class Expectation:  # pylint: disable=too-many-instance-attributes
    """Sparse set of response assertions; absent fields are not checked."""

    status: int | None = None
    status_range: StatusRange | None = None
    body_contains: object = MISSING
    body_exact: object = MISSING
    body_schema: Mapping[str, Any] | bool | None = None
    body_path: tuple[BodyPathExpectation, ...] = ()
    headers: Mapping[str, str] = field(default_factory=dict)
    response_time_ms: float | None = None

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> Expectation:
        status_range = document.get("statusRange")
        return cls(
            status=document.get("status"),
            status_range=(
                StatusRange(min=status_range["min"], max=status_range["max"])
                if status_range
                else None
            ),
            body_contains=document.get("bodyContains", MISSING),
            body_exact=document.get("bodyExact", MISSING),
            body_schema=document.get("bodySchema"),
            body_path=tuple(
                BodyPathExpectation.from_document(item) for item in document.get("bodyPath") or ()
            ),
            headers=dict(document.get("headers") or {}),
            response_time_ms=document.get("responseTime"),
        )


@dataclass(frozen=True)
class TokenExtraction:
    """Where a setup response keeps the token and which variable receives it."""

    from_path: str
    as_name: str


@dataclass(frozen=True)
class ApiSetupCall:
    """Suite-level request issued before (setup) or after (teardown) all cases."""

    method: str
    endpoint: str
    body: object = None
    headers: Mapping[str, str] = field(default_factory=dict)
    extract_token: TokenExtraction | None = None

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> ApiSetupCall:
        extract = document.get("extractToken")
        return cls(
            method=document["method"],
            endpoint=document["endpoint"],
            body=document.get("body"),
            headers=dict(document.get("headers") or {}),
            extract_token=(
                TokenExtraction(from_path=extract["fromPath"], as_name=extract["as"])
                if extract
                else None
            ),
        )


@dataclass(frozen=True)
class ApiTestCase:  # pylint: disable=too-many-instance-attributes
    """One declared HTTP scenario."""

    name: str
    method: str
    endpoint: str
    expect: Expectation
    tags: tuple[str, ...] = ()
    headers: Mapping[str, str] = field(default_factory=dict)
    query: Mapping[str, Any] = field(default_factory=dict)
    body: object = None
    auth: str | None = None
    data_injection: Mapping[str, str] = field(default_factory=dict)
    skip: bool = False
    only: bool = False
    timeout_ms: int | None = None
    retries: int | None = None
    document: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> ApiTestCase:
        return cls(
            name=document["name"],
            method=document["method"],
            endpoint=document["endpoint"],
            expect=Expectation.from_document(document.get("expect") or {}),
            tags=tuple(document.get("tags") or ()),
            headers=dict(document.get("headers") or {}),
            query=dict(document.get("query") or {}),
            body=document.get("body"),
            auth=document.get("auth"),
            data_injection=dict(document.get("dataInjection") or {}),
            skip=bool(document.get("skip", False)),
            only=bool(document.get("only", False)),
            timeout_ms=document.get("timeout"),
            retries=document.get("retries"),
            document=document,
        )


@dataclass(frozen=True)
class UiAction:
    """One declared browser step; `action` is resolved by the dispatcher."""

    action: str
    selector: str | None = None
    value: object = None
    options: Mapping[str, Any] = field(default_factory=dict)
    description: str | None = None

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> UiAction:
        return cls(
            action=document["action"],
            selector=document.get("selector"),
            value=document.get("value"),
            options=dict(document.get("options") or {}),
            description=document.get("description"),
        )


@dataclass(frozen=True)
class Viewport:
    """Browser viewport size override."""

    width: int
    height: int


@dataclass(frozen=True)
class SnapshotConfig:
    """Visual comparison requested after the steps of a UI case."""

    name: str
    full_page: bool = True
    selector: str | None = None


@dataclass(frozen=True)
class UiTestCase:  # pylint: disable=too-many-instance-attributes
    """One declared browser scenario."""

    name: str
    steps: tuple[UiAction, ...]
    tags: tuple[str, ...] = ()
    url: str | None = None
    viewport: Viewport | None = None
    snapshot: SnapshotConfig | None = None
    data_injection: Mapping[str, str] = field(default_factory=dict)
    skip: bool = False
    only: bool = False
    timeout_ms: int | None = None
    retries: int | None = None
    document: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> UiTestCase:
        viewport = document.get("viewport")
        snapshot = document.get("snapshot")
        return cls(
            name=document["name"],
            steps=tuple(UiAction.from_document(step) for step in document.get("steps") or ()),
            tags=tuple(document.get("tags") or ()),
            url=document.get("url"),
            viewport=Viewport(width=viewport["width"], height=viewport["height"])
            if viewport
            else None,
            snapshot=(
                SnapshotConfig(
                    name=snapshot["name"],
                    full_page=bool(snapshot.get("fullPage", True)),
                    selector=snapshot.get("selector"),
                )
                if snapshot
                else None
            ),
            data_injection=dict(document.get("dataInjection") or {}),
            skip=bool(document.get("skip", False)),
            only=bool(document.get("only", False)),
            timeout_ms=document.get("timeout"),
            retries=document.get("retries"),
            document=document,
        )


@dataclass(frozen=True)
class ApiSuite:
    """Validated API suite document."""

    suite: str
    tests: tuple[ApiTestCase, ...]
    tags: tuple[str, ...] = ()
    base_endpoint: str = ""
    setup: ApiSetupCall | None = None
    teardown: ApiSetupCall | None = None
    source_path: Path | None = None

    kind = SuiteKind.API

    @classmethod
    def from_document(
        cls, document: Mapping[str, Any], source_path: Path | None = None
    ) -> ApiSuite:
        setup = document.get("setup")
        teardown = document.get("teardown")
        return cls(
            suite=document["suite"],
            tests=tuple(ApiTestCase.from_document(item) for item in document["tests"]),
            tags=tuple(document.get("tags") or ()),
            base_endpoint=document.get("baseEndpoint") or "",
            setup=ApiSetupCall.from_document(setup) if setup else None,
            teardown=ApiSetupCall.from_document(teardown) if teardown else None,
            source_path=source_path,
        )


@dataclass(frozen=True)
class UiSuite:
    """Validated UI suite document."""

    suite: str
    tests: tuple[UiTestCase, ...]
    tags: tuple[str, ...] = ()
    base_path: str = ""
    setup: UiAction | None = None
    teardown: UiAction | None = None
    source_path: Path | None = None

    kind = SuiteKind.UI

    @classmethod
    def from_document(cls, document: Mapping[str, Any], source_path: Path | None = None) -> UiSuite:
        setup = document.get("setup")
        teardown = document.get("teardown")
        return cls(
            suite=document["suite"],
            tests=tuple(UiTestCase.from_document(item) for item in document["tests"]),
            tags=tuple(document.get("tags") or ()),
            base_path=document.get("basePath") or "",
            setup=UiAction.from_document(setup) if setup else None,
            teardown=UiAction.from_document(teardown) if teardown else None,
            source_path=source_path,
        )
