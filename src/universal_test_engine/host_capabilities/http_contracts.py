"""HTTP capability consumed by suite runners and authentication."""

from __future__ import annotations

from collections.abc import Mapping
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from typing import Any, Protocol
from urllib.parse import urlencode

from universal_test_engine.document_values import display_value, to_jsonable


@dataclass(frozen=True)
class HttpRequest:
    """Fully resolved request handed to the transport."""

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: object = None
    timeout_ms: int | None = None

    def to_diagnostic(self) -> dict[str, Any]:
        return {
            "method": self.method,
            "url": self.url,
            "headers": dict(self.headers),
            "body": to_jsonable(self.body),
        }


@dataclass(frozen=True)
class HttpResponse:
    """Observed response; `body` is parsed JSON when the server declared JSON."""

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: object = None
    elapsed_ms: float = 0.0

    def header(self, name: str) -> str | None:
        """Look up a header value ignoring the name's case."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    def to_diagnostic(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "headers": dict(self.headers),
            "body": to_jsonable(self.body),
            "elapsed": self.elapsed_ms,
        }


class HttpClient(Protocol):
    """Sends one request and reports the observed response."""

    def send(self, request: HttpRequest) -> HttpResponse: ...


class HttpClientFactory(Protocol):
    """Opens an isolated client; the context manager releases it on every exit path."""

    def open(
        self,
        *,
        base_url: str,
        headers: Mapping[str, str],
        timeout_ms: int,
    ) -> AbstractContextManager[HttpClient]: ...


def build_url(base: str, endpoint: str, query: Mapping[str, Any] | None = None) -> str:
    """Join a base and an endpoint with exactly one slash and append the query string."""
    url = f"{base.rstrip('/')}/{endpoint.lstrip('/')}"
    if not query:
        return url
    return f"{url}?{urlencode({key: display_value(value) for key, value in query.items()})}"
