"""httpx implementation of the HTTP capability."""

from __future__ import annotations

import json
import time
from collections.abc import Iterator, Mapping
from contextlib import contextmanager

import httpx

from universal_test_engine.document_values import to_jsonable

from .host_errors import HostTimeoutError, HostTransportError
from .http_contracts import HttpRequest, HttpResponse


class HttpxClient:  # pylint: disable=too-few-public-methods
    """Sends requests through an open `httpx.Client`."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def send(self, request: HttpRequest) -> HttpResponse:
        content, headers = _encode_body(request.body, request.headers)
        timeout = request.timeout_ms / 1000 if request.timeout_ms else httpx.USE_CLIENT_DEFAULT
        started = time.perf_counter()
        try:
            response = self._client.request(
                request.method,
                request.url,
                content=content,
                headers=headers,
                timeout=timeout,
            )
        except httpx.TimeoutException as exc:
            raise HostTimeoutError(f"{request.method} {request.url} timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            raise HostTransportError(f"{request.method} {request.url} failed: {exc}") from exc
        elapsed_ms = (time.perf_counter() - started) * 1000
        return HttpResponse(
            status=response.status_code,
            headers={key.lower(): value for key, value in response.headers.items()},
            body=_decode_body(response),
            elapsed_ms=round(elapsed_ms, 3),
        )


class HttpxClientFactory:  # pylint: disable=too-few-public-methods
    """Opens one `httpx.Client` per test case attempt."""

    def __init__(self, *, transport: httpx.BaseTransport | None = None) -> None:
        self._transport = transport

    @contextmanager
    def open(
        self,
        *,
        base_url: str,
        headers: Mapping[str, str],
        timeout_ms: int,
    ) -> Iterator[HttpxClient]:
        with httpx.Client(
            base_url=base_url,
            headers=dict(headers),
            timeout=timeout_ms / 1000,
            transport=self._transport,
        ) as client:
            yield HttpxClient(client)


def _encode_body(
    body: object, headers: Mapping[str, str]
) -> tuple[bytes | str | None, dict[str, str]]:
    merged = dict(headers)
    if body is None:
        return None, merged
    if isinstance(body, bytes | str):
        return body, merged
    if not any(name.lower() == "content-type" for name in merged):
        merged["Content-Type"] = "application/json"
    text = json.dumps(to_jsonable(body), ensure_ascii=False, allow_nan=False)
    return text.encode("utf-8"), merged


def _decode_body(response: httpx.Response) -> object:
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type and response.content:
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text
