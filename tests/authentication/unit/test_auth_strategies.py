"""Authentication strategy tests."""

from __future__ import annotations

import base64

import pytest
from universal_test_engine.authentication import AuthenticationError, resolve_auth
from universal_test_engine.configuration import AuthSettings, AuthStrategy
from universal_test_engine.host_capabilities import (
    HostTransportError,
    HttpRequest,
    HttpResponse,
)


class _FakeHttpClient:  # pylint: disable=too-few-public-methods
    def __init__(self, response: HttpResponse | Exception) -> None:
        self.response = response
        self.requests: list[HttpRequest] = []

    def send(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def _bearer(**overrides) -> AuthSettings:
    values = {
        "strategy": AuthStrategy.BEARER,
        "token_endpoint": "/auth/login",
        "credentials": {"username": "qa", "password": "secret"},
    }
    values.update(overrides)
    return AuthSettings(**values)


def test_bearer_posts_credentials_and_uses_token() -> None:
    client = _FakeHttpClient(HttpResponse(status=200, body={"token": "abc"}))

    result = resolve_auth(_bearer(), "http://api.test/", client)

    assert result.headers == {"Authorization": "Bearer abc"}
    assert result.token == "abc"
    request = client.requests[0]
    assert request.method == "POST"
    assert request.url == "http://api.test/auth/login"
    assert request.body == {"username": "qa", "password": "secret"}


@pytest.mark.parametrize(
    "body",
    [
        {"data": {"token": "abc"}},
        {"access_token": "abc"},
        {"data": {"access_token": "abc"}},
        {"token": "", "access_token": "abc"},
    ],
)
def test_bearer_token_is_found_at_known_paths(body: dict) -> None:
    client = _FakeHttpClient(HttpResponse(200, body=body))

    result = resolve_auth(_bearer(), "http://api.test", client)

    assert result.token == "abc"


def test_bearer_failing_status_is_reported() -> None:
    client = _FakeHttpClient(HttpResponse(status=401, body={"error": "nope"}))

    with pytest.raises(AuthenticationError, match="Auth request failed: 401"):
        resolve_auth(_bearer(), "http://api.test", client)


def test_bearer_without_token_in_body_is_reported() -> None:
    client = _FakeHttpClient(HttpResponse(status=200, body={"jwt": "abc"}))

    with pytest.raises(AuthenticationError, match="Could not extract token"):
        resolve_auth(_bearer(), "http://api.test", client)


def test_bearer_transport_failure_is_wrapped() -> None:
    client = _FakeHttpClient(HostTransportError("connection refused"))

    with pytest.raises(AuthenticationError, match="connection refused"):
        resolve_auth(_bearer(), "http://api.test", client)


def test_bearer_requires_endpoint_and_credentials() -> None:
    client = _FakeHttpClient(HttpResponse(status=200, body={"token": "abc"}))

    with pytest.raises(AuthenticationError, match="requires token_endpoint"):
        resolve_auth(_bearer(token_endpoint=None), "http://api.test", client)
    assert client.requests == []


def test_basic_encodes_username_and_password() -> None:
    settings = AuthSettings(
        strategy=AuthStrategy.BASIC, credentials={"username": "qa", "password": "secret"}
    )

    result = resolve_auth(settings, "http://api.test", _FakeHttpClient(HttpResponse(200)))

    expected = base64.b64encode(b"qa:secret").decode("ascii")
    assert result.headers == {"Authorization": f"Basic {expected}"}


def test_basic_requires_both_credentials() -> None:
    settings = AuthSettings(strategy=AuthStrategy.BASIC, credentials={"username": "qa"})

    with pytest.raises(AuthenticationError, match="username and password"):
        resolve_auth(settings, "http://api.test", _FakeHttpClient(HttpResponse(200)))


def test_api_key_uses_configured_header_name() -> None:
    settings = AuthSettings(strategy=AuthStrategy.API_KEY, api_key="k-1", header_name="X-Key")

    result = resolve_auth(settings, "http://api.test", _FakeHttpClient(HttpResponse(200)))

    assert result.headers == {"X-Key": "k-1"}


def test_api_key_falls_back_to_credentials() -> None:
    settings = AuthSettings(strategy=AuthStrategy.API_KEY, credentials={"apiKey": "k-2"})

    result = resolve_auth(settings, "http://api.test", _FakeHttpClient(HttpResponse(200)))

    assert result.headers == {"X-API-Key": "k-2"}


def test_none_strategy_adds_no_headers() -> None:
    client = _FakeHttpClient(HttpResponse(200))

    result = resolve_auth(AuthSettings(), "http://api.test", client)

    assert dict(result.headers) == {}
    assert client.requests == []
