"""Suite-wide auth header resolution."""

from __future__ import annotations

import base64
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from universal_test_engine.configuration import AuthSettings, AuthStrategy
from universal_test_engine.document_values import deep_get
from universal_test_engine.host_capabilities import HostError, HttpClient, HttpRequest, build_url

LOGGER = logging.getLogger(__name__)

TOKEN_PATHS = ("token", "data.token", "access_token", "data.access_token")


class AuthenticationError(Exception):
    """Raised when auth headers cannot be resolved for the configured strategy."""


@dataclass(frozen=True)
class AuthResult:
    headers: Mapping[str, str] = field(default_factory=dict)
    token: str | None = None


def resolve_auth(settings: AuthSettings, base_url: str, http_client: HttpClient) -> AuthResult:
    """Return the headers every request of the run should carry."""
    strategy = AuthStrategy(settings.strategy)
    if strategy is AuthStrategy.BEARER:
        return _resolve_bearer(settings, base_url, http_client)
    if strategy is AuthStrategy.BASIC:
        return _resolve_basic(settings)
    if strategy is AuthStrategy.API_KEY:
        return _resolve_api_key(settings)
    return AuthResult()


def _resolve_bearer(settings: AuthSettings, base_url: str, http_client: HttpClient) -> AuthResult:
    if not settings.token_endpoint or not settings.credentials:
        raise AuthenticationError("Bearer strategy requires token_endpoint and credentials")
    url = build_url(base_url, settings.token_endpoint)
    try:
        response = http_client.send(
            HttpRequest(method="POST", url=url, body=dict(settings.credentials))
        )
    except HostError as exc:
        raise AuthenticationError(f"Auth request to {url} failed: {exc}") from exc
    if not 200 <= response.status < 300:
        raise AuthenticationError(f"Auth request failed: {response.status}")
    token = _find_token(response.body)
    if token is None:
        raise AuthenticationError("Could not extract token from auth response")
    LOGGER.debug("Bearer token obtained from %s", url)
    return AuthResult(headers={"Authorization": f"Bearer {token}"}, token=token)


def _resolve_basic(settings: AuthSettings) -> AuthResult:
    username = settings.credentials.get("username")
    password = settings.credentials.get("password")
    if not username or not password:
        raise AuthenticationError(
            "Basic strategy requires username and password in credentials"
        )
    encoded = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
    return AuthResult(headers={"Authorization": f"Basic {encoded}"})


def _resolve_api_key(settings: AuthSettings) -> AuthResult:
    key = settings.api_key or settings.credentials.get("apiKey")
    if not key:
        raise AuthenticationError("api-key strategy requires api_key or credentials.apiKey")
    return AuthResult(headers={settings.header_name or "X-API-Key": key})


def _find_token(body: object) -> str | None:
    for path in TOKEN_PATHS:
        candidate = deep_get(body, path)
        if isinstance(candidate, str) and candidate:
            return candidate
    return None
