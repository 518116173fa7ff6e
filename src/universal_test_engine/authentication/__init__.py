"""Authentication exports."""

from .auth_strategies import TOKEN_PATHS, AuthenticationError, AuthResult, resolve_auth

__all__ = [
    "TOKEN_PATHS",
    "AuthResult",
    "AuthenticationError",
    "resolve_auth",
]
