"""Configuration loader service."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from dotenv import dotenv_values

from .runtime_settings import (
    AuthSettings,
    AuthStrategy,
    BrowserSettings,
    Configuration,
    EnvironmentSettings,
    ExecutionSettings,
    FeatureSettings,
)

DEFAULT_ENVIRONMENT = "dev"
ENVIRONMENT_FILE_SUFFIXES = (".yaml", ".yml", ".json")
SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(
    config_path: Path | str, *, environ: Mapping[str, str] | None = None
) -> Configuration:
    """Load and validate the configuration.

    `config_path` is either a configuration file or a directory holding one
    file per environment, selected by `TEST_ENV` (default `dev`). A `.env`
    file next to the configuration provides defaults for the process
    environment; `API_BASE_URL`, `UI_BASE_URL`, `TEST_TIMEOUT` and
    `TEST_RETRIES` override the file values.
    """
    requested = Path(config_path)
    variables = _collect_variables(requested, os.environ if environ is None else environ)
    path = _resolve_configuration_file(requested, variables)

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    default_name = variables.get("TEST_ENV") or path.stem
    environment = _parse_environment_section(parsed.get("environment"), default_name, variables)
    execution = _parse_execution_section(parsed.get("execution") or {}, variables)
    auth = _parse_auth_section(parsed.get("auth") or {})
    headers = _parse_string_mapping(parsed.get("headers"), "headers")
    browser = _parse_browser_section(parsed.get("browser") or {})
    features = _parse_features_section(parsed.get("features") or {}, path.parent)

    return Configuration(
        path=path,
        environment=environment,
        execution=execution,
        auth=auth,
        headers=headers,
        browser=browser,
        features=features,
    )


def list_available_environments(config_dir: Path | str) -> tuple[str, ...]:
    directory = Path(config_dir)
    if not directory.is_dir():
        return ()
    return tuple(
        sorted(
            {
                entry.stem
                for entry in directory.iterdir()
                if entry.is_file() and entry.suffix in ENVIRONMENT_FILE_SUFFIXES
            }
        )
    )


def _collect_variables(requested: Path, environ: Mapping[str, str]) -> dict[str, str]:
    env_dir = requested if requested.is_dir() else requested.parent
    dotenv_file = env_dir / ".env"
    variables: dict[str, str] = {}
    if dotenv_file.is_file():
        variables.update(
            {key: value for key, value in dotenv_values(dotenv_file).items() if value is not None}
        )
    variables.update(environ)
    return variables


def _resolve_configuration_file(requested: Path, variables: Mapping[str, str]) -> Path:
    if requested.is_dir():
        env_name = variables.get("TEST_ENV") or DEFAULT_ENVIRONMENT
        for suffix in ENVIRONMENT_FILE_SUFFIXES:
            candidate = requested / f"{env_name}{suffix}"
            if candidate.is_file():
                return candidate
        available = ", ".join(list_available_environments(requested)) or "none"
        raise ConfigurationError(
            f"Environment config '{env_name}' not found in {requested}. "
            f"Available environments: {available}"
        )
    if not requested.exists():
        raise ConfigurationError(f"Configuration file not found: {requested}")
    return requested


def _parse_environment_section(
    value: Any, default_name: str, variables: Mapping[str, str]
) -> EnvironmentSettings:
    section = _require_mapping(value, "environment")
    name = _optional_string(section.get("name"), "environment.name") or default_name
    api_base_url = variables.get("API_BASE_URL") or _optional_string(
        section.get("api_base_url"), "environment.api_base_url"
    )
    ui_base_url = variables.get("UI_BASE_URL") or _optional_string(
        section.get("ui_base_url"), "environment.ui_base_url"
    )
    if not api_base_url and not ui_base_url:
        raise ConfigurationError(
            "environment.api_base_url or environment.ui_base_url must be provided."
        )
    return EnvironmentSettings(
        name=name, api_base_url=api_base_url or "", ui_base_url=ui_base_url or ""
    )


def _parse_execution_section(value: Any, variables: Mapping[str, str]) -> ExecutionSettings:
    section = _require_mapping(value, "execution")
    timeout_raw = _override_int(variables, "TEST_TIMEOUT", section.get("timeout_ms", 30000))
    retries_raw = _override_int(variables, "TEST_RETRIES", section.get("retries", 0))
    return ExecutionSettings(
        timeout_ms=_require_positive_int(timeout_raw, "execution.timeout_ms"),
        retries=_require_non_negative_int(retries_raw, "execution.retries"),
        workers=_require_positive_int(section.get("workers", 4), "execution.workers"),
        action_timeout_ms=_require_positive_int(
            section.get("action_timeout_ms", 15000), "execution.action_timeout_ms"
        ),
        navigation_timeout_ms=_require_positive_int(
            section.get("navigation_timeout_ms", 30000), "execution.navigation_timeout_ms"
        ),
    )


def _parse_auth_section(value: Any) -> AuthSettings:
    section = _require_mapping(value, "auth")
    raw_strategy = section.get("strategy", AuthStrategy.NONE.value)
    try:
        strategy = AuthStrategy(raw_strategy)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in AuthStrategy)
        raise ConfigurationError(
            f"auth.strategy '{raw_strategy}' is not supported; expected one of {allowed}."
        ) from exc
    return AuthSettings(
        strategy=strategy,
        token_endpoint=_optional_string(section.get("token_endpoint"), "auth.token_endpoint"),
        credentials=_parse_string_mapping(section.get("credentials"), "auth.credentials"),
        api_key=_optional_string(section.get("api_key"), "auth.api_key"),
        header_name=_optional_string(section.get("header_name"), "auth.header_name")
        or "X-API-Key",
    )


def _parse_browser_section(value: Any) -> BrowserSettings:
    section = _require_mapping(value, "browser")
    name = _require_non_empty_string(section.get("name", "chromium"), "browser.name").lower()
    if name not in SUPPORTED_BROWSERS:
        raise ConfigurationError(
            f"browser.name must be one of {', '.join(SUPPORTED_BROWSERS)}."
        )
    return BrowserSettings(name=name, headless=bool(section.get("headless", True)))


def _parse_features_section(value: Any, base_path: Path) -> FeatureSettings:
    section = _require_mapping(value, "features")
    snapshot_dir = _require_non_empty_string(
        section.get("snapshot_dir", "snapshots"), "features.snapshot_dir"
    )
    ratio = section.get("max_diff_pixel_ratio", 0.01)
    if isinstance(ratio, bool) or not isinstance(ratio, int | float) or not 0 <= ratio <= 1:
        raise ConfigurationError("features.max_diff_pixel_ratio must be a number between 0 and 1.")
    return FeatureSettings(
        screenshots=bool(section.get("screenshots", True)),
        snapshots=bool(section.get("snapshots", True)),
        snapshot_dir=_resolve_path(base_path, snapshot_dir),
        max_diff_pixel_ratio=float(ratio),
    )


def _parse_string_mapping(value: Any, field_name: str) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"{field_name} must be a mapping.")
    normalized: dict[str, str] = {}
    for key, item in value.items():
        if not isinstance(key, str) or item is None or isinstance(item, Mapping | list):
            raise ConfigurationError(f"{field_name} entries must map names to scalar values.")
        normalized[key] = str(item)
    return normalized


def _override_int(variables: Mapping[str, str], name: str, fallback: Any) -> Any:
    raw = variables.get(name)
    if not raw:
        return fallback
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got '{raw}'.") from exc


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value


def _require_non_negative_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value < 0:
        raise ConfigurationError(f"{field_name} must not be negative.")
    return value
