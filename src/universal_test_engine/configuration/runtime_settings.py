"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class AuthStrategy(str, Enum):
    """Supported ways of obtaining suite-wide auth headers."""

    BEARER = "bearer"
    BASIC = "basic"
    API_KEY = "api-key"
    NONE = "none"


@dataclass(frozen=True)
class EnvironmentSettings:
    """Target environment the suites run against."""

    name: str
    api_base_url: str
    ui_base_url: str


@dataclass(frozen=True)
class ExecutionSettings:
    """Timeouts, retries and parallelism applied to every case."""

    timeout_ms: int = 30000
    retries: int = 0
    workers: int = 4
    action_timeout_ms: int = 15000
    navigation_timeout_ms: int = 30000


@dataclass(frozen=True)
class AuthSettings:
    """Auth strategy settings."""

    strategy: AuthStrategy = AuthStrategy.NONE
    token_endpoint: str | None = None
    credentials: Mapping[str, str] = field(default_factory=dict)
    api_key: str | None = None
    header_name: str = "X-API-Key"


@dataclass(frozen=True)
class BrowserSettings:
    name: str = "chromium"
    headless: bool = True


@dataclass(frozen=True)
class FeatureSettings:
    """Optional diagnostics and visual comparison."""

    screenshots: bool = True
    snapshots: bool = True
    snapshot_dir: Path = Path("snapshots")
    max_diff_pixel_ratio: float = 0.01


@dataclass(frozen=True)
class Configuration:  # pylint: disable=too-many-instance-attributes
    """Top-level configuration aggregate."""

    path: Path
    environment: EnvironmentSettings
    execution: ExecutionSettings
    auth: AuthSettings
    headers: Mapping[str, str]
    browser: BrowserSettings
    features: FeatureSettings
