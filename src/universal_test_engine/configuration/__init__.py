"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, list_available_environments, load_configuration
from .runtime_settings import (
    AuthSettings,
    AuthStrategy,
    BrowserSettings,
    Configuration,
    EnvironmentSettings,
    ExecutionSettings,
    FeatureSettings,
)

__all__ = [
    "AuthSettings",
    "AuthStrategy",
    "BrowserSettings",
    "Configuration",
    "EnvironmentSettings",
    "ExecutionSettings",
    "FeatureSettings",
    "ConfigurationError",
    "list_available_environments",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
