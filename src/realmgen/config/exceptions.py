"""Custom exceptions for configuration handling."""

from __future__ import annotations

from realmgen.exceptions import RealmgenError


class ConfigError(RealmgenError):
    """Base exception for all configuration-related errors."""


class ApiKeyNotFoundError(ConfigError):
    """Raised when a required API key is not found in environment variables."""

    def __init__(self, env_var: str) -> None:
        self.env_var = env_var
        super().__init__(f"API key environment variable not set: {env_var}")


class InvalidConfigurationValueError(ConfigError):
    """Raised when a configuration value is invalid."""
