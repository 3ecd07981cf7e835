"""Configuration for Realmgen."""

from realmgen.config.exceptions import (
    ApiKeyNotFoundError,
    ConfigError,
    InvalidConfigurationValueError,
)
from realmgen.config.settings import (
    API_KEY_ENV_VAR,
    DEFAULT_MODEL,
    RealmgenSettings,
    RetryScope,
    get_gemini_api_key,
    load_settings,
)

__all__ = [
    "API_KEY_ENV_VAR",
    "DEFAULT_MODEL",
    "ApiKeyNotFoundError",
    "ConfigError",
    "InvalidConfigurationValueError",
    "RealmgenSettings",
    "RetryScope",
    "get_gemini_api_key",
    "load_settings",
]
