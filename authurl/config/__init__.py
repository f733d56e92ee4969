"""Configuration module for authurl."""

from .logging import REDACTED_FIELDS, JSONFormatter, configure_logging, init_logging
from .settings import (
    RESPONSE_MODE_FRAGMENT,
    RESPONSE_MODE_QUERY,
    VALID_RESPONSE_MODES,
    AppSettings,
    ResponseMode,
    SettingsValidationError,
    load_settings,
    read_log_level,
    read_response_mode,
)

__all__ = [
    "REDACTED_FIELDS",
    "RESPONSE_MODE_FRAGMENT",
    "RESPONSE_MODE_QUERY",
    "VALID_RESPONSE_MODES",
    "AppSettings",
    "JSONFormatter",
    "ResponseMode",
    "SettingsValidationError",
    "configure_logging",
    "init_logging",
    "load_settings",
    "read_log_level",
    "read_response_mode",
]
