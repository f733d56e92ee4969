"""Typed library settings loaded from static environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

LogLevel = str
ResponseMode = str

ENV_LOG_LEVEL = "AUTHURL_LOG_LEVEL"
ENV_RESPONSE_MODE = "AUTHURL_RESPONSE_MODE"

RESPONSE_MODE_FRAGMENT: ResponseMode = "fragment"
RESPONSE_MODE_QUERY: ResponseMode = "query"

DEFAULT_LOG_LEVEL: LogLevel = "INFO"
DEFAULT_RESPONSE_MODE: ResponseMode = RESPONSE_MODE_FRAGMENT

VALID_LOG_LEVELS: frozenset[LogLevel] = frozenset(
    {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"},
)
VALID_RESPONSE_MODES: frozenset[ResponseMode] = frozenset(
    {RESPONSE_MODE_FRAGMENT, RESPONSE_MODE_QUERY},
)


class SettingsValidationError(ValueError):
    """Raised when static settings env vars contain invalid values."""

    @classmethod
    def for_invalid_choice(
        cls,
        env_var: str,
        value: str,
        allowed_values: str,
    ) -> SettingsValidationError:
        """Build error for enum-like env vars with fixed allowlists."""
        message = f"Invalid {env_var}: {value!r}. Allowed values: {allowed_values}."
        return cls(message)


@dataclass(frozen=True, slots=True)
class AppSettings:
    """Resolved static configuration values."""

    log_level: LogLevel
    response_mode: ResponseMode


def load_settings(environ: Mapping[str, str] | None = None) -> AppSettings:
    """Load and validate static settings from process environment."""
    env = os.environ if environ is None else environ

    return AppSettings(
        log_level=read_log_level(env),
        response_mode=read_response_mode(env),
    )


def read_log_level(environ: Mapping[str, str] | None = None) -> LogLevel:
    """Read only the log level, leaving other settings unvalidated."""
    env = os.environ if environ is None else environ
    raw = env.get(ENV_LOG_LEVEL)
    if raw is None:
        return DEFAULT_LOG_LEVEL
    value = raw.strip().upper()
    if value in VALID_LOG_LEVELS:
        return value
    allowed = ", ".join(sorted(VALID_LOG_LEVELS))
    raise SettingsValidationError.for_invalid_choice(ENV_LOG_LEVEL, raw, allowed)


def read_response_mode(environ: Mapping[str, str] | None = None) -> ResponseMode:
    """Read only the default response mode, leaving other settings unvalidated."""
    env = os.environ if environ is None else environ
    raw = env.get(ENV_RESPONSE_MODE)
    if raw is None:
        return DEFAULT_RESPONSE_MODE
    value = raw.strip().lower()
    if value in VALID_RESPONSE_MODES:
        return value
    allowed = ", ".join(sorted(VALID_RESPONSE_MODES))
    raise SettingsValidationError.for_invalid_choice(ENV_RESPONSE_MODE, raw, allowed)
