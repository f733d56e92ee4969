"""JSON logging for applications embedding authurl.

Authorization responses carry codes and tokens, so extra fields named after
credential-bearing response parameters are redacted before they are written.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING, cast

from typing_extensions import override

from authurl.config.settings import read_log_level

if TYPE_CHECKING:
    from collections.abc import Mapping

    from authurl.config.settings import LogLevel

REDACTED_VALUE = "[redacted]"
REDACTED_FIELDS = frozenset(
    {
        "access_token",
        "client_info",
        "code",
        "id_token",
        "refresh_token",
        "session_state",
        "state",
    },
)

# Attributes every LogRecord has; anything else arrived through ``extra``.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", None, None)),
) | {"message", "asctime"}
_CORE_FIELDS = frozenset({"timestamp", "level", "message", "logger"})


class JSONFormatter(logging.Formatter):
    """Render records as single-line JSON with credential fields redacted."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }
        log_data.update(_extra_fields(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_data["stack_trace"] = self.formatStack(record.stack_info)

        return json.dumps(log_data, default=str)


def _extra_fields(record: logging.LogRecord) -> dict[str, object]:
    # record.__dict__ contains Any, cast it to avoid BasedPyright issues
    record_dict = cast("dict[str, object]", record.__dict__)
    fields: dict[str, object] = {}
    for key, value in record_dict.items():
        if key in _RECORD_ATTRS or key.startswith("_"):
            continue
        name = f"extra_{key}" if key in _CORE_FIELDS else key
        fields[name] = REDACTED_VALUE if key in REDACTED_FIELDS else value
    return fields


def init_logging(level: LogLevel) -> None:
    """Install the JSON handler on the root logger at ``level``."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Keep pytest capture handlers, replace everything else.
    for h in root_logger.handlers[:]:
        if type(h).__name__ != "LogCaptureHandler":
            root_logger.removeHandler(h)

    root_logger.addHandler(handler)


def configure_logging(environ: Mapping[str, str] | None = None) -> LogLevel:
    """Initialize logging at the level named by ``AUTHURL_LOG_LEVEL``."""
    level = read_log_level(environ)
    init_logging(level)
    return level
