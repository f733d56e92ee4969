"""Authorization response extraction from redirect URL fragments and queries.

Identity providers hand the authorization response back either in the URL
fragment (``#code=...`` or ``#/code=...``) or in the query string
(``?code=...`` or ``/?code=...``, possibly followed by a fragment). Every
function here accepts untrusted browser-delivered text and never raises on
malformed input: a missing response is reported as an empty string or an
empty mapping.
"""

from __future__ import annotations

import logging
from urllib.parse import parse_qsl

from authurl.config.settings import (
    RESPONSE_MODE_FRAGMENT,
    RESPONSE_MODE_QUERY,
    VALID_RESPONSE_MODES,
    ResponseMode,
    read_response_mode,
)

AuthorizationResponseParameters = dict[str, str]

SERVER_RESPONSE_KEYS: frozenset[str] = frozenset(
    {
        "access_token",
        "client_info",
        "cloud_instance_host_name",
        "cloud_instance_name",
        "code",
        "error",
        "error_description",
        "error_uri",
        "expires_in",
        "id_token",
        "msgraph_host",
        "scope",
        "session_state",
        "state",
        "token_type",
    },
)
KNOWN_RESPONSE_SHAPE_KEYS: tuple[str, ...] = (
    "code",
    "error_description",
    "error",
    "state",
)

_FRAGMENT_MARKER = "#"
_ROUTED_FRAGMENT_MARKER = "#/"
_QUERY_CODE_MARKER = "?code"
_ROUTED_QUERY_CODE_MARKER = "/?code"

logger = logging.getLogger(__name__)


class ResponseModeError(ValueError):
    """Raised when a caller selects an unknown response source."""

    @classmethod
    def for_invalid_mode(cls, mode: str) -> ResponseModeError:
        """Build error for a response mode outside the supported set."""
        allowed = ", ".join(sorted(VALID_RESPONSE_MODES))
        message = f"Invalid response mode: {mode!r}. Allowed values: {allowed}."
        return cls(message)


def strip_fragment_marker(value: str) -> str:
    """Return the text after ``#/`` or ``#``, or ``""`` when neither occurs."""
    routed_index = value.find(_ROUTED_FRAGMENT_MARKER)
    if routed_index > -1:
        return value[routed_index + len(_ROUTED_FRAGMENT_MARKER) :]

    fragment_index = value.find(_FRAGMENT_MARKER)
    if fragment_index > -1:
        return value[fragment_index + len(_FRAGMENT_MARKER) :]
    return ""


def parse_query_server_response(value: str) -> str:
    """Return the ``code=...`` query response embedded in ``value``.

    ``/?code`` is matched before ``?code`` since every ``/?code`` match also
    matches ``?code`` one character later. A ``#`` following the marker ends
    the response. Returns ``""`` when no query response is present.
    """
    for marker in (_ROUTED_QUERY_CODE_MARKER, _QUERY_CODE_MARKER):
        marker_index = value.find(marker)
        if marker_index < 0:
            continue

        # Keep "code" itself: skip only the punctuation before it.
        start = marker_index + len(marker) - len("code")
        end = value.find(_FRAGMENT_MARKER, start)
        if end < 0:
            return value[start:]
        return value[start:end]
    return ""


def deserialize_response(value: str) -> AuthorizationResponseParameters:
    """Parse ``&``-delimited ``key=value`` pairs into a parameter mapping.

    A leading fragment marker is stripped when present. Pairs with an empty
    key are dropped and the last occurrence of a repeated key wins.
    """
    if _FRAGMENT_MARKER in value:
        value = strip_fragment_marker(value)
    return _parse_pairs(value)


def contains_known_response_shape(value: str) -> bool:
    """Return whether ``value`` deserializes to a recognizable server response."""
    if not value or "=" not in value:
        return False

    parameters = deserialize_response(value)
    return any(parameters.get(key) for key in KNOWN_RESPONSE_SHAPE_KEYS)


def extract_server_response(
    url: str,
    *,
    response_mode: ResponseMode | None = None,
) -> AuthorizationResponseParameters:
    """Extract authorization response parameters from a redirect URL.

    Only the source selected by ``response_mode`` is inspected; fragment and
    query responses are never merged. ``None`` reads ``AUTHURL_RESPONSE_MODE``.
    """
    mode = read_response_mode() if response_mode is None else response_mode

    if mode == RESPONSE_MODE_QUERY:
        raw_response = parse_query_server_response(url)
    elif mode == RESPONSE_MODE_FRAGMENT:
        raw_response = strip_fragment_marker(url)
    else:
        raise ResponseModeError.for_invalid_mode(mode)

    if not raw_response:
        logger.debug("No %s response present in redirect URL", mode)
        return {}
    return _parse_pairs(raw_response)


def _parse_pairs(value: str) -> AuthorizationResponseParameters:
    return {
        key: item_value
        for key, item_value in parse_qsl(value, keep_blank_values=True)
        if key
    }
