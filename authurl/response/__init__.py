"""Authorization response extraction module for authurl."""

from .extraction import (
    KNOWN_RESPONSE_SHAPE_KEYS,
    SERVER_RESPONSE_KEYS,
    AuthorizationResponseParameters,
    ResponseModeError,
    contains_known_response_shape,
    deserialize_response,
    extract_server_response,
    parse_query_server_response,
    strip_fragment_marker,
)

__all__ = [
    "KNOWN_RESPONSE_SHAPE_KEYS",
    "SERVER_RESPONSE_KEYS",
    "AuthorizationResponseParameters",
    "ResponseModeError",
    "contains_known_response_shape",
    "deserialize_response",
    "extract_server_response",
    "parse_query_server_response",
    "strip_fragment_marker",
]
