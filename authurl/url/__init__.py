"""URL canonicalization and transformation module for authurl."""

from .canonicalization import (
    SECURE_SCHEME,
    NormalizedUrl,
    canonicalize_url,
    validate_as_uri,
)
from .errors import InsecureUriError, MalformedUrlError, UrlConfigurationError
from .transform import (
    append_query_string,
    get_path_segments,
    is_absolute_url,
    remove_fragment,
    resolve_absolute_url,
)

__all__ = [
    "SECURE_SCHEME",
    "InsecureUriError",
    "MalformedUrlError",
    "NormalizedUrl",
    "UrlConfigurationError",
    "append_query_string",
    "canonicalize_url",
    "get_path_segments",
    "is_absolute_url",
    "remove_fragment",
    "resolve_absolute_url",
    "validate_as_uri",
]
