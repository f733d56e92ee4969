"""Low-level URL parsing primitives shared by canonicalization and transforms."""

from __future__ import annotations

import re
from urllib.parse import SplitResult, urlsplit, urlunsplit

from .errors import MalformedUrlError

WEB_SCHEMES = frozenset({"http", "https"})

_SCHEME_PREFIX_PATTERN = re.compile(r"^([a-z][a-z0-9+.\-]*)://", re.IGNORECASE)
_WEB_SCHEME_PATTERN = re.compile(r"^(https?):", re.IGNORECASE)


def has_scheme_prefix(value: str) -> bool:
    """Return whether ``value`` starts with ``<scheme>://``."""
    return _SCHEME_PREFIX_PATTERN.match(value) is not None


def explicit_scheme(value: str) -> str | None:
    """Return the lower-cased scheme ``value`` names, or ``None`` for bare hosts.

    ``http:`` and ``https:`` count even without ``//``; other schemes must be
    written as ``<scheme>://`` since ``host:port`` looks the same.
    """
    match = _SCHEME_PREFIX_PATTERN.match(value) or _WEB_SCHEME_PATTERN.match(value)
    if match is None:
        return None
    return match.group(1).lower()


def split_absolute_url(url: str) -> SplitResult:
    """Split an absolute URL, raising ``MalformedUrlError`` on invalid input."""
    try:
        split = urlsplit(url)
        # Port parsing is lazy; force it so invalid ports fail here.
        _ = split.port
    except ValueError as exc:
        raise MalformedUrlError.for_uri(url, str(exc)) from exc

    if not split.scheme:
        raise MalformedUrlError.for_uri(url, "missing scheme")
    if split.scheme in WEB_SCHEMES and not split.hostname:
        raise MalformedUrlError.for_uri(url, "missing host")
    if any(character.isspace() for character in split.netloc):
        raise MalformedUrlError.for_uri(url, "invalid host")
    return split


def unsplit_url(split: SplitResult) -> str:
    """Join URL components, rendering an empty web URL path as ``/``."""
    path = split.path
    if not path and split.scheme in WEB_SCHEMES:
        path = "/"
    return urlunsplit((split.scheme, split.netloc, path, split.query, split.fragment))
