"""Authority URI canonicalization and https enforcement."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from typing_extensions import override
from urllib.parse import urlunsplit

from .errors import InsecureUriError
from .parsing import explicit_scheme, split_absolute_url

if TYPE_CHECKING:
    from urllib.parse import SplitResult

SECURE_SCHEME = "https"

_DEFAULT_SCHEME_PREFIX = "https://"
_DEFAULT_PORT_BY_SCHEME = {"http": 80, "https": 443}

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NormalizedUrl:
    """Canonical form of an authority or redirect URI."""

    scheme: str
    host: str
    path: str
    query: str = ""
    fragment: str = ""

    @property
    def path_segments(self) -> tuple[str, ...]:
        """Non-empty path segments in order."""
        return tuple(segment for segment in self.path.split("/") if segment)

    @property
    def href(self) -> str:
        """Textual URL form."""
        return urlunsplit(
            (self.scheme, self.host, self.path, self.query, self.fragment),
        )

    @override
    def __str__(self) -> str:
        return self.href


def canonicalize_url(url: str) -> NormalizedUrl:
    """Return lower-cased https form of ``url`` with a trailing path separator.

    Text naming no scheme is treated as a bare host and prefixed with
    ``https://``. Raises ``InsecureUriError`` for any explicit scheme other than
    https, checked before parsing, and ``MalformedUrlError`` for text that does
    not parse into an absolute URL with a host.
    """
    candidate = url.strip().lower()
    scheme = explicit_scheme(candidate)
    if scheme is None:
        scheme = SECURE_SCHEME
        candidate = f"{_DEFAULT_SCHEME_PREFIX}{candidate}"
    _require_secure_scheme(scheme=scheme, uri=candidate)

    split = split_absolute_url(candidate)

    canonical = NormalizedUrl(
        scheme=split.scheme,
        host=_canonicalize_host(split),
        path=_canonicalize_path(split.path),
        query=split.query,
        fragment=split.fragment,
    )
    logger.debug("Canonicalized authority URL for host %s", canonical.host)
    return canonical


def validate_as_uri(url: NormalizedUrl) -> None:
    """Raise ``InsecureUriError`` unless ``url`` uses the https scheme."""
    _require_secure_scheme(scheme=url.scheme, uri=url.href)


def _require_secure_scheme(*, scheme: str, uri: str) -> None:
    if scheme != SECURE_SCHEME:
        raise InsecureUriError.for_uri(uri)


def _canonicalize_host(split: SplitResult) -> str:
    hostname = split.hostname or ""
    if ":" in hostname:
        hostname = f"[{hostname}]"

    userinfo = ""
    if split.username is not None:
        userinfo = split.username
        if split.password is not None:
            userinfo = f"{userinfo}:{split.password}"
        userinfo = f"{userinfo}@"

    port = split.port
    if port is None or port == _DEFAULT_PORT_BY_SCHEME.get(split.scheme):
        return f"{userinfo}{hostname}"
    return f"{userinfo}{hostname}:{port}"


def _canonicalize_path(path: str) -> str:
    normalized_path = _remove_dot_segments(path or "/")
    if normalized_path.endswith("/"):
        return normalized_path
    return f"{normalized_path}/"


def _remove_dot_segments(path: str) -> str:
    """Resolve dot segments without folding ``//`` the way ``normpath`` does."""
    raw_segments = path.split("/")[1:]
    segments: list[str] = []
    for segment in raw_segments:
        if segment == ".":
            continue
        if segment == "..":
            if segments:
                _ = segments.pop()
            continue
        segments.append(segment)

    # A trailing dot segment still names a directory.
    if raw_segments and raw_segments[-1] in {".", ".."}:
        segments.append("")
    return "/" + "/".join(segments)
