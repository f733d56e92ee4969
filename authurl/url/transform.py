"""Helpers deriving related URLs from absolute URL strings."""

from __future__ import annotations

from urllib.parse import quote, urljoin

from .errors import MalformedUrlError
from .parsing import has_scheme_prefix, split_absolute_url, unsplit_url

# Characters a browser leaves as-is when assigning a URL query.
_QUERY_SAFE_CHARACTERS = "=&;/?:@!$'()*+,~%"


def append_query_string(url: str, query_string: str) -> str:
    """Return ``url`` with its whole query replaced by ``query_string``."""
    split = split_absolute_url(url)
    query = quote(query_string.removeprefix("?"), safe=_QUERY_SAFE_CHARACTERS)
    return unsplit_url(split._replace(query=query))


def remove_fragment(url: str) -> str:
    """Return ``url`` without its fragment component."""
    split = split_absolute_url(url)
    return unsplit_url(split._replace(fragment=""))


def is_absolute_url(url: str) -> bool:
    """Return whether ``url`` carries its own scheme."""
    return has_scheme_prefix(url)


def resolve_absolute_url(relative_url: str, base_url: str) -> str:
    """Resolve ``relative_url`` against ``base_url``.

    Already absolute URLs are returned unchanged.
    """
    if is_absolute_url(relative_url):
        return relative_url

    base = unsplit_url(split_absolute_url(base_url))
    try:
        return urljoin(base, relative_url)
    except ValueError as exc:
        raise MalformedUrlError.for_uri(relative_url, str(exc)) from exc


def get_path_segments(url: str) -> list[str]:
    """Split the path of ``url`` on ``/``, keeping trailing empty segments."""
    split = split_absolute_url(url)
    path = split.path or "/"
    return path.removeprefix("/").split("/")
