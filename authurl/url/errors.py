"""Error types raised while canonicalizing and transforming URLs."""

from __future__ import annotations

from typing import ClassVar


class UrlConfigurationError(ValueError):
    """Base class for URL values that cannot be used as configured."""

    error_code: ClassVar[str] = "url_configuration_error"


class InsecureUriError(UrlConfigurationError):
    """Raised when an authority or redirect URI does not use https."""

    error_code: ClassVar[str] = "authority_uri_insecure"

    @classmethod
    def for_uri(cls, uri: str) -> InsecureUriError:
        """Build error for a URI whose scheme is not https."""
        message = f"Authority URIs must use https. Given URI: {uri}"
        return cls(message)


class MalformedUrlError(UrlConfigurationError):
    """Raised when a string cannot be parsed as an absolute URL."""

    error_code: ClassVar[str] = "url_parse_error"

    @classmethod
    def for_uri(cls, uri: str, reason: str) -> MalformedUrlError:
        """Build error for text that does not parse into URL components."""
        message = (
            "URL could not be parsed into appropriate segments: "
            f"{reason}. Given URI: {uri}"
        )
        return cls(message)
