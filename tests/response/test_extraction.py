"""Tests for authorization response extraction from redirect URLs."""

from __future__ import annotations

import logging

import pytest

from authurl.response import (
    KNOWN_RESPONSE_SHAPE_KEYS,
    SERVER_RESPONSE_KEYS,
    ResponseModeError,
    contains_known_response_shape,
    deserialize_response,
    extract_server_response,
    parse_query_server_response,
    strip_fragment_marker,
)

SUCCESS_CODE_HASH = "#code=thisIsATestCode&client_info=eyJ1aWQiOiAiMTIzIn0&state=abc"
SUCCESS_ID_TOKEN_HASH = "#id_token=header.payload.sig&client_info=abc&state=xyz"
ERROR_HASH = "#error=error_code&error_description=msal+error+description&state=x"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("#a=1&b=2", "a=1&b=2"),
        ("#/a=1&b=2", "a=1&b=2"),
        ("https://app.example.com/cb#/code=abc", "code=abc"),
        ("https://app.example.com/cb#code=abc", "code=abc"),
        ("https://app.example.com/#first#/second", "second"),
        ("https://app.example.com/cb", ""),
        ("", ""),
    ],
)
def test_strip_fragment_marker(raw: str, expected: str) -> None:
    """Routed fragment markers take priority and absence yields empty text."""
    if strip_fragment_marker(raw) != expected:
        raise AssertionError


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("https://app.example.com/?code=abc&state=1", "code=abc&state=1"),
        ("https://app.example.com/?code=abc&state=1#frag", "code=abc&state=1"),
        ("https://app.example.com/cb?code=abc&state=1", "code=abc&state=1"),
        ("https://app.example.com/cb?code=abc#/route", "code=abc"),
        ("https://app.example.com/#/?code=abc", "code=abc"),
        ("https://app.example.com/cb?state=1", ""),
        ("https://app.example.com/cb#code=abc", ""),
        ("", ""),
    ],
)
def test_parse_query_server_response(raw: str, expected: str) -> None:
    """Each query response shape should yield the text starting at ``code``."""
    if parse_query_server_response(raw) != expected:
        raise AssertionError


def test_parse_query_server_response_prefers_slash_form() -> None:
    """A ``/?code`` match should win over an earlier bare ``?code`` match."""
    raw = "https://app.example.com/cb?code=short&next=/?code=long#frag"

    if parse_query_server_response(raw) != "code=long":
        raise AssertionError


def test_parse_query_server_response_does_not_truncate_slash_form() -> None:
    """The ``/?code`` form should not lose its first character to ``?code``."""
    raw = "https://app.example.com/?code=first#?code=second"

    if parse_query_server_response(raw) != "code=first":
        raise AssertionError


def test_deserialize_response_round_trips_fragment() -> None:
    """A stripped fragment should deserialize into its pairs."""
    result = deserialize_response(strip_fragment_marker("#a=1&b=2"))

    if result != {"a": "1", "b": "2"}:
        raise AssertionError


def test_deserialize_response_strips_marker() -> None:
    """Leading markers are removed before parsing pairs."""
    serialized = "#param1=value1&param2=value2&param3=value3"
    expected = {"param1": "value1", "param2": "value2", "param3": "value3"}

    if deserialize_response(serialized) != expected:
        raise AssertionError
    if deserialize_response("#/code=abc") != {"code": "abc"}:
        raise AssertionError


def test_deserialize_response_drops_empty_keys_and_keeps_empty_values() -> None:
    """Empty keys are discarded while empty values are recorded."""
    if deserialize_response("#=value1") != {}:
        raise AssertionError
    if deserialize_response("#key1=") != {"key1": ""}:
        raise AssertionError


def test_deserialize_response_without_marker_parses_query_text() -> None:
    """Query responses carry no marker and should parse as-is."""
    result = deserialize_response("code=abc&state=xyz")

    if result != {"code": "abc", "state": "xyz"}:
        raise AssertionError


def test_deserialize_response_last_duplicate_wins() -> None:
    """Repeated keys should keep their final value."""
    if deserialize_response("#state=1&state=2") != {"state": "2"}:
        raise AssertionError


def test_deserialize_response_decodes_form_encoding() -> None:
    """Percent escapes and plus signs should decode like a browser form."""
    result = deserialize_response("#error_description=AADSTS50011%3A+bad+uri&flag")

    if result != {"error_description": "AADSTS50011: bad uri", "flag": ""}:
        raise AssertionError


@pytest.mark.parametrize(
    "raw",
    ["#%%%&&==&=&#", "#&&&", "#", "==", "%zz=%zz", "#\x00=\x00", "?" * 1000],
)
def test_deserialize_response_never_raises_on_garbage(raw: str) -> None:
    """Adversarial input should yield a mapping rather than an exception."""
    result = deserialize_response(raw)

    if not isinstance(result, dict):
        raise AssertionError
    if "" in result:
        raise AssertionError


def test_deserialize_response_garbage_keeps_named_pairs() -> None:
    """Only pairs with a non-empty key survive malformed input."""
    if deserialize_response("#%%%&&==&=&#") != {"%%%": "", "#": ""}:
        raise AssertionError


@pytest.mark.parametrize(
    "raw",
    [
        "#code=abc&state=xyz",
        SUCCESS_CODE_HASH,
        SUCCESS_ID_TOKEN_HASH,
        ERROR_HASH,
        "#error_description=only",
        "code=abc",
    ],
)
def test_contains_known_response_shape_accepts_responses(raw: str) -> None:
    """Hashes carrying code, error, description, or state are responses."""
    if not contains_known_response_shape(raw):
        raise AssertionError


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "#justAPage",
        "#foo=bar",
        "#param1=value1&param2=value2&param3=value3",
        "#code=&state=",
    ],
)
def test_contains_known_response_shape_rejects_non_responses(raw: str) -> None:
    """Pages, unknown keys, and empty known values are not responses."""
    if contains_known_response_shape(raw):
        raise AssertionError


def test_extract_server_response_from_fragment() -> None:
    """Fragment mode should read pairs from the URL fragment."""
    url = "https://app.example.com/cb#code=abc&state=xyz&session_state=s1"

    result = extract_server_response(url, response_mode="fragment")

    if result != {"code": "abc", "state": "xyz", "session_state": "s1"}:
        raise AssertionError


def test_extract_server_response_from_query() -> None:
    """Query mode should read pairs from the query and stop at the fragment."""
    url = "https://app.example.com/cb?code=abc&state=xyz#/home"

    result = extract_server_response(url, response_mode="query")

    if result != {"code": "abc", "state": "xyz"}:
        raise AssertionError


def test_extract_server_response_inspects_only_selected_source() -> None:
    """Fragment and query responses should never be merged."""
    url = "https://app.example.com/cb?code=from_query#code=from_fragment"

    if extract_server_response(url, response_mode="query") != {"code": "from_query"}:
        raise AssertionError
    if extract_server_response(url, response_mode="fragment") != {
        "code": "from_fragment",
    }:
        raise AssertionError
    query_only = "https://app.example.com/cb?code=abc"
    if extract_server_response(query_only, response_mode="fragment") != {}:
        raise AssertionError


def test_extract_server_response_uses_configured_mode(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Omitting the mode should fall back to AUTHURL_RESPONSE_MODE."""
    url = "https://app.example.com/cb?code=abc#state=xyz"

    monkeypatch.setenv("AUTHURL_RESPONSE_MODE", "query")
    if extract_server_response(url) != {"code": "abc"}:
        raise AssertionError

    monkeypatch.delenv("AUTHURL_RESPONSE_MODE")
    if extract_server_response(url) != {"state": "xyz"}:
        raise AssertionError


def test_extract_server_response_ignores_log_level_setting(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """An invalid log level must not break extraction with the default mode."""
    monkeypatch.setenv("AUTHURL_LOG_LEVEL", "verbose")
    monkeypatch.delenv("AUTHURL_RESPONSE_MODE", raising=False)

    if extract_server_response("https://app/cb#code=abc") != {"code": "abc"}:
        raise AssertionError


def test_extract_server_response_rejects_unknown_mode() -> None:
    """Unknown response sources are caller configuration faults."""
    with pytest.raises(ResponseModeError, match="Invalid response mode: 'form_post'"):
        _ = extract_server_response("https://app/cb", response_mode="form_post")


def test_extract_server_response_logs_without_url(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Missing responses are logged at debug level without the URL itself."""
    caplog.set_level(logging.DEBUG, logger="authurl.response.extraction")

    result = extract_server_response(
        "https://app.example.com/secret-path",
        response_mode="fragment",
    )

    if result != {}:
        raise AssertionError
    if "No fragment response present" not in caplog.text:
        raise AssertionError
    if "secret-path" in caplog.text:
        raise AssertionError


def test_known_shape_keys_are_recognized_server_keys() -> None:
    """Keys used to detect a response are all recognized response keys."""
    if not set(KNOWN_RESPONSE_SHAPE_KEYS) <= SERVER_RESPONSE_KEYS:
        raise AssertionError
    if "client_info" not in SERVER_RESPONSE_KEYS:
        raise AssertionError
