"""Tests for request header serialization and response header parsing."""

from __future__ import annotations

import pytest

from fgcclient.errors import InvalidHeaderError
from fgcclient.headers import (
    parse_response_headers,
    parse_status_code,
    serialize_headers,
    serialize_headers_from_lines,
    serialize_headers_from_map,
    wire_lines_to_dict,
)


def test_map_and_lines_produce_identical_index() -> None:
    _, from_map = serialize_headers_from_map({"Accept": "application/json", "X-Trace": "abc"})
    _, from_lines = serialize_headers_from_lines(["X-Trace: abc", "Accept:application/json"])

    assert from_map == from_lines
    assert from_map == {"Accept": "application/json", "X-Trace": "abc", "Connection": "close"}


def test_connection_close_is_last_and_overrides_caller_value() -> None:
    lines, index = serialize_headers_from_lines(["connection: keep-alive", "Accept: */*"])

    assert lines == ["Accept: */*", "Connection: close"]
    assert index == {"Accept": "*/*", "Connection": "close"}


def test_line_values_keep_colons_after_the_first() -> None:
    lines, index = serialize_headers_from_lines(["Referer: http://example.com:8080/a"])

    assert index["Referer"] == "http://example.com:8080/a"
    assert lines[0] == "Referer: http://example.com:8080/a"


@pytest.mark.parametrize("empty", [[], {}, ()])
def test_empty_input_only_carries_connection_close(empty) -> None:
    lines, index = serialize_headers(empty)

    assert lines == ["Connection: close"]
    assert index == {"Connection": "close"}


def test_serialize_headers_accepts_a_single_line() -> None:
    _, index = serialize_headers("Accept: text/plain")

    assert index == {"Accept": "text/plain", "Connection": "close"}


def test_line_without_colon_is_rejected() -> None:
    with pytest.raises(InvalidHeaderError):
        serialize_headers_from_lines(["not-a-header"])


def test_wire_lines_to_dict_folds_lines() -> None:
    assert wire_lines_to_dict(["A: 1", "B: x:y", "Connection: close"]) == {
        "A": "1",
        "B": "x:y",
        "Connection": "close",
    }
    assert wire_lines_to_dict(None) == {}


@pytest.mark.parametrize(
    "lines,expected",
    [
        ([], 0),
        (["HTTP/1.0 404 Not Found"], 404),
        (["HTTP/1.1 200 OK", "Content-Length: 123"], 200),
        (["garbage"], 0),
    ],
)
def test_parse_status_code(lines, expected) -> None:
    assert parse_status_code(lines) == expected


def test_parse_response_headers_lowercases_keys_and_keeps_colons() -> None:
    lines = ["HTTP/1.0 200 OK", "Content-Type: application/json", "X-Test: a:b:c"]

    assert parse_response_headers(lines) == {
        "content-type": "application/json",
        "x-test": "a:b:c",
    }


def test_parse_response_headers_last_value_wins() -> None:
    lines = ["HTTP/1.0 200 OK", "Set-Cookie: a=1", "set-cookie: b=2", "Broken"]

    parsed = parse_response_headers(lines)

    assert parsed["set-cookie"] == "b=2"
    assert parsed["broken"] == ""
