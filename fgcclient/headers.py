"""Request header serialization and response header parsing."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence

from .errors import InvalidHeaderError

CONNECTION_HEADER = "Connection"
CONNECTION_VALUE = "close"

STATUS_CODE_PATTERN = re.compile(r"\d{3}")

HeaderPairs = Iterable[tuple[str, object]]
SerializedHeaders = tuple[list[str], dict[str, str]]


def _split_line(line: str) -> tuple[str, str]:
    key, separator, value = line.partition(":")
    if not separator:
        raise InvalidHeaderError(f"Header line must look like 'Key: Value'; received {line!r}")
    return key, value


def _serialize(pairs: HeaderPairs) -> SerializedHeaders:
    wire_lines: list[str] = []
    index: dict[str, str] = {}
    for key, value in pairs:
        key = str(key).strip()
        value = str(value).strip()
        # Connection is always forced to close below.
        if key.lower() == CONNECTION_HEADER.lower():
            continue
        index[key] = value
        wire_lines.append(f"{key}: {value}")

    wire_lines.append(f"{CONNECTION_HEADER}: {CONNECTION_VALUE}")
    index[CONNECTION_HEADER] = CONNECTION_VALUE
    return wire_lines, index


def serialize_headers_from_map(headers: Mapping[str, object]) -> SerializedHeaders:
    """Serialize a key/value mapping into wire lines and a trimmed index."""

    return _serialize(headers.items())


def serialize_headers_from_lines(lines: Iterable[str]) -> SerializedHeaders:
    """Serialize raw ``"Key: Value"`` strings, splitting on the first colon."""

    return _serialize(_split_line(line) for line in lines)


def serialize_headers(headers: Mapping[str, object] | Iterable[str]) -> SerializedHeaders:
    """Serialize either header shape; anything that is not a mapping is read as lines."""

    if isinstance(headers, Mapping):
        return serialize_headers_from_map(headers)
    if isinstance(headers, str):
        return serialize_headers_from_lines([headers])
    return serialize_headers_from_lines(headers)


def wire_lines_to_dict(lines: Iterable[str] | None) -> dict[str, str]:
    """Fold wire lines into the mapping shape ``requests`` expects."""

    folded: dict[str, str] = {}
    for line in lines or ():
        key, value = _split_line(line)
        folded[key.strip()] = value.strip()
    return folded


def parse_status_code(lines: Sequence[str]) -> int:
    """Return the first three digit run of the status line, or 0."""

    if not lines:
        return 0
    match = STATUS_CODE_PATTERN.search(lines[0])
    if match is None:
        return 0
    return int(match.group(0))


def parse_response_headers(lines: Sequence[str]) -> dict[str, str]:
    """Parse response header lines after the status line.

    Keys are lower-cased; values keep any embedded colons. Repeated headers
    keep the last value seen.
    """

    parsed: dict[str, str] = {}
    for line in lines[1:]:
        key, _, value = line.partition(":")
        parsed[key.strip().lower()] = value.strip()
    return parsed


__all__ = [
    "CONNECTION_HEADER",
    "CONNECTION_VALUE",
    "parse_response_headers",
    "parse_status_code",
    "serialize_headers",
    "serialize_headers_from_lines",
    "serialize_headers_from_map",
    "wire_lines_to_dict",
]
