"""Default transport: one blocking request through ``requests``."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

import requests
from requests import Response
from requests import exceptions as requests_exceptions

from .errors import ErrorCode, TransportError, classify_exception
from .headers import wire_lines_to_dict
from .options import RequestOptions

LOGGER = logging.getLogger(__name__)


@dataclass
class TransportResult:
    """Body plus raw header lines, the status line first."""

    body: bytes | str | None = None
    header_lines: list[str] = field(default_factory=list)


Transport = Callable[[str, RequestOptions], TransportResult]


def status_line(response: Response) -> str:
    """Rebuild the status line ``requests`` parsed away."""

    version = getattr(response.raw, "version", None)
    protocol = "HTTP/1.0" if version == 10 else "HTTP/1.1"
    reason = response.reason or ""
    return f"{protocol} {response.status_code} {reason}".rstrip()


def header_lines(response: Response) -> list[str]:
    lines = [status_line(response)]
    lines.extend(f"{key}: {value}" for key, value in response.headers.items())
    return lines


def requests_transport(url: str, options: RequestOptions) -> TransportResult:
    """Perform the request described by ``options``.

    HTTP error statuses come back as normal results when ``ignore_errors`` is
    set; only failures below HTTP raise, as :class:`TransportError`.
    """

    LOGGER.debug(
        "Sending %s %s (protocol %s, full uri %s)",
        options.method,
        url,
        options.protocol_version,
        options.request_fulluri,
    )
    try:
        response = requests.request(
            options.method or "GET",
            url,
            headers=wire_lines_to_dict(options.headers),
            data=options.body,
            timeout=options.timeout,
        )
        if not options.ignore_errors:
            response.raise_for_status()
    except requests_exceptions.RequestException as exc:
        raise TransportError(classify_exception(exc), str(exc)) from exc
    # http.client encodes header values as latin-1 and raises outside requests.
    except (UnicodeError, ValueError) as exc:
        raise TransportError(ErrorCode.UNKNOWN, str(exc)) from exc

    return TransportResult(body=response.content, header_lines=header_lines(response))


__all__ = [
    "Transport",
    "TransportResult",
    "header_lines",
    "requests_transport",
    "status_line",
]
