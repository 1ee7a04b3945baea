"""Exception hierarchy and transport error codes for FGCClient."""

from __future__ import annotations

import http.client
import socket
from collections.abc import Iterator
from enum import IntEnum

from requests import exceptions as requests_exceptions
from urllib3 import exceptions as urllib3_exceptions


class ErrorCode(IntEnum):
    """Transport failure codes, numbered after libcurl's ``CURLE_*`` values."""

    UNKNOWN = -1
    UNSUPPORTED_PROTOCOL = 1
    URL_MALFORMAT = 3
    COULDNT_RESOLVE_HOST = 6
    COULDNT_CONNECT = 7
    WEIRD_SERVER_REPLY = 8
    OPERATION_TIMEDOUT = 28
    SSL_CONNECT_ERROR = 35
    TOO_MANY_REDIRECTS = 47
    GOT_NOTHING = 52
    RECV_ERROR = 56


class FGCError(Exception):
    """Base class for all FGCClient errors."""


class UsageError(FGCError, ValueError):
    """Raised when the client is called incorrectly."""


class UnsupportedMethodError(UsageError):
    """Raised for a verb outside the allowed set."""

    def __init__(self, method: str, allowed: tuple[str, ...]) -> None:
        super().__init__(
            f"HTTP method must be one of: {list(allowed)}; received {method!r}"
        )
        self.method = method
        self.allowed = allowed


class MissingURLError(UsageError):
    """Raised when neither the call nor the constructor supplies a URL."""

    def __init__(self) -> None:
        super().__init__("URL must be passed either in constructor or in the method call")


class InvalidHeaderError(UsageError):
    """Raised for a raw header line that has no ``Key: Value`` separator."""


class TransportError(FGCError):
    """Failure below the HTTP layer: DNS, connect, timeout, malformed reply."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = int(code)
        self.message = message

    def __repr__(self) -> str:
        return f"TransportError(code={self.code}, message={self.message!r})"


def _causes(exc: BaseException) -> Iterator[BaseException]:
    """Walk an exception and everything it wraps, depth first."""

    seen: set[int] = set()
    stack: list[BaseException] = [exc]
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        for linked in (
            current.__cause__,
            current.__context__,
            getattr(current, "reason", None),
        ):
            if isinstance(linked, BaseException):
                stack.append(linked)
        stack.extend(arg for arg in current.args if isinstance(arg, BaseException))


def classify_exception(exc: BaseException) -> ErrorCode:
    """Map a ``requests``/``urllib3``/socket failure onto :class:`ErrorCode`."""

    if isinstance(exc, TransportError):
        try:
            return ErrorCode(exc.code)
        except ValueError:
            return ErrorCode.UNKNOWN
    # ConnectTimeout is also a ConnectionError and SSLError is one too.
    if isinstance(exc, (requests_exceptions.Timeout, socket.timeout, TimeoutError)):
        return ErrorCode.OPERATION_TIMEDOUT
    if isinstance(exc, requests_exceptions.SSLError):
        return ErrorCode.SSL_CONNECT_ERROR
    if isinstance(exc, requests_exceptions.TooManyRedirects):
        return ErrorCode.TOO_MANY_REDIRECTS
    if isinstance(exc, requests_exceptions.InvalidSchema):
        return ErrorCode.UNSUPPORTED_PROTOCOL
    if isinstance(exc, (requests_exceptions.MissingSchema, requests_exceptions.InvalidURL)):
        return ErrorCode.URL_MALFORMAT
    if isinstance(
        exc,
        (requests_exceptions.ChunkedEncodingError, requests_exceptions.ContentDecodingError),
    ):
        return ErrorCode.RECV_ERROR
    # Every requests exception is an OSError, so only bare socket errors
    # fall through to the connection branch.
    if isinstance(exc, requests_exceptions.ConnectionError) or (
        isinstance(exc, OSError)
        and not isinstance(exc, requests_exceptions.RequestException)
    ):
        for cause in _causes(exc):
            if isinstance(cause, (socket.gaierror, urllib3_exceptions.NameResolutionError)):
                return ErrorCode.COULDNT_RESOLVE_HOST
            if isinstance(cause, (socket.timeout, TimeoutError)):
                return ErrorCode.OPERATION_TIMEDOUT
        for cause in _causes(exc):
            if isinstance(cause, urllib3_exceptions.ProtocolError):
                return ErrorCode.GOT_NOTHING
        return ErrorCode.COULDNT_CONNECT
    if isinstance(exc, (urllib3_exceptions.HTTPError, http.client.HTTPException)):
        return ErrorCode.WEIRD_SERVER_REPLY
    return ErrorCode.UNKNOWN


__all__ = [
    "ErrorCode",
    "FGCError",
    "InvalidHeaderError",
    "MissingURLError",
    "TransportError",
    "UnsupportedMethodError",
    "UsageError",
    "classify_exception",
]
