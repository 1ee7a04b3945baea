"""Synchronous single-shot HTTP client facade.

An :class:`FGCClient` owns its request options plus the state of the last
response and the last transport failure. It is not safe to share between
threads: every verb call mutates that state without locking.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import time
from collections.abc import Iterable, Mapping

from .capture import ErrorState, capture_transport_errors
from .config import ClientSettings, load_environment, load_settings
from .errors import MissingURLError, UnsupportedMethodError, UsageError
from .headers import (
    parse_response_headers,
    parse_status_code,
    serialize_headers,
    serialize_headers_from_lines,
    serialize_headers_from_map,
)
from .logging_utils import redact_headers
from .metrics import record_request
from .options import ALLOWED_METHODS, RequestOptions
from .transport import Transport, TransportResult, requests_transport

LOGGER = logging.getLogger(__name__)


class FGCClient:
    """Build, send and inspect one HTTP request at a time.

    Verb methods never raise for transport failures; check
    :meth:`get_error_code` and :meth:`get_http_status_code` afterwards.
    """

    def __init__(self, url: str | None = None, *, transport: Transport | None = None) -> None:
        self.url = url
        self.options = RequestOptions()
        self.error = ErrorState()
        self._transport: Transport = transport or requests_transport
        self._request_headers: dict[str, str] = {}
        self._response_lines: list[str] = []
        self._result: bytes | str | object | None = None

    @classmethod
    def from_settings(
        cls, settings: ClientSettings, *, transport: Transport | None = None
    ) -> "FGCClient":
        client = cls(settings.base_url, transport=transport)
        client.set_timeout(settings.timeout)
        client.set_headers_from_map({"User-Agent": settings.user_agent})
        return client

    @classmethod
    def from_env(cls, *, transport: Transport | None = None) -> "FGCClient":
        """Create a client configured from ``.env`` files and ``FGC_*`` variables."""

        load_environment()
        return cls.from_settings(load_settings(), transport=transport)

    def __enter__(self) -> "FGCClient":
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"FGCClient(url={self.url!r}, status={self.get_http_status_code()})"

    # Configuration

    def set_timeout(self, seconds: int) -> "FGCClient":
        """Set the request timeout, replacing any earlier value.

        Raises :class:`UsageError` when ``seconds`` is not positive.
        """

        if seconds <= 0:
            raise UsageError("Timeout must be a positive number of seconds")
        self.options.timeout = int(seconds)
        return self

    def set_headers(self, headers: Mapping[str, object] | Iterable[str]) -> "FGCClient":
        """Replace the request headers with a mapping or ``"Key: Value"`` lines."""

        return self._store_headers(*serialize_headers(headers))

    def set_headers_from_map(self, headers: Mapping[str, object]) -> "FGCClient":
        return self._store_headers(*serialize_headers_from_map(headers))

    def set_headers_from_lines(self, lines: Iterable[str]) -> "FGCClient":
        return self._store_headers(*serialize_headers_from_lines(lines))

    def _store_headers(self, wire_lines: list[str], index: dict[str, str]) -> "FGCClient":
        self.options.headers = wire_lines
        self._request_headers = index
        return self

    # Verbs

    def get(self, url: str | None = None, payload: object = None) -> "FGCClient":
        return self.request("get", url, payload)

    def post(self, url: str | None = None, payload: object = None) -> "FGCClient":
        return self.request("post", url, payload)

    def put(self, url: str | None = None, payload: object = None) -> "FGCClient":
        return self.request("put", url, payload)

    def delete(self, url: str | None = None, payload: object = None) -> "FGCClient":
        return self.request("delete", url, payload)

    def request(self, method: str, url: str | None = None, payload: object = None) -> "FGCClient":
        """Validate ``method``, resolve the URL and perform one request.

        Raises :class:`UnsupportedMethodError` or :class:`MissingURLError` for
        misuse; transport failures are recorded on the client instead.
        """

        if not isinstance(method, str) or method.lower() not in ALLOWED_METHODS:
            raise UnsupportedMethodError(str(method), ALLOWED_METHODS)
        verb = method.lower()

        target = url or self.url
        if not target:
            raise MissingURLError()

        self.options.prepare(verb, payload)
        self._result = None
        self._response_lines = []
        self.error.clear()

        LOGGER.debug("Dispatching %s %s", self.options.method, target)
        if self._request_headers:
            LOGGER.debug("Request headers: %s", redact_headers(self._request_headers))

        started = time.perf_counter()
        with capture_transport_errors(self.error):
            outcome: TransportResult = self._transport(target, self.options)
            self._result = outcome.body
            self._response_lines = list(outcome.header_lines)
        duration = time.perf_counter() - started

        if self.error.failed:
            LOGGER.warning(
                "Transport error %s for %s %s: %s",
                self.error.code,
                self.options.method,
                target,
                self.error.message,
            )
            record_request(self.options.method, "transport_error", duration)
        else:
            LOGGER.debug(
                "%s %s completed with status %s in %.3fs",
                self.options.method,
                target,
                self.get_http_status_code(),
                duration,
            )
            record_request(self.options.method, "completed", duration)
        return self

    # Accessors

    def get_http_status_code(self) -> int:
        return parse_status_code(self._response_lines)

    def get_raw_response(self) -> bytes | str | object | None:
        return self._result

    def get_parsed_response(self) -> dict | list | None:
        """Decode the last body as JSON, or ``None`` when it cannot be decoded."""

        raw = self._result
        if not raw:
            return None
        if isinstance(raw, (str, bytes, bytearray)):
            try:
                decoded = json.loads(raw)
            except ValueError:
                return None
            return decoded if isinstance(decoded, (dict, list)) else None
        if isinstance(raw, Mapping):
            return dict(raw)
        if dataclasses.is_dataclass(raw) and not isinstance(raw, type):
            return dataclasses.asdict(raw)
        if hasattr(raw, "__dict__"):
            return dict(vars(raw))
        return None

    def get_error_code(self) -> int | None:
        return self.error.code

    def get_error_message(self) -> str | None:
        return self.error.message

    def get_response_headers(self) -> dict[str, str]:
        return parse_response_headers(self._response_lines)

    def get_request_headers(self) -> dict[str, str]:
        return dict(self._request_headers)

    def close(self) -> None:
        """Forget the last request; URL and timeout are kept."""

        self._result = None
        self._response_lines = []
        self._request_headers = {}
        self.error.clear()
        self.options.reset()


__all__ = ["FGCClient"]
