"""Mutable request options handed to the transport."""

from __future__ import annotations

import json
from dataclasses import dataclass

from .errors import UsageError

ALLOWED_METHODS: tuple[str, ...] = ("post", "get", "put", "delete")
DEFAULT_TIMEOUT: int = 30
DEFAULT_PROTOCOL_VERSION: str = "1.0"


@dataclass
class RequestOptions:
    """Options for one request: method, headers, body and transport flags.

    ``timeout`` stays ``None`` until the caller sets it or the first request
    is prepared, so an explicit value is never replaced by the default.
    """

    method: str | None = None
    timeout: int | None = None
    headers: list[str] | None = None
    body: str | bytes | None = None
    ignore_errors: bool = True
    request_fulluri: bool = True
    protocol_version: str = DEFAULT_PROTOCOL_VERSION

    def prepare(self, method: str, payload: object = None) -> None:
        """Set method, body and timeout for the next request.

        The body is encoded before any field changes, so a payload that
        cannot be serialized leaves the options untouched.
        """

        method = method.upper()
        body: str | bytes | None = None
        if method != "DELETE" and payload is not None:
            if isinstance(payload, (str, bytes)):
                body = payload
            else:
                try:
                    body = json.dumps(payload)
                except (TypeError, ValueError) as exc:
                    raise UsageError(f"Payload is not JSON serializable: {exc}") from exc

        self.method = method
        self.body = body

        if self.timeout is None:
            self.timeout = DEFAULT_TIMEOUT

    def reset(self) -> None:
        """Drop per-request fields; timeout and transport flags survive."""

        self.method = None
        self.body = None
        self.headers = None

    def as_dict(self) -> dict[str, object]:
        return {
            "method": self.method,
            "timeout": self.timeout,
            "header": list(self.headers) if self.headers is not None else None,
            "content": self.body,
            "ignore_errors": self.ignore_errors,
            "request_fulluri": self.request_fulluri,
            "protocol_version": self.protocol_version,
        }


__all__ = [
    "ALLOWED_METHODS",
    "DEFAULT_PROTOCOL_VERSION",
    "DEFAULT_TIMEOUT",
    "RequestOptions",
]
