"""Scoped capture of transport failures into error state."""

from __future__ import annotations

import contextlib
import logging
import warnings
from collections.abc import Iterator
from dataclasses import dataclass

from urllib3 import exceptions as urllib3_exceptions

from .errors import ErrorCode, TransportError, classify_exception

LOGGER = logging.getLogger(__name__)

# Warning categories treated as transport failures rather than noise.
CAPTURED_WARNINGS: tuple[type[Warning], ...] = (
    RuntimeWarning,
    urllib3_exceptions.HTTPWarning,
)


@dataclass
class ErrorState:
    """Last transport failure seen by a client."""

    code: int | None = None
    message: str | None = None

    def record(self, code: int, message: str) -> None:
        self.code = int(code)
        self.message = message

    def clear(self) -> None:
        self.code = None
        self.message = None

    @property
    def failed(self) -> bool:
        return self.code is not None


@contextlib.contextmanager
def capture_transport_errors(state: ErrorState) -> Iterator[ErrorState]:
    """Run a transport call, turning its failures into ``state`` updates.

    Transport exceptions are swallowed and recorded. Warnings in
    :data:`CAPTURED_WARNINGS` are recorded too; any other warning is
    re-emitted unchanged. The latest interception overwrites earlier ones,
    and an exception always ends the call, so it wins over prior warnings.
    """

    failure: BaseException | None = None
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            yield state
        # requests exceptions are OSErrors as well.
        except (TransportError, OSError) as exc:
            failure = exc

    for entry in caught:
        if issubclass(entry.category, CAPTURED_WARNINGS):
            LOGGER.debug("Captured %s during transport call: %s", entry.category.__name__, entry.message)
            state.record(ErrorCode.UNKNOWN, str(entry.message))
        else:
            warnings.warn_explicit(entry.message, entry.category, entry.filename, entry.lineno)

    if isinstance(failure, TransportError):
        state.record(failure.code, failure.message)
    elif failure is not None:
        state.record(classify_exception(failure), str(failure))


__all__ = ["CAPTURED_WARNINGS", "ErrorState", "capture_transport_errors"]
