"""FGCClient: a small synchronous HTTP client with a fixed inspection contract."""

from __future__ import annotations

# Semantic version for package consumers.
__version__ = "1.0.0"

from .client import FGCClient  # noqa: E402
from .errors import (  # noqa: E402
    ErrorCode,
    FGCError,
    InvalidHeaderError,
    MissingURLError,
    TransportError,
    UnsupportedMethodError,
    UsageError,
)

__all__ = [
    "ErrorCode",
    "FGCClient",
    "FGCError",
    "InvalidHeaderError",
    "MissingURLError",
    "TransportError",
    "UnsupportedMethodError",
    "UsageError",
    "__version__",
]
