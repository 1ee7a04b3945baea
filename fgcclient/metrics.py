"""Prometheus metrics for FGCClient requests."""

from __future__ import annotations

import logging

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

LOGGER = logging.getLogger(__name__)

REGISTRY = CollectorRegistry()

REQUESTS_TOTAL = Counter(
    "fgc_requests_total",
    "Number of FGCClient requests grouped by method and outcome.",
    labelnames=["method", "outcome"],
    registry=REGISTRY,
)
REQUEST_DURATION = Histogram(
    "fgc_request_duration_seconds",
    "Histogram of FGCClient request durations in seconds.",
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30, 60),
    registry=REGISTRY,
)


def record_request(method: str, outcome: str, duration: float) -> None:
    """Count one finished request and observe its duration."""

    LOGGER.debug(
        "metrics.request",
        extra={"event": "request.finished", "method": method, "outcome": outcome, "duration": duration},
    )
    REQUESTS_TOTAL.labels(method=method, outcome=outcome).inc()
    REQUEST_DURATION.observe(duration)


def metrics_payload() -> tuple[bytes, str]:
    """Return the Prometheus exposition payload and its content type."""

    return generate_latest(REGISTRY), CONTENT_TYPE_LATEST


__all__ = ["REGISTRY", "metrics_payload", "record_request"]
