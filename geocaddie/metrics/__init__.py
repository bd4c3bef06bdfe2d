"""Prometheus metrics for the engine and its HTTP surface, served at ``/metrics``."""

from .http import (
    HTTP_REQUEST_LATENCY,
    HTTP_REQUESTS_TOTAL,
    MetricsMiddleware,
    observe_request,
    route_label,
)
from .registry import REGISTRY, metrics_app

__all__ = [
    "REGISTRY",
    "HTTP_REQUESTS_TOTAL",
    "HTTP_REQUEST_LATENCY",
    "MetricsMiddleware",
    "metrics_app",
    "observe_request",
    "route_label",
]
