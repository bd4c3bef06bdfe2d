"""Per-route request counters for the HTTP surface."""

from __future__ import annotations

import time
from typing import Any, Awaitable, Callable

from prometheus_client import Counter, Histogram

from .registry import REGISTRY

UNMATCHED_ROUTE = "<unmatched>"

HTTP_REQUESTS_TOTAL = Counter(
    "geocaddie_http_requests_total",
    "HTTP requests by route template",
    ["route", "method", "status"],
    registry=REGISTRY,
)
HTTP_REQUEST_LATENCY = Histogram(
    "geocaddie_http_request_latency_seconds",
    "HTTP request latency by route template (seconds)",
    ["route", "method"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
    registry=REGISTRY,
)


def route_label(scope: dict[str, Any]) -> str:
    """Route template for a request, so round ids never become label values."""
    route = scope.get("route")
    template = getattr(route, "path", None)
    return template or UNMATCHED_ROUTE


def observe_request(route: str, method: str, status_code: int, seconds: float) -> None:
    HTTP_REQUEST_LATENCY.labels(route=route, method=method).observe(seconds)
    HTTP_REQUESTS_TOTAL.labels(route=route, method=method, status=str(status_code)).inc()


class MetricsMiddleware:
    def __init__(self, app: Callable[..., Awaitable[Any]]):
        self.app = app

    async def __call__(
        self,
        scope: dict[str, Any],
        receive: Callable[..., Awaitable[Any]],
        send: Callable[..., Awaitable[Any]],
    ) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        started = time.perf_counter()
        status_code = 500

        async def _send(message: dict[str, Any]) -> None:
            nonlocal status_code
            if message.get("type") == "http.response.start":
                status_code = message.get("status", 200)
            await send(message)

        try:
            await self.app(scope, receive, _send)
        finally:
            observe_request(
                route_label(scope),
                scope.get("method", "GET"),
                status_code,
                time.perf_counter() - started,
            )


__all__ = [
    "HTTP_REQUESTS_TOTAL",
    "HTTP_REQUEST_LATENCY",
    "UNMATCHED_ROUTE",
    "MetricsMiddleware",
    "observe_request",
    "route_label",
]
