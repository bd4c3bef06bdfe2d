from __future__ import annotations

from fastapi import Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

# Private registry so tests and embedders never see the default process collectors.
REGISTRY = CollectorRegistry()


async def metrics_app(_req: Request | None = None) -> Response:
    return Response(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)


__all__ = ["REGISTRY", "metrics_app"]
