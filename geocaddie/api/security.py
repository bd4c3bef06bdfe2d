"""API key guard for the HTTP surface."""

from __future__ import annotations

from fastapi import Header, HTTPException, Query, status

from geocaddie.config import get_settings


def require_api_key(
    x_api_key: str | None = Header(default=None, alias="x-api-key"),
    api_key_query: str | None = Query(default=None, alias="apiKey"),
) -> str | None:
    """Require a matching API key when ``GEOCADDIE_REQUIRE_API_KEY`` is set.

    Returns the resolved key (header first, then query). The key is a
    credential only; it never becomes a player name.
    """

    candidate = x_api_key or api_key_query

    settings = get_settings()
    if not settings.require_api_key:
        return candidate

    allowed_keys = settings.allowed_api_keys()
    if not allowed_keys or candidate not in allowed_keys:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="invalid api key",
        )

    return candidate


__all__ = ["require_api_key"]
