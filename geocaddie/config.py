"""Configuration helpers for engine tuning constants."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class _Settings(BaseSettings):
    # 1.645 sigma on each axis is the two-sided 90% band of a normal distribution.
    dispersion_sigma: float = Field(default=1.645, gt=0)
    wind_head_coefficient: float = Field(default=0.01, ge=0)
    wind_cross_coefficient: float = Field(default=0.005, ge=0)
    layup_tolerance_m: float = Field(default=5.0, ge=0)
    use_yards: bool = False
    require_api_key: bool = False
    api_keys: str = ""
    courses_dir: str | None = None
    build_version: str | None = None
    git_sha: str = "unknown"

    model_config = SettingsConfigDict(
        env_prefix="GEOCADDIE_", env_file=".env", extra="ignore"
    )

    def allowed_api_keys(self) -> set[str]:
        return {key.strip() for key in self.api_keys.split(",") if key.strip()}


@lru_cache(maxsize=1)
def get_settings() -> _Settings:
    """Return cached engine settings."""

    return _Settings()


def reset_settings_cache() -> None:
    """Clear cached settings (primarily for tests)."""

    get_settings.cache_clear()


__all__ = ["get_settings", "reset_settings_cache"]
