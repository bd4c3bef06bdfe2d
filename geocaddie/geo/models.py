from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class GeoPoint(BaseModel):
    lat: float
    lng: float = Field(validation_alias=AliasChoices("lng", "lon"))

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def as_tuple(self) -> tuple[float, float]:
        return (self.lat, self.lng)


__all__ = ["GeoPoint"]
