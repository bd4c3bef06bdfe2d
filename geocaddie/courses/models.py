from __future__ import annotations

from typing import List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from geocaddie.geo import GeoPoint, centroid


class TeeBox(BaseModel):
    id: str
    name: str
    color: str = "white"
    location: GeoPoint
    par: int = Field(default=4, ge=1)
    stroke_index: Optional[int] = Field(
        default=None,
        ge=1,
        validation_alias=AliasChoices("stroke_index", "strokeIndex"),
        serialization_alias="strokeIndex",
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class GreenGeometry(BaseModel):
    center: Optional[GeoPoint] = None
    boundary: List[GeoPoint] = Field(
        default_factory=list, validation_alias=AliasChoices("boundary", "shape")
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="after")
    def _derive_center(self) -> "GreenGeometry":
        if self.boundary:
            # An authored center is only a fallback once the outline exists.
            object.__setattr__(self, "center", centroid(self.boundary))
        if self.center is None:
            raise ValueError("green needs a center or a boundary")
        return self


class Hole(BaseModel):
    number: int = Field(ge=1)
    par: int = Field(default=4, ge=1)
    tee_boxes: List[TeeBox] = Field(
        default_factory=list,
        validate_default=True,
        validation_alias=AliasChoices("tee_boxes", "teeBoxes"),
        serialization_alias="teeBoxes",
    )
    green: GreenGeometry

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _upgrade_legacy_layout(cls, data: object) -> object:
        # Older layouts carry a bare tee point and a green center point.
        if not isinstance(data, dict):
            return data
        payload = dict(data)
        tee = payload.pop("tee", None)
        if tee is not None and not (payload.get("tee_boxes") or payload.get("teeBoxes")):
            payload["tee_boxes"] = [
                {
                    "id": f"hole-{payload.get('number')}-default",
                    "name": "Default",
                    "location": tee,
                    "par": payload.get("par", 4),
                }
            ]
        green = payload.get("green")
        if isinstance(green, dict) and "center" not in green and "lat" in green:
            payload["green"] = {"center": green}
        elif isinstance(green, GeoPoint):
            payload["green"] = {"center": green}
        return payload

    @field_validator("tee_boxes")
    @classmethod
    def _require_tee(cls, tees: List[TeeBox]) -> List[TeeBox]:
        if not tees:
            raise ValueError("hole needs at least one tee box")
        return tees

    def active_tee(self, tee_id: str | None = None) -> TeeBox:
        if tee_id is not None:
            for tee in self.tee_boxes:
                if tee.id == tee_id:
                    return tee
        return self.tee_boxes[0]

    def par_for(self, tee_id: str | None = None) -> int:
        """Par from the same tee the ball starts on; ``par`` is display only."""
        return self.active_tee(tee_id).par

    @property
    def green_center(self) -> GeoPoint:
        # always set once validated
        return self.green.center  # type: ignore[return-value]


class Course(BaseModel):
    id: str
    name: str
    country: Optional[str] = None
    holes: List[Hole]

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("holes")
    @classmethod
    def _contiguous_holes(cls, holes: List[Hole]) -> List[Hole]:
        if not holes:
            raise ValueError("course needs at least one hole")
        ordered = sorted(holes, key=lambda hole: hole.number)
        numbers = [hole.number for hole in ordered]
        if numbers != list(range(1, len(ordered) + 1)):
            raise ValueError(f"hole numbers must be 1..{len(ordered)}, got {numbers}")
        return ordered

    @property
    def hole_count(self) -> int:
        return len(self.holes)

    def hole(self, number: int) -> Hole | None:
        if 1 <= number <= len(self.holes):
            return self.holes[number - 1]
        return None

    @property
    def total_par(self) -> int:
        return sum(hole.par for hole in self.holes)


__all__ = ["TeeBox", "GreenGeometry", "Hole", "Course"]
