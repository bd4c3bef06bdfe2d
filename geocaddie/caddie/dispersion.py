"""Landing prediction and dispersion ellipses for a single club."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict

from geocaddie.bag import ClubProfile
from geocaddie.config import get_settings
from geocaddie.geo import GeoPoint, destination, ellipse_points
from geocaddie.geo.shapes import DEFAULT_ELLIPSE_SEGMENTS


class PlannedDispersion(BaseModel):
    lateral: float
    depth: float
    rotation: float

    model_config = ConfigDict(frozen=True)


class PlannedInfo(BaseModel):
    target: GeoPoint
    dispersion: PlannedDispersion

    model_config = ConfigDict(frozen=True)


class DispersionEllipse(BaseModel):
    """Full-width ellipse (meters) whose depth axis follows ``rotation``."""

    center: GeoPoint
    width: float
    height: float
    rotation: float

    model_config = ConfigDict(frozen=True)

    def points(self, segments: int = DEFAULT_ELLIPSE_SEGMENTS) -> List[GeoPoint]:
        return ellipse_points(
            self.center, self.width, self.height, self.rotation, segments
        )

    def to_planned(self) -> PlannedInfo:
        return PlannedInfo(
            target=self.center,
            dispersion=PlannedDispersion(
                lateral=self.width, depth=self.height, rotation=self.rotation
            ),
        )


def predicted_landing(
    ball_position: GeoPoint, club: ClubProfile, target_bearing: float
) -> GeoPoint:
    return destination(ball_position, club.carry_distance, target_bearing)


def dispersion_ellipse_for(
    club: ClubProfile,
    landing: GeoPoint,
    target_bearing: float,
    *,
    sigma: float | None = None,
) -> DispersionEllipse:
    """Containment ellipse of ``sigma`` standard deviations on each axis."""
    k = get_settings().dispersion_sigma if sigma is None else sigma
    return DispersionEllipse(
        center=landing,
        width=2.0 * k * club.lateral_error_std_dev,
        height=2.0 * k * club.depth_error_std_dev,
        rotation=target_bearing % 360.0,
    )


__all__ = [
    "PlannedDispersion",
    "PlannedInfo",
    "DispersionEllipse",
    "predicted_landing",
    "dispersion_ellipse_for",
]
