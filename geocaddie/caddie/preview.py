"""Pull-based shot preview queried on demand by the presentation layer."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, computed_field

from geocaddie.bag import ClubProfile
from geocaddie.config import get_settings
from geocaddie.courses import Course, Hole
from geocaddie.geo import (
    GeoPoint,
    bearing,
    distance,
    dynamic_green_edges,
    wind_adjusted_shot,
)
from geocaddie.metrics.engine_metrics import observe_preview_latency

from .dispersion import DispersionEllipse, dispersion_ellipse_for, predicted_landing
from .strategy import LayupPlan, StrategyAdvice, layup_strategy, strategy_recommendation

if TYPE_CHECKING:
    from geocaddie.rounds.models import GameState


class Wind(BaseModel):
    speed: float = Field(default=0.0, ge=0)
    direction: float = 0.0  # meteorological degrees, wind blowing FROM

    model_config = ConfigDict(frozen=True)


class ShotPreview(BaseModel):
    ball: GeoPoint
    club: str
    target_bearing: float = Field(serialization_alias="targetBearing")
    landing: GeoPoint
    carry: float
    ellipse: DispersionEllipse
    distance_to_green: float = Field(serialization_alias="distanceToGreen")
    leaves: float
    strategy: StrategyAdvice
    layup: Optional[LayupPlan] = None

    model_config = ConfigDict(frozen=True)


class Measurement(BaseModel):
    to_target: float = Field(serialization_alias="toTarget")
    target_to_green: float = Field(serialization_alias="targetToGreen")

    model_config = ConfigDict(frozen=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> float:
        return self.to_target + self.target_to_green


class GreenDistances(BaseModel):
    front: float
    center: float
    back: float

    model_config = ConfigDict(frozen=True)


def compute_shot_preview(
    state: "GameState",
    club: ClubProfile,
    target_bearing: float | None = None,
    *,
    course: Course,
    bag: Sequence[ClubProfile],
    wind: Wind | None = None,
    use_yards: bool | None = None,
) -> ShotPreview:
    """Predicted landing, dispersion and strategy for ``club`` from the ball.

    ``target_bearing`` defaults to the line from the ball to the green center.
    Nothing on ``state`` is modified.
    """
    start = time.perf_counter()
    settings = get_settings()
    hole = course.holes[state.current_hole_index]
    ball = state.current_ball_position
    green = hole.green_center
    line = bearing(ball, green) if target_bearing is None else target_bearing % 360.0

    carry = club.carry_distance
    flight_line = line
    if wind is not None and wind.speed > 0:
        adjusted = wind_adjusted_shot(
            ball,
            club.carry_distance,
            line,
            wind.speed,
            wind.direction,
            head_coefficient=settings.wind_head_coefficient,
            cross_coefficient=settings.wind_cross_coefficient,
        )
        landing = adjusted.destination
        carry = adjusted.effective_distance
        flight_line = (line + adjusted.bearing_shift) % 360.0
    else:
        landing = predicted_landing(ball, club, line)

    to_green = distance(ball, green)
    shot_number = state.current_shot_number
    preview = ShotPreview(
        ball=ball,
        club=club.name,
        target_bearing=line,
        landing=landing,
        carry=carry,
        ellipse=dispersion_ellipse_for(club, landing, flight_line),
        distance_to_green=to_green,
        leaves=distance(landing, green),
        strategy=strategy_recommendation(
            to_green,
            bag,
            shot_number,
            use_yards=settings.use_yards if use_yards is None else use_yards,
        ),
        layup=layup_strategy(to_green, bag, shot_number),
    )
    observe_preview_latency((time.perf_counter() - start) * 1000.0)
    return preview


def measure(ball: GeoPoint, target: GeoPoint, green_center: GeoPoint) -> Measurement:
    """Two-leg measurement: ball to an arbitrary target, then on to the green."""
    return Measurement(
        to_target=distance(ball, target), target_to_green=distance(target, green_center)
    )


def green_distances(player: GeoPoint, hole: Hole) -> GreenDistances:
    edges = dynamic_green_edges(player, hole.green_center, hole.green.boundary)
    return GreenDistances(
        front=distance(player, edges.front),
        center=distance(player, hole.green_center),
        back=distance(player, edges.back),
    )


__all__ = [
    "Wind",
    "ShotPreview",
    "Measurement",
    "GreenDistances",
    "compute_shot_preview",
    "measure",
    "green_distances",
]
