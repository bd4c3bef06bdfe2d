"""Point-to-point math on a spherical earth.

All functions are pure and never raise on degenerate input: identical points,
zero distances and polar latitudes produce defined (if arbitrary) values
instead of NaN.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from .models import GeoPoint

EARTH_RADIUS_M = 6_378_137.0
METERS_TO_YARDS = 1.09361

# First-order wind model: tunable constants, not derived physics.
HEADWIND_COEFFICIENT = 0.01  # fraction of carry lost per unit of headwind
CROSSWIND_COEFFICIENT = 0.005  # fraction of carry drifted per unit of crosswind


@dataclass(frozen=True)
class WindAdjustedShot:
    destination: GeoPoint
    effective_distance: float
    headwind: float
    crosswind: float
    bearing_shift: float


def _normalize_bearing(value: float) -> float:
    bearing = value % 360.0
    # -1e-15 % 360 rounds to 360.0
    return 0.0 if bearing >= 360.0 else bearing


def _normalize_lng(value: float) -> float:
    return (value + 540.0) % 360.0 - 180.0


def distance(p1: GeoPoint, p2: GeoPoint) -> float:
    """Haversine great-circle distance in meters."""
    lat1 = math.radians(p1.lat)
    lat2 = math.radians(p2.lat)
    dlat = lat2 - lat1
    dlng = math.radians(p2.lng - p1.lng)

    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    )
    h = min(1.0, max(0.0, h))
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_M * c


def bearing(start: GeoPoint, end: GeoPoint) -> float:
    """Initial great-circle bearing in degrees, in [0, 360)."""
    lat1 = math.radians(start.lat)
    lat2 = math.radians(end.lat)
    dlng = math.radians(end.lng - start.lng)

    y = math.sin(dlng) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(
        dlng
    )
    if x == 0.0 and y == 0.0:
        return 0.0
    return _normalize_bearing(math.degrees(math.atan2(y, x)))


def destination(start: GeoPoint, distance_m: float, bearing_deg: float) -> GeoPoint:
    """Solve the direct problem: travel ``distance_m`` from ``start`` on ``bearing_deg``."""
    lat1 = math.radians(start.lat)
    lng1 = math.radians(start.lng)
    theta = math.radians(bearing_deg)
    delta = distance_m / EARTH_RADIUS_M

    sin_lat2 = math.sin(lat1) * math.cos(delta) + math.cos(lat1) * math.sin(
        delta
    ) * math.cos(theta)
    lat2 = math.asin(min(1.0, max(-1.0, sin_lat2)))
    lng2 = lng1 + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(lat1),
        math.cos(delta) - math.sin(lat1) * math.sin(lat2),
    )
    return GeoPoint(lat=math.degrees(lat2), lng=_normalize_lng(math.degrees(lng2)))


def wind_components(
    wind_speed: float, wind_direction: float, shot_bearing: float
) -> tuple[float, float]:
    """Return (headwind, crosswind) for a wind blowing FROM ``wind_direction``.

    Positive headwind blows into the player's face; positive crosswind blows
    from right to left.
    """
    rel = math.radians(wind_direction - shot_bearing)
    return wind_speed * math.cos(rel), wind_speed * math.sin(rel)


def wind_adjusted_shot(
    start: GeoPoint,
    base_distance: float,
    bearing_deg: float,
    wind_speed: float,
    wind_direction: float,
    *,
    head_coefficient: float = HEADWIND_COEFFICIENT,
    cross_coefficient: float = CROSSWIND_COEFFICIENT,
) -> WindAdjustedShot:
    head, cross = wind_components(wind_speed, wind_direction, bearing_deg)

    effective = max(0.0, base_distance * (1.0 - head_coefficient * head))
    # A wind from the right pushes the ball left, i.e. to a smaller bearing.
    drift = cross_coefficient * cross * base_distance
    if effective == 0.0 and drift == 0.0:
        shift = 0.0
    else:
        shift = -math.degrees(math.atan2(drift, effective))

    return WindAdjustedShot(
        destination=destination(start, effective, bearing_deg + shift),
        effective_distance=effective,
        headwind=head,
        crosswind=cross,
        bearing_shift=shift,
    )


def centroid(points: Sequence[GeoPoint]) -> GeoPoint | None:
    """Vertex average; adequate for green-sized polygons."""
    if not points:
        return None
    lat = sum(p.lat for p in points) / len(points)
    lng = sum(p.lng for p in points) / len(points)
    return GeoPoint(lat=lat, lng=lng)


def path_length(points: Sequence[GeoPoint]) -> float:
    if len(points) < 2:
        return 0.0
    return sum(distance(points[i], points[i + 1]) for i in range(len(points) - 1))


def meters_to_yards(meters: float) -> float:
    return meters * METERS_TO_YARDS


def round_half_up(value: float) -> int:
    return int(Decimal(repr(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_distance(meters: float, use_yards: bool = False) -> str:
    if use_yards:
        return f"{round_half_up(meters_to_yards(meters))}yd"
    return f"{round_half_up(meters)}m"


__all__ = [
    "EARTH_RADIUS_M",
    "HEADWIND_COEFFICIENT",
    "CROSSWIND_COEFFICIENT",
    "WindAdjustedShot",
    "distance",
    "bearing",
    "destination",
    "wind_components",
    "wind_adjusted_shot",
    "centroid",
    "path_length",
    "meters_to_yards",
    "round_half_up",
    "format_distance",
]
