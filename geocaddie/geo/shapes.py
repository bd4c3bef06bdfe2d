"""Polygon and polyline generators used for dispersion, flight paths and greens."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence

from .geodesy import EARTH_RADIUS_M, bearing, destination, distance
from .models import GeoPoint

DEFAULT_ELLIPSE_SEGMENTS = 36
DEFAULT_ARC_SEGMENTS = 20
ARC_HEIGHT_RATIO = 0.1
FALLBACK_GREEN_RADIUS_M = 13.7

# cos(lat) floor so the local projection stays finite at the poles
_MIN_COS_LAT = 1e-9


@dataclass(frozen=True)
class GreenEdges:
    front: GeoPoint
    back: GeoPoint
    left: GeoPoint
    right: GeoPoint


def _meters_per_degree(center: GeoPoint) -> tuple[float, float]:
    per_deg_lat = math.radians(1.0) * EARTH_RADIUS_M
    cos_lat = max(_MIN_COS_LAT, abs(math.cos(math.radians(center.lat))))
    return per_deg_lat, per_deg_lat * cos_lat


def to_local(origin: GeoPoint, point: GeoPoint) -> tuple[float, float]:
    """Equirectangular (east, north) offset of ``point`` from ``origin`` in meters."""
    per_lat, per_lng = _meters_per_degree(origin)
    return (point.lng - origin.lng) * per_lng, (point.lat - origin.lat) * per_lat


def from_local(origin: GeoPoint, east_m: float, north_m: float) -> GeoPoint:
    per_lat, per_lng = _meters_per_degree(origin)
    return GeoPoint(lat=origin.lat + north_m / per_lat, lng=origin.lng + east_m / per_lng)


def ellipse_points(
    center: GeoPoint,
    width_m: float,
    height_m: float,
    rotation_deg: float,
    segments: int = DEFAULT_ELLIPSE_SEGMENTS,
) -> List[GeoPoint]:
    """Closed ellipse polygon around ``center``.

    ``width_m`` spans the lateral axis and ``height_m`` the depth axis, which
    points along the compass bearing ``rotation_deg``. Returns
    ``segments + 1`` points; the last repeats the first.
    """
    segments = max(3, int(segments))
    rot = math.radians(rotation_deg)
    sin_r, cos_r = math.sin(rot), math.cos(rot)
    semi_w = width_m / 2.0
    semi_h = height_m / 2.0

    points: List[GeoPoint] = []
    for i in range(segments):
        theta = 2.0 * math.pi * i / segments
        across = semi_w * math.cos(theta)
        along = semi_h * math.sin(theta)
        east = across * cos_r + along * sin_r
        north = -across * sin_r + along * cos_r
        points.append(from_local(center, east, north))
    points.append(points[0])
    return points


def arc_points(
    start: GeoPoint, end: GeoPoint, segments: int = DEFAULT_ARC_SEGMENTS
) -> List[GeoPoint]:
    """Quadratic Bézier from ``start`` to ``end`` bowed to the left of the chord.

    Purely cosmetic: the control point sits 10% of the chord length off the
    midpoint, it is not a ball-flight model.
    """
    segments = max(1, int(segments))
    mid = GeoPoint(lat=(start.lat + end.lat) / 2.0, lng=(start.lng + end.lng) / 2.0)
    chord = distance(start, end)
    control = destination(mid, chord * ARC_HEIGHT_RATIO, bearing(start, end) - 90.0)

    points: List[GeoPoint] = []
    for i in range(segments + 1):
        t = i / segments
        a = (1 - t) * (1 - t)
        b = 2 * (1 - t) * t
        c = t * t
        points.append(
            GeoPoint(
                lat=a * start.lat + b * control.lat + c * end.lat,
                lng=a * start.lng + b * control.lng + c * end.lng,
            )
        )
    return points


def _hermite(
    v0: float, v1: float, v2: float, v3: float, t: float, tension: float
) -> float:
    m1 = tension * (v2 - v0)
    m2 = tension * (v3 - v1)
    t2 = t * t
    t3 = t2 * t
    return (
        (2 * t3 - 3 * t2 + 1) * v1
        + (t3 - 2 * t2 + t) * m1
        + (-2 * t3 + 3 * t2) * v2
        + (t3 - t2) * m2
    )


def smooth_closed_path(
    control_points: Sequence[GeoPoint],
    tension: float = 0.5,
    segments_per_span: int = 10,
) -> List[GeoPoint]:
    """Closed cardinal spline through ``control_points`` (Catmull-Rom at 0.5).

    Fewer than three points cannot enclose an area and are returned unchanged.
    """
    pts = list(control_points)
    n = len(pts)
    if n < 3:
        return pts
    segments_per_span = max(1, int(segments_per_span))

    path: List[GeoPoint] = []
    for i in range(n):
        p0 = pts[(i - 1) % n]
        p1 = pts[i]
        p2 = pts[(i + 1) % n]
        p3 = pts[(i + 2) % n]
        for step in range(segments_per_span):
            t = step / segments_per_span
            path.append(
                GeoPoint(
                    lat=_hermite(p0.lat, p1.lat, p2.lat, p3.lat, t, tension),
                    lng=_hermite(p0.lng, p1.lng, p2.lng, p3.lng, t, tension),
                )
            )
    path.append(path[0])
    return path


def dynamic_green_edges(
    player: GeoPoint,
    green_center: GeoPoint,
    green_boundary: Sequence[GeoPoint] | None,
) -> GreenEdges:
    """Front/back/left/right of the green as seen from ``player``.

    The boundary is rotated so the line of play points north; front and back
    are the vertices of minimum and maximum depth, left and right the extremes
    across the line.
    """
    line = bearing(player, green_center)
    if not green_boundary:
        r = FALLBACK_GREEN_RADIUS_M
        return GreenEdges(
            front=destination(green_center, r, line + 180.0),
            back=destination(green_center, r, line),
            left=destination(green_center, r, line - 90.0),
            right=destination(green_center, r, line + 90.0),
        )

    rot = math.radians(line)
    sin_r, cos_r = math.sin(rot), math.cos(rot)
    front = back = left = right = green_boundary[0]
    min_depth = min_width = math.inf
    max_depth = max_width = -math.inf

    for pt in green_boundary:
        east, north = to_local(green_center, pt)
        depth = east * sin_r + north * cos_r
        width = east * cos_r - north * sin_r
        if depth < min_depth:
            min_depth, front = depth, pt
        if depth > max_depth:
            max_depth, back = depth, pt
        if width < min_width:
            min_width, left = width, pt
        if width > max_width:
            max_width, right = width, pt

    return GreenEdges(front=front, back=back, left=left, right=right)


__all__ = [
    "DEFAULT_ELLIPSE_SEGMENTS",
    "DEFAULT_ARC_SEGMENTS",
    "FALLBACK_GREEN_RADIUS_M",
    "GreenEdges",
    "to_local",
    "from_local",
    "ellipse_points",
    "arc_points",
    "smooth_closed_path",
    "dynamic_green_edges",
]
