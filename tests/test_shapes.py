from __future__ import annotations

import pytest

from geocaddie.geo import (
    GeoPoint,
    arc_points,
    bearing,
    destination,
    distance,
    dynamic_green_edges,
    ellipse_points,
    smooth_closed_path,
)
from geocaddie.geo.shapes import FALLBACK_GREEN_RADIUS_M, from_local, to_local


@pytest.mark.parametrize("segments", [4, 12, 36, 72])
def test_ellipse_is_closed_with_segments_plus_one_points(
    origin: GeoPoint, segments: int
) -> None:
    points = ellipse_points(origin, 30.0, 20.0, 45.0, segments)
    assert len(points) == segments + 1
    assert points[0] == points[-1]


def test_ellipse_segments_have_a_floor(origin: GeoPoint) -> None:
    assert len(ellipse_points(origin, 30.0, 20.0, 0.0, 1)) == 4


@pytest.mark.parametrize("rotation", [0.0, 90.0, 135.0])
def test_ellipse_depth_axis_follows_rotation(origin: GeoPoint, rotation: float) -> None:
    points = ellipse_points(origin, 20.0, 100.0, rotation, 36)
    tip = points[9]  # theta = 90 degrees, far end of the depth axis

    assert distance(origin, tip) == pytest.approx(50.0, rel=1e-3)
    assert bearing(origin, tip) == pytest.approx(rotation, abs=0.1)

    side = points[0]  # theta = 0, end of the lateral axis
    assert distance(origin, side) == pytest.approx(10.0, rel=1e-3)


def test_local_projection_round_trips(origin: GeoPoint) -> None:
    point = GeoPoint(lat=51.2531, lng=6.6107)
    east, north = to_local(point, GeoPoint(lat=51.2541, lng=6.6117))
    back = from_local(point, east, north)
    assert back.lat == pytest.approx(51.2541)
    assert back.lng == pytest.approx(6.6117)


def test_arc_runs_from_start_to_end_and_bows_left(origin: GeoPoint) -> None:
    end = destination(origin, 200.0, 0.0)
    points = arc_points(origin, end, 20)

    assert len(points) == 21
    assert points[0] == origin
    assert points[-1].lat == pytest.approx(end.lat)
    assert points[-1].lng == pytest.approx(end.lng)

    apex = points[10]
    chord_mid = GeoPoint(lat=end.lat / 2.0, lng=end.lng / 2.0)
    assert apex.lng < origin.lng
    # Quadratic Bézier reaches half the control-point offset at t = 0.5.
    assert distance(chord_mid, apex) == pytest.approx(10.0, rel=1e-2)


def test_smooth_path_returns_short_input_unchanged(origin: GeoPoint) -> None:
    pts = [origin, GeoPoint(lat=0.001, lng=0.0)]
    assert smooth_closed_path(pts) == pts
    assert smooth_closed_path([]) == []


def test_smooth_path_is_closed_and_passes_through_controls() -> None:
    controls = [
        GeoPoint(lat=0.0, lng=0.0),
        GeoPoint(lat=0.0, lng=0.001),
        GeoPoint(lat=0.001, lng=0.001),
        GeoPoint(lat=0.001, lng=0.0),
    ]
    path = smooth_closed_path(controls, segments_per_span=8)

    assert len(path) == 4 * 8 + 1
    assert path[0] == path[-1]
    for index, control in enumerate(controls):
        assert path[index * 8].lat == pytest.approx(control.lat)
        assert path[index * 8].lng == pytest.approx(control.lng)


def test_green_edges_fall_back_to_fixed_radius() -> None:
    center = GeoPoint(lat=0.001, lng=0.0)
    player = GeoPoint(lat=0.0, lng=0.0)
    edges = dynamic_green_edges(player, center, None)

    for edge in (edges.front, edges.back, edges.left, edges.right):
        assert distance(center, edge) == pytest.approx(FALLBACK_GREEN_RADIUS_M, rel=1e-3)
    assert distance(player, edges.front) < distance(player, center) < distance(
        player, edges.back
    )
    assert edges.left.lng < center.lng < edges.right.lng


def test_green_edges_rotate_with_line_of_play() -> None:
    center = GeoPoint(lat=0.001, lng=0.0)
    north = GeoPoint(lat=0.00115, lng=0.0)
    south = GeoPoint(lat=0.00085, lng=0.0)
    east = GeoPoint(lat=0.001, lng=0.0001)
    west = GeoPoint(lat=0.001, lng=-0.0001)
    boundary = [north, east, south, west]

    from_south = dynamic_green_edges(GeoPoint(lat=0.0, lng=0.0), center, boundary)
    assert (from_south.front, from_south.back) == (south, north)
    assert (from_south.left, from_south.right) == (west, east)

    from_east = dynamic_green_edges(GeoPoint(lat=0.001, lng=0.002), center, boundary)
    assert (from_east.front, from_east.back) == (east, west)
    assert (from_east.left, from_east.right) == (south, north)
