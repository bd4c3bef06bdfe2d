from __future__ import annotations

import json
import logging

import pytest
from pydantic import ValidationError

from geocaddie.courses import (
    DUVENHOF_COURSE,
    Course,
    CourseRegistry,
    Hole,
    load_course,
)
from geocaddie.errors import CourseNotFound
from geocaddie.geo import GeoPoint

from .conftest import THREE_HOLE_LAYOUT


def test_builtin_course_is_complete() -> None:
    assert DUVENHOF_COURSE.hole_count == 18
    assert [hole.number for hole in DUVENHOF_COURSE.holes] == list(range(1, 19))
    assert DUVENHOF_COURSE.total_par == 71
    first = DUVENHOF_COURSE.hole(1)
    assert first.active_tee().location == GeoPoint(lat=51.253031, lng=6.610690)
    assert first.green_center == GeoPoint(lat=51.256435, lng=6.610896)


def test_green_boundary_centroid_becomes_center(three_hole_course: Course) -> None:
    green = three_hole_course.holes[2].green
    assert green.center.lat == pytest.approx(0.002)
    assert green.center.lng == pytest.approx(0.0085)


def test_authored_center_yields_to_boundary() -> None:
    hole = Hole.model_validate(
        {
            "number": 1,
            "tee": {"lat": 0.0, "lng": 0.0},
            "green": {
                "center": {"lat": 9.0, "lng": 9.0},
                "shape": [{"lat": 0.0, "lng": 0.0}, {"lat": 0.002, "lng": 0.002}],
            },
        }
    )
    assert hole.green_center == GeoPoint(lat=0.001, lng=0.001)


def test_green_requires_center_or_boundary() -> None:
    with pytest.raises(ValidationError):
        Hole.model_validate(
            {"number": 1, "tee": {"lat": 0.0, "lng": 0.0}, "green": {}}
        )


def test_legacy_tee_becomes_default_tee_box() -> None:
    hole = Hole.model_validate(
        {"number": 7, "par": 3, "tee": {"lat": 1.0, "lon": 2.0}, "green": {"lat": 1.001, "lng": 2.0}}
    )
    tee = hole.active_tee()
    assert tee.id == "hole-7-default"
    assert tee.par == 3
    assert tee.location == GeoPoint(lat=1.0, lng=2.0)


def test_hole_without_tee_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Hole.model_validate({"number": 1, "green": {"lat": 0.0, "lng": 0.0}})


def test_active_tee_and_par_selection(three_hole_course: Course) -> None:
    hole = three_hole_course.holes[2]
    assert hole.active_tee().id == "white"
    assert hole.active_tee("red").id == "red"
    assert hole.active_tee("gold").id == "white"
    assert hole.par_for() == 5
    assert hole.par_for("red") == 4


def test_default_par_comes_from_the_starting_tee() -> None:
    hole = Hole.model_validate(
        {
            "number": 1,
            "par": 5,
            "teeBoxes": [
                {"id": "forward", "name": "Forward", "location": {"lat": 0.0, "lng": 0.0}, "par": 4},
                {"id": "tips", "name": "Tips", "location": {"lat": 0.0, "lng": -0.0005}, "par": 5},
            ],
            "green": {"center": {"lat": 0.0, "lng": 0.003}},
        }
    )
    assert hole.active_tee().id == "forward"
    assert hole.par_for() == hole.active_tee().par == 4
    assert hole.par_for("missing") == 4
    assert hole.par_for("tips") == 5


def test_holes_are_sorted_and_must_be_contiguous() -> None:
    layout = dict(THREE_HOLE_LAYOUT)
    layout["holes"] = list(reversed(THREE_HOLE_LAYOUT["holes"]))
    assert [hole.number for hole in Course.model_validate(layout).holes] == [1, 2, 3]

    layout["holes"] = THREE_HOLE_LAYOUT["holes"][:1] + THREE_HOLE_LAYOUT["holes"][2:]
    with pytest.raises(ValidationError):
        Course.model_validate(layout)

    layout["holes"] = [THREE_HOLE_LAYOUT["holes"][0], THREE_HOLE_LAYOUT["holes"][0]]
    with pytest.raises(ValidationError):
        Course.model_validate(layout)


def test_course_serializes_camel_case(three_hole_course: Course) -> None:
    data = three_hole_course.model_dump(by_alias=True)
    assert "teeBoxes" in data["holes"][0]
    assert "strokeIndex" in data["holes"][0]["teeBoxes"][0]
    assert three_hole_course.hole(4) is None


def test_load_course_from_mapping_and_file(tmp_path) -> None:
    assert load_course(THREE_HOLE_LAYOUT).id == "test-three"

    path = tmp_path / "course.json"
    path.write_text(json.dumps(THREE_HOLE_LAYOUT), encoding="utf-8")
    assert load_course(path).name == "Equator Links"


def test_registry_lookup_and_directory_loading(tmp_path, caplog) -> None:
    registry = CourseRegistry()
    assert registry.get("duvenhof_builtin") is DUVENHOF_COURSE
    with pytest.raises(CourseNotFound):
        registry.get("missing")

    (tmp_path / "good.json").write_text(json.dumps(THREE_HOLE_LAYOUT), encoding="utf-8")
    (tmp_path / "bad.json").write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        assert registry.load_dir(tmp_path) == 1

    assert "bad.json" in caplog.text
    assert [course.id for course in registry.courses()] == [
        "duvenhof_builtin",
        "test-three",
    ]
