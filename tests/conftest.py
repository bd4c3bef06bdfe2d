"""Shared pytest fixtures for engine and API tests."""

from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient

from geocaddie.api.app import app
from geocaddie.bag import DEFAULT_BAG, ClubProfile
from geocaddie.config import reset_settings_cache
from geocaddie.courses import BUILTIN_COURSES, Course, CourseRegistry, get_course_registry
from geocaddie.geo import GeoPoint
from geocaddie.rounds import RoundSessionService, get_round_session_service

THREE_HOLE_LAYOUT = {
    "id": "test-three",
    "name": "Equator Links",
    "country": "Nowhere",
    "holes": [
        {
            "number": 1,
            "par": 4,
            "teeBoxes": [
                {"id": "white", "name": "White", "location": {"lat": 0.0, "lng": 0.0}, "par": 4},
                {"id": "red", "name": "Red", "color": "red", "location": {"lat": 0.0, "lng": 0.0005}, "par": 4},
            ],
            "green": {"center": {"lat": 0.0, "lng": 0.0036}},
        },
        {
            "number": 2,
            "par": 3,
            "teeBoxes": [
                {"id": "white", "name": "White", "location": {"lat": 0.0, "lng": 0.004}, "par": 3},
                {"id": "red", "name": "Red", "color": "red", "location": {"lat": 0.0002, "lng": 0.004}, "par": 3},
            ],
            "green": {"center": {"lat": 0.0015, "lng": 0.004}},
        },
        {
            "number": 3,
            "par": 5,
            "teeBoxes": [
                {"id": "white", "name": "White", "location": {"lat": 0.002, "lng": 0.004}, "par": 5},
                {"id": "red", "name": "Red", "color": "red", "location": {"lat": 0.002, "lng": 0.0045}, "par": 4},
            ],
            "green": {
                "boundary": [
                    {"lat": 0.0021, "lng": 0.0085},
                    {"lat": 0.002, "lng": 0.0086},
                    {"lat": 0.0019, "lng": 0.0085},
                    {"lat": 0.002, "lng": 0.0084},
                ]
            },
        },
    ],
}


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch: pytest.MonkeyPatch):
    for key in list(os.environ):
        if key.startswith("GEOCADDIE_"):
            monkeypatch.delenv(key, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def three_hole_course() -> Course:
    return Course.model_validate(THREE_HOLE_LAYOUT)


@pytest.fixture
def bag() -> list[ClubProfile]:
    return list(DEFAULT_BAG)


@pytest.fixture
def origin() -> GeoPoint:
    return GeoPoint(lat=0.0, lng=0.0)


@pytest.fixture
def round_client(three_hole_course: Course):
    service = RoundSessionService()
    registry = CourseRegistry({**BUILTIN_COURSES, three_hole_course.id: three_hole_course})
    app.dependency_overrides[get_round_session_service] = lambda: service
    app.dependency_overrides[get_course_registry] = lambda: registry
    client = TestClient(app)
    yield client, service
    app.dependency_overrides.pop(get_round_session_service, None)
    app.dependency_overrides.pop(get_course_registry, None)
