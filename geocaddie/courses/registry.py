from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

from geocaddie.config import get_settings
from geocaddie.errors import CourseNotFound

from .models import Course

logger = logging.getLogger(__name__)

# (par, tee lat, tee lng, green lat, green lng)
_DUVENHOF_LAYOUT: tuple[tuple[int, float, float, float, float], ...] = (
    (4, 51.253031, 6.610690, 51.256435, 6.610896),
    (5, 51.256303, 6.611343, 51.253027, 6.613838),
    (4, 51.253934, 6.613799, 51.256955, 6.612713),
    (4, 51.256230, 6.613031, 51.253919, 6.614703),
    (5, 51.253513, 6.613811, 51.257468, 6.611944),
    (3, 51.257525, 6.611174, 51.256186, 6.609659),
    (4, 51.256339, 6.608953, 51.259878, 6.608542),
    (3, 51.259387, 6.608203, 51.259375, 6.606481),
    (4, 51.259009, 6.607590, 51.256032, 6.606043),
    (3, 51.256458, 6.606498, 51.257419, 6.606892),
    (4, 51.256823, 6.607438, 51.259129, 6.604306),
    (4, 51.259052, 6.603608, 51.260501, 6.601357),
    (3, 51.260116, 6.601089, 51.259186, 6.602760),
    (5, 51.259147, 6.601981, 51.255365, 6.601745),
    (4, 51.255140, 6.603011, 51.258660, 6.603824),
    (4, 51.259015, 6.603646, 51.256333, 6.605922),
    (4, 51.255532, 6.606054, 51.256139, 6.608421),
    (4, 51.256022, 6.608926, 51.252957, 6.609506),
)

DUVENHOF_COURSE = Course(
    id="duvenhof_builtin",
    name="Duvenhof Golf Club",
    country="Germany",
    holes=[
        {
            "number": number,
            "par": par,
            "tee": {"lat": tee_lat, "lng": tee_lng},
            "green": {"lat": green_lat, "lng": green_lng},
        }
        for number, (par, tee_lat, tee_lng, green_lat, green_lng) in enumerate(
            _DUVENHOF_LAYOUT, start=1
        )
    ],
)

BUILTIN_COURSES: dict[str, Course] = {DUVENHOF_COURSE.id: DUVENHOF_COURSE}


def load_course(source: str | Path | Mapping[str, Any]) -> Course:
    """Validate a course from a JSON file path or an already-decoded mapping."""
    if isinstance(source, Mapping):
        return Course.model_validate(dict(source))
    data = json.loads(Path(source).read_text(encoding="utf-8"))
    return Course.model_validate(data)


class CourseRegistry:
    """Read-only lookup of the courses a round may be played on."""

    def __init__(self, courses: Mapping[str, Course] | None = None) -> None:
        self._courses: dict[str, Course] = dict(
            BUILTIN_COURSES if courses is None else courses
        )

    def register(self, course: Course) -> None:
        self._courses[course.id] = course

    def load_dir(self, directory: str | Path) -> int:
        """Register every ``*.json`` course in ``directory``; returns the count."""
        loaded = 0
        for path in sorted(Path(directory).glob("*.json")):
            try:
                self.register(load_course(path))
                loaded += 1
            except (OSError, ValueError) as exc:
                logger.warning("skipping course file %s: %s", path, exc)
        return loaded

    def get(self, course_id: str) -> Course:
        course = self._courses.get(course_id)
        if course is None:
            raise CourseNotFound(course_id)
        return course

    def courses(self) -> list[Course]:
        return sorted(self._courses.values(), key=lambda course: course.name)


@lru_cache(maxsize=1)
def get_course_registry() -> CourseRegistry:
    registry = CourseRegistry()
    extra_dir = get_settings().courses_dir
    if extra_dir:
        registry.load_dir(extra_dir)
    return registry


__all__ = [
    "BUILTIN_COURSES",
    "DUVENHOF_COURSE",
    "CourseRegistry",
    "get_course_registry",
    "load_course",
]
