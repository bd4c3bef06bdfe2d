"""Course geometry consumed read-only by the engine."""

from .models import Course, GreenGeometry, Hole, TeeBox
from .registry import (
    BUILTIN_COURSES,
    DUVENHOF_COURSE,
    CourseRegistry,
    get_course_registry,
    load_course,
)

__all__ = [
    "BUILTIN_COURSES",
    "DUVENHOF_COURSE",
    "Course",
    "CourseRegistry",
    "GreenGeometry",
    "Hole",
    "TeeBox",
    "get_course_registry",
    "load_course",
]
