from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from geocaddie.api.security import require_api_key
from geocaddie.courses import Course, CourseRegistry, get_course_registry
from geocaddie.errors import CourseNotFound

router = APIRouter(
    prefix="/api/courses", tags=["courses"], dependencies=[Depends(require_api_key)]
)


class CourseSummaryOut(BaseModel):
    id: str
    name: str
    country: str | None = None
    hole_count: int = Field(serialization_alias="holeCount")
    total_par: int = Field(serialization_alias="totalPar")

    model_config = ConfigDict(populate_by_name=True)


@router.get("", response_model=list[CourseSummaryOut])
def list_courses(
    registry: CourseRegistry = Depends(get_course_registry),
) -> list[CourseSummaryOut]:
    return [
        CourseSummaryOut(
            id=course.id,
            name=course.name,
            country=course.country,
            hole_count=course.hole_count,
            total_par=course.total_par,
        )
        for course in registry.courses()
    ]


@router.get("/{course_id}", response_model=Course)
def get_course(
    course_id: str, registry: CourseRegistry = Depends(get_course_registry)
) -> Course:
    try:
        return registry.get(course_id)
    except CourseNotFound as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="course not found"
        ) from exc


__all__ = ["router", "list_courses", "get_course"]
