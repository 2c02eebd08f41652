"""Public course catalog reads."""

import math

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from backend.core.errors import NotFound
from backend.models.course import Course
from backend.schemas.course import CourseListResponse, CourseResponse

DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100


def _like_pattern(value: str) -> str:
    escaped = value.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
    return f'%{escaped}%'


def course_to_response(course: Course) -> CourseResponse:
    response = CourseResponse.model_validate(course)
    response.bookmark_count = len(course.bookmarked_by)
    return response


def search_courses(
    db: Session,
    search: str | None = None,
    country: str | None = None,
    level: str | None = None,
    field: str | None = None,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
) -> CourseListResponse:
    query = db.query(Course)

    if search and search.strip():
        pattern = _like_pattern(search.strip())
        query = query.filter(
            or_(
                Course.title.ilike(pattern, escape='\\'),
                Course.description.ilike(pattern, escape='\\'),
                Course.university.ilike(pattern, escape='\\'),
                Course.field.ilike(pattern, escape='\\'),
            )
        )
    if country:
        query = query.filter(func.lower(Course.country) == country.strip().lower())
    if level:
        query = query.filter(func.lower(Course.level) == level.strip().lower())
    if field:
        query = query.filter(Course.field.ilike(_like_pattern(field.strip()), escape='\\'))

    total = query.count()
    limit = max(1, min(limit, MAX_PAGE_SIZE))
    page = max(1, page)
    courses = (
        query.order_by(Course.rating.desc(), Course.id.asc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    return CourseListResponse(
        courses=[course_to_response(course) for course in courses],
        total=total,
        page=page,
        pages=math.ceil(total / limit) if total else 0,
    )


def get_course(db: Session, course_id: int) -> Course:
    course = db.get(Course, course_id)
    if course is None:
        raise NotFound('Course not found')
    return course
