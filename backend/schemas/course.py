"""
Course response schemas for the public catalog and the admin console.
"""
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CourseSummaryResponse(BaseModel):
    id: int
    title: str
    description: str | None = None
    university: str | None = None
    country: str | None = None
    city: str | None = None
    level: str | None = None
    field: str | None = None
    duration: str | None = None
    tuition_fee: float | None = None
    currency: str | None = None
    image: str | None = None

    model_config = ConfigDict(from_attributes=True)


class CourseResponse(CourseSummaryResponse):
    rating: float | None = None
    created_at: datetime
    bookmark_count: int = 0


class CourseListResponse(BaseModel):
    courses: list[CourseResponse]
    total: int
    page: int
    pages: int
