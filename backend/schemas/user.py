"""
User response schemas. Password hashes never leave the server.
"""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, computed_field

from backend.schemas.course import CourseSummaryResponse


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: str | None = None
    nationality: str | None = None
    university: str | None = None
    profile_image: str | None = None
    role: str
    is_active: bool
    last_login: datetime | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def profile_picture(self) -> str | None:
        """Alias kept for clients that read ``profilePicture``."""
        return self.profile_image


class ProfileResponse(UserResponse):
    bookmarked_course_ids: list[int] = []


class DashboardStats(BaseModel):
    total_bookmarks: int
    member_since: datetime
    last_login: datetime | None = None


class DashboardResponse(BaseModel):
    user: UserResponse
    bookmarked_courses: list[CourseSummaryResponse]
    dashboard_stats: DashboardStats
