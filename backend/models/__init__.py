from backend.models.bookmark import course_bookmarks
from backend.models.course import Course
from backend.models.user import ADMIN_ROLE, USER_ROLE, User

__all__ = ["ADMIN_ROLE", "USER_ROLE", "Course", "User", "course_bookmarks"]
