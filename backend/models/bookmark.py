"""Bookmark relation between users and courses."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Table, func
from backend.database import Base


# One row per edge; User.bookmarked_courses and Course.bookmarked_by both read it.
course_bookmarks = Table(
    "course_bookmarks",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("course_id", Integer, ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
)
