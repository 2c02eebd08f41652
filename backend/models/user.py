"""User model definitions."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from backend.database import Base
from backend.models.bookmark import course_bookmarks


USER_ROLE = "user"
ADMIN_ROLE = "admin"
ROLES = (USER_ROLE, ADMIN_ROLE)


class User(Base):
    """Represents an account that can log in and bookmark courses."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    phone = Column(String)
    nationality = Column(String)
    university = Column(String)
    profile_image = Column(String)
    role = Column(String, default=USER_ROLE, nullable=False)  # user/admin
    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    bookmarked_courses = relationship(
        "Course",
        secondary=course_bookmarks,
        back_populates="bookmarked_by",
        order_by="Course.id",
    )
