"""Course model definitions."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import relationship
from backend.database import Base
from backend.models.bookmark import course_bookmarks


class Course(Base):
    """Represents a study program listed in the public catalog."""
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text)
    university = Column(String, index=True)
    country = Column(String, index=True)
    city = Column(String)
    level = Column(String, index=True)  # bachelor/master/phd/diploma
    field = Column(String, index=True)
    duration = Column(String)
    tuition_fee = Column(Float)
    currency = Column(String, default="USD")
    rating = Column(Float, default=0)
    image = Column(String)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    bookmarked_by = relationship(
        "User",
        secondary=course_bookmarks,
        back_populates="bookmarked_courses",
        order_by="User.id",
    )
