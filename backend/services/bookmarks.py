"""Bookmark relation between users and courses.

The relation lives in the ``course_bookmarks`` association table, so
``user.bookmarked_courses`` and ``course.bookmarked_by`` are two views of the
same rows and cannot drift apart. Every operation commits a single
transaction.
"""

import logging

from sqlalchemy import delete, func, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.core.errors import NotFound
from backend.models.bookmark import course_bookmarks
from backend.models.course import Course
from backend.models.user import User

logger = logging.getLogger(__name__)


def _require_course(db: Session, course_id: int) -> Course:
    course = db.get(Course, course_id)
    if course is None:
        raise NotFound('Course not found')
    return course


def _require_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFound('User not found')
    return user


def status(db: Session, user_id: int, course_id: int) -> bool:
    """Whether ``course_id`` is in the user's bookmark set."""
    row = db.execute(
        select(course_bookmarks.c.course_id).where(
            course_bookmarks.c.user_id == user_id,
            course_bookmarks.c.course_id == course_id,
        )
    ).first()
    return row is not None


def _insert_edge(db: Session, user_id: int, course_id: int) -> bool:
    """Insert the edge and return whether it is stored afterwards."""
    try:
        db.execute(insert(course_bookmarks).values(user_id=user_id, course_id=course_id))
        db.commit()
    except IntegrityError:
        # Either a concurrent add won, or the user or course vanished (foreign key).
        db.rollback()
        present = status(db, user_id, course_id)
        logger.debug('Bookmark (%s, %s) insert collided, present=%s', user_id, course_id, present)
        return present
    return True


def _delete_edge(db: Session, user_id: int, course_id: int) -> None:
    db.execute(
        delete(course_bookmarks).where(
            course_bookmarks.c.user_id == user_id,
            course_bookmarks.c.course_id == course_id,
        )
    )
    db.commit()


def add(db: Session, user_id: int, course_id: int) -> None:
    """Bookmark a course. Adding an existing bookmark is a no-op."""
    _require_user(db, user_id)
    _require_course(db, course_id)
    if not status(db, user_id, course_id):
        _insert_edge(db, user_id, course_id)
    db.expire_all()


def remove(db: Session, user_id: int, course_id: int) -> None:
    """Drop a bookmark. Removing a missing bookmark is a no-op."""
    _require_user(db, user_id)
    _require_course(db, course_id)
    _delete_edge(db, user_id, course_id)
    db.expire_all()


def toggle(db: Session, user_id: int, course_id: int) -> bool:
    """Flip the bookmark and return the resulting state."""
    _require_user(db, user_id)
    _require_course(db, course_id)
    if status(db, user_id, course_id):
        _delete_edge(db, user_id, course_id)
        bookmarked = False
    else:
        bookmarked = _insert_edge(db, user_id, course_id)
    db.expire_all()
    return bookmarked


def list_bookmarked_courses(db: Session, user_id: int) -> list[Course]:
    user = _require_user(db, user_id)
    return list(user.bookmarked_courses)


def count_all(db: Session) -> int:
    return db.scalar(select(func.count()).select_from(course_bookmarks)) or 0


def clear_for_user(user: User) -> int:
    """Remove a user from every course's bookmark set. Caller commits."""
    removed = len(user.bookmarked_courses)
    user.bookmarked_courses.clear()
    return removed


def clear_for_course(course: Course) -> int:
    """Remove a course from every user's bookmark set. Caller commits."""
    removed = len(course.bookmarked_by)
    course.bookmarked_by.clear()
    return removed
