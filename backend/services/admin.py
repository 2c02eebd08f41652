"""Privileged operations behind the admin guard."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy.orm import Session

from backend.core.errors import NotFound, ValidationFailed
from backend.models.course import Course
from backend.models.user import ROLES, User
from backend.services import accounts, bookmarks

logger = logging.getLogger(__name__)

ADMIN_EDITABLE_FIELDS = ('name', 'email', 'phone', 'nationality', 'university', 'role', 'is_active')
ADMIN_CLEARABLE_FIELDS = ('phone', 'nationality', 'university')
ACTIVE_WINDOW = timedelta(hours=24)
WEEK = timedelta(days=7)
MONTH = timedelta(days=30)


def get_stats(db: Session, now: datetime | None = None) -> dict[str, int]:
    now = now or datetime.now(timezone.utc)
    start_of_today = now.replace(hour=0, minute=0, second=0, microsecond=0)

    def users_since(column, since: datetime) -> int:
        return db.query(User).filter(column >= since).count()

    return {
        'total_users': db.query(User).count(),
        'total_courses': db.query(Course).count(),
        'total_bookmarks': bookmarks.count_all(db),
        'active_users': users_since(User.last_login, now - ACTIVE_WINDOW),
        'new_users_today': users_since(User.created_at, start_of_today),
        'new_users_this_week': users_since(User.created_at, now - WEEK),
        'new_users_this_month': users_since(User.created_at, now - MONTH),
    }


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()


def update_user(db: Session, user_id: int, changes: dict[str, Any]) -> User:
    user = accounts.get_user(db, user_id)

    if changes.get('role') is not None and changes['role'] not in ROLES:
        raise ValidationFailed('Role must be one of: ' + ', '.join(ROLES))
    if changes.get('email') is not None:
        changes = {**changes, 'email': accounts.normalize_email(changes['email'])}
        accounts.ensure_email_available(db, changes['email'], exclude_user_id=user.id)

    updated = accounts.apply_partial_update(user, changes, ADMIN_EDITABLE_FIELDS, ADMIN_CLEARABLE_FIELDS)
    db.commit()
    db.refresh(user)
    logger.info('Admin updated user %s fields=%s', user_id, updated)
    return user


def delete_user(db: Session, user_id: int) -> None:
    accounts.delete_account(db, user_id)


def list_courses(db: Session) -> list[Course]:
    return db.query(Course).order_by(Course.id.asc()).all()


def delete_course(db: Session, course_id: int) -> None:
    """Delete a course after removing it from every user's bookmark set."""
    course = db.get(Course, course_id)
    if course is None:
        raise NotFound('Course not found')

    removed = bookmarks.clear_for_course(course)
    db.delete(course)
    db.commit()
    logger.info('Deleted course %s and %s bookmark(s)', course_id, removed)
