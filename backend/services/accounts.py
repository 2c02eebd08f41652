"""Registration, login and self-service profile operations."""

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from backend.auth.passwords import hash_password, verify_password
from backend.core.errors import ConflictOrInconsistency, Forbidden, NotFound, Unauthenticated
from backend.models.user import ADMIN_ROLE, USER_ROLE, User
from backend.services import bookmarks

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ('name', 'email', 'phone', 'nationality', 'university', 'profile_image')


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFound('User not found')
    return user


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def ensure_email_available(db: Session, email: str, exclude_user_id: int | None = None) -> None:
    existing = get_user_by_email(db, email)
    if existing is not None and existing.id != exclude_user_id:
        raise ConflictOrInconsistency('A user with this email already exists')


def register_user(db: Session, name: str, email: str, password: str, **profile: Any) -> User:
    ensure_email_available(db, email)
    user = User(
        name=name,
        email=normalize_email(email),
        hashed_password=hash_password(password),
        role=USER_ROLE,
        is_active=True,
        **{key: value for key, value in profile.items() if key in PROFILE_FIELDS and value is not None},
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info('Registered user %s', user.id)
    return user


def authenticate(db: Session, email: str, password: str, require_admin: bool = False) -> User:
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.hashed_password):
        raise Unauthenticated('Invalid email or password')
    if not user.is_active:
        raise Forbidden('This account has been deactivated')
    if require_admin and user.role != ADMIN_ROLE:
        raise Forbidden('Access denied. Admin privileges required.')

    user.last_login = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)
    return user


def apply_partial_update(
    user: User,
    changes: dict[str, Any],
    allowed_fields: tuple[str, ...],
    clearable_fields: tuple[str, ...] = (),
) -> list[str]:
    """Copy provided fields onto ``user``. Absent fields are left alone.

    An explicit ``None`` only clears fields listed in ``clearable_fields``;
    for every other field it is ignored.
    """
    updated = []
    for field_name in allowed_fields:
        if field_name not in changes:
            continue
        value = changes[field_name]
        if value is None and field_name not in clearable_fields:
            continue
        setattr(user, field_name, value)
        updated.append(field_name)
    return updated


def update_profile(db: Session, user_id: int, changes: dict[str, Any]) -> User:
    user = get_user(db, user_id)
    if changes.get('email') is not None:
        changes = {**changes, 'email': normalize_email(changes['email'])}
        ensure_email_available(db, changes['email'], exclude_user_id=user.id)

    apply_partial_update(user, changes, PROFILE_FIELDS)
    db.commit()
    db.refresh(user)
    return user


def delete_account(db: Session, user_id: int) -> None:
    """Delete a user after removing them from every course's bookmark set."""
    user = get_user(db, user_id)
    removed = bookmarks.clear_for_user(user)
    db.delete(user)
    db.commit()
    logger.info('Deleted user %s and %s bookmark(s)', user_id, removed)
