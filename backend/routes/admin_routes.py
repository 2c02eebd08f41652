import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth.dependencies import Principal, get_current_admin
from backend.core.errors import Internal
from backend.core.responses import success_response
from backend.database import get_db
from backend.routes.auth_routes import validate_email_value
from backend.schemas.user import UserResponse
from backend.services import admin, catalog

# Every route in this module sits behind the admin guard.
router = APIRouter(tags=['admin'], dependencies=[Depends(get_current_admin)])
logger = logging.getLogger(__name__)


class UpdateUserRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    nationality: str | None = None
    university: str | None = None
    role: str | None = None
    is_active: bool | None = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        normalized = value.strip()
        return normalized or None

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return validate_email_value(value)

    @field_validator('role')
    @classmethod
    def validate_role(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip().lower() or None


@router.get('/stats')
def get_stats(db: Session = Depends(get_db)):
    try:
        stats = admin.get_stats(db)
    except SQLAlchemyError as exc:
        logger.exception('Fetching admin stats failed')
        raise Internal('Error fetching statistics') from exc

    return success_response(stats)


@router.get('/users')
def get_users(db: Session = Depends(get_db)):
    try:
        users = admin.list_users(db)
    except SQLAlchemyError as exc:
        logger.exception('Fetching users failed')
        raise Internal('Error fetching users') from exc

    return success_response([UserResponse.model_validate(user) for user in users])


@router.put('/users/{user_id}')
def update_user(user_id: int, data: UpdateUserRequest, db: Session = Depends(get_db)):
    try:
        user = admin.update_user(db, user_id, data.model_dump(exclude_unset=True))
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Updating user %s failed', user_id)
        raise Internal('Error updating user') from exc

    return success_response(UserResponse.model_validate(user), 'User updated successfully')


@router.delete('/users/{user_id}')
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_admin: Principal = Depends(get_current_admin),
):
    try:
        admin.delete_user(db, user_id)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Deleting user %s failed', user_id)
        raise Internal('Error deleting user') from exc

    logger.info('Admin %s deleted user %s', current_admin.id, user_id)
    return success_response(message='User deleted successfully')


@router.get('/courses')
def get_courses(db: Session = Depends(get_db)):
    try:
        courses = admin.list_courses(db)
        payload = [catalog.course_to_response(course) for course in courses]
    except SQLAlchemyError as exc:
        logger.exception('Fetching courses failed')
        raise Internal('Error fetching courses') from exc

    return success_response(payload)


@router.delete('/courses/{course_id}')
def delete_course(
    course_id: int,
    db: Session = Depends(get_db),
    current_admin: Principal = Depends(get_current_admin),
):
    try:
        admin.delete_course(db, course_id)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Deleting course %s failed', course_id)
        raise Internal('Error deleting course') from exc

    logger.info('Admin %s deleted course %s', current_admin.id, course_id)
    return success_response(message='Course deleted successfully')
