import logging

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth import transport
from backend.auth.dependencies import Principal, get_current_user
from backend.auth.jwt_handler import TokenKind
from backend.core.errors import Internal
from backend.core.responses import success_response
from backend.database import get_db
from backend.routes.auth_routes import validate_email_value
from backend.schemas.course import CourseSummaryResponse
from backend.schemas.user import DashboardResponse, DashboardStats, ProfileResponse, UserResponse
from backend.services import accounts, bookmarks

router = APIRouter(tags=['user'])
logger = logging.getLogger(__name__)


class UpdateProfileRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    nationality: str | None = None
    university: str | None = None
    profile_picture: str | None = Field(default=None, alias='profilePicture')

    model_config = ConfigDict(populate_by_name=True)

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

    def to_changes(self) -> dict:
        changes = self.model_dump(exclude_unset=True, exclude={'profile_picture'})
        if self.profile_picture is not None:
            changes['profile_image'] = self.profile_picture
        return changes


@router.get('/dashboard')
def get_dashboard(current_user: Principal = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        user = accounts.get_user(db, current_user.id)
        bookmarked = list(user.bookmarked_courses)
    except SQLAlchemyError as exc:
        logger.exception('Get user dashboard failed')
        raise Internal() from exc

    dashboard = DashboardResponse(
        user=UserResponse.model_validate(user),
        bookmarked_courses=[CourseSummaryResponse.model_validate(course) for course in bookmarked],
        dashboard_stats=DashboardStats(
            total_bookmarks=len(bookmarked),
            member_since=user.created_at,
            last_login=user.last_login,
        ),
    )
    return success_response(dashboard)


@router.get('/bookmarks')
def get_bookmarked_courses(current_user: Principal = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        courses = bookmarks.list_bookmarked_courses(db, current_user.id)
    except SQLAlchemyError as exc:
        logger.exception('Get bookmarked courses failed')
        raise Internal() from exc

    return success_response(
        {'bookmarked_courses': [CourseSummaryResponse.model_validate(course) for course in courses]}
    )


@router.get('/profile')
def get_profile(current_user: Principal = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        user = accounts.get_user(db, current_user.id)
        profile = ProfileResponse.model_validate(user)
        profile.bookmarked_course_ids = [course.id for course in user.bookmarked_courses]
    except SQLAlchemyError as exc:
        logger.exception('Get profile failed')
        raise Internal() from exc

    return success_response(profile)


@router.put('/profile')
def update_profile(
    data: UpdateProfileRequest,
    current_user: Principal = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        user = accounts.update_profile(db, current_user.id, data.to_changes())
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Update profile failed')
        raise Internal() from exc

    return success_response(UserResponse.model_validate(user), 'Profile updated successfully')


@router.delete('/profile')
def delete_profile(
    response: Response,
    current_user: Principal = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        accounts.delete_account(db, current_user.id)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Delete profile failed')
        raise Internal() from exc

    transport.clear_token_cookie(response, TokenKind.USER)
    return success_response(message='Account deleted successfully')


@router.post('/bookmark/{course_id}')
def toggle_bookmark(
    course_id: int,
    current_user: Principal = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        bookmarked = bookmarks.toggle(db, current_user.id, course_id)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Bookmark course failed')
        raise Internal() from exc

    message = 'Course bookmarked successfully' if bookmarked else 'Course removed from bookmarks'
    return success_response(message=message, bookmarked=bookmarked)


@router.get('/bookmark-status/{course_id}')
def get_bookmark_status(
    course_id: int,
    current_user: Principal = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        bookmarked = bookmarks.status(db, current_user.id, course_id)
    except SQLAlchemyError as exc:
        logger.exception('Get bookmark status failed')
        raise Internal() from exc

    return success_response({'bookmarked': bookmarked})


@router.delete('/bookmark/{course_id}')
def remove_bookmark(
    course_id: int,
    current_user: Principal = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        bookmarks.remove(db, current_user.id, course_id)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Remove bookmark failed')
        raise Internal() from exc

    return success_response(message='Course removed from bookmarks', bookmarked=False)
