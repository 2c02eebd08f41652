import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth import transport
from backend.auth.dependencies import Principal, get_current_admin
from backend.auth.jwt_handler import TokenKind
from backend.core.errors import Internal
from backend.core.responses import success_response
from backend.database import get_db
from backend.routes.auth_routes import LoginRequest, issue_session
from backend.schemas.user import UserResponse
from backend.services import accounts

router = APIRouter(tags=['admin-auth'])
logger = logging.getLogger(__name__)


@router.post('/login')
def admin_login(data: LoginRequest, response: Response, db: Session = Depends(get_db)):
    try:
        admin = accounts.authenticate(db, data.email, data.password, require_admin=True)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Admin login failed')
        raise Internal('Login failed') from exc

    logger.info('Admin %s logged in', admin.id)
    return success_response(issue_session(response, admin, TokenKind.ADMIN), 'Admin login successful')


@router.post('/logout')
def admin_logout(response: Response):
    transport.clear_token_cookie(response, TokenKind.ADMIN)
    return success_response(message='Logged out successfully')


@router.get('/me')
def admin_me(current_admin: Principal = Depends(get_current_admin), db: Session = Depends(get_db)):
    try:
        admin = accounts.get_user(db, current_admin.id)
    except SQLAlchemyError as exc:
        logger.exception('Fetching current admin failed')
        raise Internal() from exc

    return success_response(UserResponse.model_validate(admin))
