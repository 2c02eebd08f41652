import logging

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth import jwt_handler, transport
from backend.auth.dependencies import Principal, get_current_user
from backend.auth.jwt_handler import TokenKind
from backend.auth.passwords import BCRYPT_MAX_BYTES, MIN_PASSWORD_LENGTH
from backend.core.errors import ConflictOrInconsistency, Internal
from backend.core.responses import success_response
from backend.database import get_db
from backend.schemas.user import UserResponse
from backend.services import accounts

router = APIRouter(tags=['auth'])
logger = logging.getLogger(__name__)


def validate_email_value(value: str) -> str:
    normalized = value.strip().lower()
    local, _, domain = normalized.partition('@')
    if not local or '.' not in domain:
        raise ValueError('A valid email address is required.')
    return normalized


def validate_password_value(value: str) -> str:
    if len(value) < MIN_PASSWORD_LENGTH:
        raise ValueError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters.')
    if len(value.encode('utf-8')) > BCRYPT_MAX_BYTES:
        raise ValueError(f'Password must be at most {BCRYPT_MAX_BYTES} bytes.')
    return value


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str
    phone: str | None = None
    nationality: str | None = None
    university: str | None = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Name is required.')
        return normalized

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return validate_email_value(value)

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        return validate_password_value(value)


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return validate_email_value(value)


def issue_session(response: Response, user, kind: TokenKind) -> dict:
    token, expires_at = jwt_handler.create_access_token(
        principal_id=user.id,
        email=user.email,
        role=user.role,
        kind=kind,
    )
    transport.set_token_cookie(response, token, expires_at, kind)
    return {
        'user': UserResponse.model_validate(user),
        'token': token,
        'expires_at': expires_at,
    }


@router.post('/register', status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, response: Response, db: Session = Depends(get_db)):
    try:
        user = accounts.register_user(
            db,
            name=data.name,
            email=data.email,
            password=data.password,
            phone=data.phone,
            nationality=data.nationality,
            university=data.university,
        )
    except IntegrityError as exc:
        db.rollback()
        logger.warning('Register IntegrityError: %s', exc)
        raise ConflictOrInconsistency('A user with this email already exists') from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Register failed')
        raise Internal('Registration failed') from exc

    return success_response(issue_session(response, user, TokenKind.USER), 'Registration successful')


@router.post('/login')
def login(data: LoginRequest, response: Response, db: Session = Depends(get_db)):
    try:
        user = accounts.authenticate(db, data.email, data.password)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Login failed')
        raise Internal('Login failed') from exc

    logger.info('User %s logged in', user.id)
    return success_response(issue_session(response, user, TokenKind.USER), 'Login successful')


@router.post('/logout')
def logout(response: Response):
    transport.clear_token_cookie(response, TokenKind.USER)
    return success_response(message='Logged out successfully')


@router.get('/me')
def me(current_user: Principal = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        user = accounts.get_user(db, current_user.id)
    except SQLAlchemyError as exc:
        logger.exception('Fetching current user failed')
        raise Internal() from exc

    return success_response(UserResponse.model_validate(user))
