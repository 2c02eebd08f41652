from datetime import datetime, timedelta, timezone
from enum import Enum

import jwt

from backend.core import config


class TokenKind(str, Enum):
    USER = "user"
    ADMIN = "admin"


class TokenError(Exception):
    """Raised when a token cannot be accepted for the requested kind."""


class InvalidSignature(TokenError):
    pass


class Expired(TokenError):
    pass


class Malformed(TokenError):
    pass


def _secret_for(kind: TokenKind) -> str:
    if kind is TokenKind.ADMIN:
        return config.JWT_ADMIN_SECRET
    return config.JWT_SECRET


def _expires_minutes_for(kind: TokenKind) -> int:
    if kind is TokenKind.ADMIN:
        return config.JWT_ADMIN_EXPIRES_MINUTES
    return config.JWT_EXPIRES_MINUTES


def create_access_token(
    principal_id: int,
    email: str,
    role: str,
    kind: TokenKind,
    expires_minutes: int | None = None,
) -> tuple[str, datetime]:
    now = datetime.now(timezone.utc)
    expire = now + timedelta(minutes=expires_minutes or _expires_minutes_for(kind))
    payload = {
        "sub": str(principal_id),
        "email": email,
        "role": role,
        "kind": kind.value,
        "iat": now,
        "exp": expire,
    }
    token = jwt.encode(payload, _secret_for(kind), algorithm=config.JWT_ALGORITHM)
    return token, expire


def decode_access_token(token: str, kind: TokenKind) -> dict:
    # The secret decides the kind; the "kind" and "role" claims are never trusted on their own.
    try:
        payload = jwt.decode(
            token,
            _secret_for(kind),
            algorithms=[config.JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise Expired("Token has expired") from exc
    except jwt.InvalidSignatureError as exc:
        raise InvalidSignature("Token signature is invalid") from exc
    except jwt.InvalidTokenError as exc:
        raise Malformed("Token is malformed") from exc

    if not str(payload.get("sub", "")).isdigit():
        raise Malformed("Token subject is invalid")
    return payload
