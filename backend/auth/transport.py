"""Moves tokens between client and server.

A token is read from the per-kind cookie first and from an
``Authorization: Bearer`` header second. Logout only clears the cookie; a copy
presented as a bearer header stays valid until it expires.
"""

from datetime import datetime

from fastapi import Request, Response

from backend.auth.jwt_handler import TokenKind
from backend.core import config

BEARER_PREFIX = "bearer "


def cookie_name_for(kind: TokenKind) -> str:
    if kind is TokenKind.ADMIN:
        return config.ADMIN_COOKIE_NAME
    return config.USER_COOKIE_NAME


def extract_token(request: Request, kind: TokenKind) -> str | None:
    token = request.cookies.get(cookie_name_for(kind))
    if token:
        return token

    authorization = request.headers.get("authorization", "")
    if authorization.lower().startswith(BEARER_PREFIX):
        token = authorization[len(BEARER_PREFIX):].strip()
        if token:
            return token

    return None


def set_token_cookie(response: Response, token: str, expires_at: datetime, kind: TokenKind) -> None:
    response.set_cookie(
        key=cookie_name_for(kind),
        value=token,
        expires=expires_at,
        httponly=True,
        secure=config.COOKIE_SECURE,
        samesite=config.COOKIE_SAMESITE,
        path="/",
    )


def clear_token_cookie(response: Response, kind: TokenKind) -> None:
    response.set_cookie(
        key=cookie_name_for(kind),
        value="",
        max_age=0,
        expires=0,
        httponly=True,
        secure=config.COOKIE_SECURE,
        samesite=config.COOKIE_SAMESITE,
        path="/",
    )
