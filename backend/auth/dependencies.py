import logging
from dataclasses import dataclass

from fastapi import Request

from backend.auth import jwt_handler, transport
from backend.auth.jwt_handler import TokenKind
from backend.core.errors import Forbidden, Unauthenticated
from backend.models.user import ADMIN_ROLE, USER_ROLE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    id: int
    email: str
    role: str
    kind: TokenKind


def _resolve_principal(request: Request, kind: TokenKind, allowed_roles: set[str], missing_message: str) -> Principal:
    token = transport.extract_token(request, kind)
    if not token:
        logger.debug("Auth failed: no %s token in request", kind.value)
        raise Unauthenticated(missing_message)

    try:
        payload = jwt_handler.decode_access_token(token, kind)
    except jwt_handler.Expired as exc:
        logger.debug("Auth failed: expired %s token", kind.value)
        raise Unauthenticated("Session expired. Please log in again.") from exc
    except jwt_handler.TokenError as exc:
        logger.debug("Auth failed: %s", exc)
        raise Unauthenticated("Invalid token. Access denied.") from exc

    role = payload.get("role")
    if role not in allowed_roles:
        raise Forbidden(
            "Access denied. Admin privileges required." if kind is TokenKind.ADMIN else "Access denied."
        )

    principal = Principal(
        id=int(payload["sub"]),
        email=payload.get("email", ""),
        role=role,
        kind=kind,
    )
    request.state.principal = principal
    return principal


def get_current_user(request: Request) -> Principal:
    # Admin accounts may also hold a user session for browsing the catalog.
    return _resolve_principal(
        request,
        TokenKind.USER,
        {USER_ROLE, ADMIN_ROLE},
        "Please log in to access this resource",
    )


def get_current_admin(request: Request) -> Principal:
    return _resolve_principal(
        request,
        TokenKind.ADMIN,
        {ADMIN_ROLE},
        "Please log in as admin to access this section",
    )
