import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}

APP_ENV = os.getenv("APP_ENV", "development")
IS_PRODUCTION = APP_ENV.lower() == "production"

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./applynext.db")

CLIENT_URL = os.getenv("CLIENT_URL", "http://localhost:3000")

DEFAULT_USER_SECRET = "change-me"
DEFAULT_ADMIN_SECRET = "change-me-admin"

JWT_SECRET = os.getenv("JWT_SECRET", DEFAULT_USER_SECRET)
JWT_ADMIN_SECRET = os.getenv("JWT_ADMIN_SECRET", DEFAULT_ADMIN_SECRET)
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", str(7 * 24 * 60)))
JWT_ADMIN_EXPIRES_MINUTES = int(os.getenv("JWT_ADMIN_EXPIRES_MINUTES", str(24 * 60)))

USER_COOKIE_NAME = "token"
ADMIN_COOKIE_NAME = "adminToken"
COOKIE_SECURE = _get_bool(os.getenv("COOKIE_SECURE"), default=IS_PRODUCTION)
COOKIE_SAMESITE = os.getenv("COOKIE_SAMESITE", "lax").strip().lower()

ALLOWED_SAMESITE_VALUES = {"lax", "strict"}


def validate_runtime_config() -> None:
    if COOKIE_SAMESITE not in ALLOWED_SAMESITE_VALUES:
        raise RuntimeError("COOKIE_SAMESITE must be 'lax' or 'strict'.")
    if not IS_PRODUCTION:
        return
    if JWT_SECRET == DEFAULT_USER_SECRET:
        raise RuntimeError("JWT_SECRET must be set in production.")
    if JWT_ADMIN_SECRET == DEFAULT_ADMIN_SECRET:
        raise RuntimeError("JWT_ADMIN_SECRET must be set in production.")
    if JWT_SECRET == JWT_ADMIN_SECRET:
        raise RuntimeError("JWT_SECRET and JWT_ADMIN_SECRET must differ.")
