import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException

from backend.core import config
from backend.core.errors import AppError
from backend.core.responses import error_response
from backend.database import Base, engine
from backend import models  # noqa: F401
from backend.routes import admin_auth_routes, admin_routes, auth_routes, course_routes, user_routes

app = FastAPI(title='ApplyNext API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.CLIENT_URL],
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')


@app.exception_handler(AppError)
async def handle_app_error(request: Request, exc: AppError):
    return error_response(exc.status_code, exc.message)


@app.exception_handler(HTTPException)
async def handle_http_exception(request: Request, exc: HTTPException):
    message = exc.detail if isinstance(exc.detail, str) else 'Request failed'
    return error_response(exc.status_code, message, headers=getattr(exc, 'headers', None))


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = 'Invalid request'
    if errors:
        first = errors[0]
        location = '.'.join(str(part) for part in first.get('loc', ()) if part != 'body')
        detail = str(first.get('msg', '')).removeprefix('Value error, ')
        message = f'{location}: {detail}' if location else detail
    return error_response(400, message)


@app.exception_handler(SQLAlchemyError)
async def handle_database_error(request: Request, exc: SQLAlchemyError):
    logger.error('Unhandled database error on %s %s', request.method, request.url.path, exc_info=exc)
    return error_response(500, 'Server error')


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception('Unhandled error on %s %s', request.method, request.url.path, exc_info=exc)
    return error_response(500, 'Server error')


@app.get('/api/health')
def health():
    return {
        'status': 'OK',
        'message': 'ApplyNext Platform API is running',
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'environment': config.APP_ENV,
    }


app.include_router(auth_routes.router, prefix='/api/auth')
app.include_router(user_routes.router, prefix='/api/user')
app.include_router(admin_auth_routes.router, prefix='/api/admin/auth')
app.include_router(admin_routes.router, prefix='/api/admin')
app.include_router(course_routes.router, prefix='/api/courses')
