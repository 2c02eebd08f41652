"""Application error taxonomy.

Every error carries the HTTP status it maps to and a message that is safe to
show to the client. ``backend.main`` renders them into the standard
``{"success": false, "message": ...}`` envelope.
"""

from fastapi import status


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = 'Server error'

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = 'Please log in to access this resource'


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = 'Access denied'


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'Resource not found'


class ValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Invalid request'


class ConflictOrInconsistency(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = 'Request conflicts with the current state'


class Internal(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = 'Server error'
