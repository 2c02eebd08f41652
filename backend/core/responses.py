from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_response(data: Any = None, message: str | None = None, **extra: Any) -> dict:
    body: dict[str, Any] = {'success': True}
    if data is not None:
        body['data'] = jsonable_encoder(data)
    if message:
        body['message'] = message
    body.update(extra)
    return body


def error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={'success': False, 'message': message},
        headers=headers,
    )
