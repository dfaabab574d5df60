"""Translate exceptions into the error envelope."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from travel_backend.api.models import failure
from travel_backend.shared import (
    INTERNAL_ERROR_MESSAGE,
    AppError,
    DetailCode,
    ErrorCode,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)

STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorCode.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PRODUCT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.DUPLICATE_ENTRY: status.HTTP_409_CONFLICT,
    ErrorCode.EMAIL_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.PHONE_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.PRODUCT_NAME_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.STATE_CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.RATE_LIMIT_EXCEEDED: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorCode.SERVICE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}

_DETAIL_BY_ERROR_TYPE: dict[str, DetailCode] = {
    "missing": DetailCode.IS_REQUIRED,
    "string_too_short": DetailCode.LENGTH_TOO_SHORT,
    "string_too_long": DetailCode.LENGTH_TOO_LONG,
    "too_short": DetailCode.INVALID_LENGTH,
    "too_long": DetailCode.INVALID_LENGTH,
    "string_pattern_mismatch": DetailCode.INVALID_FORMAT,
    "json_invalid": DetailCode.INVALID_FORMAT,
    "greater_than": DetailCode.VALUE_TOO_LOW,
    "greater_than_equal": DetailCode.VALUE_TOO_LOW,
    "less_than": DetailCode.VALUE_TOO_HIGH,
    "less_than_equal": DetailCode.VALUE_TOO_HIGH,
    "enum": DetailCode.INVALID_CHOICE,
    "literal_error": DetailCode.INVALID_CHOICE,
}

_CODE_BY_HTTP_STATUS: dict[int, ErrorCode] = {
    status.HTTP_401_UNAUTHORIZED: ErrorCode.UNAUTHENTICATED,
    status.HTTP_403_FORBIDDEN: ErrorCode.UNAUTHORIZED,
    status.HTTP_404_NOT_FOUND: ErrorCode.NOT_FOUND,
    status.HTTP_429_TOO_MANY_REQUESTS: ErrorCode.RATE_LIMIT_EXCEEDED,
    status.HTTP_503_SERVICE_UNAVAILABLE: ErrorCode.SERVICE_UNAVAILABLE,
}


def status_for(code: ErrorCode) -> int:
    """Return the HTTP status for an error code; unknown codes map to 500."""
    return STATUS_BY_CODE.get(code, status.HTTP_500_INTERNAL_SERVER_ERROR)


def detail_code_for(error_type: str) -> DetailCode:
    if error_type in _DETAIL_BY_ERROR_TYPE:
        return _DETAIL_BY_ERROR_TYPE[error_type]
    if error_type.endswith(("_type", "_parsing")):
        return DetailCode.INVALID_TYPE
    return DetailCode.INVALID_VALUE


def _field_name(location: Sequence[str | int]) -> str:
    parts = [str(part) for part in location]
    if len(parts) > 1 and parts[0] in {"body", "query", "path", "header"}:
        parts = parts[1:]
    return ".".join(parts)


def validation_details(errors: Sequence[Any]) -> dict[str, DetailCode]:
    """Collapse pydantic errors into ``{field: detail_code}``, first error wins."""
    details: dict[str, DetailCode] = {}
    for error in errors:
        field = _field_name(error.get("loc", ()))
        details.setdefault(field, detail_code_for(error.get("type", "")))
    return details


def error_response(
    status_code: int,
    code: str,
    message: str,
    details: Any | None = None,
) -> JSONResponse:
    body = failure(code, message, details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    request.state.error = exc
    status_code = status_for(exc.code)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("Request failed: %s", exc, exc_info=exc)
        return error_response(status_code, exc.code, INTERNAL_ERROR_MESSAGE)
    return error_response(status_code, exc.code, exc.message, exc.details)


def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    request.state.error = exc
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        ErrorCode.VALIDATION,
        "request validation failed",
        validation_details(exc.errors()),
    )


def handle_http_error(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    code = _CODE_BY_HTTP_STATUS.get(exc.status_code, ErrorCode.BAD_REQUEST)
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        request.state.error = exc
        code = _CODE_BY_HTTP_STATUS.get(exc.status_code, ErrorCode.INTERNAL)
    response = error_response(exc.status_code, code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    request.state.error = exc
    logger.error("Unhandled exception", exc_info=exc)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorCode.INTERNAL,
        INTERNAL_ERROR_MESSAGE,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope-producing handlers on *app*."""
    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


__all__ = [
    "STATUS_BY_CODE",
    "detail_code_for",
    "register_exception_handlers",
    "status_for",
    "validation_details",
]
