# weddings/errors.py

# =================================================================================
# 🚨 SOBRE DE ERRORES Y MANEJADORES DE EXCEPCIONES
# ---------------------------------------------------------------------------------
# - Todo error sale como {"error": <mensaje>, "code": <ErrorCode>}.
# - Los errores de validación añaden la lista de campos en "errors" (400).
# - Los errores de BD se registran con loguru y salen como 500.
# =================================================================================

from enum import Enum
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from weddings.exceptions import GuestNotFoundError, InvitationIdExhaustedError

UNKNOWN_ROUTE_MESSAGE = "Requested resource was not found!"


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    CONFLICT = "CONFLICT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    RATE_LIMITED = "RATE_LIMITED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


STATUS_TO_ERROR_CODE: dict[int, ErrorCode] = {
    400: ErrorCode.BAD_REQUEST,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.METHOD_NOT_ALLOWED,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION_ERROR,
    429: ErrorCode.RATE_LIMITED,
    500: ErrorCode.INTERNAL_ERROR,
    503: ErrorCode.SERVICE_UNAVAILABLE,
}


def get_error_code(status_code: int) -> ErrorCode:
    """Get ErrorCode from HTTP status code."""
    return STATUS_TO_ERROR_CODE.get(status_code, ErrorCode.INTERNAL_ERROR)


def error_response(
    message: str,
    status_code: int,
    *,
    code: Optional[ErrorCode] = None,
    headers: Optional[dict] = None,
    **extra: Any,
) -> JSONResponse:
    content = {"error": message, "code": (code or get_error_code(status_code)).value}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content), headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
        message = UNKNOWN_ROUTE_MESSAGE
    return error_response(message, exc.status_code, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Input errors are 400, not FastAPI's default 422.
    return error_response(
        "Invalid request data",
        status.HTTP_400_BAD_REQUEST,
        code=ErrorCode.VALIDATION_ERROR,
        errors=exc.errors(),
    )


async def guest_not_found_handler(request: Request, exc: GuestNotFoundError) -> JSONResponse:
    return error_response("Guest not found", status.HTTP_404_NOT_FOUND, guestId=exc.guest_id)


async def storage_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Storage error on {} {}: {}", request.method, request.url.path, exc)
    return error_response(
        "An error occurred",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        description=exc.__class__.__name__,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(GuestNotFoundError, guest_not_found_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
    app.add_exception_handler(InvitationIdExhaustedError, storage_error_handler)
