"""Exception handlers rendering every failure as ``{success: false, error: {...}}``."""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .codes import ERROR_MESSAGES, ErrorCode
from .exceptions import AppException

logger = logging.getLogger(__name__)

_STATUS_TO_CODE = {
    400: ErrorCode.VALIDATION_ERROR,
    401: ErrorCode.AUTH_UNAUTHORIZED,
    403: ErrorCode.AUTH_FORBIDDEN,
    404: ErrorCode.RESOURCE_NOT_FOUND,
}


def error_body(code: ErrorCode, message: str | None = None, details: Any = None) -> dict[str, Any]:
    error: dict[str, Any] = {"code": code.value, "message": message or ERROR_MESSAGES[code]}
    if details is not None:
        error["details"] = details
    return {"success": False, "error": error}


def classify_validation_errors(errors: list[dict[str, Any]]) -> ErrorCode:
    """Pick the most specific validation code for a list of pydantic errors."""
    for err in errors:
        if err.get("type") == "missing":
            return ErrorCode.VALIDATION_REQUIRED_FIELD
    for err in errors:
        loc = err.get("loc") or ()
        if "email" in loc:
            return ErrorCode.VALIDATION_INVALID_EMAIL
        if "password" in loc:
            return ErrorCode.VALIDATION_INVALID_PASSWORD
    return ErrorCode.VALIDATION_ERROR


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    code = classify_validation_errors(list(errors))
    details = jsonable_encoder(
        [{"loc": err.get("loc"), "msg": err.get("msg"), "type": err.get("type")} for err in errors]
    )
    return JSONResponse(status_code=400, content=error_body(code, details=details))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code >= 500:
        code = ErrorCode.INTERNAL_SERVER_ERROR
    else:
        code = _STATUS_TO_CODE.get(exc.status_code, ErrorCode.VALIDATION_ERROR)
    message = exc.detail if isinstance(exc.detail, str) else None
    return JSONResponse(status_code=exc.status_code, content=error_body(code, message), headers=exc.headers)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, return a generic 500."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content=error_body(ErrorCode.INTERNAL_SERVER_ERROR))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
