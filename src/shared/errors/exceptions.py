"""Base application exceptions rendered as structured error responses."""

from typing import Any

from fastapi import HTTPException

from .codes import ERROR_MESSAGES, ERROR_STATUS_CODES, ErrorCode


class AppException(HTTPException):
    """Base exception carrying a stable error code.

    The HTTP status and default message come from the code; ``message`` and
    ``details`` override or extend them for a particular failure.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str | None = None,
        details: Any = None,
        headers: dict[str, str] | None = None,
    ):
        self.code = code
        self.message = message or ERROR_MESSAGES[code]
        self.details = details
        super().__init__(status_code=ERROR_STATUS_CODES[code], detail=self.message, headers=headers)

    def to_body(self) -> dict[str, Any]:
        """Render the ``{success, error}`` envelope."""
        error: dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.details is not None:
            error["details"] = self.details
        return {"success": False, "error": error}


class DatabaseException(AppException):
    """Raised when the credential store fails (transport or constraint error)."""

    def __init__(self, message: str | None = None):
        super().__init__(ErrorCode.DATABASE_ERROR, message)


class InternalServerException(AppException):
    """Raised for unexpected failures that must not leak internals to the caller."""

    def __init__(self, message: str | None = None):
        super().__init__(ErrorCode.INTERNAL_SERVER_ERROR, message)


class ResourceNotFoundException(AppException):
    def __init__(self, message: str | None = None):
        super().__init__(ErrorCode.RESOURCE_NOT_FOUND, message)


class ValidationException(AppException):
    """Raised for malformed input detected outside of request-body validation."""

    def __init__(self, code: ErrorCode = ErrorCode.VALIDATION_ERROR, message: str | None = None, details: Any = None):
        super().__init__(code, message, details)
