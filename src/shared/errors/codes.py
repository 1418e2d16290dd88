"""Stable machine-readable error codes with their default message and HTTP status."""

from enum import StrEnum

from fastapi import status


class ErrorCode(StrEnum):
    # Authentication
    AUTH_USER_ALREADY_EXISTS = "AUTH_USER_ALREADY_EXISTS"
    AUTH_INVALID_CREDENTIALS = "AUTH_INVALID_CREDENTIALS"
    AUTH_NO_TOKEN = "AUTH_NO_TOKEN"
    AUTH_INVALID_TOKEN = "AUTH_INVALID_TOKEN"
    AUTH_TOKEN_EXPIRED = "AUTH_TOKEN_EXPIRED"
    AUTH_NO_REFRESH_TOKEN = "AUTH_NO_REFRESH_TOKEN"
    AUTH_INVALID_REFRESH_TOKEN = "AUTH_INVALID_REFRESH_TOKEN"
    AUTH_REFRESH_TOKEN_REVOKED = "AUTH_REFRESH_TOKEN_REVOKED"
    AUTH_USER_NOT_FOUND = "AUTH_USER_NOT_FOUND"
    AUTH_UNAUTHORIZED = "AUTH_UNAUTHORIZED"
    AUTH_FORBIDDEN = "AUTH_FORBIDDEN"

    # Validation
    VALIDATION_ERROR = "VALIDATION_ERROR"
    VALIDATION_INVALID_EMAIL = "VALIDATION_INVALID_EMAIL"
    VALIDATION_INVALID_PASSWORD = "VALIDATION_INVALID_PASSWORD"
    VALIDATION_REQUIRED_FIELD = "VALIDATION_REQUIRED_FIELD"

    # Server
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"

    # Not found
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.AUTH_USER_ALREADY_EXISTS: "A user with this email already exists",
    ErrorCode.AUTH_INVALID_CREDENTIALS: "Invalid email or password",
    ErrorCode.AUTH_NO_TOKEN: "No authentication token provided",
    ErrorCode.AUTH_INVALID_TOKEN: "Invalid or malformed token",
    ErrorCode.AUTH_TOKEN_EXPIRED: "Token has expired",
    ErrorCode.AUTH_NO_REFRESH_TOKEN: "No refresh token provided",
    ErrorCode.AUTH_INVALID_REFRESH_TOKEN: "Invalid refresh token",
    ErrorCode.AUTH_REFRESH_TOKEN_REVOKED: "Refresh token has been revoked",
    ErrorCode.AUTH_USER_NOT_FOUND: "User not found",
    ErrorCode.AUTH_UNAUTHORIZED: "Unauthorized access",
    ErrorCode.AUTH_FORBIDDEN: "Forbidden: insufficient permissions",
    ErrorCode.VALIDATION_ERROR: "Validation error",
    ErrorCode.VALIDATION_INVALID_EMAIL: "Invalid email format",
    ErrorCode.VALIDATION_INVALID_PASSWORD: "Password does not meet requirements",
    ErrorCode.VALIDATION_REQUIRED_FIELD: "Required field is missing",
    ErrorCode.INTERNAL_SERVER_ERROR: "Internal server error",
    ErrorCode.DATABASE_ERROR: "Database operation failed",
    ErrorCode.RESOURCE_NOT_FOUND: "Resource not found",
}


ERROR_STATUS_CODES: dict[ErrorCode, int] = {
    ErrorCode.AUTH_USER_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.AUTH_INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTH_NO_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTH_INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTH_TOKEN_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTH_NO_REFRESH_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTH_INVALID_REFRESH_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTH_REFRESH_TOKEN_REVOKED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTH_USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.AUTH_UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTH_FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.VALIDATION_INVALID_EMAIL: status.HTTP_400_BAD_REQUEST,
    ErrorCode.VALIDATION_INVALID_PASSWORD: status.HTTP_400_BAD_REQUEST,
    ErrorCode.VALIDATION_REQUIRED_FIELD: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INTERNAL_SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.DATABASE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.RESOURCE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
}
