"""User-related exceptions."""

from src.shared.errors.codes import ErrorCode
from src.shared.errors.exceptions import AppException


class UserAlreadyExists(AppException):
    """Raised when signing up with an email that is already registered."""

    def __init__(self):
        super().__init__(ErrorCode.AUTH_USER_ALREADY_EXISTS)


class UserNotFound(AppException):
    """Raised when the user a refresh token names no longer exists."""

    def __init__(self):
        super().__init__(ErrorCode.AUTH_USER_NOT_FOUND)
