"""Authentication exceptions."""

from src.shared.errors.codes import ErrorCode
from src.shared.errors.exceptions import AppException


class AuthenticationException(AppException):
    """Base 401 exception; advertises the bearer scheme."""

    def __init__(self, code: ErrorCode = ErrorCode.AUTH_UNAUTHORIZED, message: str | None = None):
        super().__init__(code, message, headers={"WWW-Authenticate": "Bearer"})


class InvalidCredentialsException(AuthenticationException):
    """Raised when the email is unknown or the password is wrong (never says which)."""

    def __init__(self):
        super().__init__(ErrorCode.AUTH_INVALID_CREDENTIALS)


class NoTokenException(AuthenticationException):
    """Raised when no well-formed ``Authorization: Bearer`` header is present."""

    def __init__(self):
        super().__init__(ErrorCode.AUTH_NO_TOKEN)


class InvalidTokenException(AuthenticationException):
    """Raised when a token is malformed, badly signed, of the wrong kind or revoked."""

    def __init__(self, message: str | None = None):
        super().__init__(ErrorCode.AUTH_INVALID_TOKEN, message)


class TokenExpiredException(AuthenticationException):
    """Raised when a correctly signed token is past its expiry."""

    def __init__(self):
        super().__init__(ErrorCode.AUTH_TOKEN_EXPIRED)


class NoRefreshTokenException(AuthenticationException):
    def __init__(self):
        super().__init__(ErrorCode.AUTH_NO_REFRESH_TOKEN)


class InvalidRefreshTokenException(AuthenticationException):
    """Raised when the refresh token fails signature, expiry or kind checks."""

    def __init__(self):
        super().__init__(ErrorCode.AUTH_INVALID_REFRESH_TOKEN)


class RefreshTokenRevokedException(AuthenticationException):
    """Raised when the refresh token has no active stored record."""

    def __init__(self):
        super().__init__(ErrorCode.AUTH_REFRESH_TOKEN_REVOKED)


class UnauthorizedException(AuthenticationException):
    """Raised when a verified token no longer maps to a user."""

    def __init__(self):
        super().__init__(ErrorCode.AUTH_UNAUTHORIZED)


class ForbiddenException(AppException):
    """Raised when the authenticated user lacks the required role."""

    def __init__(self, message: str | None = None):
        super().__init__(ErrorCode.AUTH_FORBIDDEN, message)


class InsufficientRoleException(ForbiddenException):
    def __init__(self, required_roles: list[str]):
        roles_str = ", ".join(required_roles)
        super().__init__(f"User does not have required role(s): {roles_str}")
