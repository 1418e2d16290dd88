"""Authentication schemas (DTOs)."""

from typing import Any

from pydantic import BaseModel, Field, SerializerFunctionWrapHandler, field_validator, model_serializer

from src.features.user.schemas import UserPublic
from src.shared.responses import CamelModel, SuccessResponse
from src.shared.validators.email import MAX_EMAIL_LENGTH, validate_email_format
from src.shared.validators.password import MAX_PASSWORD_LENGTH, MIN_PASSWORD_LENGTH, validate_password_strength


# Request schemas
class SignupRequest(BaseModel):
    """Signup request.

    Note: The email shape is checked with email-validator but stored exactly as given.
    """

    email: str = Field(..., max_length=MAX_EMAIL_LENGTH)
    password: str = Field(
        ...,
        min_length=MIN_PASSWORD_LENGTH,
        max_length=MAX_PASSWORD_LENGTH,
        description=f"Password (minimum {MIN_PASSWORD_LENGTH} characters)",
    )
    name: str | None = Field(None, max_length=255)

    @field_validator("email")
    @classmethod
    def check_email_format(cls, value: str) -> str:
        return validate_email_format(value)

    @field_validator("password")
    @classmethod
    def check_password_strength(cls, value: str) -> str:
        """Validate password using shared validator."""
        return validate_password_strength(value)


class LoginRequest(BaseModel):
    """Login request.

    The password is not checked here at all: a wrong password of any shape,
    empty included, must fail as invalid credentials, not as a validation error.
    """

    email: str = Field(..., max_length=MAX_EMAIL_LENGTH)
    password: str

    @field_validator("email")
    @classmethod
    def check_email_format(cls, value: str) -> str:
        return validate_email_format(value)


# Response schemas
class _CarriesRefreshToken(CamelModel):
    """Adds ``refreshToken``, present only when the token travels in the body (header transport)."""

    refresh_token: str | None = None

    @model_serializer(mode="wrap")
    def _omit_missing_refresh_token(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        for key in ("refreshToken", "refresh_token"):
            if key in data and data[key] is None:
                del data[key]
        return data


class AuthData(_CarriesRefreshToken):
    """Payload of signup/login."""

    user: UserPublic
    access_token: str


class TokenData(_CarriesRefreshToken):
    """Payload of refresh."""

    access_token: str


class ProfileData(CamelModel):
    user: UserPublic


AuthResponse = SuccessResponse[AuthData]
TokenResponse = SuccessResponse[TokenData]
ProfileResponse = SuccessResponse[ProfileData]
