"""JWT issuance and verification for access and refresh tokens."""

import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError, PyJWTError

from src.features.user.models import User
from src.shared.errors.exceptions import InternalServerException

from .config import AuthConfig
from .exceptions import InvalidTokenException, TokenExpiredException

logger = logging.getLogger(__name__)


class TokenType(StrEnum):
    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True)
class TokenClaims:
    """Decoded, verified token payload."""

    user_id: int
    email: str
    token_type: TokenType
    issued_at: datetime
    expires_at: datetime
    jti: str
    role: str | None = None


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime


class TokenIssuer:
    """Signs and verifies self-contained tokens with the server-held secret.

    Verification checks signature, expiry and kind only; revocation of refresh
    tokens is the store's concern.
    """

    def __init__(self, config: AuthConfig):
        self.config = config

    def _encode(self, payload: dict[str, Any]) -> str:
        try:
            return jwt.encode(payload, self.config.secret_key, algorithm=self.config.jwt_algorithm)
        except (PyJWTError, NotImplementedError) as exc:
            logger.error(f"Token signing failed: {type(exc).__name__}")
            raise InternalServerException() from exc

    def issue_access_token(self, user: User, now: datetime | None = None) -> IssuedToken:
        """Create a short-lived access token carrying id, email and role.

        Args:
            user: The authenticated user
            now: Issue time (defaults to the current time)

        Returns:
            The encoded token and its expiry

        """
        issued_at = now or datetime.now(UTC)
        expires_at = issued_at + self.config.access_token_ttl
        payload = {
            "sub": str(user.id),
            "email": user.email,
            "role": str(user.role),
            "type": TokenType.ACCESS.value,
            "iat": issued_at,
            "exp": expires_at,
            "jti": secrets.token_hex(16),
        }
        return IssuedToken(token=self._encode(payload), expires_at=expires_at)

    def issue_refresh_token(self, user: User, now: datetime | None = None) -> IssuedToken:
        """Create a long-lived refresh token; only its fingerprint is ever stored."""
        issued_at = now or datetime.now(UTC)
        expires_at = issued_at + self.config.refresh_token_ttl
        payload = {
            "sub": str(user.id),
            "email": user.email,
            "type": TokenType.REFRESH.value,
            "iat": issued_at,
            "exp": expires_at,
            "jti": secrets.token_hex(16),
        }
        return IssuedToken(token=self._encode(payload), expires_at=expires_at)

    def verify(self, token: str, expected_type: TokenType | None = None) -> TokenClaims:
        """Decode and verify a token.

        Args:
            token: Encoded JWT
            expected_type: Required token kind, if any

        Returns:
            The verified claims

        Raises:
            TokenExpiredException: Valid signature but past expiry
            InvalidTokenException: Malformed, badly signed, missing claims or wrong kind

        """
        try:
            payload = jwt.decode(
                token,
                self.config.secret_key,
                algorithms=[self.config.jwt_algorithm],
                options={"require": ["exp", "iat", "sub", "type"]},
            )
        except ExpiredSignatureError as err:
            raise TokenExpiredException() from err
        except InvalidTokenError as err:
            raise InvalidTokenException() from err

        try:
            token_type = TokenType(payload["type"])
            user_id = int(payload["sub"])
        except ValueError as err:
            raise InvalidTokenException("Invalid token payload") from err

        if expected_type is not None and token_type != expected_type:
            raise InvalidTokenException(f"Invalid token type, expected {expected_type.value}")

        return TokenClaims(
            user_id=user_id,
            email=str(payload.get("email", "")),
            token_type=token_type,
            issued_at=datetime.fromtimestamp(payload["iat"], UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
            jti=str(payload.get("jti", "")),
            role=payload.get("role"),
        )