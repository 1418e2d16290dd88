"""Immutable configuration for the token lifecycle."""

from dataclasses import dataclass
from datetime import timedelta
from enum import StrEnum


class RefreshTokenTransport(StrEnum):
    """How the refresh token travels between client and server.

    COOKIE: httpOnly cookie set by the server, read back on /auth/refresh and /auth/logout.
    HEADER: returned in the response body, sent back in the X-Refresh-Token header.
    """

    COOKIE = "cookie"
    HEADER = "header"


REFRESH_TOKEN_HEADER = "X-Refresh-Token"


@dataclass(frozen=True)
class PasswordHashCost:
    """Argon2 cost parameters, fixed for the whole process."""

    time_cost: int = 3
    memory_cost: int = 65536  # KiB
    parallelism: int = 4


@dataclass(frozen=True)
class AuthConfig:
    """Everything the token issuer and auth service need, passed at construction."""

    secret_key: str
    fingerprint_key: str
    jwt_algorithm: str = "HS256"
    access_token_ttl: timedelta = timedelta(minutes=15)
    refresh_token_ttl: timedelta = timedelta(days=7)
    refresh_token_transport: RefreshTokenTransport = RefreshTokenTransport.COOKIE
    refresh_cookie_name: str = "refreshToken"
    secure_cookies: bool = False
    rotate_refresh_tokens: bool = False
    check_access_token_blacklist: bool = True
    password_hash_cost: PasswordHashCost = PasswordHashCost()

    @property
    def refresh_token_max_age(self) -> int:
        """Refresh token lifetime in whole seconds (cookie Max-Age)."""
        return int(self.refresh_token_ttl.total_seconds())
