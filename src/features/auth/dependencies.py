"""Authentication dependencies for FastAPI (request gate)."""

import logging
from functools import lru_cache

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import settings
from src.database.dependencies import get_db_session
from src.features.user.models import User, UserRole
from src.features.user.schemas import UserPublic

from .config import AuthConfig
from .exceptions import InsufficientRoleException, InvalidTokenException, NoTokenException, UnauthorizedException
from .jwt_utils import TokenType
from .service import AuthService
from .store import CredentialStore

logger = logging.getLogger(__name__)

# auto_error=False: a missing or non-Bearer header is reported as AUTH_NO_TOKEN by us.
security = HTTPBearer(auto_error=False)


@lru_cache
def get_auth_config() -> AuthConfig:
    """Auth configuration snapshot built once from settings."""
    return settings.auth_config()


def get_auth_service(config: AuthConfig = Depends(get_auth_config)) -> AuthService:
    return AuthService(config)


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    session: AsyncSession = Depends(get_db_session),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """Resolve the user behind the bearer access token.

    Args:
        request: Incoming request; the resolved user is attached to ``request.state.user``
        credentials: Parsed ``Authorization: Bearer <token>`` header
        session: Database session
        auth_service: Provides the token issuer and fingerprints

    Returns:
        User object, freshly loaded from the store

    Raises:
        NoTokenException: Header missing or not of the form ``Bearer <token>``
        TokenExpiredException: Access token past its expiry
        InvalidTokenException: Malformed, badly signed, refresh token presented, or blacklisted
        UnauthorizedException: Token's user no longer exists

    """
    if credentials is None or not credentials.credentials:
        raise NoTokenException()

    token = credentials.credentials
    claims = auth_service.issuer.verify(token, TokenType.ACCESS)

    if auth_service.config.check_access_token_blacklist:
        if await CredentialStore.is_access_token_blacklisted(session, auth_service.fingerprint(token)):
            logger.warning(f"Blacklisted access token presented for user id={claims.user_id}")
            raise InvalidTokenException("Token has been revoked")

    user = await CredentialStore.find_user_by_id(session, claims.user_id)
    if user is None:
        raise UnauthorizedException()

    request.state.user = UserPublic.model_validate(user)
    return user


def require_role(*required_roles: UserRole):
    """Dependency factory to require specific roles.

    The role checked is the one currently stored for the user, not the claim
    embedded in the token.

    Usage:
        Depends(require_role(UserRole.ADMIN))
    """

    async def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if not any(current_user.has_role(role) for role in required_roles):
            raise InsufficientRoleException([r.value for r in required_roles])
        return current_user

    return role_checker


def get_bearer_token(credentials: HTTPAuthorizationCredentials | None = Depends(security)) -> str | None:
    """Bearer token if present, without verifying it (used by logout)."""
    if credentials is None:
        return None
    return credentials.credentials or None
