"""Authentication router (signup, login, refresh, logout, profile)."""

import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.dependencies import get_db_session
from src.features.user.models import User
from src.features.user.schemas import UserPublic
from src.shared.responses import MessageResponse

from .config import REFRESH_TOKEN_HEADER, AuthConfig, RefreshTokenTransport
from .dependencies import get_auth_service, get_bearer_token, get_current_user
from .schemas import (
    AuthData,
    AuthResponse,
    LoginRequest,
    ProfileData,
    ProfileResponse,
    SignupRequest,
    TokenData,
    TokenResponse,
)
from .service import AuthResult, AuthService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["Authentication"])


def read_refresh_token(request: Request, config: AuthConfig) -> str | None:
    """Pull the refresh token from wherever the deployment carries it."""
    if config.refresh_token_transport == RefreshTokenTransport.COOKIE:
        return request.cookies.get(config.refresh_cookie_name) or None
    return request.headers.get(REFRESH_TOKEN_HEADER) or None


def set_refresh_cookie(response: Response, token: str, config: AuthConfig) -> None:
    response.set_cookie(
        key=config.refresh_cookie_name,
        value=token,
        max_age=config.refresh_token_max_age,
        path="/",
        httponly=True,
        secure=config.secure_cookies,
        samesite="strict",
    )


def clear_refresh_cookie(response: Response, config: AuthConfig) -> None:
    response.set_cookie(
        key=config.refresh_cookie_name,
        value="",
        max_age=0,
        path="/",
        httponly=True,
        secure=config.secure_cookies,
        samesite="strict",
    )


def _deliver_refresh_token(response: Response, token: str, config: AuthConfig) -> str | None:
    """Set the cookie (cookie mode) or hand the token back for the body (header mode)."""
    if config.refresh_token_transport == RefreshTokenTransport.COOKIE:
        set_refresh_cookie(response, token, config)
        return None
    return token


def _auth_response(result: AuthResult, response: Response, config: AuthConfig) -> AuthResponse:
    return AuthResponse(
        data=AuthData(
            user=UserPublic.model_validate(result.user),
            access_token=result.access_token,
            refresh_token=_deliver_refresh_token(response, result.refresh_token, config),
        )
    )


@router.post("/signup", response_model=AuthResponse)
async def signup(
    data: SignupRequest,
    response: Response,
    session: AsyncSession = Depends(get_db_session),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Register a new user.

    - **email**: Email address (validated via email-validator)
    - **password**: Password (minimum 8 characters)
    - **name**: Optional display name

    Returns the public user, an access token and the refresh token (cookie or body).
    """
    result = await auth_service.signup(session, data.email, data.password, data.name)
    await session.commit()
    return _auth_response(result, response, auth_service.config)


@router.post("/login", response_model=AuthResponse)
async def login(
    data: LoginRequest,
    response: Response,
    session: AsyncSession = Depends(get_db_session),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Login and get JWT tokens."""
    result = await auth_service.login(session, data.email, data.password)
    await session.commit()
    return _auth_response(result, response, auth_service.config)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    request: Request,
    response: Response,
    session: AsyncSession = Depends(get_db_session),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Mint a new access token from the refresh token (cookie or X-Refresh-Token header)."""
    config = auth_service.config
    result = await auth_service.refresh(session, read_refresh_token(request, config))
    await session.commit()

    rotated = None
    if result.refresh_token is not None:
        rotated = _deliver_refresh_token(response, result.refresh_token, config)

    return TokenResponse(data=TokenData(access_token=result.access_token, refresh_token=rotated))


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    access_token: str | None = Depends(get_bearer_token),
    session: AsyncSession = Depends(get_db_session),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Revoke the refresh token and clear the cookie. Always succeeds."""
    config = auth_service.config
    await auth_service.logout(session, read_refresh_token(request, config), access_token)
    await session.commit()

    if config.refresh_token_transport == RefreshTokenTransport.COOKIE:
        clear_refresh_cookie(response, config)

    return MessageResponse(message="Logged out successfully")


@router.get("/profile", response_model=ProfileResponse)
async def profile(current_user: User = Depends(get_current_user)):
    """Get the authenticated user's public profile."""
    return ProfileResponse(data=ProfileData(user=UserPublic.model_validate(current_user)))
