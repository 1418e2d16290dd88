"""User directory router (admin only)."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.dependencies import get_db_session
from src.features.auth.dependencies import require_role
from src.shared.errors.exceptions import ResourceNotFoundException
from src.shared.pagination.pagination import PaginationParams, pagination_params
from src.shared.responses import SuccessResponse

from .models import User, UserRole
from .schemas import UserListResponse, UserPublic
from .service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["User Management"])


@router.get("", response_model=SuccessResponse[UserListResponse])
async def list_users(
    pagination: PaginationParams = Depends(pagination_params),
    current_user: User = Depends(require_role(UserRole.ADMIN)),
    session: AsyncSession = Depends(get_db_session),
):
    """List all users (admin only).

    - `page`: Page number (1-indexed, default: 1)
    - `page_size`: Items per page (default: 50, max: 1000)
    """
    users, total = await UserService.get_users(session, pagination)
    logger.info(f"User directory listed by admin id={current_user.id}")
    return SuccessResponse(
        data=UserListResponse(
            items=[UserPublic.model_validate(u) for u in users],
            total=total,
            page=pagination.page,
            page_size=pagination.page_size,
        )
    )


@router.get(
    "/{user_id}",
    response_model=SuccessResponse[UserPublic],
    dependencies=[Depends(require_role(UserRole.ADMIN))],
)
async def get_user(user_id: int, session: AsyncSession = Depends(get_db_session)):
    """Get user by ID (admin only)."""
    user = await UserService.get_user(session, user_id)

    if not user:
        raise ResourceNotFoundException("User not found")

    return SuccessResponse(data=UserPublic.model_validate(user))
