"""User service layer."""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.errors.exceptions import DatabaseException
from src.shared.pagination.pagination import PaginationParams

from .models import User

logger = logging.getLogger(__name__)


class UserService:
    """Read-only user directory operations for administrators."""

    @staticmethod
    async def get_user(session: AsyncSession, user_id: int) -> User | None:
        """Get user by ID."""
        try:
            result = await session.execute(select(User).where(User.id == user_id))
        except SQLAlchemyError as exc:
            logger.error(f"Failed to load user {user_id}: {type(exc).__name__}")
            raise DatabaseException() from exc
        return result.scalar_one_or_none()

    @staticmethod
    async def get_users(session: AsyncSession, pagination: PaginationParams) -> tuple[list[User], int]:
        """Get paginated users list ordered by id.

        Args:
            session: Database session
            pagination: PaginationParams with page and page_size

        Returns:
            Tuple of (users, total_count)

        """
        try:
            total = (await session.execute(select(func.count()).select_from(User))).scalar_one()

            stmt = select(User).order_by(User.id).offset(pagination.skip).limit(pagination.limit)
            users = list((await session.execute(stmt)).scalars().all())
        except SQLAlchemyError as exc:
            logger.error(f"Failed to list users: {type(exc).__name__}")
            raise DatabaseException() from exc

        return users, total
