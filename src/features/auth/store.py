"""Credential store: persistence for users, refresh-token records and the access-token blacklist."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.base import utcnow
from src.features.user.models import User, UserRole
from src.shared.errors.exceptions import DatabaseException

from .models import AccessTokenBlacklist, RefreshToken

logger = logging.getLogger(__name__)


@contextmanager
def _database_errors(operation: str) -> Iterator[None]:
    """Surface any SQLAlchemy failure as DatabaseException."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error(f"Credential store operation '{operation}' failed: {type(exc).__name__}")
        raise DatabaseException() from exc


class CredentialStore:
    """Each operation is one logical unit of work on the given session.

    Writes are flushed immediately so constraint violations (duplicate email,
    duplicate fingerprint) surface here as DatabaseException rather than at commit.
    """

    @staticmethod
    async def find_user_by_email(session: AsyncSession, email: str) -> User | None:
        with _database_errors("find_user_by_email"):
            result = await session.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()

    @staticmethod
    async def find_user_by_id(session: AsyncSession, user_id: int) -> User | None:
        with _database_errors("find_user_by_id"):
            result = await session.execute(select(User).where(User.id == user_id))
            return result.scalar_one_or_none()

    @staticmethod
    async def create_user(
        session: AsyncSession,
        email: str,
        password_hash: str,
        name: str | None = None,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Insert a user.

        The caller checks for an existing email first; the unique constraint is
        the backstop for concurrent signups and surfaces as DatabaseException.
        """
        user = User(email=email, password_hash=password_hash, name=name, role=role)
        with _database_errors("create_user"):
            session.add(user)
            await session.flush()
            await session.refresh(user)
        return user

    @staticmethod
    async def store_refresh_token(
        session: AsyncSession, user_id: int, token_hash: str, expires_at: datetime
    ) -> RefreshToken:
        record = RefreshToken(user_id=user_id, token_hash=token_hash, expires_at=expires_at)
        with _database_errors("store_refresh_token"):
            session.add(record)
            await session.flush()
        return record

    @staticmethod
    async def find_refresh_token(session: AsyncSession, token_hash: str) -> RefreshToken | None:
        with _database_errors("find_refresh_token"):
            result = await session.execute(select(RefreshToken).where(RefreshToken.token_hash == token_hash))
            return result.scalar_one_or_none()

    @staticmethod
    async def revoke_refresh_token(
        session: AsyncSession, token_hash: str, replaced_by_token_id: int | None = None
    ) -> bool:
        """Set ``revoked_at`` on the matching record.

        Idempotent: an unknown or already-revoked fingerprint is not an error.

        Returns:
            True if a record was revoked by this call, False otherwise

        """
        values: dict = {"revoked_at": utcnow()}
        if replaced_by_token_id is not None:
            values["replaced_by_token_id"] = replaced_by_token_id

        stmt = (
            update(RefreshToken)
            .where(RefreshToken.token_hash == token_hash, RefreshToken.revoked_at.is_(None))
            .values(**values)
        )
        with _database_errors("revoke_refresh_token"):
            result = await session.execute(stmt)
            await session.flush()
        return bool(result.rowcount)

    @staticmethod
    async def blacklist_access_token(
        session: AsyncSession, token_hash: str, expires_at: datetime, reason: str | None = None
    ) -> None:
        """Record an access token as revoked until ``expires_at``. Re-blacklisting is a no-op."""
        with _database_errors("blacklist_access_token"):
            result = await session.execute(
                select(AccessTokenBlacklist).where(AccessTokenBlacklist.token_hash == token_hash)
            )
            if result.scalar_one_or_none() is not None:
                return
            session.add(AccessTokenBlacklist(token_hash=token_hash, expires_at=expires_at, reason=reason))
            await session.flush()

    @staticmethod
    async def is_access_token_blacklisted(session: AsyncSession, token_hash: str) -> bool:
        """True while a matching, unexpired blacklist entry exists."""
        with _database_errors("is_access_token_blacklisted"):
            result = await session.execute(
                select(AccessTokenBlacklist).where(AccessTokenBlacklist.token_hash == token_hash)
            )
            entry = result.scalar_one_or_none()
        return entry is not None and not entry.is_expired()
