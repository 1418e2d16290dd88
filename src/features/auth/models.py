"""Authentication models (refresh token records and access token blacklist)."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.database.base import Base, ensure_utc, utcnow

# HMAC-SHA256 hex digest
FINGERPRINT_LENGTH = 64


class RefreshToken(Base):
    """One issued refresh credential.

    Only the keyed fingerprint of the token is stored. A record is active while
    ``revoked_at`` is null and ``expires_at`` is in the future; rotation sets
    ``replaced_by_token_id`` on the old record to point at its successor.
    """

    __tablename__ = "refresh_tokens"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Token data
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    token_hash: Mapped[str] = mapped_column(String(FINGERPRINT_LENGTH), unique=True, nullable=False, index=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)

    # Lifecycle
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    revoked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    replaced_by_token_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("refresh_tokens.id", ondelete="SET NULL"), nullable=True
    )

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None

    def is_expired(self, now: datetime | None = None) -> bool:
        return ensure_utc(self.expires_at) <= (now or utcnow())

    def is_active(self, now: datetime | None = None) -> bool:
        """Active iff not revoked and not yet expired."""
        return not self.is_revoked and not self.is_expired(now)


class AccessTokenBlacklist(Base):
    """Access tokens revoked before their natural expiry (e.g. on logout)."""

    __tablename__ = "access_token_blacklist"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    token_hash: Mapped[str] = mapped_column(String(FINGERPRINT_LENGTH), unique=True, nullable=False, index=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    reason: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def is_expired(self, now: datetime | None = None) -> bool:
        return ensure_utc(self.expires_at) <= (now or utcnow())
