"""Authentication service layer."""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from src.features.user.exceptions import UserAlreadyExists, UserNotFound
from src.features.user.models import User, UserRole
from src.shared.errors.codes import ErrorCode
from src.shared.errors.exceptions import DatabaseException, ValidationException
from src.shared.validators.password import validate_password_strength

from .config import AuthConfig
from .exceptions import (
    InvalidCredentialsException,
    InvalidRefreshTokenException,
    InvalidTokenException,
    NoRefreshTokenException,
    RefreshTokenRevokedException,
    TokenExpiredException,
)
from .jwt_utils import TokenIssuer, TokenType
from .password_hasher import PasswordHasher, TokenFingerprinter
from .store import CredentialStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    """Outcome of signup/login: the user and a fresh token pair."""

    user: User
    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class RefreshResult:
    access_token: str
    refresh_token: str | None = None  # set only when rotation is enabled


class AuthService:
    """Signup, login, refresh and logout over the credential store.

    All state lives in the store; an instance only holds configuration and the
    hashing/signing primitives built from it.
    """

    def __init__(
        self,
        config: AuthConfig,
        hasher: PasswordHasher | None = None,
        issuer: TokenIssuer | None = None,
        fingerprinter: TokenFingerprinter | None = None,
    ):
        self.config = config
        self.hasher = hasher or PasswordHasher(config.password_hash_cost)
        self.issuer = issuer or TokenIssuer(config)
        self.fingerprinter = fingerprinter or TokenFingerprinter(config.fingerprint_key)

    def fingerprint(self, token: str) -> str:
        return self.fingerprinter.fingerprint(token)

    async def signup(
        self,
        session: AsyncSession,
        email: str,
        password: str,
        name: str | None = None,
        role: UserRole = UserRole.USER,
    ) -> AuthResult:
        """Register a user and log them in.

        Args:
            session: Database session
            email: Email, stored exactly as given
            password: Plain text password
            name: Optional display name
            role: Role for the new user

        Returns:
            AuthResult with the new user and a token pair

        Raises:
            ValidationException: If the password does not meet the policy
            UserAlreadyExists: If the email is already registered
            DatabaseException: If the store fails (including a concurrent duplicate signup)

        """
        try:
            validate_password_strength(password)
        except ValueError as exc:
            raise ValidationException(ErrorCode.VALIDATION_INVALID_PASSWORD, str(exc)) from exc

        if await CredentialStore.find_user_by_email(session, email) is not None:
            raise UserAlreadyExists()

        password_hash = await self.hasher.hash_async(password)
        user = await CredentialStore.create_user(session, email, password_hash, name=name, role=role)

        result = await self._issue_token_pair(session, user)
        logger.info(f"User signed up: id={user.id}")
        return result

    async def login(self, session: AsyncSession, email: str, password: str) -> AuthResult:
        """Verify credentials and issue a token pair.

        Raises:
            InvalidCredentialsException: Unknown email or wrong password (indistinguishable)

        """
        user = await CredentialStore.find_user_by_email(session, email)

        if user is None or not await self.hasher.verify_async(password, user.password_hash):
            logger.info("Login failed: invalid credentials")
            raise InvalidCredentialsException()

        result = await self._issue_token_pair(session, user)
        logger.info(f"User logged in: id={user.id}")
        return result

    async def refresh(self, session: AsyncSession, refresh_token: str | None) -> RefreshResult:
        """Mint a new access token from a stored, unrevoked refresh token.

        Gates, in order: token present, signature/expiry/kind valid, stored
        record active, user still exists.

        Raises:
            NoRefreshTokenException: No token supplied
            InvalidRefreshTokenException: Bad signature, expired, or not a refresh token
            RefreshTokenRevokedException: No active stored record for the token
            UserNotFound: The token's user no longer exists

        """
        if not refresh_token:
            raise NoRefreshTokenException()

        try:
            claims = self.issuer.verify(refresh_token, TokenType.REFRESH)
        except (InvalidTokenException, TokenExpiredException) as err:
            raise InvalidRefreshTokenException() from err

        token_hash = self.fingerprint(refresh_token)
        record = await CredentialStore.find_refresh_token(session, token_hash)
        if record is None or not record.is_active():
            logger.warning(f"Inactive refresh token presented for user id={claims.user_id}")
            raise RefreshTokenRevokedException()

        user = await CredentialStore.find_user_by_id(session, claims.user_id)
        if user is None:
            raise UserNotFound()

        access = self.issuer.issue_access_token(user)

        rotated: str | None = None
        if self.config.rotate_refresh_tokens:
            rotated = await self._rotate(session, user, token_hash)

        logger.info(f"Access token refreshed: user id={user.id}")
        return RefreshResult(access_token=access.token, refresh_token=rotated)

    async def logout(
        self, session: AsyncSession, refresh_token: str | None, access_token: str | None = None
    ) -> bool:
        """Revoke the refresh token and blacklist the access token, best effort.

        Never raises for a missing, unknown or already revoked token. Each step
        runs in its own savepoint: a store failure is logged and only that step
        is rolled back, so a failed blacklist write keeps the revocation.

        Returns:
            True if a refresh token record was revoked by this call

        """
        revoked = False

        if refresh_token:
            try:
                async with session.begin_nested():
                    revoked = await CredentialStore.revoke_refresh_token(session, self.fingerprint(refresh_token))
            except DatabaseException:
                logger.warning("Refresh token revocation failed during logout")

        if access_token:
            try:
                async with session.begin_nested():
                    await self._blacklist_access_token(session, access_token)
            except DatabaseException:
                logger.warning("Access token blacklisting failed during logout")

        logger.info(f"Logout processed (refresh token revoked: {revoked})")
        return revoked

    async def _issue_token_pair(self, session: AsyncSession, user: User) -> AuthResult:
        access = self.issuer.issue_access_token(user)
        refresh = self.issuer.issue_refresh_token(user)
        await CredentialStore.store_refresh_token(session, user.id, self.fingerprint(refresh.token), refresh.expires_at)
        return AuthResult(user=user, access_token=access.token, refresh_token=refresh.token)

    async def _rotate(self, session: AsyncSession, user: User, old_hash: str) -> str:
        """Replace the presented refresh token with a new one, linking old to new."""
        issued = self.issuer.issue_refresh_token(user)
        replacement = await CredentialStore.store_refresh_token(
            session, user.id, self.fingerprint(issued.token), issued.expires_at
        )
        if not await CredentialStore.revoke_refresh_token(session, old_hash, replaced_by_token_id=replacement.id):
            # Revoked concurrently between lookup and rotation.
            raise RefreshTokenRevokedException()
        return issued.token

    async def _blacklist_access_token(self, session: AsyncSession, access_token: str) -> None:
        try:
            claims = self.issuer.verify(access_token, TokenType.ACCESS)
        except (InvalidTokenException, TokenExpiredException):
            return
        await CredentialStore.blacklist_access_token(
            session, self.fingerprint(access_token), claims.expires_at, reason="logout"
        )
