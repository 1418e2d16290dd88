"""Application settings and configuration."""

import logging
from datetime import timedelta

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.config.cors_config import CORSConfiguration, CORSConfigurationError
from src.features.auth.config import AuthConfig, PasswordHashCost, RefreshTokenTransport

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application (hardcoded constants)
    app_name: str = "Starter Auth API"
    app_version: str = "0.1.0"

    # Environment-specific settings
    environment: str  # development, staging, production

    # Database (asyncpg URL in deployment)
    postgres_url: str
    postgres_pool_size: int = 10
    postgres_max_overflow: int = 20
    postgres_pool_timeout: int = 30
    postgres_pool_recycle: int = 3600
    postgres_echo: bool = False

    # API
    api_prefix: str = ""
    request_timeout_seconds: float = 30.0

    # CORS
    cors_allow_origins: str | None = None
    cors_max_age: int = 600

    # Security
    secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 15
    refresh_token_expire_days: int = 7
    refresh_token_fingerprint_key: str | None = None
    refresh_token_transport: RefreshTokenTransport = RefreshTokenTransport.COOKIE
    refresh_token_cookie_name: str = "refreshToken"
    rotate_refresh_tokens: bool = False
    check_access_token_blacklist: bool = True

    # Argon2 cost (process-wide constants)
    password_hash_time_cost: int = 3
    password_hash_memory_cost: int = 65536
    password_hash_parallelism: int = 4

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_envs = {"development", "staging", "production"}
        env = str(v).lower()
        if env not in valid_envs:
            raise ValueError(f"Environment must be one of {valid_envs}, got {env}")
        return env

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def auth_config(self) -> AuthConfig:
        """Snapshot the security settings into the config handed to the auth core."""
        return AuthConfig(
            secret_key=self.secret_key,
            fingerprint_key=self.refresh_token_fingerprint_key or self.secret_key,
            jwt_algorithm=self.jwt_algorithm,
            access_token_ttl=timedelta(minutes=self.access_token_expire_minutes),
            refresh_token_ttl=timedelta(days=self.refresh_token_expire_days),
            refresh_token_transport=self.refresh_token_transport,
            refresh_cookie_name=self.refresh_token_cookie_name,
            secure_cookies=self.is_production,
            rotate_refresh_tokens=self.rotate_refresh_tokens,
            check_access_token_blacklist=self.check_access_token_blacklist,
            password_hash_cost=PasswordHashCost(
                time_cost=self.password_hash_time_cost,
                memory_cost=self.password_hash_memory_cost,
                parallelism=self.password_hash_parallelism,
            ),
        )

    def get_cors_configuration(self) -> CORSConfiguration:
        """Get CORS configuration for the current environment.

        Raises:
            CORSConfigurationError: If CORS configuration is invalid or insecure.

        """
        try:
            return CORSConfiguration.from_values(
                allow_origins=self.cors_allow_origins,
                environment=self.environment,
                max_age=self.cors_max_age,
            )
        except CORSConfigurationError as exc:
            logger.error(f"Failed to create CORS configuration: {exc}")
            raise


settings = Settings()  # type: ignore[call-arg]
