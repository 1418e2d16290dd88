"""Tests for application settings."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from src.config.settings import Settings
from src.features.auth.config import RefreshTokenTransport


def make_settings(**overrides) -> Settings:
    values = {
        "environment": "development",
        "postgres_url": "sqlite+aiosqlite:///:memory:",
        "secret_key": "unit-test-secret",
    }
    values.update(overrides)
    return Settings(**values)


class TestSettings:
    def test_environment_is_normalized(self):
        assert make_settings(environment="PRODUCTION").environment == "production"

    def test_invalid_environment_rejected(self):
        with pytest.raises(ValidationError, match="Environment must be one of"):
            make_settings(environment="qa")

    def test_is_production(self):
        assert make_settings(environment="production").is_production
        assert not make_settings(environment="staging").is_production


class TestAuthConfigSnapshot:
    """Settings.auth_config() hands the auth core an immutable view of the security settings."""

    def test_lifetimes(self):
        config = make_settings(access_token_expire_minutes=5, refresh_token_expire_days=2).auth_config()

        assert config.access_token_ttl == timedelta(minutes=5)
        assert config.refresh_token_ttl == timedelta(days=2)
        assert config.refresh_token_max_age == 2 * 24 * 3600

    def test_fingerprint_key_falls_back_to_secret_key(self):
        config = make_settings(refresh_token_fingerprint_key=None).auth_config()
        assert config.fingerprint_key == "unit-test-secret"

    def test_explicit_fingerprint_key(self):
        config = make_settings(refresh_token_fingerprint_key="separate-key").auth_config()
        assert config.fingerprint_key == "separate-key"

    def test_secure_cookies_only_in_production(self):
        assert make_settings(environment="production").auth_config().secure_cookies is True
        assert make_settings(environment="development").auth_config().secure_cookies is False

    def test_transport_and_flags(self):
        config = make_settings(
            refresh_token_transport="header",
            rotate_refresh_tokens=True,
            check_access_token_blacklist=False,
        ).auth_config()

        assert config.refresh_token_transport == RefreshTokenTransport.HEADER
        assert config.rotate_refresh_tokens is True
        assert config.check_access_token_blacklist is False

    def test_password_hash_cost(self):
        config = make_settings(
            password_hash_time_cost=2, password_hash_memory_cost=2048, password_hash_parallelism=1
        ).auth_config()

        assert config.password_hash_cost.time_cost == 2
        assert config.password_hash_cost.memory_cost == 2048
        assert config.password_hash_cost.parallelism == 1

    def test_defaults(self):
        config = Settings(
            environment="development",
            postgres_url="sqlite+aiosqlite:///:memory:",
            secret_key="unit-test-secret",
            access_token_expire_minutes=15,
            refresh_token_expire_days=7,
            refresh_token_transport="cookie",
        ).auth_config()

        assert config.jwt_algorithm == "HS256"
        assert config.refresh_cookie_name == "refreshToken"
        assert config.refresh_token_transport == RefreshTokenTransport.COOKIE


class TestCORSFromSettings:
    def test_development_without_origins_uses_defaults(self):
        cors = make_settings(cors_allow_origins=None).get_cors_configuration()
        assert "http://localhost:5173" in cors.allow_origins

    def test_production_without_origins_fails(self):
        from src.config.cors_config import CORSConfigurationError

        with pytest.raises(CORSConfigurationError):
            make_settings(environment="production", cors_allow_origins=None).get_cors_configuration()
