"""Tests for the shared validators module."""

import pytest

from src.shared.validators.password import MAX_PASSWORD_LENGTH, MIN_PASSWORD_LENGTH, validate_password_strength


class TestPasswordValidation:
    """Test password policy validation."""

    def test_valid_password_minimum_length(self):
        """Test password of exactly the minimum length passes validation."""
        result = validate_password_strength("password")
        assert result == "password"

    def test_valid_password_returned_unchanged(self):
        result = validate_password_strength("  Secure Pass 123  ")
        assert result == "  Secure Pass 123  "

    def test_no_character_class_requirements(self):
        """Lowercase-only and digit-only passwords are accepted."""
        assert validate_password_strength("abcdefgh") == "abcdefgh"
        assert validate_password_strength("12345678") == "12345678"

    def test_password_with_unicode_characters(self):
        result = validate_password_strength("Sécure123")
        assert result == "Sécure123"

    def test_password_maximum_length(self):
        long_password = "a" * MAX_PASSWORD_LENGTH
        assert validate_password_strength(long_password) == long_password

    def test_password_too_short_fails(self):
        """Test password below minimum length fails validation."""
        with pytest.raises(ValueError, match=f"at least {MIN_PASSWORD_LENGTH} characters"):
            validate_password_strength("short")

    def test_password_one_below_minimum_fails(self):
        with pytest.raises(ValueError, match="at least"):
            validate_password_strength("a" * (MIN_PASSWORD_LENGTH - 1))

    def test_password_too_long_fails(self):
        with pytest.raises(ValueError, match=f"at most {MAX_PASSWORD_LENGTH} characters"):
            validate_password_strength("a" * (MAX_PASSWORD_LENGTH + 1))

    def test_empty_password_fails(self):
        with pytest.raises(ValueError, match="at least"):
            validate_password_strength("")

    def test_blank_password_fails(self):
        """Test whitespace-only password fails even when long enough."""
        with pytest.raises(ValueError, match="Password must not be blank"):
            validate_password_strength(" " * 10)
