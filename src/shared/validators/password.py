"""Password validation functions."""

MIN_PASSWORD_LENGTH = 8
# Upper bound keeps a single Argon2 call from being fed arbitrarily large input.
MAX_PASSWORD_LENGTH = 128


def validate_password_strength(password: str) -> str:
    """Validate password requirements for new credentials.

    Requirements:
    - Between 8 and 128 characters (also enforced by Field min/max_length)
    - Not made of whitespace only

    Args:
        password: Password string to validate

    Returns:
        The validated password string, unchanged

    Raises:
        ValueError: If password doesn't meet the requirements

    Examples:
        >>> validate_password_strength("password1")
        'password1'
        >>> validate_password_strength("short")
        Traceback (most recent call last):
        ...
        ValueError: Password must be at least 8 characters long

    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    if len(password) > MAX_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_LENGTH} characters long")
    if not password.strip():
        raise ValueError("Password must not be blank")
    return password
