"""Email validation functions."""

from email_validator import EmailNotValidError, validate_email

MAX_EMAIL_LENGTH = 255


def validate_email_format(email: str) -> str:
    """Check that ``email`` is a well-formed address and return it unchanged.

    Emails are unique as stored, case included, so the normalized form
    email-validator computes (lowercased domain) is only used for checking.

    Raises:
        ValueError: If the address is malformed

    Examples:
        >>> validate_email_format("Bob@Example.COM")
        'Bob@Example.COM'

    """
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError(f"Invalid email address: {exc}") from exc
    return email
