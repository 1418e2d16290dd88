"""CORS allow-list parsing for the browser client."""

import logging
from dataclasses import dataclass, field
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

DEVELOPMENT_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
]

# Headers the client sends: bearer access token and, in header mode, the refresh token.
DEFAULT_ALLOW_HEADERS = ["authorization", "content-type", "x-refresh-token"]
DEFAULT_ALLOW_METHODS = ["GET", "POST", "OPTIONS"]


class CORSConfigurationError(Exception):
    """Raised when CORS configuration is invalid or insecure."""

    pass


def normalize_origin(origin: str) -> str:
    """Normalize an origin URL by stripping whitespace and trailing slashes.

    Raises:
        CORSConfigurationError: If origin is empty or not a scheme://host URL.

    """
    origin = origin.strip()

    if not origin:
        raise CORSConfigurationError("Origin cannot be empty")

    if origin == "*":
        return origin

    parsed = urlparse(origin)
    if not parsed.scheme or not parsed.netloc:
        raise CORSConfigurationError(f"Invalid origin URL: {origin}")

    return origin.rstrip("/")


def parse_comma_separated_list(value: str | list[str] | None) -> list[str]:
    """Parse a comma-separated string (or list) into stripped, non-empty items."""
    if value is None:
        return []

    if isinstance(value, str):
        value = value.split(",")

    return [v.strip() for v in value if v.strip()]


@dataclass(frozen=True)
class CORSConfiguration:
    """Effective CORS policy.

    Credentials are always allowed because the refresh token may travel as an
    httpOnly cookie, which in turn forbids the ``*`` origin.
    """

    allow_origins: list[str]
    environment: str = "development"
    allow_methods: list[str] = field(default_factory=lambda: list(DEFAULT_ALLOW_METHODS))
    allow_headers: list[str] = field(default_factory=lambda: list(DEFAULT_ALLOW_HEADERS))
    max_age: int = 600

    @classmethod
    def from_values(
        cls,
        allow_origins: str | list[str] | None,
        environment: str,
        max_age: int = 600,
    ) -> "CORSConfiguration":
        """Build and validate a configuration from raw settings values.

        Raises:
            CORSConfigurationError: If an origin is malformed, a wildcard is
                configured, or a non-development environment has no origins.

        """
        origins = parse_comma_separated_list(allow_origins)
        if not origins and environment == "development":
            origins = list(DEVELOPMENT_ORIGINS)

        normalized = [normalize_origin(o) for o in origins]

        if "*" in normalized:
            raise CORSConfigurationError(
                "Wildcard origins (*) cannot be combined with credentialed requests. "
                "Provide explicit allowed origins instead."
            )

        if not normalized:
            raise CORSConfigurationError(f"{environment.capitalize()} environment requires explicit allowed origins")

        return cls(allow_origins=normalized, environment=environment, max_age=max_age)

    def get_middleware_config(self) -> dict:
        """Keyword arguments for Starlette's CORSMiddleware."""
        return {
            "allow_origins": self.allow_origins,
            "allow_credentials": True,
            "allow_methods": self.allow_methods,
            "allow_headers": self.allow_headers,
            "max_age": self.max_age,
        }

    def log_configuration(self) -> None:
        logger.info(
            f"CORS configuration ({self.environment}): origins={self.allow_origins}, "
            f"methods={self.allow_methods}, max_age={self.max_age}s"
        )
