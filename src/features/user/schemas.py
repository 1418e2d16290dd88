"""User schemas (DTOs)."""

from src.shared.pagination.pagination import PaginatedResponse
from src.shared.responses import CamelModel

from .models import UserRole


class UserPublic(CamelModel):
    """Public projection of a user. Never includes the password hash."""

    id: int
    email: str
    name: str | None = None
    role: UserRole


class UserListResponse(PaginatedResponse[UserPublic]):
    """Admin user directory page."""

    pass
