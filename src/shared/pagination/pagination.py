"""Pagination utilities and models for API responses."""

from fastapi import Query
from pydantic import BaseModel, Field, computed_field

from src.shared.responses import CamelModel


class PaginationParams(BaseModel):
    """Query parameters for pagination.

    Resolved from the query string by ``pagination_params``:
    ```python
    @router.get("/items")
    async def list_items(pagination: PaginationParams = Depends(pagination_params)):
        stmt = stmt.offset(pagination.skip).limit(pagination.limit)
    ```
    """

    page: int = Field(default=1, ge=1, description="Page number (1-indexed)")
    page_size: int = Field(default=50, ge=1, le=1000, description="Items per page")

    @property
    def skip(self) -> int:
        """Offset for the database query."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


def pagination_params(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(50, ge=1, le=1000, description="Items per page"),
) -> PaginationParams:
    """Query-string dependency; out-of-range values fail request validation (400)."""
    return PaginationParams(page=page, page_size=page_size)


class PaginatedResponse[T](CamelModel):
    """Generic paginated response model."""

    items: list[T]
    total: int
    page: int
    page_size: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        if self.page_size == 0:
            return 0
        return (self.total + self.page_size - 1) // self.page_size

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


__all__ = ["PaginatedResponse", "PaginationParams", "pagination_params"]
