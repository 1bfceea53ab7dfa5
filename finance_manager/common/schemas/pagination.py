"""
Pagination schemas shared by every paged listing.

Query parameters are exposed as `Page` (1-indexed) and `ItemsPerPage`;
Python code may use the snake_case field names.

**Design Notes**:
- No total count is returned by paged listings; services expose a separate
  count method where clients need one
- skip/take are derived from page and items_per_page
"""
from pydantic import BaseModel, ConfigDict, Field

from finance_manager.common.config import get_settings

settings = get_settings()


class PaginationFilter(BaseModel):
    """Base class of every entity filter."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    page: int = Field(default=1, ge=1, alias="Page", description="1-indexed page number")
    items_per_page: int = Field(
        default=settings.DEFAULT_ITEMS_PER_PAGE,
        ge=1,
        le=settings.MAX_ITEMS_PER_PAGE,
        alias="ItemsPerPage",
        description="Page size",
        )

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.items_per_page

    @property
    def take(self) -> int:
        return self.items_per_page
