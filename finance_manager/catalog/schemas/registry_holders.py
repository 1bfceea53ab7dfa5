"""
Registry holder schemas.

**Naming Convention**:
- RH prefix: RegistryHolder-related schemas
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from finance_manager.catalog.db.models import Role
from finance_manager.common.schemas.pagination import PaginationFilter


class RHCreateItem(BaseModel):
    """DTO for POST /registry-holders. telegram_id 0 is rejected by the service."""
    model_config = ConfigDict(extra="forbid")

    telegram_id: int = Field(default=0, ge=0, description="Telegram user id (must be unique)")
    role: Role = Field(default=Role.USER)


class RHUpdateItem(BaseModel):
    """DTO for PUT /registry-holders. Omitted fields are left unchanged."""
    model_config = ConfigDict(extra="forbid")

    id: UUID
    telegram_id: Optional[int] = Field(default=None, ge=0)
    role: Optional[Role] = None


class RHReadItem(BaseModel):
    model_config = ConfigDict(extra="forbid", from_attributes=True)

    id: UUID
    telegram_id: int
    role: Role
    created_at: datetime
    updated_at: datetime


class RHFilter(PaginationFilter):
    telegram_id: Optional[int] = None
    role: Optional[Role] = None
