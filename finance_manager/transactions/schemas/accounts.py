"""
Replicated account schemas (read-only on this service).

**Naming Convention**:
- TA prefix: TransactionsAccount-related schemas
"""
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from finance_manager.common.schemas.pagination import PaginationFilter


class TAReadItem(BaseModel):
    model_config = ConfigDict(extra="forbid", from_attributes=True)

    id: UUID
    holder_id: UUID
    account_type_id: UUID
    currency_id: UUID
    credit_limit: Optional[Decimal] = None
    is_archived: bool
    is_deleted: bool


class TAFilter(PaginationFilter):
    holder_id: Optional[UUID] = None
    account_type_id: Optional[UUID] = None
    currency_id: Optional[UUID] = None
    is_archived: Optional[bool] = None
    include_deleted: bool = False
