"""
Repositories of the tables replicated from the catalog.

Replicated rows keep the catalog's ids, so the only write operation is
upsert(): insert when the id is unknown, overwrite fields in place otherwise.
"""
from typing import Any, Dict, Tuple
from uuid import UUID

from sqlalchemy import Select

from finance_manager.common.db.repository import BaseRepository, FilterT, ModelT
from finance_manager.common.schemas.pagination import PaginationFilter
from finance_manager.transactions.db.models import (
    TransactionHolder,
    TransactionsAccount,
    TransactionsAccountType,
    TransactionsCategory,
    TransactionsCurrency,
    )
from finance_manager.transactions.schemas.accounts import TAFilter


class ReplicaRepository(BaseRepository[ModelT, FilterT]):

    def _order_by(self) -> list:
        return [self.model.id]

    async def upsert(self, entity_id: UUID, values: Dict[str, Any]) -> Tuple[ModelT, bool]:
        """
        Insert or overwrite one replicated row (no flush, no commit).

        Returns:
            (entity, created)
        """
        entity = await self.session.get(self.model, entity_id)
        if entity is None:
            entity = self.model(id=entity_id, **values)
            self.session.add(entity)
            return entity, True

        for field, value in values.items():
            setattr(entity, field, value)
        return entity, False


class TransactionHolderRepository(ReplicaRepository[TransactionHolder, PaginationFilter]):
    model = TransactionHolder


class TransactionsAccountTypeRepository(ReplicaRepository[TransactionsAccountType, PaginationFilter]):
    model = TransactionsAccountType


class TransactionsCurrencyRepository(ReplicaRepository[TransactionsCurrency, PaginationFilter]):
    model = TransactionsCurrency


class TransactionsCategoryRepository(ReplicaRepository[TransactionsCategory, PaginationFilter]):
    model = TransactionsCategory


class TransactionsAccountRepository(ReplicaRepository[TransactionsAccount, TAFilter]):
    model = TransactionsAccount

    def _apply_filter(self, stmt: Select, filter_: TAFilter) -> Select:
        if not filter_.include_deleted:
            stmt = stmt.where(TransactionsAccount.is_deleted.is_(False))
        if filter_.holder_id is not None:
            stmt = stmt.where(TransactionsAccount.holder_id == filter_.holder_id)
        if filter_.account_type_id is not None:
            stmt = stmt.where(TransactionsAccount.account_type_id == filter_.account_type_id)
        if filter_.currency_id is not None:
            stmt = stmt.where(TransactionsAccount.currency_id == filter_.currency_id)
        if filter_.is_archived is not None:
            stmt = stmt.where(TransactionsAccount.is_archived.is_(filter_.is_archived))
        return stmt
