"""Account persistence."""
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.orm import selectinload

from finance_manager.catalog.db.models import Account
from finance_manager.catalog.schemas.accounts import ACFilter
from finance_manager.common.db.repository import BaseRepository


class AccountRepository(BaseRepository[Account, ACFilter]):
    model = Account

    def _apply_filter(self, stmt: Select, filter_: ACFilter) -> Select:
        if not filter_.include_deleted:
            stmt = stmt.where(Account.is_deleted.is_(False))
        if filter_.registry_holder_id is not None:
            stmt = stmt.where(Account.registry_holder_id == filter_.registry_holder_id)
        if filter_.account_type_id is not None:
            stmt = stmt.where(Account.account_type_id == filter_.account_type_id)
        if filter_.currency_id is not None:
            stmt = stmt.where(Account.currency_id == filter_.currency_id)
        if filter_.bank_id is not None:
            stmt = stmt.where(Account.bank_id == filter_.bank_id)
        if filter_.name_contains:
            stmt = stmt.where(Account.name.icontains(filter_.name_contains))
        if filter_.is_include_in_balance is not None:
            stmt = stmt.where(Account.is_include_in_balance.is_(filter_.is_include_in_balance))
        if filter_.is_default is not None:
            stmt = stmt.where(Account.is_default.is_(filter_.is_default))
        if filter_.is_archived is not None:
            stmt = stmt.where(Account.is_archived.is_(filter_.is_archived))
        if filter_.credit_limit_from is not None:
            stmt = stmt.where(Account.credit_limit >= filter_.credit_limit_from)
        if filter_.credit_limit_to is not None:
            stmt = stmt.where(Account.credit_limit <= filter_.credit_limit_to)
        return stmt

    def _related_options(self) -> list:
        return [
            selectinload(Account.registry_holder),
            selectinload(Account.account_type),
            selectinload(Account.currency),
            selectinload(Account.bank),
            ]

    def _order_by(self) -> list:
        return [Account.name, Account.id]

    async def get_default_account(self, registry_holder_id: UUID, exclude_id: Optional[UUID] = None) -> Optional[Account]:
        """Return the holder's current default account (tracked), optionally ignoring one account."""
        stmt = select(Account).where(
            Account.registry_holder_id == registry_holder_id,
            Account.is_default.is_(True),
            )
        if exclude_id is not None:
            stmt = stmt.where(Account.id != exclude_id)
        result = await self.session.execute(stmt.order_by(Account.created_at).limit(1))
        return result.scalar_one_or_none()

    async def get_default_accounts(self, registry_holder_id: UUID) -> Sequence[Account]:
        stmt = select(Account).where(
            Account.registry_holder_id == registry_holder_id,
            Account.is_default.is_(True),
            )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def has_default_account(self, registry_holder_id: UUID, exclude_id: Optional[UUID] = None) -> bool:
        return await self.get_default_account(registry_holder_id, exclude_id) is not None

    async def count_by_holder(
        self,
        registry_holder_id: UUID,
        include_archived: bool = False,
        include_deleted: bool = False,
        ) -> int:
        stmt = select(func.count()).select_from(Account).where(Account.registry_holder_id == registry_holder_id)
        if not include_archived:
            stmt = stmt.where(Account.is_archived.is_(False))
        if not include_deleted:
            stmt = stmt.where(Account.is_deleted.is_(False))
        result = await self.session.execute(stmt)
        return result.scalar_one()
