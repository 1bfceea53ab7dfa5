"""Transfer persistence."""
from sqlalchemy import Select, or_

from finance_manager.common.db.repository import BaseRepository
from finance_manager.transactions.db.models import Transfer
from finance_manager.transactions.schemas.transfers import TRFilter


class TransferRepository(BaseRepository[Transfer, TRFilter]):
    model = Transfer

    def _apply_filter(self, stmt: Select, filter_: TRFilter) -> Select:
        if filter_.date_from is not None:
            stmt = stmt.where(Transfer.date >= filter_.date_from)
        if filter_.date_to is not None:
            stmt = stmt.where(Transfer.date <= filter_.date_to)
        if filter_.account_id is not None:
            stmt = stmt.where(or_(
                Transfer.from_account_id == filter_.account_id,
                Transfer.to_account_id == filter_.account_id,
                ))
        if filter_.from_account_id is not None:
            stmt = stmt.where(Transfer.from_account_id == filter_.from_account_id)
        if filter_.to_account_id is not None:
            stmt = stmt.where(Transfer.to_account_id == filter_.to_account_id)
        if filter_.description_contains:
            stmt = stmt.where(Transfer.description.icontains(filter_.description_contains))
        return stmt

    def _order_by(self) -> list:
        return [Transfer.date.desc(), Transfer.id]
