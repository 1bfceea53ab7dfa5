"""
Transfer service.

Design Notes:
- from_amount and to_amount are both non-zero (they differ when the two
  accounts hold different currencies)
- source and destination are two different usable accounts
- delete of an unknown id succeeds without doing anything
"""
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.common.logging_config import get_logger
from finance_manager.common.result import Result
from finance_manager.transactions.db.models import Transfer
from finance_manager.transactions.errors import TransferErrors
from finance_manager.transactions.repositories.transfers import TransferRepository
from finance_manager.transactions.schemas.transfers import TRCount, TRCreateItem, TRFilter, TRReadItem, TRUpdateItem
from finance_manager.transactions.services.transaction_account_service import TransactionAccountService

logger = get_logger(__name__)


class TransferService:

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = TransferRepository(session)
        self.accounts = TransactionAccountService(session)

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_by_id(self, transfer_id: UUID) -> Result[TRReadItem]:
        transfer = await self.repository.get_by_id(transfer_id, disable_tracking=True)
        if transfer is None:
            return Result.fail(TransferErrors.not_found(transfer_id))
        return Result.ok(TRReadItem.model_validate(transfer))

    async def get_paged(self, filter_: TRFilter) -> Result[List[TRReadItem]]:
        transfers = await self.repository.get_paged(filter_)
        return Result.ok([TRReadItem.model_validate(t) for t in transfers])

    async def get_count(self, filter_: TRFilter) -> Result[TRCount]:
        return Result.ok(TRCount(count=await self.repository.count(filter_)))

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    async def create(self, item: TRCreateItem) -> Result[TRReadItem]:
        if item.from_amount == 0 or item.to_amount == 0:
            return Result.fail(TransferErrors.invalid_amount())
        if item.from_account_id == item.to_account_id:
            return Result.fail(TransferErrors.same_account(item.from_account_id))

        error = (
            await self.accounts.check_account(item.from_account_id, TransferErrors)
            or await self.accounts.check_account(item.to_account_id, TransferErrors)
            )
        if error is not None:
            return Result.fail(error)

        transfer = await self.repository.add(Transfer(
            date=item.date,
            from_account_id=item.from_account_id,
            to_account_id=item.to_account_id,
            from_amount=item.from_amount,
            to_amount=item.to_amount,
            description=item.description,
            ))
        await self.session.commit()

        logger.info(
            "Transfer created",
            id=str(transfer.id),
            from_account_id=str(transfer.from_account_id),
            to_account_id=str(transfer.to_account_id),
            )
        return Result.ok(TRReadItem.model_validate(transfer))

    async def update(self, item: TRUpdateItem) -> Result[TRReadItem]:
        transfer = await self.repository.get_by_id(item.id)
        if transfer is None:
            return Result.fail(TransferErrors.not_found(item.id))

        changes: dict = {}
        if item.date is not None and item.date != transfer.date:
            changes["date"] = item.date

        for field in ("from_account_id", "to_account_id"):
            new_value = getattr(item, field)
            if new_value is not None and new_value != getattr(transfer, field):
                error = await self.accounts.check_account(new_value, TransferErrors)
                if error is not None:
                    return Result.fail(error)
                changes[field] = new_value

        from_account_id = changes.get("from_account_id", transfer.from_account_id)
        to_account_id = changes.get("to_account_id", transfer.to_account_id)
        if from_account_id == to_account_id:
            return Result.fail(TransferErrors.same_account(from_account_id))

        for field in ("from_amount", "to_amount"):
            new_value = getattr(item, field)
            if new_value is not None and new_value != getattr(transfer, field):
                if new_value == 0:
                    return Result.fail(TransferErrors.invalid_amount())
                changes[field] = new_value

        if item.description is not None and item.description != transfer.description:
            changes["description"] = item.description

        if changes:
            for field, value in changes.items():
                setattr(transfer, field, value)
            await self.session.commit()
            logger.info("Transfer updated", id=str(transfer.id), fields=sorted(changes))
        else:
            logger.info("No changes detected for transfer", id=str(transfer.id))

        return Result.ok(TRReadItem.model_validate(transfer))

    async def delete(self, transfer_id: UUID) -> Result[None]:
        transfer = await self.repository.get_by_id(transfer_id)
        if transfer is None:
            return Result.ok()

        await self.repository.delete(transfer)
        await self.session.commit()
        logger.info("Transfer deleted", id=str(transfer_id))
        return Result.ok()
