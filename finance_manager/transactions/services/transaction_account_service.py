"""
Read access to the replicated accounts, plus the usability check shared by
the transaction and transfer services.
"""
from typing import List, Optional, Union
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.common.errors import AppError
from finance_manager.common.result import Result
from finance_manager.transactions.errors import TransactionAccountErrors, TransactionErrors, TransferErrors
from finance_manager.transactions.repositories.replicated import TransactionsAccountRepository
from finance_manager.transactions.schemas.accounts import TAFilter, TAReadItem


class TransactionAccountService:

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = TransactionsAccountRepository(session)

    async def get_by_id(self, account_id: UUID) -> Result[TAReadItem]:
        account = await self.repository.get_by_id(account_id, disable_tracking=True)
        if account is None:
            return Result.fail(TransactionAccountErrors.not_found(account_id))
        return Result.ok(TAReadItem.model_validate(account))

    async def get_paged(self, filter_: TAFilter) -> Result[List[TAReadItem]]:
        accounts = await self.repository.get_paged(filter_)
        return Result.ok([TAReadItem.model_validate(a) for a in accounts])

    async def check_account(
        self,
        account_id: UUID,
        errors: Union[type[TransactionErrors], type[TransferErrors]] = TransactionErrors,
        ) -> Optional[AppError]:
        """
        Verify that an account can receive new movements.

        Args:
            account_id: Replicated account id
            errors: Error factory of the calling service (codes differ per entity)

        Returns:
            None if the account exists, is not deleted and is not archived
        """
        account = await self.repository.get_by_id(account_id, disable_tracking=True)
        if account is None:
            return errors.account_not_found(account_id)
        if account.is_deleted:
            return errors.account_soft_deleted(account_id)
        if account.is_archived:
            return errors.account_archived(account_id)
        return None
