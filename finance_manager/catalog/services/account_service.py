"""
Account service.

Centralizes account business rules:
- at most one default account per registry holder; making an account the
  default clears the previous default in the same commit
- a default account cannot be archived, soft-deleted or hard-deleted
- unsetting the default requires a replacement account of the same holder
  that is neither archived nor deleted
- referenced account type and currency must exist and not be soft-deleted;
  the bank must exist

Design Notes:
- Every check runs before the first mutation, so a failed call leaves the
  tracked entities untouched
- The default swap is read-check-write without a concurrency token: two
  simultaneous "set default" calls for one holder are not serialized here
"""
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.catalog.db.models import Account
from finance_manager.catalog.errors import AccountErrors
from finance_manager.catalog.repositories.account_types import AccountTypeRepository
from finance_manager.catalog.repositories.accounts import AccountRepository
from finance_manager.catalog.repositories.banks import BankRepository
from finance_manager.catalog.repositories.currencies import CurrencyRepository
from finance_manager.catalog.repositories.registry_holders import RegistryHolderRepository
from finance_manager.catalog.schemas.accounts import ACCreateItem, ACFilter, ACReadItem, ACUpdateItem
from finance_manager.common.errors import AppError
from finance_manager.common.logging_config import get_logger
from finance_manager.common.result import Result

logger = get_logger(__name__)


class AccountService:

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = AccountRepository(session)
        self.holders = RegistryHolderRepository(session)
        self.account_types = AccountTypeRepository(session)
        self.currencies = CurrencyRepository(session)
        self.banks = BankRepository(session)

    # =========================================================================
    # REFERENCE CHECKS
    # =========================================================================

    async def _check_registry_holder(self, holder_id: UUID) -> Optional[AppError]:
        if not await self.holders.any(holder_id):
            return AccountErrors.registry_holder_not_found(holder_id)
        return None

    async def _check_account_type(self, account_type_id: UUID) -> Optional[AppError]:
        account_type = await self.account_types.get_by_id(account_type_id, include_related=False)
        if account_type is None:
            return AccountErrors.account_type_not_found(account_type_id)
        if account_type.is_deleted:
            return AccountErrors.account_type_soft_deleted(account_type_id)
        return None

    async def _check_currency(self, currency_id: UUID) -> Optional[AppError]:
        currency = await self.currencies.get_by_id(currency_id, include_related=False)
        if currency is None:
            return AccountErrors.currency_not_found(currency_id)
        if currency.is_deleted:
            return AccountErrors.currency_soft_deleted(currency_id)
        return None

    async def _check_bank(self, bank_id: UUID) -> Optional[AppError]:
        if not await self.banks.any(bank_id):
            return AccountErrors.bank_not_found(bank_id)
        return None

    async def _unset_current_default(self, holder_id: UUID, exclude_id: Optional[UUID] = None) -> None:
        """Clear is_default on the holder's other default account(s); the caller commits."""
        for previous in await self.repository.get_default_accounts(holder_id):
            if previous.id != exclude_id:
                previous.unset_as_default()
                logger.debug("Previous default account unset", id=str(previous.id), registry_holder_id=str(holder_id))

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_by_id(self, account_id: UUID, include_related: bool = True) -> Result[ACReadItem]:
        account = await self.repository.get_by_id(account_id, include_related=include_related, disable_tracking=True)
        if account is None:
            return Result.fail(AccountErrors.not_found(account_id))
        return Result.ok(ACReadItem.from_entity(account, include_related))

    async def get_paged(self, filter_: ACFilter) -> Result[List[ACReadItem]]:
        accounts = await self.repository.get_paged(filter_)
        return Result.ok([ACReadItem.from_entity(a) for a in accounts])

    async def get_default_account(self, registry_holder_id: UUID) -> Result[ACReadItem]:
        account = await self.repository.get_default_account(registry_holder_id)
        if account is None:
            return Result.fail(AccountErrors.default_not_found(registry_holder_id))
        return Result.ok(ACReadItem.from_entity(account))

    async def count_by_holder(
        self,
        registry_holder_id: UUID,
        include_archived: bool = False,
        include_deleted: bool = False,
        ) -> int:
        return await self.repository.count_by_holder(registry_holder_id, include_archived, include_deleted)

    # =========================================================================
    # CREATE / UPDATE
    # =========================================================================

    async def create(self, item: ACCreateItem) -> Result[ACReadItem]:
        if not item.name:
            return Result.fail(AccountErrors.name_required())

        error = (
            await self._check_registry_holder(item.registry_holder_id)
            or await self._check_account_type(item.account_type_id)
            or await self._check_currency(item.currency_id)
            or await self._check_bank(item.bank_id)
            )
        if error is not None:
            return Result.fail(error)

        if item.is_default and item.is_archived:
            return Result.fail(AccountErrors.cannot_be_default_if_archived_or_deleted(item.name))

        if item.is_default:
            await self._unset_current_default(item.registry_holder_id)

        account = await self.repository.add(Account(
            registry_holder_id=item.registry_holder_id,
            account_type_id=item.account_type_id,
            currency_id=item.currency_id,
            bank_id=item.bank_id,
            name=item.name,
            is_include_in_balance=item.is_include_in_balance,
            is_default=item.is_default,
            is_archived=item.is_archived,
            credit_limit=item.credit_limit,
            ))
        await self.session.commit()

        logger.info(
            "Account created",
            id=str(account.id),
            registry_holder_id=str(account.registry_holder_id),
            is_default=account.is_default,
            )
        return Result.ok(ACReadItem.from_entity(account))

    async def update(self, item: ACUpdateItem) -> Result[ACReadItem]:
        account = await self.repository.get_by_id(item.id, include_related=False)
        if account is None:
            return Result.fail(AccountErrors.not_found(item.id))

        is_default = item.is_default if item.is_default is not None else account.is_default
        is_archived = item.is_archived if item.is_archived is not None else account.is_archived
        if is_default and (is_archived or account.is_deleted):
            return Result.fail(AccountErrors.cannot_archive_default(item.id))

        changes: dict = {}

        if item.account_type_id is not None and item.account_type_id != account.account_type_id:
            error = await self._check_account_type(item.account_type_id)
            if error is not None:
                return Result.fail(error)
            changes["account_type_id"] = item.account_type_id

        if item.currency_id is not None and item.currency_id != account.currency_id:
            error = await self._check_currency(item.currency_id)
            if error is not None:
                return Result.fail(error)
            changes["currency_id"] = item.currency_id

        if item.bank_id is not None and item.bank_id != account.bank_id:
            error = await self._check_bank(item.bank_id)
            if error is not None:
                return Result.fail(error)
            changes["bank_id"] = item.bank_id

        # Blank names are ignored on update
        if item.name and item.name != account.name:
            changes["name"] = item.name

        if item.is_include_in_balance is not None and item.is_include_in_balance != account.is_include_in_balance:
            changes["is_include_in_balance"] = item.is_include_in_balance

        if item.is_default is not None and item.is_default != account.is_default:
            changes["is_default"] = item.is_default

        if item.is_archived is not None and item.is_archived != account.is_archived:
            changes["is_archived"] = item.is_archived

        if item.credit_limit is not None and _decimal_changed(account.credit_limit, item.credit_limit):
            changes["credit_limit"] = item.credit_limit

        if not changes:
            logger.info("No changes detected for account", id=str(account.id))
            return Result.ok(ACReadItem.from_entity(account))

        if changes.get("is_default") is True:
            await self._unset_current_default(account.registry_holder_id, exclude_id=account.id)

        for field, value in changes.items():
            setattr(account, field, value)
        await self.session.commit()

        logger.info("Account updated", id=str(account.id), fields=sorted(changes))
        return Result.ok(ACReadItem.from_entity(account))

    # =========================================================================
    # SOFT DELETE / RESTORE / DELETE
    # =========================================================================

    async def soft_delete(self, account_id: UUID) -> Result[None]:
        account = await self.repository.get_by_id(account_id, include_related=False)
        if account is None:
            return Result.fail(AccountErrors.not_found(account_id))
        if account.is_deleted:
            logger.info("Account already soft deleted", id=str(account_id))
            return Result.ok()
        if account.is_default:
            return Result.fail(AccountErrors.cannot_soft_delete_default(account_id))

        account.mark_as_deleted()
        await self.session.commit()
        logger.info("Account soft deleted", id=str(account_id))
        return Result.ok()

    async def restore(self, account_id: UUID) -> Result[None]:
        account = await self.repository.get_by_id(account_id, include_related=False)
        if account is None:
            return Result.fail(AccountErrors.not_found(account_id))
        if not account.is_deleted:
            return Result.ok()

        account.restore()
        await self.session.commit()
        logger.info("Account restored", id=str(account_id))
        return Result.ok()

    async def delete(self, account_id: UUID) -> Result[None]:
        """Hard delete. Deleting a missing account is a no-op success."""
        account = await self.repository.get_by_id(account_id, include_related=False)
        if account is None:
            logger.info("Account to delete not found, nothing to do", id=str(account_id))
            return Result.ok()
        if account.is_default:
            return Result.fail(AccountErrors.cannot_delete_default(account_id))

        await self.repository.delete(account)
        await self.session.commit()
        logger.info("Account deleted", id=str(account_id))
        return Result.ok()

    # =========================================================================
    # ARCHIVE / DEFAULT FLAG
    # =========================================================================

    async def archive(self, account_id: UUID) -> Result[None]:
        account = await self.repository.get_by_id(account_id, include_related=False)
        if account is None:
            return Result.fail(AccountErrors.not_found(account_id))
        if account.is_default:
            return Result.fail(AccountErrors.cannot_archive_default(account_id))
        if account.is_archived:
            return Result.ok()

        account.archive()
        await self.session.commit()
        logger.info("Account archived", id=str(account_id))
        return Result.ok()

    async def unarchive(self, account_id: UUID) -> Result[None]:
        account = await self.repository.get_by_id(account_id, include_related=False)
        if account is None:
            return Result.fail(AccountErrors.not_found(account_id))
        if not account.is_archived:
            return Result.ok()

        account.unarchive()
        await self.session.commit()
        logger.info("Account unarchived", id=str(account_id))
        return Result.ok()

    async def set_as_default(self, account_id: UUID) -> Result[None]:
        account = await self.repository.get_by_id(account_id, include_related=False)
        if account is None:
            return Result.fail(AccountErrors.not_found(account_id))
        if account.is_default:
            return Result.ok()
        if account.is_archived or account.is_deleted:
            return Result.fail(AccountErrors.cannot_be_default_if_archived_or_deleted(account_id))

        await self._unset_current_default(account.registry_holder_id, exclude_id=account.id)
        account.set_as_default()
        await self.session.commit()

        logger.info("Account set as default", id=str(account_id), registry_holder_id=str(account.registry_holder_id))
        return Result.ok()

    async def unset_as_default(self, account_id: UUID, replacement_id: UUID) -> Result[None]:
        """Move the default flag from account_id to replacement_id (same holder) in one commit."""
        account = await self.repository.get_by_id(account_id, include_related=False)
        if account is None:
            return Result.fail(AccountErrors.not_found(account_id))
        if not account.is_default:
            return Result.ok()

        replacement = await self.repository.get_by_id(replacement_id, include_related=False)
        if replacement is None:
            return Result.fail(AccountErrors.replacement_not_found(replacement_id))
        if replacement.is_archived or replacement.is_deleted:
            return Result.fail(AccountErrors.replacement_cannot_be_default(replacement_id))
        if replacement.registry_holder_id != account.registry_holder_id:
            return Result.fail(AccountErrors.registry_holder_differs(account_id, replacement_id))

        account.unset_as_default()
        replacement.set_as_default()
        await self.session.commit()

        logger.info("Default account replaced", id=str(account_id), replacement_id=str(replacement_id))
        return Result.ok()


def _decimal_changed(current: Optional[Decimal], new: Decimal) -> bool:
    return current is None or Decimal(current) != Decimal(new)
