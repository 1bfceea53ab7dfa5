"""
Catalog error factories.

One class per entity; every method returns an AppError with a stable code
and logs it at WARNING so rejected operations are visible in the logs.
"""
from datetime import date
from typing import Any
from uuid import UUID

from finance_manager.common.errors import AppError, ErrorsFactory
from finance_manager.common.logging_config import get_logger

logger = get_logger(__name__)


def _logged(error: AppError, **context: Any) -> AppError:
    logger.warning(error.message, code=error.code, **context)
    return error


# =============================================================================
# REGISTRY HOLDER
# =============================================================================

class RegistryHolderErrors:
    ENTITY = "RegistryHolder"

    @classmethod
    def not_found(cls, holder_id: UUID) -> AppError:
        return _logged(ErrorsFactory.not_found("REGISTRYHOLDER_NOT_FOUND", cls.ENTITY, holder_id), id=str(holder_id))

    @classmethod
    def telegram_id_required(cls) -> AppError:
        return _logged(ErrorsFactory.required("REGISTRYHOLDER_TELEGRAMID_REQUIRED", cls.ENTITY, "TelegramId"))

    @classmethod
    def telegram_id_exists(cls, telegram_id: int) -> AppError:
        return _logged(
            ErrorsFactory.already_exists("REGISTRYHOLDER_TELEGRAMID_EXISTS", cls.ENTITY, "TelegramId", telegram_id),
            telegram_id=telegram_id,
            )

    @classmethod
    def in_use(cls, holder_id: UUID) -> AppError:
        return _logged(
            ErrorsFactory.cannot_delete_used_entity("REGISTRYHOLDER_IN_USE", cls.ENTITY, holder_id),
            id=str(holder_id),
            )


# =============================================================================
# COUNTRY
# =============================================================================

class CountryErrors:
    ENTITY = "Country"

    @classmethod
    def not_found(cls, country_id: UUID) -> AppError:
        return _logged(ErrorsFactory.not_found("COUNTRY_NOT_FOUND", cls.ENTITY, country_id), id=str(country_id))

    @classmethod
    def name_required(cls) -> AppError:
        return _logged(ErrorsFactory.required("COUNTRY_NAME_REQUIRED", cls.ENTITY, "Name"))

    @classmethod
    def name_exists(cls, name: str) -> AppError:
        return _logged(ErrorsFactory.already_exists("COUNTRY_NAME_EXISTS", cls.ENTITY, "Name", name), name=name)

    @classmethod
    def in_use(cls, country_id: UUID) -> AppError:
        return _logged(ErrorsFactory.cannot_delete_used_entity("COUNTRY_IN_USE", cls.ENTITY, country_id), id=str(country_id))


# =============================================================================
# BANK
# =============================================================================

class BankErrors:
    ENTITY = "Bank"

    @classmethod
    def not_found(cls, bank_id: UUID) -> AppError:
        return _logged(ErrorsFactory.not_found("BANK_NOT_FOUND", cls.ENTITY, bank_id), id=str(bank_id))

    @classmethod
    def name_required(cls) -> AppError:
        return _logged(ErrorsFactory.required("BANK_NAME_REQUIRED", cls.ENTITY, "Name"))

    @classmethod
    def name_exists(cls, name: str) -> AppError:
        return _logged(ErrorsFactory.already_exists("BANK_NAME_EXISTS", cls.ENTITY, "Name", name), name=name)

    @classmethod
    def country_not_found(cls, country_id: UUID) -> AppError:
        return _logged(ErrorsFactory.not_found("BANK_COUNTRY_NOT_FOUND", "Country", country_id), id=str(country_id))

    @classmethod
    def in_use(cls, bank_id: UUID) -> AppError:
        return _logged(ErrorsFactory.cannot_delete_used_entity("BANK_IN_USE", cls.ENTITY, bank_id), id=str(bank_id))


# =============================================================================
# CURRENCY
# =============================================================================

class CurrencyErrors:
    ENTITY = "Currency"

    @classmethod
    def not_found(cls, currency_id: UUID) -> AppError:
        return _logged(ErrorsFactory.not_found("CURRENCY_NOT_FOUND", cls.ENTITY, currency_id), id=str(currency_id))

    @classmethod
    def name_required(cls) -> AppError:
        return _logged(ErrorsFactory.required("CURRENCY_NAME_REQUIRED", cls.ENTITY, "Name"))

    @classmethod
    def char_code_required(cls) -> AppError:
        return _logged(ErrorsFactory.required("CURRENCY_CHARCODE_REQUIRED", cls.ENTITY, "CharCode"))

    @classmethod
    def num_code_required(cls) -> AppError:
        return _logged(ErrorsFactory.required("CURRENCY_NUMCODE_REQUIRED", cls.ENTITY, "NumCode"))

    @classmethod
    def char_code_exists(cls, char_code: str) -> AppError:
        return _logged(
            ErrorsFactory.already_exists("CURRENCY_CHARCODE_EXISTS", cls.ENTITY, "CharCode", char_code),
            char_code=char_code,
            )

    @classmethod
    def num_code_exists(cls, num_code: str) -> AppError:
        return _logged(
            ErrorsFactory.already_exists("CURRENCY_NUMCODE_EXISTS", cls.ENTITY, "NumCode", num_code),
            num_code=num_code,
            )

    @classmethod
    def in_use(cls, currency_id: UUID) -> AppError:
        return _logged(ErrorsFactory.cannot_delete_used_entity("CURRENCY_IN_USE", cls.ENTITY, currency_id), id=str(currency_id))


# =============================================================================
# ACCOUNT TYPE
# =============================================================================

class AccountTypeErrors:
    ENTITY = "AccountType"

    @classmethod
    def not_found(cls, account_type_id: UUID) -> AppError:
        return _logged(ErrorsFactory.not_found("ACCOUNTTYPE_NOT_FOUND", cls.ENTITY, account_type_id), id=str(account_type_id))

    @classmethod
    def code_required(cls) -> AppError:
        return _logged(ErrorsFactory.required("ACCOUNTTYPE_CODE_REQUIRED", cls.ENTITY, "Code"))

    @classmethod
    def code_exists(cls, code: str) -> AppError:
        return _logged(ErrorsFactory.already_exists("ACCOUNTTYPE_CODE_EXISTS", cls.ENTITY, "Code", code), account_type_code=code)

    @classmethod
    def in_use(cls, account_type_id: UUID) -> AppError:
        return _logged(
            ErrorsFactory.cannot_delete_used_entity("ACCOUNTTYPE_IN_USE", cls.ENTITY, account_type_id),
            id=str(account_type_id),
            )


# =============================================================================
# ACCOUNT
# =============================================================================

class AccountErrors:
    ENTITY = "Account"

    @classmethod
    def not_found(cls, account_id: UUID) -> AppError:
        return _logged(ErrorsFactory.not_found("ACCOUNT_NOT_FOUND", cls.ENTITY, account_id), id=str(account_id))

    @classmethod
    def name_required(cls) -> AppError:
        return _logged(ErrorsFactory.required("ACCOUNT_NAME_REQUIRED", cls.ENTITY, "Name"))

    @classmethod
    def in_use(cls, account_id: UUID) -> AppError:
        return _logged(ErrorsFactory.cannot_delete_used_entity("ACCOUNT_IN_USE", cls.ENTITY, account_id), id=str(account_id))

    @classmethod
    def default_not_found(cls, registry_holder_id: UUID) -> AppError:
        return _logged(
            ErrorsFactory.custom_not_found(
                "ACCOUNT_DEFAULT_NOT_FOUND",
                f"Default account for registry holder '{registry_holder_id}' not found",
                ),
            registry_holder_id=str(registry_holder_id),
            )

    @classmethod
    def replacement_not_found(cls, replacement_id: UUID) -> AppError:
        return _logged(
            ErrorsFactory.not_found("ACCOUNT_REPLACEMENT_DEFAULT_NOT_FOUND", cls.ENTITY, replacement_id),
            id=str(replacement_id),
            )

    @classmethod
    def cannot_soft_delete_default(cls, account_id: UUID) -> AppError:
        return _logged(
            ErrorsFactory.custom_conflict(
                "ACCOUNT_CANNOT_SOFT_DELETE_DEFAULT",
                f"Account '{account_id}' is the default account and cannot be soft deleted",
                ),
            id=str(account_id),
            )

    @classmethod
    def cannot_delete_default(cls, account_id: UUID) -> AppError:
        return _logged(
            ErrorsFactory.custom_conflict(
                "ACCOUNT_CANNOT_DELETE_DEFAULT",
                f"Account '{account_id}' is the default account and cannot be deleted",
                ),
            id=str(account_id),
            )

    @classmethod
    def cannot_archive_default(cls, account_id: UUID) -> AppError:
        return _logged(
            ErrorsFactory.custom_conflict(
                "ACCOUNT_CANNOT_ARCHIVE_DEFAULT",
                f"Account '{account_id}' is the default account and cannot be archived",
                ),
            id=str(account_id),
            )

    @classmethod
    def cannot_be_default_if_archived_or_deleted(cls, account_id: Any) -> AppError:
        return _logged(
            ErrorsFactory.custom_conflict(
                "ACCOUNT_CANNOT_BE_DEFAULT_IF_ARCHIVED_OR_DELETED",
                f"Account '{account_id}' is archived or deleted and cannot be the default account",
                ),
            id=str(account_id),
            )

    @classmethod
    def replacement_cannot_be_default(cls, replacement_id: UUID) -> AppError:
        return _logged(
            ErrorsFactory.custom_conflict(
                "ACCOUNT_REPLACEMENT_CANNOT_BE_DEFAULT",
                f"Replacement account '{replacement_id}' is archived or deleted and cannot be the default account",
                ),
            id=str(replacement_id),
            )

    @classmethod
    def registry_holder_differs(cls, account_id: UUID, replacement_id: UUID) -> AppError:
        return _logged(
            ErrorsFactory.custom_conflict(
                "ACCOUNT_REGISTRYHOLDER_DIFFERS",
                f"Accounts '{account_id}' and '{replacement_id}' belong to different registry holders",
                ),
            id=str(account_id),
            replacement_id=str(replacement_id),
            )

    @classmethod
    def registry_holder_not_found(cls, holder_id: UUID) -> AppError:
        return _logged(
            ErrorsFactory.not_found("ACCOUNT_REGISTRYHOLDER_NOT_FOUND", RegistryHolderErrors.ENTITY, holder_id),
            id=str(holder_id),
            )

    @classmethod
    def account_type_not_found(cls, account_type_id: UUID) -> AppError:
        return _logged(
            ErrorsFactory.not_found("ACCOUNT_ACCOUNTTYPE_NOT_FOUND", AccountTypeErrors.ENTITY, account_type_id),
            id=str(account_type_id),
            )

    @classmethod
    def account_type_soft_deleted(cls, account_type_id: UUID) -> AppError:
        return _logged(
            ErrorsFactory.soft_deleted("ACCOUNT_ACCOUNTTYPE_SOFT_DELETED", AccountTypeErrors.ENTITY, account_type_id),
            id=str(account_type_id),
            )

    @classmethod
    def currency_not_found(cls, currency_id: UUID) -> AppError:
        return _logged(
            ErrorsFactory.not_found("ACCOUNT_CURRENCY_NOT_FOUND", CurrencyErrors.ENTITY, currency_id),
            id=str(currency_id),
            )

    @classmethod
    def currency_soft_deleted(cls, currency_id: UUID) -> AppError:
        return _logged(
            ErrorsFactory.soft_deleted("ACCOUNT_CURRENCY_SOFT_DELETED", CurrencyErrors.ENTITY, currency_id),
            id=str(currency_id),
            )

    @classmethod
    def bank_not_found(cls, bank_id: UUID) -> AppError:
        return _logged(ErrorsFactory.not_found("ACCOUNT_BANK_NOT_FOUND", BankErrors.ENTITY, bank_id), id=str(bank_id))


# =============================================================================
# CATEGORY
# =============================================================================

class CategoryErrors:
    ENTITY = "Category"

    @classmethod
    def not_found(cls, category_id: UUID) -> AppError:
        return _logged(ErrorsFactory.not_found("CATEGORY_NOT_FOUND", cls.ENTITY, category_id), id=str(category_id))

    @classmethod
    def name_required(cls) -> AppError:
        return _logged(ErrorsFactory.required("CATEGORY_NAME_REQUIRED", cls.ENTITY, "Name"))

    @classmethod
    def name_already_exists(cls, name: str) -> AppError:
        return _logged(ErrorsFactory.already_exists("CATEGORY_NAME_ALREADY_EXISTS", cls.ENTITY, "Name", name), name=name)

    @classmethod
    def in_use(cls, category_id: UUID) -> AppError:
        return _logged(ErrorsFactory.cannot_delete_used_entity("CATEGORY_IN_USE", cls.ENTITY, category_id), id=str(category_id))

    @classmethod
    def registry_holder_not_found(cls, holder_id: UUID) -> AppError:
        return _logged(
            ErrorsFactory.not_found("CATEGORY_REGISTRYHOLDER_NOT_FOUND", RegistryHolderErrors.ENTITY, holder_id),
            id=str(holder_id),
            )

    @classmethod
    def parent_not_found(cls, parent_id: UUID) -> AppError:
        return _logged(ErrorsFactory.not_found("CATEGORY_PARENT_NOT_FOUND", cls.ENTITY, parent_id), id=str(parent_id))

    @classmethod
    def recursive_parent(cls, category_id: Any, parent_id: UUID) -> AppError:
        return _logged(
            ErrorsFactory.custom_conflict(
                "CATEGORY_RECURSIVE_PARENT",
                f"Cannot set category '{category_id}' as child of '{parent_id}' due to recursive relation",
                ),
            id=str(category_id),
            parent_id=str(parent_id),
            )


# =============================================================================
# EXCHANGE RATE
# =============================================================================

class ExchangeRateErrors:
    ENTITY = "ExchangeRate"

    @classmethod
    def not_found(cls, rate_id: UUID) -> AppError:
        return _logged(ErrorsFactory.not_found("EXCHANGERATE_NOT_FOUND", cls.ENTITY, rate_id), id=str(rate_id))

    @classmethod
    def currency_required(cls) -> AppError:
        return _logged(ErrorsFactory.required("EXCHANGERATE_CURRENCY_REQUIRED", cls.ENTITY, "CurrencyId"))

    @classmethod
    def currency_not_found(cls, currency_id: UUID) -> AppError:
        return _logged(
            ErrorsFactory.not_found("EXCHANGERATE_CURRENCY_NOT_FOUND", CurrencyErrors.ENTITY, currency_id),
            id=str(currency_id),
            )

    @classmethod
    def rate_date_required(cls) -> AppError:
        return _logged(ErrorsFactory.required("EXCHANGERATE_RATEDATE_REQUIRED", cls.ENTITY, "RateDate"))

    @classmethod
    def value_required(cls) -> AppError:
        return _logged(ErrorsFactory.required("EXCHANGERATE_VALUE_REQUIRED", cls.ENTITY, "Rate"))

    @classmethod
    def already_exists(cls, currency_id: UUID, rate_date: date) -> AppError:
        value = f"{currency_id}:{rate_date.isoformat()}"
        return _logged(
            ErrorsFactory.already_exists("EXCHANGERATE_EXISTS", cls.ENTITY, "CurrencyId:RateDate", value),
            currency_id=str(currency_id),
            rate_date=rate_date.isoformat(),
            )
