"""
HTTP client for the catalog service's read endpoints.

Used by the replication loader only. Listings are fetched page by page
(`Page` / `ItemsPerPage`) until a page comes back shorter than the page
size; soft-deleted rows are requested too so their flags replicate.

Raises:
    ExternalApiError: on transport errors, non-2xx answers (except 404 on
        by-id reads, which return None) and undecodable payloads
"""
from typing import Any, Dict, List, Optional, Type, TypeVar
from uuid import UUID

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from finance_manager.common.config import get_settings
from finance_manager.common.errors import ExternalApiError
from finance_manager.common.logging_config import get_logger
from finance_manager.transactions.schemas.replication import (
    RPAccountItem,
    RPAccountTypeItem,
    RPCategoryItem,
    RPCurrencyItem,
    RPHolderItem,
    )

logger = get_logger(__name__)

ItemT = TypeVar("ItemT", bound=BaseModel)


class CatalogApiClient:
    HOLDERS = "/registry-holders"
    ACCOUNT_TYPES = "/account-types"
    CURRENCIES = "/currencies"
    ACCOUNTS = "/accounts"
    CATEGORIES = "/categories"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        page_size: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        ):
        """
        Args:
            base_url: Catalog root URL (defaults to CATALOG_API_BASE_URL)
            timeout: Per-request timeout in seconds (defaults to CATALOG_API_TIMEOUT_SECONDS)
            page_size: Rows requested per page (defaults to CATALOG_API_PAGE_SIZE)
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        settings = get_settings()
        self.base_url = (base_url or settings.CATALOG_API_BASE_URL).rstrip("/")
        self.api_prefix = settings.API_V1_PREFIX
        self.timeout = timeout if timeout is not None else settings.CATALOG_API_TIMEOUT_SECONDS
        self.page_size = page_size or settings.CATALOG_API_PAGE_SIZE
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport)

    # =========================================================================
    # GENERIC
    # =========================================================================

    async def _get_all(self, path: str, item_type: Type[ItemT], params: Optional[Dict[str, Any]] = None) -> List[ItemT]:
        adapter = TypeAdapter(List[item_type])
        url = f"{self.api_prefix}{path}"
        items: List[ItemT] = []
        page = 1

        try:
            async with self._client() as client:
                while True:
                    query = {**(params or {}), "Page": page, "ItemsPerPage": self.page_size}
                    response = await client.get(url, params=query)
                    response.raise_for_status()
                    batch = adapter.validate_python(response.json())
                    items.extend(batch)
                    if len(batch) < self.page_size:
                        break
                    page += 1
        except httpx.HTTPStatusError as e:
            logger.error(f"Catalog API answered {e.response.status_code} for {url}")
            raise ExternalApiError(f"Catalog API error on {url}: HTTP {e.response.status_code}", e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error(f"Catalog API request failed for {url}: {e}")
            raise ExternalApiError(f"Catalog API unreachable on {url}: {e}") from e
        except (ValidationError, ValueError) as e:
            logger.error(f"Invalid catalog response for {url}: {e}")
            raise ExternalApiError(f"Invalid catalog response on {url}: {e}") from e

        logger.info("Catalog collection fetched", path=path, count=len(items), pages=page)
        return items

    async def _get_by_id(self, path: str, entity_id: UUID, item_type: Type[ItemT]) -> Optional[ItemT]:
        url = f"{self.api_prefix}{path}/{entity_id}"
        try:
            async with self._client() as client:
                response = await client.get(url)
                if response.status_code == httpx.codes.NOT_FOUND:
                    return None
                response.raise_for_status()
                return item_type.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            logger.error(f"Catalog API answered {e.response.status_code} for {url}")
            raise ExternalApiError(f"Catalog API error on {url}: HTTP {e.response.status_code}", e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error(f"Catalog API request failed for {url}: {e}")
            raise ExternalApiError(f"Catalog API unreachable on {url}: {e}") from e
        except (ValidationError, ValueError) as e:
            logger.error(f"Invalid catalog response for {url}: {e}")
            raise ExternalApiError(f"Invalid catalog response on {url}: {e}") from e

    # =========================================================================
    # COLLECTIONS
    # =========================================================================

    async def get_all_holders(self) -> List[RPHolderItem]:
        return await self._get_all(self.HOLDERS, RPHolderItem)

    async def get_all_account_types(self) -> List[RPAccountTypeItem]:
        return await self._get_all(self.ACCOUNT_TYPES, RPAccountTypeItem, {"include_deleted": True})

    async def get_all_currencies(self) -> List[RPCurrencyItem]:
        return await self._get_all(self.CURRENCIES, RPCurrencyItem, {"include_deleted": True})

    async def get_all_accounts(self) -> List[RPAccountItem]:
        return await self._get_all(self.ACCOUNTS, RPAccountItem, {"include_deleted": True})

    async def get_all_categories(self) -> List[RPCategoryItem]:
        return await self._get_all(self.CATEGORIES, RPCategoryItem, {"include_deleted": True})

    # =========================================================================
    # SINGLE ITEMS
    # =========================================================================

    async def get_holder_by_id(self, holder_id: UUID) -> Optional[RPHolderItem]:
        return await self._get_by_id(self.HOLDERS, holder_id, RPHolderItem)

    async def get_account_type_by_id(self, account_type_id: UUID) -> Optional[RPAccountTypeItem]:
        return await self._get_by_id(self.ACCOUNT_TYPES, account_type_id, RPAccountTypeItem)

    async def get_currency_by_id(self, currency_id: UUID) -> Optional[RPCurrencyItem]:
        return await self._get_by_id(self.CURRENCIES, currency_id, RPCurrencyItem)

    async def get_account_by_id(self, account_id: UUID) -> Optional[RPAccountItem]:
        return await self._get_by_id(self.ACCOUNTS, account_id, RPAccountItem)

    async def get_category_by_id(self, category_id: UUID) -> Optional[RPCategoryItem]:
        return await self._get_by_id(self.CATEGORIES, category_id, RPCategoryItem)
