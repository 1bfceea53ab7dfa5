"""
Replication job and its background scheduler.

ReplicationJob.run_once() performs one pass over every replicated kind in
dependency order and stops at the first kind that fails.
ReplicationScheduler repeats the job every REPLICATION_INTERVAL_SECONDS in a
background asyncio task owned by the application lifespan.
"""
import asyncio
import contextlib
from typing import Callable, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.common.config import get_settings
from finance_manager.common.logging_config import get_logger
from finance_manager.transactions.clients.catalog_api import CatalogApiClient
from finance_manager.transactions.db.session import async_engine
from finance_manager.transactions.replication.loader import ExternalDataLoaderService
from finance_manager.transactions.schemas.replication import RPRunSummary

logger = get_logger(__name__)


def default_session_factory() -> AsyncSession:
    return AsyncSession(async_engine, expire_on_commit=False)


class ReplicationJob:

    def __init__(
        self,
        client: Optional[CatalogApiClient] = None,
        session_factory: Callable[[], AsyncSession] = default_session_factory,
        ):
        self.client = client or CatalogApiClient()
        self.session_factory = session_factory

    async def run_once(self) -> RPRunSummary:
        logger.info("Replication run started", catalog=self.client.base_url)
        counts: Dict[str, int] = {}

        async with self.session_factory() as session:
            loader = ExternalDataLoaderService(session, self.client)
            for kind, load in loader.loaders():
                result = await load()
                if result.is_failed:
                    logger.warning("Replication run aborted", kind=kind, code=result.error.code)
                    return RPRunSummary(
                        counts=counts,
                        success=False,
                        error_code=result.error.code,
                        error_message=result.error.message,
                        )
                counts[kind] = result.value

        logger.info("Replication run completed", counts=counts)
        return RPRunSummary(counts=counts, success=True)


class ReplicationScheduler:

    def __init__(self, job: ReplicationJob, interval_seconds: Optional[float] = None):
        self.job = job
        self.interval_seconds = interval_seconds or get_settings().REPLICATION_INTERVAL_SECONDS
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _run_forever(self) -> None:
        while True:
            try:
                await self.job.run_once()
            except Exception as e:
                # A failing pass must not stop later passes
                logger.error("Replication run crashed", error=str(e), exc_info=True)
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run_forever(), name="catalog-replication")
        logger.info("Replication scheduler started", interval_seconds=self.interval_seconds)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Replication scheduler stopped")
