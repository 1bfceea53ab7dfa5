"""Replication loader, job and scheduler tests."""
import asyncio
from decimal import Decimal
from uuid import UUID

import httpx
import pytest
from sqlalchemy.exc import IntegrityError

from finance_manager.transactions.db.models import (
    TransactionHolder,
    TransactionsAccount,
    TransactionsAccountType,
    TransactionsCategory,
    TransactionsCurrency,
    )
from finance_manager.transactions.replication.job import ReplicationJob, ReplicationScheduler
from finance_manager.transactions.replication.loader import HOLDERS, ExternalDataLoaderService, get_kind_lock
from finance_manager.transactions.schemas.replication import RPRunSummary
from finance_manager.test_scripts.test_utils import FakeCatalog, count_rows


class TestReplicationJob:

    @pytest.mark.asyncio
    async def test_full_run(self, session, session_factory):
        """RP-U-001: One pass replicates every kind with the catalog ids"""
        catalog = FakeCatalog()
        rows = catalog.populate()

        summary = await ReplicationJob(catalog.client(), session_factory).run_once()

        assert summary.success is True
        assert summary.counts == {"holders": 1, "account_types": 1, "currencies": 1, "accounts": 1, "categories": 1}

        account = await session.get(TransactionsAccount, UUID(rows["account"]["id"]))
        assert account.holder_id == UUID(rows["holder"]["id"])
        assert account.currency_id == UUID(rows["currency"]["id"])
        holder = await session.get(TransactionHolder, UUID(rows["holder"]["id"]))
        assert holder.telegram_id == 111

    @pytest.mark.asyncio
    async def test_kinds_loaded_in_dependency_order(self, session_factory):
        """RP-U-002: Holders, account types and currencies are fetched before accounts and categories"""
        catalog = FakeCatalog()
        catalog.populate()

        await ReplicationJob(catalog.client(), session_factory).run_once()

        assert catalog.paths_requested() == [
            "/registry-holders",
            "/account-types",
            "/currencies",
            "/accounts",
            "/categories",
            ]

    @pytest.mark.asyncio
    async def test_second_run_updates_in_place(self, session, session_factory):
        """RP-U-003: Re-running overwrites changed fields without duplicating rows"""
        catalog = FakeCatalog()
        rows = catalog.populate()
        job = ReplicationJob(catalog.client(), session_factory)
        await job.run_once()

        rows["account"]["is_archived"] = True
        rows["account"]["credit_limit"] = "500.25"
        rows["currency"]["is_deleted"] = True
        summary = await job.run_once()

        assert summary.success is True
        assert await count_rows(session, TransactionsAccount) == 1
        account = await session.get(TransactionsAccount, UUID(rows["account"]["id"]))
        assert account.is_archived is True
        assert account.credit_limit == Decimal("500.25")
        currency = await session.get(TransactionsCurrency, UUID(rows["currency"]["id"]))
        assert currency.is_deleted is True

    @pytest.mark.asyncio
    async def test_stops_at_first_failure(self, session, session_factory):
        """RP-U-004: A failing kind aborts the pass; later kinds are not requested"""
        catalog = FakeCatalog()
        catalog.populate()
        catalog.failures["/currencies"] = 500

        summary = await ReplicationJob(catalog.client(), session_factory).run_once()

        assert summary.success is False
        assert summary.error_code == "EXTERNAL_API_ERROR"
        assert "currencies" in summary.error_message
        assert summary.counts == {"holders": 1, "account_types": 1}
        assert "/accounts" not in catalog.paths_requested()
        assert await count_rows(session, TransactionHolder) == 1
        assert await count_rows(session, TransactionsCurrency) == 0
        assert await count_rows(session, TransactionsCategory) == 0

    @pytest.mark.asyncio
    async def test_empty_catalog(self, session_factory):
        """RP-U-005: Empty catalog gives zero counts and success"""
        summary = await ReplicationJob(FakeCatalog().client(), session_factory).run_once()

        assert summary == RPRunSummary(
            counts={"holders": 0, "account_types": 0, "currencies": 0, "accounts": 0, "categories": 0},
            success=True,
            )


class TestExternalDataLoader:

    @pytest.mark.asyncio
    async def test_failed_page_stores_nothing(self, session):
        """RP-U-010: A failure on a later page leaves the kind's table untouched"""
        catalog = FakeCatalog()
        for telegram_id in range(1, 4):
            catalog.add_holder(telegram_id)
        client = catalog.client(page_size=2)

        original_handler = catalog.handler

        def failing_second_page(request: httpx.Request) -> httpx.Response:
            if request.url.params.get("Page") == "2":
                return httpx.Response(502)
            return original_handler(request)

        client.transport = httpx.MockTransport(failing_second_page)

        result = await ExternalDataLoaderService(session, client).load_holders()

        assert result.error.code == "EXTERNAL_API_ERROR"
        assert await count_rows(session, TransactionHolder) == 0

    @pytest.mark.asyncio
    async def test_database_error_propagates(self, session):
        """RP-U-011: An account referencing an unreplicated holder raises and rolls back"""
        catalog = FakeCatalog()
        catalog.populate()

        loader = ExternalDataLoaderService(session, catalog.client())
        with pytest.raises(IntegrityError):
            await loader.load_accounts()

        assert await count_rows(session, TransactionsAccount) == 0

    @pytest.mark.asyncio
    async def test_deleted_rows_replicated(self, session):
        """RP-U-012: Soft deleted catalog rows are replicated with their flag"""
        catalog = FakeCatalog()
        catalog.add_account_type("OLD", is_deleted=True)

        result = await ExternalDataLoaderService(session, catalog.client()).load_account_types()

        assert result.value == 1
        account_types = await session.get(TransactionsAccountType, UUID(catalog.collections["/account-types"][0]["id"]))
        assert account_types.is_deleted is True

    @pytest.mark.asyncio
    async def test_kind_lock_serializes_loads(self, session):
        """RP-U-013: A load waits while another run holds the kind's lock"""
        catalog = FakeCatalog()
        catalog.add_holder(1)
        loader = ExternalDataLoaderService(session, catalog.client())

        lock = get_kind_lock(HOLDERS)
        await lock.acquire()
        try:
            task = asyncio.create_task(loader.load_holders())
            await asyncio.sleep(0.05)
            assert not task.done()
            assert catalog.requests == []
        finally:
            lock.release()

        result = await task
        assert result.value == 1

    @pytest.mark.asyncio
    async def test_kind_locks_per_event_loop(self):
        """RP-U-014: Each event loop gets its own kind locks; a lock held in another loop does not block"""

        async def hold_lock_elsewhere() -> asyncio.Lock:
            lock = get_kind_lock(HOLDERS)
            await lock.acquire()
            return lock

        other_loop_lock = await asyncio.to_thread(asyncio.run, hold_lock_elsewhere())

        lock = get_kind_lock(HOLDERS)
        assert lock is get_kind_lock(HOLDERS)
        assert lock is not other_loop_lock
        assert other_loop_lock.locked()
        await asyncio.wait_for(lock.acquire(), timeout=1)
        lock.release()

        with pytest.raises(ValueError):
            get_kind_lock("payments")


# ============================================================================
# SCHEDULER
# ============================================================================

class _CountingJob:
    """Job double: fails on the first call, succeeds afterwards."""

    def __init__(self):
        self.calls = 0

    async def run_once(self) -> RPRunSummary:
        self.calls += 1
        if self.calls == 1:
            raise RuntimeError("catalog exploded")
        return RPRunSummary(counts={}, success=True)


class TestReplicationScheduler:

    @pytest.mark.asyncio
    async def test_repeats_after_crash(self):
        """RP-U-020: Scheduler keeps running after a crashed pass and stops cleanly"""
        job = _CountingJob()
        scheduler = ReplicationScheduler(job, interval_seconds=0.01)

        scheduler.start()
        assert scheduler.is_running
        for _ in range(100):
            if job.calls >= 3:
                break
            await asyncio.sleep(0.01)
        await scheduler.stop()

        assert job.calls >= 3
        assert scheduler.is_running is False

    @pytest.mark.asyncio
    async def test_start_twice_keeps_one_task(self):
        """RP-U-021: A second start() while running is ignored"""
        scheduler = ReplicationScheduler(_CountingJob(), interval_seconds=60)

        scheduler.start()
        task = scheduler._task
        scheduler.start()
        assert scheduler._task is task
        await scheduler.stop()

    @pytest.mark.asyncio
    async def test_stop_without_start(self):
        """RP-U-022: stop() on an idle scheduler is a no-op"""
        scheduler = ReplicationScheduler(_CountingJob(), interval_seconds=60)
        await scheduler.stop()
        assert scheduler.is_running is False
