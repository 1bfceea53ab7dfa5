"""
On-demand replication endpoint.

POST /replication/run performs one pass immediately (the scheduled passes
keep running independently). Per-kind locks make an on-demand pass and a
scheduled pass wait for each other kind by kind.
"""
from fastapi import APIRouter, Depends, Request, status

from finance_manager.common.api.responses import problem_details
from finance_manager.common.logging_config import get_logger
from finance_manager.transactions.replication.job import ReplicationJob
from finance_manager.transactions.schemas.replication import RPRunSummary

logger = get_logger(__name__)

replication_router = APIRouter(prefix="/replication", tags=["replication"])


def get_replication_job() -> ReplicationJob:
    """Dependency returning the job bound to the configured catalog and database."""
    return ReplicationJob()


@replication_router.post("/run", response_model=RPRunSummary)
async def run_replication(request: Request, job: ReplicationJob = Depends(get_replication_job)):
    summary = await job.run_once()
    if not summary.success:
        return problem_details(
            request,
            status.HTTP_502_BAD_GATEWAY,
            summary.error_message or "Replication failed",
            summary.error_code or "EXTERNAL_API_ERROR",
            extra={"counts": summary.counts},
            )
    return summary
