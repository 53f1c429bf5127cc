"""
Job record deletion business logic.

Bulk deletes touch two independent tables (OpenAI and Fireworks jobs). They
run one after the other without a transaction: a store error on one table is
logged and recorded, and the other table is still attempted. The request only
counts as failed when every delete errored.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import asyncpg
from fastapi import HTTPException, status

from . import repository

logger = logging.getLogger(__name__)

# Errors that mean "this table's delete failed" rather than "the request is broken".
STORE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


@dataclass(frozen=True)
class TableDeleteResult:
    table: str
    deleted: int
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class BulkDeleteResult:
    results: tuple[TableDeleteResult, ...]

    @property
    def total_deleted(self) -> int:
        return sum(r.deleted for r in self.results if r.ok)

    @property
    def all_failed(self) -> bool:
        return bool(self.results) and all(not r.ok for r in self.results)


async def _delete_from_table(table: str, *, job_ids: Sequence[str | int], user_id: str) -> TableDeleteResult:
    logger.info("Deleting %d ids from %s for user %s", len(job_ids), table, user_id)
    try:
        deleted = await repository.delete_jobs_for_user(table, job_ids=job_ids, user_id=user_id)
    except STORE_ERRORS as exc:
        logger.error("DB delete error (%s) for user %s: %s", table, user_id, exc)
        return TableDeleteResult(table=table, deleted=0, error=exc)

    logger.info("Deleted %d records from %s", deleted, table)
    return TableDeleteResult(table=table, deleted=deleted)


async def bulk_delete(job_ids: Sequence[str | int], *, user_id: str) -> BulkDeleteResult:
    results = []
    for table in repository.JOB_TABLES:
        results.append(await _delete_from_table(table, job_ids=job_ids, user_id=user_id))

    result = BulkDeleteResult(results=tuple(results))
    if not result.all_failed:
        logger.info("Total records deleted: %d for user %s", result.total_deleted, user_id)
    return result


async def delete_job(job_id: str, *, user_id: str) -> None:
    """
    Delete a single OpenAI job record owned by `user_id`.
    """
    try:
        deleted = await repository.delete_jobs_for_user(
            repository.OPENAI_JOBS_TABLE,
            job_ids=[job_id],
            user_id=user_id,
        )
    except STORE_ERRORS as exc:
        logger.error("DB delete error for user %s, job %s: %s", user_id, job_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Database error deleting job record: {exc}",
        ) from exc

    if deleted == 0:
        logger.warning("Job record %s not found or not owned by user %s", job_id, user_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Job record not found or access denied",
        )
    logger.info("Deleted job record %s for user %s", job_id, user_id)
