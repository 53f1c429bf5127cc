"""
Job record persistence (raw SQL).
"""

from __future__ import annotations

from collections.abc import Sequence

from core import db

OPENAI_JOBS_TABLE = "fine_tuning_jobs"
FIREWORKS_JOBS_TABLE = "fireworks_fine_tuning_jobs"

# Delete order for bulk requests. Table names are only ever taken from here.
JOB_TABLES = (OPENAI_JOBS_TABLE, FIREWORKS_JOBS_TABLE)


def _checked_table(table: str) -> str:
    if table not in JOB_TABLES:
        raise ValueError(f"Unknown job table: {table!r}")
    return table


async def delete_jobs_for_user(
    table: str,
    *,
    job_ids: Sequence[str | int],
    user_id: str,
) -> int:
    """
    Delete rows of `table` whose id is in `job_ids` and that `user_id` owns.

    Returns the number of rows actually removed.
    """
    table = _checked_table(table)
    rows = await db.fetch_all(
        f"""
        DELETE FROM {table}
        WHERE id::text = ANY($1::text[])
          AND user_id::text = $2
        RETURNING id
        """,
        [str(job_id) for job_id in job_ids],
        str(user_id),
    )
    return len(rows)
