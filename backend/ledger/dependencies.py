from fastapi import Query

from ledger.config import settings


async def get_submitter(
    submitted_by: str | None = Query(None, min_length=1, max_length=100),
) -> str:
    """Role tag for reads and writes.

    Falls back to the configured default role until sessions identify the
    submitter.
    """
    return submitted_by or settings.DEFAULT_SUBMITTER
