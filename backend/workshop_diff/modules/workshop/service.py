from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any

import structlog

from workshop_diff.core.config import settings
from workshop_diff.core.exceptions import UpstreamCallError
from workshop_diff.modules.workshop.batching import split_batches
from workshop_diff.modules.workshop.client import DetailRecord, WorkshopClient

logger = structlog.get_logger()


def empty_payload() -> dict[str, Any]:
    """Catalog-shaped payload with no results."""
    return {"response": {"result": 1, "resultcount": 0, "publishedfiledetails": []}}


async def lookup_details(
    client: WorkshopClient,
    ids: Sequence[str],
    batch_size: int | None = None,
) -> list[DetailRecord]:
    """Fetch details for any number of ids, one batch at a time, in order.

    Batches are awaited sequentially. The first failing batch aborts the
    whole lookup; no partial result is returned.
    """
    if not ids:
        return []

    batches = split_batches(ids, batch_size or settings.workshop_batch_size)
    details: list[DetailRecord] = []

    for index, batch in enumerate(batches):
        try:
            found = await client.fetch_details(batch)
        except UpstreamCallError as exc:
            raise UpstreamCallError(exc.message, batch_index=index) from exc
        details.extend(found)
        logger.info(
            "workshop_batch_fetched",
            batch=index + 1,
            batches=len(batches),
            size=len(batch),
            results=len(found),
        )

    logger.info("workshop_lookup_complete", ids=len(ids), details=len(details))
    return details


async def lookup_pair(
    client: WorkshopClient,
    mods_1: Sequence[str],
    mods_2: Sequence[str],
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Legacy lookup: one unbatched call per list, both in flight at once.

    Returns the raw catalog payloads. Callers must keep each list within the
    catalog's own limit.
    """

    async def _fetch(ids: Sequence[str]) -> dict[str, Any]:
        if not ids:
            return empty_payload()
        return await client.fetch_raw(ids)

    # A failing call cancels its sibling; the first error is re-raised unwrapped.
    try:
        async with asyncio.TaskGroup() as tg:
            first = tg.create_task(_fetch(mods_1))
            second = tg.create_task(_fetch(mods_2))
    except ExceptionGroup as group:
        raise group.exceptions[0]

    logger.info("workshop_pair_fetched", mods_1=len(mods_1), mods_2=len(mods_2))
    return first.result(), second.result()
