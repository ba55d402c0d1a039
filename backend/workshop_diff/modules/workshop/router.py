"""Workshop API — enrich mod ids with catalog details.

  - /workshop/details — batched lookup (canonical)
  - /steamapi         — legacy dual lookup, unbatched, mounted without prefix
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException

from workshop_diff.core.exceptions import UpstreamCallError
from workshop_diff.modules.workshop import service
from workshop_diff.modules.workshop.client import WorkshopClient, get_workshop_client
from workshop_diff.modules.workshop.schemas import (
    DetailLookupRequest,
    DetailLookupResponse,
    LegacyLookupRequest,
    LegacyLookupResponse,
)

logger = structlog.get_logger()

UPSTREAM_FAILURE_DETAIL = "Failed to fetch mod details."

router = APIRouter(prefix="/workshop", tags=["workshop"])


@router.post("/details", response_model=DetailLookupResponse)
async def lookup_details(
    request: DetailLookupRequest,
    client: WorkshopClient = Depends(get_workshop_client),
) -> DetailLookupResponse:
    """Look up any number of ids in batches of 100 and return the combined details."""
    try:
        details = await service.lookup_details(client, request.ids)
    except UpstreamCallError as exc:
        logger.error(
            "Workshop lookup failed",
            error=exc.message,
            batch_index=exc.batch_index,
            exc_info=True,
        )
        raise HTTPException(status_code=500, detail=UPSTREAM_FAILURE_DETAIL) from exc
    except Exception as exc:
        logger.error("Workshop lookup crashed", error=str(exc), exc_info=True)
        raise HTTPException(status_code=500, detail=UPSTREAM_FAILURE_DETAIL) from exc

    return DetailLookupResponse(details=details, count=len(details))


legacy_router = APIRouter(tags=["workshop"])


@legacy_router.post("/steamapi", response_model=LegacyLookupResponse)
async def steamapi_proxy(
    request: LegacyLookupRequest,
    client: WorkshopClient = Depends(get_workshop_client),
) -> LegacyLookupResponse:
    """Fetch raw catalog payloads for two id lists concurrently (no batching)."""
    try:
        first, second = await service.lookup_pair(client, request.mods_1, request.mods_2)
    except UpstreamCallError as exc:
        logger.error("Steam API error", error=exc.message, exc_info=True)
        raise HTTPException(status_code=500, detail=UPSTREAM_FAILURE_DETAIL) from exc
    except Exception as exc:
        logger.error("Steam API proxy crashed", error=str(exc), exc_info=True)
        raise HTTPException(status_code=500, detail=UPSTREAM_FAILURE_DETAIL) from exc

    return LegacyLookupResponse(processed_mods1=first, processed_mods2=second)
