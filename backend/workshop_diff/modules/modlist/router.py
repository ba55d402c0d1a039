"""Modlist API — compare two sets of exported Workshop listing files.

  - /modlist/compare — multipart upload, repeated ``before`` / ``after`` fields
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, HTTPException, Request
from starlette.datastructures import UploadFile

from workshop_diff.core.config import settings
from workshop_diff.core.exceptions import ClientInputError
from workshop_diff.modules.modlist.schemas import CompareResponse, FileContent
from workshop_diff.modules.modlist.service import check_group_sizes, compare_groups

logger = structlog.get_logger()

router = APIRouter(prefix="/modlist", tags=["modlist"])


async def _read_upload(value: UploadFile | str) -> FileContent:
    # Plain form fields are accepted as pasted listing text.
    if isinstance(value, str):
        return FileContent(content=value.encode("utf-8"))

    data = await value.read()
    size_mb = len(data) / (1024 * 1024)
    if size_mb > settings.max_file_size_mb:
        raise HTTPException(
            status_code=413,
            detail=f"File too large: {value.filename} ({size_mb:.1f} MB, max {settings.max_file_size_mb} MB).",
        )
    return FileContent(filename=value.filename, content=data)


@router.post("/compare", response_model=CompareResponse)
async def compare_modlists(request: Request) -> CompareResponse:
    """Upload "before" and "after" listing files and get both mod sets plus their diff.

    Either group may be empty, but not both. The form is parsed here rather
    than through ``File()`` parameters so each group can reach
    ``max_files_per_group`` (Starlette's default cap is 1000 files per request).
    """
    form_limit = settings.max_files_per_group * 2

    async with request.form(max_files=form_limit, max_fields=form_limit) as form:
        before_values = form.getlist("before")
        after_values = form.getlist("after")

        logger.info(
            "Modlist compare request",
            before_files=len(before_values),
            after_files=len(after_values),
        )

        try:
            check_group_sizes(len(before_values), len(after_values))
            before = [await _read_upload(v) for v in before_values]
            after = [await _read_upload(v) for v in after_values]
            return compare_groups(before, after)
        except ClientInputError as exc:
            raise HTTPException(status_code=400, detail=exc.message) from exc
        except HTTPException:
            raise
        except Exception as exc:
            logger.error("Modlist compare failed", error=str(exc), exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to process mod lists.") from exc
