from __future__ import annotations

from collections.abc import Sequence

import structlog

from workshop_diff.core.config import settings
from workshop_diff.core.exceptions import ClientInputError
from workshop_diff.modules.modlist.aggregator import aggregate_group, diff_groups
from workshop_diff.modules.modlist.schemas import CompareResponse, FileContent

logger = structlog.get_logger()


def check_group_sizes(before_count: int, after_count: int) -> None:
    """Reject an upload with no files at all, or too many in one group."""
    if before_count == 0 and after_count == 0:
        raise ClientInputError("No files uploaded. Provide at least one 'before' or 'after' file.")

    limit = settings.max_files_per_group
    for group, count in (("before", before_count), ("after", after_count)):
        if count > limit:
            raise ClientInputError(f"Too many '{group}' files: {count} (max {limit}).")


def compare_groups(
    before_files: Sequence[FileContent],
    after_files: Sequence[FileContent],
) -> CompareResponse:
    """Extract and deduplicate mods for both groups and diff them."""
    check_group_sizes(len(before_files), len(after_files))

    before = aggregate_group("before", before_files)
    after = aggregate_group("after", after_files)

    for group in (before, after):
        logger.info(
            "modlist_group_aggregated",
            group=group.group,
            file_count=len(group.file_names),
            mod_count=group.count,
        )

    return CompareResponse(
        before=before.records,
        after=after.records,
        before_count=before.count,
        after_count=after.count,
        before_files=before.file_names,
        after_files=after.file_names,
        diff=diff_groups(before, after),
    )
