"""Merge extractor output from many files into one deduplicated ModGroup."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import PureWindowsPath

from workshop_diff.modules.modlist.extractor import extract_candidates
from workshop_diff.modules.modlist.schemas import (
    FileContent,
    GroupDiff,
    GroupName,
    ModGroup,
    ModRecord,
)


def file_label(file: FileContent, group: GroupName) -> str:
    """Display name of an uploaded file, or the group name when it has none."""
    if not file.filename or not file.filename.strip():
        return group
    # Some browsers send the full client path; PureWindowsPath splits on both separators.
    return PureWindowsPath(file.filename.strip()).name or group


def aggregate_group(group: GroupName, files: Sequence[FileContent]) -> ModGroup:
    """Build a ModGroup from files in upload order.

    Dedup key is the mod id. The first sighting fixes the name; later
    sightings (another strategy, or another file) are dropped. Dict
    insertion order is the record order.
    """
    seen: dict[str, ModRecord] = {}
    file_names: list[str] = []

    for file in files:
        file_names.append(file_label(file, group))
        for mod_id, name in extract_candidates(file.text()):
            if mod_id not in seen:
                seen[mod_id] = ModRecord(id=mod_id, name=name)

    return ModGroup(group=group, records=list(seen.values()), file_names=file_names)


def diff_groups(before: ModGroup, after: ModGroup) -> GroupDiff:
    """Mods added in ``after``, removed from ``before``, and ids kept in both."""
    before_ids = set(before.ids)
    after_ids = set(after.ids)
    return GroupDiff(
        added=[r for r in after.records if r.id not in before_ids],
        removed=[r for r in before.records if r.id not in after_ids],
        unchanged=[r.id for r in before.records if r.id in after_ids],
    )
