"""Modlist schemas — uploaded files, mod records and the compare response."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

GroupName = Literal["before", "after"]


# ---------------------------------------------------------------------------
# Core records
# ---------------------------------------------------------------------------


class ModRecord(BaseModel):
    """One Workshop mod found in an uploaded listing."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., pattern=r"^[0-9]+$", description="Workshop published file id")
    name: str


class FileContent(BaseModel):
    """Raw payload of one uploaded listing file."""

    model_config = ConfigDict(frozen=True)

    filename: str | None = None
    content: bytes = b""

    def text(self) -> str:
        """Decode as UTF-8; undecodable bytes become U+FFFD."""
        return self.content.decode("utf-8", errors="replace")


class ModGroup(BaseModel):
    """Deduplicated mods from every file of one group, in first-seen order."""

    group: GroupName
    records: list[ModRecord] = Field(default_factory=list)
    file_names: list[str] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.records)

    @property
    def ids(self) -> list[str]:
        return [r.id for r in self.records]


# ---------------------------------------------------------------------------
# API response
# ---------------------------------------------------------------------------


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GroupDiff(_CamelModel):
    """What changed between the before and after groups."""

    added: list[ModRecord] = Field(default_factory=list)
    removed: list[ModRecord] = Field(default_factory=list)
    unchanged: list[str] = Field(default_factory=list, description="Ids present in both groups")


class CompareResponse(_CamelModel):
    before: list[ModRecord]
    after: list[ModRecord]
    before_count: int
    after_count: int
    before_files: list[str]
    after_files: list[str]
    diff: GroupDiff
