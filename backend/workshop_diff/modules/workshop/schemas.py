from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field


def _coerce_id(value: Any) -> Any:
    # Clients often send ids as JSON numbers.
    return str(value) if isinstance(value, int) and not isinstance(value, bool) else value


ModId = Annotated[str, BeforeValidator(_coerce_id)]


# --- Batched lookup ---


class DetailLookupRequest(BaseModel):
    ids: list[ModId] = Field(default_factory=list, description="Workshop ids, any length")


class DetailLookupResponse(BaseModel):
    details: list[dict[str, Any]]
    count: int


# --- Legacy dual lookup (/steamapi) ---


class LegacyLookupRequest(BaseModel):
    mods_1: list[ModId] = Field(default_factory=list)
    mods_2: list[ModId] = Field(default_factory=list)


class LegacyLookupResponse(BaseModel):
    processed_mods1: dict[str, Any]
    processed_mods2: dict[str, Any]
