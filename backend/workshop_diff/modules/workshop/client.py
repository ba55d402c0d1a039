"""HTTP client for ISteamRemoteStorage/GetPublishedFileDetails."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Sequence
from typing import Any
from urllib.parse import urlencode

import httpx

from workshop_diff.core.config import settings
from workshop_diff.core.exceptions import UpstreamCallError

DetailRecord = dict[str, Any]


def build_form_body(ids: Sequence[str]) -> str:
    """``itemcount=N&publishedfileids%5B0%5D=...&`` with indexes local to this call."""
    fields = [("itemcount", str(len(ids)))]
    fields.extend((f"publishedfileids[{i}]", str(mod_id)) for i, mod_id in enumerate(ids))
    return urlencode(fields) + "&"


def extract_details(payload: dict[str, Any]) -> list[DetailRecord]:
    """Pull ``response.publishedfiledetails`` out of a payload; missing means no results."""
    response = payload.get("response")
    if not isinstance(response, dict):
        return []
    details = response.get("publishedfiledetails")
    return details if isinstance(details, list) else []


class WorkshopClient:
    """Single-request-per-call client for the Workshop catalog.

    Pass ``http_client`` to share a connection pool or to inject a mock
    transport; otherwise one is created on ``__aenter__`` and closed on exit.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        *,
        api_url: str | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self.api_url = api_url or settings.workshop_api_url
        self.timeout_seconds = (
            settings.workshop_api_timeout_seconds if timeout_seconds is None else timeout_seconds
        )
        self._client = http_client
        self._owns_client = http_client is None

    async def __aenter__(self) -> WorkshopClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout_seconds)
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch_raw(self, ids: Sequence[str]) -> dict[str, Any]:
        """POST one lookup and return the decoded JSON object."""
        if self._client is None:
            raise RuntimeError("WorkshopClient must be used as an async context manager")

        try:
            resp = await self._client.post(
                self.api_url,
                params={"itemcount": len(ids)},
                content=build_form_body(ids),
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=self.timeout_seconds,
            )
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPError as exc:
            raise UpstreamCallError(f"Workshop API request failed: {exc}") from exc
        except ValueError as exc:
            raise UpstreamCallError("Workshop API returned a non-JSON body") from exc

        if not isinstance(payload, dict):
            raise UpstreamCallError("Unexpected Workshop API response payload")
        return payload

    async def fetch_details(self, ids: Sequence[str]) -> list[DetailRecord]:
        """Detail records for one batch of ids (empty when the response carries none)."""
        return extract_details(await self.fetch_raw(ids))


async def get_workshop_client() -> AsyncGenerator[WorkshopClient, None]:
    """FastAPI dependency: a request-scoped client."""
    async with WorkshopClient() as client:
        yield client
