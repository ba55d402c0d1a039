"""Shared test fixtures for the Workshop Diff test suite."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from urllib.parse import parse_qsl

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from workshop_diff.main import app
from workshop_diff.modules.workshop.client import WorkshopClient, get_workshop_client


class FakeCatalog:
    """Stand-in for GetPublishedFileDetails, served through httpx.MockTransport.

    Echoes one detail record per requested id and remembers every request
    body. ``fail_on_call`` (1-based) makes that call return a 502;
    ``timeout_on_call`` makes it raise ``httpx.ReadTimeout``.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.fail_on_call: int | None = None
        self.timeout_on_call: int | None = None

    @staticmethod
    def requested_ids(request: httpx.Request) -> list[str]:
        fields = parse_qsl(request.content.decode())
        return [value for key, value in fields if key.startswith("publishedfileids[")]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_on_call == len(self.requests):
            return httpx.Response(502, text="<html>Bad Gateway</html>")
        if self.timeout_on_call == len(self.requests):
            raise httpx.ReadTimeout("timed out", request=request)

        ids = self.requested_ids(request)
        return httpx.Response(
            200,
            json={
                "response": {
                    "result": 1,
                    "resultcount": len(ids),
                    "publishedfiledetails": [
                        {"publishedfileid": mod_id, "result": 1, "title": f"Title {mod_id}"}
                        for mod_id in ids
                    ],
                }
            },
        )

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture
async def client(catalog: FakeCatalog) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client that talks directly to the FastAPI ASGI app.

    Outbound catalog calls are routed to the ``catalog`` fake.
    """

    async def _override_workshop_client() -> AsyncGenerator[WorkshopClient, None]:
        async with httpx.AsyncClient(transport=catalog.transport()) as http:
            async with WorkshopClient(http) as workshop:
                yield workshop

    app.dependency_overrides[get_workshop_client] = _override_workshop_client

    transport = ASGITransport(app=app)  # type: ignore[arg-type]
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.pop(get_workshop_client, None)
