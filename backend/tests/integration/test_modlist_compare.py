"""Integration tests for POST /modlist/compare.

These exercise the full FastAPI request lifecycle: multipart parsing,
extraction and aggregation, camelCase serialisation and error mapping.
"""

from __future__ import annotations

import io

from httpx import AsyncClient

from workshop_diff.core.config import settings

PREFIX = "/api/v1/modlist"

URL = "https://steamcommunity.com/sharedfiles/filedetails/?id={}"


def _anchor(mod_id: int, name: str) -> str:
    return f'<a href="{URL.format(mod_id)}">{name}</a>'


def _upload(field: str, filename: str, body: str) -> tuple[str, tuple[str, io.BytesIO, str]]:
    return (field, (filename, io.BytesIO(body.encode("utf-8")), "text/html"))


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


async def test_no_files_in_either_group_returns_400(client: AsyncClient) -> None:
    """POST /compare with zero files → 400, not an empty success."""
    resp = await client.post(f"{PREFIX}/compare", files=[], data={"note": "x"})
    assert resp.status_code == 400
    assert "No files uploaded" in resp.json()["detail"]


async def test_non_multipart_body_returns_400(client: AsyncClient) -> None:
    resp = await client.post(f"{PREFIX}/compare", json={"before": []})
    assert resp.status_code == 400


async def test_too_many_files_returns_400(client: AsyncClient, monkeypatch) -> None:
    monkeypatch.setattr(settings, "max_files_per_group", 2)
    files = [_upload("after", f"f{i}.html", _anchor(i, "M")) for i in range(3)]
    resp = await client.post(f"{PREFIX}/compare", files=files)
    assert resp.status_code == 400
    assert "Too many 'after' files" in resp.json()["detail"]


async def test_oversized_file_returns_413(client: AsyncClient, monkeypatch) -> None:
    monkeypatch.setattr(settings, "max_file_size_mb", 0)
    resp = await client.post(f"{PREFIX}/compare", files=[_upload("before", "big.html", "x")])
    assert resp.status_code == 413
    assert "big.html" in resp.json()["detail"]


# ---------------------------------------------------------------------------
# Successful comparisons
# ---------------------------------------------------------------------------


async def test_single_before_file_two_mods(client: AsyncClient) -> None:
    """One "before" file with two anchors, no "after" files → counts 2 / 0."""
    body = _anchor(1, "Harmony") + _anchor(2, "HugsLib")
    resp = await client.post(f"{PREFIX}/compare", files=[_upload("before", "old.html", body)])

    assert resp.status_code == 200
    data = resp.json()
    assert data["beforeCount"] == 2
    assert data["afterCount"] == 0
    assert data["before"] == [{"id": "1", "name": "Harmony"}, {"id": "2", "name": "HugsLib"}]
    assert data["after"] == []
    assert data["beforeFiles"] == ["old.html"]
    assert data["afterFiles"] == []
    assert data["diff"]["removed"] == data["before"]


async def test_groups_merge_files_in_upload_order(client: AsyncClient) -> None:
    files = [
        _upload("before", "a.html", _anchor(10, "Ten") + URL.format(20)),
        _upload("before", "b.html", _anchor(20, "Twenty") + _anchor(10, "Dup")),
        _upload("after", "c.html", _anchor(30, "Thirty") + _anchor(10, "Ten")),
    ]
    resp = await client.post(f"{PREFIX}/compare", files=files)

    assert resp.status_code == 200
    data = resp.json()
    assert data["before"] == [{"id": "10", "name": "Ten"}, {"id": "20", "name": "Mod 20"}]
    assert data["beforeFiles"] == ["a.html", "b.html"]
    assert data["afterFiles"] == ["c.html"]
    assert data["diff"] == {
        "added": [{"id": "30", "name": "Thirty"}],
        "removed": [{"id": "20", "name": "Mod 20"}],
        "unchanged": ["10"],
    }


async def test_pasted_text_field_uses_group_name(client: AsyncClient) -> None:
    resp = await client.post(f"{PREFIX}/compare", data={"after": _anchor(5, "Five")})

    assert resp.status_code == 200
    data = resp.json()
    assert data["after"] == [{"id": "5", "name": "Five"}]
    assert data["afterFiles"] == ["after"]


async def test_file_with_no_mods_is_a_valid_group(client: AsyncClient) -> None:
    resp = await client.post(
        f"{PREFIX}/compare",
        files=[_upload("after", "blank.html", "<html></html>")],
    )
    assert resp.status_code == 200
    assert resp.json()["afterCount"] == 0
    assert resp.json()["afterFiles"] == ["blank.html"]
