import pytest
from httpx import AsyncClient


async def _create(client: AsyncClient, headers, **overrides):
    payload = {"title": "Lab moved", "content": "Tuesday lab is in Lab 2 this week", "display_duration": 10}
    payload.update(overrides)
    return await client.post("/api/v1/announcements", json=payload, headers=headers)


@pytest.mark.asyncio
async def test_create_and_list_newest_first(client: AsyncClient, admin_headers) -> None:
    first = await _create(client, admin_headers, title="First")
    assert first.status_code == 201
    assert first.json()["is_active"] is True
    assert first.json()["display_duration"] == 10
    await _create(client, admin_headers, title="Second", is_active=False)

    response = await client.get("/api/v1/announcements", headers=admin_headers)
    assert [a["title"] for a in response.json()] == ["Second", "First"]

    response = await client.get("/api/v1/announcements/active")
    assert [a["title"] for a in response.json()] == ["First"]


@pytest.mark.asyncio
async def test_announcement_validation(client: AsyncClient, admin_headers) -> None:
    assert (await _create(client, admin_headers, title="  ")).status_code == 422
    assert (await _create(client, admin_headers, content="")).status_code == 422
    assert (await _create(client, admin_headers, title="x" * 201)).status_code == 422
    assert (await _create(client, admin_headers, display_duration=0)).status_code == 422
    assert (await _create(client, admin_headers, display_duration=None)).status_code == 201


@pytest.mark.asyncio
async def test_toggle_and_update(client: AsyncClient, admin_headers) -> None:
    created = (await _create(client, admin_headers)).json()

    toggled = await client.patch(f"/api/v1/announcements/{created['id']}/toggle", headers=admin_headers)
    assert toggled.status_code == 200
    assert toggled.json()["is_active"] is False
    assert (await client.get("/api/v1/announcements/active")).json() == []

    updated = await client.put(
        f"/api/v1/announcements/{created['id']}",
        json={"title": "Lab moved again", "display_duration": None},
        headers=admin_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["title"] == "Lab moved again"
    assert updated.json()["display_duration"] is None
    assert updated.json()["content"] == created["content"]


@pytest.mark.asyncio
async def test_delete_announcement(client: AsyncClient, admin_headers) -> None:
    created = (await _create(client, admin_headers)).json()
    assert (await client.delete(f"/api/v1/announcements/{created['id']}", headers=admin_headers)).status_code == 204
    assert (await client.get(f"/api/v1/announcements/{created['id']}", headers=admin_headers)).status_code == 404
    toggle = await client.patch(f"/api/v1/announcements/{created['id']}/toggle", headers=admin_headers)
    assert toggle.status_code == 404


@pytest.mark.asyncio
async def test_duration_choices(client: AsyncClient) -> None:
    response = await client.get("/api/v1/announcements/duration-choices")
    assert response.status_code == 200
    assert [c["value"] for c in response.json()["choices"]] == [None, 5, 10, 15, 30, 60]


@pytest.mark.asyncio
async def test_admin_listing_requires_admin(client: AsyncClient, student_headers) -> None:
    assert (await client.get("/api/v1/announcements")).status_code == 401
    assert (await client.get("/api/v1/announcements", headers=student_headers)).status_code == 401
