import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from timetable_portal.core.enums import Batch, ClassType, Day
from timetable_portal.core.models import TimetableEntry


async def _create_subject(client: AsyncClient, headers, **overrides):
    payload = {"code": "cd23631", "name": "Game Design & Development", "department": "CSD", "credit_hours": 4}
    payload.update(overrides)
    return await client.post("/api/v1/subjects", json=payload, headers=headers)


@pytest.mark.asyncio
async def test_create_subject_normalizes_code(client: AsyncClient, admin_headers) -> None:
    response = await _create_subject(client, admin_headers, department="   ")
    assert response.status_code == 201
    data = response.json()
    assert data["code"] == "CD23631"
    assert data["department"] is None
    assert data["split_students"] is False


@pytest.mark.asyncio
async def test_duplicate_subject_code(client: AsyncClient, admin_headers) -> None:
    await _create_subject(client, admin_headers)
    response = await _create_subject(client, admin_headers, code=" CD23631 ", name="Other")
    assert response.status_code == 409
    assert response.json()["detail"] == "Subject code already exists"


@pytest.mark.asyncio
async def test_blank_subject_name_rejected(client: AsyncClient, admin_headers) -> None:
    response = await _create_subject(client, admin_headers, name="   ")
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_subjects_ordered_by_code_with_search(client: AsyncClient, admin_headers) -> None:
    await _create_subject(client, admin_headers, code="CD23632", name="3D Rigging & Animation")
    await _create_subject(client, admin_headers, code="AI23331", name="Fundamentals of Machine Learning")
    await _create_subject(client, admin_headers)

    response = await client.get("/api/v1/subjects")
    assert response.status_code == 200
    assert [s["code"] for s in response.json()] == ["AI23331", "CD23631", "CD23632"]

    response = await client.get("/api/v1/subjects", params={"q": "machine"})
    assert [s["code"] for s in response.json()] == ["AI23331"]

    response = await client.get("/api/v1/subjects", params={"q": "cd236"})
    assert [s["code"] for s in response.json()] == ["CD23631", "CD23632"]


@pytest.mark.asyncio
async def test_subject_dropdown(client: AsyncClient, admin_headers) -> None:
    created = (await _create_subject(client, admin_headers)).json()
    response = await client.get("/api/v1/subjects/dropdown", headers=admin_headers)
    assert response.json() == [{"label": "CD23631 - Game Design & Development", "value": created["id"]}]


@pytest.mark.asyncio
async def test_update_subject_syncs_timetable_rows(
    client: AsyncClient, admin_headers, db_session: AsyncSession
) -> None:
    subject = (await _create_subject(client, admin_headers)).json()
    entry = TimetableEntry(
        day=Day.TUESDAY,
        time_slot="09:00 - 10:00",
        course_code="CD23631",
        subject_name="Game Design & Development",
        class_type=ClassType.THEORY,
        batch=Batch.ALL,
        room_number="A101",
    )
    db_session.add(entry)
    await db_session.commit()

    response = await client.put(
        f"/api/v1/subjects/{subject['id']}",
        json={"code": "cd23699", "name": "Game Design"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["code"] == "CD23699"

    await db_session.refresh(entry)
    assert entry.course_code == "CD23699"
    assert entry.subject_name == "Game Design"


@pytest.mark.asyncio
async def test_code_change_keeps_saved_lab_batches(client: AsyncClient, admin_headers, student_headers) -> None:
    subject = (
        await _create_subject(client, admin_headers, code="ma23110", name="Numerical Methods Lab", split_students=True)
    ).json()
    response = await client.put("/api/v1/student/batches/MA23110", json={"batch": "B2"}, headers=student_headers)
    assert response.status_code == 200

    response = await client.put(f"/api/v1/subjects/{subject['id']}", json={"code": "ma23111"}, headers=admin_headers)
    assert response.status_code == 200

    response = await client.get("/api/v1/student/batches", headers=student_headers)
    assert {"course_code": "MA23111", "batch": "B2"} in response.json()["preferences"]
    courses = {c["course_code"]: c["batch"] for c in response.json()["courses"]}
    assert courses["MA23111"] == "B2"
    assert "MA23110" not in courses


@pytest.mark.asyncio
async def test_update_subject_to_existing_code(client: AsyncClient, admin_headers) -> None:
    await _create_subject(client, admin_headers, code="AI23331", name="ML")
    other = (await _create_subject(client, admin_headers)).json()
    response = await client.put(f"/api/v1/subjects/{other['id']}", json={"code": "ai23331"}, headers=admin_headers)
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_delete_subject(client: AsyncClient, admin_headers) -> None:
    subject = (await _create_subject(client, admin_headers)).json()
    response = await client.delete(f"/api/v1/subjects/{subject['id']}", headers=admin_headers)
    assert response.status_code == 204
    response = await client.get(f"/api/v1/subjects/{subject['id']}")
    assert response.status_code == 404
    response = await client.delete(f"/api/v1/subjects/{subject['id']}", headers=admin_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_subject_writes_require_admin(client: AsyncClient) -> None:
    await client.post(
        "/api/v1/auth/signup",
        json={
            "name": "Asha Raman",
            "roll_number": "231701010",
            "email": "asha@example.com",
            "password": "secret123",
        },
    )
    login = await client.post("/api/v1/auth/login", json={"email": "asha@example.com", "password": "secret123"})
    headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

    response = await _create_subject(client, headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "You do not have admin privileges."

    response = await client.post("/api/v1/subjects", json={"code": "X1", "name": "X"})
    assert response.status_code == 401
