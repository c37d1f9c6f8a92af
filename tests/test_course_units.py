import pytest
from httpx import AsyncClient


async def _subject(client: AsyncClient, headers, code="CD23631", name="Game Design & Development"):
    response = await client.post("/api/v1/subjects", json={"code": code, "name": name}, headers=headers)
    return response.json()


@pytest.mark.asyncio
async def test_create_and_list_units(client: AsyncClient, admin_headers) -> None:
    subject = await _subject(client, admin_headers)
    url = f"/api/v1/subjects/{subject['id']}/units"

    response = await client.post(url, json={"unit_number": 2, "unit_name": "Level Design", "syllabus": " "}, headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["syllabus"] is None
    await client.post(url, json={"unit_number": 1, "unit_name": "Game Loops", "syllabus": "Timing, input"}, headers=admin_headers)

    response = await client.get(url)
    assert response.status_code == 200
    assert [(u["unit_number"], u["unit_name"]) for u in response.json()] == [(1, "Game Loops"), (2, "Level Design")]


@pytest.mark.asyncio
async def test_duplicate_unit_number(client: AsyncClient, admin_headers) -> None:
    subject = await _subject(client, admin_headers)
    url = f"/api/v1/subjects/{subject['id']}/units"
    await client.post(url, json={"unit_number": 1, "unit_name": "Game Loops"}, headers=admin_headers)

    response = await client.post(url, json={"unit_number": 1, "unit_name": "Other"}, headers=admin_headers)
    assert response.status_code == 409
    assert response.json()["detail"] == "This unit number already exists for this subject"

    second = (await client.post(url, json={"unit_number": 2, "unit_name": "Physics"}, headers=admin_headers)).json()
    response = await client.put(f"/api/v1/course-units/{second['id']}", json={"unit_number": 1}, headers=admin_headers)
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_update_and_delete_unit(client: AsyncClient, admin_headers) -> None:
    subject = await _subject(client, admin_headers)
    unit = (
        await client.post(
            f"/api/v1/subjects/{subject['id']}/units",
            json={"unit_number": 1, "unit_name": "Game Loops", "syllabus": "Timing"},
            headers=admin_headers,
        )
    ).json()

    response = await client.put(
        f"/api/v1/course-units/{unit['id']}",
        json={"unit_name": "Core Loops", "syllabus": None},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["unit_name"] == "Core Loops"
    assert response.json()["syllabus"] is None

    assert (await client.delete(f"/api/v1/course-units/{unit['id']}", headers=admin_headers)).status_code == 204
    assert (await client.delete(f"/api/v1/course-units/{unit['id']}", headers=admin_headers)).status_code == 404


@pytest.mark.asyncio
async def test_units_for_unknown_subject(client: AsyncClient) -> None:
    response = await client.get("/api/v1/subjects/00000000-0000-0000-0000-000000000000/units")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_import_syllabus_replaces_units(client: AsyncClient, admin_headers) -> None:
    subject = await _subject(client, admin_headers)
    url = f"/api/v1/subjects/{subject['id']}/units"
    await client.post(url, json={"unit_number": 1, "unit_name": "Old unit"}, headers=admin_headers)

    document = {
        "course": {"course_name": "Game Design & Development", "course_code": "cd23631"},
        "units": [
            {"unit_number": "UNIT-I", "unit_title": "Foundations", "hours": 9, "topics": ["History", "Genres"]},
            {"unit_number": "UNIT-II", "unit_title": "", "topics": "Prototyping"},
            {"unit_number": "UNIT-III"},
        ],
    }
    response = await client.post("/api/v1/course-units/import", json=document, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["imported"] == 3
    assert response.json()["subject_id"] == subject["id"]

    units = (await client.get(url)).json()
    assert [(u["unit_number"], u["unit_name"], u["syllabus"]) for u in units] == [
        (1, "Foundations", "History, Genres"),
        (2, "Unit 2", "Prototyping"),
        (3, "Unit 3", None),
    ]


@pytest.mark.asyncio
async def test_import_falls_back_to_subject_id(client: AsyncClient, admin_headers) -> None:
    subject = await _subject(client, admin_headers)
    document = {"course": {"course_code": "XX00000"}, "units": [{"unit_title": "Only unit"}]}
    response = await client.post(
        "/api/v1/course-units/import",
        params={"subject_id": subject["id"]},
        json=document,
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["subject_id"] == subject["id"]


@pytest.mark.asyncio
async def test_import_rejects_bad_documents(client: AsyncClient, admin_headers) -> None:
    await _subject(client, admin_headers)

    response = await client.post(
        "/api/v1/course-units/import", json={"course": {"course_code": "CD23631"}}, headers=admin_headers
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "JSON must contain a 'units' array"

    response = await client.post(
        "/api/v1/course-units/import", json={"units": "not a list"}, headers=admin_headers
    )
    assert response.status_code == 400

    response = await client.post("/api/v1/course-units/import", json={"units": []}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "No subject selected"


@pytest.mark.asyncio
async def test_course_details(client: AsyncClient, admin_headers) -> None:
    subject = await _subject(client, admin_headers)
    await client.post(
        f"/api/v1/subjects/{subject['id']}/units",
        json={"unit_number": 1, "unit_name": "Foundations"},
        headers=admin_headers,
    )

    response = await client.get("/api/v1/courses/cd23631")
    assert response.status_code == 200
    data = response.json()
    assert data["subject"]["name"] == "Game Design & Development"
    assert [u["unit_name"] for u in data["units"]] == ["Foundations"]

    response = await client.get("/api/v1/courses/XX99999")
    assert response.status_code == 404
    assert response.json()["detail"] == 'Course with code "XX99999" could not be found.'


@pytest.mark.asyncio
async def test_deleting_subject_removes_its_course_page(client: AsyncClient, admin_headers) -> None:
    subject = await _subject(client, admin_headers)
    await client.post(
        f"/api/v1/subjects/{subject['id']}/units",
        json={"unit_number": 1, "unit_name": "Foundations"},
        headers=admin_headers,
    )
    assert (await client.delete(f"/api/v1/subjects/{subject['id']}", headers=admin_headers)).status_code == 204
    assert (await client.get("/api/v1/courses/CD23631")).status_code == 404
