"""List filters and ordering."""

import pytest


async def _create(client, resource, payload):
    response = await client.post(f"/api/{resource}", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def _plan(**overrides):
    payload = {
        "updated_by": "HSE Manager",
        "date": "2024-01-10",
        "year": 2024,
        "training_area": "Occupational Safety",
        "training_title": "Working at height",
        "training_objective": "Safe use of harnesses",
        "training_type": "Internal",
        "training_entity": "HSE team",
        "duration": "4 hours",
        "number_of_trainees": 12,
        "training_recipients": "Scaffolders",
        "training_month": "March",
        "training_status": "Planned",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_training_plans_filter_by_year_and_area(client):
    safety = await _create(client, "training-plans", _plan())
    environment = await _create(
        client, "training-plans", _plan(training_area="Environmental Awareness", year="2024")
    )
    older = await _create(client, "training-plans", _plan(year=2023))

    response = await client.get("/api/training-plans", params={"year": "2024"})
    assert response.status_code == 200
    assert {plan["id"] for plan in response.json()} == {safety["id"], environment["id"]}

    response = await client.get("/api/training-plans", params={"training_area": "safety"})
    assert {plan["id"] for plan in response.json()} == {safety["id"], older["id"]}

    response = await client.get(
        "/api/training-plans", params={"trainingArea": "SAFETY", "year": "2023"}
    )
    assert [plan["id"] for plan in response.json()] == [older["id"]]


@pytest.mark.asyncio
async def test_non_numeric_year_filter_is_rejected(client):
    response = await client.get("/api/training-plans", params={"year": "last"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid value for year"}


@pytest.mark.asyncio
async def test_default_order_is_newest_first(client):
    created = [
        await _create(client, "training-plans", _plan(training_title=f"Course {i}"))
        for i in range(3)
    ]

    listed = (await client.get("/api/training-plans")).json()
    assert {plan["id"] for plan in listed} == {plan["id"] for plan in created}
    stamps = [plan["created_at"] for plan in listed]
    assert stamps == sorted(stamps, reverse=True)


@pytest.mark.asyncio
async def test_lookups_are_ordered_by_name(client):
    for name in ("Safety", "Finance", "Operations"):
        await _create(client, "departments", {"name": name, "description": name})

    listed = (await client.get("/api/departments")).json()
    assert [d["name"] for d in listed] == ["Finance", "Operations", "Safety"]


@pytest.mark.asyncio
async def test_department_filter_accepts_snake_and_camel_case(client):
    hr = await _create(client, "departments", {"name": "HR", "description": "People"})
    ops = await _create(client, "departments", {"name": "Ops", "description": "Operations"})

    def _record(number, department_id):
        return {
            "number": number,
            "department": department_id,
            "non_compliance_description": "Missing spill kit",
            "identified_causes": "Procurement delay",
            "corrective_actions": "Buy spill kits",
            "responsible_person": "Storekeeper",
            "deadline": "2024-06-30",
            "responsible_person_evaluation": "Pending",
        }

    first = await _create(client, "non-compliance", _record("NC-1", hr["id"]))
    await _create(client, "non-compliance", _record("NC-2", ops["id"]))

    for param in ("department_id", "departmentId"):
        response = await client.get("/api/non-compliance", params={param: hr["id"]})
        assert [r["id"] for r in response.json()] == [first["id"]]
        assert response.json()[0]["department"] == {"id": hr["id"], "name": "HR"}


@pytest.mark.asyncio
async def test_documents_filter_by_type(client):
    procedure = await _create(client, "document-types", {"description": "Procedure"})
    policy = await _create(client, "document-types", {"description": "Policy"})

    def _document(code, type_id):
        return {
            "code": code,
            "creation_date": "2024-01-01",
            "document_name": f"Document {code}",
            "document_type": type_id,
            "document_state": "INUSE",
            "disposal_method": "Shred",
        }

    doc = await _create(client, "documents", _document("PR-01", procedure["id"]))
    await _create(client, "documents", _document("PO-01", policy["id"]))

    response = await client.get("/api/documents", params={"type_id": procedure["id"]})
    assert [d["id"] for d in response.json()] == [doc["id"]]
    assert response.json()[0]["document_type"] == {
        "id": procedure["id"],
        "description": "Procedure",
    }
