"""End-to-end CRUD behaviour of the generic resource endpoints."""

import pytest


async def _create(client, resource, payload):
    response = await client.post(f"/api/{resource}", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def _assessment_lookups(client):
    department = await _create(client, "departments", {"name": "HR", "description": "Human resources"})
    risk = await _create(client, "risks-and-impacts", {"description": "Dust emissions"})
    factor = await _create(client, "environmental-factors", {"description": "Air quality"})
    return department, risk, factor


def _claim(number="001", **overrides):
    payload = {
        "number": number,
        "claim_complain_submitted_by": "Community member",
        "claim_complain_reception_date": "2024-03-01",
        "claim_complain_description": "Dust from the access road",
        "treatment_action": "Water spraying twice a day",
        "claim_complain_responsible_person": "Site engineer",
        "claim_complain_deadline": "2024-03-15",
        "closure_date": "2024-03-20",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_department_in_use_by_impact_assessment_cannot_be_deleted(client):
    department, risk, factor = await _assessment_lookups(client)

    assessment = await _create(
        client,
        "impact-assessments",
        {
            "departament": department["id"],
            "activity": "Excavation",
            "risks_and_impact": risk["id"],
            "environmental_factor": factor["id"],
            "description_of_measures": "Dust suppression",
        },
    )
    assert assessment["departament"] == {"id": department["id"], "name": "HR"}
    assert assessment["risks_and_impact"] == {"id": risk["id"], "description": "Dust emissions"}
    assert assessment["legal_requirements"] == []

    response = await client.delete(f"/api/departments/{department['id']}")
    assert response.status_code == 400
    assert response.json() == {
        "error": "Cannot delete department that is in use by impact assessments"
    }

    response = await client.delete(f"/api/impact-assessments/{assessment['id']}")
    assert response.status_code == 200
    assert response.json() == {"success": True}

    response = await client.delete(f"/api/departments/{department['id']}")
    assert response.status_code == 200
    assert response.json() == {"success": True}

    response = await client.get(f"/api/departments/{department['id']}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_created_record_round_trips_through_get(client):
    created = await _create(client, "claim-complain", _claim())

    assert created["created_at"] == created["updated_at"]
    assert created["claim_complain_reception_date"] == "2024-03-01T00:00:00.000Z"
    assert created["claim_complain_status"] == "PENDING"
    assert created["observation"] == ""

    response = await client.get(f"/api/claim-complain/{created['id']}")
    assert response.status_code == 200
    assert response.json() == created


@pytest.mark.asyncio
async def test_update_is_a_full_replace(client):
    created = await _create(
        client,
        "claim-complain",
        _claim(observation="Follow up with the contractor", claim_complain_status="COMPLETED"),
    )

    response = await client.put(f"/api/claim-complain/{created['id']}", json=_claim())
    assert response.status_code == 200
    body = response.json()
    assert body["observation"] == ""
    assert body["claim_complain_status"] == "PENDING"
    assert body["created_at"] == created["created_at"]
    assert body["updated_at"] >= created["updated_at"]


@pytest.mark.asyncio
async def test_update_accepts_case_insensitive_enum_values(client):
    created = await _create(client, "claim-complain", _claim())

    response = await client.put(
        f"/api/claim-complain/{created['id']}",
        json=_claim(claim_complain_status="in_progress"),
    )
    assert response.status_code == 200
    assert response.json()["claim_complain_status"] == "IN_PROGRESS"


@pytest.mark.asyncio
async def test_missing_required_fields_are_rejected_without_writing(client):
    response = await client.post("/api/departments", json={"name": "HR"})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields: description"}

    response = await client.post("/api/departments", json={"name": "  ", "description": ""})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields: name, description"}

    response = await client.get("/api/departments")
    assert response.json() == []


@pytest.mark.asyncio
async def test_invalid_values_are_rejected(client):
    response = await client.post(
        "/api/claim-complain", json=_claim(claim_complain_status="DONE")
    )
    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid value for claim_complain_status")

    response = await client.post(
        "/api/claim-complain", json=_claim(closure_date="not a date")
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid value for closure_date: expected a date"


@pytest.mark.asyncio
async def test_body_must_be_a_json_object(client):
    response = await client.post(
        "/api/departments",
        content=b"[1, 2]",
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body"}

    response = await client.post(
        "/api/departments",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body"}


@pytest.mark.asyncio
async def test_unknown_record_returns_not_found(client):
    response = await client.get("/api/departments/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"error": "Department not found"}

    response = await client.put(
        "/api/departments/does-not-exist", json={"name": "HR", "description": "x"}
    )
    assert response.status_code == 404

    response = await client.delete("/api/departments/does-not-exist")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_unknown_strict_relation_returns_not_found_and_writes_nothing(client):
    _, _, factor = await _assessment_lookups(client)

    response = await client.post(
        "/api/impact-assessments",
        json={
            "activity": "Excavation",
            "risks_and_impact": "missing-risk",
            "environmental_factor": factor["id"],
            "description_of_measures": "Dust suppression",
        },
    )
    assert response.status_code == 404
    assert response.json() == {"error": "Risk and impact not found"}

    response = await client.get("/api/impact-assessments")
    assert response.json() == []


@pytest.mark.asyncio
async def test_relation_accepts_object_with_id(client):
    department, risk, factor = await _assessment_lookups(client)

    assessment = await _create(
        client,
        "impact-assessments",
        {
            "departament": {"id": department["id"], "name": "ignored"},
            "activity": "Excavation",
            "risks_and_impact": {"id": risk["id"]},
            "environmental_factor": factor["id"],
            "description_of_measures": "Dust suppression",
        },
    )
    assert assessment["departament"] == {"id": department["id"], "name": "HR"}


@pytest.mark.asyncio
async def test_numeric_fields_are_coerced(client):
    created = await _create(
        client,
        "subprojects",
        {
            "name": "Road rehabilitation",
            "location": "Nampula",
            "type": "Road",
            "approximate_area": "12 ha",
            "estimated_cost": "1500000.50",
        },
    )
    assert created["estimated_cost"] == 1500000.5

    response = await client.post(
        "/api/subprojects",
        json={
            "name": "Bridge",
            "location": "Nacala",
            "type": "Bridge",
            "approximate_area": "1 ha",
            "estimated_cost": "a lot",
        },
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid value for estimated_cost: expected a number"}
