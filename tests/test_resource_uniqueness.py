"""Business-key uniqueness enforced by unique indexes."""

import pytest


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
async def test_duplicate_number_is_rejected(client):
    first = await client.post("/api/claim-complain", json=_claim())
    assert first.status_code == 201

    second = await client.post(
        "/api/claim-complain",
        json=_claim(claim_complain_description="Noise at night"),
    )
    assert second.status_code == 400
    assert second.json() == {
        "error": "A claim complain control record with this number already exists"
    }

    listing = await client.get("/api/claim-complain")
    assert [record["number"] for record in listing.json()] == ["001"]


@pytest.mark.asyncio
async def test_update_may_keep_its_own_number(client):
    created = (await client.post("/api/claim-complain", json=_claim())).json()

    response = await client.put(
        f"/api/claim-complain/{created['id']}",
        json=_claim(treatment_action="Speed bumps installed"),
    )
    assert response.status_code == 200
    assert response.json()["number"] == "001"
    assert response.json()["treatment_action"] == "Speed bumps installed"


@pytest.mark.asyncio
async def test_update_to_another_records_number_is_rejected(client):
    await client.post("/api/claim-complain", json=_claim("001"))
    second = (await client.post("/api/claim-complain", json=_claim("002"))).json()

    response = await client.put(f"/api/claim-complain/{second['id']}", json=_claim("001"))
    assert response.status_code == 400
    assert response.json() == {
        "error": "A claim complain control record with this number already exists"
    }

    unchanged = await client.get(f"/api/claim-complain/{second['id']}")
    assert unchanged.json()["number"] == "002"


@pytest.mark.asyncio
async def test_contact_person_has_at_most_one_verification(client):
    contact = (
        await client.post(
            "/api/contact-persons",
            json={"name": "Rosa", "role": "Inspector", "contact": "84 000 0000", "date": "2024-02-01"},
        )
    ).json()

    first = await client.post(
        "/api/responsible-verifications", json={"contact_person": contact["id"]}
    )
    assert first.status_code == 201
    assert first.json()["contact_person"] == {
        "id": contact["id"],
        "name": "Rosa",
        "role": "Inspector",
        "contact": "84 000 0000",
    }

    second = await client.post(
        "/api/responsible-verifications", json={"contact_person": contact["id"]}
    )
    assert second.status_code == 400
    assert second.json() == {"error": "A verification with this contact person already exists"}
