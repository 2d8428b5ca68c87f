"""Relationship fields: many-to-many replace, resolve-or-create and delete guards."""

import pytest


async def _create(client, resource, payload):
    response = await client.post(f"/api/{resource}", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def _subproject(client, name="Road rehabilitation"):
    return await _create(
        client,
        "subprojects",
        {"name": name, "location": "Nampula", "type": "Road", "approximate_area": "12 ha"},
    )


def _flash_report(**overrides):
    payload = {
        "date_incident": "2024-05-02",
        "time_incident": "14:30",
        "location_incident": "Quarry",
        "date_reported": "2024-05-02",
        "supervisor": "J. Mucavel",
        "type": "Employee",
        "incident_description": "Fire in the generator room",
        "details_of_injured_person": "None",
        "recomendations": "Inspect fuel lines weekly",
        "further_investigation_required": "Yes",
        "incident_reportable": "No",
        "lenders_to_be_notified": "No",
        "author_of_report": "HSE officer",
        "approver_name": "Site manager",
        "date_approved": "2024-05-03",
    }
    payload.update(overrides)
    return payload


# =============================================================================
# Many-to-many
# =============================================================================

@pytest.mark.asyncio
async def test_many_to_many_is_replaced_wholesale(client):
    a = await _create(client, "acceptance-confirmations", {"description": "Accepts duties"})
    b = await _create(client, "acceptance-confirmations", {"description": "Attended induction"})
    c = await _create(client, "acceptance-confirmations", {"description": "Received PPE"})

    acting = await _create(
        client,
        "ohs-acting",
        {"fullname": "Maria Langa", "acceptance_confirmation": [a["id"], b["id"], a["id"]]},
    )
    assert [item["id"] for item in acting["acceptance_confirmation"]] == sorted([a["id"], b["id"]])

    response = await client.put(
        f"/api/ohs-acting/{acting['id']}",
        json={"fullname": "Maria Langa", "acceptance_confirmation": [b["id"], c["id"]]},
    )
    assert response.status_code == 200
    assert [item["id"] for item in response.json()["acceptance_confirmation"]] == sorted(
        [b["id"], c["id"]]
    )

    response = await client.put(
        f"/api/ohs-acting/{acting['id']}", json={"fullname": "Maria Langa"}
    )
    assert response.json()["acceptance_confirmation"] == []

    # Detached confirmations are free to go.
    response = await client.delete(f"/api/acceptance-confirmations/{a['id']}")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_many_to_many_target_in_use_cannot_be_deleted(client):
    confirmation = await _create(
        client, "acceptance-confirmations", {"description": "Accepts duties"}
    )
    acting = await _create(
        client,
        "ohs-acting",
        {"fullname": "Maria Langa", "acceptance_confirmation": [confirmation["id"]]},
    )

    response = await client.delete(f"/api/acceptance-confirmations/{confirmation['id']}")
    assert response.status_code == 400
    assert response.json() == {
        "error": "Cannot delete acceptance confirmation that is in use by OHS acting records"
    }

    # Deleting the owner removes the link rows with it.
    assert (await client.delete(f"/api/ohs-acting/{acting['id']}")).status_code == 200
    assert (
        await client.delete(f"/api/acceptance-confirmations/{confirmation['id']}")
    ).status_code == 200


@pytest.mark.asyncio
async def test_ohs_acting_date_defaults_to_now(client):
    acting = await _create(client, "ohs-acting", {"fullname": "Maria Langa"})
    assert acting["date"] is not None
    assert acting["date"].endswith("Z")


# =============================================================================
# Resolve-or-create
# =============================================================================

@pytest.mark.asyncio
async def test_training_matrix_materializes_missing_lookups(client):
    matrix = await _create(
        client,
        "training-matrix",
        {
            "position": {"name": "Welder"},
            "training": {"id": "training-hot-work", "name": "Hot work"},
            "toolbox_talks": {"name": "PPE"},
            "effectiveness": "Effective",
            "approved_by": "HSE Manager",
        },
    )
    assert matrix["position"]["name"] == "Welder"
    assert matrix["training"] == {"id": "training-hot-work", "name": "Hot work"}
    assert matrix["toolbox_talks"]["name"] == "PPE"

    positions = (await client.get("/api/positions")).json()
    assert [p["name"] for p in positions] == ["Welder"]

    # Existing lookups are reused by id or by name.
    second = await _create(
        client,
        "training-matrix",
        {
            "position": {"name": "Welder"},
            "training": "training-hot-work",
            "toolbox_talks": {"id": matrix["toolbox_talks"]["id"]},
            "effectiveness": "Not effective",
            "approved_by": "HSE Manager",
        },
    )
    assert second["position"]["id"] == matrix["position"]["id"]
    assert second["training"]["id"] == "training-hot-work"
    assert len((await client.get("/api/positions")).json()) == 1
    assert len((await client.get("/api/trainings")).json()) == 1
    assert len((await client.get("/api/toolbox-talks")).json()) == 1


@pytest.mark.asyncio
async def test_resolve_or_create_needs_display_value(client):
    response = await client.post(
        "/api/training-matrix",
        json={
            "position": {"id": "new-position"},
            "training": {"name": "Hot work"},
            "toolbox_talks": {"name": "PPE"},
            "effectiveness": "Effective",
            "approved_by": "HSE Manager",
        },
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields: position.name"}
    assert (await client.get("/api/trainings")).json() == []


@pytest.mark.asyncio
async def test_screening_creates_responsible_person_with_defaults(client):
    subproject = await _subproject(client)

    form = await _create(
        client,
        "screening-forms",
        {
            "responsible_for_filling_form": {"name": "Ana Sitoe"},
            "subproject": subproject["id"],
            "response": "SIM",
        },
    )
    person = form["responsible_for_filling_form"]
    assert person["name"] == "Ana Sitoe"

    stored = (await client.get(f"/api/responsible-persons/{person['id']}")).json()
    assert stored["role"] == "Environmental Specialist"
    assert stored["contact"] == "N/A"
    assert stored["date"] is not None


@pytest.mark.asyncio
async def test_failed_parent_write_leaves_no_materialized_lookup(client):
    response = await client.post(
        "/api/screening-forms",
        json={
            "responsible_for_filling_form": {"name": "Ana Sitoe"},
            "subproject": "missing-subproject",
        },
    )
    assert response.status_code == 404
    assert response.json() == {"error": "Subproject not found"}

    assert (await client.get("/api/responsible-persons")).json() == []
    assert (await client.get("/api/screening-forms")).json() == []


@pytest.mark.asyncio
async def test_flash_report_incidents_are_created_once(client):
    report = await _create(
        client,
        "incident-flash-reports",
        _flash_report(incidents=[{"description": "Fire"}, {"description": "Fire"}]),
    )
    assert [item["description"] for item in report["incidents"]] == ["Fire"]
    assert report["time_incident"] == "14:30"

    again = await _create(
        client,
        "incident-flash-reports",
        _flash_report(incidents=[{"description": "Fire"}, {"description": "Spill"}]),
    )
    assert sorted(item["description"] for item in again["incidents"]) == ["Fire", "Spill"]

    incidents = (await client.get("/api/incidents")).json()
    assert [item["description"] for item in incidents] == ["Fire", "Spill"]

    fire_id = report["incidents"][0]["id"]
    response = await client.delete(f"/api/incidents/{fire_id}")
    assert response.status_code == 400
    assert response.json() == {"error": "Cannot delete incident that is in use by flash reports"}


# =============================================================================
# Strict lookups
# =============================================================================

@pytest.mark.asyncio
async def test_specific_objective_resolves_strategic_objective_by_description(client):
    strategic = await _create(
        client,
        "strategic-objectives",
        {
            "description": "Zero harm",
            "goals": "No lost time injuries",
            "strategies_for_achievement": "Training and supervision",
        },
    )
    specific_payload = {
        "strategic_objective": "Zero harm",
        "specific_objective": "Reduce near misses",
        "actions_for_achievement": "Weekly toolbox talks",
        "responsible_person": "HSE Manager",
        "necessary_resources": "Trainer",
        "indicator": "Near misses per month",
        "goal": "50% reduction",
        "monitoring_frequency": "Monthly",
        "deadline": "2024-12-31",
    }
    specific = await _create(client, "specific-objectives", specific_payload)
    assert specific["strategic_objective"] == {"id": strategic["id"], "description": "Zero harm"}

    parent = (await client.get(f"/api/strategic-objectives/{strategic['id']}")).json()
    assert parent["specific_objectives"] == [
        {"id": specific["id"], "specific_objective": "Reduce near misses"}
    ]

    response = await client.post(
        "/api/specific-objectives",
        json={**specific_payload, "strategic_objective": "Unknown objective"},
    )
    assert response.status_code == 404
    assert response.json() == {"error": "Strategic objective not found"}

    response = await client.delete(f"/api/strategic-objectives/{strategic['id']}")
    assert response.status_code == 400
    assert response.json() == {
        "error": "Cannot delete strategic objective that is in use by specific objectives"
    }


@pytest.mark.asyncio
async def test_read_only_relation_is_ignored_on_write(client):
    strategic = await _create(
        client,
        "strategic-objectives",
        {
            "description": "Zero harm",
            "goals": "No lost time injuries",
            "strategies_for_achievement": "Training and supervision",
            "specific_objectives": ["not-a-real-id"],
        },
    )
    assert strategic["specific_objectives"] == []
