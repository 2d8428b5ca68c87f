"""Application shell: health check, request ids and error envelopes."""

import pytest
from sqlalchemy.exc import OperationalError

import esms.main as main_module


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "env": "test", "version": main_module.settings.VERSION}


@pytest.mark.asyncio
async def test_health_reports_database_outage(client, monkeypatch):
    class BrokenEngine:
        def connect(self):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(main_module, "engine", BrokenEngine())

    response = await client.get("/health")
    assert response.status_code == 503
    assert response.json() == {"error": "Database unavailable"}


@pytest.mark.asyncio
async def test_request_id_is_echoed(client):
    response = await client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"

    response = await client.get("/health")
    assert len(response.headers["X-Request-ID"]) == 32


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(client):
    response = await client.get("/api/not-a-resource")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


@pytest.mark.asyncio
async def test_unexpected_service_failure_is_generic(client, monkeypatch):
    from esms.services import resource_service

    def _boom(*_args, **_kwargs):
        raise RuntimeError("database exploded")

    monkeypatch.setattr(resource_service, "list_records", _boom)

    response = await client.get("/api/departments")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch department"}
