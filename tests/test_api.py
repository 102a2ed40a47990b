# tests/test_api.py

from __future__ import annotations

import httpx
import pytest

from taskboard.core.config import Settings
from taskboard.main import create_app

from .fakes import UnreachableGateway

API = "/api/v1"


@pytest.mark.asyncio
async def test_create_and_list(client: httpx.AsyncClient) -> None:
    created = await client.post(f"{API}/tasks", json={"title": "  Buy milk "})

    assert created.status_code == 201
    body = created.json()
    assert body["title"] == "Buy milk"
    assert body["priority"] == "medium"
    assert body["completed"] is False
    assert body["description"] is None

    listed = await client.get(f"{API}/tasks")
    assert listed.status_code == 200
    assert [t["id"] for t in listed.json()] == [body["id"]]
    assert listed.headers["X-Tasks-Revision"] == "1"


@pytest.mark.asyncio
@pytest.mark.parametrize("title", ["", "   "])
async def test_blank_title_is_422(client: httpx.AsyncClient, title: str) -> None:
    response = await client.post(f"{API}/tasks", json={"title": title, "priority": "high"})

    assert response.status_code == 422
    assert response.json()["detail"] == "Title is required"
    assert (await client.get(f"{API}/tasks")).json() == []


@pytest.mark.asyncio
async def test_invalid_priority_is_rejected(client: httpx.AsyncClient) -> None:
    response = await client.post(f"{API}/tasks", json={"title": "x", "priority": "urgent"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_empty_priority_defaults_to_medium(client: httpx.AsyncClient) -> None:
    created = await client.post(f"{API}/tasks", json={"title": "x", "priority": ""})

    assert created.status_code == 201
    assert created.json()["priority"] == "medium"

    task_id = created.json()["id"]
    updated = await client.put(f"{API}/tasks/{task_id}", json={"title": "y", "priority": ""})
    assert updated.status_code == 200
    assert updated.json()["priority"] == "medium"


@pytest.mark.asyncio
async def test_long_title_reports_service_message(client: httpx.AsyncClient) -> None:
    response = await client.post(f"{API}/tasks", json={"title": "x" * 201})

    assert response.status_code == 422
    assert response.json()["detail"] == "Title must be at most 200 characters"


@pytest.mark.asyncio
async def test_get_update_toggle_delete(client: httpx.AsyncClient) -> None:
    task_id = (await client.post(f"{API}/tasks", json={"title": "Buy milk"})).json()["id"]

    fetched = await client.get(f"{API}/tasks/{task_id}")
    assert fetched.json()["title"] == "Buy milk"

    toggled = await client.post(f"{API}/tasks/{task_id}/toggle")
    assert toggled.json()["completed"] is True

    updated = await client.put(
        f"{API}/tasks/{task_id}",
        json={"title": "Buy oat milk", "description": "barista", "priority": "low"},
    )
    assert updated.status_code == 200
    assert updated.json()["title"] == "Buy oat milk"
    assert updated.json()["completed"] is True

    deleted = await client.delete(f"{API}/tasks/{task_id}")
    assert deleted.status_code == 204

    again = await client.delete(f"{API}/tasks/{task_id}")
    assert again.status_code == 404


@pytest.mark.asyncio
async def test_missing_task_is_404(client: httpx.AsyncClient) -> None:
    assert (await client.get(f"{API}/tasks/999")).status_code == 404
    assert (await client.post(f"{API}/tasks/999/toggle")).status_code == 404
    assert (await client.put(f"{API}/tasks/999", json={"title": "x"})).status_code == 404


@pytest.mark.asyncio
async def test_health(client: httpx.AsyncClient) -> None:
    live = await client.get(f"{API}/health")
    ready = await client.get(f"{API}/health/ready")

    assert live.json()["status"] == "healthy"
    assert ready.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_readiness_fails_when_store_is_down(settings: Settings) -> None:
    app = create_app(settings, session_factory=object())
    app.state.task_gateway = UnreachableGateway()
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get(f"{API}/health/ready")

    assert response.status_code == 503
