"""Integration tests for the FastAPI layer."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from reignmaker.api.app import create_app
from reignmaker.api.runtime import ApiState
from reignmaker.config import Settings
from reignmaker.domain import models as dm
from reignmaker.repository import JsonKingdomRepository


def _make_app(tmp_path):
    def factory() -> ApiState:
        settings = Settings(
            data_dir=tmp_path / "kingdoms",
            database_url=f"sqlite:///{tmp_path / 'steps.db'}",
        )
        return ApiState(settings=settings)

    app = create_app(state_factory=factory)
    transport = ASGITransport(app=app)
    return app, transport


async def _create_kingdom(client: AsyncClient, **overrides) -> int:
    payload = {
        "name": "Stolen Lands",
        "resources": {"food": 10, "gold": 2},
        "settlements": [
            {"name": "Tatzlford", "tier": "town"},
            {"name": "Oleg's", "tier": "village"},
            {"name": "Stag Lord's Fort", "tier": "village"},
        ],
        "armies": [],
        "build_queue": ["mill", "shrine"],
    }
    payload.update(overrides)
    response = await client.post("/kingdoms", json=payload)
    assert response.status_code == 201
    return response.json()["id"]


@pytest.mark.asyncio
async def test_upkeep_phase_via_api(tmp_path):
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

        kingdom_id = await _create_kingdom(client)

        response = await client.post(f"/kingdoms/{kingdom_id}/upkeep/start")
        assert response.status_code == 200
        assert response.json()["success"] is True

        response = await client.get(f"/kingdoms/{kingdom_id}/upkeep")
        assert response.status_code == 200
        display = response.json()
        assert display["food_consumption"] == 6
        assert display["steps_completed"] == {
            "feed_settlements": False,
            "support_military": True,
            "process_builds": False,
        }

        response = await client.post(f"/kingdoms/{kingdom_id}/upkeep/steps/feed-settlements")
        assert response.status_code == 200
        assert response.json()["details"]["food_consumed"] == 6

        response = await client.post(f"/kingdoms/{kingdom_id}/upkeep/steps/feed-settlements")
        assert response.status_code == 409
        assert response.json()["detail"] == "Settlements already fed this turn"

        response = await client.post(f"/kingdoms/{kingdom_id}/upkeep/steps/process-builds")
        assert response.status_code == 200
        assert response.json()["details"]["completed_projects"] == ["mill", "shrine"]

        response = await client.get(f"/kingdoms/{kingdom_id}")
        detail = response.json()
        assert detail["resources"]["food"] == 4
        assert detail["build_queue"] == []
        assert all(s["was_fed_last_turn"] for s in detail["settlements"])

        response = await client.get(f"/kingdoms/{kingdom_id}/upkeep/events")
        assert [event["kind"] for event in response.json()] == ["started", "completed"]

    repo = JsonKingdomRepository(tmp_path / "kingdoms")
    stored = repo.load(dm.KingdomID(kingdom_id))
    assert stored.unrest == 0


@pytest.mark.asyncio
async def test_military_shortage_via_api(tmp_path):
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        kingdom_id = await _create_kingdom(
            client, armies=["Swordlords", "Rangers", "Militia"], build_queue=[]
        )
        await client.post(f"/kingdoms/{kingdom_id}/upkeep/start")

        response = await client.post(f"/kingdoms/{kingdom_id}/upkeep/steps/support-military")
        assert response.status_code == 200
        assert response.json()["details"]["shortage"] == 1

        response = await client.get(f"/kingdoms/{kingdom_id}")
        assert response.json()["unrest"] == 1
        assert response.json()["resources"]["gold"] == 0


@pytest.mark.asyncio
async def test_error_responses(tmp_path):
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.get("/kingdoms/99")
        assert response.status_code == 404

        response = await client.post("/kingdoms/99/upkeep/start")
        assert response.status_code == 404

        kingdom_id = await _create_kingdom(client)
        response = await client.post(f"/kingdoms/{kingdom_id}/upkeep/steps/collect-taxes")
        assert response.status_code == 422

        response = await client.post("/kingdoms", json={"name": "Bad", "unrest": -1})
        assert response.status_code == 422

        response = await client.get("/kingdoms")
        assert [k["id"] for k in response.json()] == [kingdom_id]
