"""Tests for API runtime helpers (kingdom service and upkeep manager)."""

from __future__ import annotations

import pytest

from reignmaker.api.runtime import (
    ApiState,
    KingdomDraft,
    KingdomService,
    SettlementDraft,
)
from reignmaker.config import Settings
from reignmaker.domain import models as dm
from reignmaker.domain.enums import ResourceKind, SettlementTier, UpkeepStep
from reignmaker.domain.lifecycle import PhaseEventKind
from reignmaker.repository import JsonKingdomRepository


def _draft(name: str = "Stolen Lands") -> KingdomDraft:
    return KingdomDraft(
        name=name,
        resources={ResourceKind.FOOD: 10, ResourceKind.GOLD: 2},
        settlements=[
            SettlementDraft(name="Tatzlford", tier=SettlementTier.TOWN),
            SettlementDraft(name="Oleg's", tier=SettlementTier.VILLAGE),
        ],
        armies=["Swordlords", "Rangers", "Militia"],
        build_queue=["mill", "shrine"],
    )


def _state(tmp_path) -> ApiState:
    settings = Settings(
        data_dir=tmp_path / "kingdoms",
        database_url=f"sqlite:///{tmp_path / 'steps.db'}",
    )
    return ApiState(settings=settings)


def test_create_kingdom_assigns_sequential_ids(tmp_path):
    service = KingdomService(JsonKingdomRepository(tmp_path))

    first = service.create_kingdom(_draft("One"))
    second = service.create_kingdom(_draft("Two"))

    assert first.id == dm.KingdomID(1)
    assert second.id == dm.KingdomID(2)
    assert [k.name for k in service.list_kingdoms()] == ["One", "Two"]


def test_create_kingdom_fills_missing_resources(tmp_path):
    service = KingdomService(JsonKingdomRepository(tmp_path))

    kingdom = service.create_kingdom(_draft())

    assert kingdom.resources[ResourceKind.FOOD] == 10
    assert kingdom.resources[ResourceKind.LUMBER] == 0
    assert [s.tier for s in kingdom.settlements] == [SettlementTier.TOWN, SettlementTier.VILLAGE]
    assert [p.structure_id for p in kingdom.build_queue] == ["mill", "shrine"]


def test_create_kingdom_rejects_negative_resources(tmp_path):
    service = KingdomService(JsonKingdomRepository(tmp_path))
    draft = _draft()
    draft.resources[ResourceKind.GOLD] = -1

    with pytest.raises(ValueError, match="negative"):
        service.create_kingdom(draft)


def test_detail_dict_lists_entities(tmp_path):
    service = KingdomService(JsonKingdomRepository(tmp_path))
    kingdom = service.create_kingdom(_draft())

    detail = KingdomService.to_detail_dict(kingdom)

    assert detail["army_count"] == 3
    assert detail["resources"]["food"] == 10
    assert detail["settlements"][0] == {
        "id": 1,
        "name": "Tatzlford",
        "tier": "town",
        "was_fed_last_turn": True,
    }


@pytest.mark.asyncio
async def test_upkeep_manager_runs_full_phase(tmp_path):
    state = _state(tmp_path)
    kingdom = state.kingdoms.create_kingdom(_draft())
    controller = state.upkeep.controller_for(kingdom.id)

    assert state.upkeep.controller_for(kingdom.id) is controller

    assert (await controller.start_phase()).success
    assert (await controller.run_step(UpkeepStep.FEED_SETTLEMENTS)).success
    assert (await controller.run_step(UpkeepStep.SUPPORT_MILITARY)).success
    builds = await controller.run_step(UpkeepStep.PROCESS_BUILDS)

    stored = state.kingdoms.get_kingdom(kingdom.id)
    # 5 settlement food + 3 army food from 10; 3 gold owed with 2 available
    assert stored.resources[ResourceKind.FOOD] == 2
    assert stored.resources[ResourceKind.GOLD] == 0
    assert stored.unrest == 1
    assert stored.build_queue == []
    assert builds.details["completed_projects"] == ["mill", "shrine"]

    kinds = [event.kind for event in state.upkeep.event_log(kingdom.id).events]
    assert kinds == [PhaseEventKind.STARTED, PhaseEventKind.COMPLETED]
    await state.shutdown()


@pytest.mark.asyncio
async def test_display_dict_reflects_step_state(tmp_path):
    state = _state(tmp_path)
    kingdom = state.kingdoms.create_kingdom(KingdomDraft(name="Empty"))
    await state.upkeep.controller_for(kingdom.id).start_phase()

    display = state.upkeep.display_dict(kingdom)

    assert display["food_consumption"] == 0
    assert display["steps_completed"] == {
        "feed_settlements": False,
        "support_military": True,
        "process_builds": True,
    }
    await state.shutdown()
