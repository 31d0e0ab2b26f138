"""HTTP routes for the reignmaker API."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from reignmaker.api.runtime import ApiState, KingdomDraft, SettlementDraft
from reignmaker.database import check_database_health
from reignmaker.domain import models as dm
from reignmaker.domain.enums import ResourceKind, SettlementTier, UpkeepStep
from reignmaker.domain.lifecycle import PhaseResult

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


class KingdomSummary(BaseModel):
    id: int
    name: str
    unrest: int
    resources: dict[str, int]
    settlement_count: int
    army_count: int
    build_queue_length: int


class KingdomDetail(KingdomSummary):
    settlements: list[dict[str, object]]
    armies: list[dict[str, object]]
    build_queue: list[dict[str, object]]


class SettlementRequest(BaseModel):
    name: str = Field(min_length=1)
    tier: SettlementTier = SettlementTier.VILLAGE


class CreateKingdomRequest(BaseModel):
    name: str = Field(min_length=1)
    resources: dict[ResourceKind, int] = Field(default_factory=dict)
    unrest: int = Field(default=0, ge=0)
    settlements: list[SettlementRequest] = Field(default_factory=list)
    armies: list[str] = Field(default_factory=list)
    build_queue: list[str] = Field(default_factory=list)


class PhaseResultResponse(BaseModel):
    success: bool
    message: str | None = None
    details: dict[str, object] = Field(default_factory=dict)


class StepsCompletedResponse(BaseModel):
    feed_settlements: bool
    support_military: bool
    process_builds: bool


class UpkeepDisplayResponse(BaseModel):
    current_food: int
    food_consumption: int
    food_shortage: int
    settlement_consumption: int
    army_consumption: int
    army_count: int
    army_support: int
    unsupported_count: int
    food_remaining_for_armies: int
    army_food_shortage: int
    settlement_food_shortage: int
    current_gold: int
    military_support_cost: int
    gold_shortage: int
    steps_completed: StepsCompletedResponse


class PhaseEventResponse(BaseModel):
    phase: str
    kind: str
    message: str | None
    recorded_at: datetime


def _load_kingdom(state: ApiState, kingdom_id: int) -> dm.Kingdom:
    try:
        return state.kingdoms.get_kingdom(dm.KingdomID(kingdom_id))
    except FileNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="kingdom not found"
        ) from exc


def _result_response(result: PhaseResult) -> PhaseResultResponse:
    if not result.success:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=result.message)
    return PhaseResultResponse(
        success=result.success, message=result.message, details=result.details
    )


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    return {
        "status": "ok",
        "database": check_database_health(state.engine),
        "kingdom_count": len(state.repository.list_kingdoms()),
    }


@router.get("/kingdoms", response_model=list[KingdomSummary])
async def list_kingdoms(state: ApiStateDep) -> list[KingdomSummary]:
    kingdoms = state.kingdoms.list_kingdoms()
    return [KingdomSummary.model_validate(state.kingdoms.to_summary_dict(k)) for k in kingdoms]


@router.post("/kingdoms", response_model=KingdomDetail, status_code=status.HTTP_201_CREATED)
async def create_kingdom(request: CreateKingdomRequest, state: ApiStateDep) -> KingdomDetail:
    draft = KingdomDraft(
        name=request.name,
        resources=dict(request.resources),
        unrest=request.unrest,
        settlements=[SettlementDraft(name=s.name, tier=s.tier) for s in request.settlements],
        armies=list(request.armies),
        build_queue=list(request.build_queue),
    )
    try:
        kingdom = state.kingdoms.create_kingdom(draft)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return KingdomDetail.model_validate(state.kingdoms.to_detail_dict(kingdom))


@router.get("/kingdoms/{kingdom_id}", response_model=KingdomDetail)
async def get_kingdom(kingdom_id: int, state: ApiStateDep) -> KingdomDetail:
    kingdom = _load_kingdom(state, kingdom_id)
    return KingdomDetail.model_validate(state.kingdoms.to_detail_dict(kingdom))


@router.post("/kingdoms/{kingdom_id}/upkeep/start", response_model=PhaseResultResponse)
async def start_upkeep(kingdom_id: int, state: ApiStateDep) -> PhaseResultResponse:
    _load_kingdom(state, kingdom_id)
    controller = state.upkeep.controller_for(dm.KingdomID(kingdom_id))
    return _result_response(await controller.start_phase())


@router.post("/kingdoms/{kingdom_id}/upkeep/steps/{step}", response_model=PhaseResultResponse)
async def run_upkeep_step(
    kingdom_id: int,
    step: UpkeepStep,
    state: ApiStateDep,
) -> PhaseResultResponse:
    _load_kingdom(state, kingdom_id)
    controller = state.upkeep.controller_for(dm.KingdomID(kingdom_id))
    return _result_response(await controller.run_step(step))


@router.get("/kingdoms/{kingdom_id}/upkeep", response_model=UpkeepDisplayResponse)
async def get_upkeep(kingdom_id: int, state: ApiStateDep) -> UpkeepDisplayResponse:
    kingdom = _load_kingdom(state, kingdom_id)
    return UpkeepDisplayResponse.model_validate(state.upkeep.display_dict(kingdom))


@router.get("/kingdoms/{kingdom_id}/upkeep/events", response_model=list[PhaseEventResponse])
async def list_upkeep_events(kingdom_id: int, state: ApiStateDep) -> list[PhaseEventResponse]:
    _load_kingdom(state, kingdom_id)
    return [
        PhaseEventResponse(
            phase=event.phase,
            kind=str(event.kind),
            message=event.message,
            recorded_at=event.recorded_at,
        )
        for event in state.upkeep.event_log(dm.KingdomID(kingdom_id)).events
    ]
