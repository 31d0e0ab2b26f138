"""Runtime primitives backing the reignmaker HTTP API."""

from __future__ import annotations

import logging
from contextlib import suppress
from dataclasses import asdict, dataclass, field

from sqlalchemy.engine import Engine

from reignmaker.config import Settings, get_settings
from reignmaker.database import create_db_engine, get_session_factory, init_db
from reignmaker.domain import models as dm
from reignmaker.domain.enums import PhaseName, ResourceKind, SettlementTier
from reignmaker.domain.lifecycle import CompositeReporter, LoggingPhaseReporter, PhaseEventLog
from reignmaker.domain.rules_config import DEFAULT_RULES, RulesConfig
from reignmaker.factory import create_upkeep_controller
from reignmaker.repository import JsonKingdomRepository, SqlStepStore
from reignmaker.services.ledger import RepositoryKingdomLedger
from reignmaker.services.upkeep_service import UpkeepDisplayData, UpkeepPhaseController

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SettlementDraft:
    name: str
    tier: SettlementTier = SettlementTier.VILLAGE


@dataclass(slots=True)
class KingdomDraft:
    """API-facing initializer for new kingdoms."""

    name: str
    resources: dict[ResourceKind, int] = field(default_factory=dict)
    unrest: int = 0
    settlements: list[SettlementDraft] = field(default_factory=list)
    armies: list[str] = field(default_factory=list)
    build_queue: list[str] = field(default_factory=list)


class KingdomService:
    """Utilities for loading and creating kingdom ledgers."""

    def __init__(self, repository: JsonKingdomRepository) -> None:
        self._repository = repository

    def list_kingdoms(self) -> list[dm.Kingdom]:
        """Return every persisted kingdom ordered by identifier."""

        kingdoms: list[dm.Kingdom] = []
        for kingdom_id in self._repository.list_kingdoms():
            with suppress(FileNotFoundError):
                kingdoms.append(self._repository.load(kingdom_id))
        return kingdoms

    def get_kingdom(self, kingdom_id: dm.KingdomID) -> dm.Kingdom:
        """Load a single kingdom or raise ``FileNotFoundError``."""

        return self._repository.load(kingdom_id)

    def create_kingdom(self, draft: KingdomDraft) -> dm.Kingdom:
        """Create and persist a kingdom described by ``draft``."""

        if any(amount < 0 for amount in draft.resources.values()):
            raise ValueError("resource quantities cannot be negative")
        if draft.unrest < 0:
            raise ValueError("unrest cannot be negative")

        resources = dm.empty_resources()
        resources.update(draft.resources)
        kingdom = dm.Kingdom(
            id=self._next_identifier(),
            name=draft.name,
            resources=resources,
            unrest=draft.unrest,
            settlements=[
                dm.Settlement(id=dm.SettlementID(index), name=s.name, tier=s.tier)
                for index, s in enumerate(draft.settlements, start=1)
            ],
            armies=[
                dm.Army(id=dm.ArmyID(index), name=name)
                for index, name in enumerate(draft.armies, start=1)
            ],
            build_queue=[
                dm.BuildProject(id=dm.ProjectID(index), structure_id=structure_id)
                for index, structure_id in enumerate(draft.build_queue, start=1)
            ],
        )
        self._repository.save(kingdom)
        return kingdom

    def _next_identifier(self) -> dm.KingdomID:
        existing = self._repository.list_kingdoms()
        if not existing:
            return dm.KingdomID(1)
        return dm.KingdomID(int(max(existing, key=int)) + 1)

    @staticmethod
    def to_summary_dict(kingdom: dm.Kingdom) -> dict[str, object]:
        """Return a JSON-friendly overview of a kingdom."""

        return {
            "id": int(kingdom.id),
            "name": kingdom.name,
            "unrest": kingdom.unrest,
            "resources": {str(kind): amount for kind, amount in kingdom.resources.items()},
            "settlement_count": len(kingdom.settlements),
            "army_count": len(kingdom.armies),
            "build_queue_length": len(kingdom.build_queue),
        }

    @staticmethod
    def to_detail_dict(kingdom: dm.Kingdom) -> dict[str, object]:
        """Return a richer JSON-compatible representation for clients."""

        summary = KingdomService.to_summary_dict(kingdom)
        summary.update(
            {
                "settlements": [
                    {
                        "id": int(s.id),
                        "name": s.name,
                        "tier": str(s.tier),
                        "was_fed_last_turn": s.was_fed_last_turn,
                    }
                    for s in kingdom.settlements
                ],
                "armies": [
                    {"id": int(a.id), "name": a.name, "level": a.level} for a in kingdom.armies
                ],
                "build_queue": [
                    {"id": int(p.id), "structure_id": p.structure_id}
                    for p in kingdom.build_queue
                ],
            }
        )
        return summary


class UpkeepManager:
    """Hand out one Upkeep controller per kingdom.

    Controllers are cached so every request for a kingdom shares the same
    ledger lock and event log.
    """

    def __init__(
        self,
        repository: JsonKingdomRepository,
        engine: Engine,
        *,
        rules: RulesConfig = DEFAULT_RULES,
    ) -> None:
        self._repository = repository
        self._session_factory = get_session_factory(engine)
        self._rules = rules
        self._controllers: dict[dm.KingdomID, UpkeepPhaseController] = {}
        self._event_logs: dict[dm.KingdomID, PhaseEventLog] = {}

    def controller_for(self, kingdom_id: dm.KingdomID) -> UpkeepPhaseController:
        controller = self._controllers.get(kingdom_id)
        if controller is None:
            event_log = self.event_log(kingdom_id)
            controller = create_upkeep_controller(
                RepositoryKingdomLedger(self._repository, kingdom_id),
                step_store=SqlStepStore(
                    self._session_factory, kingdom_id=kingdom_id, phase=PhaseName.UPKEEP
                ),
                reporter=CompositeReporter([LoggingPhaseReporter(), event_log]),
                rules=self._rules,
            )
            self._controllers[kingdom_id] = controller
            logger.debug("created upkeep controller for kingdom %s", int(kingdom_id))
        return controller

    def event_log(self, kingdom_id: dm.KingdomID) -> PhaseEventLog:
        return self._event_logs.setdefault(kingdom_id, PhaseEventLog())

    def display_dict(self, kingdom: dm.Kingdom) -> dict[str, object]:
        data: UpkeepDisplayData = self.controller_for(kingdom.id).get_display_data(kingdom)
        return asdict(data)


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(
        self, *, settings: Settings | None = None, rules: RulesConfig = DEFAULT_RULES
    ) -> None:
        self.settings = settings or get_settings()
        self.settings.data_dir.mkdir(parents=True, exist_ok=True)
        self.repository = JsonKingdomRepository(self.settings.data_dir)
        self.engine = create_db_engine(
            self.settings.database_url, echo=self.settings.database_echo
        )
        init_db(self.engine)
        self.rules = rules
        self.kingdoms = KingdomService(self.repository)
        self.upkeep = UpkeepManager(self.repository, self.engine, rules=rules)

    async def shutdown(self) -> None:
        self.engine.dispose()


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()
