"""Upkeep Phase Controller for reignmaker.

The Upkeep phase pays for the kingdom: settlements and armies eat, armies
draw gold, and queued construction completes. It is played as three steps
tracked by a :class:`~reignmaker.domain.steps.StepTracker`:

* ``feed-settlements`` always needs an explicit call, even when trivial.
* ``support-military`` is auto-completed at phase start when there are no armies.
* ``process-builds`` is auto-completed at phase start when the queue is empty.

Shortages are not errors. They drain the resource to zero and add the
deficit to unrest.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from reignmaker.domain import models as dm
from reignmaker.domain import upkeep
from reignmaker.domain.consumption import (
    calculate_army_support_capacity,
    calculate_consumption,
    calculate_military_support_cost,
    calculate_unsupported_armies,
)
from reignmaker.domain.enums import ResourceKind, UpkeepStep
from reignmaker.domain.lifecycle import PhaseResult, create_phase_result
from reignmaker.domain.rules_config import DEFAULT_RULES, RulesConfig
from reignmaker.domain.steps import StepTracker
from reignmaker.interfaces import IKingdomLedger, IPhaseReporter

logger = logging.getLogger(__name__)

CONTROLLER_NAME = "UpkeepPhaseController"

UPKEEP_PHASE_STEPS: tuple[dm.PhaseStepDefinition, ...] = (
    dm.PhaseStepDefinition(UpkeepStep.FEED_SETTLEMENTS, "Feed Settlements"),
    dm.PhaseStepDefinition(UpkeepStep.SUPPORT_MILITARY, "Support Military"),
    dm.PhaseStepDefinition(UpkeepStep.PROCESS_BUILDS, "Process Build Queue"),
)

ALREADY_DONE_MESSAGES: dict[UpkeepStep, str] = {
    UpkeepStep.FEED_SETTLEMENTS: "Settlements already fed this turn",
    UpkeepStep.SUPPORT_MILITARY: "Military already supported this turn",
    UpkeepStep.PROCESS_BUILDS: "Build queue already processed this turn",
}


@dataclass(slots=True)
class StepsCompleted:
    feed_settlements: bool = False
    support_military: bool = False
    process_builds: bool = False


@dataclass(slots=True)
class UpkeepDisplayData:
    """Read-only projection of the upkeep situation for presentation."""

    current_food: int = 0
    food_consumption: int = 0
    food_shortage: int = 0
    settlement_consumption: int = 0
    army_consumption: int = 0
    army_count: int = 0
    army_support: int = 0
    unsupported_count: int = 0
    food_remaining_for_armies: int = 0
    army_food_shortage: int = 0
    settlement_food_shortage: int = 0
    current_gold: int = 0
    military_support_cost: int = 0
    gold_shortage: int = 0
    steps_completed: StepsCompleted = field(default_factory=StepsCompleted)


class UpkeepPhaseController:
    """Drive the Upkeep phase of one kingdom."""

    def __init__(
        self,
        ledger: IKingdomLedger | None,
        steps: StepTracker,
        reporter: IPhaseReporter,
        rules: RulesConfig = DEFAULT_RULES,
    ) -> None:
        self.ledger = ledger
        self.steps = steps
        self.reporter = reporter
        self.rules = rules

    # ------------------------------------------------------------------
    # Phase lifecycle

    async def start_phase(self) -> PhaseResult:
        """Register the upkeep steps and auto-complete those with nothing to do."""

        self._report(self.reporter.report_start, CONTROLLER_NAME)
        try:
            self.steps.initialize(UPKEEP_PHASE_STEPS)

            kingdom = self._current_kingdom()
            if kingdom is not None:
                if not kingdom.armies:
                    self.steps.complete(UpkeepStep.SUPPORT_MILITARY)
                    logger.info("military support auto-completed (no armies)")
                if not kingdom.build_queue:
                    self.steps.complete(UpkeepStep.PROCESS_BUILDS)
                    logger.info("build queue auto-completed (no projects)")
        except Exception as exc:
            self._report(self.reporter.report_error, CONTROLLER_NAME, exc)
            return create_phase_result(False, str(exc) or type(exc).__name__)

        self._report(self.reporter.report_complete, CONTROLLER_NAME)
        return create_phase_result(True)

    # ------------------------------------------------------------------
    # Steps

    async def feed_settlements(self) -> PhaseResult:
        """Pay food for settlements and armies."""

        return await self._run_step(UpkeepStep.FEED_SETTLEMENTS, self._process_food_consumption)

    async def support_military(self) -> PhaseResult:
        """Pay gold for every army."""

        return await self._run_step(UpkeepStep.SUPPORT_MILITARY, self._process_military_support)

    async def process_builds(self) -> PhaseResult:
        """Complete every queued build project."""

        return await self._run_step(UpkeepStep.PROCESS_BUILDS, self._process_build_projects)

    async def run_step(self, step: UpkeepStep) -> PhaseResult:
        """Dispatch to the operation for ``step``."""

        operations: dict[UpkeepStep, Callable[[], Awaitable[PhaseResult]]] = {
            UpkeepStep.FEED_SETTLEMENTS: self.feed_settlements,
            UpkeepStep.SUPPORT_MILITARY: self.support_military,
            UpkeepStep.PROCESS_BUILDS: self.process_builds,
        }
        return await operations[step]()

    async def _run_step(
        self,
        step: UpkeepStep,
        effect: Callable[[], Awaitable[dict[str, object]]],
    ) -> PhaseResult:
        if self.steps.is_complete(step):
            return create_phase_result(False, ALREADY_DONE_MESSAGES[step])

        try:
            details = await effect()
            self.steps.complete(step)
        except Exception as exc:
            logger.warning("upkeep step %s failed: %s", step, exc)
            return create_phase_result(False, str(exc) or type(exc).__name__)

        return create_phase_result(True, details=details)

    # ------------------------------------------------------------------
    # Domain effects

    async def _process_food_consumption(self) -> dict[str, object]:
        if self.ledger is None:
            logger.error("no kingdom ledger available; skipping settlement feeding")
            return {"skipped": True}

        rules = self.rules
        outcome = await self.ledger.atomic_update(
            lambda kingdom: upkeep.feed_settlements(kingdom, rules)
        )
        if outcome.fed:
            logger.info(
                "consumed %s food (%s settlements + %s armies)",
                outcome.demand,
                outcome.settlement_food,
                outcome.army_food,
            )
        else:
            logger.info(
                "food shortage: %s unrest generated (needed %s, had %s)",
                outcome.shortage,
                outcome.demand,
                outcome.food_before,
            )
        return {
            "food_consumed": outcome.demand - outcome.shortage,
            "food_demand": outcome.demand,
            "shortage": outcome.shortage,
            "unrest_gained": outcome.shortage,
            "settlements_fed": outcome.fed,
        }

    async def _process_military_support(self) -> dict[str, object]:
        if self.ledger is None:
            logger.error("no kingdom ledger available; skipping military support")
            return {"skipped": True}

        rules = self.rules
        outcome = await self.ledger.atomic_update(
            lambda kingdom: upkeep.pay_military_support(kingdom, rules)
        )
        if outcome.army_count == 0:
            logger.info("no armies to support")
        elif outcome.shortage:
            logger.info("military support shortage: %s unrest generated", outcome.shortage)
        else:
            logger.info("paid %s gold for military support", outcome.cost)
        return {
            "army_count": outcome.army_count,
            "gold_paid": outcome.cost - outcome.shortage,
            "support_cost": outcome.cost,
            "shortage": outcome.shortage,
            "unrest_gained": outcome.shortage,
        }

    async def _process_build_projects(self) -> dict[str, object]:
        if self.ledger is None:
            logger.error("no kingdom ledger available; skipping build queue")
            return {"skipped": True}

        completed = await self.ledger.atomic_update(upkeep.complete_build_queue)
        if completed:
            logger.info(
                "completed %s build projects: %s",
                len(completed),
                [project.structure_id for project in completed],
            )
        else:
            logger.info("no build projects to process")
        return {"completed_projects": [project.structure_id for project in completed]}

    # ------------------------------------------------------------------
    # Presentation

    def get_display_data(self, kingdom: dm.Kingdom | None) -> UpkeepDisplayData:
        """Project consumption, support and shortages without mutating anything."""

        if kingdom is None:
            return UpkeepDisplayData()

        rules = self.rules
        consumption = calculate_consumption(kingdom.settlements, kingdom.armies, rules)
        current_food = kingdom.resource(ResourceKind.FOOD)
        current_gold = kingdom.resource(ResourceKind.GOLD)
        support_cost = calculate_military_support_cost(kingdom.armies, rules)

        food_remaining_for_armies = max(0, current_food - consumption.settlement_food)
        return UpkeepDisplayData(
            current_food=current_food,
            food_consumption=consumption.total_food,
            food_shortage=max(0, consumption.total_food - current_food),
            settlement_consumption=consumption.settlement_food,
            army_consumption=consumption.army_food,
            army_count=len(kingdom.armies),
            army_support=calculate_army_support_capacity(kingdom.settlements, rules),
            unsupported_count=calculate_unsupported_armies(
                kingdom.armies, kingdom.settlements, rules
            ),
            food_remaining_for_armies=food_remaining_for_armies,
            army_food_shortage=max(0, consumption.army_food - food_remaining_for_armies),
            settlement_food_shortage=max(0, consumption.settlement_food - current_food),
            current_gold=current_gold,
            military_support_cost=support_cost,
            gold_shortage=max(0, support_cost - current_gold),
            steps_completed=StepsCompleted(
                feed_settlements=self.steps.is_complete(UpkeepStep.FEED_SETTLEMENTS),
                support_military=self.steps.is_complete(UpkeepStep.SUPPORT_MILITARY),
                process_builds=self.steps.is_complete(UpkeepStep.PROCESS_BUILDS),
            ),
        )

    # ------------------------------------------------------------------
    # Helpers

    def _current_kingdom(self) -> dm.Kingdom | None:
        if self.ledger is None:
            logger.error("no kingdom ledger available; nothing will be auto-completed")
            return None
        return self.ledger.get_current_kingdom()

    def _report(self, notify: Callable[..., None], *args: object) -> None:
        try:
            notify(*args)
        except Exception:
            logger.exception("phase reporter %s raised; ignoring", notify.__name__)
