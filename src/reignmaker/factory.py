"""Controller Factory for reignmaker.

This module provides factory functions for creating phase controllers with
proper dependency wiring. Use these functions in production code to ensure
all collaborators are correctly initialized.

For testing, inject protocol-based fakes instead of using these factories.

Example:
    # Production usage
    from reignmaker.factory import create_upkeep_controller
    controller = create_upkeep_controller(ledger, step_store=store)

    # Testing usage
    from reignmaker.services.upkeep_service import UpkeepPhaseController

    class FakeReporter:
        def report_start(self, name): ...
        def report_complete(self, name): ...
        def report_error(self, name, error): ...

    controller = UpkeepPhaseController(ledger, StepTracker(), FakeReporter())
"""

from reignmaker.domain.lifecycle import LoggingPhaseReporter
from reignmaker.domain.rules_config import DEFAULT_RULES, RulesConfig
from reignmaker.domain.steps import StepTracker
from reignmaker.interfaces import IKingdomLedger, IPhaseReporter, IStepStore
from reignmaker.services.upkeep_service import UpkeepPhaseController


def create_upkeep_controller(
    ledger: IKingdomLedger | None,
    *,
    step_store: IStepStore | None = None,
    reporter: IPhaseReporter | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> UpkeepPhaseController:
    """Create an UpkeepPhaseController with all dependencies.

    Args:
        ledger: Owner of the kingdom state
        step_store: Step persistence; defaults to an in-memory store
        reporter: Lifecycle reporter; defaults to logging
        rules: Rule constants

    Returns:
        Fully initialized UpkeepPhaseController
    """
    return UpkeepPhaseController(
        ledger,
        StepTracker(step_store),
        reporter or LoggingPhaseReporter(),
        rules,
    )
