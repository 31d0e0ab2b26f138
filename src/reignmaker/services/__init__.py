"""Service layer for reignmaker.

Phase controllers orchestrate the pure rules in :mod:`reignmaker.domain`
against a ledger supplied from outside:

- Controllers depend on Protocol interfaces (IKingdomLedger, IPhaseReporter, IStepStore)
- Use factory.py for production dependency wiring
"""

from reignmaker.services.ledger import InMemoryKingdomLedger, RepositoryKingdomLedger
from reignmaker.services.upkeep_service import (
    UPKEEP_PHASE_STEPS,
    StepsCompleted,
    UpkeepDisplayData,
    UpkeepPhaseController,
)

__all__ = [
    "UPKEEP_PHASE_STEPS",
    "InMemoryKingdomLedger",
    "RepositoryKingdomLedger",
    "StepsCompleted",
    "UpkeepDisplayData",
    "UpkeepPhaseController",
]
