"""Protocol-based interfaces for reignmaker collaborators.

Phase controllers depend on these protocols only, so tests can inject
in-memory fakes and production code can plug in persistent backends.
"""

from reignmaker.interfaces.ledger import IKingdomLedger
from reignmaker.interfaces.reporter import IPhaseReporter
from reignmaker.interfaces.steps import IStepStore

__all__ = [
    "IKingdomLedger",
    "IPhaseReporter",
    "IStepStore",
]
