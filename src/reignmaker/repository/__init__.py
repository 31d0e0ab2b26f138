"""Persistence adapters for kingdom ledgers and phase step state."""

from .json_store import JsonKingdomRepository
from .step_store import SqlStepStore

__all__ = ["JsonKingdomRepository", "SqlStepStore"]
