"""Dataclasses describing the kingdom ledger.

The ledger is owned outside the rules layer; controllers only ever see it
through an atomic update callback (see :mod:`reignmaker.interfaces.ledger`).
Persistence adapters translate these dataclasses to JSON snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NewType

from .enums import ResourceKind, SettlementTier, UpkeepStep

# --- Strongly typed identifiers -------------------------------------------------

KingdomID = NewType("KingdomID", int)
SettlementID = NewType("SettlementID", int)
ArmyID = NewType("ArmyID", int)
ProjectID = NewType("ProjectID", int)


def empty_resources() -> dict[ResourceKind, int]:
    """Return a stockpile holding zero of every resource."""

    return {kind: 0 for kind in ResourceKind}


# --- Core dataclasses -----------------------------------------------------------


@dataclass(slots=True)
class Settlement:
    """Settlement belonging to the kingdom."""

    id: SettlementID
    name: str
    tier: SettlementTier = SettlementTier.VILLAGE
    was_fed_last_turn: bool = True


@dataclass(slots=True)
class Army:
    """Army fielded by the kingdom."""

    id: ArmyID
    name: str
    level: int = 1


@dataclass(slots=True)
class BuildProject:
    """Structure queued for construction."""

    id: ProjectID
    structure_id: str
    settlement_id: SettlementID | None = None


@dataclass(frozen=True, slots=True)
class PhaseStepDefinition:
    """Declared step of a phase."""

    id: UpkeepStep
    name: str


@dataclass(slots=True)
class Kingdom:
    """Aggregate root of the economy simulation."""

    id: KingdomID
    name: str
    resources: dict[ResourceKind, int] = field(default_factory=empty_resources)
    unrest: int = 0
    settlements: list[Settlement] = field(default_factory=list)
    armies: list[Army] = field(default_factory=list)
    build_queue: list[BuildProject] = field(default_factory=list)

    def resource(self, kind: ResourceKind) -> int:
        """Return the stockpiled amount of ``kind`` (zero when untracked)."""

        return self.resources.get(kind, 0)
