"""Ledger mutators for the Upkeep phase.

Each function mutates the kingdom it is handed and returns an outcome
record. They are meant to run inside a ledger's atomic update callback, so
demand is computed from the same state the mutation is applied to.
"""

from __future__ import annotations

from dataclasses import dataclass

from .consumption import calculate_consumption, calculate_military_support_cost
from .enums import ResourceKind
from .models import BuildProject, Kingdom
from .rules_config import DEFAULT_RULES, RulesConfig


@dataclass(slots=True)
class FeedingOutcome:
    """Result of paying the kingdom's food demand."""

    demand: int
    settlement_food: int
    army_food: int
    food_before: int
    shortage: int

    @property
    def fed(self) -> bool:
        return self.shortage == 0


@dataclass(slots=True)
class SupportOutcome:
    """Result of paying military support."""

    army_count: int
    cost: int
    shortage: int


def spend_or_unrest(kingdom: Kingdom, kind: ResourceKind, amount: int) -> int:
    """Pay ``amount`` of ``kind``; any deficit becomes unrest.

    The stockpile is clamped at zero and the deficit is returned.
    """

    available = kingdom.resource(kind)
    if available >= amount:
        kingdom.resources[kind] = available - amount
        return 0

    shortage = amount - available
    kingdom.resources[kind] = 0
    kingdom.unrest += shortage
    return shortage


def feed_settlements(kingdom: Kingdom, rules: RulesConfig = DEFAULT_RULES) -> FeedingOutcome:
    """Pay food for settlements and armies.

    Feeding is all or nothing: on a shortage the food is emptied, the deficit
    becomes unrest and every settlement is marked unfed.
    """

    consumption = calculate_consumption(kingdom.settlements, kingdom.armies, rules)
    food_before = kingdom.resource(ResourceKind.FOOD)
    shortage = spend_or_unrest(kingdom, ResourceKind.FOOD, consumption.total_food)

    fed = shortage == 0
    for settlement in kingdom.settlements:
        settlement.was_fed_last_turn = fed

    return FeedingOutcome(
        demand=consumption.total_food,
        settlement_food=consumption.settlement_food,
        army_food=consumption.army_food,
        food_before=food_before,
        shortage=shortage,
    )


def pay_military_support(
    kingdom: Kingdom, rules: RulesConfig = DEFAULT_RULES
) -> SupportOutcome:
    """Pay gold for every army; a deficit becomes unrest."""

    if not kingdom.armies:
        return SupportOutcome(army_count=0, cost=0, shortage=0)

    cost = calculate_military_support_cost(kingdom.armies, rules)
    shortage = spend_or_unrest(kingdom, ResourceKind.GOLD, cost)
    return SupportOutcome(
        army_count=len(kingdom.armies),
        cost=cost,
        shortage=shortage,
    )


def complete_build_queue(kingdom: Kingdom) -> list[BuildProject]:
    """Empty the build queue and return every project it held."""

    completed = list(kingdom.build_queue)
    kingdom.build_queue = []
    return completed
