"""Food and military support calculations.

Every function here is pure: it reads settlements and armies and returns
numbers, so callers may use them for display without touching the ledger.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .models import Army, Settlement
from .rules_config import DEFAULT_RULES, RulesConfig


@dataclass(frozen=True, slots=True)
class ConsumptionSummary:
    """Food demand for one upkeep, split by consumer."""

    settlement_food: int
    army_food: int

    @property
    def total_food(self) -> int:
        return self.settlement_food + self.army_food


def calculate_consumption(
    settlements: Sequence[Settlement],
    armies: Sequence[Army],
    rules: RulesConfig = DEFAULT_RULES,
) -> ConsumptionSummary:
    """Return the food the kingdom must pay this upkeep."""

    settlement_food = sum(rules.consumption.food_for(s.tier) for s in settlements)
    army_food = len(armies) * rules.consumption.army_food
    return ConsumptionSummary(settlement_food=settlement_food, army_food=army_food)


def calculate_army_support_capacity(
    settlements: Sequence[Settlement], rules: RulesConfig = DEFAULT_RULES
) -> int:
    """Number of armies the settlements can sustain before a shortage."""

    return sum(rules.consumption.army_support_for(s.tier) for s in settlements)


def calculate_unsupported_armies(
    armies: Sequence[Army],
    settlements: Sequence[Settlement],
    rules: RulesConfig = DEFAULT_RULES,
) -> int:
    """Armies beyond what the settlements can support."""

    return max(0, len(armies) - calculate_army_support_capacity(settlements, rules))


def calculate_military_support_cost(
    armies: Sequence[Army], rules: RulesConfig = DEFAULT_RULES
) -> int:
    """Gold owed for military support.

    The cost is flat per army. Scaling it by settlement tier would change
    only this function and :class:`~reignmaker.domain.rules_config.UpkeepRules`.
    """

    return len(armies) * rules.upkeep.gold_per_army
