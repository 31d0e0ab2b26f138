"""Declarative rule configuration for the kingdom economy."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import SettlementTier


@dataclass(frozen=True, slots=True)
class ConsumptionRules:
    """Food demand and army support capacity per settlement tier."""

    village_food: int = 1
    town_food: int = 4
    city_food: int = 8
    metropolis_food: int = 12
    army_food: int = 1  # per army
    village_army_support: int = 1
    town_army_support: int = 2
    city_army_support: int = 3
    metropolis_army_support: int = 4

    def food_for(self, tier: SettlementTier) -> int:
        return {
            SettlementTier.VILLAGE: self.village_food,
            SettlementTier.TOWN: self.town_food,
            SettlementTier.CITY: self.city_food,
            SettlementTier.METROPOLIS: self.metropolis_food,
        }[tier]

    def army_support_for(self, tier: SettlementTier) -> int:
        return {
            SettlementTier.VILLAGE: self.village_army_support,
            SettlementTier.TOWN: self.town_army_support,
            SettlementTier.CITY: self.city_army_support,
            SettlementTier.METROPOLIS: self.metropolis_army_support,
        }[tier]


@dataclass(frozen=True, slots=True)
class UpkeepRules:
    """Military upkeep constants."""

    gold_per_army: int = 1  # flat, independent of settlement tier


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    consumption: ConsumptionRules = ConsumptionRules()
    upkeep: UpkeepRules = UpkeepRules()


DEFAULT_RULES = RulesConfig()
