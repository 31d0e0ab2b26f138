"""Enumerations shared across the kingdom domain."""

from __future__ import annotations

from enum import StrEnum


class ResourceKind(StrEnum):
    """Stockpiled kingdom resources."""

    FOOD = "food"
    GOLD = "gold"
    LUMBER = "lumber"
    STONE = "stone"
    ORE = "ore"


class SettlementTier(StrEnum):
    """Settlement size classes, smallest first."""

    VILLAGE = "village"
    TOWN = "town"
    CITY = "city"
    METROPOLIS = "metropolis"


class PhaseName(StrEnum):
    """Turn phases whose step state is persisted."""

    UPKEEP = "upkeep"


class UpkeepStep(StrEnum):
    """Stable identifiers of the Upkeep phase steps.

    The values are persisted, so they must never change even if the display
    order of the steps does.
    """

    FEED_SETTLEMENTS = "feed-settlements"
    SUPPORT_MILITARY = "support-military"
    PROCESS_BUILDS = "process-builds"

