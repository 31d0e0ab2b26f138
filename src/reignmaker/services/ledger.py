"""Kingdom ledgers exposing a single atomic update primitive.

Both ledgers serialize updates with an ``asyncio.Lock`` and apply the
mutator to a deep copy of the kingdom. The copy only replaces the current
state when the mutator returns, so a failing mutator leaves no trace.
"""

from __future__ import annotations

import asyncio
import copy
import logging
from collections.abc import Callable
from typing import TypeVar

from reignmaker.domain import models as dm
from reignmaker.repository import JsonKingdomRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InMemoryKingdomLedger:
    """Ledger holding a kingdom in process memory."""

    def __init__(self, kingdom: dm.Kingdom) -> None:
        self._kingdom = kingdom
        self._lock = asyncio.Lock()

    def get_current_kingdom(self) -> dm.Kingdom:
        return copy.deepcopy(self._kingdom)

    async def atomic_update(self, mutator: Callable[[dm.Kingdom], T]) -> T:
        async with self._lock:
            working = copy.deepcopy(self._kingdom)
            result = mutator(working)
            self._kingdom = working
            return result


class RepositoryKingdomLedger:
    """Ledger backed by a JSON snapshot; every update is saved immediately."""

    def __init__(self, repository: JsonKingdomRepository, kingdom_id: dm.KingdomID) -> None:
        self._repository = repository
        self._kingdom_id = kingdom_id
        self._lock = asyncio.Lock()

    def get_current_kingdom(self) -> dm.Kingdom | None:
        if not self._repository.exists(self._kingdom_id):
            logger.warning("kingdom %s missing from repository", int(self._kingdom_id))
            return None
        return self._repository.load(self._kingdom_id)

    async def atomic_update(self, mutator: Callable[[dm.Kingdom], T]) -> T:
        async with self._lock:
            try:
                kingdom = self._repository.load(self._kingdom_id)
            except FileNotFoundError as exc:
                raise FileNotFoundError(f"kingdom {int(self._kingdom_id)} not found") from exc
            result = mutator(kingdom)
            self._repository.save(kingdom)
            return result
