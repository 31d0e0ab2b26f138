"""Ledger Accessor Protocol Interface.

This module defines the contract through which phase controllers read and
mutate the kingdom ledger without knowing who owns it.
"""

from collections.abc import Callable
from typing import Protocol, TypeVar

from reignmaker.domain.models import Kingdom

T = TypeVar("T")


class IKingdomLedger(Protocol):
    """Protocol for the owner of a kingdom's mutable state.

    Implementations must guarantee a single in-flight mutation: concurrent
    ``atomic_update`` calls are applied one after another.
    """

    def get_current_kingdom(self) -> Kingdom | None:
        """Return a read-only snapshot of the kingdom, or None if unavailable."""
        ...

    async def atomic_update(self, mutator: Callable[[Kingdom], T]) -> T:
        """Apply ``mutator`` to the kingdom as one read-modify-write.

        Args:
            mutator: Callback receiving the live kingdom. It is the only place
                where the kingdom may be mutated.

        Returns:
            Whatever ``mutator`` returned.
        """
        ...
