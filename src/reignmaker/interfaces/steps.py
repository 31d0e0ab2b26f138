"""Step Persistence Protocol Interface."""

from collections.abc import Sequence
from typing import Protocol

from reignmaker.domain.models import PhaseStepDefinition


class IStepStore(Protocol):
    """Backing store for step completion state of the current phase.

    The store only needs to be durable for the lifetime of one phase.
    """

    def initialize_steps(self, steps: Sequence[PhaseStepDefinition]) -> None:
        """Forget prior state and register ``steps`` as incomplete."""
        ...

    def mark_step_complete(self, step_id: str) -> None:
        """Flag ``step_id`` as complete."""
        ...

    def query_step_complete(self, step_id: str) -> bool:
        """Return whether ``step_id`` is complete (False when unknown)."""
        ...

    def completion_state(self) -> dict[str, bool]:
        """Return the completion flag of every registered step, in order."""
        ...
