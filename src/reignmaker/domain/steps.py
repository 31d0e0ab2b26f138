"""Step completion tracking for a single phase."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from .models import PhaseStepDefinition

if TYPE_CHECKING:
    from reignmaker.interfaces.steps import IStepStore


class InMemoryStepStore:
    """Step store that lives as long as the process."""

    def __init__(self) -> None:
        self._state: dict[str, bool] = {}

    def initialize_steps(self, steps: Sequence[PhaseStepDefinition]) -> None:
        self._state = {str(step.id): False for step in steps}

    def mark_step_complete(self, step_id: str) -> None:
        self._state[str(step_id)] = True

    def query_step_complete(self, step_id: str) -> bool:
        return self._state.get(str(step_id), False)

    def completion_state(self) -> dict[str, bool]:
        return dict(self._state)


class StepTracker:
    """Track which steps of the current phase are complete.

    Steps are addressed by stable string ids (``UpkeepStep`` values), never by
    position. Completion is monotonic until the next :meth:`initialize`.
    """

    def __init__(self, store: IStepStore | None = None) -> None:
        self._store = store if store is not None else InMemoryStepStore()

    def initialize(self, steps: Sequence[PhaseStepDefinition]) -> None:
        """Reset completion to incomplete for exactly ``steps``."""

        self._store.initialize_steps(steps)

    def complete(self, step_id: str) -> None:
        """Mark ``step_id`` complete; completing twice is a no-op."""

        if self._store.query_step_complete(step_id):
            return
        self._store.mark_step_complete(step_id)

    def is_complete(self, step_id: str) -> bool:
        """Return True if ``step_id`` is complete; unknown ids read as False."""

        return self._store.query_step_complete(step_id)

    def snapshot(self) -> dict[str, bool]:
        return self._store.completion_state()
