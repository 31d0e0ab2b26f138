"""SQLAlchemy-backed step persistence."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session, sessionmaker

from reignmaker.domain import models as dm
from reignmaker.domain.enums import PhaseName
from reignmaker.models import PhaseStep


class SqlStepStore:
    """Keep step completion for one kingdom's phase in the ``phase_steps`` table."""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        kingdom_id: dm.KingdomID,
        phase: PhaseName,
    ) -> None:
        self._session_factory = session_factory
        self._kingdom_id = int(kingdom_id)
        self._phase = str(phase)

    def _scope(self):
        return select(PhaseStep).where(
            PhaseStep.kingdom_id == self._kingdom_id,
            PhaseStep.phase == self._phase,
        )

    def initialize_steps(self, steps: Sequence[dm.PhaseStepDefinition]) -> None:
        with self._session_factory() as session, session.begin():
            session.execute(
                delete(PhaseStep).where(
                    PhaseStep.kingdom_id == self._kingdom_id,
                    PhaseStep.phase == self._phase,
                )
            )
            session.add_all(
                PhaseStep(
                    kingdom_id=self._kingdom_id,
                    phase=self._phase,
                    step_id=str(step.id),
                    name=step.name,
                    position=position,
                    completed=False,
                )
                for position, step in enumerate(steps)
            )

    def mark_step_complete(self, step_id: str) -> None:
        with self._session_factory() as session, session.begin():
            row = session.scalars(
                self._scope().where(PhaseStep.step_id == str(step_id))
            ).one_or_none()
            if row is None:
                # Unregistered steps are recorded too so a later query sees them.
                session.add(
                    PhaseStep(
                        kingdom_id=self._kingdom_id,
                        phase=self._phase,
                        step_id=str(step_id),
                        name=str(step_id),
                        position=self._count(session),
                        completed=True,
                    )
                )
            else:
                row.completed = True

    def query_step_complete(self, step_id: str) -> bool:
        with self._session_factory() as session:
            row = session.scalars(
                self._scope().where(PhaseStep.step_id == str(step_id))
            ).one_or_none()
            return bool(row and row.completed)

    def completion_state(self) -> dict[str, bool]:
        with self._session_factory() as session:
            rows = session.scalars(self._scope().order_by(PhaseStep.position)).all()
            return {row.step_id: row.completed for row in rows}

    def _count(self, session: Session) -> int:
        return session.scalar(
            select(func.count())
            .select_from(PhaseStep)
            .where(PhaseStep.kingdom_id == self._kingdom_id, PhaseStep.phase == self._phase)
        ) or 0
