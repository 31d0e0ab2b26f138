"""Phase step model.

Stores the completion flag of every step of the phase a kingdom is
currently playing.
"""

from sqlalchemy import Boolean, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class PhaseStep(Base, TimestampMixin):
    """Completion state of one step of a kingdom's current phase.

    Attributes:
        id: Primary key
        kingdom_id: Kingdom the step belongs to
        phase: Phase name (e.g. "upkeep")
        step_id: Stable step identifier (e.g. "feed-settlements")
        name: Display name of the step
        position: Display order within the phase
        completed: Whether the step is done for this phase
    """

    __tablename__ = "phase_steps"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    kingdom_id: Mapped[int] = mapped_column(Integer, nullable=False)
    phase: Mapped[str] = mapped_column(String, nullable=False)
    step_id: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        UniqueConstraint("kingdom_id", "phase", "step_id", name="uq_phase_step"),
        Index("idx_phase_steps_scope", "kingdom_id", "phase"),
    )

    def __repr__(self) -> str:
        return (
            f"<PhaseStep(kingdom={self.kingdom_id}, phase='{self.phase}', "
            f"step='{self.step_id}', completed={self.completed})>"
        )
