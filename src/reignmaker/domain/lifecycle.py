"""Phase results and lifecycle reporting."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from reignmaker.interfaces.reporter import IPhaseReporter

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PhaseResult:
    """Uniform return value of every phase and step operation."""

    success: bool
    message: str | None = None
    details: dict[str, object] = field(default_factory=dict)


def create_phase_result(
    success: bool,
    message: str | None = None,
    details: dict[str, object] | None = None,
) -> PhaseResult:
    return PhaseResult(success=success, message=message, details=details or {})


class PhaseEventKind(StrEnum):
    STARTED = "started"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class PhaseEvent:
    """A lifecycle notification as recorded by :class:`PhaseEventLog`."""

    phase: str
    kind: PhaseEventKind
    message: str | None
    recorded_at: datetime


class LoggingPhaseReporter:
    """Reporter that writes lifecycle events to the standard logger."""

    def report_start(self, name: str) -> None:
        logger.info("%s started", name)

    def report_complete(self, name: str) -> None:
        logger.info("%s completed", name)

    def report_error(self, name: str, error: BaseException) -> None:
        logger.error("%s failed: %s", name, error)


class PhaseEventLog:
    """Reporter that keeps the most recent lifecycle events in memory."""

    def __init__(self, max_events: int = 100) -> None:
        self._max_events = max_events
        self._events: list[PhaseEvent] = []

    @property
    def events(self) -> list[PhaseEvent]:
        return list(self._events)

    def report_start(self, name: str) -> None:
        self._record(name, PhaseEventKind.STARTED, None)

    def report_complete(self, name: str) -> None:
        self._record(name, PhaseEventKind.COMPLETED, None)

    def report_error(self, name: str, error: BaseException) -> None:
        self._record(name, PhaseEventKind.FAILED, str(error))

    def _record(self, name: str, kind: PhaseEventKind, message: str | None) -> None:
        self._events.append(PhaseEvent(name, kind, message, datetime.now(UTC)))
        if len(self._events) > self._max_events:
            del self._events[: len(self._events) - self._max_events]


class CompositeReporter:
    """Fan a notification out to several reporters."""

    def __init__(self, reporters: Iterable[IPhaseReporter]) -> None:
        self._reporters = list(reporters)

    def report_start(self, name: str) -> None:
        for reporter in self._reporters:
            reporter.report_start(name)

    def report_complete(self, name: str) -> None:
        for reporter in self._reporters:
            reporter.report_complete(name)

    def report_error(self, name: str, error: BaseException) -> None:
        for reporter in self._reporters:
            reporter.report_error(name, error)
