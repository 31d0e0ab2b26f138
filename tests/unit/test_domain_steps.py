"""Unit tests for step tracking."""

from __future__ import annotations

from reignmaker.domain import models as dm
from reignmaker.domain.enums import UpkeepStep
from reignmaker.domain.steps import InMemoryStepStore, StepTracker

STEPS = (
    dm.PhaseStepDefinition(UpkeepStep.FEED_SETTLEMENTS, "Feed Settlements"),
    dm.PhaseStepDefinition(UpkeepStep.SUPPORT_MILITARY, "Support Military"),
)


def test_initialize_marks_steps_incomplete():
    tracker = StepTracker()
    tracker.initialize(STEPS)

    assert tracker.snapshot() == {
        "feed-settlements": False,
        "support-military": False,
    }


def test_complete_is_idempotent():
    tracker = StepTracker()
    tracker.initialize(STEPS)

    tracker.complete(UpkeepStep.FEED_SETTLEMENTS)
    tracker.complete(UpkeepStep.FEED_SETTLEMENTS)

    assert tracker.is_complete(UpkeepStep.FEED_SETTLEMENTS)
    assert not tracker.is_complete(UpkeepStep.SUPPORT_MILITARY)


def test_unknown_step_reads_as_incomplete():
    tracker = StepTracker()
    tracker.initialize(STEPS)

    assert tracker.is_complete("does-not-exist") is False
    assert tracker.is_complete(UpkeepStep.PROCESS_BUILDS) is False


def test_steps_are_addressed_by_stable_string():
    tracker = StepTracker()
    tracker.initialize(STEPS)

    tracker.complete("support-military")

    assert tracker.is_complete(UpkeepStep.SUPPORT_MILITARY)


def test_initialize_discards_prior_phase_state():
    tracker = StepTracker()
    tracker.initialize(STEPS)
    tracker.complete(UpkeepStep.FEED_SETTLEMENTS)

    tracker.initialize(STEPS[1:])

    assert not tracker.is_complete(UpkeepStep.FEED_SETTLEMENTS)
    assert tracker.snapshot() == {"support-military": False}


def test_tracker_uses_injected_store():
    store = InMemoryStepStore()
    tracker = StepTracker(store)
    tracker.initialize(STEPS)

    tracker.complete(UpkeepStep.SUPPORT_MILITARY)

    assert store.query_step_complete("support-military")
    assert store.completion_state()["feed-settlements"] is False
