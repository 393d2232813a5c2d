"""
Tests for starting sessions from the database and the live-session registry.
"""
import random

import pytest

from app.core.config import settings
from app.core.exceptions import NotFoundError, ValidationError
from app.models.enums import FilterMode, QuestionOrder
from app.services.answer_service import NormalizationOptions
from app.services.progress_service import record_credit
from app.services.selection_service import SessionFilter
from app.services.session_service import SessionRegistry, get_live_session, start_practice_session
from conftest import FakeExercise


@pytest.fixture
def live_registry(scheduler, monkeypatch):
    monkeypatch.setattr(settings, "advance_delay_seconds", 2.0)
    registry = SessionRegistry(scheduler=scheduler)
    yield registry
    registry.clear()


def test_start_uses_solved_ids_for_ordering(seeded_session, live_registry):
    record_credit(seeded_session, "u1", "sample-1")
    record_credit(seeded_session, "u1", "sample-3")

    practice = start_practice_session(
        seeded_session, "u1", SessionFilter.all(), QuestionOrder.UNLEARNED_FIRST, registry=live_registry
    )

    assert [e.id for e in practice.exercises] == ["sample-2", "sample-4", "sample-5", "sample-1", "sample-3"]
    assert live_registry.owner_of(practice.id) == "u1"
    assert get_live_session(practice.id, registry=live_registry) is practice


def test_random_order_uses_injected_source(seeded_session, live_registry):
    first = start_practice_session(
        seeded_session, "u1", SessionFilter.all(), QuestionOrder.RANDOM,
        registry=live_registry, rng=random.Random(5),
    )
    second = start_practice_session(
        seeded_session, "u1", SessionFilter.all(), QuestionOrder.RANDOM,
        registry=live_registry, rng=random.Random(5),
    )
    assert [e.id for e in first.exercises] == [e.id for e in second.exercises]
    assert sorted(e.id for e in first.exercises) == [f"sample-{i}" for i in range(1, 6)]


def test_session_size_comes_from_settings(seeded_session, live_registry, monkeypatch):
    monkeypatch.setattr(settings, "session_size", 2)
    practice = start_practice_session(
        seeded_session, "u1", SessionFilter.all(), QuestionOrder.EASY_FIRST, registry=live_registry
    )
    assert [e.id for e in practice.exercises] == ["sample-1", "sample-2"]


def test_no_match_refuses_to_start(seeded_session, live_registry):
    with pytest.raises(ValidationError):
        start_practice_session(
            seeded_session, "u1", SessionFilter(FilterMode.CATEGORY, ("Forms",)),
            QuestionOrder.RANDOM, registry=live_registry,
        )
    assert len(live_registry) == 0


def test_replacing_session_cancels_pending_advance(seeded_session, live_registry, scheduler):
    first = start_practice_session(
        seeded_session, "u1", SessionFilter.all(), QuestionOrder.UNLEARNED_FIRST, registry=live_registry
    )
    assert first.submit_answer("await page.click('button');", NormalizationOptions()).correct
    assert first.is_advancing

    start_practice_session(
        seeded_session, "u1", SessionFilter.all(), QuestionOrder.UNLEARNED_FIRST, registry=live_registry
    )

    assert scheduler.handles[0].cancelled
    assert scheduler.run_pending() == 0
    assert first.current_index == 0
    assert len(live_registry) == 1
    with pytest.raises(NotFoundError):
        get_live_session(first.id, registry=live_registry)


def test_exercises_survive_database_session(seeded_session, live_registry):
    practice = start_practice_session(
        seeded_session, "u1", SessionFilter.all(), QuestionOrder.UNLEARNED_FIRST, registry=live_registry
    )
    seeded_session.close()
    assert practice.current_exercise().hints[0] == "Use page.locator() to select the element"


def _start(registry, user_id, exercises):
    return registry.start(user_id, exercises, SessionFilter.all(), QuestionOrder.UNLEARNED_FIRST, advance_delay=0)


def test_full_registry_evicts_oldest_session(scheduler):
    registry = SessionRegistry(scheduler=scheduler, max_sessions=2)
    first = _start(registry, "u1", [FakeExercise(id="e1")])
    second = _start(registry, "u2", [FakeExercise(id="e1")])
    third = _start(registry, "u3", [FakeExercise(id="e1")])

    assert len(registry) == 2
    assert registry.get(first.id) is None
    assert registry.owner_of(first.id) is None
    assert registry.get(second.id) is second
    assert registry.get(third.id) is third


def test_full_registry_evicts_completed_sessions_first(scheduler):
    registry = SessionRegistry(scheduler=scheduler, max_sessions=2)
    oldest = _start(registry, "u1", [FakeExercise(id="e1")])
    finished = _start(registry, "u2", [FakeExercise(id="e1", expected_answer="x()")])
    assert finished.submit_answer("x()", NormalizationOptions()).correct
    assert finished.is_completed()

    newest = _start(registry, "u3", [FakeExercise(id="e1")])

    assert registry.get(finished.id) is None
    assert registry.get(oldest.id) is oldest
    assert registry.get(newest.id) is newest


def test_replacing_own_session_does_not_evict_others(scheduler):
    registry = SessionRegistry(scheduler=scheduler, max_sessions=2)
    other = _start(registry, "u1", [FakeExercise(id="e1")])
    _start(registry, "u2", [FakeExercise(id="e1")])
    replacement = _start(registry, "u2", [FakeExercise(id="e1")])

    assert registry.get(other.id) is other
    assert registry.get(replacement.id) is replacement
