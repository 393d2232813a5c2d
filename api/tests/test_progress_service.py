"""
Tests for progress crediting, levels, streaks and the activity calendar.
"""
from datetime import date, timedelta

import pytest

from app.models.models import DailyActivity, Exercise, Progress, SolvedExercise
from app.services.progress_service import (
    build_calendar,
    calendar_intensity,
    character_for,
    compute_streak,
    get_activity,
    get_solved_ids,
    level_for,
    record_credit,
    reset_all_progress,
    reset_solved_progress,
    to_next_level,
)

TODAY = date(2026, 3, 15)


@pytest.fixture(autouse=True)
def stored_exercises(session):
    for i in range(10):
        session.add(Exercise(
            id=f"e{i}",
            title=f"Exercise {i}",
            description="Click it.",
            expected_answer="page.click('a')",
            category="Actions",
        ))
    session.commit()


@pytest.mark.parametrize("total, level", [(0, 1), (9, 1), (10, 2), (19, 2), (25, 3), (100, 11)])
def test_level_for(total, level):
    assert level_for(total) == level


def test_to_next_level():
    assert to_next_level(0) == 10
    assert to_next_level(7) == 3
    assert to_next_level(10) == 10


@pytest.mark.parametrize(
    "level, name",
    [(1, "Beginner"), (10, "Beginner"), (11, "Intermediate"), (25, "Intermediate"),
     (26, "Advanced"), (50, "Advanced"), (51, "Master")],
)
def test_character_tiers(level, name):
    assert character_for(level).name == name


@pytest.mark.parametrize("count, intensity", [(0, 0), (1, 1), (2, 1), (3, 2), (4, 2), (7, 4), (20, 4)])
def test_calendar_intensity(count, intensity):
    assert calendar_intensity(count) == intensity


def test_streak_counts_consecutive_days_ending_today():
    activity = {TODAY: 1, TODAY - timedelta(days=1): 3, TODAY - timedelta(days=2): 1, TODAY - timedelta(days=4): 2}
    assert compute_streak(activity, TODAY) == 3


def test_streak_survives_until_today_is_over():
    activity = {TODAY - timedelta(days=1): 1, TODAY - timedelta(days=2): 1}
    assert compute_streak(activity, TODAY) == 2


def test_streak_broken_by_missed_day():
    activity = {TODAY - timedelta(days=2): 5}
    assert compute_streak(activity, TODAY) == 0
    assert compute_streak({}, TODAY) == 0


def test_calendar_covers_twelve_weeks_oldest_first():
    calendar = build_calendar({TODAY: 3, TODAY - timedelta(days=83): 1, TODAY - timedelta(days=84): 9}, TODAY)

    assert len(calendar) == 84
    assert calendar[0] == {"date": (TODAY - timedelta(days=83)).isoformat(), "count": 1, "intensity": 1}
    assert calendar[-1] == {"date": TODAY.isoformat(), "count": 3, "intensity": 2}
    assert sum(day["count"] for day in calendar) == 4


def test_record_credit_counts_new_solve(session):
    progress = record_credit(session, "u1", "e1", today=TODAY)

    assert progress.total_solved == 1
    assert progress.current_level == 1
    assert progress.last_activity_at is not None
    assert get_solved_ids(session, "u1") == {"e1"}
    assert get_activity(session, "u1") == {TODAY: 1}


def test_record_credit_is_idempotent_for_total(session):
    record_credit(session, "u1", "e1", today=TODAY)
    progress = record_credit(session, "u1", "e1", today=TODAY)

    assert progress.total_solved == 1
    assert get_activity(session, "u1") == {TODAY: 2}


def test_tenth_solve_levels_up(session):
    for i in range(10):
        progress = record_credit(session, "u1", f"e{i}", today=TODAY)
    assert progress.total_solved == 10
    assert progress.current_level == 2


def test_activity_is_kept_per_day(session):
    record_credit(session, "u1", "e1", today=TODAY - timedelta(days=1))
    record_credit(session, "u1", "e2", today=TODAY)
    assert get_activity(session, "u1") == {TODAY - timedelta(days=1): 1, TODAY: 1}


def test_deleted_exercise_is_not_credited(session):
    assert record_credit(session, "u1", "gone", today=TODAY) is None
    assert get_solved_ids(session, "u1") == set()
    assert get_activity(session, "u1") == {}


def test_users_are_independent(session):
    record_credit(session, "u1", "e1", today=TODAY)
    record_credit(session, "u2", "e2", today=TODAY)
    assert get_solved_ids(session, "u1") == {"e1"}
    assert get_solved_ids(session, "u2") == {"e2"}


def test_reset_solved_progress_keeps_activity(session):
    for user_id in ("u1", "u2"):
        record_credit(session, user_id, "e1", today=TODAY)
        record_credit(session, user_id, "e2", today=TODAY)

    assert reset_solved_progress(session) == 2
    session.commit()

    for user_id in ("u1", "u2"):
        progress = session.get(Progress, user_id)
        assert progress.total_solved == 0
        assert progress.current_level == 1
        assert get_solved_ids(session, user_id) == set()
        assert get_activity(session, user_id) == {TODAY: 2}


def test_reset_all_progress_clears_activity_for_one_user(session):
    record_credit(session, "u1", "e1", today=TODAY)
    record_credit(session, "u2", "e1", today=TODAY)

    reset_all_progress(session, "u1")

    assert get_activity(session, "u1") == {}
    assert get_solved_ids(session, "u1") == set()
    assert session.get(Progress, "u1").last_activity_at is None
    assert get_activity(session, "u2") == {TODAY: 1}
    assert session.get(SolvedExercise, ("u2", "e1")) is not None
    assert session.get(DailyActivity, ("u2", TODAY)) is not None
