"""
Progress service - credits solved exercises and derives levels, streaks and the
activity calendar.

Only credited correct answers change progress. Re-solving an exercise that is
already solved refreshes the activity log but never double counts.
"""
import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional

from sqlmodel import Session, select

from app.models.models import Exercise, Progress, SolvedExercise, DailyActivity

logger = logging.getLogger(__name__)

EXERCISES_PER_LEVEL = 10
CALENDAR_DAYS = 84  # 12 weeks
MAX_INTENSITY = 4


@dataclass(frozen=True)
class CharacterTier:
    name: str
    emoji: str
    max_level: Optional[int]  # None for the top tier


CHARACTER_TIERS = [
    CharacterTier("Beginner", "🐣", 10),
    CharacterTier("Intermediate", "🐦", 25),
    CharacterTier("Advanced", "🦅", 50),
    CharacterTier("Master", "🦉", None),
]


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def level_for(total_solved: int) -> int:
    """Level derived from the solved counter: one level per ten exercises, starting at 1."""
    return total_solved // EXERCISES_PER_LEVEL + 1


def to_next_level(total_solved: int) -> int:
    return EXERCISES_PER_LEVEL - total_solved % EXERCISES_PER_LEVEL


def character_for(level: int) -> CharacterTier:
    for tier in CHARACTER_TIERS:
        if tier.max_level is None or level <= tier.max_level:
            return tier
    return CHARACTER_TIERS[-1]


def calendar_intensity(count: int) -> int:
    """Map a day's count to a 0-4 heat level (two exercises per step)."""
    if count <= 0:
        return 0
    return min(math.ceil(count / 2), MAX_INTENSITY)


def compute_streak(activity: Dict[date, int], today: date) -> int:
    """
    Count consecutive active days ending today.

    If today has no activity yet the streak is still alive and is counted
    from yesterday.
    """
    day = today
    if activity.get(day, 0) <= 0:
        day -= timedelta(days=1)

    streak = 0
    while activity.get(day, 0) > 0:
        streak += 1
        day -= timedelta(days=1)
    return streak


def build_calendar(activity: Dict[date, int], today: date, days: int = CALENDAR_DAYS) -> List[dict]:
    """Return the last `days` days, oldest first, with counts and intensities."""
    calendar = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        count = activity.get(day, 0)
        calendar.append({
            "date": day.isoformat(),
            "count": count,
            "intensity": calendar_intensity(count),
        })
    return calendar


# ============================================================================
# Persistence helpers
# ============================================================================

def get_or_create_progress(session: Session, user_id: str) -> Progress:
    progress = session.get(Progress, user_id)
    if progress is None:
        progress = Progress(user_id=user_id)
        session.add(progress)
        session.flush()
    return progress


def get_solved_ids(session: Session, user_id: str) -> set[str]:
    rows = session.exec(
        select(SolvedExercise.exercise_id).where(SolvedExercise.user_id == user_id)
    ).all()
    return set(rows)


def get_activity(session: Session, user_id: str) -> Dict[date, int]:
    rows = session.exec(
        select(DailyActivity).where(DailyActivity.user_id == user_id)
    ).all()
    return {row.activity_date: row.exercises_solved for row in rows}


def record_credit(
    session: Session,
    user_id: str,
    exercise_id: str,
    today: Optional[date] = None,
) -> Optional[Progress]:
    """
    Record a credited correct answer.

    Increments today's activity entry. If the exercise was not solved
    before, adds it to the solved set, increments total_solved and
    recomputes the level.

    Args:
        session: Database session (committed here)
        user_id: The user
        exercise_id: The exercise answered correctly
        today: Calendar day to attribute the answer to (defaults to the UTC date)

    Returns:
        The updated Progress row, or None if the exercise no longer exists
    """
    # Live sessions keep exercises that may have been deleted since
    if session.get(Exercise, exercise_id) is None:
        logger.info("Skipping credit for deleted exercise %s (user %s)", exercise_id, user_id)
        return None

    today = today or today_utc()
    progress = get_or_create_progress(session, user_id)

    activity = session.get(DailyActivity, (user_id, today))
    if activity is None:
        activity = DailyActivity(user_id=user_id, activity_date=today, exercises_solved=0)
    activity.exercises_solved += 1
    session.add(activity)

    already_solved = session.get(SolvedExercise, (user_id, exercise_id)) is not None
    if not already_solved:
        session.add(SolvedExercise(user_id=user_id, exercise_id=exercise_id))
        progress.total_solved += 1
        progress.current_level = level_for(progress.total_solved)

    progress.last_activity_at = datetime.now(timezone.utc)
    session.add(progress)
    session.commit()
    session.refresh(progress)

    logger.info(
        "Credited exercise %s for user %s (new=%s, total=%s, level=%s)",
        exercise_id, user_id, not already_solved, progress.total_solved, progress.current_level,
    )
    return progress


def reset_solved_progress(session: Session, user_id: Optional[str] = None) -> int:
    """
    Clear solved exercises, total_solved and level, keeping the activity log.

    Used whenever the exercise set changes. Applies to every user when
    user_id is None.

    Returns:
        Number of progress rows reset
    """
    solved_query = select(SolvedExercise)
    progress_query = select(Progress)
    if user_id is not None:
        solved_query = solved_query.where(SolvedExercise.user_id == user_id)
        progress_query = progress_query.where(Progress.user_id == user_id)

    for solved in session.exec(solved_query).all():
        session.delete(solved)

    progress_rows = session.exec(progress_query).all()
    for progress in progress_rows:
        progress.total_solved = 0
        progress.current_level = 1
        session.add(progress)

    session.flush()
    return len(progress_rows)


def reset_all_progress(session: Session, user_id: str) -> None:
    """Clear everything for a user, including the activity log."""
    reset_solved_progress(session, user_id)
    for activity in session.exec(
        select(DailyActivity).where(DailyActivity.user_id == user_id)
    ).all():
        session.delete(activity)

    progress = get_or_create_progress(session, user_id)
    progress.last_activity_at = None
    session.add(progress)
    session.commit()
    logger.info("Reset all progress for user %s", user_id)
