"""
Progress models.
"""
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import date, datetime, timezone


class Progress(SQLModel, table=True):
    """Progress table - one row per user with the derived level counters."""
    __tablename__ = "progress"

    user_id: str = Field(primary_key=True)
    total_solved: int = Field(default=0)
    current_level: int = Field(default=1)  # total_solved // 10 + 1
    last_activity_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SolvedExercise(SQLModel, table=True):
    """SolvedExercise junction table - membership means counted toward level."""
    __tablename__ = "solved_exercise"

    user_id: str = Field(foreign_key="progress.user_id", primary_key=True)
    exercise_id: str = Field(primary_key=True)
    solved_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class DailyActivity(SQLModel, table=True):
    """DailyActivity table - one row per user per calendar day with credited answers."""
    __tablename__ = "daily_activity"

    user_id: str = Field(foreign_key="progress.user_id", primary_key=True)
    activity_date: date = Field(primary_key=True)
    exercises_solved: int = Field(default=0)
