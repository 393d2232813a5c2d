"""
Progress schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class CharacterResponse(BaseModel):
    """Character tier shown for the current level."""
    name: str
    emoji: str


class ProgressResponse(BaseModel):
    """Progress summary for the dashboard."""
    user_id: str
    solved_exercise_ids: List[str]
    total_solved: int
    current_level: int
    to_next_level: int = Field(..., description="Exercises left until the next level")
    streak_days: int
    last_activity_at: Optional[datetime] = None
    character: CharacterResponse


class CalendarDay(BaseModel):
    """One day of the activity calendar."""
    date: str  # ISO format date string (YYYY-MM-DD)
    count: int
    intensity: int = Field(..., ge=0, le=4)


class CalendarResponse(BaseModel):
    """Activity calendar, oldest day first."""
    days: List[CalendarDay]
