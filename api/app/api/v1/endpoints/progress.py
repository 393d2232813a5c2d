"""
Progress endpoints.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session
from typing import Optional
import logging

from app.core.config import settings
from app.core.database import get_session
from app.schemas.progress import (
    ProgressResponse,
    CharacterResponse,
    CalendarResponse,
    CalendarDay,
)
from app.services.progress_service import (
    get_or_create_progress,
    get_solved_ids,
    get_activity,
    compute_streak,
    build_calendar,
    character_for,
    to_next_level,
    today_utc,
    reset_all_progress,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/progress", tags=["progress"])


def _progress_response(session: Session, user_id: str) -> ProgressResponse:
    progress = get_or_create_progress(session, user_id)
    session.commit()
    character = character_for(progress.current_level)
    return ProgressResponse(
        user_id=user_id,
        solved_exercise_ids=sorted(get_solved_ids(session, user_id)),
        total_solved=progress.total_solved,
        current_level=progress.current_level,
        to_next_level=to_next_level(progress.total_solved),
        streak_days=compute_streak(get_activity(session, user_id), today_utc()),
        last_activity_at=progress.last_activity_at,
        character=CharacterResponse(name=character.name, emoji=character.emoji),
    )


@router.get("", response_model=ProgressResponse)
async def get_progress(
    user_id: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """Get level, character, streak and solved exercises."""
    return _progress_response(session, user_id or settings.default_user_id)


@router.get("/calendar", response_model=CalendarResponse)
async def get_calendar(
    user_id: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """Get the activity calendar for the last 12 weeks, oldest day first."""
    activity = get_activity(session, user_id or settings.default_user_id)
    days = build_calendar(activity, today_utc())
    return CalendarResponse(days=[CalendarDay(**day) for day in days])


@router.post("/reset", response_model=ProgressResponse)
async def reset_progress(
    user_id: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """Reset all progress, including the activity calendar."""
    user_id = user_id or settings.default_user_id
    reset_all_progress(session, user_id)
    return _progress_response(session, user_id)
