"""
Practice session endpoints.
"""
# pyright: reportAttributeAccessIssue=false
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
import logging

from app.core.config import settings
from app.core.database import get_session
from app.schemas.session import (
    StartSessionRequest,
    SubmitAnswerRequest,
    SessionResponse,
    SessionExercise,
    SessionFilterConfig,
    SubmitAnswerResponse,
    HintResponse,
    RevealResponse,
)
from app.services.practice_session import PracticeSession
from app.services.progress_service import record_credit
from app.services.selection_service import SessionFilter, order_name
from app.services.session_service import registry, start_practice_session, get_live_session
from app.services.settings_service import get_normalization_options

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


def build_session_response(practice_session: PracticeSession) -> SessionResponse:
    """Snapshot a live session without leaking answers."""
    exercise = practice_session.current_exercise()
    current = None
    if exercise is not None:
        current = SessionExercise(
            id=exercise.id,
            title=exercise.title,
            description=exercise.description,
            difficulty=exercise.difficulty,
            category=exercise.category,
            folder_id=exercise.folder_id,
            hint_count=len(exercise.hints),
        )

    return SessionResponse(
        id=practice_session.id,
        state=practice_session.state,
        current_index=practice_session.current_index,
        total=len(practice_session.exercises),
        started_at=practice_session.started_at,
        is_advancing=practice_session.is_advancing,
        current_exercise=current,
        revealed_hints=practice_session.revealed_hints,
        answers_shown=sorted(practice_session.answers_shown),
        filter=SessionFilterConfig(
            mode=practice_session.session_filter.mode,
            values=list(practice_session.session_filter.values),
        ),
        order=order_name(practice_session.order),
    )


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def start_session(
    request: StartSessionRequest,
    session: Session = Depends(get_session)
):
    """
    Start a practice session.

    Filters the exercise pool by folder or category, orders it with the
    chosen strategy and keeps the first exercises up to the session size.
    Any live session of the same user is discarded.
    """
    user_id = request.user_id or settings.default_user_id
    practice_session = start_practice_session(
        session,
        user_id,
        SessionFilter(mode=request.filter.mode, values=tuple(request.filter.values)),
        request.order,
    )
    return build_session_response(practice_session)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_practice_session(session_id: str):
    """Get the current state of a live session."""
    return build_session_response(get_live_session(session_id))


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def discard_session(session_id: str):
    """Discard a session, cancelling any pending advance."""
    get_live_session(session_id)
    registry.discard(session_id)


@router.post("/{session_id}/restart", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def restart_session(
    session_id: str,
    session: Session = Depends(get_session)
):
    """Start a new session with the same filter and order as an existing one."""
    previous = get_live_session(session_id)
    user_id = registry.owner_of(session_id) or settings.default_user_id
    practice_session = start_practice_session(
        session,
        user_id,
        previous.session_filter,
        previous.order,
    )
    return build_session_response(practice_session)


@router.post("/{session_id}/submit", response_model=SubmitAnswerResponse)
async def submit_answer(
    session_id: str,
    request: SubmitAnswerRequest,
    session: Session = Depends(get_session)
):
    """
    Submit an answer for the current exercise.

    A correct answer is credited to progress unless its answer was revealed
    in this session. Submissions to a completed session are ignored.
    """
    practice_session = get_live_session(session_id)
    user_id = registry.owner_of(session_id) or settings.default_user_id

    options = get_normalization_options(session, user_id)
    outcome = practice_session.submit_answer(request.answer, options)

    credited = outcome.credited
    if credited and outcome.exercise_id is not None:
        credited = record_credit(session, user_id, outcome.exercise_id) is not None

    return SubmitAnswerResponse(
        accepted=outcome.accepted,
        correct=outcome.correct,
        credited=credited,
        session=build_session_response(practice_session),
    )


@router.post("/{session_id}/hint", response_model=HintResponse)
async def request_hint(session_id: str):
    """Reveal the next hint of the current exercise."""
    practice_session = get_live_session(session_id)
    hint = practice_session.request_hint()
    return HintResponse(hint=hint, session=build_session_response(practice_session))


@router.post("/{session_id}/reveal", response_model=RevealResponse)
async def reveal_answer(session_id: str):
    """Show the expected answer. The exercise no longer earns credit in this session."""
    practice_session = get_live_session(session_id)
    expected_answer = practice_session.reveal_answer()
    return RevealResponse(
        expected_answer=expected_answer,
        session=build_session_response(practice_session),
    )
