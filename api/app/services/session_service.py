"""
Session service - starts practice sessions and keeps the live ones in memory.

Sessions are ephemeral: a process restart loses them, and each user has at
most one live session. Starting a new one closes the previous session so its
pending advance never fires.
"""
import logging
import random
from typing import Dict, Optional, Union

from sqlmodel import Session, select

from app.core.config import settings
from app.core.exceptions import NotFoundError, ValidationError
from app.models.models import Exercise
from app.models.enums import QuestionOrder
from app.services.practice_session import PracticeSession, Scheduler, asyncio_scheduler
from app.services.progress_service import get_solved_ids
from app.services.selection_service import SessionFilter, order_name, select_session

logger = logging.getLogger(__name__)


class SessionRegistry:
    """In-memory owner of live practice sessions, one per user.

    Holds at most max_sessions sessions. Starting one more evicts a completed
    session if there is any, otherwise the oldest.
    """

    def __init__(self, scheduler: Scheduler = asyncio_scheduler, max_sessions: Optional[int] = None):
        self._scheduler = scheduler
        self._max_sessions = max(max_sessions if max_sessions is not None else settings.max_live_sessions, 1)
        self._sessions: Dict[str, PracticeSession] = {}
        self._owners: Dict[str, str] = {}  # session id -> user id
        self._by_user: Dict[str, str] = {}  # user id -> session id

    def __len__(self) -> int:
        return len(self._sessions)

    def start(
        self,
        user_id: str,
        exercises: list,
        session_filter: SessionFilter,
        order: Union[QuestionOrder, str],
        advance_delay: float,
    ) -> PracticeSession:
        """Create and start a session for a user, replacing any live one."""
        self.discard_for_user(user_id)
        self._make_room()

        practice_session = PracticeSession(
            exercises,
            session_filter=session_filter,
            order=order,
            advance_delay=advance_delay,
            scheduler=self._scheduler,
        )
        practice_session.start()

        self._sessions[practice_session.id] = practice_session
        self._owners[practice_session.id] = user_id
        self._by_user[user_id] = practice_session.id
        return practice_session

    def get(self, session_id: str) -> Optional[PracticeSession]:
        return self._sessions.get(session_id)

    def owner_of(self, session_id: str) -> Optional[str]:
        return self._owners.get(session_id)

    def discard(self, session_id: str) -> bool:
        """Close and forget a session. Returns False if it was not live."""
        practice_session = self._sessions.pop(session_id, None)
        if practice_session is None:
            return False
        practice_session.close()
        user_id = self._owners.pop(session_id, None)
        if user_id is not None and self._by_user.get(user_id) == session_id:
            del self._by_user[user_id]
        return True

    def discard_for_user(self, user_id: str) -> None:
        session_id = self._by_user.get(user_id)
        if session_id is not None:
            self.discard(session_id)

    def clear(self) -> None:
        for session_id in list(self._sessions):
            self.discard(session_id)

    def _make_room(self) -> None:
        while len(self._sessions) >= self._max_sessions:
            # Dicts keep insertion order, so the first match is the oldest
            victim = next(
                (sid for sid, live in self._sessions.items() if live.is_completed()),
                next(iter(self._sessions)),
            )
            logger.info("Evicting session %s (registry full)", victim)
            self.discard(victim)


# Process-wide registry used by the API
registry = SessionRegistry()


def start_practice_session(
    session: Session,
    user_id: str,
    session_filter: SessionFilter,
    order: Union[QuestionOrder, str],
    registry: SessionRegistry = registry,
    rng: Optional[random.Random] = None,
) -> PracticeSession:
    """
    Select exercises and start a session for a user.

    Args:
        session: Database session
        user_id: Owner of the progress used for ordering
        session_filter: Folder or category narrowing
        order: Ordering strategy
        registry: Registry that owns the live session
        rng: Optional random source for the random strategy

    Returns:
        The started PracticeSession

    Raises:
        ValidationError: If no exercise matches the filter
    """
    pool = session.exec(select(Exercise).order_by(Exercise.created_at, Exercise.id)).all()
    solved_ids = get_solved_ids(session, user_id)

    selected = select_session(
        pool,
        solved_ids,
        session_filter,
        order,
        session_size=settings.session_size,
        rng=rng,
    )
    if not selected:
        raise ValidationError("No exercises match the selected filter")

    # Detach from the DB session; the practice session outlives the request
    for exercise in selected:
        session.expunge(exercise)

    practice_session = registry.start(
        user_id,
        selected,
        session_filter=session_filter,
        order=order,
        advance_delay=settings.advance_delay_seconds,
    )
    logger.info(
        "Started session %s for user %s: mode=%s, values=%s, order=%s",
        practice_session.id, user_id, session_filter.mode.value, list(session_filter.values), order_name(order),
    )
    return practice_session


def get_live_session(session_id: str, registry: SessionRegistry = registry) -> PracticeSession:
    """Look up a live session or raise NotFoundError."""
    practice_session = registry.get(session_id)
    if practice_session is None:
        raise NotFoundError(f"Session {session_id} not found")
    return practice_session
