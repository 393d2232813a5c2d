"""
Practice session state machine.

A session walks through an ordered list of exercises:
NOT_STARTED -> IN_PROGRESS -> COMPLETED. Operations on a session that is not
in progress are no-ops reported through their return values, never errors.

After a correct answer the session advances after a short display delay. The
advance is a cancelable task owned by the session, so closing or replacing a
session never lets a stale timer mutate it.
"""
import asyncio
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Generic, List, Optional, Protocol, Sequence, TypeVar, Union

from app.models.enums import QuestionOrder, SessionState
from app.services.answer_service import NormalizationOptions, is_correct
from app.services.selection_service import SessionFilter

logger = logging.getLogger(__name__)


class PracticeExercise(Protocol):
    id: str
    expected_answer: str
    alternative_answers: Sequence[str]
    hints: Sequence[str]


E = TypeVar("E", bound=PracticeExercise)


class Cancelable(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Runs a callback once after a delay in seconds, returning a cancel handle."""

    def __call__(self, delay: float, callback: Callable[[], None]) -> Cancelable:
        ...


def asyncio_scheduler(delay: float, callback: Callable[[], None]) -> Cancelable:
    """Schedule on the running event loop (the API serves sessions from async endpoints)."""
    return asyncio.get_running_loop().call_later(delay, callback)


@dataclass(frozen=True)
class SubmissionOutcome:
    """Result of submit_answer. A credited outcome is what the progress tracker records.

    Attributes:
        accepted: False when the session ignored the call (not in progress or advancing)
        correct: Whether the answer matched
        credited: Whether the answer counts toward progress
        exercise_id: The graded exercise, if any
    """
    accepted: bool
    correct: bool = False
    credited: bool = False
    exercise_id: Optional[str] = None


IGNORED = SubmissionOutcome(accepted=False)


class PracticeSession(Generic[E]):
    """One practice run over a fixed, ordered list of exercises."""

    def __init__(
        self,
        exercises: Sequence[E],
        session_filter: Optional[SessionFilter] = None,
        order: Union[QuestionOrder, str] = QuestionOrder.UNLEARNED_FIRST,
        advance_delay: float = 2.0,
        scheduler: Scheduler = asyncio_scheduler,
        session_id: Optional[str] = None,
    ):
        self.id = session_id or uuid.uuid4().hex
        self.exercises: List[E] = list(exercises)
        # Criteria kept so the same settings can be replayed
        self.session_filter = session_filter or SessionFilter.all()
        self.order = order
        self.advance_delay = advance_delay
        self.started_at: Optional[datetime] = None
        self.state = SessionState.NOT_STARTED
        self.current_index = 0
        self.hint_index = -1  # -1 means no hint revealed yet
        self.answers_shown: set[str] = set()

        self._scheduler = scheduler
        self._pending_advance: Optional[Cancelable] = None
        self._closed = False

    # ==================== QUERIES ====================

    def current_exercise(self) -> Optional[E]:
        if self.state != SessionState.IN_PROGRESS:
            return None
        return self.exercises[self.current_index]

    def is_completed(self) -> bool:
        return self.state == SessionState.COMPLETED

    @property
    def is_advancing(self) -> bool:
        return self._pending_advance is not None

    @property
    def revealed_hints(self) -> List[str]:
        exercise = self.current_exercise()
        if exercise is None:
            return []
        return list(exercise.hints[:self.hint_index + 1])

    # ==================== TRANSITIONS ====================

    def start(self) -> bool:
        """Enter IN_PROGRESS at the first exercise. Returns False for an empty session."""
        if self.state != SessionState.NOT_STARTED or self._closed or not self.exercises:
            return False
        self.state = SessionState.IN_PROGRESS
        self.started_at = datetime.now(timezone.utc)
        logger.info("Session %s started with %s exercise(s)", self.id, len(self.exercises))
        return True

    def submit_answer(self, text: str, options: NormalizationOptions) -> SubmissionOutcome:
        """
        Grade a submission against the current exercise.

        A correct answer is credited unless the answer was revealed for this
        exercise, then the advance is scheduled. A wrong answer changes nothing.

        Args:
            text: Submitted code
            options: Global normalization options

        Returns:
            SubmissionOutcome describing what happened
        """
        if not self._accepts_actions():
            return IGNORED

        exercise = self.exercises[self.current_index]
        if not is_correct(text, exercise, options):
            return SubmissionOutcome(accepted=True, correct=False, exercise_id=exercise.id)

        credited = exercise.id not in self.answers_shown

        self._schedule_advance()
        return SubmissionOutcome(accepted=True, correct=True, credited=credited, exercise_id=exercise.id)

    def reveal_answer(self) -> Optional[str]:
        """Mark the current exercise as revealed and return its expected answer."""
        if not self._accepts_actions():
            return None
        exercise = self.exercises[self.current_index]
        self.answers_shown.add(exercise.id)
        return exercise.expected_answer

    def request_hint(self) -> Optional[str]:
        """Reveal the next hint, staying on the last one once every hint is shown."""
        if not self._accepts_actions():
            return None
        hints = self.exercises[self.current_index].hints
        if not hints:
            return None
        self.hint_index = min(self.hint_index + 1, len(hints) - 1)
        return hints[self.hint_index]

    def close(self) -> None:
        """Tear the session down, discarding any pending advance."""
        if self._pending_advance is not None:
            self._pending_advance.cancel()
            self._pending_advance = None
        self._closed = True

    # ==================== PRIVATE METHODS ====================

    def _accepts_actions(self) -> bool:
        return (
            self.state == SessionState.IN_PROGRESS
            and not self._closed
            and self._pending_advance is None
        )

    def _schedule_advance(self) -> None:
        if self.advance_delay <= 0:
            self._advance()
            return
        self._pending_advance = self._scheduler(self.advance_delay, self._advance)

    def _advance(self) -> None:
        self._pending_advance = None
        if self._closed or self.state != SessionState.IN_PROGRESS:
            return

        if self.current_index < len(self.exercises) - 1:
            self.current_index += 1
            self.hint_index = -1
            return

        self.state = SessionState.COMPLETED
        logger.info("Session %s completed", self.id)
