"""
Session selection service.

Builds the ordered exercise list for one practice session in three strict
stages: filter, order, truncate. Each stage is a plain function so ordering
strategies can be swapped without touching filtering.
"""
import logging
import random
from dataclasses import dataclass, field
from typing import AbstractSet, Callable, Dict, List, Optional, Protocol, Sequence, TypeVar, Union

from app.models.enums import FilterMode, QuestionOrder

logger = logging.getLogger(__name__)

# Number of exercises in one practice session
SESSION_SIZE = 5


class SelectableExercise(Protocol):
    id: str
    difficulty: int
    category: str
    folder_id: str


E = TypeVar("E", bound=SelectableExercise)


@dataclass(frozen=True)
class SessionFilter:
    """Narrowing criteria for a session.

    An empty ``values`` tuple lets the whole pool through.
    """
    mode: FilterMode = FilterMode.FOLDER
    values: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def all(cls) -> "SessionFilter":
        return cls()


def order_name(order: Union[QuestionOrder, str]) -> str:
    return order.value if isinstance(order, QuestionOrder) else str(order)


def filter_exercises(pool: Sequence[E], session_filter: SessionFilter) -> List[E]:
    """Keep exercises whose folder or category is one of the filter values."""
    if not session_filter.values:
        return list(pool)

    wanted = set(session_filter.values)
    if session_filter.mode == FilterMode.CATEGORY:
        return [exercise for exercise in pool if exercise.category in wanted]
    return [exercise for exercise in pool if exercise.folder_id in wanted]


def _partition(exercises: List[E], solved_ids: AbstractSet[str], solved_first: bool) -> List[E]:
    solved = [exercise for exercise in exercises if exercise.id in solved_ids]
    unsolved = [exercise for exercise in exercises if exercise.id not in solved_ids]
    return solved + unsolved if solved_first else unsolved + solved


def _shuffled(exercises: List[E], rng: random.Random) -> List[E]:
    shuffled = list(exercises)
    rng.shuffle(shuffled)
    return shuffled


def order_exercises(
    exercises: Sequence[E],
    solved_ids: AbstractSet[str],
    order: Union[QuestionOrder, str],
    rng: Optional[random.Random] = None,
) -> List[E]:
    """
    Order exercises according to a strategy.

    Partitions and sorts are stable, so ties keep their pool order. An
    unrecognized strategy returns the pool order unchanged.

    Args:
        exercises: Filtered exercises
        solved_ids: Identifiers of exercises already solved
        order: Ordering strategy (enum member or its string value)
        rng: Random source for the random strategy. An unseeded instance is
             used when omitted, so every call may yield a different order.

    Returns:
        A new, ordered list
    """
    exercises = list(exercises)
    try:
        strategy = QuestionOrder(order)
    except ValueError:
        logger.info("Unknown question order %r, keeping pool order", order)
        return exercises

    strategies: Dict[QuestionOrder, Callable[[], List[E]]] = {
        QuestionOrder.RANDOM: lambda: _shuffled(exercises, rng or random.Random()),
        QuestionOrder.UNLEARNED_FIRST: lambda: _partition(exercises, solved_ids, solved_first=False),
        QuestionOrder.LEARNED_FIRST: lambda: _partition(exercises, solved_ids, solved_first=True),
        QuestionOrder.EASY_FIRST: lambda: sorted(exercises, key=lambda e: e.difficulty),
        QuestionOrder.HARD_FIRST: lambda: sorted(exercises, key=lambda e: -e.difficulty),
    }
    return strategies[strategy]()


def select_session(
    pool: Sequence[E],
    solved_ids: AbstractSet[str],
    session_filter: SessionFilter,
    order: Union[QuestionOrder, str],
    session_size: int = SESSION_SIZE,
    rng: Optional[random.Random] = None,
) -> List[E]:
    """
    Select the exercises for one practice session.

    Args:
        pool: Every exercise available to the user
        solved_ids: Identifiers of previously solved exercises
        session_filter: Folder or category narrowing
        order: Ordering strategy applied to the filtered subset
        session_size: Maximum number of exercises returned
        rng: Optional random source for the random strategy

    Returns:
        At most session_size exercises. An empty list means nothing matched;
        the caller decides whether to start a session.
    """
    filtered = filter_exercises(pool, session_filter)
    ordered = order_exercises(filtered, solved_ids, order, rng=rng)
    return ordered[:max(session_size, 0)]
