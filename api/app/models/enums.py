"""
Model enums.
"""
from enum import Enum, IntEnum


class Difficulty(IntEnum):
    """Exercise difficulty level."""
    BEGINNER = 1
    INTERMEDIATE = 2
    ADVANCED = 3


class FilterMode(str, Enum):
    """Which exercise attribute a session filter narrows on."""
    FOLDER = "folder"
    CATEGORY = "category"


class QuestionOrder(str, Enum):
    """Ordering strategy for the exercises of a practice session."""
    RANDOM = "random"
    UNLEARNED_FIRST = "unlearned-first"
    LEARNED_FIRST = "learned-first"
    EASY_FIRST = "easy-first"
    HARD_FIRST = "hard-first"


class SessionState(str, Enum):
    """Lifecycle state of a practice session."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
