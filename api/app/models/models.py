"""
Models module - re-exports all models.

Keeps imports like:
    from app.models.models import Exercise

working alongside the per-model modules of the models package.
"""
from app.models.enums import Difficulty, FilterMode, QuestionOrder, SessionState
from app.models.folder import Folder
from app.models.category import Category
from app.models.exercise import Exercise
from app.models.progress import Progress, SolvedExercise, DailyActivity
from app.models.practice_settings import PracticeSettings

__all__ = [
    'Difficulty',
    'FilterMode',
    'QuestionOrder',
    'SessionState',
    'Folder',
    'Category',
    'Exercise',
    'Progress',
    'SolvedExercise',
    'DailyActivity',
    'PracticeSettings',
]
