"""
Models package - imports all models so they register with SQLModel.
"""
# Import enums first
from app.models.enums import Difficulty, FilterMode, QuestionOrder, SessionState

# Import all models
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
