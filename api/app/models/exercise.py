"""
Exercise model.
"""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, JSON
from typing import List, Optional, TYPE_CHECKING
from datetime import datetime, timezone
import uuid

from app.models.folder import DEFAULT_FOLDER_ID

if TYPE_CHECKING:
    from app.models.folder import Folder


def new_exercise_id() -> str:
    return uuid.uuid4().hex


class Exercise(SQLModel, table=True):
    """Exercise table - a graded prompt with one canonical and N alternative answers."""
    __tablename__ = "exercise"

    id: str = Field(default_factory=new_exercise_id, primary_key=True)
    title: str
    description: str
    expected_answer: str
    alternative_answers: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    hints: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))  # Revealed one at a time
    difficulty: int = Field(default=1)  # 1 = beginner, 2 = intermediate, 3 = advanced
    category: str = Field(index=True)
    folder_id: str = Field(default=DEFAULT_FOLDER_ID, foreign_key="folder.id", index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Relationships
    folder: Optional["Folder"] = Relationship(back_populates="exercises")
