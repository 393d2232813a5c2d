"""
Folder model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import List, TYPE_CHECKING
from datetime import datetime, timezone

if TYPE_CHECKING:
    from app.models.exercise import Exercise

# Reserved folder that always exists and receives orphaned exercises
DEFAULT_FOLDER_ID = "default"
DEFAULT_FOLDER_NAME = "Uncategorized"

# Built-in folder for exercises created by the AI generator
AI_GENERATED_FOLDER_ID = "ai-generated"
AI_GENERATED_FOLDER_NAME = "AI Generated"


class Folder(SQLModel, table=True):
    """Folder table for grouping exercises."""
    __tablename__ = "folder"

    id: str = Field(primary_key=True)
    name: str
    description: str = ""
    color: str = "gray"  # Color tag shown in the folder picker
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Relationships
    exercises: List["Exercise"] = Relationship(back_populates="folder")
