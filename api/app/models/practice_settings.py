"""
PracticeSettings model.
"""
from sqlmodel import SQLModel, Field
from datetime import datetime, timezone


class PracticeSettings(SQLModel, table=True):
    """PracticeSettings table - global answer normalization toggles per user."""
    __tablename__ = "practice_settings"

    user_id: str = Field(primary_key=True)
    normalize_quotes: bool = Field(default=True)  # Treat ' and " as the same quote
    normalize_spaces: bool = Field(default=True)  # Ignore all whitespace
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
