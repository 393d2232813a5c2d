"""
Category model.
"""
from sqlmodel import SQLModel, Field
from datetime import datetime, timezone


class Category(SQLModel, table=True):
    """Category registry - names offered in the selection UI, used or not."""
    __tablename__ = "category"

    name: str = Field(primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
