"""
Practice settings schemas.
"""
from pydantic import BaseModel
from typing import Optional


class PracticeSettingsResponse(BaseModel):
    """Global answer normalization options."""
    normalize_quotes: bool
    normalize_spaces: bool

    class Config:
        from_attributes = True


class UpdatePracticeSettingsRequest(BaseModel):
    """Request schema for changing normalization options."""
    normalize_quotes: Optional[bool] = None
    normalize_spaces: Optional[bool] = None
