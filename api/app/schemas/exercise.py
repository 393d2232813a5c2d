"""
Exercise schemas.
"""
from pydantic import BaseModel, Field, AliasChoices, field_validator
from typing import List, Optional
from datetime import datetime

from app.models.folder import DEFAULT_FOLDER_ID
from app.schemas.utils import clean_string_list


class ExerciseData(BaseModel):
    """Editable exercise fields shared by create, import and AI generation."""
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    expected_answer: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("expected_answer", "expectedCode", "expectedAnswer"),
    )
    alternative_answers: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("alternative_answers", "alternativeAnswers"),
    )
    hints: List[str] = Field(default_factory=list)
    difficulty: int = Field(1, ge=1, le=3, description="1 = beginner, 2 = intermediate, 3 = advanced")
    category: str = Field(..., min_length=1)
    folder_id: str = Field(
        DEFAULT_FOLDER_ID,
        validation_alias=AliasChoices("folder_id", "folderId"),
    )

    @field_validator("title", "description", "category", "folder_id")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("expected_answer")
    @classmethod
    def answer_not_blank(cls, v: str) -> str:
        # Keep the answer verbatim; whitespace may matter when normalization is off
        if not v.strip():
            raise ValueError("expected answer must not be empty")
        return v

    @field_validator("alternative_answers", "hints")
    @classmethod
    def drop_blank_entries(cls, v: List[str]) -> List[str]:
        return clean_string_list(v)

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Click a button",
                "description": "Click the button element on the page.",
                "expected_answer": "await page.locator('button').click();",
                "alternative_answers": ["await page.click('button');"],
                "hints": ["Use page.locator()", "Pass 'button' as the selector", "Finish with click()"],
                "difficulty": 1,
                "category": "Selecting elements",
                "folder_id": "default"
            }
        }


class CreateExerciseRequest(ExerciseData):
    """Request schema for creating an exercise."""
    pass


class UpdateExerciseRequest(BaseModel):
    """Request schema for updating an exercise. Omitted fields stay unchanged."""
    title: Optional[str] = None
    description: Optional[str] = None
    expected_answer: Optional[str] = None
    alternative_answers: Optional[List[str]] = None
    hints: Optional[List[str]] = None
    difficulty: Optional[int] = Field(None, ge=1, le=3)
    category: Optional[str] = None
    folder_id: Optional[str] = None


class ExerciseResponse(BaseModel):
    """Exercise response schema."""
    id: str
    title: str
    description: str
    expected_answer: str
    alternative_answers: List[str] = []
    hints: List[str] = []
    difficulty: int
    category: str
    folder_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ExercisesResponse(BaseModel):
    """Response schema for exercise lists and exports."""
    exercises: List[ExerciseResponse]


class ImportExercisesResponse(BaseModel):
    """Response from an exercise import."""
    message: str
    imported_count: int
    exercises: List[ExerciseResponse]
