"""
Practice session schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from app.models.enums import FilterMode, QuestionOrder, SessionState


class SessionFilterConfig(BaseModel):
    """Folder or category narrowing for a session. Empty values select everything."""
    mode: FilterMode = FilterMode.FOLDER
    values: List[str] = []


class StartSessionRequest(BaseModel):
    """Request to start a practice session."""
    user_id: Optional[str] = None  # Defaults to the configured single user
    filter: SessionFilterConfig = Field(default_factory=SessionFilterConfig)
    # Unrecognized strategies keep pool order
    order: str = Field(QuestionOrder.UNLEARNED_FIRST.value, description="random, unlearned-first, learned-first, easy-first or hard-first")

    class Config:
        json_schema_extra = {
            "example": {
                "filter": {"mode": "folder", "values": ["default"]},
                "order": "unlearned-first"
            }
        }


class SubmitAnswerRequest(BaseModel):
    """Submitted code for the current exercise."""
    answer: str


class SessionExercise(BaseModel):
    """Exercise as shown during practice - no answers."""
    id: str
    title: str
    description: str
    difficulty: int
    category: str
    folder_id: str
    hint_count: int


class SessionResponse(BaseModel):
    """Snapshot of a practice session."""
    id: str
    state: SessionState
    current_index: int
    total: int
    started_at: Optional[datetime] = None
    is_advancing: bool = Field(False, description="A correct answer was given and the next exercise is pending")
    current_exercise: Optional[SessionExercise] = None
    revealed_hints: List[str] = []
    answers_shown: List[str] = []
    filter: SessionFilterConfig
    order: str


class SubmitAnswerResponse(BaseModel):
    """Result of an answer submission."""
    accepted: bool = Field(..., description="False when the session ignored the submission")
    correct: bool
    credited: bool
    session: SessionResponse


class HintResponse(BaseModel):
    """Result of a hint request."""
    hint: Optional[str] = None
    session: SessionResponse


class RevealResponse(BaseModel):
    """Result of revealing the answer."""
    expected_answer: Optional[str] = None
    session: SessionResponse
