"""
AI chat schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Literal, Optional

from app.schemas.exercise import ExerciseResponse


class ChatMessage(BaseModel):
    """One message of the conversation with the exercise assistant."""
    role: Literal["user", "assistant"]
    content: str


class AIChatRequest(BaseModel):
    """Request for the AI chat endpoint - the whole conversation so far."""
    messages: List[ChatMessage] = Field(..., min_length=1)

    class Config:
        json_schema_extra = {
            "example": {
                "messages": [
                    {"role": "user", "content": "I want to practise clicking buttons"}
                ]
            }
        }


class AIChatResponse(BaseModel):
    """Assistant reply, with the exercise it created if it called the tool."""
    role: Literal["assistant"] = "assistant"
    content: str
    exercise: Optional[ExerciseResponse] = None
