"""
AI chat endpoint - the exercise-generating assistant.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.database import get_session
from app.schemas.chat import AIChatRequest, AIChatResponse
from app.schemas.exercise import ExerciseResponse
from app.services.generation_service import chat_with_assistant

router = APIRouter(prefix="/ai-chat", tags=["ai-chat"])


@router.post("", response_model=AIChatResponse)
async def ai_chat(
    request: AIChatRequest,
    session: Session = Depends(get_session)
):
    """
    Send the conversation to the assistant.

    When the assistant creates an exercise it is stored in the ai-generated
    folder and returned with the reply.
    """
    result = chat_with_assistant(
        session,
        [message.model_dump() for message in request.messages],
    )
    return AIChatResponse(
        content=result.content,
        exercise=ExerciseResponse.model_validate(result.exercise) if result.exercise else None,
    )
