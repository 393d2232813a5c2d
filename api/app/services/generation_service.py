"""
AI exercise generation service.

Forwards the chat to the LLM with the create_exercise tool. When the model
calls the tool, the arguments are validated and stored as a new exercise in
the ai-generated folder.
"""
import json
import logging
from dataclasses import dataclass
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlmodel import Session

from app.services.llm_helpers import call_chat_completions, parse_tool_arguments
from app.services.prompt_helpers import (
    CREATE_EXERCISE_TOOL_NAME,
    create_exercise_tool,
    generate_exercise_assistant_system_prompt,
)
from app.core.exceptions import UpstreamError
from app.models.models import Exercise
from app.models.folder import AI_GENERATED_FOLDER_ID
from app.schemas.exercise import ExerciseData
from app.services.exercise_service import add_exercise
from app.services.folder_service import ensure_ai_generated_folder

logger = logging.getLogger(__name__)


@dataclass
class ChatResult:
    content: str
    exercise: Optional[Exercise] = None


def chat_with_assistant(session: Session, messages: List[dict]) -> ChatResult:
    """
    Run one assistant turn.

    Args:
        session: Database session
        messages: Conversation so far, oldest first

    Returns:
        ChatResult with the assistant text and the created exercise, if any

    Raises:
        UpstreamError: If the LLM call fails or its tool arguments are invalid
    """
    logger.info(f"AI chat - received {len(messages)} message(s)")
    message, token_usage = call_chat_completions(
        messages,
        system_prompt=generate_exercise_assistant_system_prompt(),
        tools=[create_exercise_tool()],
    )
    logger.info(f"AI chat completed. Tokens: {token_usage['total_tokens']}, Cost: ${token_usage['cost_usd']:.6f}")

    content = message.get("content") or ""
    tool_calls = message.get("tool_calls") or []
    tool_call = next(
        (call for call in tool_calls if call.get("function", {}).get("name") == CREATE_EXERCISE_TOOL_NAME),
        None,
    )
    if tool_call is None:
        return ChatResult(content=content)

    arguments = parse_tool_arguments(tool_call)
    # Generated exercises always land in the ai-generated folder
    arguments["folder_id"] = AI_GENERATED_FOLDER_ID
    try:
        data = ExerciseData.model_validate(arguments)
    except PydanticValidationError as e:
        logger.error(f"LLM tool arguments failed validation: {str(e)}")
        logger.error(f"Tool arguments: {json.dumps(arguments, indent=2, ensure_ascii=False)}")
        raise UpstreamError(f"Invalid exercise from LLM: {str(e)}") from e

    ensure_ai_generated_folder(session)
    exercise = add_exercise(session, data)
    session.commit()
    session.refresh(exercise)

    logger.info(f"AI chat - exercise created: {exercise.title}")
    return ChatResult(
        content=content or f"Created the exercise \"{exercise.title}\".",
        exercise=exercise,
    )
