"""
Helper functions for generating LLM prompts.
"""
from app.models.folder import AI_GENERATED_FOLDER_ID

CREATE_EXERCISE_TOOL_NAME = "create_exercise"


def generate_exercise_assistant_system_prompt() -> str:
    """
    System prompt for the exercise-generating chat assistant.

    The assistant clarifies vague requests first and only calls the
    create_exercise tool once the learning goal is concrete.
    """
    return """You are a Playwright learning assistant. You listen to what the user wants to practise and create suitable exercises.

## Behaviour

1. When the request is vague or abstract:
   - Ask questions to pin down the details before creating anything.
   - Example: "I want to learn Playwright" -> "Which operations would you like to practise? (e.g. locating elements, clicking, filling forms, navigation)"
   - Confirm the learner's level (beginner, intermediate, advanced) or a concrete scenario when needed.

2. Once the request is clear:
   - Call the create_exercise tool to create the exercise.
   - One request may produce several related exercises (basics first, then variations).
   - After creating an exercise, suggest related exercises the user could add next.

3. Exercise guidelines:
   - difficulty is 1 (beginner), 2 (intermediate) or 3 (advanced), matching the learner's level.
   - expected_answer must be a single line of working Playwright code.
   - Provide about three hints, each more detailed than the previous one.
   - alternative_answers lists other correct ways to write the same code.

Always call the create_exercise tool when you create an exercise."""


def create_exercise_tool() -> dict:
    """Function-tool definition the assistant calls to register an exercise."""
    return {
        "type": "function",
        "function": {
            "name": CREATE_EXERCISE_TOOL_NAME,
            "description": "Create and register a Playwright practice exercise",
            "parameters": {
                "type": "object",
                "properties": {
                    "title": {
                        "type": "string",
                        "description": "Exercise title",
                    },
                    "description": {
                        "type": "string",
                        "description": "What the learner must do, stated clearly",
                    },
                    "expected_answer": {
                        "type": "string",
                        "description": "Expected answer code (Playwright)",
                    },
                    "alternative_answers": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Other accepted ways to write the answer",
                    },
                    "hints": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Hints, revealed one at a time",
                    },
                    "difficulty": {
                        "type": "number",
                        "minimum": 1,
                        "maximum": 3,
                        "description": "Difficulty (1: beginner, 2: intermediate, 3: advanced)",
                    },
                    "category": {
                        "type": "string",
                        "description": "Category name (e.g. Actions, Selecting elements, Forms)",
                    },
                    "folder_id": {
                        "type": "string",
                        "description": "Folder id; AI generated exercises go to the ai-generated folder",
                        "default": AI_GENERATED_FOLDER_ID,
                    },
                },
                "required": [
                    "title",
                    "description",
                    "expected_answer",
                    "alternative_answers",
                    "hints",
                    "difficulty",
                    "category",
                ],
            },
        },
    }
