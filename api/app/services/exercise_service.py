"""
Exercise service - CRUD, import/export and the built-in sample exercises.

Any change to the exercise set (add, import, delete) resets solved progress
and levels for every user; the activity calendar is kept.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlmodel import Session, select

from app.core.exceptions import NotFoundError, ValidationError
from app.models.models import Exercise, Folder
from app.models.folder import DEFAULT_FOLDER_ID
from app.schemas.exercise import ExerciseData, UpdateExerciseRequest
from app.schemas.utils import clean_string_list
from app.services.category_service import register_category
from app.services.folder_service import ensure_default_folder
from app.services.progress_service import reset_solved_progress

logger = logging.getLogger(__name__)


SAMPLE_EXERCISES = [
    {
        "id": "sample-1",
        "title": "Basic element selection",
        "description": "Select the button element on the page and click it.",
        "expected_answer": "await page.locator('button').click();",
        "alternative_answers": ["page.locator('button').click();", "await page.click('button');"],
        "hints": [
            "Use page.locator() to select the element",
            "Pass \"button\" as the selector",
            "Call click() to click it",
        ],
        "difficulty": 1,
        "category": "Selecting elements",
    },
    {
        "id": "sample-2",
        "title": "Select by ID",
        "description": "Click the element with id=\"submit-btn\".",
        "expected_answer": "await page.locator('#submit-btn').click();",
        "alternative_answers": ["page.locator('#submit-btn').click();", "await page.click('#submit-btn');"],
        "hints": ["ID selectors start with #", "The ID is submit-btn", "Pass the selector to locator()"],
        "difficulty": 1,
        "category": "Selecting elements",
    },
    {
        "id": "sample-3",
        "title": "Text input",
        "description": "Type \"Hello World\" into the input element.",
        "expected_answer": "await page.locator('input').fill('Hello World');",
        "alternative_answers": [
            "page.locator('input').fill('Hello World');",
            "await page.fill('input', 'Hello World');",
        ],
        "hints": [
            "Use fill() to enter text",
            "Select the input field with locator()",
            "Pass the text as a string",
        ],
        "difficulty": 2,
        "category": "Actions",
    },
    {
        "id": "sample-4",
        "title": "Wait for an element to hide",
        "description": "Wait until the .loading element is hidden.",
        "expected_answer": "await page.locator('.loading').waitFor({ state: 'hidden' });",
        "alternative_answers": [
            "page.locator('.loading').waitFor({ state: 'hidden' });",
            "await page.waitForSelector('.loading', { state: 'hidden' });",
        ],
        "hints": ["Use waitFor()", "state: \"hidden\" waits until it disappears", "Class selectors start with ."],
        "difficulty": 3,
        "category": "Waiting",
    },
    {
        "id": "sample-5",
        "title": "Assertion",
        "description": "Assert that the h1 element has the text \"Welcome\".",
        "expected_answer": "await expect(page.locator('h1')).toHaveText('Welcome');",
        "alternative_answers": [
            "expect(page.locator('h1')).toHaveText('Welcome');",
            "await expect(page.locator('h1')).toContainText('Welcome');",
        ],
        "hints": ["Use expect() with toHaveText()", "Select the h1 element", "Check the text content"],
        "difficulty": 2,
        "category": "Assertions",
    },
]


def seed_sample_exercises(session: Session) -> int:
    """Insert the sample exercises when the exercise table is empty."""
    if session.exec(select(Exercise.id).limit(1)).first() is not None:
        return 0

    ensure_default_folder(session)
    # Distinct timestamps keep the pool order stable
    base_time = datetime.now(timezone.utc)
    for offset, record in enumerate(SAMPLE_EXERCISES):
        created_at = base_time + timedelta(microseconds=offset)
        register_category(session, record["category"])
        session.add(Exercise(**record, created_at=created_at, updated_at=created_at))

    session.commit()
    logger.info("Seeded %s sample exercises", len(SAMPLE_EXERCISES))
    return len(SAMPLE_EXERCISES)


# ============================================================================
# Queries
# ============================================================================

def list_exercises(
    session: Session,
    folder_id: Optional[str] = None,
    category: Optional[str] = None,
) -> List[Exercise]:
    query = select(Exercise)
    if folder_id is not None:
        query = query.where(Exercise.folder_id == folder_id)
    if category is not None:
        query = query.where(Exercise.category == category)
    query = query.order_by(Exercise.created_at, Exercise.id)
    return list(session.exec(query).all())


def get_exercise(session: Session, exercise_id: str) -> Exercise:
    exercise = session.get(Exercise, exercise_id)
    if exercise is None:
        raise NotFoundError(f"Exercise {exercise_id} not found")
    return exercise


def _require_folder(session: Session, folder_id: str) -> None:
    if folder_id == DEFAULT_FOLDER_ID:
        ensure_default_folder(session)
        return
    if session.get(Folder, folder_id) is None:
        raise ValidationError(f"Folder {folder_id} does not exist")


# ============================================================================
# Mutations
# ============================================================================

def add_exercise(session: Session, data: ExerciseData, reset_progress: bool = True) -> Exercise:
    """Insert an exercise without committing."""
    _require_folder(session, data.folder_id)
    register_category(session, data.category)

    exercise = Exercise(
        title=data.title,
        description=data.description,
        expected_answer=data.expected_answer,
        alternative_answers=list(data.alternative_answers),
        hints=list(data.hints),
        difficulty=data.difficulty,
        category=data.category,
        folder_id=data.folder_id,
    )
    session.add(exercise)
    session.flush()

    if reset_progress:
        reset_solved_progress(session)
    return exercise


def create_exercise(session: Session, data: ExerciseData) -> Exercise:
    """
    Create an exercise and reset solved progress.

    Args:
        session: Database session
        data: Validated exercise fields

    Returns:
        The created Exercise

    Raises:
        ValidationError: If the folder does not exist
    """
    exercise = add_exercise(session, data)
    session.commit()
    session.refresh(exercise)
    logger.info("Created exercise %s ('%s')", exercise.id, exercise.title)
    return exercise


def update_exercise(session: Session, exercise_id: str, data: UpdateExerciseRequest) -> Exercise:
    """Apply a partial update. Editing does not reset progress."""
    exercise = get_exercise(session, exercise_id)

    for field_name in ("title", "description", "category"):
        value = getattr(data, field_name)
        if value is not None:
            if not value.strip():
                raise ValidationError(f"{field_name} must not be empty")
            setattr(exercise, field_name, value.strip())

    if data.expected_answer is not None:
        if not data.expected_answer.strip():
            raise ValidationError("expected_answer must not be empty")
        exercise.expected_answer = data.expected_answer
    if data.alternative_answers is not None:
        exercise.alternative_answers = clean_string_list(data.alternative_answers)
    if data.hints is not None:
        exercise.hints = clean_string_list(data.hints)
    if data.difficulty is not None:
        exercise.difficulty = data.difficulty
    if data.folder_id is not None:
        _require_folder(session, data.folder_id)
        exercise.folder_id = data.folder_id

    register_category(session, exercise.category)
    exercise.updated_at = datetime.now(timezone.utc)
    session.add(exercise)
    session.commit()
    session.refresh(exercise)
    return exercise


def delete_exercise(session: Session, exercise_id: str) -> None:
    exercise = get_exercise(session, exercise_id)
    session.delete(exercise)
    reset_solved_progress(session)
    session.commit()
    logger.info("Deleted exercise %s", exercise_id)


# ============================================================================
# Import / export
# ============================================================================

def parse_import_records(records: Any) -> List[ExerciseData]:
    """
    Validate an import payload.

    The payload must be a list of records, each with a title, description,
    expected answer, list of hints, difficulty and category. A single bad
    record rejects the whole import.

    Raises:
        ValidationError: If the payload or any record is malformed
    """
    if not isinstance(records, list):
        raise ValidationError("Import file must contain a JSON list of exercises")

    parsed = []
    for index, record in enumerate(records):
        if not isinstance(record, dict) or not isinstance(record.get("hints"), list):
            raise ValidationError(f"Record {index} is not a valid exercise")
        if record.get("difficulty") is None:
            raise ValidationError(f"Record {index} is missing a difficulty")
        try:
            parsed.append(ExerciseData.model_validate(record))
        except PydanticValidationError as exc:
            raise ValidationError(f"Record {index} is not a valid exercise: {exc.errors()[0]['msg']}") from exc
    return parsed


def import_exercises(session: Session, records: Any) -> List[Exercise]:
    """
    Import exercises with fresh identifiers and timestamps.

    Unknown folder ids fall back to the reserved folder. Solved progress is
    reset once for the whole batch.
    """
    parsed = parse_import_records(records)
    if not parsed:
        raise ValidationError("Import file contains no exercises")

    ensure_default_folder(session)
    known_folders = set(session.exec(select(Folder.id)).all())

    base_time = datetime.now(timezone.utc)
    imported = []
    for offset, data in enumerate(parsed):
        if data.folder_id not in known_folders:
            data = data.model_copy(update={"folder_id": DEFAULT_FOLDER_ID})
        exercise = add_exercise(session, data, reset_progress=False)
        exercise.created_at = exercise.updated_at = base_time + timedelta(microseconds=offset)
        imported.append(exercise)

    reset_solved_progress(session)
    session.commit()
    for exercise in imported:
        session.refresh(exercise)

    logger.info("Imported %s exercises", len(imported))
    return imported


def export_exercises(session: Session) -> List[Exercise]:
    return list_exercises(session)
