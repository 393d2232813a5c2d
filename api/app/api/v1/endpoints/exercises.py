"""
Exercises endpoint.
"""
# pyright: reportAttributeAccessIssue=false
from fastapi import APIRouter, Body, Depends, status
from sqlmodel import Session
from typing import Any, List, Optional
import logging

from app.core.database import get_session
from app.schemas.exercise import (
    CreateExerciseRequest,
    UpdateExerciseRequest,
    ExerciseResponse,
    ExercisesResponse,
    ImportExercisesResponse,
)
from app.services import exercise_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/exercises", tags=["exercises"])


@router.get("", response_model=ExercisesResponse)
async def get_exercises(
    folder_id: Optional[str] = None,
    category: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """Get exercises in pool order, optionally filtered by folder or category."""
    exercises = exercise_service.list_exercises(session, folder_id=folder_id, category=category)
    return ExercisesResponse(
        exercises=[ExerciseResponse.model_validate(exercise) for exercise in exercises]
    )


@router.post("", response_model=ExerciseResponse, status_code=status.HTTP_201_CREATED)
async def create_exercise(
    request: CreateExerciseRequest,
    session: Session = Depends(get_session)
):
    """Create an exercise. Solved progress and levels are reset; the calendar is kept."""
    exercise = exercise_service.create_exercise(session, request)
    return ExerciseResponse.model_validate(exercise)


@router.get("/export", response_model=List[ExerciseResponse])
async def export_exercises(session: Session = Depends(get_session)):
    """Export every exercise as a JSON list that the import endpoint accepts."""
    exercises = exercise_service.export_exercises(session)
    return [ExerciseResponse.model_validate(exercise) for exercise in exercises]


@router.post("/import", response_model=ImportExercisesResponse, status_code=status.HTTP_201_CREATED)
async def import_exercises(
    records: Any = Body(...),
    session: Session = Depends(get_session)
):
    """
    Import a JSON list of exercises.

    Every record needs a title, description, expected answer, hints list,
    difficulty and category; one bad record rejects the whole file. Imported
    exercises get new identifiers and solved progress is reset.
    """
    imported = exercise_service.import_exercises(session, records)
    return ImportExercisesResponse(
        message=f"Imported {len(imported)} exercise(s) and reset solved progress",
        imported_count=len(imported),
        exercises=[ExerciseResponse.model_validate(exercise) for exercise in imported],
    )


@router.get("/{exercise_id}", response_model=ExerciseResponse)
async def get_exercise(
    exercise_id: str,
    session: Session = Depends(get_session)
):
    """Get an exercise by ID."""
    return ExerciseResponse.model_validate(exercise_service.get_exercise(session, exercise_id))


@router.put("/{exercise_id}", response_model=ExerciseResponse)
async def update_exercise(
    exercise_id: str,
    request: UpdateExerciseRequest,
    session: Session = Depends(get_session)
):
    """Update an exercise by ID."""
    exercise = exercise_service.update_exercise(session, exercise_id, request)
    return ExerciseResponse.model_validate(exercise)


@router.delete("/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_exercise(
    exercise_id: str,
    session: Session = Depends(get_session)
):
    """Delete an exercise. Solved progress and levels are reset; the calendar is kept."""
    exercise_service.delete_exercise(session, exercise_id)
