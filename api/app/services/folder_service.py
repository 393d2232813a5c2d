"""
Folder service - the folder registry and its reserved default folder.
"""
import logging
import re
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlmodel import Session, select

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.models import Exercise, Folder
from app.models.folder import (
    DEFAULT_FOLDER_ID,
    DEFAULT_FOLDER_NAME,
    AI_GENERATED_FOLDER_ID,
    AI_GENERATED_FOLDER_NAME,
)

logger = logging.getLogger(__name__)


def _slugify(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug or uuid.uuid4().hex[:8]


def ensure_default_folder(session: Session) -> Folder:
    """Create the reserved folder if it is missing."""
    folder = session.get(Folder, DEFAULT_FOLDER_ID)
    if folder is None:
        folder = Folder(
            id=DEFAULT_FOLDER_ID,
            name=DEFAULT_FOLDER_NAME,
            description="Exercises without a folder",
        )
        session.add(folder)
        session.commit()
        session.refresh(folder)
        logger.info("Created reserved folder '%s'", DEFAULT_FOLDER_ID)
    return folder


def ensure_ai_generated_folder(session: Session) -> Folder:
    """Create the folder that receives AI generated exercises if it is missing."""
    folder = session.get(Folder, AI_GENERATED_FOLDER_ID)
    if folder is None:
        folder = Folder(
            id=AI_GENERATED_FOLDER_ID,
            name=AI_GENERATED_FOLDER_NAME,
            description="Exercises created by the AI assistant",
            color="purple",
        )
        session.add(folder)
        session.flush()
    return folder


def list_folders(session: Session) -> List[Folder]:
    ensure_default_folder(session)
    return list(session.exec(select(Folder).order_by(Folder.created_at, Folder.id)).all())


def get_folder(session: Session, folder_id: str) -> Folder:
    folder = session.get(Folder, folder_id)
    if folder is None:
        raise NotFoundError(f"Folder {folder_id} not found")
    return folder


def create_folder(
    session: Session,
    name: str,
    description: str = "",
    color: str = "gray",
    folder_id: Optional[str] = None,
) -> Folder:
    """
    Create a folder.

    Args:
        session: Database session
        name: Display name (required)
        description: Optional description
        color: Color tag
        folder_id: Optional explicit identifier; derived from the name otherwise

    Returns:
        The created Folder

    Raises:
        ValidationError: If the name is empty
        ConflictError: If the identifier is already taken
    """
    name = name.strip()
    if not name:
        raise ValidationError("Folder name must not be empty")

    folder_id = (folder_id or _slugify(name)).strip()
    if session.get(Folder, folder_id) is not None:
        raise ConflictError(f"Folder {folder_id} already exists")

    folder = Folder(id=folder_id, name=name, description=description.strip(), color=color)
    session.add(folder)
    session.commit()
    session.refresh(folder)
    logger.info("Created folder '%s'", folder_id)
    return folder


def update_folder(
    session: Session,
    folder_id: str,
    name: Optional[str] = None,
    description: Optional[str] = None,
    color: Optional[str] = None,
) -> Folder:
    folder = get_folder(session, folder_id)

    if name is not None:
        if not name.strip():
            raise ValidationError("Folder name must not be empty")
        folder.name = name.strip()
    if description is not None:
        folder.description = description.strip()
    if color is not None:
        folder.color = color

    folder.updated_at = datetime.now(timezone.utc)
    session.add(folder)
    session.commit()
    session.refresh(folder)
    return folder


def delete_folder(session: Session, folder_id: str) -> int:
    """
    Delete a folder, moving its exercises to the reserved folder.

    Returns:
        Number of exercises reassigned

    Raises:
        ValidationError: If the reserved folder is targeted
        NotFoundError: If the folder does not exist
    """
    if folder_id == DEFAULT_FOLDER_ID:
        raise ValidationError("The default folder cannot be deleted")

    folder = get_folder(session, folder_id)
    ensure_default_folder(session)

    exercises = session.exec(select(Exercise).where(Exercise.folder_id == folder_id)).all()
    for exercise in exercises:
        exercise.folder_id = DEFAULT_FOLDER_ID
        exercise.updated_at = datetime.now(timezone.utc)
        session.add(exercise)

    session.flush()
    session.delete(folder)
    session.commit()

    logger.info("Deleted folder '%s', reassigned %s exercise(s)", folder_id, len(exercises))
    return len(exercises)
