"""
Category service - the registry of category names offered for selection.
"""
import logging
from typing import List

from sqlmodel import Session, select, func

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.models import Category, Exercise

logger = logging.getLogger(__name__)


def list_categories(session: Session) -> List[str]:
    return list(session.exec(select(Category.name).order_by(Category.name)).all())


def register_category(session: Session, name: str) -> str:
    """Add a category name if it is not registered yet. Does not commit."""
    name = name.strip()
    if not name:
        raise ValidationError("Category name must not be empty")

    if session.get(Category, name) is None:
        session.add(Category(name=name))
        session.flush()
        logger.info("Registered category '%s'", name)
    return name


def create_category(session: Session, name: str) -> str:
    name = register_category(session, name)
    session.commit()
    return name


def delete_category(session: Session, name: str) -> None:
    """
    Delete a category from the registry.

    Raises:
        NotFoundError: If the category is not registered
        ConflictError: If any exercise still references it
    """
    category = session.get(Category, name)
    if category is None:
        raise NotFoundError(f"Category '{name}' not found")

    in_use = session.exec(
        select(func.count()).select_from(Exercise).where(Exercise.category == name)
    ).one()
    if in_use:
        raise ConflictError(f"Category '{name}' is used by {in_use} exercise(s)")

    session.delete(category)
    session.commit()
    logger.info("Deleted category '%s'", name)
