"""
Practice settings service - global normalization options per user.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Session

from app.models.models import PracticeSettings
from app.services.answer_service import NormalizationOptions


def get_practice_settings(session: Session, user_id: str) -> PracticeSettings:
    practice_settings = session.get(PracticeSettings, user_id)
    if practice_settings is None:
        practice_settings = PracticeSettings(user_id=user_id)
        session.add(practice_settings)
        session.commit()
        session.refresh(practice_settings)
    return practice_settings


def get_normalization_options(session: Session, user_id: str) -> NormalizationOptions:
    practice_settings = get_practice_settings(session, user_id)
    return NormalizationOptions(
        normalize_quotes=practice_settings.normalize_quotes,
        normalize_spaces=practice_settings.normalize_spaces,
    )


def update_practice_settings(
    session: Session,
    user_id: str,
    normalize_quotes: Optional[bool] = None,
    normalize_spaces: Optional[bool] = None,
) -> PracticeSettings:
    practice_settings = get_practice_settings(session, user_id)
    if normalize_quotes is not None:
        practice_settings.normalize_quotes = normalize_quotes
    if normalize_spaces is not None:
        practice_settings.normalize_spaces = normalize_spaces
    practice_settings.updated_at = datetime.now(timezone.utc)
    session.add(practice_settings)
    session.commit()
    session.refresh(practice_settings)
    return practice_settings
