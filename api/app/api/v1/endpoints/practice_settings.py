"""
Practice settings endpoints.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session
from typing import Optional

from app.core.config import settings
from app.core.database import get_session
from app.schemas.settings import PracticeSettingsResponse, UpdatePracticeSettingsRequest
from app.services.settings_service import get_practice_settings, update_practice_settings

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=PracticeSettingsResponse)
async def get_settings(
    user_id: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """Get the answer normalization options."""
    practice_settings = get_practice_settings(session, user_id or settings.default_user_id)
    return PracticeSettingsResponse.model_validate(practice_settings)


@router.put("", response_model=PracticeSettingsResponse)
async def update_settings(
    request: UpdatePracticeSettingsRequest,
    user_id: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """Update the answer normalization options. They apply to every exercise."""
    practice_settings = update_practice_settings(
        session,
        user_id or settings.default_user_id,
        normalize_quotes=request.normalize_quotes,
        normalize_spaces=request.normalize_spaces,
    )
    return PracticeSettingsResponse.model_validate(practice_settings)
