"""
API v1 router aggregation.
"""
from fastapi import APIRouter
from app.api.v1.endpoints import (
    exercises, folders, categories, progress, practice_settings, sessions, ai_chat
)

api_router = APIRouter()

# Include all endpoint routers
# Note: Each router already defines its own prefix, so we don't add another one here
api_router.include_router(exercises.router)
api_router.include_router(folders.router)
api_router.include_router(categories.router)
api_router.include_router(progress.router)
api_router.include_router(practice_settings.router)
api_router.include_router(sessions.router)
api_router.include_router(ai_chat.router)
