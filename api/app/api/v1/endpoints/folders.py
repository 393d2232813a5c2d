"""
Folders endpoint.
"""
# pyright: reportAttributeAccessIssue=false
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.database import get_session
from app.schemas.folder import (
    FolderResponse,
    CreateFolderRequest,
    UpdateFolderRequest,
    FoldersResponse,
    DeleteFolderResponse,
)
from app.services import folder_service

router = APIRouter(prefix="/folders", tags=["folders"])


@router.get("", response_model=FoldersResponse)
async def get_folders(session: Session = Depends(get_session)):
    """Get all folders, the reserved default folder included."""
    folders = folder_service.list_folders(session)
    return FoldersResponse(folders=[FolderResponse.model_validate(folder) for folder in folders])


@router.post("", response_model=FolderResponse, status_code=status.HTTP_201_CREATED)
async def create_folder(
    request: CreateFolderRequest,
    session: Session = Depends(get_session)
):
    """Create a new folder."""
    folder = folder_service.create_folder(
        session,
        name=request.name,
        description=request.description,
        color=request.color,
        folder_id=request.id,
    )
    return FolderResponse.model_validate(folder)


@router.put("/{folder_id}", response_model=FolderResponse)
async def update_folder(
    folder_id: str,
    request: UpdateFolderRequest,
    session: Session = Depends(get_session)
):
    """Update a folder by ID."""
    folder = folder_service.update_folder(
        session,
        folder_id,
        name=request.name,
        description=request.description,
        color=request.color,
    )
    return FolderResponse.model_validate(folder)


@router.delete("/{folder_id}", response_model=DeleteFolderResponse)
async def delete_folder(
    folder_id: str,
    session: Session = Depends(get_session)
):
    """Delete a folder. Its exercises move to the default folder."""
    reassigned = folder_service.delete_folder(session, folder_id)
    return DeleteFolderResponse(
        message=f"Folder {folder_id} deleted",
        reassigned_exercises_count=reassigned,
    )
