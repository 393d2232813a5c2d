"""
Folder schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class FolderResponse(BaseModel):
    """Folder response schema."""
    id: str
    name: str
    description: str = ""
    color: str = "gray"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CreateFolderRequest(BaseModel):
    """Request schema for creating a folder."""
    name: str = Field(..., min_length=1)
    description: str = ""
    color: str = "gray"
    id: Optional[str] = None  # Derived from the name when omitted


class UpdateFolderRequest(BaseModel):
    """Request schema for updating a folder."""
    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None


class FoldersResponse(BaseModel):
    """Response schema for folders list."""
    folders: List[FolderResponse]


class DeleteFolderResponse(BaseModel):
    """Response from folder deletion."""
    message: str
    reassigned_exercises_count: int
