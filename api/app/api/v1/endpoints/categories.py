"""
Categories endpoint.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.database import get_session
from app.schemas.category import CreateCategoryRequest, CategoriesResponse
from app.services import category_service

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=CategoriesResponse)
async def get_categories(session: Session = Depends(get_session)):
    """Get registered category names, used or not."""
    return CategoriesResponse(categories=category_service.list_categories(session))


@router.post("", response_model=CategoriesResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    request: CreateCategoryRequest,
    session: Session = Depends(get_session)
):
    """Register a category name. Registering an existing name is a no-op."""
    category_service.create_category(session, request.name)
    return CategoriesResponse(categories=category_service.list_categories(session))


@router.delete("/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    name: str,
    session: Session = Depends(get_session)
):
    """Delete a category. Refused while any exercise uses it."""
    category_service.delete_category(session, name)
