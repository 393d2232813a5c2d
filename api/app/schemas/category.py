"""
Category schemas.
"""
from pydantic import BaseModel, Field
from typing import List


class CreateCategoryRequest(BaseModel):
    """Request schema for registering a category."""
    name: str = Field(..., min_length=1)


class CategoriesResponse(BaseModel):
    """Response schema for the category registry."""
    categories: List[str]
