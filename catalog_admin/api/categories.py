"""
Category API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status
from typing import List
from pydantic import BaseModel, Field

from catalog_admin.database import get_db
from catalog_admin.exceptions import NotFoundError
from catalog_admin.services.categories import CategoryRepository

router = APIRouter()


class CategoryResponse(BaseModel):
    id: int
    name: str
    products_count: int = 0


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)

    class Config:
        str_strip_whitespace = True


@router.get("", response_model=List[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    """All categories with their product counts, for filter dropdowns"""
    rows = await CategoryRepository(db).list_with_counts()
    return [
        CategoryResponse(id=c.id, name=c.name, products_count=count)
        for c, count in rows
    ]


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: int, db: AsyncSession = Depends(get_db)):
    try:
        category, count = await CategoryRepository(db).find(category_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Category not found")
    return CategoryResponse(id=category.id, name=category.name, products_count=count)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(data: CategoryCreate, db: AsyncSession = Depends(get_db)):
    category = await CategoryRepository(db).create(data.name)
    return CategoryResponse(id=category.id, name=category.name, products_count=0)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(category_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a category together with all of its products"""
    try:
        await CategoryRepository(db).delete(category_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Category not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
