"""
Product API endpoints - listing, search, CRUD
"""
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status
from typing import Annotated, List, Optional
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field, field_validator

from catalog_admin.database import get_db
from catalog_admin.exceptions import NotFoundError
from catalog_admin.models.product import Product
from catalog_admin.services.listing import FilterSpec, SortSpec, parse_page
from catalog_admin.services.products import ProductRepository
from catalog_admin.utils.db_compat import MAX_INTEGER

router = APIRouter()

Tag = Annotated[str, Field(min_length=1, max_length=50)]


# --- Pydantic Schemas ---

class CategorySummary(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class ProductResponse(BaseModel):
    id: int
    name: str
    price: float
    tags: List[str] = []
    category_id: int
    category: Optional[CategorySummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProductPageResponse(BaseModel):
    data: List[ProductResponse]
    current_page: int
    last_page: int
    per_page: int
    total: int
    from_: Optional[int] = Field(None, alias="from")
    to: Optional[int] = None

    class Config:
        populate_by_name = True


class ProductIn(BaseModel):
    """Body of both create and update: every fillable field is replaced."""
    name: str = Field(..., min_length=1, max_length=255)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    category_id: int = Field(..., ge=1, le=MAX_INTEGER)
    tags: List[Tag] = []

    class Config:
        str_strip_whitespace = True

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_default(cls, v):
        return [] if v is None else v


# --- Helper ---

def _build_product_response(p: Product) -> ProductResponse:
    return ProductResponse(
        id=p.id,
        name=p.name,
        price=float(p.price),
        tags=p.tags or [],
        category_id=p.category_id,
        category=CategorySummary.model_validate(p.category) if p.category else None,
        created_at=p.created_at,
        updated_at=p.updated_at,
    )


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")


# --- Endpoints ---

@router.get("", response_model=ProductPageResponse)
async def list_products(
    search: Optional[str] = None,
    category_id: Optional[str] = None,
    min_price: Optional[str] = None,
    max_price: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_dir: Optional[str] = None,
    page: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    """One page (10 rows) of products matching every supplied filter."""
    filters = FilterSpec.from_params(search, category_id, min_price, max_price)
    sort = SortSpec.from_params(sort_by, sort_dir)

    result = await ProductRepository(db).list(filters, sort, parse_page(page))

    return ProductPageResponse(
        data=[_build_product_response(p) for p in result.items],
        current_page=result.current_page,
        last_page=result.last_page,
        per_page=result.per_page,
        total=result.total,
        from_=result.first_item,
        to=result.last_item,
    )


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(data: ProductIn, db: AsyncSession = Depends(get_db)):
    """Create a product"""
    product = await ProductRepository(db).create(data.model_dump())
    return _build_product_response(product)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int, db: AsyncSession = Depends(get_db)):
    """Get a single product with its category"""
    try:
        product = await ProductRepository(db).find(product_id)
    except NotFoundError:
        raise _not_found()
    return _build_product_response(product)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(product_id: int, data: ProductIn, db: AsyncSession = Depends(get_db)):
    """Replace every fillable field of a product"""
    try:
        product = await ProductRepository(db).update(product_id, data.model_dump())
    except NotFoundError:
        raise _not_found()
    return _build_product_response(product)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(product_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a product"""
    try:
        await ProductRepository(db).delete(product_id)
    except NotFoundError:
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
