"""
Category repository
"""
import logging
from typing import List, Tuple

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.exceptions import NotFoundError
from catalog_admin.models.category import Category
from catalog_admin.models.product import Product
from catalog_admin.utils.db_compat import in_integer_range

logger = logging.getLogger(__name__)


def _with_product_counts():
    return (
        select(Category, func.count(Product.id).label("products_count"))
        .outerjoin(Product, Product.category_id == Category.id)
        .group_by(Category.id)
    )


class CategoryRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_with_counts(self) -> List[Tuple[Category, int]]:
        """All categories in storage order, each with its product count."""
        result = await self.db.execute(_with_product_counts().order_by(Category.id))
        return [(row.Category, row.products_count) for row in result.all()]

    async def find(self, category_id: int) -> Tuple[Category, int]:
        if not in_integer_range(category_id):
            raise NotFoundError("Category", category_id)
        result = await self.db.execute(
            _with_product_counts().where(Category.id == category_id)
        )
        row = result.first()
        if not row:
            raise NotFoundError("Category", category_id)
        return row.Category, row.products_count

    async def create(self, name: str) -> Category:
        category = Category(name=name)
        self.db.add(category)
        await self.db.commit()
        await self.db.refresh(category)
        logger.info(f"Created category {category.id}")
        return category

    async def delete(self, category_id: int) -> None:
        """Delete a category; the foreign key cascades to its products."""
        if not in_integer_range(category_id):
            raise NotFoundError("Category", category_id)
        result = await self.db.execute(delete(Category).where(Category.id == category_id))
        if result.rowcount == 0:
            raise NotFoundError("Category", category_id)
        await self.db.commit()
        logger.info(f"Deleted category {category_id} and its products")
