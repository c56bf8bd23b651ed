"""
Product repository - the only place product rows are read or written
"""
import logging
from typing import Any, Dict

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from catalog_admin.config import get_settings
from catalog_admin.exceptions import NotFoundError, ValidationFailed
from catalog_admin.models.category import Category
from catalog_admin.models.product import Product
from catalog_admin.services.listing import FilterSpec, Page, SortSpec, count_query, listing_query
from catalog_admin.utils.db_compat import in_integer_range

logger = logging.getLogger(__name__)
settings = get_settings()

FILLABLE_FIELDS = ("name", "price", "tags", "category_id")


class ProductRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    @property
    def dialect(self) -> str:
        return self.db.bind.dialect.name

    async def find(self, product_id: int) -> Product:
        """Product with its category, or NotFoundError."""
        if not in_integer_range(product_id):
            raise NotFoundError("Product", product_id)
        result = await self.db.execute(
            select(Product)
            .options(selectinload(Product.category))
            .where(Product.id == product_id)
            .execution_options(populate_existing=True)
        )
        product = result.scalar_one_or_none()
        if not product:
            raise NotFoundError("Product", product_id)
        return product

    async def list(self, filters: FilterSpec, sort: SortSpec, page: int = 1) -> Page:
        per_page = settings.PAGE_SIZE
        config = settings.SEARCH_CONFIG

        total = await self.db.scalar(count_query(filters, self.dialect, config)) or 0
        if (page - 1) * per_page >= total:
            # past the last page; the OFFSET may not even fit a bound parameter
            return Page(items=[], total=total, current_page=page, per_page=per_page)

        result = await self.db.execute(
            listing_query(filters, sort, page, per_page, self.dialect, config)
            .execution_options(populate_existing=True)
        )
        items = list(result.scalars().all())
        return Page(items=items, total=total, current_page=page, per_page=per_page)

    async def create(self, data: Dict[str, Any]) -> Product:
        await self._check_category(data["category_id"])
        product = Product(**{k: v for k, v in data.items() if k in FILLABLE_FIELDS})
        self.db.add(product)
        await self.db.commit()
        logger.info(f"Created product {product.id}")
        return await self.find(product.id)

    async def update(self, product_id: int, data: Dict[str, Any]) -> Product:
        product = await self.find(product_id)
        await self._check_category(data["category_id"])
        for key in FILLABLE_FIELDS:
            if key in data:
                setattr(product, key, data[key])
        await self.db.commit()
        logger.info(f"Updated product {product_id}")
        return await self.find(product_id)

    async def delete(self, product_id: int) -> None:
        if not in_integer_range(product_id):
            raise NotFoundError("Product", product_id)
        result = await self.db.execute(delete(Product).where(Product.id == product_id))
        if result.rowcount == 0:
            raise NotFoundError("Product", product_id)
        await self.db.commit()
        logger.info(f"Deleted product {product_id}")

    async def _check_category(self, category_id: int) -> None:
        if not in_integer_range(category_id):
            raise ValidationFailed({"category_id": ["The selected category id is invalid."]})
        exists = await self.db.scalar(select(Category.id).where(Category.id == category_id))
        if exists is None:
            raise ValidationFailed({"category_id": ["The selected category id is invalid."]})
