"""
Create / edit form for a single product
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from catalog_admin.client.api import CatalogClient

logger = logging.getLogger(__name__)


def split_tags(raw: str) -> List[str]:
    """'promo, new,, best-seller' -> ['promo', 'new', 'best-seller']"""
    return [t.strip() for t in raw.split(",") if t.strip()]


class ProductForm:
    def __init__(self, client: CatalogClient, product_id: Optional[int] = None):
        self.client = client
        self.product_id = product_id
        self.data: Dict[str, Any] = {"name": "", "price": "", "category_id": "", "tags": ""}
        self.errors: Dict[str, List[str]] = {}
        self.categories: List[Dict[str, Any]] = []
        self.is_saving = False

    @property
    def is_edit(self) -> bool:
        return self.product_id is not None

    async def load(self) -> None:
        """Load category choices and, when editing, the current values."""
        self.categories = await self.client.get_categories()
        if self.is_edit:
            p = await self.client.get_product(self.product_id)
            self.data = {
                "name": p["name"],
                "price": p["price"],
                "category_id": p["category_id"],
                "tags": ", ".join(p.get("tags") or []),
            }

    def payload(self) -> Dict[str, Any]:
        return {**self.data, "tags": split_tags(self.data["tags"])}

    async def submit(self) -> Optional[Dict[str, Any]]:
        """Save the form. On 422 the field errors are kept and None is returned."""
        self.errors = {}
        self.is_saving = True
        try:
            if self.is_edit:
                return await self.client.update_product(self.product_id, self.payload())
            return await self.client.create_product(self.payload())
        except httpx.HTTPStatusError as e:
            if e.response.status_code != 422:
                raise
            self.errors = e.response.json().get("errors", {})
            logger.debug(f"Form rejected: {self.errors}")
            return None
        finally:
            self.is_saving = False
