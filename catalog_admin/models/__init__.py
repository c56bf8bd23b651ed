from catalog_admin.models.category import Category
from catalog_admin.models.product import Product

__all__ = [
    "Category",
    "Product",
]
