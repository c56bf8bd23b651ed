from catalog_admin.client.api import CatalogClient
from catalog_admin.client.form import ProductForm
from catalog_admin.client.list_view import ProductListView

__all__ = [
    "CatalogClient",
    "ProductForm",
    "ProductListView",
]
