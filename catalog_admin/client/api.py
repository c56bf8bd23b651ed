"""
HTTP client for the catalog API
"""
from typing import Any, Dict, List, Optional

import httpx

from catalog_admin.config import get_settings

settings = get_settings()


class CatalogClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # Products
    async def get_products(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        r = await self._http.get("/products", params=params)
        r.raise_for_status()
        return r.json()

    async def get_product(self, product_id: int) -> Dict[str, Any]:
        r = await self._http.get(f"/products/{product_id}")
        r.raise_for_status()
        return r.json()

    async def create_product(self, data: Dict[str, Any]) -> Dict[str, Any]:
        r = await self._http.post("/products", json=data)
        r.raise_for_status()
        return r.json()

    async def update_product(self, product_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        r = await self._http.put(f"/products/{product_id}", json=data)
        r.raise_for_status()
        return r.json()

    async def delete_product(self, product_id: int) -> None:
        r = await self._http.delete(f"/products/{product_id}")
        r.raise_for_status()

    # Categories
    async def get_categories(self) -> List[Dict[str, Any]]:
        r = await self._http.get("/categories")
        r.raise_for_status()
        return r.json()
