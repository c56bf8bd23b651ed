"""
Product list view state: filters, debounced fetching, paging.

Every list request gets a sequence number; only the response to the most
recently issued request is applied, so a slow earlier response can never
overwrite a newer one.
"""
import asyncio
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

import httpx

from catalog_admin.client.api import CatalogClient
from catalog_admin.client.form import ProductForm
from catalog_admin.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

DEFAULT_FILTERS: Dict[str, Any] = {
    "search": "",
    "category_id": "",
    "min_price": "",
    "max_price": "",
    "sort_by": "created_at",
    "sort_dir": "desc",
    "page": 1,
}


def _as_decimal(value: Any) -> Optional[Decimal]:
    if value in (None, ""):
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


class ProductListView:
    def __init__(self, client: CatalogClient, debounce_ms: Optional[int] = None):
        self.client = client
        self.debounce = (settings.LIST_DEBOUNCE_MS if debounce_ms is None else debounce_ms) / 1000

        self.filters: Dict[str, Any] = dict(DEFAULT_FILTERS)
        self.products: List[Dict[str, Any]] = []
        self.categories: List[Dict[str, Any]] = []
        self.meta: Dict[str, Any] = {}
        self.is_loading = False
        self.error: Optional[str] = None

        self._issued = 0
        self._pending: Optional[asyncio.Task] = None

    # --- Filter state ---

    def update_filter(self, name: str, value: Any) -> None:
        """Change one filter; any filter change goes back to page 1."""
        if name not in DEFAULT_FILTERS or name == "page":
            raise KeyError(f"Unknown filter: {name}")
        self.filters[name] = value
        self.filters["page"] = 1
        self.schedule_fetch()

    def change_page(self, page: int) -> None:
        self.filters["page"] = page
        self.schedule_fetch()

    def request_params(self) -> Dict[str, Any]:
        """Filters with empty values dropped."""
        return {k: v for k, v in self.filters.items() if v not in (None, "")}

    def price_range_invalid(self) -> bool:
        low = _as_decimal(self.filters["min_price"])
        high = _as_decimal(self.filters["max_price"])
        return low is not None and high is not None and low > high

    @property
    def has_previous(self) -> bool:
        return self.meta.get("current_page", 1) > 1

    @property
    def has_next(self) -> bool:
        return self.meta.get("current_page", 1) < self.meta.get("last_page", 1)

    # --- Fetching ---

    def schedule_fetch(self) -> None:
        """Restart the quiet-period timer; the fetch runs once input settles."""
        if self._pending and not self._pending.done():
            self._pending.cancel()
        self._pending = asyncio.ensure_future(self._fetch_after_quiet_period())
        self._pending.add_done_callback(self._log_failed_fetch)

    def _log_failed_fetch(self, task: asyncio.Task) -> None:
        if task.cancelled() or task.exception() is None:
            return
        self.error = str(task.exception())
        self.is_loading = False
        logger.error("Scheduled listing fetch failed", exc_info=task.exception())

    async def _fetch_after_quiet_period(self) -> None:
        await asyncio.sleep(self.debounce)
        await self.fetch_products()

    async def wait(self) -> None:
        """Wait for the scheduled fetch, if any, to finish."""
        if self._pending:
            try:
                await self._pending
            except asyncio.CancelledError:
                pass

    async def fetch_products(self) -> bool:
        """Fetch the current page. Returns True when the response was applied."""
        if self.price_range_invalid():
            logger.debug("min_price > max_price, not requesting")
            # whatever is still in flight belongs to the previous filters
            self._issued += 1
            self.is_loading = False
            return False

        self._issued += 1
        seq = self._issued
        self.is_loading = True
        try:
            data = await self.client.get_products(self.request_params())
        except httpx.HTTPError as e:
            if seq == self._issued:
                self.error = str(e)
                self.is_loading = False
            logger.error(f"Listing request {seq} failed: {e}")
            return False

        if seq != self._issued:
            logger.debug(f"Discarding stale listing response {seq} (latest {self._issued})")
            return False

        self.products = data["data"]
        self.meta = {
            "current_page": data["current_page"],
            "last_page": data["last_page"],
            "total": data["total"],
        }
        self.error = None
        self.is_loading = False
        return True

    async def load_categories(self) -> List[Dict[str, Any]]:
        self.categories = await self.client.get_categories()
        return self.categories

    # --- Actions ---

    def open_form(self, product_id: Optional[int] = None) -> ProductForm:
        return ProductForm(self.client, product_id=product_id)

    async def delete_product(self, product_id: int) -> None:
        await self.client.delete_product(product_id)
        await self.fetch_products()
