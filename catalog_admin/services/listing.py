"""
Listing query builder for products.

Request parameters are turned into an ordered list of optional predicates
(``FilterSpec``) joined with AND, and one allow-listed sort (``SortSpec``).
The count and the page query are both derived from the same filtered
statement, so ``total`` always reflects the filters.

Listing has no validation failure mode: malformed values are dropped and
logged at debug level.
"""
import logging
import math
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional

from sqlalchemy import and_, func, select
from sqlalchemy.orm import joinedload

from catalog_admin.models.product import Product
from catalog_admin.utils.db_compat import full_text_match, full_text_rank, in_integer_range

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "price": Product.price,
    "created_at": Product.created_at,
    "name": Product.name,
}
DEFAULT_SORT_BY = "created_at"
DEFAULT_SORT_DIR = "desc"


def _clean(value: Optional[str]) -> Optional[str]:
    """Treat missing and blank parameters alike."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _parse_int(name: str, value: Optional[str]) -> Optional[int]:
    value = _clean(value)
    if value is None:
        return None
    try:
        number = int(value)
    except ValueError:
        logger.debug("Ignoring non-integer %s=%r", name, value)
        return None
    if not in_integer_range(number):
        logger.debug("Ignoring out-of-range %s=%r", name, value)
        return None
    return number


def _parse_decimal(name: str, value: Optional[str]) -> Optional[Decimal]:
    value = _clean(value)
    if value is None:
        return None
    try:
        number = Decimal(value)
    except InvalidOperation:
        logger.debug("Ignoring non-numeric %s=%r", name, value)
        return None
    if not number.is_finite():
        logger.debug("Ignoring non-finite %s=%r", name, value)
        return None
    return number


def parse_page(value: Optional[str]) -> int:
    page = _parse_int("page", value)
    if page is None or page < 1:
        return 1
    return page


@dataclass(frozen=True)
class FilterSpec:
    search: Optional[str] = None
    category_id: Optional[int] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None

    @classmethod
    def from_params(
        cls,
        search: Optional[str] = None,
        category_id: Optional[str] = None,
        min_price: Optional[str] = None,
        max_price: Optional[str] = None,
    ) -> "FilterSpec":
        return cls(
            search=_clean(search),
            category_id=_parse_int("category_id", category_id),
            min_price=_parse_decimal("min_price", min_price),
            max_price=_parse_decimal("max_price", max_price),
        )

    def predicates(self, dialect: str, config: str = "simple") -> List[Any]:
        """WHERE clauses for every filter that is set, in a fixed order."""
        specs = [
            (self.search, lambda v: full_text_match(Product.name, v, dialect, config)),
            (self.category_id, lambda v: Product.category_id == v),
            (self.min_price, lambda v: Product.price >= v),
            (self.max_price, lambda v: Product.price <= v),
        ]
        return [build(value) for value, build in specs if value is not None]


@dataclass(frozen=True)
class SortSpec:
    sort_by: Optional[str] = DEFAULT_SORT_BY  # None: no ORDER BY clause
    direction: str = DEFAULT_SORT_DIR

    @classmethod
    def from_params(cls, sort_by: Optional[str] = None, sort_dir: Optional[str] = None) -> "SortSpec":
        sort_by = _clean(sort_by) or DEFAULT_SORT_BY
        if sort_by not in SORTABLE_FIELDS:
            logger.debug("Ignoring unknown sort_by=%r", sort_by)
            sort_by = None
        direction = "asc" if (_clean(sort_dir) or DEFAULT_SORT_DIR).lower() == "asc" else "desc"
        return cls(sort_by=sort_by, direction=direction)

    def clauses(self) -> List[Any]:
        if self.sort_by is None:
            return []
        column = SORTABLE_FIELDS[self.sort_by]
        return [column.asc() if self.direction == "asc" else column.desc()]


@dataclass
class Page:
    """One page of results plus pagination metadata."""
    items: List[Any] = field(default_factory=list)
    total: int = 0
    current_page: int = 1
    per_page: int = 10

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))

    @property
    def first_item(self) -> Optional[int]:
        if not self.items:
            return None
        return (self.current_page - 1) * self.per_page + 1

    @property
    def last_item(self) -> Optional[int]:
        if not self.items:
            return None
        return self.first_item + len(self.items) - 1


def filtered_query(filters: FilterSpec, dialect: str, config: str = "simple"):
    """SELECT products matching all filters, without ordering or paging."""
    query = select(Product)
    conditions = filters.predicates(dialect, config)
    if conditions:
        query = query.where(and_(*conditions))
    return query


def count_query(filters: FilterSpec, dialect: str, config: str = "simple"):
    subquery = filtered_query(filters, dialect, config).subquery()
    return select(func.count()).select_from(subquery)


def listing_query(
    filters: FilterSpec,
    sort: SortSpec,
    page: int,
    per_page: int,
    dialect: str,
    config: str = "simple",
):
    """Page query: filters, relevance (when searching), requested sort, LIMIT/OFFSET."""
    query = filtered_query(filters, dialect, config).options(joinedload(Product.category))

    if filters.search is not None:
        rank = full_text_rank(Product.name, filters.search, dialect, config)
        if rank is not None:
            query = query.order_by(rank.desc())

    sort_clauses = sort.clauses()
    if sort_clauses:
        query = query.order_by(*sort_clauses)

    return query.limit(per_page).offset((page - 1) * per_page)
