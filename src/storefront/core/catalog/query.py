"""Catalog query engine.

Turns a resolved category and pagination input into one declarative filter,
runs it against a :class:`ProductStore` and packages the page.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from src.storefront.core.catalog.categories import Category, resolve_category
from src.storefront.core.catalog.errors import StoreUnavailable
from src.storefront.core.catalog.store import NEWEST_FIRST, ProductFilter, ProductStore

if TYPE_CHECKING:
    from src.storefront.entities.service.product.entity import Product

DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100
# Largest OFFSET a 64-bit SQL integer holds; later pages are simply past the end.
MAX_OFFSET = 2**63 - 1


def _as_int(raw: Any) -> int | None:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        return None


def coerce_page(raw: Any) -> int:
    """Return a 1-based page index; anything unusable becomes page 1."""
    page = _as_int(raw)
    if page is None or page < 1:
        if raw is not None:
            logger.debug("Coerced page {!r} to 1", raw)
        return 1
    return page


def coerce_page_size(
    raw: Any, default: int = DEFAULT_PAGE_SIZE, maximum: int = MAX_PAGE_SIZE
) -> int:
    """Return a positive page size, falling back to ``default`` and capped at ``maximum``."""
    size = _as_int(raw)
    if size is None or size < 1:
        if raw is not None:
            logger.debug("Coerced page size {!r} to {}", raw, default)
        return default
    if size > maximum:
        logger.debug("Clamped page size {} to {}", size, maximum)
        return maximum
    return size


@dataclass(frozen=True)
class CatalogQuery:
    """A single page request; ``category`` of ``None`` means every product."""

    category: Category | None = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size

    def to_filter(self) -> ProductFilter:
        if self.category is None or self.category.wildcard:
            return ProductFilter()
        return ProductFilter(category_key=self.category.key)


@dataclass
class QueryResult:
    items: Sequence[Product] = field(default_factory=list)
    total_count: int = 0
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    error: StoreUnavailable | None = None

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def has_more(self) -> bool:
        return self.skip + len(self.items) < self.total_count

    @property
    def failed(self) -> bool:
        return self.error is not None


class CatalogQueryEngine:
    """Stateless page query over a product store."""

    def __init__(
        self,
        store: ProductStore,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
    ) -> None:
        self._store = store
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    def query(self, request: CatalogQuery) -> QueryResult:
        product_filter = request.to_filter()
        try:
            page = self._store.find(
                product_filter,
                NEWEST_FIRST,
                limit=request.page_size,
                offset=min(request.skip, MAX_OFFSET),
            )
        except (SQLAlchemyError, StoreUnavailable) as exc:
            logger.bind(
                category=product_filter.category_key,
                page=request.page,
                page_size=request.page_size,
                error_type=type(exc).__name__,
            ).error("catalog.query.failed: {}", exc)
            error = exc if isinstance(exc, StoreUnavailable) else StoreUnavailable()
            return QueryResult(
                page=request.page, page_size=request.page_size, error=error
            )

        result = QueryResult(
            items=page.rows,
            total_count=page.matched_count,
            page=request.page,
            page_size=request.page_size,
        )
        if not result.items:
            logger.bind(
                category=product_filter.category_key,
                page=request.page,
                total=result.total_count,
            ).info("catalog.query.empty")
        return result

    def query_token(
        self, raw_token: str | None, page: Any = 1, page_size: Any = None
    ) -> QueryResult:
        """Resolve ``raw_token`` and query it; a rejected token yields an empty page."""
        page_index = coerce_page(page)
        size = coerce_page_size(page_size, self.default_page_size, self.max_page_size)
        resolution = resolve_category(raw_token)
        if not resolution.ok:
            logger.bind(token=raw_token).info("catalog.category.unrecognized")
            return QueryResult(page=page_index, page_size=size)
        return self.query(
            CatalogQuery(category=resolution.category, page=page_index, page_size=size)
        )
