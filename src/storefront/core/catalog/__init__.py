"""Category resolution and catalog queries."""

from .categories import (
    CATEGORIES,
    WILDCARD,
    Category,
    Resolution,
    canonical_key,
    category_from_key,
    category_from_slug,
    list_categories,
    normalize_token,
    resolve_category,
    slug_for,
)
from .errors import CatalogError, PersistenceWriteFailure, StoreUnavailable
from .query import (
    DEFAULT_PAGE_SIZE,
    MAX_OFFSET,
    MAX_PAGE_SIZE,
    CatalogQuery,
    CatalogQueryEngine,
    QueryResult,
    coerce_page,
    coerce_page_size,
)
from .store import NEWEST_FIRST, ProductFilter, ProductSort, ProductStore, StorePage

__all__ = [
    "CATEGORIES",
    "WILDCARD",
    "Category",
    "Resolution",
    "canonical_key",
    "category_from_key",
    "category_from_slug",
    "list_categories",
    "normalize_token",
    "resolve_category",
    "slug_for",
    "CatalogError",
    "PersistenceWriteFailure",
    "StoreUnavailable",
    "DEFAULT_PAGE_SIZE",
    "MAX_OFFSET",
    "MAX_PAGE_SIZE",
    "CatalogQuery",
    "CatalogQueryEngine",
    "NEWEST_FIRST",
    "ProductFilter",
    "ProductSort",
    "ProductStore",
    "QueryResult",
    "StorePage",
    "coerce_page",
    "coerce_page_size",
]
