"""Declarative read interface between the query engine and the product store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from src.storefront.entities.service.product.entity import Product


@dataclass(frozen=True)
class ProductFilter:
    """Active products, optionally matching a category on either field."""

    active: bool = True
    category_key: str | None = None


@dataclass(frozen=True)
class ProductSort:
    """Newest first; ``tie_breaker`` keeps page boundaries stable."""

    field: str = "created_at"
    descending: bool = True
    tie_breaker: str = "id"


NEWEST_FIRST = ProductSort()


@dataclass
class StorePage:
    rows: list[Product]
    matched_count: int


class ProductStore(Protocol):
    def find(
        self, product_filter: ProductFilter, sort: ProductSort, limit: int, offset: int
    ) -> StorePage: ...
