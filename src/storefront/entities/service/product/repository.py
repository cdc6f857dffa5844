"""Product repository for data access operations."""

from loguru import logger
from sqlalchemy import func, true
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import aliased
from sqlmodel import Session, col, or_, select

from src.storefront.core.catalog.errors import PersistenceWriteFailure
from src.storefront.core.catalog.store import ProductFilter, ProductSort, StorePage

from .entity import Product
from .table import ProductTable


class ProductRepository:
    """Repository for Product entity data access operations.

    Reads go through :meth:`find`, which implements the catalog's
    ``ProductStore`` interface. Writes only flush; committing is left to
    the caller owning the session.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, row: ProductTable) -> Product:
        return Product.model_validate(row, from_attributes=True)

    def _conditions(self, product_filter: ProductFilter) -> list:
        conditions = []
        if product_filter.active:
            conditions.append(col(ProductTable.is_active) == True)  # noqa: E712
        if product_filter.category_key is not None:
            key = product_filter.category_key
            conditions.append(
                or_(
                    col(ProductTable.main_category) == key,
                    col(ProductTable.sub_category) == key,
                )
            )
        return conditions

    def _ordering(self, sort: ProductSort, entity=ProductTable) -> list:
        primary = getattr(entity, sort.field)
        tie_breaker = getattr(entity, sort.tie_breaker)
        if sort.descending:
            return [primary.desc(), tie_breaker.desc()]
        return [primary.asc(), tie_breaker.asc()]

    def find(
        self, product_filter: ProductFilter, sort: ProductSort, limit: int, offset: int
    ) -> StorePage:
        """Fetch one page and the unpaginated match count in a single statement.

        The count is left-joined to the page, so rows and total always come
        from the same snapshot, and a page past the end still yields one row
        carrying the total.
        """
        conditions = self._conditions(product_filter)
        page = (
            select(ProductTable)
            .where(*conditions)
            .order_by(*self._ordering(sort))
            .offset(offset)
            .limit(limit)
            .subquery("page")
        )
        counted = (
            select(func.count().label("matched_count"))
            .select_from(ProductTable)
            .where(*conditions)
            .subquery("counted")
        )
        page_row = aliased(ProductTable, page)
        statement = (
            select(counted.c.matched_count, page_row)
            .select_from(counted)
            .outerjoin(page_row, true())
            .order_by(*self._ordering(sort, page_row))
        )
        results = self._session.exec(statement).all()
        return StorePage(
            rows=[self._to_entity(row) for _, row in results if row is not None],
            matched_count=results[0][0] if results else 0,
        )

    def get(self, product_id: str) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        return self._to_entity(row)

    def create(self, product: Product) -> Product:
        """Persist a new, active product."""
        data = product.model_dump(exclude={"discount_percentage"})
        data["is_active"] = True
        row = ProductTable.model_validate(data)
        try:
            self._session.add(row)
            self._session.flush()
            self._session.refresh(row)
        except SQLAlchemyError as exc:
            logger.bind(error_type=type(exc).__name__).error(
                "catalog.product.write_failed: {}", exc
            )
            raise PersistenceWriteFailure("Failed to create product") from exc
        return self._to_entity(row)

    def delete(self, product_id: str) -> bool:
        """Delete a product by ID. Returns False when it does not exist."""
        try:
            row = self._session.get(ProductTable, product_id)
            if row is None:
                return False
            self._session.delete(row)
            self._session.flush()
        except SQLAlchemyError as exc:
            logger.bind(error_type=type(exc).__name__).error(
                "catalog.product.write_failed: {}", exc
            )
            raise PersistenceWriteFailure("Error deleting product") from exc
        return True
