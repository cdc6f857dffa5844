"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.storefront.api.http.app_data import ApplicationDependencies
from src.storefront.core.catalog import CatalogQueryEngine
from src.storefront.entities.service.product import ProductRepository
from src.storefront.runtime.config.config_data import CatalogConfig
from src.storefront.runtime.context import get_config


def get_session(request: Request) -> Iterator[Session]:
    """Yield a request-scoped database session, closed on every exit path."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    session = app_deps.database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_catalog_config() -> CatalogConfig:
    """Get the catalog configuration of the current context."""
    return get_config().catalog


def get_product_repository(
    session: Session = Depends(get_session),
) -> ProductRepository:
    return ProductRepository(session)


def get_catalog_engine(
    repository: ProductRepository = Depends(get_product_repository),
    catalog: CatalogConfig = Depends(get_catalog_config),
) -> CatalogQueryEngine:
    """Build the per-request catalog query engine."""
    return CatalogQueryEngine(
        repository,
        default_page_size=catalog.page_size,
        max_page_size=catalog.max_page_size,
    )
