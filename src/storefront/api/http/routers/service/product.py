"""Product API router: paginated listings, create and delete."""

from fastapi import APIRouter, Depends
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session
from starlette.responses import JSONResponse, PlainTextResponse

from src.storefront.api.http.deps import (
    get_catalog_engine,
    get_product_repository,
    get_session,
)
from src.storefront.api.http.schemas import (
    CategoryProductPage,
    DeleteProductRequest,
    ProductPage,
)
from src.storefront.core.catalog import (
    CatalogQueryEngine,
    PersistenceWriteFailure,
    canonical_key,
)
from src.storefront.entities.service.product import Product, ProductRepository

router = APIRouter()

FETCH_FAILED = "Failed to fetch products"
UNKNOWN_CATEGORY = "Unknown category"


@router.get("", response_model=ProductPage)
def list_products(
    category: str | None = None,
    page: str | None = None,
    engine: CatalogQueryEngine = Depends(get_catalog_engine),
):
    """List active products, newest first, optionally filtered by category."""
    result = engine.query_token(category, page=page)
    if result.failed:
        return JSONResponse(
            status_code=500,
            content={"error": FETCH_FAILED, "details": result.error.message},
        )
    return ProductPage(
        products=list(result.items),
        has_more=result.has_more,
        total=result.total_count,
    )


@router.get("/category/{category}", response_model=CategoryProductPage)
def list_products_by_category(
    category: str,
    page: str | None = None,
    limit: str | None = None,
    engine: CatalogQueryEngine = Depends(get_catalog_engine),
):
    """List a category page; an unknown category is an empty page, not an error."""
    result = engine.query_token(category, page=page, page_size=limit)
    if result.failed:
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": FETCH_FAILED,
                "details": result.error.message,
                "products": [],
                "hasMore": False,
                "totalCount": 0,
            },
        )
    return CategoryProductPage(
        products=list(result.items),
        has_more=result.has_more,
        total_count=result.total_count,
    )


@router.post("", response_model=Product)
def create_product(
    product: Product,
    session: Session = Depends(get_session),
    repository: ProductRepository = Depends(get_product_repository),
):
    """Create a new product. New products are always active.

    Category fields accept any spelling the resolver knows and are stored as
    canonical keys; the wildcard and unknown categories are refused.
    """
    main_category = canonical_key(product.main_category)
    sub_category = canonical_key(product.sub_category) if product.sub_category else None
    if main_category is None or (product.sub_category and sub_category is None):
        logger.bind(
            main_category=product.main_category, sub_category=product.sub_category
        ).info("catalog.category.unrecognized")
        return JSONResponse(status_code=400, content={"error": UNKNOWN_CATEGORY})
    product = product.model_copy(
        update={"main_category": main_category, "sub_category": sub_category}
    )

    try:
        created_product = repository.create(product)
        session.commit()
    except (PersistenceWriteFailure, SQLAlchemyError) as exc:
        session.rollback()
        logger.bind(error_type=type(exc).__name__).error(
            "Failed to create product: {}", exc
        )
        return JSONResponse(status_code=500, content={"error": "Failed to create product"})

    logger.bind(product_id=created_product.id).info("catalog.product.created")
    return created_product


@router.delete("", response_class=PlainTextResponse)
def delete_product(
    body: DeleteProductRequest,
    session: Session = Depends(get_session),
    repository: ProductRepository = Depends(get_product_repository),
):
    """Delete a product by ID; a missing product counts as a failed delete."""
    try:
        deleted = repository.delete(body.id)
        if not deleted:
            raise PersistenceWriteFailure(f"Product {body.id} not found")
        session.commit()
    except (PersistenceWriteFailure, SQLAlchemyError) as exc:
        session.rollback()
        logger.bind(product_id=body.id, error_type=type(exc).__name__).error(
            "Error deleting product: {}", exc
        )
        return PlainTextResponse("Error deleting product", status_code=500)

    logger.bind(product_id=body.id).info("catalog.product.deleted")
    return PlainTextResponse("OK")
