"""Category listing and category page data."""

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.storefront.api.http.deps import get_catalog_engine
from src.storefront.api.http.schemas import (
    NO_PRODUCTS_MESSAGE,
    CategoryEntry,
    CategoryPageData,
)
from src.storefront.core.catalog import (
    CatalogQuery,
    CatalogQueryEngine,
    coerce_page,
    list_categories,
    resolve_category,
)

router = APIRouter(prefix="/categories", tags=["catalog"])


@router.get("", response_model=list[CategoryEntry])
def categories() -> list[CategoryEntry]:
    """Categories in selector order."""
    return [CategoryEntry.from_category(category) for category in list_categories()]


@router.get("/{category}", response_model=CategoryPageData)
def category_page(
    category: str,
    page: str | None = None,
    engine: CatalogQueryEngine = Depends(get_catalog_engine),
):
    """Products for the category page, with the empty-page message when needed."""
    resolution = resolve_category(category)
    if not resolution.ok:
        return CategoryPageData(
            category=None,
            products=[],
            has_more=False,
            total_count=0,
            message=NO_PRODUCTS_MESSAGE,
        )

    result = engine.query(
        CatalogQuery(
            category=resolution.category,
            page=coerce_page(page),
            page_size=engine.default_page_size,
        )
    )
    if result.failed:
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch products", "details": result.error.message},
        )
    return CategoryPageData(
        category=CategoryEntry.from_category(resolution.category),
        products=list(result.items),
        has_more=result.has_more,
        total_count=result.total_count,
        message=None if result.items else NO_PRODUCTS_MESSAGE,
    )
