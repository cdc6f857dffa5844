"""Response payloads of the catalog API."""

from pydantic import BaseModel, ConfigDict, Field

from src.storefront.core.catalog import Category
from src.storefront.entities.service.product import Product

NO_PRODUCTS_MESSAGE = "Aucun produit trouvé dans cette catégorie"


class ProductPage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    products: list[Product]
    has_more: bool = Field(alias="hasMore")
    total: int


class CategoryProductPage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    products: list[Product]
    has_more: bool = Field(alias="hasMore")
    total_count: int = Field(alias="totalCount")


class CategoryEntry(BaseModel):
    key: str
    slug: str
    label: str
    wildcard: bool = False

    @classmethod
    def from_category(cls, category: Category) -> "CategoryEntry":
        return cls(
            key=category.key,
            slug=category.slug,
            label=category.label,
            wildcard=category.wildcard,
        )


class CategoryPageData(BaseModel):
    """Data behind the server-rendered category page."""

    model_config = ConfigDict(populate_by_name=True)

    category: CategoryEntry | None
    products: list[Product]
    has_more: bool = Field(alias="hasMore")
    total_count: int = Field(alias="totalCount")
    message: str | None = None


class DeleteProductRequest(BaseModel):
    id: str
