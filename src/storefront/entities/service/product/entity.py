"""Entity: Product."""

from typing import Any

from pydantic import Field, computed_field

from src.storefront.entities.core._base import Entity


class Product(Entity):
    """Product entity representing a catalog item.

    This is the domain model that contains business logic and validation.
    It inherits from Entity to get auto-generated UUID identifiers.
    Category fields hold canonical category keys, as stored.
    """

    name: str = Field(description="Display name")
    ref: str = Field(default="", description="Supplier reference")
    slug: str = Field(default="", description="URL slug of the product page")
    main_category: str = Field(description="Canonical key of the main category")
    sub_category: str | None = Field(
        default=None, description="Canonical key of the sub category"
    )
    initial_price: float = Field(default=0.0, ge=0, description="Price before deal")
    top_deals_price: float = Field(default=0.0, ge=0, description="Deal price")
    dimensions: str = Field(default="", description="Dimensions, '+' separated per pack item")
    main_image: str = Field(default="", description="Main image URL")
    gallery: list[str] = Field(default_factory=list, description="Gallery image URLs")
    is_active: bool = Field(default=True, description="Soft-delete marker")

    @computed_field
    @property
    def discount_percentage(self) -> int:
        """Rounded discount of the deal price against the initial price."""
        if self.initial_price <= 0:
            return 0
        return round((1 - self.top_deals_price / self.initial_price) * 100)

    def __eq__(self, other: Any) -> bool:
        """Compare products by business attributes, ignoring timestamps."""
        if not isinstance(other, Product):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.ref == other.ref
            and self.main_category == other.main_category
            and self.sub_category == other.sub_category
            and self.initial_price == other.initial_price
            and self.top_deals_price == other.top_deals_price
            and self.is_active == other.is_active
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.name,
            self.ref,
            self.main_category,
            self.sub_category,
        ))
