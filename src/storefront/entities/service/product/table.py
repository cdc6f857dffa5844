"""Product database table model."""

from sqlalchemy import JSON, Column
from sqlmodel import Field

from src.storefront.entities.core._base import EntityTable


class ProductTable(EntityTable, table=True):
    """Database persistence model for products.

    This represents how the Product entity is stored in the database.
    It's separate from the domain entity to maintain clean architecture
    while keeping related code together.
    """

    __tablename__ = "product"

    name: str
    ref: str = ""
    slug: str = ""
    main_category: str = Field(index=True)
    sub_category: str | None = Field(default=None, index=True)
    initial_price: float = 0.0
    top_deals_price: float = 0.0
    dimensions: str = ""
    main_image: str = ""
    gallery: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    is_active: bool = Field(default=True, index=True)
