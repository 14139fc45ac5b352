"""
Product schemas.

Rows from the products table as the analytics services see them.
"""

from pydantic import Field, field_validator
from typing import Optional
from enum import Enum
from decimal import Decimal

from models.base import BaseSchema, TimestampMixin


class ProductStatus(str, Enum):
    """Catalog status of a product."""
    ACTIVE = "active"
    OUT_OF_STOCK = "out_of_stock"
    ARCHIVED = "archived"


class StockStatus(str, Enum):
    """Stock label derived from quantity on hand."""
    OUT_OF_STOCK = "Out of Stock"
    LOW_STOCK = "Low Stock"
    IN_STOCK = "In Stock"


UNCATEGORIZED = "Uncategorized"


class ProductRecord(BaseSchema, TimestampMixin):
    """
    A supplier's product.

    Prices are per unit. supplier_sold_price may be missing for
    products that were never listed.
    """

    id: int = Field(..., description="Product ID")
    store_id: int = Field(..., description="Owning supplier profile ID")
    title: str = Field(default="", description="Product title")
    supplier_purchase_price: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Supplier cost per unit"
    )
    supplier_sold_price: Optional[Decimal] = Field(
        None,
        ge=0,
        description="Listing price per unit"
    )
    stock_quantity: int = Field(default=0, ge=0, description="Units on hand")
    category: Optional[str] = Field(None, description="Free-form category")
    main_image: Optional[str] = Field(None, description="Main image URL")
    status: ProductStatus = Field(default=ProductStatus.ACTIVE)

    @field_validator("supplier_purchase_price", "stock_quantity", mode="before")
    @classmethod
    def null_as_zero(cls, v):
        """Database NULLs count as zero."""
        return 0 if v is None else v

    @field_validator("category", mode="before")
    @classmethod
    def blank_category_as_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def category_label(self) -> str:
        """Category name with blanks coalesced."""
        return self.category or UNCATEGORIZED
