"""
Sale event schemas.

One row per completed sale in the product_sales table.
"""

from datetime import date, datetime
from typing import Optional
from decimal import Decimal
from pydantic import Field, field_validator

from models.base import BaseSchema


class SaleEvent(BaseSchema):
    """
    A completed sale.

    total_sale_amount and profit are stored, not derived, so analytics
    sum them as recorded. supplier_purchase_price is the product's
    current cost, joined in by the record source.
    """

    id: int = Field(..., description="Sale ID")
    product_id: int = Field(..., description="Product ID")
    quantity_sold: int = Field(..., gt=0, description="Units sold")
    sold_price_per_unit: Decimal = Field(default=Decimal("0"), description="Unit sale price")
    total_sale_amount: Decimal = Field(default=Decimal("0"), description="quantity × unit price")
    profit: Decimal = Field(default=Decimal("0"), description="(unit price - cost) × quantity")
    sale_date: date = Field(..., description="Day of the sale")
    sale_channel: Optional[str] = Field(default="local", description="Where the sale happened")
    notes: Optional[str] = None
    created_at: Optional[datetime] = Field(None, description="When the sale was recorded")
    supplier_purchase_price: Decimal = Field(
        default=Decimal("0"),
        description="Product cost per unit"
    )

    @field_validator(
        "sold_price_per_unit", "total_sale_amount", "profit", "supplier_purchase_price",
        mode="before"
    )
    @classmethod
    def null_as_zero(cls, v):
        if v is None:
            return Decimal("0")
        return Decimal(str(v))

    @field_validator("sale_date", mode="before")
    @classmethod
    def parse_date(cls, v):
        """Parse date from string or datetime."""
        if isinstance(v, str):
            return date.fromisoformat(v[:10])
        if isinstance(v, datetime):
            return v.date()
        return v

    @property
    def hour(self) -> int:
        """Hour of day the sale was recorded (0 when unknown)."""
        return self.created_at.hour if self.created_at else 0

    @property
    def investment(self) -> Decimal:
        """Cost of the units sold."""
        return self.supplier_purchase_price * self.quantity_sold


class SaleTotals(BaseSchema):
    """Derived amounts for a sale."""

    total_sale_amount: Decimal
    profit: Decimal


class SaleCorrection(BaseSchema):
    """Administrative edit to a recorded sale."""

    quantity_sold: Optional[int] = Field(None, gt=0, description="New quantity")
    sold_price_per_unit: Optional[Decimal] = Field(None, ge=0, description="New unit price")
