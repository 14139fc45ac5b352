"""
Inventory classification schemas.
"""

from pydantic import Field
from decimal import Decimal
from typing import List

from models.base import BaseSchema
from models.product import StockStatus


class InventoryItem(BaseSchema):
    """A product with its stock label and catalog age."""

    id: int = Field(..., description="Product ID")
    title: str = Field(..., description="Product title")
    stock_quantity: int = Field(..., ge=0, description="Units on hand")
    supplier_purchase_price: Decimal = Field(..., description="Supplier cost per unit")
    stock_status: StockStatus = Field(..., description="Out of Stock, Low Stock or In Stock")
    age_in_days: int = Field(..., ge=0, description="Whole days since the product was listed")


class StockOverviewEntry(BaseSchema):
    """Count of products in one stock bucket."""

    name: str
    value: int


class InventoryResponse(BaseSchema):
    """Inventory listing, lowest stock first."""

    data: List[InventoryItem]
    total: int
