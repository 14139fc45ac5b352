"""
Alert models.

Alerts are derived on every request from current catalog state:
- Low stock
- Out of stock
- Aging inventory
- High margin

A product may appear in several lists at once.
"""

from decimal import Decimal
from typing import List
from pydantic import Field

from models.base import BaseSchema


class LowStockAlert(BaseSchema):
    id: int
    title: str
    stock_quantity: int


class OutOfStockAlert(BaseSchema):
    id: int
    title: str


class AgingInventoryAlert(BaseSchema):
    id: int
    title: str
    days_unsold: int = Field(..., description="Days since the product was listed")


class HighProfitAlert(BaseSchema):
    id: int
    title: str
    margin_percent: Decimal


class AlertsResponse(BaseSchema):
    """All alert lists for a supplier."""

    low_stock: List[LowStockAlert]
    out_of_stock: List[OutOfStockAlert]
    aging_inventory: List[AgingInventoryAlert]
    high_profit: List[HighProfitAlert]
