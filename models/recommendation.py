"""
Forecast and restock recommendation schemas.

Demand is projected from the trailing average only. It lags sudden
spikes and overstates demand for products in steady decline.
"""

from pydantic import Field
from decimal import Decimal
from typing import List

from models.base import BaseSchema


class RestockRecommendation(BaseSchema):
    """How many units to reorder for one product."""

    product_id: int
    title: str
    avg_daily_sold: Decimal = Field(..., description="Units per day over the horizon")
    stock_quantity: int = Field(..., description="Units on hand")
    recommended_quantity: int = Field(
        ...,
        ge=0,
        description="max(0, round(avg_daily_sold × horizon - stock))"
    )


class ForecastResponse(BaseSchema):
    """Demand forecast over a horizon."""

    horizon_days: int = Field(..., description="Trailing window and projection length")
    predicted_sales: Decimal = Field(..., description="Σ projected units across products")
    predicted_profit: Decimal = Field(
        ...,
        description="predicted_sales × historical profit per unit"
    )
    recommended_stock: List[RestockRecommendation]
