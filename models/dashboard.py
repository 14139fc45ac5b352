"""
Store dashboard schemas.

The dashboard bundles month-to-date stats, small charts and the
activity feed into one response.
"""

from decimal import Decimal
from typing import List
from pydantic import Field

from models.base import BaseSchema
from models.activity import ActivityItem
from models.analytics import BestSellingProduct
from models.inventory import StockOverviewEntry
from models.trends import TrendPoint


class DashboardStats(BaseSchema):
    """Headline numbers for the store dashboard."""

    total_products: int = 0
    out_of_stock: int = 0
    total_sales: Decimal = Field(default=Decimal("0"), description="Current calendar month")
    total_profit: Decimal = Field(default=Decimal("0"), description="Current calendar month")
    remaining_inventory: Decimal = Field(default=Decimal("0"), description="Stock value at cost")
    upload_limit: int
    plan_name: str


class DashboardCharts(BaseSchema):
    sales_trend: List[TrendPoint]
    top_products: List[BestSellingProduct]
    stock_overview: List[StockOverviewEntry]


class StoreDashboard(BaseSchema):
    """Response for the store dashboard endpoint."""

    success: bool = True
    stats: DashboardStats
    charts: DashboardCharts
    activities: List[ActivityItem]
