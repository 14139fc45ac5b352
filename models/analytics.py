"""
Analytics schemas for ranking, profitability and export endpoints.
"""

from datetime import date
from typing import Optional, List
from decimal import Decimal
from pydantic import Field

from models.base import BaseSchema
from models.metrics import SalesTotals


# ===================
# RANKINGS
# ===================

class BestSellingProduct(BaseSchema):
    """Product ranked by units sold."""

    id: int = Field(..., description="Product ID")
    title: str = Field(..., description="Product title")
    total_quantity: int = Field(..., description="Σ quantity sold, all time")


class ProfitableProduct(BaseSchema):
    """Product ranked by profit."""

    id: int = Field(..., description="Product ID")
    title: str = Field(..., description="Product title")
    total_profit: Decimal = Field(..., description="Σ profit, all time")


class CategorySales(BaseSchema):
    """Sales value contributed by one category."""

    category: str = Field(..., description="Category name or 'Uncategorized'")
    sales_value: Decimal = Field(..., description="Σ total sale amount")


class TopProductsResponse(BaseSchema):
    """Response for the top products endpoint."""

    best_selling: List[BestSellingProduct] = Field(..., description="Top products by units")
    most_profitable: List[ProfitableProduct] = Field(..., description="Top products by profit")
    categories: List[CategorySales] = Field(..., description="Category contribution, highest first")


# ===================
# PROFITABILITY
# ===================

class ProductMargin(BaseSchema):
    """Listing margin for a product."""

    id: int
    title: str
    main_image: Optional[str] = None
    margin_percent: Decimal = Field(..., description="(sold - purchase) / sold × 100")


class ProductReference(BaseSchema):
    """Minimal product identity for lists."""

    id: int
    title: str
    main_image: Optional[str] = None


class ProfitInsights(BaseSchema):
    """Response for the profit insights endpoint."""

    highest_margin: Optional[ProductMargin] = Field(
        None,
        description="Single highest-margin product, null without products"
    )
    no_sales: List[ProductReference] = Field(
        ...,
        description="Products that never sold"
    )


# ===================
# EXPORT
# ===================

class ExportProduct(BaseSchema):
    """Product row in an export."""

    id: int
    title: str
    stock_quantity: int
    supplier_purchase_price: Decimal
    supplier_sold_price: Optional[Decimal] = None


class ExportResponse(BaseSchema):
    """JSON report for a date range."""

    start: date = Field(..., description="First day included")
    end: date = Field(..., description="Last day included")
    kpis: SalesTotals = Field(..., description="Sale totals inside the range")
    products: List[ExportProduct] = Field(..., description="Current catalog")
