"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema, TimestampMixin
from models.product import ProductRecord, ProductStatus, StockStatus, UNCATEGORIZED
from models.sales import SaleEvent, SaleTotals, SaleCorrection
from models.supplier import SupplierProfile
from models.activity import (
    ActivityItem,
    ReviewEvent,
    LowStockEvent,
    PlanExpiryEvent,
)
from models.metrics import AnalyticsWindow, KPISummary, SalesTotals
from models.trends import (
    TrendPoint,
    SalesTrendResponse,
    WeekdaySales,
    HourlySales,
    SalesHeatmap,
)
from models.analytics import (
    BestSellingProduct,
    ProfitableProduct,
    CategorySales,
    TopProductsResponse,
    ProductMargin,
    ProductReference,
    ProfitInsights,
    ExportProduct,
    ExportResponse,
)
from models.inventory import InventoryItem, InventoryResponse, StockOverviewEntry
from models.recommendation import RestockRecommendation, ForecastResponse
from models.alert import (
    LowStockAlert,
    OutOfStockAlert,
    AgingInventoryAlert,
    HighProfitAlert,
    AlertsResponse,
)
from models.dashboard import DashboardStats, DashboardCharts, StoreDashboard

__all__ = [
    # Base
    "BaseSchema",
    "TimestampMixin",

    # Records
    "ProductRecord",
    "ProductStatus",
    "StockStatus",
    "UNCATEGORIZED",
    "SaleEvent",
    "SaleTotals",
    "SaleCorrection",
    "SupplierProfile",

    # Activity
    "ActivityItem",
    "ReviewEvent",
    "LowStockEvent",
    "PlanExpiryEvent",

    # Metrics
    "AnalyticsWindow",
    "KPISummary",
    "SalesTotals",

    # Trends
    "TrendPoint",
    "SalesTrendResponse",
    "WeekdaySales",
    "HourlySales",
    "SalesHeatmap",

    # Rankings / profitability / export
    "BestSellingProduct",
    "ProfitableProduct",
    "CategorySales",
    "TopProductsResponse",
    "ProductMargin",
    "ProductReference",
    "ProfitInsights",
    "ExportProduct",
    "ExportResponse",

    # Inventory
    "InventoryItem",
    "InventoryResponse",
    "StockOverviewEntry",

    # Forecast
    "RestockRecommendation",
    "ForecastResponse",

    # Alerts
    "LowStockAlert",
    "OutOfStockAlert",
    "AgingInventoryAlert",
    "HighProfitAlert",
    "AlertsResponse",

    # Dashboard
    "DashboardStats",
    "DashboardCharts",
    "StoreDashboard",
]
