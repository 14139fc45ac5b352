"""
Analytics services.

Each service handles one analytics area and reads through a RecordSource.
"""

from services.record_source import RecordSource
from services.analytics_cache import AnalyticsCache
from services.metrics_service import MetricsService
from services.trend_service import TrendService
from services.ranking_service import RankingService
from services.inventory_service import InventoryService
from services.profitability_service import ProfitabilityService
from services.forecast_service import ForecastService
from services.alert_service import AlertService
from services.activity_service import ActivityService
from services.dashboard_service import DashboardService
from services.export_service import ExportService
from services.sales_service import calculate_sale_totals, apply_sale_correction

__all__ = [
    "RecordSource",
    "AnalyticsCache",
    "MetricsService",
    "TrendService",
    "RankingService",
    "InventoryService",
    "ProfitabilityService",
    "ForecastService",
    "AlertService",
    "ActivityService",
    "DashboardService",
    "ExportService",
    "calculate_sale_totals",
    "apply_sale_correction",
]
