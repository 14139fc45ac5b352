"""
Analytics API routes.

Supplier performance endpoints: KPIs, trends, rankings, inventory,
profitability, forecast, alerts and export. Every route is scoped to the
caller's supplier profile.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
import structlog

from config import Settings
from models.supplier import SupplierProfile
from models.metrics import KPISummary
from models.trends import SalesTrendResponse, SalesHeatmap
from models.analytics import TopProductsResponse, ProfitInsights, ExportResponse
from models.inventory import InventoryResponse
from models.recommendation import ForecastResponse
from models.alert import AlertsResponse
from routes.deps import (
    get_app_settings,
    get_cache,
    get_record_source,
    get_supplier_profile,
    handle_error,
)
from services.analytics_cache import AnalyticsCache
from services.record_source import RecordSource
from services.metrics_service import MetricsService
from services.trend_service import TrendService
from services.ranking_service import RankingService
from services.inventory_service import InventoryService
from services.profitability_service import ProfitabilityService
from services.forecast_service import ForecastService
from services.alert_service import AlertService
from services.export_service import ExportService, check_export_type

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# KPIS
# ===================

@router.get("/kpis", response_model=KPISummary)
def get_kpis(
    start_date: Optional[date] = Query(None, description="Window start (inclusive)"),
    end_date: Optional[date] = Query(None, description="Window end (inclusive)"),
    period: Optional[int] = Query(None, ge=1, le=3650, description="Trailing days (default 30)"),
    profile: SupplierProfile = Depends(get_supplier_profile),
    source: RecordSource = Depends(get_record_source),
    cache: Optional[AnalyticsCache] = Depends(get_cache),
    settings: Settings = Depends(get_app_settings),
):
    """
    Get overall KPIs.

    Sale fields cover the window (trailing 30 days unless overridden).
    stock_value and out_of_stock_percentage cover the whole catalog.
    """
    try:
        service = MetricsService(source, settings, cache)
        return service.get_kpis(
            profile.id,
            start_date=start_date,
            end_date=end_date,
            lookback_days=period
        )
    except Exception as e:
        return handle_error(e)


# ===================
# TRENDS
# ===================

@router.get("/sales-trend", response_model=SalesTrendResponse)
def get_sales_trend(
    period: Optional[int] = Query(None, ge=1, le=3650, description="Trailing days (default 30)"),
    profile: SupplierProfile = Depends(get_supplier_profile),
    source: RecordSource = Depends(get_record_source),
    cache: Optional[AnalyticsCache] = Depends(get_cache),
    settings: Settings = Depends(get_app_settings),
):
    """
    Get daily sales, profit and units over the trailing period.

    Days without sales are omitted from the series.
    """
    try:
        return TrendService(source, settings, cache).get_sales_trend(profile.id, period)
    except Exception as e:
        return handle_error(e)


@router.get("/heatmap", response_model=SalesHeatmap)
def get_sales_heatmap(
    period: Optional[int] = Query(None, ge=1, le=3650, description="Trailing days (default 30)"),
    profile: SupplierProfile = Depends(get_supplier_profile),
    source: RecordSource = Depends(get_record_source),
    cache: Optional[AnalyticsCache] = Depends(get_cache),
    settings: Settings = Depends(get_app_settings),
):
    """Get sales by weekday (Monday first) and by hour of day."""
    try:
        return TrendService(source, settings, cache).get_heatmap(profile.id, period)
    except Exception as e:
        return handle_error(e)


# ===================
# RANKINGS
# ===================

@router.get("/top-products", response_model=TopProductsResponse)
def get_top_products(
    profile: SupplierProfile = Depends(get_supplier_profile),
    source: RecordSource = Depends(get_record_source),
    cache: Optional[AnalyticsCache] = Depends(get_cache),
    settings: Settings = Depends(get_app_settings),
):
    """Get best sellers, most profitable products and category contribution."""
    try:
        return RankingService(source, settings, cache).get_top_products(profile.id)
    except Exception as e:
        return handle_error(e)


# ===================
# INVENTORY
# ===================

@router.get("/inventory", response_model=InventoryResponse)
def get_inventory(
    profile: SupplierProfile = Depends(get_supplier_profile),
    source: RecordSource = Depends(get_record_source),
    cache: Optional[AnalyticsCache] = Depends(get_cache),
    settings: Settings = Depends(get_app_settings),
):
    """Get every product with stock status and age, lowest stock first."""
    try:
        return InventoryService(source, settings, cache).get_inventory(profile.id)
    except Exception as e:
        return handle_error(e)


# ===================
# PROFITABILITY
# ===================

@router.get("/profit-insights", response_model=ProfitInsights)
def get_profit_insights(
    profile: SupplierProfile = Depends(get_supplier_profile),
    source: RecordSource = Depends(get_record_source),
    cache: Optional[AnalyticsCache] = Depends(get_cache),
):
    """Get the highest-margin product and products with no sales."""
    try:
        return ProfitabilityService(source, cache).get_profit_insights(profile.id)
    except Exception as e:
        return handle_error(e)


# ===================
# FORECAST
# ===================

@router.get("/forecast", response_model=ForecastResponse)
def get_forecast(
    period: Optional[int] = Query(None, ge=1, le=365, description="Forecast horizon in days (default 30)"),
    profile: SupplierProfile = Depends(get_supplier_profile),
    source: RecordSource = Depends(get_record_source),
    cache: Optional[AnalyticsCache] = Depends(get_cache),
    settings: Settings = Depends(get_app_settings),
):
    """
    Get predicted demand and recommended restock quantities.

    Trailing-average projection: lags spikes, overstates declines.
    """
    try:
        return ForecastService(source, settings, cache).get_forecast(profile.id, period)
    except Exception as e:
        return handle_error(e)


# ===================
# ALERTS
# ===================

@router.get("/alerts", response_model=AlertsResponse)
def get_alerts(
    profile: SupplierProfile = Depends(get_supplier_profile),
    source: RecordSource = Depends(get_record_source),
    cache: Optional[AnalyticsCache] = Depends(get_cache),
    settings: Settings = Depends(get_app_settings),
):
    """Get low stock, out of stock, aging inventory and high margin alerts."""
    try:
        return AlertService(source, settings, cache).get_alerts(profile.id)
    except Exception as e:
        return handle_error(e)


# ===================
# EXPORT
# ===================

@router.get("/export", response_model=ExportResponse)
def export_report(
    start: date = Query(..., description="First day included"),
    end: date = Query(..., description="Last day included"),
    type: str = Query("json", description="json or xlsx"),
    profile: SupplierProfile = Depends(get_supplier_profile),
    source: RecordSource = Depends(get_record_source),
):
    """
    Export sale totals for a date range and the current catalog.

    Returns JSON by default, or an Excel workbook with type=xlsx.
    """
    try:
        export_type = check_export_type(type)
        service = ExportService(source)
        report = service.build_report(profile.id, start, end)

        if export_type == "json":
            return report

        output = service.generate_report_excel(report)
        filename = f"supplier_report_{start.isoformat()}_{end.isoformat()}.xlsx"
        return StreamingResponse(
            output,
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'}
        )
    except Exception as e:
        return handle_error(e)
