"""
Dashboard service: one-call summary for the supplier store page.

Combines:
- Month-to-date sales and profit, catalog counts, stock value, plan info
- 7-day sales trend, best sellers, stock overview
- Activity feed

Products and sales are fetched once and every section is derived from
the same snapshot, so the numbers agree with each other.
"""

import calendar
from datetime import date
from typing import Optional
import structlog

from config import Settings, get_settings
from models.dashboard import DashboardStats, DashboardCharts, StoreDashboard
from models.supplier import SupplierProfile
from services.activity_service import ActivityService
from services.inventory_service import build_stock_overview
from services.metrics_service import calculate_sales_totals, calculate_stock_value
from services.ranking_service import aggregate_by_product, rank_sold_best_sellers
from services.record_source import RecordSource
from utils.dates import utc_today
from services.trend_service import build_daily_trend, window_start

logger = structlog.get_logger(__name__)

FREE_PLAN_NAME = "Free Plan"


def month_bounds(today: date) -> tuple[date, date]:
    """First and last day of today's calendar month."""
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def resolve_upload_limit(profile: SupplierProfile, default_limit: int) -> int:
    """Plan upload limit, or the free-tier default when unset or 0."""
    return profile.upload_limit if profile.upload_limit > 0 else default_limit


class DashboardService:
    """Store dashboard for one supplier at a time."""

    def __init__(self, source: RecordSource, settings: Optional[Settings] = None):
        self.source = source
        self.settings = settings or get_settings()
        self.activity = ActivityService(source, self.settings)

    def get_store_dashboard(
        self,
        profile: SupplierProfile,
        today: Optional[date] = None
    ) -> StoreDashboard:
        """
        Build the store dashboard.

        Args:
            profile: Resolved supplier profile
            today: Reference day (defaults to the UTC day)

        Returns:
            StoreDashboard
        """
        today = today or utc_today()
        tenant_id = profile.id
        logger.info("building_store_dashboard", tenant_id=tenant_id)

        products = self.source.list_products(tenant_id)
        sales = self.source.list_sales(tenant_id)

        month_start, month_end = month_bounds(today)
        month_totals = calculate_sales_totals(
            s for s in sales if month_start <= s.sale_date <= month_end
        )

        trend_start = window_start(today, self.settings.dashboard_trend_days)
        trend = build_daily_trend(
            s for s in sales if trend_start <= s.sale_date <= today
        )

        quantity, _, _ = aggregate_by_product(sales)
        top_products = rank_sold_best_sellers(
            products,
            quantity,
            self.settings.ranking_limit
        )

        stats = DashboardStats(
            total_products=len(products),
            out_of_stock=sum(1 for p in products if p.stock_quantity <= 0),
            total_sales=month_totals.total_sales_value,
            total_profit=month_totals.total_profit,
            remaining_inventory=calculate_stock_value(products),
            upload_limit=resolve_upload_limit(profile, self.settings.default_upload_limit),
            plan_name=profile.plan_name or FREE_PLAN_NAME,
        )

        dashboard = StoreDashboard(
            stats=stats,
            charts=DashboardCharts(
                sales_trend=trend,
                top_products=top_products,
                stock_overview=build_stock_overview(products),
            ),
            activities=self.activity.get_activity(tenant_id, today),
        )

        logger.info(
            "store_dashboard_built",
            tenant_id=tenant_id,
            products=stats.total_products,
            activities=len(dashboard.activities)
        )
        return dashboard
