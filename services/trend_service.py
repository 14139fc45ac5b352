"""
Trend Service: Sales time series for a supplier.

Buckets sale events over a trailing window:
1. By calendar day (sales trend chart)
2. By weekday name and by hour of day (sales heatmap)

Series are sparse. Only buckets with at least one sale are returned;
consumers must not assume one point per day.
"""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, List, Optional
import structlog

from config import Settings, get_settings
from models.sales import SaleEvent
from models.trends import (
    WEEKDAY_NAMES,
    TrendPoint,
    SalesTrendResponse,
    WeekdaySales,
    HourlySales,
    SalesHeatmap,
)
from services.record_source import RecordSource
from services.analytics_cache import AnalyticsCache, cached
from utils.money import ZERO, round_decimal
from utils.dates import utc_today
from exceptions import InvalidWindowError

logger = structlog.get_logger(__name__)


# ===================
# CALCULATIONS
# ===================

def window_start(today: date, period_days: int) -> date:
    """First day of a trailing window [today - period, today]."""
    return today - timedelta(days=period_days)


def build_daily_trend(sales: Iterable[SaleEvent]) -> List[TrendPoint]:
    """
    Group sales by day.

    Returns:
        One TrendPoint per day with sales, ascending by date
    """
    sales_by_day: dict[date, Decimal] = defaultdict(lambda: ZERO)
    profit_by_day: dict[date, Decimal] = defaultdict(lambda: ZERO)
    units_by_day: dict[date, int] = defaultdict(int)

    for sale in sales:
        day = sale.sale_date
        sales_by_day[day] += sale.total_sale_amount
        profit_by_day[day] += sale.profit
        units_by_day[day] += sale.quantity_sold

    return [
        TrendPoint(
            date=day,
            total_sales=round_decimal(sales_by_day[day]),
            total_profit=round_decimal(profit_by_day[day]),
            total_units_sold=units_by_day[day],
        )
        for day in sorted(sales_by_day)
    ]


def build_weekday_sales(sales: Iterable[SaleEvent]) -> List[WeekdaySales]:
    """Sales value per weekday, Monday first. Weekdays without sales are omitted."""
    totals: dict[int, Decimal] = {}
    for sale in sales:
        weekday = sale.sale_date.weekday()
        totals[weekday] = totals.get(weekday, ZERO) + sale.total_sale_amount

    return [
        WeekdaySales(day=WEEKDAY_NAMES[weekday], total_sales=round_decimal(totals[weekday]))
        for weekday in sorted(totals)
    ]


def build_hourly_sales(sales: Iterable[SaleEvent]) -> List[HourlySales]:
    """Sales value per hour of day, ascending. Hours without sales are omitted."""
    totals: dict[int, Decimal] = {}
    for sale in sales:
        totals[sale.hour] = totals.get(sale.hour, ZERO) + sale.total_sale_amount

    return [
        HourlySales(hour=hour, total_sales=round_decimal(totals[hour]))
        for hour in sorted(totals)
    ]


# ===================
# SERVICE
# ===================

class TrendService:
    """Sales trends for one supplier at a time."""

    def __init__(
        self,
        source: RecordSource,
        settings: Optional[Settings] = None,
        cache: Optional[AnalyticsCache] = None
    ):
        self.source = source
        self.settings = settings or get_settings()
        self.cache = cache

    def get_sales_trend(
        self,
        tenant_id: int,
        period_days: Optional[int] = None,
        today: Optional[date] = None
    ) -> SalesTrendResponse:
        """
        Daily sales over the trailing period.

        Args:
            tenant_id: Supplier profile ID
            period_days: Lookback in days (default from settings)
            today: Reference day (defaults to the UTC day)

        Returns:
            SalesTrendResponse with a sparse, ascending series
        """
        period_days = self._check_period(period_days)
        today = today or utc_today()

        def compute():
            logger.info("getting_sales_trend", tenant_id=tenant_id, period_days=period_days)
            sales = self.source.list_sales(tenant_id, window_start(today, period_days), today)
            points = build_daily_trend(sales)
            logger.info("sales_trend_calculated", tenant_id=tenant_id, points=len(points))
            return SalesTrendResponse(period_days=period_days, data=points)

        return cached(self.cache, ("sales_trend", tenant_id, period_days, today), compute)

    def get_heatmap(
        self,
        tenant_id: int,
        period_days: Optional[int] = None,
        today: Optional[date] = None
    ) -> SalesHeatmap:
        """Sales by weekday and by hour over the trailing period."""
        period_days = self._check_period(period_days)
        today = today or utc_today()

        def compute():
            logger.info("getting_sales_heatmap", tenant_id=tenant_id, period_days=period_days)
            sales = self.source.list_sales(tenant_id, window_start(today, period_days), today)
            return SalesHeatmap(
                daily_sales=build_weekday_sales(sales),
                hourly_sales=build_hourly_sales(sales),
            )

        return cached(self.cache, ("heatmap", tenant_id, period_days, today), compute)

    def _check_period(self, period_days: Optional[int]) -> int:
        if period_days is None:
            return self.settings.default_lookback_days
        if period_days < 1:
            raise InvalidWindowError(
                "period must be at least 1 day",
                details={"period_days": period_days}
            )
        return period_days
