"""
MetricsService: Scalar KPIs for a supplier.

Sale-derived fields (investment, sales value, profit, margin) cover the
requested window, trailing 30 days by default. Stock fields always cover
the whole current catalog.

Every sum starts at 0, every ratio divides through utils.money.percentage,
so an empty store yields a summary of zeros rather than nulls.
"""

from typing import Iterable, List, Optional
from decimal import Decimal
from datetime import date
import structlog

from config import Settings, get_settings
from models.metrics import AnalyticsWindow, KPISummary, SalesTotals
from models.product import ProductRecord
from models.sales import SaleEvent
from services.record_source import RecordSource
from services.analytics_cache import AnalyticsCache, cached
from utils.money import ZERO, round_decimal, percentage
from utils.dates import utc_today

logger = structlog.get_logger(__name__)


# ===================
# CALCULATIONS
# ===================

def calculate_sales_totals(sales: Iterable[SaleEvent]) -> SalesTotals:
    """Sum investment, sales value and profit over sale events."""
    investment = ZERO
    sales_value = ZERO
    profit = ZERO

    for sale in sales:
        investment += sale.investment
        sales_value += sale.total_sale_amount
        profit += sale.profit

    return SalesTotals(
        total_investment=round_decimal(investment),
        total_sales_value=round_decimal(sales_value),
        total_profit=round_decimal(profit),
    )


def calculate_stock_value(products: Iterable[ProductRecord]) -> Decimal:
    """Σ purchase price × stock on hand."""
    total = sum(
        (p.supplier_purchase_price * p.stock_quantity for p in products),
        ZERO
    )
    return round_decimal(total)


def calculate_out_of_stock_percentage(products: List[ProductRecord]) -> Decimal:
    """Share of the catalog with zero stock. 0 for an empty catalog."""
    out_of_stock = sum(1 for p in products if p.stock_quantity == 0)
    return percentage(Decimal(out_of_stock), Decimal(len(products)))


def calculate_kpis(
    products: List[ProductRecord],
    sales: Iterable[SaleEvent]
) -> KPISummary:
    """
    Build the KPI summary.

    Args:
        products: Whole catalog (for stock fields)
        sales: Sales inside the window (for sale fields)

    Returns:
        KPISummary
    """
    totals = calculate_sales_totals(sales)

    return KPISummary(
        total_investment=totals.total_investment,
        total_sales_value=totals.total_sales_value,
        total_profit=totals.total_profit,
        profit_margin=percentage(totals.total_profit, totals.total_sales_value),
        stock_value=calculate_stock_value(products),
        out_of_stock_percentage=calculate_out_of_stock_percentage(products),
    )


# ===================
# SERVICE
# ===================

class MetricsService:
    """KPI aggregation for one supplier at a time."""

    def __init__(
        self,
        source: RecordSource,
        settings: Optional[Settings] = None,
        cache: Optional[AnalyticsCache] = None
    ):
        self.source = source
        self.settings = settings or get_settings()
        self.cache = cache

    def get_kpis(
        self,
        tenant_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        lookback_days: Optional[int] = None,
        today: Optional[date] = None
    ) -> KPISummary:
        """
        Calculate KPIs for a supplier.

        Args:
            tenant_id: Supplier profile ID
            start_date: Window start (overrides lookback)
            end_date: Window end (overrides lookback)
            lookback_days: Trailing days (default from settings)
            today: Reference day (defaults to the UTC day)

        Returns:
            KPISummary
        """
        today = today or utc_today()
        if start_date is None and end_date is None and lookback_days is None:
            lookback_days = self.settings.default_lookback_days

        window = AnalyticsWindow(
            tenant_id=tenant_id,
            start_date=start_date,
            end_date=end_date,
            lookback_days=lookback_days
        )

        return cached(
            self.cache,
            ("kpis", tenant_id, window.cache_key(), today),
            lambda: self._compute_kpis(window, today)
        )

    def _compute_kpis(self, window: AnalyticsWindow, today: date) -> KPISummary:
        start, end = window.resolve(today)
        logger.info(
            "calculating_kpis",
            tenant_id=window.tenant_id,
            start_date=start,
            end_date=end
        )

        products = self.source.list_products(window.tenant_id)
        sales = self.source.list_sales(window.tenant_id, start, end)
        kpis = calculate_kpis(products, sales)

        logger.info(
            "kpis_calculated",
            tenant_id=window.tenant_id,
            products=len(products),
            sales=len(sales),
            total_sales_value=float(kpis.total_sales_value)
        )
        return kpis
