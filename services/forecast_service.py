"""
Forecast Service: Trailing-average demand and restock quantities.

For each product:
    avg_daily_sold       = units sold in the last `horizon` days / horizon
    projected demand     = avg_daily_sold × horizon
    recommended_quantity = max(0, round(projected demand - stock on hand))

This is a plain trailing average, not a seasonal or regression model.
It reacts to a demand spike only after the spike is in the window, and
keeps projecting yesterday's volume for products in steady decline.
"""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, List, Optional
import structlog

from config import Settings, get_settings
from models.product import ProductRecord
from models.recommendation import RestockRecommendation, ForecastResponse
from models.sales import SaleEvent
from services.record_source import RecordSource
from services.analytics_cache import AnalyticsCache, cached
from utils.money import ZERO, round_decimal, round_to_int
from utils.dates import utc_today
from exceptions import InvalidWindowError

logger = structlog.get_logger(__name__)


# ===================
# CALCULATIONS
# ===================

def calculate_avg_daily_sold(units_sold: int, horizon_days: int) -> Decimal:
    """Units per day over the horizon. 0 without sales."""
    if horizon_days <= 0 or units_sold <= 0:
        return ZERO
    return Decimal(units_sold) / Decimal(horizon_days)


def calculate_recommended_quantity(
    avg_daily_sold: Decimal,
    horizon_days: int,
    stock_quantity: int
) -> int:
    """Shortfall between projected demand and stock, never negative."""
    shortfall = avg_daily_sold * horizon_days - stock_quantity
    return max(0, round_to_int(shortfall))


def build_forecast(
    products: Iterable[ProductRecord],
    sales: Iterable[SaleEvent],
    horizon_days: int
) -> ForecastResponse:
    """
    Project demand for every product from sales inside the horizon.

    predicted_profit applies the window's profit per unit to the
    projected units; 0 when nothing sold.
    """
    units: dict[int, int] = defaultdict(int)
    window_units = 0
    window_profit = ZERO
    for sale in sales:
        units[sale.product_id] += sale.quantity_sold
        window_units += sale.quantity_sold
        window_profit += sale.profit

    predicted_sales = ZERO
    recommendations: List[RestockRecommendation] = []

    for product in sorted(products, key=lambda p: p.id):
        avg = calculate_avg_daily_sold(units.get(product.id, 0), horizon_days)
        predicted_sales += avg * horizon_days
        recommendations.append(RestockRecommendation(
            product_id=product.id,
            title=product.title,
            avg_daily_sold=round_decimal(avg),
            stock_quantity=product.stock_quantity,
            recommended_quantity=calculate_recommended_quantity(
                avg, horizon_days, product.stock_quantity
            ),
        ))

    profit_per_unit = window_profit / window_units if window_units > 0 else ZERO

    return ForecastResponse(
        horizon_days=horizon_days,
        predicted_sales=round_decimal(predicted_sales),
        predicted_profit=round_decimal(predicted_sales * profit_per_unit),
        recommended_stock=recommendations,
    )


# ===================
# SERVICE
# ===================

class ForecastService:
    """Demand forecast for one supplier at a time."""

    def __init__(
        self,
        source: RecordSource,
        settings: Optional[Settings] = None,
        cache: Optional[AnalyticsCache] = None
    ):
        self.source = source
        self.settings = settings or get_settings()
        self.cache = cache

    def get_forecast(
        self,
        tenant_id: int,
        horizon_days: Optional[int] = None,
        today: Optional[date] = None
    ) -> ForecastResponse:
        """
        Forecast demand and restock quantities.

        Args:
            tenant_id: Supplier profile ID
            horizon_days: Trailing window and projection length (default 30)
            today: Reference day (defaults to the UTC day)

        Returns:
            ForecastResponse

        Raises:
            InvalidWindowError: If horizon_days < 1
        """
        if horizon_days is None:
            horizon_days = self.settings.default_lookback_days
        if horizon_days < 1:
            raise InvalidWindowError(
                "horizon must be at least 1 day",
                details={"horizon_days": horizon_days}
            )
        today = today or utc_today()

        def compute():
            logger.info("getting_forecast", tenant_id=tenant_id, horizon_days=horizon_days)
            products = self.source.list_products(tenant_id)
            sales = self.source.list_sales(
                tenant_id,
                today - timedelta(days=horizon_days),
                today
            )
            forecast = build_forecast(products, sales, horizon_days)
            logger.info(
                "forecast_calculated",
                tenant_id=tenant_id,
                products=len(forecast.recommended_stock),
                predicted_sales=float(forecast.predicted_sales)
            )
            return forecast

        return cached(self.cache, ("forecast", tenant_id, horizon_days, today), compute)
