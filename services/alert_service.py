"""
Alert service.

Generates alert lists from current catalog state. The four rule sets
are independent; no severity ranking and no deduplication between them.
"""

from typing import Iterable, List, Optional
from datetime import date
from decimal import Decimal
import structlog

from config import Settings, get_settings
from models.alert import (
    LowStockAlert,
    OutOfStockAlert,
    AgingInventoryAlert,
    HighProfitAlert,
    AlertsResponse,
)
from models.product import ProductRecord
from services.inventory_service import calculate_age_in_days
from services.record_source import RecordSource
from services.analytics_cache import AnalyticsCache, cached
from utils.money import margin_percent
from utils.dates import utc_today

logger = structlog.get_logger(__name__)


# ===================
# RULES
# ===================

def find_low_stock(products: Iterable[ProductRecord], threshold: int = 5) -> List[LowStockAlert]:
    """Products with 0 < stock < threshold."""
    return [
        LowStockAlert(id=p.id, title=p.title, stock_quantity=p.stock_quantity)
        for p in products
        if 0 < p.stock_quantity < threshold
    ]


def find_out_of_stock(products: Iterable[ProductRecord]) -> List[OutOfStockAlert]:
    return [
        OutOfStockAlert(id=p.id, title=p.title)
        for p in products
        if p.stock_quantity == 0
    ]


def find_aging_inventory(
    products: Iterable[ProductRecord],
    today: date,
    max_age_days: int = 30
) -> List[AgingInventoryAlert]:
    """Products listed more than max_age_days ago."""
    alerts = []
    for p in products:
        age = calculate_age_in_days(p.created_at, today)
        if age > max_age_days:
            alerts.append(AgingInventoryAlert(id=p.id, title=p.title, days_unsold=age))
    return alerts


def find_high_profit(
    products: Iterable[ProductRecord],
    min_margin: Decimal = Decimal("40")
) -> List[HighProfitAlert]:
    """
    Products with listing margin >= min_margin.

    Unpriced products (sold price missing or 0) never qualify.
    """
    alerts = []
    for p in products:
        if not p.supplier_sold_price or p.supplier_sold_price <= 0:
            continue
        margin = margin_percent(p.supplier_purchase_price, p.supplier_sold_price)
        if margin >= min_margin:
            alerts.append(HighProfitAlert(id=p.id, title=p.title, margin_percent=margin))
    return alerts


def build_alerts(
    products: List[ProductRecord],
    today: date,
    settings: Settings
) -> AlertsResponse:
    """Evaluate every rule set against the catalog (ordered by id)."""
    ordered = sorted(products, key=lambda p: p.id)
    return AlertsResponse(
        low_stock=find_low_stock(ordered, settings.low_stock_threshold),
        out_of_stock=find_out_of_stock(ordered),
        aging_inventory=find_aging_inventory(ordered, today, settings.aging_days_threshold),
        high_profit=find_high_profit(ordered, Decimal(settings.high_margin_threshold)),
    )


# ===================
# SERVICE
# ===================

class AlertService:
    """Threshold alerts for one supplier at a time."""

    def __init__(
        self,
        source: RecordSource,
        settings: Optional[Settings] = None,
        cache: Optional[AnalyticsCache] = None
    ):
        self.source = source
        self.settings = settings or get_settings()
        self.cache = cache

    def get_alerts(self, tenant_id: int, today: Optional[date] = None) -> AlertsResponse:
        """
        Low stock, out of stock, aging inventory and high margin alerts.

        Args:
            tenant_id: Supplier profile ID
            today: Reference day (defaults to the UTC day)

        Returns:
            AlertsResponse
        """
        today = today or utc_today()

        def compute():
            logger.info("generating_alerts", tenant_id=tenant_id)
            products = self.source.list_products(tenant_id)
            alerts = build_alerts(products, today, self.settings)
            logger.info(
                "alerts_generated",
                tenant_id=tenant_id,
                low_stock=len(alerts.low_stock),
                out_of_stock=len(alerts.out_of_stock),
                aging_inventory=len(alerts.aging_inventory),
                high_profit=len(alerts.high_profit)
            )
            return alerts

        return cached(self.cache, ("alerts", tenant_id, today), compute)
