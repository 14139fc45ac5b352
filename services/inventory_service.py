"""
Inventory service: stock labels and catalog age.

Stock status is a pure function of the quantity on hand:
    0              → Out of Stock
    1 .. below 5   → Low Stock
    5 and above    → In Stock
"""

from typing import Iterable, List, Optional
from datetime import date, datetime
import structlog

from config import Settings, get_settings
from models.product import ProductRecord, StockStatus
from models.inventory import InventoryItem, InventoryResponse, StockOverviewEntry
from services.record_source import RecordSource
from services.analytics_cache import AnalyticsCache, cached
from utils.dates import as_utc_datetime, utc_today

logger = structlog.get_logger(__name__)

LOW_STOCK_THRESHOLD = 5


def classify_stock(quantity: int, low_stock_threshold: int = LOW_STOCK_THRESHOLD) -> StockStatus:
    """Stock label for a quantity on hand."""
    if quantity <= 0:
        return StockStatus.OUT_OF_STOCK
    if quantity < low_stock_threshold:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def calculate_age_in_days(created_at: datetime, today: date) -> int:
    """Whole UTC days between listing and today. Never negative."""
    return max(0, (today - as_utc_datetime(created_at).date()).days)


def build_inventory(
    products: Iterable[ProductRecord],
    today: date,
    low_stock_threshold: int = LOW_STOCK_THRESHOLD
) -> List[InventoryItem]:
    """
    Classify every product, lowest stock first.

    Ties on stock are ordered by ascending id.
    """
    ordered = sorted(products, key=lambda p: (p.stock_quantity, p.id))
    return [
        InventoryItem(
            id=p.id,
            title=p.title,
            stock_quantity=p.stock_quantity,
            supplier_purchase_price=p.supplier_purchase_price,
            stock_status=classify_stock(p.stock_quantity, low_stock_threshold),
            age_in_days=calculate_age_in_days(p.created_at, today),
        )
        for p in ordered
    ]


def build_stock_overview(products: Iterable[ProductRecord]) -> List[StockOverviewEntry]:
    """Counts of products with and without stock."""
    in_stock = 0
    out_of_stock = 0
    for p in products:
        if p.stock_quantity > 0:
            in_stock += 1
        else:
            out_of_stock += 1

    return [
        StockOverviewEntry(name="In Stock", value=in_stock),
        StockOverviewEntry(name="Out of Stock", value=out_of_stock),
    ]


class InventoryService:
    """Inventory classification for one supplier at a time."""

    def __init__(
        self,
        source: RecordSource,
        settings: Optional[Settings] = None,
        cache: Optional[AnalyticsCache] = None
    ):
        self.source = source
        self.settings = settings or get_settings()
        self.cache = cache

    def get_inventory(self, tenant_id: int, today: Optional[date] = None) -> InventoryResponse:
        """
        Every product with its stock status and age.

        Args:
            tenant_id: Supplier profile ID
            today: Reference day (defaults to the UTC day)

        Returns:
            InventoryResponse, lowest stock first
        """
        today = today or utc_today()

        def compute():
            logger.info("getting_inventory", tenant_id=tenant_id)
            products = self.source.list_products(tenant_id)
            items = build_inventory(products, today, self.settings.low_stock_threshold)
            logger.info("inventory_classified", tenant_id=tenant_id, count=len(items))
            return InventoryResponse(data=items, total=len(items))

        return cached(self.cache, ("inventory", tenant_id, today), compute)
