"""
Profitability service.

Listing margins use utils.money.margin_percent, the same formula the
ranking and alert services rely on.
"""

from collections import defaultdict
from typing import Iterable, List, Optional
import structlog

from models.analytics import ProductMargin, ProductReference, ProfitInsights
from models.product import ProductRecord
from models.sales import SaleEvent
from services.record_source import RecordSource
from services.analytics_cache import AnalyticsCache, cached
from utils.money import margin_percent

logger = structlog.get_logger(__name__)


def product_margin(product: ProductRecord) -> ProductMargin:
    return ProductMargin(
        id=product.id,
        title=product.title,
        main_image=product.main_image,
        margin_percent=margin_percent(
            product.supplier_purchase_price,
            product.supplier_sold_price
        ),
    )


def find_highest_margin(products: Iterable[ProductRecord]) -> Optional[ProductMargin]:
    """
    The single product with the highest listing margin.

    Ties go to the lowest id. None for an empty catalog.
    """
    margins = [product_margin(p) for p in products]
    if not margins:
        return None
    return min(margins, key=lambda m: (-m.margin_percent, m.id))


def find_unsold_products(
    products: Iterable[ProductRecord],
    sales: Iterable[SaleEvent]
) -> List[ProductReference]:
    """Products whose lifetime units sold total 0, ascending by id."""
    sold: dict[int, int] = defaultdict(int)
    for sale in sales:
        sold[sale.product_id] += sale.quantity_sold

    return [
        ProductReference(id=p.id, title=p.title, main_image=p.main_image)
        for p in sorted(products, key=lambda p: p.id)
        if sold.get(p.id, 0) == 0
    ]


class ProfitabilityService:
    """Margin insights for one supplier at a time."""

    def __init__(self, source: RecordSource, cache: Optional[AnalyticsCache] = None):
        self.source = source
        self.cache = cache

    def get_profit_insights(self, tenant_id: int) -> ProfitInsights:
        """
        Highest-margin product and products that never sold.

        Args:
            tenant_id: Supplier profile ID

        Returns:
            ProfitInsights
        """
        def compute():
            logger.info("getting_profit_insights", tenant_id=tenant_id)
            products = self.source.list_products(tenant_id)
            sales = self.source.list_sales(tenant_id)
            insights = ProfitInsights(
                highest_margin=find_highest_margin(products),
                no_sales=find_unsold_products(products, sales),
            )
            logger.info(
                "profit_insights_calculated",
                tenant_id=tenant_id,
                no_sales=len(insights.no_sales)
            )
            return insights

        return cached(self.cache, ("profit_insights", tenant_id), compute)
