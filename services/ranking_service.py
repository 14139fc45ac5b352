"""
Ranking Service: Top products and category contribution.

Rankings cover all sales history. Every catalog product takes part,
with an aggregate of 0 when it never sold, so lists are filled from
the catalog even for new stores. Ties are broken by ascending product
id so the order is deterministic.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, List, Optional
import structlog

from config import Settings, get_settings
from models.analytics import (
    BestSellingProduct,
    ProfitableProduct,
    CategorySales,
    TopProductsResponse,
)
from models.product import ProductRecord
from models.sales import SaleEvent
from services.record_source import RecordSource
from services.analytics_cache import AnalyticsCache, cached
from utils.money import ZERO, round_decimal

logger = structlog.get_logger(__name__)

DEFAULT_RANKING_LIMIT = 5


# ===================
# CALCULATIONS
# ===================

def aggregate_by_product(sales: Iterable[SaleEvent]) -> tuple[dict[int, int], dict[int, Decimal], dict[int, Decimal]]:
    """
    Sum quantity, profit and sales value per product.

    Returns:
        (quantity_by_product, profit_by_product, value_by_product)
    """
    quantity: dict[int, int] = defaultdict(int)
    profit: dict[int, Decimal] = defaultdict(lambda: ZERO)
    value: dict[int, Decimal] = defaultdict(lambda: ZERO)

    for sale in sales:
        quantity[sale.product_id] += sale.quantity_sold
        profit[sale.product_id] += sale.profit
        value[sale.product_id] += sale.total_sale_amount

    return quantity, profit, value


def rank_best_selling(
    products: List[ProductRecord],
    quantity_by_product: dict[int, int],
    limit: int = DEFAULT_RANKING_LIMIT
) -> List[BestSellingProduct]:
    """Top products by units sold, ties by ascending id."""
    ranked = sorted(
        products,
        key=lambda p: (-quantity_by_product.get(p.id, 0), p.id)
    )[:limit]

    return [
        BestSellingProduct(id=p.id, title=p.title, total_quantity=quantity_by_product.get(p.id, 0))
        for p in ranked
    ]


def rank_sold_best_sellers(
    products: List[ProductRecord],
    quantity_by_product: dict[int, int],
    limit: int = DEFAULT_RANKING_LIMIT
) -> List[BestSellingProduct]:
    """Best sellers among products with at least one unit sold."""
    sold = [p for p in products if quantity_by_product.get(p.id, 0) > 0]
    return rank_best_selling(sold, quantity_by_product, limit)


def rank_most_profitable(
    products: List[ProductRecord],
    profit_by_product: dict[int, Decimal],
    limit: int = DEFAULT_RANKING_LIMIT
) -> List[ProfitableProduct]:
    """Top products by profit, ties by ascending id."""
    ranked = sorted(
        products,
        key=lambda p: (-profit_by_product.get(p.id, ZERO), p.id)
    )[:limit]

    return [
        ProfitableProduct(
            id=p.id,
            title=p.title,
            total_profit=round_decimal(profit_by_product.get(p.id, ZERO))
        )
        for p in ranked
    ]


def rank_categories(
    products: List[ProductRecord],
    value_by_product: dict[int, Decimal]
) -> List[CategorySales]:
    """
    Sales value per category, highest first.

    Products without a category count as "Uncategorized". Categories
    with no sales are listed with 0.
    """
    totals: dict[str, Decimal] = {}
    for p in products:
        label = p.category_label
        totals[label] = totals.get(label, ZERO) + value_by_product.get(p.id, ZERO)

    ranked = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return [
        CategorySales(category=category, sales_value=round_decimal(value))
        for category, value in ranked
    ]


def build_top_products(
    products: List[ProductRecord],
    sales: Iterable[SaleEvent],
    limit: int = DEFAULT_RANKING_LIMIT
) -> TopProductsResponse:
    """All three rankings from one pass over the sales."""
    quantity, profit, value = aggregate_by_product(sales)
    return TopProductsResponse(
        best_selling=rank_best_selling(products, quantity, limit),
        most_profitable=rank_most_profitable(products, profit, limit),
        categories=rank_categories(products, value),
    )


# ===================
# SERVICE
# ===================

class RankingService:
    """Product and category rankings for one supplier at a time."""

    def __init__(
        self,
        source: RecordSource,
        settings: Optional[Settings] = None,
        cache: Optional[AnalyticsCache] = None
    ):
        self.source = source
        self.settings = settings or get_settings()
        self.cache = cache

    def get_top_products(self, tenant_id: int) -> TopProductsResponse:
        """
        Best sellers, most profitable products and category contribution.

        Args:
            tenant_id: Supplier profile ID

        Returns:
            TopProductsResponse
        """
        def compute():
            logger.info("getting_top_products", tenant_id=tenant_id)
            products = self.source.list_products(tenant_id)
            sales = self.source.list_sales(tenant_id)
            response = build_top_products(products, sales, self.settings.ranking_limit)
            logger.info(
                "top_products_calculated",
                tenant_id=tenant_id,
                products=len(products),
                categories=len(response.categories)
            )
            return response

        return cached(self.cache, ("top_products", tenant_id), compute)
