"""
Unit tests for MetricsService.

Covers:
1. Sale totals (investment, sales value, profit)
2. Stock fields over the whole catalog
3. Empty stores yield zeros
4. Window resolution and validation
"""

import pytest
from datetime import timedelta
from decimal import Decimal

from config.settings import Settings
from services.metrics_service import (
    MetricsService,
    calculate_kpis,
    calculate_sales_totals,
    calculate_stock_value,
    calculate_out_of_stock_percentage,
)
from services.analytics_cache import AnalyticsCache
from exceptions import InvalidWindowError
from tests.conftest import InMemoryRecordSource, STORE_ID
from tests.factories import ProductFactory, SaleFactory


# ===================
# TEST 1: CALCULATIONS
# ===================

class TestCalculateKpis:
    """Tests for the pure KPI calculation."""

    def test_single_product_scenario(self, today):
        """Lamp bought at 10, sold twice at 20, now out of stock."""
        products = [ProductFactory.build(
            id=1, supplier_purchase_price="10", supplier_sold_price="20", stock_quantity=0
        )]
        sales = [SaleFactory.build(
            product_id=1, quantity_sold=2, sold_price_per_unit="20",
            supplier_purchase_price="10", sale_date=today.isoformat()
        )]

        kpis = calculate_kpis(products, sales)

        assert kpis.total_investment == Decimal("20")
        assert kpis.total_sales_value == Decimal("40")
        assert kpis.total_profit == Decimal("20")
        assert kpis.profit_margin == Decimal("50")
        assert kpis.stock_value == Decimal("0")
        assert kpis.out_of_stock_percentage == Decimal("100")

    def test_empty_store_is_all_zero(self):
        """No products and no sales: zeros, never NaN or None."""
        kpis = calculate_kpis([], [])

        for field in (
            "total_investment", "total_sales_value", "total_profit",
            "profit_margin", "stock_value", "out_of_stock_percentage",
        ):
            assert getattr(kpis, field) == Decimal("0")

    def test_products_without_sales(self):
        """Stock fields populate, sale fields stay 0."""
        products = [
            ProductFactory.build(supplier_purchase_price="2.50", stock_quantity=4),
            ProductFactory.build(supplier_purchase_price="1.00", stock_quantity=0),
        ]

        kpis = calculate_kpis(products, [])

        assert kpis.total_sales_value == Decimal("0")
        assert kpis.profit_margin == Decimal("0")
        assert kpis.stock_value == Decimal("10.00")
        assert kpis.out_of_stock_percentage == Decimal("50.00")

    def test_recorded_totals_are_summed_as_stored(self):
        """total_sale_amount and profit are not recomputed from prices."""
        sales = [SaleFactory.build(
            quantity_sold=1, sold_price_per_unit="10",
            total_sale_amount="9.50", profit="1.25"
        )]

        totals = calculate_sales_totals(sales)

        assert totals.total_sales_value == Decimal("9.50")
        assert totals.total_profit == Decimal("1.25")

    def test_negative_profit_gives_negative_margin(self):
        sales = [SaleFactory.build(
            quantity_sold=1, sold_price_per_unit="8", supplier_purchase_price="10"
        )]

        kpis = calculate_kpis([], sales)

        assert kpis.total_profit == Decimal("-2.00")
        assert kpis.profit_margin == Decimal("-25.00")

    def test_out_of_stock_percentage_rounds_to_two_places(self):
        products = [
            ProductFactory.build(stock_quantity=0),
            ProductFactory.build(stock_quantity=1),
            ProductFactory.build(stock_quantity=1),
        ]
        assert calculate_out_of_stock_percentage(products) == Decimal("33.33")

    def test_stock_value_null_cost_counts_as_zero(self):
        products = [ProductFactory.build(supplier_purchase_price=None, stock_quantity=9)]
        assert calculate_stock_value(products) == Decimal("0.00")


# ===================
# TEST 2: SERVICE
# ===================

class TestMetricsService:
    """Tests for MetricsService.get_kpis."""

    def test_default_window_is_trailing_30_days(self, sample_source, today):
        service = MetricsService(sample_source, Settings())

        service.get_kpis(STORE_ID, today=today)

        assert ("list_sales", STORE_ID, today - timedelta(days=30), today) in sample_source.calls

    def test_sample_store(self, sample_source, today):
        kpis = MetricsService(sample_source, Settings()).get_kpis(STORE_ID, today=today)

        assert kpis.total_investment == Decimal("50.00")
        assert kpis.total_sales_value == Decimal("100.00")
        assert kpis.total_profit == Decimal("50.00")
        assert kpis.profit_margin == Decimal("50.00")
        assert kpis.stock_value == Decimal("150.00")
        assert kpis.out_of_stock_percentage == Decimal("33.33")

    def test_window_excludes_older_sales(self, sample_source, today):
        """A 1-day lookback drops the sale from three days ago."""
        kpis = MetricsService(sample_source, Settings()).get_kpis(
            STORE_ID, lookback_days=1, today=today
        )

        assert kpis.total_sales_value == Decimal("40.00")
        # Stock fields still cover the whole catalog
        assert kpis.stock_value == Decimal("150.00")

    def test_explicit_range_overrides_lookback(self, sample_source, today):
        start = today - timedelta(days=3)
        kpis = MetricsService(sample_source, Settings()).get_kpis(
            STORE_ID, start_date=start, end_date=start, lookback_days=1, today=today
        )

        assert kpis.total_sales_value == Decimal("60.00")

    def test_inverted_range_raises(self, sample_source, today):
        service = MetricsService(sample_source, Settings())

        with pytest.raises(InvalidWindowError) as exc_info:
            service.get_kpis(STORE_ID, start_date=today, end_date=today - timedelta(days=1))

        assert exc_info.value.status_code == 422
        assert exc_info.value.code == "INVALID_WINDOW"

    def test_other_tenants_are_invisible(self, sample_source, today):
        kpis = MetricsService(sample_source, Settings()).get_kpis(STORE_ID + 1, today=today)

        assert kpis.total_sales_value == Decimal("0")
        assert kpis.out_of_stock_percentage == Decimal("0")

    def test_cached_result_reused(self, sample_source, today):
        cache = AnalyticsCache(ttl_seconds=60)
        service = MetricsService(sample_source, Settings(), cache)

        first = service.get_kpis(STORE_ID, today=today)
        calls = len(sample_source.calls)
        second = service.get_kpis(STORE_ID, today=today)

        assert second == first
        assert len(sample_source.calls) == calls
