"""
Unit tests for Ranking Service.

Tests:
1. Best selling and most profitable (limit, tie-break by id)
2. Category contribution with Uncategorized
3. Dashboard best sellers (sold products only)
"""

from decimal import Decimal

from config.settings import Settings
from services.ranking_service import (
    RankingService,
    aggregate_by_product,
    build_top_products,
    rank_best_selling,
    rank_most_profitable,
    rank_categories,
    rank_sold_best_sellers,
)
from tests.conftest import STORE_ID
from tests.factories import ProductFactory, SaleFactory


class TestAggregateByProduct:

    def test_sums_per_product(self):
        sales = [
            SaleFactory.build(product_id=1, quantity_sold=2, sold_price_per_unit="10"),
            SaleFactory.build(product_id=1, quantity_sold=1, sold_price_per_unit="10"),
            SaleFactory.build(product_id=2, quantity_sold=5, sold_price_per_unit="4"),
        ]

        quantity, profit, value = aggregate_by_product(sales)

        assert quantity == {1: 3, 2: 5}
        assert value[1] == Decimal("30")
        assert value[2] == Decimal("20")


class TestRankBestSelling:

    def test_limit_and_order(self):
        products = [ProductFactory.build(id=i) for i in range(1, 8)]
        quantity = {1: 1, 2: 7, 3: 3, 4: 9, 5: 2, 6: 5, 7: 4}

        ranked = rank_best_selling(products, quantity, limit=5)

        assert [p.id for p in ranked] == [4, 2, 6, 7, 3]

    def test_ties_broken_by_ascending_id(self):
        products = [ProductFactory.build(id=i) for i in (9, 3, 5)]
        quantity = {9: 4, 3: 4, 5: 4}

        ranked = rank_best_selling(products, quantity)

        assert [p.id for p in ranked] == [3, 5, 9]

    def test_unsold_products_fill_the_list(self):
        """New stores still get five entries, with 0 quantity."""
        products = [ProductFactory.build(id=i) for i in range(1, 4)]

        ranked = rank_best_selling(products, {2: 1})

        assert [(p.id, p.total_quantity) for p in ranked] == [(2, 1), (1, 0), (3, 0)]


class TestRankMostProfitable:

    def test_negative_profit_ranks_last(self):
        products = [ProductFactory.build(id=i) for i in (1, 2, 3)]
        profit = {1: Decimal("-5"), 2: Decimal("12.5")}

        ranked = rank_most_profitable(products, profit)

        assert [p.id for p in ranked] == [2, 3, 1]
        assert ranked[0].total_profit == Decimal("12.50")


class TestRankCategories:

    def test_uncategorized_bucket(self):
        products = [
            ProductFactory.build(id=1, category="Lighting"),
            ProductFactory.build(id=2, category=None),
            ProductFactory.build(id=3, category="   "),
        ]
        value = {1: Decimal("10"), 2: Decimal("15"), 3: Decimal("5")}

        categories = rank_categories(products, value)

        assert [(c.category, c.sales_value) for c in categories] == [
            ("Uncategorized", Decimal("20.00")),
            ("Lighting", Decimal("10.00")),
        ]

    def test_categories_without_sales_listed_with_zero(self):
        products = [
            ProductFactory.build(id=1, category="Garden"),
            ProductFactory.build(id=2, category="Bath"),
        ]

        categories = rank_categories(products, {})

        assert [c.category for c in categories] == ["Bath", "Garden"]
        assert all(c.sales_value == Decimal("0") for c in categories)


class TestRankingService:

    def test_top_products(self, sample_source):
        response = RankingService(sample_source, Settings()).get_top_products(STORE_ID)

        assert [p.id for p in response.best_selling] == [1, 2, 3]
        assert [p.id for p in response.most_profitable] == [2, 1, 3]
        assert response.categories[0].category == "Furniture"

    def test_top_products_uses_all_time_sales(self, sample_source):
        RankingService(sample_source, Settings()).get_top_products(STORE_ID)
        assert ("list_sales", STORE_ID, None, None) in sample_source.calls

    def test_sold_best_sellers_skip_unsold(self):
        products = [ProductFactory.build(id=i) for i in (1, 2, 3)]

        sellers = rank_sold_best_sellers(products, {1: 2, 3: 5})

        assert [p.id for p in sellers] == [3, 1]

    def test_build_top_products_empty_store(self):
        response = build_top_products([], [])

        assert response.best_selling == []
        assert response.most_profitable == []
        assert response.categories == []
