"""
Unit tests for inventory service.

Tests stock labels, age and ordering.
"""

import pytest
from datetime import date, datetime, timedelta, timezone

from config.settings import Settings
from models.product import StockStatus
from services.inventory_service import (
    InventoryService,
    build_inventory,
    build_stock_overview,
    calculate_age_in_days,
    classify_stock,
)
from tests.conftest import STORE_ID
from tests.factories import ProductFactory


class TestClassifyStock:

    @pytest.mark.parametrize("quantity,expected", [
        (0, StockStatus.OUT_OF_STOCK),
        (1, StockStatus.LOW_STOCK),
        (4, StockStatus.LOW_STOCK),
        (5, StockStatus.IN_STOCK),
        (250, StockStatus.IN_STOCK),
    ])
    def test_labels(self, quantity, expected):
        assert classify_stock(quantity) == expected

    def test_custom_threshold(self):
        assert classify_stock(5, low_stock_threshold=10) == StockStatus.LOW_STOCK

    def test_label_strings(self):
        assert StockStatus.LOW_STOCK.value == "Low Stock"


class TestAgeInDays:

    def test_whole_days(self):
        created = datetime(2025, 6, 1, 23, 59, tzinfo=timezone.utc)
        assert calculate_age_in_days(created, date(2025, 6, 18)) == 17

    def test_never_negative(self):
        """Clock skew: created tomorrow counts as 0 days old."""
        created = datetime(2025, 6, 19, 1, 0, tzinfo=timezone.utc)
        assert calculate_age_in_days(created, date(2025, 6, 18)) == 0

    def test_offset_timestamp_counted_in_utc(self):
        # 01:00 at +05:00 is still June 17 in UTC
        created = datetime(2025, 6, 18, 1, 0, tzinfo=timezone(timedelta(hours=5)))
        assert calculate_age_in_days(created, date(2025, 6, 18)) == 1


class TestBuildInventory:

    def test_lowest_stock_first_ties_by_id(self, today):
        products = [
            ProductFactory.build(id=4, stock_quantity=3),
            ProductFactory.build(id=2, stock_quantity=8),
            ProductFactory.build(id=1, stock_quantity=3),
            ProductFactory.build(id=3, stock_quantity=0),
        ]

        items = build_inventory(products, today)

        assert [i.id for i in items] == [3, 1, 4, 2]
        assert items[0].stock_status == StockStatus.OUT_OF_STOCK
        assert items[-1].stock_status == StockStatus.IN_STOCK

    def test_stock_overview(self):
        products = [
            ProductFactory.build(stock_quantity=0),
            ProductFactory.build(stock_quantity=2),
            ProductFactory.build(stock_quantity=20),
        ]

        overview = build_stock_overview(products)

        assert [(e.name, e.value) for e in overview] == [("In Stock", 2), ("Out of Stock", 1)]


class TestInventoryService:

    def test_get_inventory(self, sample_source, today):
        response = InventoryService(sample_source, Settings()).get_inventory(STORE_ID, today=today)

        assert response.total == 3
        assert [(i.id, i.stock_status, i.age_in_days) for i in response.data] == [
            (1, StockStatus.OUT_OF_STOCK, 45),
            (2, StockStatus.LOW_STOCK, 10),
            (3, StockStatus.IN_STOCK, 2),
        ]

    def test_threshold_from_settings(self, sample_source, today):
        settings = Settings(low_stock_threshold=2)
        response = InventoryService(sample_source, settings).get_inventory(STORE_ID, today=today)

        assert response.data[1].stock_status == StockStatus.IN_STOCK
