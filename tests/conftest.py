"""
Shared test fixtures.

Two doubles:
- MockSupabaseClient: chainable query builder for RecordSource tests
- InMemoryRecordSource: RecordSource stand-in for service and route tests
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest
from datetime import date, timedelta
from typing import List, Optional

from models.product import ProductRecord
from models.sales import SaleEvent
from models.supplier import SupplierProfile
from models.activity import ReviewEvent, LowStockEvent, PlanExpiryEvent
from exceptions import TenantNotFoundError
from tests.factories import ProductFactory, SaleFactory

TODAY = date(2025, 6, 18)
STORE_ID = 7
USER_ID = 42


# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data: list = None, count: int = None):
        self.data = data or []
        self.count = count if count is not None else len(self.data)


class MockSupabaseQuery:
    """Mock Supabase query builder with chainable methods."""

    def __init__(self, table: "MockSupabaseTable", columns: str = "*"):
        self._table = table
        self._range = None
        self._limit = None
        self.columns = columns
        self.filters: list = []
        self.ordering: list = []
        self.nulls_first: dict = {}

    def eq(self, column, value):
        self.filters.append(("eq", column, value))
        return self

    def gte(self, column, value):
        self.filters.append(("gte", column, value))
        return self

    def lte(self, column, value):
        self.filters.append(("lte", column, value))
        return self

    def order(self, column, desc: bool = False, nullsfirst=None):
        self.ordering.append((column, desc))
        self.nulls_first[column] = nullsfirst
        return self

    def range(self, start, end):
        self._range = (start, end)
        return self

    def limit(self, count):
        self._limit = count
        return self

    def execute(self) -> MockSupabaseResponse:
        if self._table.error is not None:
            raise self._table.error
        self._table.client.executed.append(self)

        data = list(self._table.data)
        if self._range is not None:
            start, end = self._range
            data = data[start:end + 1]
        if self._limit is not None:
            data = data[:self._limit]
        return MockSupabaseResponse(data=data)


class MockSupabaseTable:
    """Mock Supabase table with configurable rows."""

    def __init__(self, client: "MockSupabaseClient", data: list, error: Optional[Exception]):
        self.client = client
        self.data = data
        self.error = error

    def select(self, columns: str = "*", **kwargs):
        return MockSupabaseQuery(self, columns)


class MockSupabaseClient:
    """Mock Supabase client that records executed queries."""

    def __init__(self):
        self._tables = {}
        self._errors = {}
        self.executed: List[MockSupabaseQuery] = []

    def set_table_data(self, table_name: str, data: list):
        """Configure rows returned by a table."""
        self._tables[table_name] = data

    def set_table_error(self, table_name: str, error: Exception):
        """Make every query on a table raise."""
        self._errors[table_name] = error

    def table(self, name: str) -> MockSupabaseTable:
        return MockSupabaseTable(self, self._tables.get(name, []), self._errors.get(name))


# ===================
# IN-MEMORY RECORD SOURCE
# ===================

class InMemoryRecordSource:
    """
    RecordSource over plain lists, for service tests.

    Applies the same date filtering and ordering as the real source.
    """

    def __init__(
        self,
        products: Optional[List[ProductRecord]] = None,
        sales: Optional[List[SaleEvent]] = None,
        reviews: Optional[List[ReviewEvent]] = None,
        low_stock: Optional[List[LowStockEvent]] = None,
        plan_expiry: Optional[PlanExpiryEvent] = None,
        profiles: Optional[List[SupplierProfile]] = None
    ):
        self.products = products or []
        self.sales = sales or []
        self.reviews = reviews or []
        self.low_stock = low_stock or []
        self.plan_expiry = plan_expiry
        self.profiles = profiles or []
        self.calls: list = []

    def get_profile(self, user_id: int) -> SupplierProfile:
        for profile in self.profiles:
            if profile.user_id == user_id:
                return profile
        raise TenantNotFoundError(str(user_id))

    def list_products(self, tenant_id: int, **kwargs) -> List[ProductRecord]:
        self.calls.append(("list_products", tenant_id))
        return sorted(
            (p for p in self.products if p.store_id == tenant_id),
            key=lambda p: p.id
        )

    def list_sales(
        self,
        tenant_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[SaleEvent]:
        self.calls.append(("list_sales", tenant_id, start_date, end_date))
        owned = {p.id for p in self.products if p.store_id == tenant_id}
        return [
            s for s in self.sales
            if s.product_id in owned
            and (start_date is None or s.sale_date >= start_date)
            and (end_date is None or s.sale_date <= end_date)
        ]

    def list_reviews(self, tenant_id: int, limit: int = 3) -> List[ReviewEvent]:
        return self.reviews[:limit]

    def list_low_stock(self, tenant_id: int, max_quantity: int = 2, limit: int = 3) -> List[LowStockEvent]:
        return self.low_stock[:limit]

    def get_plan_expiry(self, tenant_id: int, today: date, within_days: int = 7) -> Optional[PlanExpiryEvent]:
        if self.plan_expiry is None:
            return None
        if today <= self.plan_expiry.plan_end <= today + timedelta(days=within_days):
            return self.plan_expiry
        return None


# ===================
# FIXTURES
# ===================

@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("products", [
                {"id": 1, "store_id": 7, ...}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def supplier_profile() -> SupplierProfile:
    return SupplierProfile(
        id=STORE_ID,
        user_id=USER_ID,
        plan_id=2,
        plan_name="Pro Plan",
        plan_end=TODAY + timedelta(days=90),
        upload_limit=50
    )


@pytest.fixture
def sample_source(supplier_profile) -> InMemoryRecordSource:
    """
    A small store:
        1 Desk lamp   cost 10, price 20, stock 0   sold 2 today
        2 Bookshelf   cost 30, price 60, stock 3   sold 1 three days ago
        3 Rug         cost 5,  price 6,  stock 12  never sold
    """
    ProductFactory.reset_counter()
    SaleFactory.reset_counter()

    products = [
        ProductFactory.build(
            id=1, store_id=STORE_ID, title="Desk lamp",
            supplier_purchase_price="10", supplier_sold_price="20",
            stock_quantity=0, category="Lighting",
            created_at=f"{TODAY - timedelta(days=45)}T09:00:00+00:00"
        ),
        ProductFactory.build(
            id=2, store_id=STORE_ID, title="Bookshelf",
            supplier_purchase_price="30", supplier_sold_price="60",
            stock_quantity=3, category="Furniture",
            created_at=f"{TODAY - timedelta(days=10)}T09:00:00+00:00"
        ),
        ProductFactory.build(
            id=3, store_id=STORE_ID, title="Rug",
            supplier_purchase_price="5", supplier_sold_price="6",
            stock_quantity=12, category=None,
            created_at=f"{TODAY - timedelta(days=2)}T09:00:00+00:00"
        ),
    ]
    sales = [
        SaleFactory.build(
            product_id=1, quantity_sold=2, sold_price_per_unit="20",
            supplier_purchase_price="10", sale_date=TODAY.isoformat()
        ),
        SaleFactory.build(
            product_id=2, quantity_sold=1, sold_price_per_unit="60",
            supplier_purchase_price="30",
            sale_date=(TODAY - timedelta(days=3)).isoformat()
        ),
    ]
    return InMemoryRecordSource(
        products=products,
        sales=sales,
        profiles=[supplier_profile]
    )
