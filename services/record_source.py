"""
Record source for analytics.

The only module that talks to Supabase. Every read is scoped to one
supplier (store_id) and returns validated models. Any client failure
is raised as RecordSourceError so callers never mistake an outage for
an empty result.
"""

from typing import Callable, List, Optional
from datetime import date, timedelta
import structlog

from supabase import Client

from models.product import ProductRecord
from models.sales import SaleEvent
from models.supplier import SupplierProfile
from models.activity import ReviewEvent, LowStockEvent, PlanExpiryEvent
from exceptions import AppError, RecordSourceError, TenantNotFoundError

logger = structlog.get_logger(__name__)

# PostgREST caps responses, so full scans are fetched in pages
PAGE_SIZE = 1000

PRODUCT_COLUMNS = (
    "id, store_id, title, supplier_purchase_price, supplier_sold_price, "
    "stock_quantity, category, main_image, status, created_at, updated_at"
)

SALE_COLUMNS = (
    "id, product_id, quantity_sold, sold_price_per_unit, total_sale_amount, "
    "profit, sale_date, sale_channel, notes, created_at, "
    "products!inner(store_id, supplier_purchase_price)"
)


class RecordSource:
    """
    Tenant-scoped reads against the marketplace tables.

    Tables:
        supplier_profiles: tenant resolution and plan info
        products: catalog
        product_sales: completed sales
        reviews: customer reviews
    """

    def __init__(self, client: Client):
        self.db = client

    # ===================
    # TENANT RESOLUTION
    # ===================

    def get_profile(self, user_id: int) -> SupplierProfile:
        """
        Get the supplier profile owned by a user.

        Args:
            user_id: Authenticated user ID

        Returns:
            SupplierProfile

        Raises:
            TenantNotFoundError: If the user has no supplier profile
            RecordSourceError: If the query fails
        """
        logger.debug("resolving_tenant", user_id=user_id)

        rows = self._run(
            "get_profile",
            lambda: (
                self.db.table("supplier_profiles")
                .select("id, user_id, plan_id, plan_end, plans(name, upload_limit)")
                .eq("user_id", user_id)
                .limit(1)
            )
        )

        if not rows:
            raise TenantNotFoundError(str(user_id))

        row = dict(rows[0])
        plan = row.pop("plans", None) or {}
        row["plan_name"] = plan.get("name")
        row["upload_limit"] = plan.get("upload_limit")
        return SupplierProfile(**row)

    # ===================
    # CATALOG
    # ===================

    def list_products(
        self,
        tenant_id: int,
        max_stock: Optional[int] = None,
        order_by: Optional[str] = None,
        desc: bool = False,
        limit: Optional[int] = None
    ) -> List[ProductRecord]:
        """
        Get a supplier's products.

        Args:
            tenant_id: Supplier profile ID
            max_stock: Only products with stock_quantity <= this
            order_by: Column to sort by
            desc: Sort descending
            limit: Maximum rows (all rows when None)

        Returns:
            List of ProductRecord
        """
        def build():
            query = (
                self.db.table("products")
                .select(PRODUCT_COLUMNS)
                .eq("store_id", tenant_id)
            )
            if max_stock is not None:
                query = query.lte("stock_quantity", max_stock)
            if order_by:
                query = query.order(order_by, desc=desc, nullsfirst=False)
            else:
                query = query.order("id")
            return query

        if limit is not None:
            rows = self._run("list_products", lambda: build().limit(limit))
        else:
            rows = self._run_paged("list_products", build)

        products = [ProductRecord(**row) for row in rows]
        logger.debug("products_loaded", tenant_id=tenant_id, count=len(products))
        return products

    # ===================
    # SALES
    # ===================

    def list_sales(
        self,
        tenant_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[SaleEvent]:
        """
        Get a supplier's sales, optionally within [start_date, end_date].

        Each sale carries its product's purchase price for investment sums.

        Args:
            tenant_id: Supplier profile ID
            start_date: First sale_date included
            end_date: Last sale_date included

        Returns:
            List of SaleEvent
        """
        def build():
            query = (
                self.db.table("product_sales")
                .select(SALE_COLUMNS)
                .eq("products.store_id", tenant_id)
            )
            if start_date:
                query = query.gte("sale_date", start_date.isoformat())
            if end_date:
                query = query.lte("sale_date", end_date.isoformat())
            return query.order("id")

        rows = self._run_paged("list_sales", build)

        sales = []
        for row in rows:
            row = dict(row)
            product = row.pop("products", None) or {}
            row["supplier_purchase_price"] = product.get("supplier_purchase_price")
            sales.append(SaleEvent(**row))

        logger.debug(
            "sales_loaded",
            tenant_id=tenant_id,
            start_date=start_date,
            end_date=end_date,
            count=len(sales)
        )
        return sales

    # ===================
    # AUXILIARY EVENTS
    # ===================

    def list_reviews(self, tenant_id: int, limit: int = 3) -> List[ReviewEvent]:
        """Get the newest reviews on a supplier's products."""
        rows = self._run(
            "list_reviews",
            lambda: (
                self.db.table("reviews")
                .select("created_at, products!inner(title, store_id)")
                .eq("products.store_id", tenant_id)
                .order("created_at", desc=True)
                .limit(limit)
            )
        )
        return [
            ReviewEvent(
                product_title=(row.get("products") or {}).get("title") or "",
                created_at=row["created_at"]
            )
            for row in rows
        ]

    def list_low_stock(
        self,
        tenant_id: int,
        max_quantity: int = 2,
        limit: int = 3
    ) -> List[LowStockEvent]:
        """Get the most recently updated products at or below max_quantity."""
        products = self.list_products(
            tenant_id,
            max_stock=max_quantity,
            order_by="updated_at",
            desc=True,
            limit=limit
        )
        return [
            LowStockEvent(
                product_title=p.title,
                updated_at=p.updated_at or p.created_at
            )
            for p in products
        ]

    def get_plan_expiry(
        self,
        tenant_id: int,
        today: date,
        within_days: int = 7
    ) -> Optional[PlanExpiryEvent]:
        """
        Get the plan expiry notice if the plan ends within the next days.

        Returns:
            PlanExpiryEvent when plan_end is in [today, today + within_days],
            otherwise None
        """
        rows = self._run(
            "get_plan_expiry",
            lambda: (
                self.db.table("supplier_profiles")
                .select("plan_end")
                .eq("id", tenant_id)
                .gte("plan_end", today.isoformat())
                .lte("plan_end", (today + timedelta(days=within_days)).isoformat())
                .limit(1)
            )
        )
        if not rows or not rows[0].get("plan_end"):
            return None
        return PlanExpiryEvent(plan_end=str(rows[0]["plan_end"])[:10])

    # ===================
    # QUERY HELPERS
    # ===================

    def _run(self, operation: str, build: Callable) -> list:
        """
        Execute a query and return its rows.

        Raises:
            RecordSourceError: On any client failure
        """
        try:
            result = build().execute()
            return result.data or []
        except AppError:
            raise
        except Exception as e:
            logger.error(
                "record_source_query_failed",
                operation=operation,
                error=str(e),
                error_type=type(e).__name__
            )
            raise RecordSourceError(
                f"Record source {operation} failed: {e}",
                operation=operation
            ) from e

    def _run_paged(self, operation: str, build: Callable) -> list:
        """Execute a query page by page until a short page comes back."""
        rows: list = []
        offset = 0
        while True:
            page = self._run(
                operation,
                lambda: build().range(offset, offset + PAGE_SIZE - 1)
            )
            rows.extend(page)
            if len(page) < PAGE_SIZE:
                return rows
            offset += PAGE_SIZE
