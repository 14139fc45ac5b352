"""
Metrics models.

KPI summaries returned by MetricsService. Field names are consumed
verbatim by the supplier dashboard.
"""

from decimal import Decimal
from datetime import date, timedelta
from typing import Optional
from pydantic import Field, model_validator

from models.base import BaseSchema
from exceptions import InvalidWindowError


class AnalyticsWindow(BaseSchema):
    """
    Tenant-scoped query window.

    Either an explicit [start_date, end_date] range or a trailing
    lookback in days ending today.
    """

    tenant_id: int = Field(..., description="Supplier profile ID")
    start_date: Optional[date] = Field(None, description="First day included")
    end_date: Optional[date] = Field(None, description="Last day included")
    lookback_days: Optional[int] = Field(None, ge=1, le=3650, description="Trailing days")

    @model_validator(mode="after")
    def check_range(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise InvalidWindowError(
                "start_date must be on or before end_date",
                details={
                    "start_date": self.start_date.isoformat(),
                    "end_date": self.end_date.isoformat()
                }
            )
        return self

    def resolve(self, today: date) -> tuple[Optional[date], Optional[date]]:
        """
        Concrete (start, end) for this window.

        An explicit range wins over lookback_days. With neither the
        window is unbounded.
        """
        if self.start_date or self.end_date:
            return self.start_date, self.end_date
        if self.lookback_days is not None:
            return today - timedelta(days=self.lookback_days), today
        return None, None

    def cache_key(self) -> tuple:
        return (self.tenant_id, self.start_date, self.end_date, self.lookback_days)


class KPISummary(BaseSchema):
    """Scalar KPIs for a supplier."""

    total_investment: Decimal = Field(
        default=Decimal("0"),
        description="Σ purchase price × quantity sold in window"
    )
    total_sales_value: Decimal = Field(
        default=Decimal("0"),
        description="Σ total sale amount in window"
    )
    total_profit: Decimal = Field(
        default=Decimal("0"),
        description="Σ profit in window"
    )
    profit_margin: Decimal = Field(
        default=Decimal("0"),
        description="total_profit / total_sales_value × 100"
    )
    stock_value: Decimal = Field(
        default=Decimal("0"),
        description="Σ purchase price × stock on hand (whole catalog)"
    )
    out_of_stock_percentage: Decimal = Field(
        default=Decimal("0"),
        description="% of catalog with zero stock"
    )


class SalesTotals(BaseSchema):
    """Sale-derived KPIs only."""

    total_investment: Decimal = Decimal("0")
    total_sales_value: Decimal = Decimal("0")
    total_profit: Decimal = Decimal("0")
