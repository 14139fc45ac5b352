"""
Trend models.

Time series are sparse: a bucket appears only when at least one sale
fell inside it.
"""

from datetime import date as date_type
from decimal import Decimal
from typing import List

from pydantic import Field

from models.base import BaseSchema


WEEKDAY_NAMES = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]


class TrendPoint(BaseSchema):
    """Sales totals for one calendar day."""

    date: date_type = Field(..., description="Calendar day")
    total_sales: Decimal = Field(..., description="Σ total sale amount")
    total_profit: Decimal = Field(..., description="Σ profit")
    total_units_sold: int = Field(..., description="Σ quantity sold")


class SalesTrendResponse(BaseSchema):
    """Daily sales series over a trailing window."""

    period_days: int
    data: List[TrendPoint]


class WeekdaySales(BaseSchema):
    """Sales value for one weekday."""

    day: str = Field(..., description="Weekday name")
    total_sales: Decimal


class HourlySales(BaseSchema):
    """Sales value for one hour of the day."""

    hour: int = Field(..., ge=0, le=23)
    total_sales: Decimal


class SalesHeatmap(BaseSchema):
    """Sales split by weekday and by hour."""

    daily_sales: List[WeekdaySales]
    hourly_sales: List[HourlySales]
