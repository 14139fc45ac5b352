"""
Activity feed schemas.

Source events arrive from different tables; each renders to a single
ActivityItem with a message and a timestamp.
"""

from datetime import date, datetime
from pydantic import Field, field_validator

from models.base import BaseSchema
from utils.dates import as_utc_datetime


class ReviewEvent(BaseSchema):
    """A customer review on one of the supplier's products."""

    product_title: str
    created_at: datetime

    @property
    def message(self) -> str:
        return f"New review on {self.product_title}"


class LowStockEvent(BaseSchema):
    """A product whose stock dropped to the feed threshold."""

    product_title: str
    updated_at: datetime

    @property
    def message(self) -> str:
        return f'Product "{self.product_title}" is running low on stock'


class PlanExpiryEvent(BaseSchema):
    """The supplier's plan ends soon."""

    plan_end: date

    @property
    def message(self) -> str:
        return "Your subscription plan is expiring soon"


class ActivityItem(BaseSchema):
    """One entry of the dashboard activity feed."""

    message: str = Field(..., description="Human-readable activity")
    date: datetime = Field(..., description="When it happened (UTC)")

    @field_validator("date", mode="before")
    @classmethod
    def date_to_datetime(cls, v):
        if isinstance(v, (date, datetime)):
            return as_utc_datetime(v)
        return v

    @field_validator("date")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        return as_utc_datetime(v)
