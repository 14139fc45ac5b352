"""
Activity service: merged feed of recent store events.

Sources:
- Newest reviews on the supplier's products
- Products that just ran low on stock
- Plan expiry notice (at most one, only within the notice window)

Items are sorted newest first. The sort is stable, so items with equal
timestamps keep source order: reviews, then low stock, then expiry.
"""

from datetime import date
from typing import Iterable, List, Optional
import structlog

from config import Settings, get_settings
from models.activity import (
    ActivityItem,
    ReviewEvent,
    LowStockEvent,
    PlanExpiryEvent,
)
from services.record_source import RecordSource
from utils.dates import utc_today

logger = structlog.get_logger(__name__)


def merge_activity(
    reviews: Iterable[ReviewEvent],
    low_stock: Iterable[LowStockEvent],
    plan_expiry: Optional[PlanExpiryEvent] = None
) -> List[ActivityItem]:
    """
    Map each source to {message, date} and sort descending by date.

    Returns:
        List of ActivityItem, newest first
    """
    items = [ActivityItem(message=r.message, date=r.created_at) for r in reviews]
    items.extend(ActivityItem(message=l.message, date=l.updated_at) for l in low_stock)
    if plan_expiry is not None:
        items.append(ActivityItem(message=plan_expiry.message, date=plan_expiry.plan_end))

    return sorted(items, key=lambda item: item.date, reverse=True)


class ActivityService:
    """Activity feed for one supplier at a time."""

    def __init__(self, source: RecordSource, settings: Optional[Settings] = None):
        self.source = source
        self.settings = settings or get_settings()

    def get_activity(self, tenant_id: int, today: Optional[date] = None) -> List[ActivityItem]:
        """
        Fetch every source and merge them.

        Args:
            tenant_id: Supplier profile ID
            today: Reference day for the expiry window

        Returns:
            List of ActivityItem, newest first
        """
        today = today or utc_today()
        limit = self.settings.activity_feed_source_limit

        reviews = self.source.list_reviews(tenant_id, limit=limit)
        low_stock = self.source.list_low_stock(
            tenant_id,
            max_quantity=self.settings.activity_low_stock_quantity,
            limit=limit
        )
        expiry = self.source.get_plan_expiry(
            tenant_id,
            today,
            within_days=self.settings.plan_expiry_notice_days
        )

        items = merge_activity(reviews, low_stock, expiry)
        logger.info("activity_merged", tenant_id=tenant_id, count=len(items))
        return items
