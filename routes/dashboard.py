"""
Dashboard API routes.

Store summary and activity feed for the supplier dashboard.
"""

from typing import List

from fastapi import APIRouter, Depends
import structlog

from config import Settings
from models.activity import ActivityItem
from models.dashboard import StoreDashboard
from models.supplier import SupplierProfile
from routes.deps import (
    get_app_settings,
    get_record_source,
    get_supplier_profile,
    handle_error,
)
from services.activity_service import ActivityService
from services.dashboard_service import DashboardService
from services.record_source import RecordSource

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/store", response_model=StoreDashboard)
def get_store_dashboard(
    profile: SupplierProfile = Depends(get_supplier_profile),
    source: RecordSource = Depends(get_record_source),
    settings: Settings = Depends(get_app_settings),
):
    """
    Get the store dashboard.

    Returns month-to-date stats, 7-day sales trend, best sellers,
    stock overview and recent activity.
    """
    try:
        return DashboardService(source, settings).get_store_dashboard(profile)
    except Exception as e:
        return handle_error(e)


@router.get("/activity", response_model=List[ActivityItem])
def get_activity(
    profile: SupplierProfile = Depends(get_supplier_profile),
    source: RecordSource = Depends(get_record_source),
    settings: Settings = Depends(get_app_settings),
):
    """Get recent reviews, low stock and plan notices, newest first."""
    try:
        return ActivityService(source, settings).get_activity(profile.id)
    except Exception as e:
        return handle_error(e)
