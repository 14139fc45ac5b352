"""
Shared route dependencies.

Tenant resolution happens here: the gateway in front of this API
authenticates the caller and forwards the user id in X-User-Id. Every
analytics route depends on get_supplier_profile, so a caller without a
supplier profile gets a 404 before any analytics query runs.
"""

from typing import Optional

from fastapi import Depends, Header, Request
from fastapi.responses import JSONResponse
import structlog

from config import Settings, get_settings
from models.supplier import SupplierProfile
from services.analytics_cache import AnalyticsCache
from services.record_source import RecordSource
from exceptions import AppError

logger = structlog.get_logger(__name__)


class MissingUserError(AppError):
    """No authenticated user forwarded by the gateway (401)."""

    def __init__(self):
        super().__init__(
            code="UNAUTHENTICATED",
            message="No authenticated user",
            status_code=401
        )


def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


def get_app_settings() -> Settings:
    return get_settings()


def get_record_source(request: Request) -> RecordSource:
    """RecordSource over the connection opened at startup."""
    return RecordSource(request.app.state.db.client)


def get_cache(request: Request) -> Optional[AnalyticsCache]:
    return getattr(request.app.state, "cache", None)


def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> int:
    """User id forwarded by the authenticating gateway."""
    if not x_user_id or not x_user_id.strip().isdigit():
        raise MissingUserError()
    return int(x_user_id)


def get_supplier_profile(
    user_id: int = Depends(get_current_user_id),
    source: RecordSource = Depends(get_record_source)
) -> SupplierProfile:
    """
    Resolve the caller's supplier profile.

    Raises:
        TenantNotFoundError: If the user has no supplier profile
    """
    return source.get_profile(user_id)
