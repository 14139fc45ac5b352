"""
Custom exception classes for the application.

Every error carries a stable code, an HTTP status and optional details.
Routes render them with AppError.to_dict().
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "SUPPLIER_PROFILE_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


# ===================
# TENANT ERRORS
# ===================

class TenantNotFoundError(NotFoundError):
    """Caller has no supplier profile."""

    def __init__(self, user_id: str):
        super().__init__(
            resource="Supplier profile",
            identifier=str(user_id),
            code="SUPPLIER_PROFILE_NOT_FOUND"
        )


# ===================
# RECORD SOURCE ERRORS
# ===================

class RecordSourceError(ExternalServiceError):
    """
    Record source unavailable or failed mid-query.

    Always retryable from the caller's side. Distinct from an empty
    result, which is never an error.
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        details: Optional[dict] = None
    ):
        extra = {"retryable": True, **(details or {})}
        if operation:
            extra["operation"] = operation
        super().__init__(
            service="record_source",
            message=message,
            details=extra
        )


# ===================
# ANALYTICS ERRORS
# ===================

class InvalidWindowError(ValidationError):
    """Date window is inverted or out of range."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="INVALID_WINDOW",
            message=message,
            details=details
        )


class UnsupportedExportTypeError(ValidationError):
    """Export format other than JSON or Excel requested."""

    def __init__(self, export_type: str):
        super().__init__(
            code="UNSUPPORTED_EXPORT_TYPE",
            message=f"Unsupported export type: {export_type}",
            details={"provided": export_type, "valid": ["json", "xlsx"]}
        )


# ===================
# SALES ERRORS
# ===================

class EmptySaleCorrectionError(ValidationError):
    """Correction changes neither quantity nor price."""

    def __init__(self, sale_id: str):
        super().__init__(
            code="SALE_CORRECTION_EMPTY",
            message="Please provide at least one field to update (quantity or sold price)",
            details={"id": sale_id}
        )
