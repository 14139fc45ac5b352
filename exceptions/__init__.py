"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ExternalServiceError,

    # Tenant
    TenantNotFoundError,

    # Record source
    RecordSourceError,

    # Analytics
    InvalidWindowError,
    UnsupportedExportTypeError,

    # Sales
    EmptySaleCorrectionError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ExternalServiceError",

    # Tenant
    "TenantNotFoundError",

    # Record source
    "RecordSourceError",

    # Analytics
    "InvalidWindowError",
    "UnsupportedExportTypeError",

    # Sales
    "EmptySaleCorrectionError",
]
