"""
Supplier profile schema.

A supplier profile is the tenant: every product belongs to one store_id,
which is the profile's id.
"""

from datetime import date
from typing import Optional
from pydantic import Field, field_validator

from models.base import BaseSchema


class SupplierProfile(BaseSchema):
    """Supplier profile with its subscription plan."""

    id: int = Field(..., description="Supplier profile ID (store_id)")
    user_id: int = Field(..., description="Owning user ID")
    plan_id: Optional[int] = None
    plan_name: Optional[str] = None
    plan_end: Optional[date] = Field(None, description="Last day of the current plan")
    upload_limit: int = Field(default=0, ge=0, description="Products allowed by the plan")

    @field_validator("plan_end", mode="before")
    @classmethod
    def parse_plan_end(cls, v):
        if isinstance(v, str) and v:
            return date.fromisoformat(v[:10])
        return v

    @field_validator("upload_limit", mode="before")
    @classmethod
    def null_limit_as_zero(cls, v):
        return 0 if v is None else v
