"""
Warranty Models
===============

Persisted warranty record and its lifecycle status.

Version: 0.1.0
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class WarrantyStatus(str, Enum):
    """Stored lifecycle flag, refreshed only by explicit writes."""

    ACTIVE = "Active"
    EXPIRED = "Expired"
    REVOKED = "Revoked"


class WarrantyRecord(BaseModel):
    """Warranty record as kept in the record store."""

    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(..., gt=0, description="Registry-assigned identifier")
    owner: str = Field(..., min_length=1, description="Current owner address")
    product_name: str
    serial_number: str
    manufacturer: str
    purchase_date: int = Field(..., ge=0, description="Unix timestamp")
    expiration_date: int = Field(..., ge=0, description="Unix timestamp")
    status: WarrantyStatus = WarrantyStatus.ACTIVE
    created_at: int = Field(..., ge=0, description="Registration timestamp")
