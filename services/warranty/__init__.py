"""
Warranty Tracker: Warranty Registry Service.

Ledger-backed registry of product warranties with owner-indexed lookup,
ownership transfer and an Active / Expired / Revoked status lifecycle.
"""

from services.warranty.errors import (
    ErrorKind,
    FutureDatedError,
    InvalidDateRangeError,
    InvalidTransferError,
    NotFoundError,
    StorageUninitializedError,
    UnauthorizedError,
    WarrantyError,
)
from services.warranty.models import WarrantyRecord, WarrantyStatus
from services.warranty.registry import WarrantyRegistry
from services.warranty.rules import RuleSet

__all__ = [
    "WarrantyRegistry",
    "WarrantyRecord",
    "WarrantyStatus",
    "RuleSet",
    "ErrorKind",
    "WarrantyError",
    "InvalidDateRangeError",
    "FutureDatedError",
    "UnauthorizedError",
    "NotFoundError",
    "StorageUninitializedError",
    "InvalidTransferError",
]
