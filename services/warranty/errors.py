"""
Warranty Registry Errors
========================

Every failed registry call raises a `WarrantyError` subclass. Callers can
branch on the subclass or on `exc.kind`; in both cases no partial write
survives the failure.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Failure categories of registry operations."""

    INVALID_DATE_RANGE = "InvalidDateRange"
    FUTURE_DATED = "FutureDated"
    UNAUTHORIZED = "Unauthorized"
    NOT_FOUND = "NotFound"
    STORAGE_UNINITIALIZED = "StorageUninitialized"
    INVALID_TRANSFER = "InvalidTransfer"


class WarrantyError(Exception):
    """Base class for registry failures."""

    kind: ErrorKind

    def __init__(self, message: str, warranty_id: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.warranty_id = warranty_id

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class InvalidDateRangeError(WarrantyError):
    """Expiration date is not after the purchase date."""

    kind = ErrorKind.INVALID_DATE_RANGE


class FutureDatedError(WarrantyError):
    """Purchase date is ahead of the ledger clock."""

    kind = ErrorKind.FUTURE_DATED


class UnauthorizedError(WarrantyError):
    """Caller is not the identity the operation requires."""

    kind = ErrorKind.UNAUTHORIZED


class NotFoundError(WarrantyError):
    """Referenced warranty id does not exist."""

    kind = ErrorKind.NOT_FOUND


class StorageUninitializedError(WarrantyError):
    """No warranty was ever registered, so the record map does not exist."""

    kind = ErrorKind.STORAGE_UNINITIALIZED


class InvalidTransferError(WarrantyError):
    """Transfer attempted on a warranty that is not Active."""

    kind = ErrorKind.INVALID_TRANSFER
