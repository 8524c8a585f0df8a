"""
Warranty Rules.

Stateless validation, authorization and status derivation shared by every
registry operation. Nothing here touches storage.
"""

from __future__ import annotations

from services.warranty.errors import (
    FutureDatedError,
    InvalidDateRangeError,
    InvalidTransferError,
    UnauthorizedError,
)
from services.warranty.models import WarrantyRecord, WarrantyStatus


class RuleSet:
    """Pure rules applied before any registry write."""

    def require_caller(
        self,
        caller: str,
        identity: str,
        warranty_id: int | None = None,
    ) -> None:
        """
        Check that the invoking principal is the required identity.

        Raises:
            UnauthorizedError: If caller and identity differ.
        """
        if caller != identity:
            raise UnauthorizedError(
                "caller is not authorized for this warranty",
                warranty_id=warranty_id,
            )

    def validate_dates(self, purchase_date: int, expiration_date: int, now: int) -> None:
        """
        Validate the coverage window of a new registration.

        Raises:
            InvalidDateRangeError: If expiration is not after purchase.
            FutureDatedError: If purchase is after the current time.
        """
        if expiration_date <= purchase_date:
            raise InvalidDateRangeError("expiration_date must be after purchase_date")
        if purchase_date > now:
            raise FutureDatedError("purchase_date cannot be in the future")

    def initial_status(self, expiration_date: int, now: int) -> WarrantyStatus:
        """Status snapshot for a record registered at `now`."""
        if expiration_date < now:
            return WarrantyStatus.EXPIRED
        return WarrantyStatus.ACTIVE

    def require_transferable(self, record: WarrantyRecord) -> None:
        """
        Only Active warranties change hands.

        Raises:
            InvalidTransferError: If the record is Expired or Revoked.
        """
        if record.status != WarrantyStatus.ACTIVE:
            raise InvalidTransferError(
                f"cannot transfer non-active warranty (status {record.status.value})",
                warranty_id=record.id,
            )

    def is_expired(self, record: WarrantyRecord, now: int) -> bool:
        """Live expiry check, ignoring the stored status."""
        return record.expiration_date < now
