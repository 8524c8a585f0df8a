"""
Warranty Registry.

Ledger-backed warranty records with owner-indexed lookup, ownership
transfer and a three-state status lifecycle.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any

from services.warranty.errors import WarrantyError
from services.warranty.models import WarrantyRecord, WarrantyStatus
from services.warranty.rules import RuleSet
from services.warranty.store import IdAllocator, OwnerIndex, RecordStore
from shared.ledger import Clock, LedgerStorage
from shared.logging import get_logger


logger = get_logger(__name__)


class WarrantyRegistry:
    """
    Warranty Registry over injected ledger storage and clock.

    Features:
    - Registration with date-window validation
    - Status updates and revocation by the current owner
    - Ownership transfer of Active warranties
    - Public owner-indexed and id lookup

    Every mutating call runs in a single storage transaction: either all of
    its writes land or none do.
    """

    def __init__(
        self,
        storage: LedgerStorage,
        clock: Clock,
        rules: RuleSet | None = None,
    ) -> None:
        self.storage = storage
        self.clock = clock
        self.rules = rules or RuleSet()
        self.records = RecordStore(storage)
        self.owners = OwnerIndex(storage)
        self.ids = IdAllocator(storage)

    @contextmanager
    def _operation(self, name: str, **context: Any) -> Iterator[None]:
        try:
            with self.storage.transaction():
                yield
        except WarrantyError as e:
            logger.warning(
                "warranty_operation_rejected",
                operation=name,
                kind=e.kind.value,
                reason=e.message,
                **context,
            )
            raise

    def register(
        self,
        caller: str,
        owner: str,
        product_name: str,
        serial_number: str,
        manufacturer: str,
        purchase_date: int,
        expiration_date: int,
    ) -> int:
        """
        Register a new warranty.

        Args:
            caller: Authenticated principal making the call.
            owner: Address that will own the warranty.
            product_name: Name of the product.
            serial_number: Product serial number.
            manufacturer: Manufacturer name.
            purchase_date: Purchase date as Unix timestamp.
            expiration_date: Coverage end as Unix timestamp.

        Returns:
            The new warranty id.

        Raises:
            UnauthorizedError: If caller is not the owner.
            InvalidDateRangeError: If expiration is not after purchase.
            FutureDatedError: If purchase is after the current time.
        """
        with self._operation("register", caller=caller, owner=owner):
            self.rules.require_caller(caller, owner)

            now = self.clock.now()
            self.rules.validate_dates(purchase_date, expiration_date, now)

            warranty_id = self.ids.allocate()
            record = WarrantyRecord(
                id=warranty_id,
                owner=owner,
                product_name=product_name,
                serial_number=serial_number,
                manufacturer=manufacturer,
                purchase_date=purchase_date,
                expiration_date=expiration_date,
                status=self.rules.initial_status(expiration_date, now),
                created_at=now,
            )

            self.records.put(record)
            self.records.append_id(warranty_id)
            self.owners.add(owner, warranty_id)

        logger.info(
            "warranty_registered",
            warranty_id=warranty_id,
            owner=owner,
            serial_number=serial_number,
            status=record.status.value,
        )
        return warranty_id

    def get_by_id(self, warranty_id: int) -> WarrantyRecord | None:
        """Get warranty record by ID, or None if absent."""
        return self.records.get(warranty_id)

    def get_many(self, warranty_ids: Iterable[int]) -> list[WarrantyRecord]:
        """Records for the given ids in order, skipping unknown ids."""
        found = []
        for warranty_id in warranty_ids:
            record = self.records.get(warranty_id)
            if record is not None:
                found.append(record)
        return found

    def update_status(self, caller: str, warranty_id: int, status: WarrantyStatus) -> None:
        """
        Overwrite the stored status.

        Any status may replace any other; only ownership is checked.

        Raises:
            StorageUninitializedError: If nothing was ever registered.
            NotFoundError: If the id is unknown.
            UnauthorizedError: If caller is not the current owner.
        """
        with self._operation("update_status", caller=caller, warranty_id=warranty_id):
            record = self.records.load(warranty_id)
            self.rules.require_caller(caller, record.owner, warranty_id)

            previous = record.status
            record.status = WarrantyStatus(status)
            self.records.put(record)

        logger.info(
            "warranty_status_updated",
            warranty_id=warranty_id,
            previous=previous.value,
            status=record.status.value,
        )

    def transfer(self, caller: str, warranty_id: int, new_owner: str) -> None:
        """
        Transfer an Active warranty to a new owner.

        Raises:
            StorageUninitializedError: If nothing was ever registered.
            NotFoundError: If the id is unknown.
            UnauthorizedError: If caller is not the current owner.
            InvalidTransferError: If the warranty is not Active.
        """
        with self._operation("transfer", caller=caller, warranty_id=warranty_id):
            record = self.records.load(warranty_id)
            self.rules.require_caller(caller, record.owner, warranty_id)
            self.rules.require_transferable(record)

            old_owner = record.owner
            record.owner = new_owner
            self.records.put(record)

            self.owners.remove(old_owner, warranty_id)
            self.owners.add(new_owner, warranty_id)

        logger.info(
            "warranty_transferred",
            warranty_id=warranty_id,
            from_owner=old_owner,
            to_owner=new_owner,
        )

    def revoke(self, caller: str, warranty_id: int) -> None:
        """
        Revoke a warranty. Revoking twice is allowed.

        Raises:
            StorageUninitializedError: If nothing was ever registered.
            NotFoundError: If the id is unknown.
            UnauthorizedError: If caller is not the current owner.
        """
        with self._operation("revoke", caller=caller, warranty_id=warranty_id):
            record = self.records.load(warranty_id)
            self.rules.require_caller(caller, record.owner, warranty_id)

            record.status = WarrantyStatus.REVOKED
            self.records.put(record)

        logger.info("warranty_revoked", warranty_id=warranty_id, owner=record.owner)

    def list_by_owner(self, owner: str) -> list[int]:
        """Ids currently owned by `owner`, in index order."""
        return self.owners.ids_for(owner)

    def count(self) -> int:
        """Total number of warranties ever registered."""
        return self.ids.current()

    def all_ids(self) -> list[int]:
        """Every id ever issued, in registration order."""
        return self.records.all_ids()

    def is_expired(self, warranty_id: int) -> bool:
        """
        Check expiry against the current clock, ignoring stored status.

        Raises:
            StorageUninitializedError: If nothing was ever registered.
            NotFoundError: If the id is unknown.
        """
        record = self.records.load(warranty_id)
        return self.rules.is_expired(record, self.clock.now())
