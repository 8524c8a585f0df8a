"""
Warranty Store.

The three persisted structures of the registry, each a thin view over a
`LedgerStorage`:

- RecordStore: warranty id -> record, plus the append-only id list
- OwnerIndex: owner address -> ordered ids currently owned
- IdAllocator: count of warranties ever registered

None of these open transactions themselves; the registry wraps each call.
"""

from __future__ import annotations

from typing import Any

from services.warranty.errors import NotFoundError, StorageUninitializedError
from services.warranty.models import WarrantyRecord
from shared.ledger import LedgerStorage

RECORDS_KEY = "records"
ALL_IDS_KEY = "all_ids"
COUNT_KEY = "count"
OWNER_INDEX_PREFIX = "owner_index:"


class RecordStore:
    """Mapping from warranty id to record."""

    def __init__(self, storage: LedgerStorage) -> None:
        self._storage = storage

    @property
    def initialized(self) -> bool:
        """True once the first record has been written."""
        return self._storage.has(RECORDS_KEY)

    def _records(self) -> dict[int, dict[str, Any]] | None:
        return self._storage.get(RECORDS_KEY)

    def get(self, warranty_id: int) -> WarrantyRecord | None:
        records = self._records()
        if records is None or warranty_id not in records:
            return None
        return WarrantyRecord.model_validate(records[warranty_id])

    def load(self, warranty_id: int) -> WarrantyRecord:
        """
        Fetch a record that must exist.

        Raises:
            StorageUninitializedError: If nothing was ever registered.
            NotFoundError: If the id is unknown.
        """
        records = self._records()
        if records is None:
            raise StorageUninitializedError(
                "warranty storage not initialized",
                warranty_id=warranty_id,
            )
        if warranty_id not in records:
            raise NotFoundError(
                f"warranty {warranty_id} not found",
                warranty_id=warranty_id,
            )
        return WarrantyRecord.model_validate(records[warranty_id])

    def put(self, record: WarrantyRecord) -> None:
        records = self._records() or {}
        records[record.id] = record.model_dump(mode="json")
        self._storage.set(RECORDS_KEY, records)

    def all_ids(self) -> list[int]:
        return self._storage.get(ALL_IDS_KEY, [])

    def append_id(self, warranty_id: int) -> None:
        ids = self.all_ids()
        ids.append(warranty_id)
        self._storage.set(ALL_IDS_KEY, ids)


class OwnerIndex:
    """Secondary index from owner address to owned ids, in insertion order."""

    def __init__(self, storage: LedgerStorage) -> None:
        self._storage = storage

    @staticmethod
    def _key(owner: str) -> str:
        return f"{OWNER_INDEX_PREFIX}{owner}"

    def ids_for(self, owner: str) -> list[int]:
        return self._storage.get(self._key(owner), [])

    def add(self, owner: str, warranty_id: int) -> None:
        ids = self.ids_for(owner)
        if warranty_id in ids:
            return
        ids.append(warranty_id)
        self._storage.set(self._key(owner), ids)

    def remove(self, owner: str, warranty_id: int) -> None:
        """Drop an id by value, keeping the order of the rest."""
        ids = self.ids_for(owner)
        remaining = [i for i in ids if i != warranty_id]
        self._storage.set(self._key(owner), remaining)


class IdAllocator:
    """Monotonic id counter. Never decremented."""

    def __init__(self, storage: LedgerStorage) -> None:
        self._storage = storage

    def current(self) -> int:
        return self._storage.get(COUNT_KEY, 0)

    def allocate(self) -> int:
        warranty_id = self.current() + 1
        self._storage.set(COUNT_KEY, warranty_id)
        return warranty_id
