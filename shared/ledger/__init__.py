"""
Ledger Module
=============

Abstraction layer for the host ledger collaborators.

Supports:
- Mock (in-memory, development/testing)
- Testnet / Mainnet (not yet implemented)

Features:
- Key/value storage with all-or-nothing commit per call
- Monotonic timestamp source

Usage:
    from shared.ledger import get_ledger_storage, get_clock

    storage = get_ledger_storage()
    with storage.transaction():
        storage.set("count", storage.get("count", 0) + 1)

    now = get_clock().now()
"""

from shared.ledger.client import (
    Clock,
    LedgerStorage,
    SystemClock,
    get_clock,
    get_ledger_storage,
    reset_ledger,
    set_clock,
    set_ledger_storage,
)
from shared.ledger.mock import InMemoryLedgerStorage, MockClock

__all__ = [
    # Interfaces
    "Clock",
    "LedgerStorage",
    "get_clock",
    "get_ledger_storage",
    "reset_ledger",
    "set_clock",
    "set_ledger_storage",
    # Implementations
    "InMemoryLedgerStorage",
    "MockClock",
    "SystemClock",
]
