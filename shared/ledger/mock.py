"""
Mock Ledger
===========

In-memory storage and clock implementations for development and testing.

Version: 0.1.0
"""

import copy
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from shared.config import LedgerMode
from shared.ledger.client import Clock, LedgerStorage
from shared.logging import get_logger

logger = get_logger(__name__)


class InMemoryLedgerStorage(LedgerStorage):
    """
    In-memory transactional key/value store.

    Values are deep-copied on the way in and out, so callers can mutate
    what they read without touching committed state. Data is lost on
    restart.
    """

    def __init__(self, namespace: str = "") -> None:
        """Initialize mock storage with empty state."""
        self._namespace = namespace
        self._data: dict[str, Any] = {}
        self._staged: dict[str, Any] | None = None
        self._commits = 0
        self._rollbacks = 0

        logger.debug("mock_ledger_initialized", namespace=namespace)

    @property
    def mode(self) -> LedgerMode:
        return LedgerMode.MOCK

    @property
    def in_transaction(self) -> bool:
        return self._staged is not None

    def _qualify(self, key: str) -> str:
        if self._namespace:
            return f"{self._namespace}:{key}"
        return key

    def get(self, key: str, default: Any = None) -> Any:
        qualified = self._qualify(key)
        if self._staged is not None and qualified in self._staged:
            return copy.deepcopy(self._staged[qualified])
        if qualified in self._data:
            return copy.deepcopy(self._data[qualified])
        return default

    def set(self, key: str, value: Any) -> None:
        qualified = self._qualify(key)
        if self._staged is not None:
            self._staged[qualified] = copy.deepcopy(value)
        else:
            self._data[qualified] = copy.deepcopy(value)

    def has(self, key: str) -> bool:
        qualified = self._qualify(key)
        if self._staged is not None and qualified in self._staged:
            return True
        return qualified in self._data

    @contextmanager
    def transaction(self) -> Iterator[None]:
        if self._staged is not None:
            # Nested scope joins the outer transaction
            yield
            return

        self._staged = {}
        try:
            yield
        except BaseException:
            discarded = len(self._staged)
            self._staged = None
            self._rollbacks += 1
            logger.debug("ledger_transaction_rolled_back", discarded_writes=discarded)
            raise

        staged, self._staged = self._staged, None
        self._data.update(staged)
        self._commits += 1
        logger.debug("ledger_transaction_committed", writes=len(staged))

    def keys(self) -> Iterator[str]:
        prefix = self._qualify("")
        for key in self._data:
            yield key[len(prefix):] if prefix else key

    def health_check(self) -> dict[str, Any]:
        return {
            **super().health_check(),
            "namespace": self._namespace,
            "commits": self._commits,
            "rollbacks": self._rollbacks,
        }

    # =========================================================================
    # Test Utilities
    # =========================================================================

    def clear_all(self) -> None:
        """Clear all mock data (for testing)."""
        self._data.clear()
        self._staged = None
        self._commits = 0
        self._rollbacks = 0
        logger.debug("mock_ledger_cleared")

    def get_stats(self) -> dict[str, int]:
        """Get storage statistics."""
        return {
            "keys": len(self._data),
            "commits": self._commits,
            "rollbacks": self._rollbacks,
        }


class MockClock(Clock):
    """Settable clock for tests and fixed-time deployments."""

    def __init__(self, timestamp: int = 0) -> None:
        self._timestamp = timestamp

    def now(self) -> int:
        return self._timestamp

    def set(self, timestamp: int) -> None:
        """Move the clock to an absolute timestamp."""
        self._timestamp = timestamp

    def advance(self, seconds: int) -> int:
        """Move the clock forward and return the new timestamp."""
        self._timestamp += seconds
        return self._timestamp
