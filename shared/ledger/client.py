"""
Ledger Interfaces
=================

Abstract storage and clock collaborators consumed by ledger-backed services.

The host ledger guarantees that calls are serialized and that every write
made inside `transaction()` becomes visible all at once or not at all.

Version: 0.1.0
"""

import time
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import AbstractContextManager
from typing import Any

from shared.config import ClockMode, LedgerMode, settings
from shared.logging import get_logger

logger = get_logger(__name__)


class LedgerStorage(ABC):
    """
    Abstract base class for ledger key/value storage.

    Implements the Strategy pattern for different ledger modes.
    """

    @property
    @abstractmethod
    def mode(self) -> LedgerMode:
        """Get the ledger mode."""
        ...

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """
        Read a value.

        Args:
            key: Storage key
            default: Returned when the key was never written

        Returns:
            A private copy of the stored value
        """
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """
        Write a value.

        Inside a transaction the write is staged until commit.
        """
        ...

    @abstractmethod
    def has(self, key: str) -> bool:
        """Check whether a key has ever been written."""
        ...

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """
        Open an all-or-nothing write scope.

        Writes are committed when the block exits normally and discarded
        when it raises. A nested call joins the enclosing transaction.
        """
        ...

    @abstractmethod
    def keys(self) -> Iterator[str]:
        """Iterate over committed keys."""
        ...

    def health_check(self) -> dict[str, Any]:
        """Check storage health."""
        return {
            "status": "healthy",
            "mode": self.mode.value,
            "keys": sum(1 for _ in self.keys()),
        }


class Clock(ABC):
    """Source of the current ledger timestamp."""

    @abstractmethod
    def now(self) -> int:
        """Return the current time as a Unix timestamp in seconds."""
        ...


class SystemClock(Clock):
    """Wall-clock time from the host."""

    def now(self) -> int:
        return int(time.time())


# Global instances
_storage: LedgerStorage | None = None
_clock: Clock | None = None


def get_ledger_storage() -> LedgerStorage:
    """
    Get the configured ledger storage instance.

    Returns:
        LedgerStorage instance based on settings
    """
    global _storage

    if _storage is None:
        mode = settings.ledger.mode

        if mode == LedgerMode.MOCK:
            from shared.ledger.mock import InMemoryLedgerStorage

            _storage = InMemoryLedgerStorage(namespace=settings.ledger.namespace)
        elif mode in (LedgerMode.TESTNET, LedgerMode.MAINNET):
            raise NotImplementedError(
                f"Ledger mode '{mode.value}' not yet implemented. "
                "Use LEDGER_MODE=mock for development."
            )
        else:
            raise ValueError(f"Unknown ledger mode: {mode}")

        logger.info("ledger_storage_initialized", mode=mode.value)

    return _storage


def set_ledger_storage(storage: LedgerStorage) -> None:
    """
    Set a custom ledger storage.

    Args:
        storage: LedgerStorage instance
    """
    global _storage
    _storage = storage
    logger.info("ledger_storage_set", mode=storage.mode.value)


def get_clock() -> Clock:
    """
    Get the configured clock instance.

    Returns:
        Clock instance based on settings
    """
    global _clock

    if _clock is None:
        if settings.clock.mode == ClockMode.FIXED:
            from shared.ledger.mock import MockClock

            _clock = MockClock(settings.clock.fixed_timestamp)
        else:
            _clock = SystemClock()

        logger.info("ledger_clock_initialized", mode=settings.clock.mode.value)

    return _clock


def set_clock(clock: Clock) -> None:
    """Set a custom clock."""
    global _clock
    _clock = clock


def reset_ledger() -> None:
    """Reset storage and clock to be re-initialized."""
    global _storage, _clock
    _storage = None
    _clock = None
