"""Registry wiring for route handlers."""

from __future__ import annotations

from services.warranty.registry import WarrantyRegistry
from shared.ledger import get_clock, get_ledger_storage


_registry: WarrantyRegistry | None = None


def get_registry() -> WarrantyRegistry:
    """Registry bound to the configured ledger storage and clock."""
    global _registry

    if _registry is None:
        _registry = WarrantyRegistry(get_ledger_storage(), get_clock())
    return _registry


def reset_registry() -> None:
    """Drop the cached registry so the next request rebuilds it."""
    global _registry
    _registry = None
