"""Warranty Tracker API routes."""

from services.warranty.routes.warranties import router as warranties_router
from services.warranty.routes.owners import router as owners_router

__all__ = [
    "warranties_router",
    "owners_router",
]
