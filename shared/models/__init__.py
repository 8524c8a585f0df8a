"""
Shared Models
=============

Pydantic response models shared across services.
"""

from shared.models.common import ErrorResponse, HealthResponse

__all__ = [
    "ErrorResponse",
    "HealthResponse",
]
