"""
Warranty Tracker Services
=========================

Services:
- warranty: warranty registry and its HTTP API
"""

__all__ = [
    "warranty",
]
