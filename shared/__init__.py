"""
Warranty Tracker Shared Library
===============================

Common utilities and collaborator abstractions used by the warranty service.

Modules:
    - config: Configuration management with Pydantic Settings
    - logging: Structured logging with structlog
    - auth: JWT bearer tokens identifying the calling principal
    - ledger: Transactional key/value storage and clock interfaces
    - models: Shared Pydantic response models

Version: 0.1.0
"""

__version__ = "0.1.0"
