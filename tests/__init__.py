"""
Warranty Tracker Test Suite
===========================

Test organization:
- tests/unit/              - Shared library tests (config, auth, ledger)
- tests/services/warranty/ - Registry core and HTTP API tests

Run tests:
    pytest                          # All tests
    pytest tests/unit               # Unit tests only
    pytest --cov=services          # With coverage
"""
