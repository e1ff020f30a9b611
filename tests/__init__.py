"""
Member Registry Test Suite
==========================

Test organization:
- tests/unit/          - Unit tests (no external dependencies)
- tests/services/      - Service tests over in-memory stores

Run tests:
    pytest                          # All tests
    pytest tests/unit               # Unit tests only
"""
