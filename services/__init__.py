"""
Member Registry Services
========================

Services:
- member_registry: REST API for members and the records they own
"""

__all__ = [
    "member_registry",
]
