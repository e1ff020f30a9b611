"""
Member Registry Services
========================

Business logic spanning more than one entity store.
"""

from services.member_registry.services.member import MemberService

__all__ = ["MemberService"]
