"""
Member Registry Routes
======================

API route handlers for the Member Registry Service.
"""

from services.member_registry.routes.crud import (
    CrudEndpoint,
    EndpointResult,
    build_crud_router,
)
from services.member_registry.routes.related import (
    RelatedListEndpoint,
    build_member_relations_router,
)


__all__ = [
    "CrudEndpoint",
    "EndpointResult",
    "RelatedListEndpoint",
    "build_crud_router",
    "build_member_relations_router",
]
