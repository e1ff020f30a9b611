"""
Related List Routes
===================

Read-only listings of the records a member owns:

- GET /api/members/{id}/assessments
- GET /api/members/{id}/educations
- GET /api/members/{id}/appearances
- GET /api/members/{id}/furtheredu

A known member with no records yields 200 and an empty array; an unknown
member yields 404. Listings are not paginated.

Version: 0.1.0
"""

from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response

from shared.logging import get_logger
from services.member_registry.exceptions import NotFoundError
from services.member_registry.resources import (
    MEMBER_FOREIGN_KEY,
    MEMBER_RELATIONS,
    MEMBERS,
    Resource,
)
from services.member_registry.routes.crud import EndpointResult, StoresDependency
from services.member_registry.store import EntityStore, StoreSession


logger = get_logger(__name__)


class RelatedListEndpoint:
    """Child records of one parent, fetched by a scoped query."""

    def __init__(
        self,
        relation: str,
        parents: EntityStore[Any],
        children: EntityStore[Any],
        parent_field: str = MEMBER_FOREIGN_KEY,
    ) -> None:
        self.relation = relation
        self.parents = parents
        self.children = children
        self.parent_field = parent_field

    async def list_by_parent(self, parent_id: int) -> EndpointResult:
        """
        All child records of ``parent_id``.

        Raises:
            NotFoundError: if the parent does not exist
        """
        logger.debug("rest_request_find_related", relation=self.relation, parent_id=parent_id)

        if await self.parents.get(parent_id) is None:
            raise NotFoundError(self.parents.resource.name, parent_id)

        records = await self.children.find_by_parent(self.parent_field, parent_id)
        return EndpointResult(body=records)


def build_member_relations_router(get_stores: StoresDependency) -> APIRouter:
    """Router for every member relation, to be included at ``MEMBERS.path``."""
    router = APIRouter()

    for relation, resource in MEMBER_RELATIONS.items():
        _add_relation_route(router, relation, resource, get_stores)

    return router


def _add_relation_route(
    router: APIRouter,
    relation: str,
    resource: Resource,
    get_stores: StoresDependency,
) -> None:
    schema: Any = resource.schema

    @router.get(
        f"/{{identifier}}/{relation}",
        name=f"list_member_{relation}",
        response_model=list[schema],
        responses={status.HTTP_404_NOT_FOUND: {"description": "Unknown member"}},
    )
    async def list_related(
        identifier: int,
        stores: StoreSession = Depends(get_stores),
    ) -> Response:
        endpoint = RelatedListEndpoint(relation, stores.store(MEMBERS), stores.store(resource))
        return (await endpoint.list_by_parent(identifier)).to_response()

    list_related.__doc__ = f"Get all {relation} of one member."
