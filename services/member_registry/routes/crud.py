"""
CRUD Routes
===========

Generic REST endpoint for one resource:

- POST   /api/{collection}          create (400 if the record has an id)
- PUT    /api/{collection}          update (create if the record has no id)
- GET    /api/{collection}          paged listing with Link / X-Total-Count
- GET    /api/{collection}/{id}     point lookup (404 with empty body)
- DELETE /api/{collection}/{id}     delete

Version: 0.1.0
"""

from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Generic

from fastapi import APIRouter, Depends, Query, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from shared.config import settings
from shared.logging import get_logger
from shared.models.common import ErrorResponse, PageRequest, parse_sort
from services.member_registry.exceptions import IdExistsError, NotFoundError
from services.member_registry.resources import Resource
from services.member_registry.routes.commands import (
    CreateCommand,
    R,
    UpdateCommand,
    classify_save,
)
from services.member_registry.routes.headers import (
    entity_creation_alert,
    entity_deletion_alert,
    entity_update_alert,
    pagination_headers,
)
from services.member_registry.store import EntityStore, StoreSession


logger = get_logger(__name__)


@dataclass
class EndpointResult:
    """Status, headers and body of an endpoint outcome."""

    body: Any = None
    status_code: int = status.HTTP_200_OK
    headers: dict[str, str] = field(default_factory=dict)

    def to_response(self) -> Response:
        if self.body is None:
            return Response(status_code=self.status_code, headers=self.headers)
        return JSONResponse(
            content=jsonable_encoder(self.body),
            status_code=self.status_code,
            headers=self.headers,
        )


class CrudEndpoint(Generic[R]):
    """
    Maps create/update/list/get/delete onto one entity store.

    Args:
        resource: Resource served by this endpoint
        store: Entity store of ``resource``
        remove: Replacement for ``store.delete``, for resources whose
            deletion touches other stores
    """

    def __init__(
        self,
        resource: Resource,
        store: EntityStore[R],
        remove: Callable[[int], Awaitable[bool]] | None = None,
    ) -> None:
        self.resource = resource
        self.store = store
        self._remove = remove or store.delete

    @property
    def entity_name(self) -> str:
        return self.resource.name

    async def create(self, record: R) -> EndpointResult:
        """
        Store a new record.

        Raises:
            IdExistsError: if the record already carries an identifier
        """
        logger.debug("rest_request_save", entity=self.entity_name, record=record.model_dump(mode="json"))

        command = classify_save(record)
        if isinstance(command, UpdateCommand):
            raise IdExistsError(self.entity_name)
        return await self._create(command)

    async def update(self, record: R) -> EndpointResult:
        """
        Replace an existing record, or create it if it carries no identifier.

        Raises:
            NotFoundError: if no record has the given identifier
        """
        logger.debug("rest_request_update", entity=self.entity_name, record=record.model_dump(mode="json"))

        command = classify_save(record)
        if isinstance(command, CreateCommand):
            return await self._create(command)

        result = await self.store.update(command.record)
        if result is None:
            raise NotFoundError(self.entity_name, command.identifier)

        logger.info(f"{self.entity_name}_updated", id=command.identifier)
        return EndpointResult(
            body=result,
            headers=entity_update_alert(self.entity_name, command.identifier),
        )

    async def _create(self, command: CreateCommand[R]) -> EndpointResult:
        result = await self.store.insert(command.record)

        logger.info(f"{self.entity_name}_created", id=result.id)
        return EndpointResult(
            body=result,
            status_code=status.HTTP_201_CREATED,
            headers={
                "Location": self.resource.location(result.id),  # type: ignore[arg-type]
                **entity_creation_alert(self.entity_name, result.id),
            },
        )

    async def list(self, request: PageRequest) -> EndpointResult:
        """One page of records with pagination headers."""
        logger.debug(
            "rest_request_get_page",
            entity=self.entity_name,
            page=request.page,
            size=request.size,
            sort=[str(order) for order in request.sort],
        )

        page = await self.store.find_page(request.with_tie_break("id"))
        return EndpointResult(
            body=page.content,
            headers=pagination_headers(page, self.resource.path),
        )

    async def get_one(self, identifier: int) -> EndpointResult:
        """
        Point lookup.

        Raises:
            NotFoundError: if no record has ``identifier``
        """
        logger.debug("rest_request_get", entity=self.entity_name, id=identifier)

        record = await self.store.get(identifier)
        if record is None:
            raise NotFoundError(self.entity_name, identifier)
        return EndpointResult(body=record)

    async def delete(self, identifier: int) -> EndpointResult:
        """Delete by identifier. A missing record is not an error."""
        logger.debug("rest_request_delete", entity=self.entity_name, id=identifier)

        existed = await self._remove(identifier)

        logger.info(f"{self.entity_name}_deleted", id=identifier, existed=existed)
        return EndpointResult(headers=entity_deletion_alert(self.entity_name, identifier))


StoresDependency = Callable[[], AsyncIterator[StoreSession]]
EndpointFactory = Callable[[StoreSession], CrudEndpoint[Any]]


def build_crud_router(
    resource: Resource,
    get_stores: StoresDependency,
    endpoint_factory: EndpointFactory | None = None,
) -> APIRouter:
    """
    Build the router for ``resource``, to be included at ``resource.path``.

    Args:
        resource: Resource to serve
        get_stores: FastAPI dependency yielding a StoreSession per request
        endpoint_factory: Builds the endpoint from the request's stores
    """
    schema: Any = resource.schema
    factory = endpoint_factory or (
        lambda stores: CrudEndpoint(resource, stores.store(resource))
    )

    router = APIRouter()

    def get_endpoint(stores: StoreSession = Depends(get_stores)) -> CrudEndpoint[Any]:
        return factory(stores)

    @router.post(
        "",
        name=f"create_{resource.name}",
        response_model=schema,
        status_code=status.HTTP_201_CREATED,
        responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
    )
    async def create(
        record: schema,
        endpoint: CrudEndpoint[Any] = Depends(get_endpoint),
    ) -> Response:
        """Create a new record. The record must not carry an id."""
        return (await endpoint.create(record)).to_response()

    @router.put(
        "",
        name=f"update_{resource.name}",
        response_model=schema,
        responses={status.HTTP_404_NOT_FOUND: {"description": "Unknown id"}},
    )
    async def update(
        record: schema,
        endpoint: CrudEndpoint[Any] = Depends(get_endpoint),
    ) -> Response:
        """Update an existing record; a record without id is created."""
        return (await endpoint.update(record)).to_response()

    @router.get("", name=f"list_{resource.collection}", response_model=list[schema])
    async def list_records(
        page: int = Query(default=0, ge=0, description="0-based page index"),
        size: int = Query(
            default=settings.pagination.default_size,
            ge=1,
            description=f"Page size, capped at {settings.pagination.max_size}",
        ),
        sort: list[str] = Query(default=[], description="field[,asc|desc]"),
        endpoint: CrudEndpoint[Any] = Depends(get_endpoint),
    ) -> Response:
        """Get one page of records."""
        request = PageRequest(
            page=page,
            size=min(size, settings.pagination.max_size),
            sort=tuple(order for raw in sort for order in parse_sort(raw)),
        )
        return (await endpoint.list(request)).to_response()

    @router.get(
        "/{identifier}",
        name=f"get_{resource.name}",
        response_model=schema,
        responses={status.HTTP_404_NOT_FOUND: {"description": "Not found"}},
    )
    async def get_one(
        identifier: int,
        endpoint: CrudEndpoint[Any] = Depends(get_endpoint),
    ) -> Response:
        """Get one record by id."""
        return (await endpoint.get_one(identifier)).to_response()

    @router.delete("/{identifier}", name=f"delete_{resource.name}")
    async def delete(
        identifier: int,
        endpoint: CrudEndpoint[Any] = Depends(get_endpoint),
    ) -> Response:
        """Delete one record by id."""
        return (await endpoint.delete(identifier)).to_response()

    return router
