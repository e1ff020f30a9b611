"""
Member Registry Service - Main Application
==========================================

FastAPI application for managing members and the records they own.

Version: 0.1.0
"""

import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from shared.config import settings
from shared.logging import bind_context, clear_context, get_logger, setup_logging
from shared.models.common import ErrorResponse, HealthResponse
from services.member_registry import __version__
from services.member_registry.exceptions import EntityValidationError, NotFoundError
from services.member_registry.resources import MEMBERS, RESOURCES
from services.member_registry.routes import (
    CrudEndpoint,
    build_crud_router,
    build_member_relations_router,
)
from services.member_registry.routes.headers import alert_header_names, failure_alert
from services.member_registry.services import MemberService
from services.member_registry.store import StoreProvider, StoreSession, get_store_provider

# Setup logging
setup_logging(
    log_level=settings.log_level.value,
    json_logs=settings.is_production,
    service_name="member-registry",
)

logger = get_logger(__name__)


def _member_endpoint(stores: StoreSession) -> CrudEndpoint[Any]:
    members = stores.store(MEMBERS)
    return CrudEndpoint(MEMBERS, members, remove=MemberService.from_session(stores).delete)


def create_app(provider: StoreProvider | None = None) -> FastAPI:
    """
    Build the application around a store provider.

    Args:
        provider: Store provider; defaults to the configured backend
    """
    store_provider = provider or get_store_provider()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan manager."""
        logger.info(
            "member_registry_starting",
            environment=settings.environment.value,
            backend=store_provider.backend.value,
            port=settings.ports.member_registry,
        )

        try:
            await store_provider.startup()
        except Exception as e:
            logger.error("startup_failed", error=str(e))
            raise

        yield

        logger.info("member_registry_shutting_down")
        await store_provider.shutdown()

    async def get_stores() -> AsyncIterator[StoreSession]:
        async with store_provider.session() as stores:
            yield stores

    app = FastAPI(
        title="Member Registry Service",
        description="Members, assessments, educations, appearances and further education",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.store_provider = store_provider

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Link", "X-Total-Count", "Location", *alert_header_names()],
    )

    @app.middleware("http")
    async def request_context(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Bind request id, method and path to every log entry of the request."""
        clear_context()
        bind_context(
            request_id=request.headers.get("X-Request-ID", uuid.uuid4().hex),
            method=request.method,
            path=request.url.path,
        )
        return await call_next(request)

    # ========================================================================
    # Health Check Endpoints
    # ========================================================================

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """
        Service health check.

        Returns health status of the service and its store backend.
        """
        components: dict[str, dict[str, Any]] = {
            "store": await store_provider.health_check(),
        }

        all_healthy = all(
            c.get("status") == "healthy" for c in components.values()
        )

        return HealthResponse(
            status="healthy" if all_healthy else "degraded",
            service="member-registry",
            version=__version__,
            components=components,
        )

    @app.get("/", tags=["Health"])
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {
            "service": "Member Registry Service",
            "version": __version__,
            "docs": "/docs",
        }

    # ========================================================================
    # Include Routers
    # ========================================================================

    app.include_router(
        build_member_relations_router(get_stores),
        prefix=MEMBERS.path,
        tags=["Member Records"],
    )

    for resource in RESOURCES:
        app.include_router(
            build_crud_router(
                resource,
                get_stores,
                endpoint_factory=_member_endpoint if resource is MEMBERS else None,
            ),
            prefix=resource.path,
            tags=[resource.collection],
        )

    # ========================================================================
    # Error Handlers
    # ========================================================================

    @app.exception_handler(EntityValidationError)
    async def validation_error_handler(request: Request, exc: EntityValidationError) -> Response:
        """Rejected request: 400 with failure alert headers."""
        logger.info(
            "request_rejected",
            error=exc.message,
            entity=exc.entity_name,
            path=request.url.path,
        )
        body = ErrorResponse(
            message=exc.message,
            description=exc.description,
            entity=exc.entity_name,
            status_code=exc.status_code,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=jsonable_encoder(body),
            headers=failure_alert(exc.entity_name, exc.error_key),
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> Response:
        """Absent record: 404 with an empty body."""
        logger.debug(
            "record_not_found",
            entity=exc.entity_name,
            id=exc.identifier,
        )
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> Response:
        """Handle HTTP exceptions."""
        logger.warning(
            "http_exception",
            status_code=exc.status_code,
            detail=exc.detail,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "message": f"error.http.{exc.status_code}",
                "description": exc.detail,
                "status_code": exc.status_code,
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> Response:
        """Handle unexpected exceptions."""
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "message": "error.internalServerError",
                "description": "Internal server error",
                "status_code": 500,
            },
        )

    return app


app = create_app()


# ============================================================================
# Run with Uvicorn
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.member_registry.main:app",
        host="0.0.0.0",
        port=settings.ports.member_registry,
        reload=settings.debug,
        log_level=settings.log_level.value.lower(),
    )
