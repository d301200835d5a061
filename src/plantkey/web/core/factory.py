"""Application factory for creating FastAPI application with dependency injection."""

from fastapi import FastAPI

from plantkey import __version__
from plantkey.web.core.container import Container
from plantkey.web.core.lifespan import lifespan
from plantkey.web.middleware.request_logging import StructuredRequestLoggingMiddleware
from plantkey.web.routers import (
    catalog_api_routes,
    health_api_routes,
    identify_api_routes,
    observe_api_routes,
    quota_api_routes,
)


def create_app(container: Container | None = None) -> FastAPI:
    """Create FastAPI application with dependency injection.

    Args:
        container: Pre-built container, e.g. with test overrides. A new one is
            created when None.

    Returns:
        FastAPI: The configured application instance.
    """
    if container is None:
        container = Container()

    app = FastAPI(
        lifespan=lifespan,
        title="PlantKey API",
        description="API for trait-based plant identification and confidence scoring",
        version=__version__,
    )
    app.container = container  # type: ignore[attr-defined]

    app.add_middleware(StructuredRequestLoggingMiddleware)

    container.wire(
        modules=[
            "plantkey.web.routers.catalog_api_routes",
            "plantkey.web.routers.health_api_routes",
            "plantkey.web.routers.identify_api_routes",
            "plantkey.web.routers.observe_api_routes",
            "plantkey.web.routers.quota_api_routes",
        ]
    )

    app.include_router(health_api_routes.router, prefix="/api", tags=["Health Check API"])
    app.include_router(catalog_api_routes.router, prefix="/api", tags=["Catalog API"])
    app.include_router(observe_api_routes.router, prefix="/api", tags=["Observe API"])
    app.include_router(quota_api_routes.router, prefix="/api", tags=["Quota API"])
    app.include_router(identify_api_routes.router, prefix="/api", tags=["Identify API"])

    return app
