"""Health check endpoints for monitoring service status."""

from datetime import UTC, datetime
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from plantkey import __version__
from plantkey.taxonomy.store import TaxonomyStore
from plantkey.web.core.container import Container
from plantkey.web.models.health import HealthCheckResponse

router = APIRouter(prefix="/health")


@router.get("/", response_model=HealthCheckResponse)
@inject
async def health_check(
    store: Annotated[TaxonomyStore, Depends(Provide[Container.taxonomy_store])],
) -> HealthCheckResponse:
    """Check basic health status of the service.

    Returns:
        Health status with timestamp, version and loaded species count.
    """
    return HealthCheckResponse(
        status="healthy",
        timestamp=datetime.now(UTC).isoformat(),
        version=__version__,
        service="plantkey",
        species_count=len(store),
    )
