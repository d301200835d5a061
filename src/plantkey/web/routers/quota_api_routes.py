"""Daily quota status endpoint."""

from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from plantkey.quota.tracker import QuotaTracker
from plantkey.web.core.container import Container
from plantkey.web.models.identification import QuotaResponse

router = APIRouter()


@router.get("/quota", response_model=QuotaResponse)
@inject
async def get_quota(
    tracker: Annotated[QuotaTracker, Depends(Provide[Container.quota_tracker])],
) -> QuotaResponse:
    """Get today's Observe answer usage."""
    return QuotaResponse.from_status(tracker.status())
