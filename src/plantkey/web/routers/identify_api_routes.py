"""Image identification endpoints."""

import logging
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from plantkey.identification.adjustment import ConfidenceAdjuster
from plantkey.identification.catalog import questions_for
from plantkey.recognition.models import RecognitionOrgan
from plantkey.recognition.plantnet import (
    InvalidImageError,
    PlantNetClient,
    RecognitionConfigError,
    RecognitionError,
)
from plantkey.web.core.container import Container
from plantkey.web.models.identification import (
    AdjustedCandidate,
    AdjustRequest,
    AdjustResponse,
    IdentifyResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/identify")


@router.post("", response_model=IdentifyResponse)
@inject
async def identify_image(
    client: Annotated[PlantNetClient, Depends(Provide[Container.plantnet_client])],
    image: Annotated[UploadFile, File(description="Photo of the plant")],
    organ: Annotated[RecognitionOrgan, Form()] = RecognitionOrgan.AUTO,
) -> IdentifyResponse:
    """Identify a plant photo with the external recognition service.

    Raises:
        HTTPException: 400 for unusable images, 503 when recognition is not
            configured, 502 for any other recognition failure
    """
    content = await image.read()
    try:
        result = await client.identify(
            content,
            organ,
            filename=image.filename or "plant.jpg",
            content_type=image.content_type or "image/jpeg",
        )
    except InvalidImageError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except RecognitionConfigError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    except RecognitionError as e:
        logger.error("Recognition failed: %s", e)
        raise HTTPException(status_code=502, detail=f"Recognition failed: {e}") from e

    return IdentifyResponse(
        organ=result.organ,
        candidates=result.candidates,
        remaining_requests=result.remaining_requests,
    )


@router.post("/adjust", response_model=AdjustResponse)
@inject
async def adjust_candidates(
    request: AdjustRequest,
    adjuster: Annotated[ConfidenceAdjuster, Depends(Provide[Container.confidence_adjuster])],
) -> AdjustResponse:
    """Re-rank external candidates with the traits the user verified."""
    ranked = adjuster.rank(
        request.candidates,
        request.verified_traits,
        questions_for(request.organ),
        limit=request.limit,
    )
    return AdjustResponse(
        organ=request.organ,
        results=[AdjustedCandidate.from_match(match) for match in ranked],
    )
