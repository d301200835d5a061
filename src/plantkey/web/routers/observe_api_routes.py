"""Observe flow endpoints: local trait matching and quota-gated answers."""

import logging
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from plantkey.identification.catalog import questions_for
from plantkey.identification.matching import ObserveMatcher
from plantkey.quota.tracker import QuotaOutcome, QuotaTracker
from plantkey.web.core.container import Container
from plantkey.web.models.identification import (
    AnswerRequest,
    AnswerResponse,
    ObserveMatchRequest,
    ObserveMatchResponse,
    QuotaResponse,
    SpeciesMatch,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/observe")


@router.post("/match", response_model=ObserveMatchResponse)
@inject
async def match_species(
    request: ObserveMatchRequest,
    matcher: Annotated[ObserveMatcher, Depends(Provide[Container.observe_matcher])],
) -> ObserveMatchResponse:
    """Rank local species against the selected traits of one organ.

    Matching itself never consumes quota; answers are recorded separately.
    """
    results = matcher.match(request.selected_traits, questions_for(request.organ))
    if request.limit is not None:
        limited = results[: request.limit]
    else:
        limited = results
    return ObserveMatchResponse(
        organ=request.organ,
        total=len(results),
        matches=[SpeciesMatch.from_result(result) for result in limited],
    )


@router.post("/answers", response_model=AnswerResponse)
@inject
async def record_answer(
    answer: AnswerRequest,
    tracker: Annotated[QuotaTracker, Depends(Provide[Container.quota_tracker])],
) -> AnswerResponse:
    """Record one trait answer against the daily quota."""
    outcome = tracker.record_answer()
    if outcome is QuotaOutcome.DENIED:
        logger.info("Observe answer for %s denied by daily quota", answer.category.value)

    return AnswerResponse(
        outcome=outcome,
        upgrade_required=outcome is QuotaOutcome.DENIED,
        quota=QuotaResponse.from_status(tracker.status()),
    )
