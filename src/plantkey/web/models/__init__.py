"""Web API contract models using Pydantic for validation."""

from plantkey.web.models.health import HealthCheckResponse
from plantkey.web.models.identification import (
    AdjustedCandidate,
    AdjustRequest,
    AdjustResponse,
    AnswerRequest,
    AnswerResponse,
    CatalogQuestion,
    CatalogResponse,
    IdentifyResponse,
    ObserveMatchRequest,
    ObserveMatchResponse,
    QuotaResponse,
    SpeciesMatch,
    TraitOption,
)

__all__ = [
    "AdjustRequest",
    "AdjustResponse",
    "AdjustedCandidate",
    "AnswerRequest",
    "AnswerResponse",
    "CatalogQuestion",
    "CatalogResponse",
    "HealthCheckResponse",
    "IdentifyResponse",
    "ObserveMatchRequest",
    "ObserveMatchResponse",
    "QuotaResponse",
    "SpeciesMatch",
    "TraitOption",
]
