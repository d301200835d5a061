"""Identification API contract models."""

import datetime

from pydantic import BaseModel, Field

from plantkey.identification.adjustment import AdjustedMatch
from plantkey.identification.catalog import Organ
from plantkey.identification.matching import MatchResult
from plantkey.quota.tracker import QuotaOutcome, QuotaStatus
from plantkey.recognition.models import ExternalCandidate, RecognitionOrgan
from plantkey.taxonomy.categories import TraitCategory
from plantkey.taxonomy.models import TraitTerm

# ==================== Catalog ====================


class TraitOption(BaseModel):
    """A selectable vocabulary term."""

    term: str
    description: str = ""
    image_url: str | None = None

    @classmethod
    def from_term(cls, term: TraitTerm) -> "TraitOption":
        return cls(term=term.term, description=term.description_short, image_url=term.image_url)


class CatalogQuestion(BaseModel):
    """One trait question with its options."""

    title: str
    category: TraitCategory
    options: list[TraitOption] = Field(default_factory=list)


class CatalogResponse(BaseModel):
    """Questions for one organ, in catalog order."""

    organ: Organ
    questions: list[CatalogQuestion]


# ==================== Observe ====================


class ObserveMatchRequest(BaseModel):
    """Request model for ranking species by selected traits."""

    organ: Organ
    selected_traits: dict[str, str] = Field(default_factory=dict)
    limit: int | None = Field(default=None, ge=1)


class SpeciesMatch(BaseModel):
    """A ranked species."""

    scientific_name: str
    common_name: str | None = None
    family: str | None = None
    match_percentage: float
    matched_traits: int
    compared_traits: int

    @classmethod
    def from_result(cls, result: MatchResult) -> "SpeciesMatch":
        return cls(
            scientific_name=result.species.scientific_name,
            common_name=result.species.common_name,
            family=result.species.family,
            match_percentage=result.match_percentage,
            matched_traits=result.matched_traits,
            compared_traits=result.compared_traits,
        )


class ObserveMatchResponse(BaseModel):
    organ: Organ
    total: int
    matches: list[SpeciesMatch]


class AnswerRequest(BaseModel):
    """Request model for recording one Observe answer."""

    category: TraitCategory
    value: str = Field(..., min_length=1)


# ==================== Quota ====================


class QuotaResponse(BaseModel):
    """Quota window as reported to clients."""

    date: datetime.date
    count: int
    limit: int
    remaining: int | None
    unlimited: bool
    upgrade_required: bool

    @classmethod
    def from_status(cls, status: QuotaStatus) -> "QuotaResponse":
        return cls(**status.model_dump(), upgrade_required=status.upgrade_required)


class AnswerResponse(BaseModel):
    outcome: QuotaOutcome
    upgrade_required: bool
    quota: QuotaResponse


# ==================== Identify ====================


class AdjustRequest(BaseModel):
    """Request model for re-ranking external candidates with verified traits."""

    organ: Organ
    candidates: list[ExternalCandidate]
    verified_traits: dict[str, str] = Field(default_factory=dict)
    limit: int | None = Field(default=None, ge=1)


class AdjustedCandidate(BaseModel):
    scientific_name: str
    common_name: str
    raw_score: float
    adjusted_score: float
    verified_trait_count: int
    in_local_taxonomy: bool

    @classmethod
    def from_match(cls, match: AdjustedMatch) -> "AdjustedCandidate":
        return cls(
            scientific_name=match.candidate.scientific_name,
            common_name=match.candidate.common_name,
            raw_score=match.raw_score,
            adjusted_score=match.adjusted_score,
            verified_trait_count=match.verified_trait_count,
            in_local_taxonomy=match.in_local_taxonomy,
        )


class AdjustResponse(BaseModel):
    organ: Organ
    results: list[AdjustedCandidate]


class IdentifyResponse(BaseModel):
    """Raw recognition candidates in provider order."""

    organ: RecognitionOrgan
    candidates: list[ExternalCandidate]
    remaining_requests: int | None = None
