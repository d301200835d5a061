"""Confidence adjustment for external recognition candidates.

An externally nominated species earns a bonus for every user-verified trait its local
record agrees with and a smaller penalty for every one it does not. Unlike the Observe
matcher, an undocumented trait counts as a disagreement here.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import NamedTuple

from plantkey.config.models import ScoringConfig
from plantkey.identification.catalog import TraitQuestion
from plantkey.identification.matching import normalize_traits, traits_overlap
from plantkey.recognition.models import ExternalCandidate
from plantkey.taxonomy.store import TaxonomyStore

logger = logging.getLogger(__name__)


class AdjustedMatch(NamedTuple):
    """An external candidate re-scored with verified traits."""

    candidate: ExternalCandidate
    adjusted_score: float  # 0.0-1.0
    verified_trait_count: int
    in_local_taxonomy: bool

    @property
    def raw_score(self) -> float:
        return self.candidate.score


def clamp_score(score: float) -> float:
    """Clamp a score into [0.0, 1.0]."""
    return min(1.0, max(0.0, score))


class ConfidenceAdjuster:
    """Fuse external recognition scores with locally verified traits."""

    def __init__(self, store: TaxonomyStore, scoring: ScoringConfig | None = None):
        """Initialize the adjuster.

        Args:
            store: Taxonomy used to corroborate candidates
            scoring: Bonus, penalty and ranking limit; defaults when None
        """
        self.store = store
        self.scoring = scoring or ScoringConfig()

    def adjust(
        self,
        candidate: ExternalCandidate,
        verified_traits: Mapping[str, str],
        questions: Sequence[TraitQuestion],
    ) -> AdjustedMatch:
        """Adjust one candidate's score.

        Args:
            candidate: External candidate with its raw score
            verified_traits: Category key to the term the user verified
            questions: Questions for the organ being verified

        Returns:
            AdjustedMatch; the raw score is returned unchanged when the species has
            no local record
        """
        species = self.store.find_species(candidate.scientific_name)
        if species is None:
            return AdjustedMatch(
                candidate=candidate,
                adjusted_score=candidate.score,
                verified_trait_count=0,
                in_local_taxonomy=False,
            )

        verified = normalize_traits(verified_traits)
        bonus = 0.0
        verified_count = 0
        for question in questions:
            verified_value = verified.get(question.category.value)
            if verified_value is None:
                continue

            if traits_overlap(species.trait(question.category), verified_value):
                bonus += self.scoring.match_bonus
                verified_count += 1
            else:
                bonus -= self.scoring.mismatch_penalty

        return AdjustedMatch(
            candidate=candidate,
            adjusted_score=clamp_score(candidate.score + bonus),
            verified_trait_count=verified_count,
            in_local_taxonomy=True,
        )

    def rank(
        self,
        candidates: Sequence[ExternalCandidate],
        verified_traits: Mapping[str, str],
        questions: Sequence[TraitQuestion],
        limit: int | None = None,
    ) -> list[AdjustedMatch]:
        """Adjust the top candidates independently and rank them.

        Args:
            candidates: Candidates in provider order
            verified_traits: Category key to the term the user verified
            questions: Questions for the organ being verified
            limit: Number of leading candidates to consider; defaults to the
                configured ``adjusted_candidate_limit``

        Returns:
            Adjusted matches sorted by adjusted score, highest first; equal scores
            keep provider order
        """
        if limit is None:
            limit = self.scoring.adjusted_candidate_limit

        adjusted = [
            self.adjust(candidate, verified_traits, questions) for candidate in candidates[:limit]
        ]
        # sorted() is stable, so provider order breaks ties
        ranked = sorted(adjusted, key=lambda match: -match.adjusted_score)

        if ranked:
            logger.debug(
                "Re-ranked %d candidates with %d verified traits; top %s at %.2f",
                len(ranked),
                len(verified_traits),
                ranked[0].candidate.scientific_name,
                ranked[0].adjusted_score,
            )
        return ranked
