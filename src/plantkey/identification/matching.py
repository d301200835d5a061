"""Local trait matcher for the Observe flow.

Scores every species in the taxonomy against the traits a user picked. An undocumented
species trait never matches, and species matching none of the answers are left out.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import NamedTuple

from plantkey.identification.catalog import TraitQuestion
from plantkey.taxonomy.models import Species
from plantkey.taxonomy.store import TaxonomyStore

logger = logging.getLogger(__name__)


def traits_overlap(species_value: str | None, user_value: str | None) -> bool:
    """Check whether a recorded trait value and a user's term textually overlap.

    Matching is case-insensitive substring containment in either direction, so
    "ovate" and "broadly ovate" overlap. Missing or blank values never overlap.
    """
    if not species_value or not user_value:
        return False

    species_text = species_value.strip().casefold()
    user_text = user_value.strip().casefold()
    if not species_text or not user_text:
        return False

    return user_text in species_text or species_text in user_text


def normalize_traits(traits: Mapping[str, str]) -> dict[str, str]:
    """Key a trait selection by plain category strings."""
    return {getattr(category, "value", category): value for category, value in traits.items()}


class MatchResult(NamedTuple):
    """A species ranked against the current trait selection."""

    species: Species
    match_percentage: float  # 0-100
    matched_traits: int
    compared_traits: int


class ObserveMatcher:
    """Rank all species by how well they match a set of selected traits."""

    def __init__(self, store: TaxonomyStore):
        self.store = store

    def score(
        self,
        species: Species,
        selected_traits: Mapping[str, str],
        questions: Sequence[TraitQuestion],
    ) -> MatchResult | None:
        """Score one species, returning None when it is not a candidate.

        A species is not a candidate when none of the questions were answered or
        when it matches none of the answered questions.
        """
        matched = 0
        compared = 0

        selected = normalize_traits(selected_traits)
        for question in questions:
            user_value = selected.get(question.category.value)
            if user_value is None:
                continue

            compared += 1
            if traits_overlap(species.trait(question.category), user_value):
                matched += 1

        if compared == 0 or matched == 0:
            return None

        return MatchResult(
            species=species,
            match_percentage=100.0 * matched / compared,
            matched_traits=matched,
            compared_traits=compared,
        )

    def match(
        self,
        selected_traits: Mapping[str, str],
        questions: Sequence[TraitQuestion],
    ) -> list[MatchResult]:
        """Rank every species against the selected traits.

        Args:
            selected_traits: Category key to the single term the user picked
            questions: Questions for the current organ, in catalog order

        Returns:
            Candidates sorted by match percentage (highest first), ties ordered by
            scientific name
        """
        if not selected_traits:
            return []

        results = []
        for species in self.store:
            result = self.score(species, selected_traits, questions)
            if result is not None:
                results.append(result)

        results.sort(
            key=lambda r: (-r.match_percentage, r.species.scientific_name.casefold())
        )

        logger.debug(
            "Matched %d of %d species against %d selected traits",
            len(results),
            len(self.store),
            len(selected_traits),
        )
        return results
