"""Stateful question flows built on the matcher and adjuster.

ObserveSession walks a user through one organ's questions, spending quota on each
answer. VerificationSession walks through verification cards for an externally
identified plant and re-ranks the candidates with the verified traits.
"""

import logging
from collections.abc import Sequence

from plantkey.identification.adjustment import AdjustedMatch, ConfidenceAdjuster
from plantkey.identification.catalog import (
    Organ,
    TraitQuestion,
    answerable_questions,
    questions_for,
)
from plantkey.identification.matching import MatchResult, ObserveMatcher
from plantkey.quota.tracker import QuotaOutcome, QuotaTracker
from plantkey.recognition.models import ExternalCandidate
from plantkey.taxonomy.store import TaxonomyStore

logger = logging.getLogger(__name__)


class ObserveSession:
    """One pass through the trait questions of an organ."""

    def __init__(
        self,
        organ: Organ | str,
        matcher: ObserveMatcher,
        quota: QuotaTracker | None = None,
    ):
        """Initialize the session.

        Args:
            organ: Organ whose questions are asked
            matcher: Matcher used to rank species
            quota: Tracker consulted before each answer; no limit when None
        """
        self.matcher = matcher
        self.quota = quota
        self.organ = Organ(organ)
        self.questions: tuple[TraitQuestion, ...] = questions_for(self.organ)
        self.selected_traits: dict[str, str] = {}
        self.index = 0

    @property
    def current_question(self) -> TraitQuestion | None:
        if self.is_complete:
            return None
        return self.questions[self.index]

    @property
    def is_complete(self) -> bool:
        return self.index >= len(self.questions)

    def select_trait(self, category: str, value: str) -> QuotaOutcome:
        """Answer a question and move on to the next one.

        Returns:
            The quota outcome; on DENIED the session is left unchanged

        Raises:
            ValueError: If no question of this organ asks for the category
        """
        category = getattr(category, "value", category)
        if category not in {question.category.value for question in self.questions}:
            raise ValueError(f"'{category}' is not a {self.organ.value} trait")

        if self.quota is not None:
            outcome = self.quota.record_answer()
            if outcome is QuotaOutcome.DENIED:
                logger.info("Answer for %s denied by daily quota", category)
                return outcome

        self.selected_traits[category] = value
        if not self.is_complete:
            self.index += 1
        return QuotaOutcome.SUCCESS

    def skip(self) -> None:
        """Move to the next question without answering."""
        if not self.is_complete:
            self.index += 1

    def go_back(self) -> None:
        """Return to the previous question and clear its answer."""
        if self.index == 0:
            return
        self.index -= 1
        self.selected_traits.pop(self.questions[self.index].category.value, None)

    def change_organ(self, organ: Organ | str) -> None:
        """Switch to another organ, discarding all answers."""
        self.organ = Organ(organ)
        self.questions = questions_for(self.organ)
        self.reset()

    def reset(self) -> None:
        self.selected_traits = {}
        self.index = 0

    def results(self) -> list[MatchResult]:
        """Rank species against the answers given so far."""
        return self.matcher.match(self.selected_traits, self.questions)


class VerificationSession:
    """Verify traits of an externally identified plant, one card at a time."""

    def __init__(
        self,
        organ: Organ | str,
        store: TaxonomyStore,
        adjuster: ConfidenceAdjuster,
        candidates: Sequence[ExternalCandidate],
    ):
        """Initialize the session.

        Args:
            organ: Organ that was photographed
            store: Taxonomy providing the card options
            adjuster: Adjuster used to re-rank candidates
            candidates: External candidates in provider order
        """
        self.organ = Organ(organ)
        self.adjuster = adjuster
        self.candidates = list(candidates)
        self.cards: list[TraitQuestion] = answerable_questions(self.organ, store)
        self.verified_traits: dict[str, str] = {}
        self.index = 0

    @property
    def current_card(self) -> TraitQuestion | None:
        if self.is_finished:
            return None
        return self.cards[self.index]

    @property
    def is_finished(self) -> bool:
        return self.index >= len(self.cards)

    def verify(self, category: str, value: str) -> None:
        """Record a verified trait and advance to the next card."""
        self.verified_traits[getattr(category, "value", category)] = value
        self.advance()

    def advance(self) -> None:
        if not self.is_finished:
            self.index += 1

    def ranked(self) -> list[AdjustedMatch]:
        """Re-rank the leading candidates with the traits verified so far."""
        return self.adjuster.rank(self.candidates, self.verified_traits, self.cards)

    def best(self) -> AdjustedMatch | None:
        ranked = self.ranked()
        return ranked[0] if ranked else None
