"""Plant identification engine.

This package ranks local species against user-selected traits and re-scores external
recognition candidates with verified traits:
- catalog: Organs and their ordered trait questions
- matching: Observe matcher
- adjustment: Confidence adjuster
- session: Question flows gated by the daily quota
"""

from plantkey.identification.adjustment import AdjustedMatch, ConfidenceAdjuster
from plantkey.identification.catalog import (
    Organ,
    TraitQuestion,
    answerable_questions,
    questions_for,
)
from plantkey.identification.matching import MatchResult, ObserveMatcher, traits_overlap
from plantkey.identification.session import ObserveSession, VerificationSession

__all__ = [
    "AdjustedMatch",
    "ConfidenceAdjuster",
    "MatchResult",
    "ObserveMatcher",
    "ObserveSession",
    "Organ",
    "TraitQuestion",
    "VerificationSession",
    "answerable_questions",
    "questions_for",
    "traits_overlap",
]
