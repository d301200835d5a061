"""Organ-specific trait question catalog.

Each organ a user can examine has a fixed, ordered list of questions. Questions are
configuration data and never change at runtime.
"""

import logging
from enum import Enum
from typing import NamedTuple

from plantkey.taxonomy.categories import TraitCategory
from plantkey.taxonomy.store import TaxonomyStore

logger = logging.getLogger(__name__)


class Organ(str, Enum):
    """Plant part used as the basis for a set of trait questions."""

    LEAF = "leaf"
    FLOWER = "flower"
    FRUIT = "fruit"
    BARK = "bark"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class TraitQuestion(NamedTuple):
    """A single trait question and the category it is answered in."""

    title: str  # Display title, e.g. "Petal Count"
    category: TraitCategory  # Shared key with species attributes and vocabulary


_CATALOG: dict[Organ, tuple[TraitQuestion, ...]] = {
    Organ.LEAF: (
        TraitQuestion("Leaf Type", TraitCategory.LEAF_TYPE),
        TraitQuestion("Leaf Shape", TraitCategory.LEAF_SHAPE),
        TraitQuestion("Leaf Margin", TraitCategory.LEAF_MARGIN),
        TraitQuestion("Leaf Arrangement", TraitCategory.LEAF_ARRANGEMENT),
        TraitQuestion("Leaf Venation", TraitCategory.LEAF_VENATION),
        TraitQuestion("Leaf Texture", TraitCategory.LEAF_TEXTURE),
    ),
    Organ.FLOWER: (
        TraitQuestion("Flower Symmetry", TraitCategory.FLOWER_SYMMETRY),
        TraitQuestion("Flower Color", TraitCategory.FLOWER_COLOR),
        TraitQuestion("Petal Count", TraitCategory.FLOWER_PETAL_COUNT),
        TraitQuestion("Inflorescence", TraitCategory.FLOWER_INFLORESCENCE),
        TraitQuestion("Flower Position", TraitCategory.FLOWER_POSITION),
    ),
    Organ.FRUIT: (
        TraitQuestion("Fruit Type", TraitCategory.FRUIT_TYPE),
        TraitQuestion("Seed Trait", TraitCategory.FRUIT_SEED_TRAIT),
    ),
    Organ.BARK: (
        TraitQuestion("Stem Habit", TraitCategory.STEM_HABIT),
        TraitQuestion("Stem Structure", TraitCategory.STEM_STRUCTURE),
    ),
}


def questions_for(organ: Organ | str) -> tuple[TraitQuestion, ...]:
    """Get the ordered trait questions for an organ.

    An organ without configured questions yields an empty tuple.
    """
    organ = Organ(organ)
    questions = _CATALOG.get(organ, ())
    if not questions:
        logger.warning("No trait questions configured for organ '%s'", organ.value)
    return questions


def answerable_questions(organ: Organ | str, store: TaxonomyStore) -> list[TraitQuestion]:
    """Get the questions for an organ that have selectable vocabulary terms."""
    return [
        question
        for question in questions_for(organ)
        if store.terms_for(question.category.value)
    ]
