"""Tests for the Observe matcher."""

import pytest

from plantkey.identification.catalog import Organ, TraitQuestion, questions_for
from plantkey.identification.matching import ObserveMatcher, traits_overlap
from plantkey.taxonomy.categories import TraitCategory
from plantkey.taxonomy.models import Species
from plantkey.taxonomy.store import TaxonomyStore

TWO_QUESTIONS = (
    TraitQuestion("Leaf Shape", TraitCategory.LEAF_SHAPE),
    TraitQuestion("Flower Color", TraitCategory.FLOWER_COLOR),
)


class TestTraitsOverlap:
    """Test the bidirectional containment rule."""

    @pytest.mark.parametrize(
        "species_value,user_value",
        [
            ("ovate", "ovate"),
            ("broadly ovate", "ovate"),
            ("ovate", "Broadly Ovate"),
            ("OVATE", " ovate "),
        ],
    )
    def test_overlapping_values(self, species_value, user_value):
        """Should match when either value contains the other, ignoring case."""
        assert traits_overlap(species_value, user_value)

    @pytest.mark.parametrize(
        "species_value,user_value",
        [
            ("lanceolate", "ovate"),
            (None, "ovate"),
            ("", "ovate"),
            ("ovate", ""),
            ("ovate", "   "),
            ("ovate", None),
        ],
    )
    def test_non_overlapping_values(self, species_value, user_value):
        """Should never match missing, blank or unrelated values."""
        assert not traits_overlap(species_value, user_value)


class TestObserveMatcherScore:
    """Test scoring a single species."""

    def test_half_match(self):
        """Should score one match out of two compared traits as 50%."""
        species = Species(scientific_name="Species a", leaf_shape="ovate", flower_color="white")
        matcher = ObserveMatcher(TaxonomyStore([species]))

        result = matcher.score(
            species, {"Leaf_Shape": "ovate", "Flower_Color": "red"}, TWO_QUESTIONS
        )

        assert result is not None
        assert result.matched_traits == 1
        assert result.compared_traits == 2
        assert result.match_percentage == 50.0

    def test_no_compared_traits(self):
        """Should exclude a species when no question was answered."""
        species = Species(scientific_name="Species a", leaf_shape="ovate")
        matcher = ObserveMatcher(TaxonomyStore([species]))

        assert matcher.score(species, {"Fruit_Type": "nut"}, TWO_QUESTIONS) is None

    def test_all_mismatches_excluded(self):
        """Should exclude a species contradicting every compared trait."""
        species = Species(scientific_name="Species a", leaf_shape="lanceolate")
        matcher = ObserveMatcher(TaxonomyStore([species]))

        assert matcher.score(species, {"Leaf_Shape": "ovate"}, TWO_QUESTIONS) is None

    def test_undocumented_trait_counts_as_compared(self):
        """Should compare answered questions even when the species value is missing."""
        species = Species(scientific_name="Species a", leaf_shape="ovate")
        matcher = ObserveMatcher(TaxonomyStore([species]))

        result = matcher.score(
            species, {"Leaf_Shape": "ovate", "Flower_Color": "white"}, TWO_QUESTIONS
        )

        assert result.compared_traits == 2
        assert result.match_percentage == 50.0

    def test_adding_matching_trait_does_not_decrease_score(self):
        """Should never lower the percentage when an added comparison matches."""
        species = Species(scientific_name="Species a", leaf_shape="ovate", flower_color="white")
        matcher = ObserveMatcher(TaxonomyStore([species]))

        before = matcher.score(species, {"Leaf_Shape": "ovate"}, TWO_QUESTIONS)
        after = matcher.score(
            species, {"Leaf_Shape": "ovate", "Flower_Color": "white"}, TWO_QUESTIONS
        )

        assert after.match_percentage >= before.match_percentage


class TestObserveMatcherMatch:
    """Test ranking the whole taxonomy."""

    def test_empty_selection(self, taxonomy_store):
        """Should return no results without selected traits."""
        matcher = ObserveMatcher(taxonomy_store)

        assert matcher.match({}, questions_for(Organ.LEAF)) == []

    def test_ranked_by_percentage_then_name(self, taxonomy_store):
        """Should rank by percentage and break ties by scientific name."""
        matcher = ObserveMatcher(taxonomy_store)

        results = matcher.match(
            {"Leaf_Shape": "ovate", "Leaf_Margin": "serrate"}, questions_for(Organ.LEAF)
        )

        assert [(r.species.scientific_name, r.match_percentage) for r in results] == [
            ("Rosa multiflora", 100.0),
            ("Acer rubrum", 50.0),
            ("Prunus serotina", 50.0),
            ("Quercus alba", 50.0),
            ("Trillium grandiflorum", 50.0),
        ]

    def test_substring_match_both_directions(self, taxonomy_store):
        """Should match 'white to pink' against a 'white' selection."""
        matcher = ObserveMatcher(taxonomy_store)

        results = matcher.match(
            {TraitCategory.FLOWER_COLOR: "white"}, questions_for(Organ.FLOWER)
        )

        assert [r.species.scientific_name for r in results] == [
            "Prunus serotina",
            "Rosa multiflora",
            "Trillium grandiflorum",
        ]

    def test_selection_outside_organ_questions(self, taxonomy_store):
        """Should ignore selected traits that no question asks about."""
        matcher = ObserveMatcher(taxonomy_store)

        assert matcher.match({"Flower_Color": "white"}, questions_for(Organ.LEAF)) == []

    def test_percentages_in_range(self, taxonomy_store):
        """Should keep every percentage within 0-100."""
        matcher = ObserveMatcher(taxonomy_store)
        selection = {"Leaf_Type": "simple", "Leaf_Shape": "lobed", "Leaf_Margin": "entire"}

        results = matcher.match(selection, questions_for(Organ.LEAF))

        assert results
        assert all(0 < r.match_percentage <= 100 for r in results)
