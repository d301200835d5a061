"""Tests for the confidence adjuster."""

import pytest

from plantkey.config.models import ScoringConfig
from plantkey.identification.adjustment import ConfidenceAdjuster, clamp_score
from plantkey.identification.catalog import Organ, questions_for
from plantkey.recognition.models import ExternalCandidate

LEAF = questions_for(Organ.LEAF)
FLOWER = questions_for(Organ.FLOWER)


@pytest.fixture
def adjuster(taxonomy_store):
    return ConfidenceAdjuster(taxonomy_store)


def _candidate(name: str, score: float) -> ExternalCandidate:
    return ExternalCandidate(scientific_name=name, score=score)


class TestAdjust:
    """Test adjusting a single candidate."""

    def test_verified_match_adds_bonus(self, adjuster):
        """Should add the match bonus for an agreeing trait."""
        match = adjuster.adjust(
            _candidate("Prunus serotina", 0.42), {"Leaf_Shape": "lanceolate"}, LEAF
        )

        assert match.adjusted_score == pytest.approx(0.47)
        assert match.verified_trait_count == 1
        assert match.in_local_taxonomy

    def test_verified_mismatch_subtracts_penalty(self, adjuster):
        """Should subtract the penalty for a disagreeing trait."""
        match = adjuster.adjust(_candidate("Prunus serotina", 0.42), {"Leaf_Shape": "ovate"}, LEAF)

        assert match.adjusted_score == pytest.approx(0.39)
        assert match.verified_trait_count == 0

    def test_undocumented_trait_is_penalized(self, adjuster):
        """Should treat a missing species value as a mismatch."""
        match = adjuster.adjust(
            _candidate("Trillium grandiflorum", 0.40), {"Leaf_Margin": "serrate"}, LEAF
        )

        assert match.adjusted_score == pytest.approx(0.37)

    def test_no_verified_traits_keeps_raw_score(self, adjuster):
        """Should leave the score unchanged without verified traits."""
        candidate = _candidate("Prunus serotina", 0.42)

        match = adjuster.adjust(candidate, {}, LEAF)

        assert match.adjusted_score == candidate.score
        assert match.raw_score == 0.42

    def test_unknown_species_keeps_raw_score(self, adjuster):
        """Should return the raw score when no local record exists."""
        match = adjuster.adjust(
            _candidate("Cornus florida", 0.10), {"Leaf_Shape": "ovate"}, LEAF
        )

        assert match.adjusted_score == 0.10
        assert match.verified_trait_count == 0
        assert not match.in_local_taxonomy

    def test_lookup_ignores_case(self, adjuster):
        """Should find the local record regardless of name case."""
        match = adjuster.adjust(
            _candidate("PRUNUS SEROTINA", 0.42), {"Leaf_Shape": "lanceolate"}, LEAF
        )

        assert match.in_local_taxonomy

    def test_clamped_to_one(self, adjuster):
        """Should never exceed 1.0."""
        match = adjuster.adjust(
            _candidate("Rosa multiflora", 0.99),
            {"Leaf_Type": "compound", "Leaf_Shape": "ovate", "Leaf_Margin": "serrate"},
            LEAF,
        )

        assert match.adjusted_score == 1.0
        assert match.verified_trait_count == 3

    def test_clamped_to_zero(self, adjuster):
        """Should never drop below 0.0."""
        match = adjuster.adjust(
            _candidate("Rosa multiflora", 0.01),
            {"Leaf_Type": "simple", "Leaf_Shape": "lanceolate"},
            LEAF,
        )

        assert match.adjusted_score == 0.0

    def test_custom_scoring(self, taxonomy_store):
        """Should use the configured bonus and penalty."""
        adjuster = ConfidenceAdjuster(
            taxonomy_store, ScoringConfig(match_bonus=0.1, mismatch_penalty=0.2)
        )

        matched = adjuster.adjust(
            _candidate("Prunus serotina", 0.42), {"Leaf_Shape": "lanceolate"}, LEAF
        )
        mismatched = adjuster.adjust(
            _candidate("Prunus serotina", 0.42), {"Leaf_Shape": "ovate"}, LEAF
        )

        assert matched.adjusted_score == pytest.approx(0.52)
        assert mismatched.adjusted_score == pytest.approx(0.22)


class TestRank:
    """Test re-ranking several candidates."""

    def test_verified_traits_reorder_candidates(self, adjuster, candidates):
        """Should promote the candidate agreeing with more verified traits."""
        ranked = adjuster.rank(
            candidates, {"Flower_Color": "white", "Flower_Petal Count": "3"}, FLOWER
        )

        assert [m.candidate.scientific_name for m in ranked] == [
            "Trillium grandiflorum",
            "Prunus serotina",
            "Cornus florida",
        ]
        assert ranked[0].adjusted_score == pytest.approx(0.50)
        assert ranked[1].adjusted_score == pytest.approx(0.44)

    def test_limit_defaults_to_five(self, adjuster):
        """Should only consider the leading five candidates."""
        many = [_candidate(f"Genus species{i}", 0.5 - i * 0.05) for i in range(8)]

        assert len(adjuster.rank(many, {}, LEAF)) == 5

    def test_explicit_limit(self, adjuster, candidates):
        """Should honour an explicit limit."""
        assert len(adjuster.rank(candidates, {}, LEAF, limit=2)) == 2

    def test_ties_keep_provider_order(self, adjuster):
        """Should keep provider order for equal adjusted scores."""
        ranked = adjuster.rank([_candidate("B b", 0.3), _candidate("A a", 0.3)], {}, LEAF)

        assert [m.candidate.scientific_name for m in ranked] == ["B b", "A a"]

    def test_empty_candidates(self, adjuster):
        assert adjuster.rank([], {"Leaf_Shape": "ovate"}, LEAF) == []


def test_clamp_score():
    """Should clamp into the unit interval."""
    assert clamp_score(-0.2) == 0.0
    assert clamp_score(0.3) == 0.3
    assert clamp_score(1.4) == 1.0
