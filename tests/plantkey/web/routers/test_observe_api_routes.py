"""Tests for the Observe matching and answer endpoints."""

import pytest

from plantkey.quota.entitlements import UserTier


class TestMatchSpecies:
    """Test POST /api/observe/match."""

    def test_ranks_species(self, client):
        """Should rank species by match percentage."""
        response = client.post(
            "/api/observe/match",
            json={
                "organ": "leaf",
                "selected_traits": {"Leaf_Shape": "ovate", "Leaf_Margin": "serrate"},
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["organ"] == "leaf"
        assert data["total"] == 5
        best = data["matches"][0]
        assert best["scientific_name"] == "Rosa multiflora"
        assert best["common_name"] == "Multiflora Rose"
        assert best["match_percentage"] == pytest.approx(100.0)
        assert best["matched_traits"] == 2
        assert best["compared_traits"] == 2
        assert data["matches"][1]["scientific_name"] == "Acer rubrum"

    def test_limit_keeps_total(self, client):
        """Should truncate matches but report the full total."""
        response = client.post(
            "/api/observe/match",
            json={
                "organ": "leaf",
                "selected_traits": {"Leaf_Shape": "ovate", "Leaf_Margin": "serrate"},
                "limit": 2,
            },
        )

        data = response.json()
        assert data["total"] == 5
        assert len(data["matches"]) == 2

    def test_no_selection(self, client):
        """Should return no matches when nothing was selected."""
        response = client.post("/api/observe/match", json={"organ": "flower"})

        assert response.status_code == 200
        assert response.json() == {"organ": "flower", "total": 0, "matches": []}

    def test_answers_for_other_organs_are_ignored(self, client):
        """Should only compare the questions of the requested organ."""
        response = client.post(
            "/api/observe/match",
            json={"organ": "flower", "selected_traits": {"Leaf_Shape": "ovate"}},
        )

        assert response.json()["total"] == 0

    def test_invalid_limit(self, client):
        """Should reject a non-positive limit."""
        response = client.post("/api/observe/match", json={"organ": "leaf", "limit": 0})

        assert response.status_code == 422


class TestRecordAnswer:
    """Test POST /api/observe/answers."""

    def test_answers_until_limit(self, client):
        """Should accept the free answers and deny the next one."""
        answer = {"category": "Leaf_Shape", "value": "ovate"}

        outcomes = [client.post("/api/observe/answers", json=answer).json() for _ in range(3)]
        assert [o["outcome"] for o in outcomes] == ["success"] * 3
        assert [o["quota"]["remaining"] for o in outcomes] == [2, 1, 0]
        assert outcomes[-1]["upgrade_required"] is False

        denied = client.post("/api/observe/answers", json=answer).json()
        assert denied["outcome"] == "denied"
        assert denied["upgrade_required"] is True
        assert denied["quota"]["count"] == 3
        assert denied["quota"]["upgrade_required"] is True

    def test_unlimited_tier(self, test_config, client):
        """Should never deny answers for entitled tiers."""
        test_config.user_tier = UserTier.PRO

        for _ in range(5):
            data = client.post(
                "/api/observe/answers", json={"category": "Flower_Color", "value": "white"}
            ).json()
            assert data["outcome"] == "success"

        assert data["quota"]["unlimited"] is True
        assert data["quota"]["remaining"] is None

    def test_unknown_category(self, client):
        """Should reject answers for unknown trait categories."""
        response = client.post(
            "/api/observe/answers", json={"category": "Leaf_Colour", "value": "green"}
        )

        assert response.status_code == 422
