"""Tests del motor de matching: armado del Match, ranking y tolerancia a errores."""

import pytest

from conftest import make_neighborhood, make_user, neighborhood_row
from neighborfit.matching import MatchingEngine
from neighborfit.models import (
    Hobby,
    LifestyleCharacteristic,
    MatchingWeights,
    MatchStrength,
)


@pytest.fixture
def engine() -> MatchingEngine:
    return MatchingEngine()


class TestCalculateMatch:

    def test_example_profile_is_excellent(self, engine, user, neighborhood):
        match = engine.calculate_match(user, neighborhood)

        assert match.user_id == "u-1"
        assert match.neighborhood_id == "n-1"
        assert match.neighborhood_name == "Riverside"
        assert match.lifestyle_score == pytest.approx(100.0)
        assert match.demographic_score == pytest.approx(100.0)
        assert match.location_score == pytest.approx(90.0)
        assert match.budget_score == pytest.approx(80.0)
        assert match.amenity_score == pytest.approx(20.0)
        assert match.overall_score == pytest.approx(97.0)
        assert match.match_strength is MatchStrength.EXCELLENT
        assert "Riverside" in match.match_reasoning
        assert match.recommendations.startswith("This is an excellent match!")

    def test_feedback_fields_start_empty(self, engine, user, neighborhood):
        match = engine.calculate_match(user, neighborhood)
        assert match.user_liked is None
        assert match.user_rating is None
        assert match.id is None

    def test_custom_weights(self, user, neighborhood):
        engine = MatchingEngine(weights=MatchingWeights(lifestyle=0.0, demographic=0.0, location=1.0))
        match = engine.calculate_match(user, neighborhood)
        assert match.overall_score == pytest.approx(90.0)

    def test_overweighted_engine_clamps(self, user, neighborhood):
        weights = MatchingWeights(lifestyle=1.0, demographic=1.0, location=1.0)
        match = MatchingEngine(weights=weights).calculate_match(user, neighborhood)
        assert match.overall_score == 100.0
        assert match.match_strength is MatchStrength.EXCELLENT

    def test_amenity_hobby_bonus_is_reported_only(self, engine, neighborhood):
        plain = engine.calculate_match(make_user(), neighborhood)
        sporty = engine.calculate_match(make_user(hobbies=[Hobby.FITNESS]), neighborhood)
        assert sporty.overall_score == plain.overall_score

    def test_idempotent(self, engine, user, neighborhood):
        first = engine.calculate_match(user, neighborhood)
        second = engine.calculate_match(user, neighborhood)
        assert first.model_dump(exclude={"created_at"}) == second.model_dump(exclude={"created_at"})


class TestFindMatches:

    def _candidates(self):
        return [
            make_neighborhood(id="weak", lifestyle_characteristics=[LifestyleCharacteristic.RURAL],
                              walk_score=10, transit_score=10, median_age=70),
            make_neighborhood(id="best"),
            make_neighborhood(id="mid", walk_score=40, transit_score=40),
        ]

    def test_sorted_descending(self, engine, user):
        matches = engine.find_matches(user, self._candidates(), limit=10)
        assert [m.neighborhood_id for m in matches] == ["best", "mid", "weak"]
        scores = [m.overall_score for m in matches]
        assert scores == sorted(scores, reverse=True)

    def test_truncates_to_limit(self, engine, user):
        matches = engine.find_matches(user, self._candidates(), limit=2)
        assert [m.neighborhood_id for m in matches] == ["best", "mid"]

    @pytest.mark.parametrize("limit", [0, -3])
    def test_non_positive_limit(self, engine, user, limit):
        assert engine.find_matches(user, self._candidates(), limit=limit) == []

    def test_empty_candidates(self, engine, user):
        assert engine.find_matches(user, [], limit=5) == []

    def test_ties_keep_input_order(self, engine, user):
        candidates = [make_neighborhood(id=f"n-{i}") for i in range(6)]
        matches = engine.find_matches(user, candidates, limit=6)
        assert [m.neighborhood_id for m in matches] == [f"n-{i}" for i in range(6)]

    def test_parallel_matches_sequential(self, user):
        candidates = self._candidates() + [make_neighborhood(id=f"tie-{i}") for i in range(5)]
        sequential = MatchingEngine().find_matches(user, candidates, limit=8)
        parallel = MatchingEngine(max_workers=4).find_matches(user, candidates, limit=8)
        assert [m.neighborhood_id for m in parallel] == [m.neighborhood_id for m in sequential]
        assert [m.overall_score for m in parallel] == [m.overall_score for m in sequential]

    def test_accepts_raw_rows(self, engine, user):
        rows = [neighborhood_row(id=7), neighborhood_row(id=8, walk_score=20)]
        matches = engine.find_matches(user, rows, limit=5)
        assert [m.neighborhood_id for m in matches] == ["7", "8"]

    def test_malformed_row_scores_zero_without_aborting(self, engine, user):
        rows = [
            neighborhood_row(id="ok"),
            {"id": "broken", "name": "Broken Hill", "median_age": "not-a-number"},
            {"name": "No Id"},
        ]
        matches = engine.find_matches(user, rows, limit=5)

        assert [m.neighborhood_id for m in matches] == ["ok", "broken", "unknown"]
        broken = matches[1]
        assert broken.overall_score == 0.0
        assert broken.budget_score == 0.0
        assert broken.match_strength is MatchStrength.POOR
        assert broken.neighborhood_name == "Broken Hill"
        assert broken.recommendations == "This match may not be ideal for your needs."
