"""Tests de clasificación del score general."""

import pytest

from neighborfit.models import MatchStrength


@pytest.mark.parametrize(
    "score, expected",
    [
        (100, MatchStrength.EXCELLENT),
        (90, MatchStrength.EXCELLENT),
        (89.99, MatchStrength.VERY_GOOD),
        (89, MatchStrength.VERY_GOOD),
        (80, MatchStrength.VERY_GOOD),
        (79.5, MatchStrength.GOOD),
        (70, MatchStrength.GOOD),
        (69, MatchStrength.FAIR),
        (60, MatchStrength.FAIR),
        (59.999, MatchStrength.POOR),
        (59, MatchStrength.POOR),
        (0, MatchStrength.POOR),
    ],
)
def test_from_score_boundaries(score, expected):
    assert MatchStrength.from_score(score) is expected


@pytest.mark.parametrize("score", [-1, 150, float("nan")])
def test_out_of_range_defaults_to_poor(score):
    assert MatchStrength.from_score(score) is MatchStrength.POOR


def test_every_score_maps_to_one_tier():
    scores = [i / 10 for i in range(0, 1001)]
    for score in scores:
        strength = MatchStrength.from_score(score)
        assert strength.min_score <= score < strength.max_score + 1


def test_tier_metadata():
    assert MatchStrength.EXCELLENT.min_score == 90
    assert MatchStrength.EXCELLENT.max_score == 100
    assert MatchStrength.POOR.description == "Poor match - Not recommended"
    assert MatchStrength("VERY_GOOD") is MatchStrength.VERY_GOOD
