"""Tests de la narrativa del match."""

from conftest import make_neighborhood
from neighborfit.matching.narrative import build_reasoning, build_recommendations


def test_reasoning_high_scores(neighborhood):
    text = build_reasoning(neighborhood, 0.9, 0.85, 0.95)
    assert text.startswith("Based on your preferences, Riverside offers excellent lifestyle")
    assert "demographics closely match your profile" in text
    assert "align well with your preferences" in text


def test_reasoning_middle_tier(neighborhood):
    text = build_reasoning(neighborhood, 0.7, 0.65, 0.61)
    assert "good lifestyle compatibility." in text
    assert "reasonably compatible" in text
    assert "acceptable transportation options" in text


def test_reasoning_thresholds_are_strict(neighborhood):
    text = build_reasoning(neighborhood, 0.8, 0.6, 0.0)
    assert "good lifestyle compatibility." in text
    assert "some demographic differences" in text
    assert "may not fully meet your transportation needs" in text


def test_reasoning_without_scores_or_name():
    hood = make_neighborhood(name=None)
    text = build_reasoning(hood, None, None, None)
    assert text.startswith("Based on your preferences, this neighborhood offers some lifestyle")
    assert "some demographic differences" in text


def test_recommendation_tiers():
    hood = make_neighborhood(walk_score=50, safety_score=5.0, number_of_parks=1)
    assert build_recommendations(hood, 85).startswith("This is an excellent match!")
    assert build_recommendations(hood, 80) == "This is a good match worth exploring further."
    assert "has potential" in build_recommendations(hood, 65)
    assert build_recommendations(hood, 60) == "This match may not be ideal for your needs."


def test_recommendation_bonus_clauses():
    hood = make_neighborhood(walk_score=90, safety_score=8.5, number_of_parks=6)
    text = build_recommendations(hood, 75)
    assert "highly walkable" in text
    assert "excellent safety ratings" in text
    assert "many parks and green spaces" in text


def test_recommendation_bonus_needs_data():
    hood = make_neighborhood(walk_score=None, safety_score=None, number_of_parks=None)
    assert build_recommendations(hood, 95) == (
        "This is an excellent match! Consider scheduling a visit to explore the area."
    )
