"""Tests del filtro de candidatos."""

import math

import pytest

from conftest import FakeNeighborhoodRepository, make_user, neighborhood_row
from neighborfit.matching.candidates import CandidateFilter, home_value_window, income_window
from neighborfit.models import CandidateBounds, IncomeLevel


@pytest.mark.parametrize(
    "level, expected",
    [
        (IncomeLevel.LOW, (0.0, 50_000.0)),
        (IncomeLevel.MEDIUM, (50_000.0, 75_000.0)),
        (IncomeLevel.HIGH, (75_000.0, 100_000.0)),
        (IncomeLevel.VERY_HIGH, (100_000.0, math.inf)),
        (None, (0.0, math.inf)),
    ],
)
def test_income_window(level, expected):
    assert income_window(level) == expected


def test_home_value_window_from_budget():
    user = make_user(min_budget=200_000, max_budget=400_000)
    low, high = home_value_window(user)
    assert low == pytest.approx(160_000)
    assert high == pytest.approx(480_000)


def test_home_value_window_without_budget():
    assert home_value_window(make_user(min_budget=None, max_budget=None)) == (0.0, math.inf)


def _rows(count, prefix="n"):
    return [neighborhood_row(id=f"{prefix}-{i}") for i in range(count)]


def test_uses_filtered_pool_when_large_enough():
    source = FakeNeighborhoodRepository(filtered=_rows(12, "f"), universe=_rows(30, "all"))
    candidates = CandidateFilter(source).select(make_user())

    assert len(candidates) == 12
    assert source.search_calls == [{
        "min_income": 75_000.0,
        "max_income": 100_000.0,
        "min_home_value": pytest.approx(240_000),
        "max_home_value": pytest.approx(600_000),
        "max_crime_rate": 0.1,
        "min_safety_score": 6.0,
    }]


def test_falls_back_to_universe_when_pool_is_small():
    source = FakeNeighborhoodRepository(filtered=_rows(4, "f"), universe=_rows(30, "all"))
    candidates = CandidateFilter(source).select(make_user())

    assert len(candidates) == 30
    assert candidates[0]["id"] == "all-0"


def test_floor_is_configurable():
    source = FakeNeighborhoodRepository(filtered=_rows(4, "f"), universe=_rows(30, "all"))
    bounds = CandidateBounds(max_crime_rate=0.2, min_safety_score=5.0, min_candidates=3)
    candidates = CandidateFilter(source, bounds).select(make_user())

    assert len(candidates) == 4
    assert source.search_calls[0]["max_crime_rate"] == 0.2
    assert source.search_calls[0]["min_safety_score"] == 5.0
