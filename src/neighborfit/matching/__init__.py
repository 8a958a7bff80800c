"""
Motor de matching.

Combina scores por dimensión, clasificación y narrativa para rankear
los barrios más compatibles con cada usuario.
"""

from neighborfit.matching.candidates import CandidateFilter, income_window, home_value_window
from neighborfit.matching.engine import MatchingEngine
from neighborfit.matching.scoring import ComponentScores, component_scores, overall_score
from neighborfit.matching.service import MatchingService, validate_user_for_matching

__all__ = [
    "MatchingEngine",
    "MatchingService",
    "CandidateFilter",
    "ComponentScores",
    "component_scores",
    "overall_score",
    "income_window",
    "home_value_window",
    "validate_user_for_matching",
]
