"""
Narrativa del match.

Arma el razonamiento y las recomendaciones a partir de umbrales de los
scores. Es un armado de plantillas determinístico, sin LLM.
"""

from typing import Optional

from neighborfit.models import NeighborhoodProfile

# (umbral estricto, texto) por dimensión; el último es el fallback
LIFESTYLE_CLAUSES = (
    (0.8, "excellent lifestyle compatibility with your interests and family situation."),
    (0.6, "good lifestyle compatibility."),
    (None, "some lifestyle differences to consider."),
)

DEMOGRAPHIC_CLAUSES = (
    (0.8, "The neighborhood demographics closely match your profile."),
    (0.6, "The neighborhood demographics are reasonably compatible."),
    (None, "There are some demographic differences to consider."),
)

LOCATION_CLAUSES = (
    (0.8, "The location and transportation options align well with your preferences."),
    (0.6, "The location offers acceptable transportation options."),
    (None, "The location may not fully meet your transportation needs."),
)

RECOMMENDATION_CLAUSES = (
    (80, "This is an excellent match! Consider scheduling a visit to explore the area."),
    (70, "This is a good match worth exploring further."),
    (60, "This match has potential but consider your priorities carefully."),
    (None, "This match may not be ideal for your needs."),
)

WALKABLE_SCORE = 80
SAFE_SCORE = 8.0
MANY_PARKS = 5


def _pick(clauses: tuple, score: Optional[float]) -> str:
    for threshold, text in clauses:
        if threshold is None or (score is not None and score > threshold):
            return text
    return clauses[-1][1]


def _exceeds(value: Optional[float], threshold: float) -> bool:
    return value is not None and value > threshold


def build_reasoning(
    neighborhood: NeighborhoodProfile,
    lifestyle: Optional[float],
    demographic: Optional[float],
    location: Optional[float],
) -> str:
    """
    Explica el match por dimensión.

    Args:
        neighborhood: Barrio evaluado
        lifestyle, demographic, location: Scores en [0, 1]

    Returns:
        Texto con una frase por dimensión
    """
    name = neighborhood.name or "this neighborhood"
    sentences = [
        f"Based on your preferences, {name} offers {_pick(LIFESTYLE_CLAUSES, lifestyle)}",
        _pick(DEMOGRAPHIC_CLAUSES, demographic),
        _pick(LOCATION_CLAUSES, location),
    ]
    return " ".join(sentences)


def build_recommendations(neighborhood: NeighborhoodProfile, overall: Optional[float]) -> str:
    """Recomendación según el score general (0-100) más bonus del barrio."""
    sentences = [_pick(RECOMMENDATION_CLAUSES, overall)]

    if _exceeds(neighborhood.walk_score, WALKABLE_SCORE):
        sentences.append(
            "The area is highly walkable with many amenities within walking distance."
        )
    if _exceeds(neighborhood.safety_score, SAFE_SCORE):
        sentences.append("The neighborhood has excellent safety ratings.")
    if _exceeds(neighborhood.number_of_parks, MANY_PARKS):
        sentences.append("There are many parks and green spaces in the area.")

    return " ".join(sentences)
