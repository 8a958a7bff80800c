"""
Modelo de Match

Resultado de evaluar un usuario contra un barrio: scores por
dimensión, score general, nivel de match y narrativa.
"""

from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field


class MatchStrength(str, Enum):
    """Nivel de match según el score general (0-100)."""

    EXCELLENT = "EXCELLENT"
    VERY_GOOD = "VERY_GOOD"
    GOOD = "GOOD"
    FAIR = "FAIR"
    POOR = "POOR"

    @property
    def min_score(self) -> int:
        return _TIERS[self][0]

    @property
    def max_score(self) -> int:
        return _TIERS[self][1]

    @property
    def description(self) -> str:
        return _TIERS[self][2]

    @classmethod
    def from_score(cls, score: float) -> "MatchStrength":
        """
        Clasifica un score general.

        Los rangos son enteros e inclusivos; un score fraccionario entre
        dos rangos (ej: 89.5) cae en el nivel cuyo mínimo alcanza.
        Cualquier valor que no entre en ningún rango es POOR.
        """
        for strength in cls:
            if strength.min_score <= score < strength.max_score + 1:
                return strength
        return cls.POOR


# Orden de evaluación = orden de declaración del Enum
_TIERS = {
    MatchStrength.EXCELLENT: (90, 100, "Excellent match - Highly recommended"),
    MatchStrength.VERY_GOOD: (80, 89, "Very good match - Strongly recommended"),
    MatchStrength.GOOD: (70, 79, "Good match - Recommended"),
    MatchStrength.FAIR: (60, 69, "Fair match - Consider with caution"),
    MatchStrength.POOR: (0, 59, "Poor match - Not recommended"),
}


class MatchFeedback(BaseModel):
    """Feedback del usuario sobre un match, cargado después del matching."""

    user_liked: Optional[bool] = None
    user_visited: Optional[bool] = None
    user_rating: Optional[int] = Field(None, ge=1, le=5)
    user_feedback: Optional[str] = Field(None, max_length=1000)

    def to_db_dict(self) -> dict:
        return self.model_dump()


class Match(BaseModel):
    """
    Match usuario-barrio.

    Se mapea a la tabla 'matches' en Supabase. El motor lo construye una
    sola vez; el feedback se actualiza vía repositorio.
    """

    model_config = ConfigDict(
        from_attributes=True, frozen=True, coerce_numbers_to_str=True
    )

    id: Optional[str] = Field(None, description="UUID generado por Supabase")
    user_id: str = Field(..., description="FK al usuario")
    neighborhood_id: str = Field(..., description="FK al barrio")
    neighborhood_name: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None

    # Scores (0-100)
    overall_score: float = Field(..., ge=0, le=100)
    lifestyle_score: float = Field(..., ge=0, le=100)
    demographic_score: float = Field(..., ge=0, le=100)
    location_score: float = Field(..., ge=0, le=100)
    budget_score: float = Field(..., ge=0, le=100)
    amenity_score: float = Field(..., ge=0, le=100)

    match_strength: MatchStrength
    match_reasoning: str = ""
    recommendations: str = ""

    # Feedback
    user_liked: Optional[bool] = None
    user_visited: Optional[bool] = None
    user_rating: Optional[int] = Field(None, ge=1, le=5)
    user_feedback: Optional[str] = None

    created_at: str = Field(
        default_factory=lambda: datetime.utcnow().isoformat(),
        description="Timestamp del matching",
    )

    def to_db_dict(self) -> dict:
        """Convierte a diccionario para inserción en Supabase."""
        return self.model_dump(mode="json", exclude={"id"})


class MatchAnalytics(BaseModel):
    """Estadísticas agregadas sobre los matches guardados."""

    total_matches: int = 0
    matches_with_feedback: int = 0
    matches_with_ratings: int = 0
    average_overall_score: float = 0.0
    average_lifestyle_score: float = 0.0
    average_demographic_score: float = 0.0
    average_location_score: float = 0.0

    @classmethod
    def from_rows(cls, rows: Iterable[dict]) -> "MatchAnalytics":
        """Calcula las estadísticas a partir de filas de la tabla 'matches'."""
        rows = list(rows)
        if not rows:
            return cls()

        def average(field: str) -> float:
            values = [float(r[field]) for r in rows if r.get(field) is not None]
            return round(sum(values) / len(values), 2) if values else 0.0

        return cls(
            total_matches=len(rows),
            matches_with_feedback=sum(1 for r in rows if r.get("user_liked") is not None),
            matches_with_ratings=sum(1 for r in rows if r.get("user_rating") is not None),
            average_overall_score=average("overall_score"),
            average_lifestyle_score=average("lifestyle_score"),
            average_demographic_score=average("demographic_score"),
            average_location_score=average("location_score"),
        )
