"""
Objetos de parámetros del motor de matching.

Se pasan explícitamente al motor y al filtro de candidatos; el motor
nunca lee configuración global.
"""

from pydantic import BaseModel, ConfigDict, Field


class MatchingWeights(BaseModel):
    """
    Pesos del score general.

    Deberían sumar 1.0 para que el score quede en rango; el motor no lo
    exige y clampea el resultado.
    """

    model_config = ConfigDict(frozen=True)

    lifestyle: float = Field(default=0.4, ge=0, le=1)
    demographic: float = Field(default=0.3, ge=0, le=1)
    location: float = Field(default=0.3, ge=0, le=1)

    @property
    def total(self) -> float:
        return self.lifestyle + self.demographic + self.location


class CandidateBounds(BaseModel):
    """Cotas fijas para pre-filtrar barrios candidatos."""

    model_config = ConfigDict(frozen=True)

    max_crime_rate: float = Field(default=0.1, ge=0)
    min_safety_score: float = Field(default=6.0, ge=0)
    min_candidates: int = Field(
        default=10, ge=0, description="Por debajo de este piso se descarta el filtro"
    )
