"""
Configuración centralizada del sistema.
Carga variables de entorno y define settings globales.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from neighborfit.models import CandidateBounds, MatchingWeights

# Encontrar la raíz del proyecto (donde está el .env)
# config.py -> neighborfit/ -> src/ -> project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Configuración principal de la aplicación."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Supabase (solo lo necesitan los repositorios)
    supabase_url: Optional[str] = Field(None, description="URL del proyecto Supabase")
    supabase_key: Optional[str] = Field(None, description="Anon key de Supabase")
    supabase_service_key: Optional[str] = Field(
        None, description="Service role key para operaciones admin"
    )

    # Pesos del score general
    weight_lifestyle: float = Field(
        0.4, ge=0.0, le=1.0, description="Peso de la compatibilidad de estilo de vida"
    )
    weight_demographic: float = Field(
        0.3, ge=0.0, le=1.0, description="Peso de la afinidad demográfica"
    )
    weight_location: float = Field(
        0.3, ge=0.0, le=1.0, description="Peso de ubicación y transporte"
    )

    # Filtro de candidatos
    candidate_max_crime_rate: float = Field(
        0.1, ge=0.0, description="Tasa de criminalidad máxima para pre-filtrar barrios"
    )
    candidate_min_safety_score: float = Field(
        6.0, ge=0.0, description="Puntaje de seguridad mínimo para pre-filtrar barrios"
    )
    candidate_min_count: int = Field(
        10, ge=0, description="Mínimo de candidatos antes de relajar el filtro"
    )

    # Matching
    default_match_limit: int = Field(10, ge=1, description="Máximo de matches por usuario")
    match_workers: int = Field(
        1, ge=1, description="Threads para puntuar candidatos en paralelo"
    )

    # Logging
    log_level: str = Field("INFO", description="Nivel de logging")

    def matching_weights(self) -> MatchingWeights:
        """Pesos del score general como objeto de parámetros."""
        return MatchingWeights(
            lifestyle=self.weight_lifestyle,
            demographic=self.weight_demographic,
            location=self.weight_location,
        )

    def candidate_bounds(self) -> CandidateBounds:
        """Cotas fijas del filtro de candidatos."""
        return CandidateBounds(
            max_crime_rate=self.candidate_max_crime_rate,
            min_safety_score=self.candidate_min_safety_score,
            min_candidates=self.candidate_min_count,
        )


@lru_cache
def get_settings() -> Settings:
    """Obtiene la configuración cacheada."""
    return Settings()
