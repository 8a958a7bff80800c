"""
Repositorios para operaciones CRUD en Supabase.

Cada repositorio maneja una tabla/entidad específica.
"""

import math
from datetime import datetime
from typing import Iterable, Optional

import structlog

from neighborfit.database.supabase_client import get_supabase_client, SupabaseClient
from neighborfit.models import Match, MatchFeedback, MatchStrength

logger = structlog.get_logger()


class BaseRepository:
    """Clase base para repositorios."""

    def __init__(self, client: Optional[SupabaseClient] = None):
        self._client = client or get_supabase_client()

    @property
    def client(self) -> SupabaseClient:
        return self._client


class UserRepository(BaseRepository):
    """Repositorio para usuarios (solo lectura desde el matching)."""

    TABLE = "users"

    def get_by_id(self, user_id: str) -> Optional[dict]:
        """Obtiene un usuario por su ID."""
        response = (
            self.client.table(self.TABLE)
            .select("*")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None

    def get_all(self) -> list[dict]:
        """Obtiene todos los usuarios."""
        response = self.client.table(self.TABLE).select("*").execute()
        return response.data


class NeighborhoodRepository(BaseRepository):
    """Repositorio para barrios."""

    TABLE = "neighborhoods"

    def get_by_id(self, neighborhood_id: str) -> Optional[dict]:
        """Obtiene un barrio por su ID."""
        response = (
            self.client.table(self.TABLE)
            .select("*")
            .eq("id", neighborhood_id)
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None

    def get_all(self) -> list[dict]:
        """Obtiene el universo completo de barrios."""
        response = self.client.table(self.TABLE).select("*").order("id").execute()
        return response.data

    def search_for_matching(
        self,
        min_income: float = 0.0,
        max_income: float = math.inf,
        min_home_value: float = 0.0,
        max_home_value: float = math.inf,
        max_crime_rate: Optional[float] = None,
        min_safety_score: Optional[float] = None,
    ) -> list[dict]:
        """
        Búsqueda por cotas gruesas de ingresos, valor de vivienda y seguridad.

        La ventana de ingresos es [min, max); la de valor de vivienda es
        [min, max]. Un máximo infinito no filtra.

        Returns:
            Lista de barrios que cumplen las cotas
        """
        query = (
            self.client.table(self.TABLE)
            .select("*")
            .gte("median_income", min_income)
            .gte("median_home_value", min_home_value)
        )

        if not math.isinf(max_income):
            query = query.lt("median_income", max_income)
        if not math.isinf(max_home_value):
            query = query.lte("median_home_value", max_home_value)
        if max_crime_rate is not None:
            query = query.lte("crime_rate", max_crime_rate)
        if min_safety_score is not None:
            query = query.gte("safety_score", min_safety_score)

        response = query.order("id").execute()
        return response.data


class MatchRepository(BaseRepository):
    """Repositorio para matches y su feedback."""

    TABLE = "matches"

    def save_all(self, matches: Iterable[Match]) -> list[dict]:
        """Inserta los matches de una corrida y devuelve los registros con ID."""
        data = [m.to_db_dict() for m in matches]
        if not data:
            return []
        response = self.client.table(self.TABLE).insert(data).execute()
        logger.info("Matches guardados", total=len(response.data))
        return response.data

    def get_by_id(self, match_id: str) -> Optional[dict]:
        """Obtiene un match por su ID."""
        response = (
            self.client.table(self.TABLE)
            .select("*")
            .eq("id", match_id)
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None

    def get_user_history(self, user_id: str) -> list[dict]:
        """Historial de matches de un usuario, mejor score primero."""
        response = (
            self.client.table(self.TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("overall_score", desc=True)
            .execute()
        )
        return response.data

    def get_top_for_user(self, user_id: str, limit: int = 10) -> list[dict]:
        """Los mejores matches guardados de un usuario."""
        response = (
            self.client.table(self.TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("overall_score", desc=True)
            .limit(limit)
            .execute()
        )
        return response.data

    def get_by_strength(self, strength: MatchStrength) -> list[dict]:
        """Matches de un nivel dado."""
        response = (
            self.client.table(self.TABLE)
            .select("*")
            .eq("match_strength", strength.value)
            .order("overall_score", desc=True)
            .execute()
        )
        return response.data

    def get_recent(self, limit: int = 20) -> list[dict]:
        """Los matches más recientes."""
        response = (
            self.client.table(self.TABLE)
            .select("*")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return response.data

    def get_all(self) -> list[dict]:
        """Todos los matches (para analytics)."""
        response = self.client.table(self.TABLE).select("*").execute()
        return response.data

    def update_feedback(self, match_id: str, feedback: MatchFeedback) -> dict:
        """Actualiza el feedback del usuario sobre un match."""
        data = feedback.to_db_dict()
        data["updated_at"] = datetime.utcnow().isoformat()
        response = (
            self.client.table(self.TABLE)
            .update(data)
            .eq("id", match_id)
            .execute()
        )
        logger.info("Feedback de match actualizado", match_id=match_id)
        return response.data[0] if response.data else {}
