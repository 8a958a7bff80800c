"""
Servicio de matching.

Coordina usuarios, barrios y el motor: valida el perfil, selecciona
candidatos, rankea, guarda los resultados y responde consultas de
historial, feedback y analytics.
"""

from typing import Optional

import structlog

from neighborfit.config import Settings, get_settings
from neighborfit.database import MatchRepository, NeighborhoodRepository, UserRepository
from neighborfit.matching.candidates import CandidateFilter
from neighborfit.matching.engine import MatchingEngine
from neighborfit.models import (
    IncompleteProfileError,
    Match,
    MatchAnalytics,
    MatchFeedback,
    MatchStrength,
    UserProfile,
)

logger = structlog.get_logger()


def validate_user_for_matching(user: UserProfile) -> None:
    """
    Verifica que el perfil tenga los campos mínimos para el matching.

    Raises:
        IncompleteProfileError: Si falta edad, nivel de ingresos, situación
            familiar, presupuesto máximo o distancia máxima
    """
    missing = user.missing_matching_fields()
    if missing:
        raise IncompleteProfileError(user.id, missing)


class MatchingService:
    """
    Servicio de matching sobre Supabase.

    Los repositorios y el motor se pueden inyectar; por defecto se arman
    desde la configuración.
    """

    def __init__(
        self,
        user_repo: Optional[UserRepository] = None,
        neighborhood_repo: Optional[NeighborhoodRepository] = None,
        match_repo: Optional[MatchRepository] = None,
        engine: Optional[MatchingEngine] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.user_repo = user_repo or UserRepository()
        self.neighborhood_repo = neighborhood_repo or NeighborhoodRepository()
        self.match_repo = match_repo or MatchRepository()
        self.engine = engine or MatchingEngine(
            weights=self.settings.matching_weights(),
            max_workers=self.settings.match_workers,
        )
        self.candidate_filter = CandidateFilter(
            self.neighborhood_repo, self.settings.candidate_bounds()
        )

    def _load_user(self, user_id: str) -> UserProfile:
        data = self.user_repo.get_by_id(user_id)
        if not data:
            raise LookupError(f"Usuario no encontrado: {user_id}")
        return UserProfile.model_validate(data)

    def find_matches_for_user(self, user_id: str, limit: Optional[int] = None) -> list[Match]:
        """
        Encuentra y guarda los mejores barrios para un usuario.

        Args:
            user_id: ID del usuario
            limit: Máximo de resultados (default: settings.default_match_limit)

        Returns:
            Lista de Match ordenada por score general, con el ID asignado
            por la base

        Raises:
            LookupError: Si el usuario no existe
            IncompleteProfileError: Si el perfil no alcanza para el matching
        """
        limit = limit if limit is not None else self.settings.default_match_limit
        user = self._load_user(user_id)
        return self._match_user(user, limit)

    def _match_user(self, user: UserProfile, limit: int) -> list[Match]:
        validate_user_for_matching(user)

        candidates = self.candidate_filter.select(user)
        matches = self.engine.find_matches(user, candidates, limit)

        saved = self.match_repo.save_all(matches)
        results = [Match.model_validate(row) for row in saved] if saved else matches

        logger.info(
            "Matches encontrados",
            user_id=user.id,
            candidates=len(candidates),
            returned=len(results),
        )
        return results

    def find_matches_for_all_users(self, limit_per_user: Optional[int] = None) -> dict:
        """
        Corre el matching para todos los usuarios con perfil completo.

        Returns:
            Estadísticas del procesamiento
        """
        limit = (
            limit_per_user
            if limit_per_user is not None
            else self.settings.default_match_limit
        )
        stats = {
            "users_processed": 0,
            "users_skipped": 0,
            "matches_found": 0,
            "errors": 0,
        }

        for row in self.user_repo.get_all():
            try:
                user = UserProfile.model_validate(row)
                matches = self._match_user(user, limit)
                stats["users_processed"] += 1
                stats["matches_found"] += len(matches)
            except IncompleteProfileError as e:
                logger.info("Usuario salteado", user_id=e.user_id, missing=e.missing)
                stats["users_skipped"] += 1
            except Exception as e:
                logger.error(
                    "Error procesando usuario",
                    user_id=row.get("id"),
                    error=str(e),
                )
                stats["errors"] += 1

        logger.info("Procesamiento de matching completado", **stats)
        return stats

    def get_match_history(self, user_id: str) -> list[Match]:
        """Historial de matches de un usuario."""
        self._load_user(user_id)
        return [Match.model_validate(r) for r in self.match_repo.get_user_history(user_id)]

    def get_top_matches(self, user_id: str, limit: int = 10) -> list[Match]:
        """Los mejores matches guardados de un usuario."""
        self._load_user(user_id)
        rows = self.match_repo.get_top_for_user(user_id, limit)
        return [Match.model_validate(r) for r in rows]

    def get_matches_by_strength(self, strength: MatchStrength) -> list[Match]:
        return [Match.model_validate(r) for r in self.match_repo.get_by_strength(strength)]

    def get_recent_matches(self, limit: int = 20) -> list[Match]:
        return [Match.model_validate(r) for r in self.match_repo.get_recent(limit)]

    def update_match_feedback(self, match_id: str, feedback: MatchFeedback) -> Match:
        """
        Registra el feedback del usuario sobre un match.

        Raises:
            LookupError: Si el match no existe
        """
        if not self.match_repo.get_by_id(match_id):
            raise LookupError(f"Match no encontrado: {match_id}")

        updated = self.match_repo.update_feedback(match_id, feedback)
        if not updated:
            raise LookupError(f"Match no encontrado: {match_id}")
        logger.info("Feedback registrado", match_id=match_id, liked=feedback.user_liked)
        return Match.model_validate(updated)

    def get_match_analytics(self) -> MatchAnalytics:
        """Estadísticas agregadas de todos los matches guardados."""
        return MatchAnalytics.from_rows(self.match_repo.get_all())
