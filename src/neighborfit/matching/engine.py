"""
Motor de matching entre usuarios y barrios.

Implementa:
- Scoring: cinco scores por dimensión y score general ponderado
- Clasificación: nivel de match según el score general
- Ranking: orden descendente estable y corte por límite

El motor no hace I/O ni guarda estado: recibe perfiles ya cargados y
devuelve Matches. Persistir es responsabilidad del servicio.
"""

import math
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence, Union

import structlog
from pydantic import ValidationError

from neighborfit.matching.narrative import build_reasoning, build_recommendations
from neighborfit.matching.scoring import component_scores, overall_score
from neighborfit.models import (
    Match,
    MatchingWeights,
    MatchStrength,
    NeighborhoodProfile,
    UserProfile,
)

logger = structlog.get_logger()

Candidate = Union[NeighborhoodProfile, dict]


class MatchingEngine:
    """
    Motor de scoring y ranking.

    Flujo por usuario:
    1. Para cada barrio candidato calcular los cinco scores
    2. Ponderar estilo de vida, demografía y ubicación en el score general
    3. Clasificar y generar la narrativa
    4. Ordenar por score general y cortar al límite
    """

    def __init__(
        self,
        weights: Optional[MatchingWeights] = None,
        max_workers: int = 1,
    ):
        self.weights = weights or MatchingWeights()
        self.max_workers = max(1, max_workers)

        if not math.isclose(self.weights.total, 1.0):
            logger.warning(
                "Los pesos no suman 1.0, el score general se va a acotar",
                total=round(self.weights.total, 4),
            )

    def calculate_match(self, user: UserProfile, neighborhood: NeighborhoodProfile) -> Match:
        """Evalúa un usuario contra un barrio."""
        scores = component_scores(user, neighborhood)
        overall = overall_score(scores, self.weights)

        logger.debug(
            "Match calculado",
            user_id=user.id,
            neighborhood_id=neighborhood.id,
            overall=round(overall, 2),
        )

        return Match(
            user_id=user.id,
            neighborhood_id=neighborhood.id,
            neighborhood_name=neighborhood.name,
            city=neighborhood.city,
            state=neighborhood.state,
            overall_score=overall,
            **scores.denormalized(),
            match_strength=MatchStrength.from_score(overall),
            match_reasoning=build_reasoning(
                neighborhood, scores.lifestyle, scores.demographic, scores.location
            ),
            recommendations=build_recommendations(neighborhood, overall),
        )

    def find_matches(
        self,
        user: UserProfile,
        candidates: Sequence[Candidate],
        limit: int = 10,
    ) -> list[Match]:
        """
        Rankea barrios candidatos para un usuario.

        Args:
            user: Perfil ya validado
            candidates: Barrios o filas crudas de la tabla 'neighborhoods'
            limit: Máximo de resultados

        Returns:
            Lista de Match ordenada por score general descendente; los
            empates conservan el orden de entrada
        """
        if limit <= 0 or not candidates:
            return []

        if self.max_workers > 1 and len(candidates) > 1:
            workers = min(self.max_workers, len(candidates))
            with ThreadPoolExecutor(max_workers=workers) as pool:
                # map conserva el orden de entrada
                matches = list(pool.map(lambda c: self._safe_match(user, c), candidates))
        else:
            matches = [self._safe_match(user, c) for c in candidates]

        # sort es estable también con reverse=True
        matches.sort(key=lambda m: m.overall_score, reverse=True)
        return matches[:limit]

    def _safe_match(self, user: UserProfile, candidate: Candidate) -> Match:
        """Calcula el match; un registro malformado da un match en cero."""
        try:
            neighborhood = (
                candidate
                if isinstance(candidate, NeighborhoodProfile)
                else NeighborhoodProfile.model_validate(candidate)
            )
            return self.calculate_match(user, neighborhood)
        except (ValidationError, TypeError, ValueError, ArithmeticError) as e:
            neighborhood_id = _candidate_id(candidate)
            logger.warning(
                "Barrio malformado, se puntúa en cero",
                user_id=user.id,
                neighborhood_id=neighborhood_id,
                error=str(e),
            )
            return zero_match(user, candidate)


def _candidate_id(candidate: Candidate) -> str:
    if isinstance(candidate, NeighborhoodProfile):
        return candidate.id
    if isinstance(candidate, dict):
        return str(candidate.get("id", "unknown"))
    return "unknown"


def zero_match(user: UserProfile, candidate: Candidate) -> Match:
    """Match en cero para un barrio que no se pudo puntuar."""
    if isinstance(candidate, NeighborhoodProfile):
        neighborhood = candidate
    else:
        raw = candidate if isinstance(candidate, dict) else {}
        name = raw.get("name")
        neighborhood = NeighborhoodProfile.model_construct(
            id=_candidate_id(candidate),
            name=name if isinstance(name, str) else None,
        )

    return Match(
        user_id=user.id,
        neighborhood_id=neighborhood.id,
        neighborhood_name=neighborhood.name,
        overall_score=0.0,
        lifestyle_score=0.0,
        demographic_score=0.0,
        location_score=0.0,
        budget_score=0.0,
        amenity_score=0.0,
        match_strength=MatchStrength.POOR,
        match_reasoning=build_reasoning(neighborhood, None, None, None),
        recommendations=build_recommendations(
            NeighborhoodProfile.model_construct(id=neighborhood.id), 0.0
        ),
    )
