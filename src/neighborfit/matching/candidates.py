"""
Filtro de candidatos.

Reduce el universo de barrios con cotas gruesas derivadas del nivel de
ingresos y del presupuesto del usuario. Si quedan muy pocos, se descarta
el filtro y se usa el universo completo: preferimos tener matches antes
que tenerlos muy filtrados.
"""

import math
from typing import Optional

import structlog

from neighborfit.models import CandidateBounds, IncomeLevel, UserProfile

logger = structlog.get_logger()

# Ventana [min, max) de mediana de ingresos del barrio por nivel
INCOME_WINDOWS: dict[IncomeLevel, tuple[float, float]] = {
    IncomeLevel.LOW: (0.0, 50_000.0),
    IncomeLevel.MEDIUM: (50_000.0, 75_000.0),
    IncomeLevel.HIGH: (75_000.0, 100_000.0),
    IncomeLevel.VERY_HIGH: (100_000.0, math.inf),
}

# Margen sobre el presupuesto para la ventana de valor de vivienda
MIN_BUDGET_FACTOR = 0.8
MAX_BUDGET_FACTOR = 1.2


def income_window(income_level: Optional[IncomeLevel]) -> tuple[float, float]:
    """Ventana [min, max) de ingresos; sin nivel no hay restricción."""
    if income_level is None:
        return 0.0, math.inf
    return INCOME_WINDOWS[income_level]


def home_value_window(user: UserProfile) -> tuple[float, float]:
    """Ventana [min, max] de valor de vivienda a partir del presupuesto."""
    low = user.min_budget * MIN_BUDGET_FACTOR if user.min_budget is not None else 0.0
    high = user.max_budget * MAX_BUDGET_FACTOR if user.max_budget is not None else math.inf
    return low, high


class CandidateFilter:
    """
    Selecciona barrios candidatos para un usuario.

    `source` es cualquier objeto con `search_for_matching(...)` y
    `get_all()` que devuelvan filas de barrios (ej: NeighborhoodRepository).
    """

    def __init__(self, source, bounds: Optional[CandidateBounds] = None):
        self.source = source
        self.bounds = bounds or CandidateBounds()

    def select(self, user: UserProfile) -> list[dict]:
        min_income, max_income = income_window(user.income_level)
        min_home_value, max_home_value = home_value_window(user)

        candidates = self.source.search_for_matching(
            min_income=min_income,
            max_income=max_income,
            min_home_value=min_home_value,
            max_home_value=max_home_value,
            max_crime_rate=self.bounds.max_crime_rate,
            min_safety_score=self.bounds.min_safety_score,
        )

        if len(candidates) < self.bounds.min_candidates:
            logger.info(
                "Pocos candidatos, se relaja el filtro",
                user_id=user.id,
                filtered=len(candidates),
                floor=self.bounds.min_candidates,
            )
            candidates = self.source.get_all()

        logger.debug("Candidatos seleccionados", user_id=user.id, total=len(candidates))
        return candidates
