"""
Scores de compatibilidad usuario-barrio.

Cada scorer es una función pura (usuario, barrio) -> float en [0, 1].
Los scorers que promedian varios chequeos solo cuentan los chequeos
que tienen datos de ambos lados: un chequeo sin datos devuelve None y
no entra en el promedio.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from neighborfit.models import (
    Amenity,
    EducationLevel,
    FamilyStatus,
    Hobby,
    IncomeLevel,
    LifestyleCharacteristic,
    LocationType,
    MatchingWeights,
    NeighborhoodProfile,
    PetPreference,
    TransportationPreference,
    UserProfile,
)

# Ingreso de referencia por nivel, contra la mediana del barrio
INCOME_THRESHOLDS: dict[IncomeLevel, float] = {
    IncomeLevel.LOW: 50_000,
    IncomeLevel.MEDIUM: 75_000,
    IncomeLevel.HIGH: 100_000,
    IncomeLevel.VERY_HIGH: 150_000,
}

# Tasa de graduados universitarios esperada por nivel educativo
EXPECTED_COLLEGE_RATE: dict[EducationLevel, Optional[float]] = {
    EducationLevel.HIGH_SCHOOL: 0.3,
    EducationLevel.BACHELORS: 0.5,
    EducationLevel.MASTERS: 0.7,
    EducationLevel.PHD: 0.7,
    EducationLevel.OTHER: None,
}

LOCATION_TYPE_CHARACTERISTIC: dict[LocationType, LifestyleCharacteristic] = {
    LocationType.CITY_CENTER: LifestyleCharacteristic.URBAN,
    LocationType.SUBURB: LifestyleCharacteristic.SUBURBAN,
    LocationType.RURAL: LifestyleCharacteristic.RURAL,
    LocationType.UNIVERSITY_AREA: LifestyleCharacteristic.UNIVERSITY_TOWN,
}

FAMILY_STATUS_CHARACTERISTIC: dict[FamilyStatus, Optional[LifestyleCharacteristic]] = {
    FamilyStatus.WITH_CHILDREN: LifestyleCharacteristic.FAMILY_FRIENDLY,
    FamilyStatus.SINGLE: LifestyleCharacteristic.YOUNG_PROFESSIONAL,
    FamilyStatus.COUPLE: None,
    FamilyStatus.EMPTY_NESTER: None,
}

# (campo del barrio, umbral estricto); None = sin requisito que cumplir
TRANSPORT_THRESHOLDS: dict[TransportationPreference, Optional[tuple[str, float]]] = {
    TransportationPreference.PUBLIC_TRANSIT: ("transit_score", 70),
    TransportationPreference.WALKING: ("walk_score", 80),
    TransportationPreference.BIKING: ("bike_score", 70),
    TransportationPreference.CAR: None,
}

NEUTRAL_SCORE = 0.5
DOG_PARK_SCORE = 0.8
AMENITY_SATURATION = 10
AMENITY_HOBBY_BONUS = 0.2
COMMUTE_DECAY_MINUTES = 60.0


@dataclass(frozen=True)
class ComponentScores:
    """Los cinco scores por dimensión, cada uno en [0, 1]."""

    lifestyle: float
    demographic: float
    location: float
    budget: float
    amenity: float

    def denormalized(self) -> dict[str, float]:
        """Scores llevados a la escala 0-100."""
        return {
            "lifestyle_score": _to_percent(self.lifestyle),
            "demographic_score": _to_percent(self.demographic),
            "location_score": _to_percent(self.location),
            "budget_score": _to_percent(self.budget),
            "amenity_score": _to_percent(self.amenity),
        }


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Acota un valor al rango [low, high]; NaN cae en low."""
    if value != value:
        return low
    return max(low, min(high, value))


def _to_percent(score: float) -> float:
    return clamp(score * 100, 0.0, 100.0)


def _average(checks: Iterable[Optional[float]]) -> float:
    """Promedio de los chequeos evaluados; 0 si ninguno lo fue."""
    total, count = 0.0, 0
    for value in checks:
        if value is None:
            continue
        total, count = total + value, count + 1
    return clamp(total / count) if count else 0.0


# ---------------------------------------------------------------------------
# Estilo de vida
# ---------------------------------------------------------------------------


def family_status_check(user: UserProfile, hood: NeighborhoodProfile) -> Optional[float]:
    if user.family_status is None or hood.lifestyle_characteristics is None:
        return None
    wanted = FAMILY_STATUS_CHARACTERISTIC[user.family_status]
    return 1.0 if wanted is not None and hood.has_characteristic(wanted) else 0.0


def pet_check(user: UserProfile, hood: NeighborhoodProfile) -> Optional[float]:
    if user.pet_preference is None:
        return None
    if user.pet_preference == PetPreference.DOGS and hood.has_amenity(Amenity.PARKS):
        return DOG_PARK_SCORE
    return 0.0


def transportation_check(user: UserProfile, hood: NeighborhoodProfile) -> Optional[float]:
    if user.transportation_preference is None or hood.transportation_options is None:
        return None
    requirement = TRANSPORT_THRESHOLDS[user.transportation_preference]
    if requirement is None:
        return 0.0
    field, threshold = requirement
    value = getattr(hood, field)
    return 1.0 if value is not None and value > threshold else 0.0


def lifestyle_score(user: UserProfile, hood: NeighborhoodProfile) -> float:
    """Compatibilidad de estilo de vida: familia, mascotas y transporte."""
    return _average([
        family_status_check(user, hood),
        pet_check(user, hood),
        transportation_check(user, hood),
    ])


# ---------------------------------------------------------------------------
# Demografía
# ---------------------------------------------------------------------------


def age_check(user: UserProfile, hood: NeighborhoodProfile) -> Optional[float]:
    if user.age is None or hood.median_age is None:
        return None
    difference = abs(user.age - hood.median_age)
    if difference <= 5:
        return 1.0
    if difference <= 10:
        return 0.8
    if difference <= 15:
        return 0.6
    return 0.4


def income_compatibility(income_level: IncomeLevel, median_income: float) -> float:
    """Cercanía entre la mediana de ingresos del barrio y el nivel del usuario."""
    ratio = median_income / INCOME_THRESHOLDS[income_level]
    if 0.8 <= ratio <= 1.2:
        return 1.0
    if 0.6 <= ratio <= 1.4:
        return 0.7
    return 0.3


def education_compatibility(education_level: EducationLevel, college_rate: float) -> float:
    """Cercanía entre la tasa de graduados del barrio y la esperada para el usuario."""
    expected = EXPECTED_COLLEGE_RATE[education_level]
    if expected is None:
        return NEUTRAL_SCORE
    difference = abs(college_rate - expected)
    if difference <= 0.1:
        return 1.0
    if difference <= 0.2:
        return 0.7
    return 0.4


def income_check(user: UserProfile, hood: NeighborhoodProfile) -> Optional[float]:
    if user.income_level is None or hood.median_income is None:
        return None
    return income_compatibility(user.income_level, hood.median_income)


def education_check(user: UserProfile, hood: NeighborhoodProfile) -> Optional[float]:
    if user.education_level is None or hood.college_graduate_rate is None:
        return None
    return education_compatibility(user.education_level, hood.college_graduate_rate)


def demographic_score(user: UserProfile, hood: NeighborhoodProfile) -> float:
    """Afinidad demográfica: edad, ingresos y educación."""
    return _average([
        age_check(user, hood),
        income_check(user, hood),
        education_check(user, hood),
    ])


# ---------------------------------------------------------------------------
# Ubicación y transporte
# ---------------------------------------------------------------------------


def location_type_compatibility(
    preferred: LocationType,
    characteristics: list[LifestyleCharacteristic],
) -> float:
    if not characteristics:
        return NEUTRAL_SCORE
    return 1.0 if LOCATION_TYPE_CHARACTERISTIC[preferred] in characteristics else 0.3


def location_type_check(user: UserProfile, hood: NeighborhoodProfile) -> Optional[float]:
    if user.preferred_location_type is None or hood.lifestyle_characteristics is None:
        return None
    return location_type_compatibility(
        user.preferred_location_type, hood.lifestyle_characteristics
    )


def commute_check(user: UserProfile, hood: NeighborhoodProfile) -> Optional[float]:
    if user.max_commute_time_minutes is None or hood.commute_time_minutes is None:
        return None
    excess = hood.commute_time_minutes - user.max_commute_time_minutes
    if excess <= 0:
        return 1.0
    return max(0.0, 1.0 - excess / COMMUTE_DECAY_MINUTES)


def _percent_field(value: Optional[float]) -> Optional[float]:
    return None if value is None else value / 100.0


def location_score(user: UserProfile, hood: NeighborhoodProfile) -> float:
    """Ubicación: tipo de zona, viaje al trabajo, walk score y transit score."""
    return _average([
        location_type_check(user, hood),
        commute_check(user, hood),
        _percent_field(hood.walk_score),
        _percent_field(hood.transit_score),
    ])


# ---------------------------------------------------------------------------
# Presupuesto y amenities (informativos, no entran al score general)
# ---------------------------------------------------------------------------


def budget_score(user: UserProfile, hood: NeighborhoodProfile) -> float:
    """Precio medio de vivienda contra el presupuesto máximo del usuario."""
    if not user.max_budget or hood.median_home_value is None:
        return NEUTRAL_SCORE

    ratio = hood.median_home_value / user.max_budget
    if ratio <= 0.8:
        return 1.0
    if ratio <= 1.0:
        return 0.8
    if ratio <= 1.2:
        return 0.6
    return 0.2


def amenity_score(user: UserProfile, hood: NeighborhoodProfile) -> float:
    """Cantidad de amenities, con bonus por hobbies que encuentran su lugar."""
    if not hood.amenities:
        return NEUTRAL_SCORE

    score = min(1.0, len(hood.amenities) / AMENITY_SATURATION)
    if user.has_hobby(Hobby.FITNESS) and hood.has_amenity(Amenity.GYMS):
        score += AMENITY_HOBBY_BONUS
    if user.has_hobby(Hobby.GARDENING) and hood.has_amenity(Amenity.PARKS):
        score += AMENITY_HOBBY_BONUS
    return clamp(score)


# ---------------------------------------------------------------------------
# Agregación
# ---------------------------------------------------------------------------


def component_scores(user: UserProfile, hood: NeighborhoodProfile) -> ComponentScores:
    """Calcula los cinco scores de un par usuario-barrio."""
    return ComponentScores(
        lifestyle=clamp(lifestyle_score(user, hood)),
        demographic=clamp(demographic_score(user, hood)),
        location=clamp(location_score(user, hood)),
        budget=clamp(budget_score(user, hood)),
        amenity=clamp(amenity_score(user, hood)),
    )


def overall_score(scores: ComponentScores, weights: MatchingWeights) -> float:
    """
    Score general 0-100.

    Solo pondera estilo de vida, demografía y ubicación; presupuesto y
    amenities se reportan aparte. El resultado se acota a [0, 100] aunque
    los pesos no sumen 1.
    """
    weighted = (
        scores.lifestyle * weights.lifestyle
        + scores.demographic * weights.demographic
        + scores.location * weights.location
    )
    return clamp(weighted * 100, 0.0, 100.0)
