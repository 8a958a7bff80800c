"""
Modelo de Usuario

Perfil demográfico y de preferencias que el motor compara contra cada
barrio. Todos los campos son opcionales salvo la identidad: un campo
ausente hace que el motor saltee el chequeo correspondiente.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"
    PREFER_NOT_TO_SAY = "PREFER_NOT_TO_SAY"


class MaritalStatus(str, Enum):
    SINGLE = "SINGLE"
    MARRIED = "MARRIED"
    DIVORCED = "DIVORCED"
    WIDOWED = "WIDOWED"
    PARTNERED = "PARTNERED"


class EducationLevel(str, Enum):
    HIGH_SCHOOL = "HIGH_SCHOOL"
    BACHELORS = "BACHELORS"
    MASTERS = "MASTERS"
    PHD = "PHD"
    OTHER = "OTHER"


class IncomeLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    VERY_HIGH = "VERY_HIGH"


class OccupationType(str, Enum):
    TECHNOLOGY = "TECHNOLOGY"
    HEALTHCARE = "HEALTHCARE"
    EDUCATION = "EDUCATION"
    FINANCE = "FINANCE"
    MANUFACTURING = "MANUFACTURING"
    RETAIL = "RETAIL"
    GOVERNMENT = "GOVERNMENT"
    OTHER = "OTHER"


class LifestylePreference(str, Enum):
    URBAN = "URBAN"
    SUBURBAN = "SUBURBAN"
    RURAL = "RURAL"
    ACTIVE = "ACTIVE"
    QUIET = "QUIET"
    FAMILY_ORIENTED = "FAMILY_ORIENTED"
    YOUNG_PROFESSIONAL = "YOUNG_PROFESSIONAL"
    RETIREMENT = "RETIREMENT"


class Hobby(str, Enum):
    SPORTS = "SPORTS"
    READING = "READING"
    COOKING = "COOKING"
    TRAVEL = "TRAVEL"
    MUSIC = "MUSIC"
    ART = "ART"
    GARDENING = "GARDENING"
    GAMING = "GAMING"
    FITNESS = "FITNESS"
    PHOTOGRAPHY = "PHOTOGRAPHY"


class FamilyStatus(str, Enum):
    SINGLE = "SINGLE"
    COUPLE = "COUPLE"
    WITH_CHILDREN = "WITH_CHILDREN"
    EMPTY_NESTER = "EMPTY_NESTER"


class PetPreference(str, Enum):
    DOGS = "DOGS"
    CATS = "CATS"
    NO_PETS = "NO_PETS"
    ANY_PETS = "ANY_PETS"


class TransportationPreference(str, Enum):
    CAR = "CAR"
    PUBLIC_TRANSIT = "PUBLIC_TRANSIT"
    WALKING = "WALKING"
    BIKING = "BIKING"


class LocationType(str, Enum):
    CITY_CENTER = "CITY_CENTER"
    SUBURB = "SUBURB"
    RURAL = "RURAL"
    UNIVERSITY_AREA = "UNIVERSITY_AREA"


# Campos sin los cuales no se puede pedir un matching
REQUIRED_FOR_MATCHING = (
    "age",
    "income_level",
    "family_status",
    "max_budget",
    "max_distance_miles",
)


class IncompleteProfileError(ValueError):
    """El perfil no tiene los campos mínimos para el matching."""

    def __init__(self, user_id: str, missing: list[str]):
        self.user_id = user_id
        self.missing = missing
        super().__init__(
            f"Perfil de usuario {user_id} incompleto para matching: "
            f"faltan {', '.join(missing)}"
        )


class UserProfile(BaseModel):
    """
    Usuario del sistema con su perfil demográfico y preferencias.

    Las colecciones en None significan "no informado", que no es lo
    mismo que una lista vacía.
    """

    model_config = ConfigDict(
        from_attributes=True, frozen=True, coerce_numbers_to_str=True
    )

    # Identificadores
    id: str = Field(..., description="ID del usuario")
    name: Optional[str] = Field(None, description="Nombre")
    email: Optional[str] = Field(None, description="Email")

    # Demografía
    age: Optional[int] = Field(None, ge=0, le=150)
    gender: Optional[Gender] = None
    marital_status: Optional[MaritalStatus] = None
    education_level: Optional[EducationLevel] = None
    income_level: Optional[IncomeLevel] = None
    occupation_type: Optional[OccupationType] = None

    # Estilo de vida
    lifestyle_preferences: Optional[list[LifestylePreference]] = None
    hobbies: Optional[list[Hobby]] = None
    family_status: Optional[FamilyStatus] = None
    pet_preference: Optional[PetPreference] = None
    transportation_preference: Optional[TransportationPreference] = None

    # Ubicación
    preferred_location_type: Optional[LocationType] = None
    max_commute_time_minutes: Optional[int] = Field(None, ge=0)
    max_distance_miles: Optional[int] = Field(None, ge=0)

    # Presupuesto
    min_budget: Optional[int] = Field(None, ge=0)
    max_budget: Optional[int] = Field(None, ge=0)

    # Metadatos
    created_at: str = Field(
        default_factory=lambda: datetime.utcnow().isoformat(),
        description="Fecha de registro",
    )
    updated_at: str = Field(
        default_factory=lambda: datetime.utcnow().isoformat(),
        description="Última actualización",
    )

    def missing_matching_fields(self) -> list[str]:
        """Campos requeridos para el matching que no están cargados."""
        return [name for name in REQUIRED_FOR_MATCHING if getattr(self, name) is None]

    def has_hobby(self, hobby: Hobby) -> bool:
        return bool(self.hobbies) and hobby in self.hobbies

    def to_db_dict(self) -> dict:
        """Convierte a diccionario para inserción en Supabase."""
        return self.model_dump(mode="json")
