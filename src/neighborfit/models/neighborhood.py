"""
Modelo de Barrio

Datos demográficos, de vivienda, seguridad y movilidad de un barrio,
ya normalizados. El motor solo los lee.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LifestyleCharacteristic(str, Enum):
    URBAN = "URBAN"
    SUBURBAN = "SUBURBAN"
    RURAL = "RURAL"
    FAMILY_FRIENDLY = "FAMILY_FRIENDLY"
    YOUNG_PROFESSIONAL = "YOUNG_PROFESSIONAL"
    RETIREMENT_COMMUNITY = "RETIREMENT_COMMUNITY"
    UNIVERSITY_TOWN = "UNIVERSITY_TOWN"
    TOURIST_DESTINATION = "TOURIST_DESTINATION"


class Amenity(str, Enum):
    GROCERY_STORES = "GROCERY_STORES"
    RESTAURANTS = "RESTAURANTS"
    SHOPPING_CENTERS = "SHOPPING_CENTERS"
    HOSPITALS = "HOSPITALS"
    LIBRARIES = "LIBRARIES"
    PARKS = "PARKS"
    GYMS = "GYMS"
    MOVIE_THEATERS = "MOVIE_THEATERS"
    BARS = "BARS"
    COFFEE_SHOPS = "COFFEE_SHOPS"


class TransportationOption(str, Enum):
    BUS = "BUS"
    TRAIN = "TRAIN"
    SUBWAY = "SUBWAY"
    LIGHT_RAIL = "LIGHT_RAIL"
    BIKE_LANES = "BIKE_LANES"
    WALKING_TRAILS = "WALKING_TRAILS"
    PARKING = "PARKING"


class NeighborhoodProfile(BaseModel):
    """
    Barrio listo para el motor de matching.

    Se mapea a la tabla 'neighborhoods' en Supabase. Los scores de
    walk/bike/transit van de 0 a 100 y safety_score de 0 a 10.
    """

    model_config = ConfigDict(
        from_attributes=True, frozen=True, coerce_numbers_to_str=True
    )

    # Identificadores
    id: str = Field(..., description="ID del barrio")
    name: Optional[str] = Field(None, description="Nombre del barrio")
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None

    # Geografía
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    # Demografía
    total_population: Optional[int] = None
    median_age: Optional[float] = None
    median_income: Optional[float] = None
    home_ownership_rate: Optional[float] = None
    college_graduate_rate: Optional[float] = Field(
        None, description="Proporción de graduados universitarios (0-1)"
    )

    # Vivienda
    median_home_value: Optional[float] = None
    median_rent: Optional[float] = None
    vacancy_rate: Optional[float] = None

    # Características
    lifestyle_characteristics: Optional[list[LifestyleCharacteristic]] = None
    amenities: Optional[list[Amenity]] = None
    transportation_options: Optional[list[TransportationOption]] = None

    # Seguridad y servicios
    crime_rate: Optional[float] = None
    safety_score: Optional[float] = None
    school_rating: Optional[float] = None
    number_of_schools: Optional[int] = None
    unemployment_rate: Optional[float] = None
    commute_time_minutes: Optional[float] = None
    air_quality_index: Optional[float] = None

    # Movilidad
    walk_score: Optional[float] = None
    bike_score: Optional[float] = None
    transit_score: Optional[float] = None

    # Vida de barrio
    diversity_index: Optional[float] = None
    number_of_restaurants: Optional[int] = None
    number_of_parks: Optional[int] = None
    number_of_libraries: Optional[int] = None

    # Metadatos
    created_at: str = Field(default_factory=lambda: datetime.utcnow().isoformat())
    updated_at: str = Field(default_factory=lambda: datetime.utcnow().isoformat())

    def has_characteristic(self, characteristic: LifestyleCharacteristic) -> bool:
        return bool(self.lifestyle_characteristics) and (
            characteristic in self.lifestyle_characteristics
        )

    def has_amenity(self, amenity: Amenity) -> bool:
        return bool(self.amenities) and amenity in self.amenities

    def to_db_dict(self) -> dict:
        """Convierte a diccionario para inserción en Supabase."""
        return self.model_dump(mode="json")
