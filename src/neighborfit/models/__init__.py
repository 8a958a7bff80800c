"""
Modelos de datos del sistema.

- UserProfile: perfil y preferencias del usuario
- NeighborhoodProfile: datos del barrio
- Match: resultado de evaluar un usuario contra un barrio
"""

from neighborfit.models.user import (
    UserProfile,
    IncompleteProfileError,
    Gender,
    MaritalStatus,
    EducationLevel,
    IncomeLevel,
    OccupationType,
    LifestylePreference,
    Hobby,
    FamilyStatus,
    PetPreference,
    TransportationPreference,
    LocationType,
)
from neighborfit.models.neighborhood import (
    NeighborhoodProfile,
    LifestyleCharacteristic,
    Amenity,
    TransportationOption,
)
from neighborfit.models.match import (
    Match,
    MatchStrength,
    MatchFeedback,
    MatchAnalytics,
)
from neighborfit.models.params import MatchingWeights, CandidateBounds

__all__ = [
    # Usuario
    "UserProfile",
    "IncompleteProfileError",
    "Gender",
    "MaritalStatus",
    "EducationLevel",
    "IncomeLevel",
    "OccupationType",
    "LifestylePreference",
    "Hobby",
    "FamilyStatus",
    "PetPreference",
    "TransportationPreference",
    "LocationType",
    # Barrio
    "NeighborhoodProfile",
    "LifestyleCharacteristic",
    "Amenity",
    "TransportationOption",
    # Match
    "Match",
    "MatchStrength",
    "MatchFeedback",
    "MatchAnalytics",
    # Parámetros
    "MatchingWeights",
    "CandidateBounds",
]
