"""Fixtures compartidos: perfiles de ejemplo y repositorios en memoria."""

import pytest

from neighborfit.config import Settings
from neighborfit.models import (
    Amenity,
    EducationLevel,
    FamilyStatus,
    IncomeLevel,
    LifestyleCharacteristic,
    LocationType,
    NeighborhoodProfile,
    TransportationOption,
    TransportationPreference,
    UserProfile,
)


def make_user(**overrides) -> UserProfile:
    data = {
        "id": "u-1",
        "name": "Sam",
        "age": 30,
        "income_level": IncomeLevel.HIGH,
        "education_level": EducationLevel.BACHELORS,
        "family_status": FamilyStatus.SINGLE,
        "transportation_preference": TransportationPreference.PUBLIC_TRANSIT,
        "preferred_location_type": LocationType.CITY_CENTER,
        "max_commute_time_minutes": 30,
        "max_distance_miles": 10,
        "min_budget": 300_000,
        "max_budget": 500_000,
    }
    data.update(overrides)
    return UserProfile(**data)


def make_neighborhood(**overrides) -> NeighborhoodProfile:
    data = {
        "id": "n-1",
        "name": "Riverside",
        "city": "Springfield",
        "state": "IL",
        "median_age": 28,
        "median_income": 95_000,
        "college_graduate_rate": 0.55,
        "median_home_value": 480_000,
        "lifestyle_characteristics": [
            LifestyleCharacteristic.YOUNG_PROFESSIONAL,
            LifestyleCharacteristic.URBAN,
        ],
        "amenities": [Amenity.RESTAURANTS, Amenity.COFFEE_SHOPS],
        "transportation_options": [TransportationOption.SUBWAY, TransportationOption.BUS],
        "commute_time_minutes": 25,
        "walk_score": 85,
        "transit_score": 75,
        "crime_rate": 0.05,
        "safety_score": 7.5,
    }
    data.update(overrides)
    return NeighborhoodProfile(**data)


def neighborhood_row(**overrides) -> dict:
    """Fila cruda como la devuelve Supabase."""
    return make_neighborhood(**overrides).model_dump(mode="json")


@pytest.fixture
def user() -> UserProfile:
    return make_user()


@pytest.fixture
def neighborhood() -> NeighborhoodProfile:
    return make_neighborhood()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


class FakeNeighborhoodRepository:
    """Fuente de barrios en memoria con la interfaz del repositorio."""

    def __init__(self, filtered: list[dict], universe: list[dict]):
        self.filtered = filtered
        self.universe = universe
        self.search_calls: list[dict] = []

    def search_for_matching(self, **bounds) -> list[dict]:
        self.search_calls.append(bounds)
        return list(self.filtered)

    def get_all(self) -> list[dict]:
        return list(self.universe)


class FakeUserRepository:
    def __init__(self, users: list[dict]):
        self.users = {u["id"]: u for u in users}

    def get_by_id(self, user_id: str):
        return self.users.get(user_id)

    def get_all(self) -> list[dict]:
        return list(self.users.values())


class FakeMatchRepository:
    """Guarda matches en memoria asignando IDs secuenciales."""

    def __init__(self):
        self.rows: list[dict] = []

    def save_all(self, matches) -> list[dict]:
        saved = []
        for match in matches:
            row = match.to_db_dict()
            row["id"] = str(len(self.rows) + 1)
            self.rows.append(row)
            saved.append(row)
        return saved

    def get_by_id(self, match_id: str):
        return next((r for r in self.rows if r["id"] == match_id), None)

    def get_user_history(self, user_id: str) -> list[dict]:
        rows = [r for r in self.rows if r["user_id"] == user_id]
        return sorted(rows, key=lambda r: r["overall_score"], reverse=True)

    def get_top_for_user(self, user_id: str, limit: int = 10) -> list[dict]:
        return self.get_user_history(user_id)[:limit]

    def get_by_strength(self, strength) -> list[dict]:
        return [r for r in self.rows if r["match_strength"] == strength.value]

    def get_recent(self, limit: int = 20) -> list[dict]:
        return list(reversed(self.rows))[:limit]

    def get_all(self) -> list[dict]:
        return list(self.rows)

    def update_feedback(self, match_id: str, feedback) -> dict:
        row = self.get_by_id(match_id)
        if row is None:
            return {}
        row.update(feedback.to_db_dict())
        return row
