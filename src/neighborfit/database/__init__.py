"""
Módulo de base de datos.

Provee acceso a Supabase y operaciones CRUD.
"""

from neighborfit.database.supabase_client import get_supabase_client, SupabaseClient
from neighborfit.database.repositories import (
    UserRepository,
    NeighborhoodRepository,
    MatchRepository,
)

__all__ = [
    "get_supabase_client",
    "SupabaseClient",
    "UserRepository",
    "NeighborhoodRepository",
    "MatchRepository",
]
