"""
Script para ejecutar el ciclo de matching.

Calcula y guarda los mejores barrios para un usuario o para todos los
usuarios con perfil completo.

Uso:
    python -m neighborfit.scripts.run_matching
    python -m neighborfit.scripts.run_matching --user-id 42 --limit 5
"""

import argparse
import logging
import sys
from typing import Optional

import structlog

from neighborfit.config import get_settings
from neighborfit.matching import MatchingService
from neighborfit.models import IncompleteProfileError

# Configurar logging
settings = get_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(message)s",
    force=True,
)

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


def run_matching(user_id: Optional[str] = None, limit: Optional[int] = None) -> dict:
    """Ejecuta el matching para un usuario o para todos."""
    service = MatchingService()

    if user_id is None:
        return service.find_matches_for_all_users(limit_per_user=limit)

    matches = service.find_matches_for_user(user_id, limit=limit)
    for rank, match in enumerate(matches, start=1):
        logger.info(
            "Match",
            rank=rank,
            neighborhood=match.neighborhood_name or match.neighborhood_id,
            overall=round(match.overall_score, 1),
            strength=match.match_strength.value,
        )
    return {"users_processed": 1, "matches_found": len(matches), "errors": 0}


def main():
    """Entry point del script."""
    parser = argparse.ArgumentParser(description="Matching de usuarios con barrios")
    parser.add_argument("--user-id", help="ID de un usuario puntual (default: todos)")
    parser.add_argument("--limit", type=int, help="Máximo de matches por usuario")
    args = parser.parse_args()

    logger.info("Iniciando ciclo de matching...")

    try:
        stats = run_matching(user_id=args.user_id, limit=args.limit)

        logger.info(
            "Matching completado",
            users=stats.get("users_processed", 0),
            matches=stats.get("matches_found", 0),
        )

        sys.exit(0 if stats.get("errors", 0) == 0 else 1)

    except KeyboardInterrupt:
        logger.info("Matching interrumpido por usuario")
        sys.exit(130)
    except (LookupError, IncompleteProfileError) as e:
        logger.error("No se puede matchear al usuario", error=str(e))
        sys.exit(1)
    except Exception as e:
        logger.error("Error fatal en matching", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
