"""Health check endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ailoot.api.loot import get_loot_generator
from ailoot.core.logging import get_logger
from ailoot.db.database import get_db
from ailoot.services.loot_generator import LootGenerator

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health")
def health_check(
    db: Session = Depends(get_db),
    generator: LootGenerator = Depends(get_loot_generator),
) -> dict[str, str]:
    """Database reachability and the configured provider.

    The provider is not called; use ``GET /loot/models`` to check it.
    """
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError as e:
        logger.warning("Health check database query failed: %s", e)
        database = "disconnected"
    return {
        "status": "ok" if database == "connected" else "error",
        "database": database,
        "provider": generator.ai.name,
    }
