"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from ailoot.api.health import router as health_router
from ailoot.api.loot import router as loot_router
from ailoot.config import settings
from ailoot.core.logging import get_logger, setup_logging
from ailoot.db.database import init_db
from ailoot.services.ai import get_ai_provider
from ailoot.services.loot_generator import LootGenerator

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    init_db()
    logger.info("Database tables created.")

    logger.info("Initializing AI provider...")
    ai_provider = get_ai_provider()
    app.state.loot_generator = LootGenerator(ai_provider, default_model=settings.AI_MODEL)
    logger.info("AI provider initialized: %s", ai_provider.name)

    yield

    logger.info("Shutting down...")


app = FastAPI(title="AI Loot", lifespan=lifespan)

app.include_router(health_router)
app.include_router(loot_router)
