"""Loot API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from ailoot.api.schemas import (
    GenerateRequest,
    GenerateResponse,
    ItemListResponse,
    ModelsResponse,
    SetRequest,
    StatsResponse,
)
from ailoot.core.logging import get_logger
from ailoot.core.loot.enums import Tier
from ailoot.core.loot.errors import RequestMalformed, StorageUnavailable
from ailoot.core.loot.models import GenerationRequest
from ailoot.db.database import get_db
from ailoot.services.loot_generator import GenerationReport, LootGenerator
from ailoot.services.loot_store import LootStore

logger = get_logger(__name__)

router = APIRouter(prefix="/loot", tags=["loot"])


def get_loot_generator(request: Request) -> LootGenerator:
    """LootGenerator instance (dependency injection)"""
    generator: LootGenerator = request.app.state.loot_generator
    return generator


def get_loot_store(db: Session = Depends(get_db)) -> LootStore:
    """Request-scoped LootStore (dependency injection)"""
    return LootStore(db)


def _report_response(report: GenerationReport) -> GenerateResponse:
    return GenerateResponse(
        generated=len(report.generated),
        saved=report.saved,
        duplicates=report.duplicates,
        failed=report.failed,
        items=[item.to_wire() for item in report.stored],
    )


@router.post("/generate", response_model=GenerateResponse)
def generate_loot(
    body: GenerateRequest,
    generator: LootGenerator = Depends(get_loot_generator),
    store: LootStore = Depends(get_loot_store),
) -> GenerateResponse:
    """
    Generate and store loot.

    Partial failure is normal: the response lists whatever succeeded plus
    counts of new items, duplicates and failed attempts.
    """
    try:
        request = GenerationRequest.build(**body.model_dump())
        report = generator.generate_and_save(request, store)
    except RequestMalformed as e:
        raise HTTPException(status_code=422, detail=str(e))
    except StorageUnavailable as e:
        logger.error("Storage unavailable during generation: %s", e)
        raise HTTPException(status_code=503, detail=str(e))
    return _report_response(report)


@router.post("/sets", response_model=GenerateResponse)
def generate_set(
    body: SetRequest,
    generator: LootGenerator = Depends(get_loot_generator),
    store: LootStore = Depends(get_loot_store),
) -> GenerateResponse:
    """Generate one item per type for a named set and store them."""
    try:
        report = generator.generate_set_and_save(
            body.set_name,
            body.tier,
            store,
            item_types=body.item_types,
            model=body.model,
        )
    except RequestMalformed as e:
        raise HTTPException(status_code=422, detail=str(e))
    except StorageUnavailable as e:
        logger.error("Storage unavailable during set generation: %s", e)
        raise HTTPException(status_code=503, detail=str(e))
    return _report_response(report)


@router.get("/items", response_model=ItemListResponse)
def list_items(
    tier: Optional[Tier] = None,
    set_name: Optional[str] = None,
    limit: int = Query(default=20, ge=1, le=500),
    store: LootStore = Depends(get_loot_store),
) -> ItemListResponse:
    """Stored items, newest first. ``set_name`` takes precedence over ``tier``."""
    try:
        if set_name:
            items = store.list_by_set_name(set_name)
        elif tier is not None:
            items = store.list_by_tier(tier)
        else:
            items = store.list_all(limit)
    except StorageUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))

    items = items[:limit]
    return ItemListResponse(count=len(items), items=[i.to_wire() for i in items])


@router.get("/items/{item_id}")
def get_item(item_id: int, store: LootStore = Depends(get_loot_store)) -> dict:
    """Single stored item."""
    try:
        item = store.get_by_id(item_id)
    except StorageUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    if item is None:
        raise HTTPException(status_code=404, detail=f"Item {item_id} not found")
    return item.to_wire()


@router.get("/stats", response_model=StatsResponse)
def get_stats(store: LootStore = Depends(get_loot_store)) -> StatsResponse:
    """Total and per-tier item counts."""
    try:
        return StatsResponse(**store.stats())
    except StorageUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/models", response_model=ModelsResponse)
def list_models(
    generator: LootGenerator = Depends(get_loot_generator),
) -> ModelsResponse:
    """Models offered by the configured provider; empty when unreachable."""
    return ModelsResponse(
        provider=generator.ai.name, models=generator.available_models()
    )
