"""Shared test fixtures."""

import json
import random
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ailoot.api.loot import get_loot_generator
from ailoot.db.database import get_db
from ailoot.db.models import Base
from ailoot.main import app
from ailoot.services.ai import MockProvider
from ailoot.services.loot_generator import LootGenerator
from ailoot.services.loot_store import LootStore


def loot_response(**overrides: Any) -> str:
    """Model-style JSON for a Gold sword; keyword arguments replace fields."""
    data: dict[str, Any] = {
        "name": "Flameheart",
        "type": "Weapon",
        "subType": "Sword",
        "tier": "Gold",
        "description": "A blade that smoulders in its scabbard.",
        "stats": {"damage": 30, "attackSpeed": 12, "durability": 150, "weight": 3.2},
        "magicalProperties": [
            {"name": "Ember Edge", "description": "Strikes ignite the target.", "magnitude": 5}
        ],
        "lore": "Quenched in the caldera of Mount Ashfall.",
        "rarity": 999,
    }
    data.update(overrides)
    return json.dumps(data)


@pytest.fixture()
def engine():
    """In-memory SQLite engine shared across sessions of one test."""
    db_engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture()
def db_session(engine) -> Session:
    """Raw database session for direct DB assertions."""
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def store(db_session: Session) -> LootStore:
    return LootStore(db_session)


@pytest.fixture()
def provider() -> MockProvider:
    return MockProvider()


@pytest.fixture()
def generator(provider: MockProvider) -> LootGenerator:
    """LootGenerator over the MockProvider with a seeded random source."""
    return LootGenerator(provider, rng=random.Random(42))


@pytest.fixture()
def client(engine, generator: LootGenerator) -> TestClient:
    """FastAPI TestClient wired to an in-memory SQLite database."""
    session_factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def _override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_loot_generator] = lambda: generator
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def make_response():
    """Factory for model-style JSON responses."""
    return loot_response
