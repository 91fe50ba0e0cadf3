"""Loot store service: identity-based insert-if-absent and read queries.

Storage failures are never swallowed: any SQLAlchemy error other than the
unique-hash race is re-raised as StorageUnavailable.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ailoot.core.logging import get_logger
from ailoot.core.loot.enums import Tier
from ailoot.core.loot.errors import StorageUnavailable
from ailoot.core.loot.identity import compute_identity
from ailoot.core.loot.models import LootItem, StoredItem
from ailoot.db.models import LootItemModel

logger = get_logger(__name__)


class LootStore:
    """Persistent loot storage over a SQLAlchemy session."""

    def __init__(self, db: Session):
        self._db = db

    # === Writes ===

    def save_if_absent(self, item: LootItem) -> tuple[StoredItem, bool]:
        """Persist ``item`` unless an item with the same identity exists.

        Returns (stored item, created). An existing row is returned
        unchanged: no new row, no rarity re-roll, no timestamp update.
        """
        item_hash = compute_identity(item)

        existing = self.get_by_hash(item_hash)
        if existing is not None:
            logger.debug("Duplicate item %r (hash=%s)", item.name, item_hash[:12])
            return existing, False

        orm = self._to_orm(item, item_hash)
        try:
            self._db.add(orm)
            self._db.commit()
            self._db.refresh(orm)
        except IntegrityError:
            # another writer inserted the same hash between lookup and insert
            self._db.rollback()
            existing = self.get_by_hash(item_hash)
            if existing is None:
                raise StorageUnavailable(
                    f"Insert of {item.name!r} violated a constraint"
                ) from None
            return existing, False
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.error("Failed to store item %r: %s", item.name, e)
            raise StorageUnavailable(f"Failed to store item: {e}") from e

        logger.debug("Stored item %d %r (hash=%s)", orm.id, orm.name, item_hash[:12])
        return self._to_core(orm), True

    # === Reads ===

    def get_by_id(self, item_id: int) -> Optional[StoredItem]:
        orm = self._scalar(select(LootItemModel).where(LootItemModel.id == item_id))
        return self._to_core(orm) if orm is not None else None

    def get_by_hash(self, item_hash: str) -> Optional[StoredItem]:
        orm = self._scalar(
            select(LootItemModel).where(LootItemModel.hash == item_hash)
        )
        return self._to_core(orm) if orm is not None else None

    def list_by_tier(self, tier: Tier) -> list[StoredItem]:
        """Items of one tier, newest first."""
        stmt = self._newest_first(
            select(LootItemModel).where(LootItemModel.tier == Tier(tier).value)
        )
        return self._all(stmt)

    def list_by_set_name(self, set_name: str) -> list[StoredItem]:
        """Items of one set, newest first."""
        stmt = self._newest_first(
            select(LootItemModel).where(LootItemModel.set_name == set_name)
        )
        return self._all(stmt)

    def list_all(self, limit: Optional[int] = None) -> list[StoredItem]:
        """All items, newest first. ``limit`` caps the count when given."""
        stmt = self._newest_first(select(LootItemModel))
        if limit is not None:
            stmt = stmt.limit(limit)
        return self._all(stmt)

    def count_all(self) -> int:
        return self._scalar(select(func.count()).select_from(LootItemModel)) or 0

    def count_by_tier(self, tier: Tier) -> int:
        stmt = (
            select(func.count())
            .select_from(LootItemModel)
            .where(LootItemModel.tier == Tier(tier).value)
        )
        return self._scalar(stmt) or 0

    def stats(self) -> dict:
        """Total count plus a zero-filled per-tier breakdown.

        Returns: {"total_items": int, "items_by_tier": {tier value: int}}
        """
        return {
            "total_items": self.count_all(),
            "items_by_tier": {tier.value: self.count_by_tier(tier) for tier in Tier},
        }

    # === Internal ===

    @staticmethod
    def _newest_first(stmt):
        return stmt.order_by(LootItemModel.created_at.desc(), LootItemModel.id.desc())

    def _scalar(self, stmt):
        try:
            return self._db.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Store query failed: %s", e)
            raise StorageUnavailable(f"Store query failed: {e}") from e

    def _all(self, stmt) -> list[StoredItem]:
        try:
            rows = self._db.execute(stmt).scalars().all()
        except SQLAlchemyError as e:
            logger.error("Store query failed: %s", e)
            raise StorageUnavailable(f"Store query failed: {e}") from e
        return [self._to_core(r) for r in rows]

    # === ORM <-> Core ===

    def _to_core(self, orm: LootItemModel) -> StoredItem:
        """ORM -> Core"""
        return StoredItem.model_validate(
            {
                "id": orm.id,
                "name": orm.name,
                "type": orm.type,
                "subType": orm.sub_type,
                "tier": orm.tier,
                "description": orm.description,
                "stats": orm.stats,
                "magicalProperties": orm.magical_properties or [],
                "lore": orm.lore,
                "setName": orm.set_name,
                "rarity": orm.rarity,
                "hash": orm.hash,
                "createdAt": orm.created_at,
            }
        )

    def _to_orm(self, core: LootItem, item_hash: str) -> LootItemModel:
        """Core -> ORM"""
        wire = core.to_wire()
        return LootItemModel(
            name=core.name,
            type=core.type.value,
            sub_type=core.sub_type,
            tier=core.tier.value,
            description=core.description,
            stats=wire["stats"],
            magical_properties=wire["magicalProperties"],
            lore=core.lore,
            set_name=core.set_name,
            rarity=core.rarity,
            hash=item_hash,
            created_at=datetime.now(timezone.utc).replace(tzinfo=None),
        )
