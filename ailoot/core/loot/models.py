"""Loot domain models (no DB dependency).

Field names are snake_case; the wire form (prompt, storage, hash, HTTP) uses
the camelCase aliases.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .enums import ItemType, Tier, infer_item_type, is_valid_subtype
from .errors import RequestMalformed


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _StatModel(_CamelModel):
    model_config = ConfigDict(extra="forbid")


# === Stat blocks ===


class BaseStats(_StatModel):
    """Baseline fields every item may carry."""

    durability: Optional[int] = None
    weight: Optional[float] = None
    value: Optional[int] = None


class WeaponStats(BaseStats):
    damage: int
    attack_speed: Optional[int] = None
    critical_chance: Optional[int] = None
    critical_damage: Optional[int] = None
    range: Optional[float] = None
    accuracy: Optional[int] = None


class ElementalResistance(_StatModel):
    fire: Optional[int] = None
    ice: Optional[int] = None
    lightning: Optional[int] = None
    poison: Optional[int] = None
    dark: Optional[int] = None
    light: Optional[int] = None


class ArmorStats(BaseStats):
    defense: int
    magic_resistance: Optional[int] = None
    elemental_resistance: Optional[ElementalResistance] = None


class AccessoryStats(BaseStats):
    health: Optional[int] = None
    mana: Optional[int] = None
    stamina: Optional[int] = None
    strength: Optional[int] = None
    dexterity: Optional[int] = None
    intelligence: Optional[int] = None
    wisdom: Optional[int] = None
    constitution: Optional[int] = None
    luck: Optional[int] = None


class ConsumableStats(BaseStats):
    healing_power: Optional[int] = None
    mana_power: Optional[int] = None
    duration: Optional[int] = None
    stack_size: Optional[int] = None


class MaterialStats(BaseStats):
    purity: Optional[int] = None
    stack_size: Optional[int] = None
    crafting_bonus: Optional[int] = None


StatBlock = Union[
    WeaponStats, ArmorStats, AccessoryStats, ConsumableStats, MaterialStats, BaseStats
]

STAT_MODELS: dict[ItemType, type[BaseStats]] = {
    ItemType.WEAPON: WeaponStats,
    ItemType.ARMOR: ArmorStats,
    ItemType.ACCESSORY: AccessoryStats,
    ItemType.CONSUMABLE: ConsumableStats,
    ItemType.MATERIAL: MaterialStats,
    ItemType.RUNE: BaseStats,
    ItemType.ARTIFACT: BaseStats,
}


# === Item ===


class MagicalProperty(_CamelModel):
    name: str
    description: str
    magnitude: Optional[float] = None


class LootItem(_CamelModel):
    """A generated item.

    Invariants:
    - ``stats`` validates against the block for ``type``
    - ``sub_type`` belongs to the domain of ``type``
    - ``rarity`` in 0..100 (the tier band is enforced by the reconciler)
    """

    name: str
    type: ItemType
    sub_type: str
    tier: Tier
    description: str
    stats: StatBlock
    magical_properties: list[MagicalProperty] = Field(default_factory=list)
    lore: Optional[str] = None
    set_name: Optional[str] = None
    rarity: int = Field(ge=0, le=100)

    @model_validator(mode="before")
    @classmethod
    def _stats_for_type(cls, data: Any) -> Any:
        """Validate ``stats`` with the block model chosen by ``type``."""
        if not isinstance(data, dict):
            return data
        raw_type = data.get("type")
        stats = data.get("stats")
        try:
            item_type = ItemType(raw_type)
        except ValueError:
            return data  # field validation reports the bad type
        stat_model = STAT_MODELS[item_type]
        if isinstance(stats, BaseModel):
            if type(stats) is stat_model:
                return data
            stats = stats.model_dump(by_alias=True, exclude_none=True)
        data = dict(data)
        data["stats"] = stat_model.model_validate(stats)
        return data

    @model_validator(mode="after")
    def _check_subtype(self) -> "LootItem":
        if not is_valid_subtype(self.type, self.sub_type):
            raise ValueError(
                f"subType {self.sub_type!r} is not valid for type {self.type.value}"
            )
        return self

    def to_wire(self) -> dict[str, Any]:
        """camelCase dict without unset optional stats."""
        data = self.model_dump(by_alias=True, mode="json", exclude={"stats"})
        data["stats"] = self.stats.model_dump(by_alias=True, exclude_none=True)
        return data


class StoredItem(LootItem):
    """A LootItem persisted once per unique content hash."""

    id: int
    created_at: datetime
    hash: str


# === Request ===


class GenerationRequest(_CamelModel):
    """Transient per-call generation request.

    Use :meth:`build` to get :class:`RequestMalformed` instead of a
    pydantic ``ValidationError`` on bad input.
    """

    tier: Tier
    count: int = Field(default=1, ge=1)
    item_type: Optional[ItemType] = None
    sub_type: Optional[str] = None
    set_name: Optional[str] = None
    model: Optional[str] = None

    @model_validator(mode="after")
    def _check_domain(self) -> "GenerationRequest":
        if self.sub_type is None:
            return self
        if self.item_type is None:
            inferred = infer_item_type(self.sub_type)
            if inferred is None:
                raise ValueError(f"Unknown subtype {self.sub_type!r}")
            self.item_type = inferred
        elif not is_valid_subtype(self.item_type, self.sub_type):
            raise ValueError(
                f"Subtype {self.sub_type!r} does not belong to {self.item_type.value}"
            )
        return self

    @classmethod
    def build(cls, **kwargs: Any) -> "GenerationRequest":
        try:
            return cls(**kwargs)
        except ValueError as e:
            raise RequestMalformed(str(e)) from e
