"""Tier / item type / subtype enumerations and their closed domains."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class Tier(str, Enum):
    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"
    PLATINUM = "Platinum"
    LEGENDARY = "Legendary"
    CELESTIAL = "Celestial"


class ItemType(str, Enum):
    WEAPON = "Weapon"
    ARMOR = "Armor"
    ACCESSORY = "Accessory"
    CONSUMABLE = "Consumable"
    MATERIAL = "Material"
    RUNE = "Rune"
    ARTIFACT = "Artifact"


class WeaponSubType(str, Enum):
    SWORD = "Sword"
    AXE = "Axe"
    MACE = "Mace"
    DAGGER = "Dagger"
    BOW = "Bow"
    CROSSBOW = "Crossbow"
    STAFF = "Staff"
    WAND = "Wand"
    SPEAR = "Spear"
    HAMMER = "Hammer"
    SHIELD = "Shield"


class ArmorSubType(str, Enum):
    HELMET = "Helmet"
    CHESTPIECE = "Chestpiece"
    LEGGINGS = "Leggings"
    BOOTS = "Boots"
    GLOVES = "Gloves"
    CLOAK = "Cloak"
    GREAVES = "Greaves"
    PAULDRONS = "Pauldrons"
    BRACERS = "Bracers"


class AccessorySubType(str, Enum):
    RING = "Ring"
    AMULET = "Amulet"
    EARRINGS = "Earrings"
    BROOCH = "Brooch"
    PENDANT = "Pendant"


class ConsumableSubType(str, Enum):
    POTION = "Potion"
    SCROLL = "Scroll"
    FOOD = "Food"
    ELIXIR = "Elixir"
    TOME = "Tome"


class MaterialSubType(str, Enum):
    ORE = "Ore"
    GEM = "Gem"
    ESSENCE = "Essence"
    CRYSTAL = "Crystal"
    HERB = "Herb"


# Power level shown to the model in the prompt.
TIER_MULTIPLIERS: dict[Tier, float] = {
    Tier.BRONZE: 1,
    Tier.SILVER: 1.5,
    Tier.GOLD: 2,
    Tier.PLATINUM: 3,
    Tier.LEGENDARY: 5,
    Tier.CELESTIAL: 10,
}

# Closed subtype domains. Rune / Artifact subtypes are free text; the lists
# below are only the pool that random selection draws from.
CLOSED_SUBTYPES: dict[ItemType, type[Enum]] = {
    ItemType.WEAPON: WeaponSubType,
    ItemType.ARMOR: ArmorSubType,
    ItemType.ACCESSORY: AccessorySubType,
    ItemType.CONSUMABLE: ConsumableSubType,
    ItemType.MATERIAL: MaterialSubType,
}

FREE_TEXT_SUBTYPES: dict[ItemType, tuple[str, ...]] = {
    ItemType.RUNE: ("Lesser Rune", "Greater Rune", "Master Rune", "Divine Rune"),
    ItemType.ARTIFACT: (
        "Ancient Relic",
        "Mystic Artifact",
        "Divine Artifact",
        "Primordial Remnant",
    ),
}


def subtypes_for(item_type: ItemType) -> list[str]:
    """All subtype values random selection may pick for an item type."""
    item_type = ItemType(item_type)
    if item_type in CLOSED_SUBTYPES:
        return [s.value for s in CLOSED_SUBTYPES[item_type]]
    return list(FREE_TEXT_SUBTYPES[item_type])


def is_valid_subtype(item_type: ItemType, sub_type: str) -> bool:
    """Check the type/subtype invariant.

    Enumerated types only accept their own subtype values. Rune and Artifact
    accept any non-empty text.
    """
    if not isinstance(sub_type, str) or not sub_type.strip():
        return False
    item_type = ItemType(item_type)
    if item_type in CLOSED_SUBTYPES:
        return sub_type in {s.value for s in CLOSED_SUBTYPES[item_type]}
    return True


def infer_item_type(sub_type: str) -> Optional[ItemType]:
    """Find the item type whose domain contains ``sub_type``. None if no match."""
    for item_type, enum_cls in CLOSED_SUBTYPES.items():
        if sub_type in {s.value for s in enum_cls}:
            return item_type
    for item_type, pool in FREE_TEXT_SUBTYPES.items():
        if sub_type in pool:
            return item_type
    return None
