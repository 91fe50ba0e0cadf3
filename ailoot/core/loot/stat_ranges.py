"""Stat range and rarity band tables (pure Python, no external dependencies).

All tier scaling lives in the lookup tables below; nothing else in the
package branches on tier.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Optional, Union

from .enums import ItemType, Tier

StatValue = Union[int, float]


@dataclass(frozen=True)
class StatRange:
    """Inclusive numeric bounds."""

    min: float
    max: float


def _r(lo: float, hi: float) -> StatRange:
    return StatRange(lo, hi)


# === Weapon ===
WEAPON_RANGES: dict[Tier, dict[str, StatRange]] = {
    Tier.BRONZE: {
        "damage": _r(8, 15),
        "attackSpeed": _r(-10, 10),
        "criticalChance": _r(2, 6),
        "criticalDamage": _r(150, 180),
        "range": _r(1, 3),
        "accuracy": _r(-5, 5),
        "durability": _r(50, 100),
        "weight": _r(1.0, 4.0),
        "value": _r(50, 150),
    },
    Tier.SILVER: {
        "damage": _r(12, 22),
        "attackSpeed": _r(-5, 20),
        "criticalChance": _r(4, 10),
        "criticalDamage": _r(160, 200),
        "range": _r(1, 4),
        "accuracy": _r(-3, 8),
        "durability": _r(80, 140),
        "weight": _r(0.8, 4.5),
        "value": _r(100, 300),
    },
    Tier.GOLD: {
        "damage": _r(18, 35),
        "attackSpeed": _r(0, 30),
        "criticalChance": _r(6, 15),
        "criticalDamage": _r(180, 230),
        "range": _r(1, 5),
        "accuracy": _r(0, 12),
        "durability": _r(120, 200),
        "weight": _r(0.6, 5.0),
        "value": _r(200, 600),
    },
    Tier.PLATINUM: {
        "damage": _r(30, 55),
        "attackSpeed": _r(5, 45),
        "criticalChance": _r(10, 22),
        "criticalDamage": _r(200, 280),
        "range": _r(2, 7),
        "accuracy": _r(5, 18),
        "durability": _r(180, 280),
        "weight": _r(0.4, 6.0),
        "value": _r(400, 1200),
    },
    Tier.LEGENDARY: {
        "damage": _r(45, 85),
        "attackSpeed": _r(15, 65),
        "criticalChance": _r(18, 35),
        "criticalDamage": _r(250, 350),
        "range": _r(3, 10),
        "accuracy": _r(10, 25),
        "durability": _r(250, 400),
        "weight": _r(0.3, 7.0),
        "value": _r(800, 2500),
    },
    Tier.CELESTIAL: {
        "damage": _r(75, 150),
        "attackSpeed": _r(30, 100),
        "criticalChance": _r(25, 50),
        "criticalDamage": _r(300, 500),
        "range": _r(5, 15),
        "accuracy": _r(20, 40),
        "durability": _r(350, 600),
        "weight": _r(0.2, 8.0),
        "value": _r(1500, 5000),
    },
}

# === Armor ===
ARMOR_RANGES: dict[Tier, dict[str, StatRange]] = {
    Tier.BRONZE: {
        "defense": _r(3, 8),
        "magicResistance": _r(2, 8),
        "elementalResistance": _r(1, 5),
        "durability": _r(60, 120),
        "weight": _r(2.0, 15.0),
        "value": _r(40, 120),
    },
    Tier.SILVER: {
        "defense": _r(6, 15),
        "magicResistance": _r(5, 12),
        "elementalResistance": _r(3, 8),
        "durability": _r(100, 180),
        "weight": _r(1.8, 16.0),
        "value": _r(80, 250),
    },
    Tier.GOLD: {
        "defense": _r(12, 25),
        "magicResistance": _r(8, 18),
        "elementalResistance": _r(5, 12),
        "durability": _r(150, 250),
        "weight": _r(1.5, 18.0),
        "value": _r(150, 500),
    },
    Tier.PLATINUM: {
        "defense": _r(20, 40),
        "magicResistance": _r(15, 28),
        "elementalResistance": _r(8, 18),
        "durability": _r(220, 350),
        "weight": _r(1.2, 20.0),
        "value": _r(300, 1000),
    },
    Tier.LEGENDARY: {
        "defense": _r(35, 65),
        "magicResistance": _r(25, 45),
        "elementalResistance": _r(15, 30),
        "durability": _r(300, 500),
        "weight": _r(1.0, 25.0),
        "value": _r(600, 2000),
    },
    Tier.CELESTIAL: {
        "defense": _r(55, 120),
        "magicResistance": _r(40, 80),
        "elementalResistance": _r(25, 50),
        "durability": _r(450, 800),
        "weight": _r(0.8, 30.0),
        "value": _r(1200, 4000),
    },
}

# === Accessory ===
ACCESSORY_RANGES: dict[Tier, dict[str, StatRange]] = {
    Tier.BRONZE: {
        "health": _r(10, 30),
        "mana": _r(8, 25),
        "stamina": _r(5, 15),
        "attributes": _r(1, 2),
        "luck": _r(1, 3),
        "durability": _r(30, 80),
        "weight": _r(0.1, 1.0),
        "value": _r(80, 200),
    },
    Tier.SILVER: {
        "health": _r(25, 50),
        "mana": _r(20, 40),
        "stamina": _r(12, 25),
        "attributes": _r(1, 3),
        "luck": _r(2, 5),
        "durability": _r(60, 120),
        "weight": _r(0.1, 1.2),
        "value": _r(150, 400),
    },
    Tier.GOLD: {
        "health": _r(40, 80),
        "mana": _r(35, 65),
        "stamina": _r(20, 40),
        "attributes": _r(2, 4),
        "luck": _r(3, 7),
        "durability": _r(100, 180),
        "weight": _r(0.1, 1.5),
        "value": _r(300, 800),
    },
    Tier.PLATINUM: {
        "health": _r(70, 130),
        "mana": _r(60, 100),
        "stamina": _r(35, 65),
        "attributes": _r(3, 6),
        "luck": _r(5, 10),
        "durability": _r(150, 250),
        "weight": _r(0.1, 2.0),
        "value": _r(600, 1500),
    },
    Tier.LEGENDARY: {
        "health": _r(120, 220),
        "mana": _r(100, 180),
        "stamina": _r(60, 110),
        "attributes": _r(5, 10),
        "luck": _r(8, 15),
        "durability": _r(220, 350),
        "weight": _r(0.1, 2.5),
        "value": _r(1200, 3000),
    },
    Tier.CELESTIAL: {
        "health": _r(200, 400),
        "mana": _r(180, 350),
        "stamina": _r(100, 200),
        "attributes": _r(8, 20),
        "luck": _r(12, 25),
        "durability": _r(300, 500),
        "weight": _r(0.1, 3.0),
        "value": _r(2500, 6000),
    },
}

# === Consumable ===
CONSUMABLE_RANGES: dict[Tier, dict[str, StatRange]] = {
    Tier.BRONZE: {
        "healingPower": _r(25, 60),
        "manaPower": _r(15, 40),
        "duration": _r(30, 120),
        "stackSize": _r(10, 50),
        "value": _r(5, 25),
    },
    Tier.SILVER: {
        "healingPower": _r(50, 100),
        "manaPower": _r(35, 75),
        "duration": _r(60, 180),
        "stackSize": _r(15, 75),
        "value": _r(15, 50),
    },
    Tier.GOLD: {
        "healingPower": _r(85, 160),
        "manaPower": _r(65, 120),
        "duration": _r(120, 300),
        "stackSize": _r(20, 99),
        "value": _r(30, 100),
    },
    Tier.PLATINUM: {
        "healingPower": _r(140, 250),
        "manaPower": _r(110, 200),
        "duration": _r(180, 450),
        "stackSize": _r(25, 99),
        "value": _r(60, 200),
    },
    Tier.LEGENDARY: {
        "healingPower": _r(220, 400),
        "manaPower": _r(180, 350),
        "duration": _r(300, 600),
        "stackSize": _r(30, 99),
        "value": _r(120, 400),
    },
    Tier.CELESTIAL: {
        "healingPower": _r(350, 750),
        "manaPower": _r(300, 600),
        "duration": _r(450, 900),
        "stackSize": _r(50, 99),
        "value": _r(250, 800),
    },
}

# === Material ===
MATERIAL_RANGES: dict[Tier, dict[str, StatRange]] = {
    Tier.BRONZE: {
        "purity": _r(60, 75),
        "stackSize": _r(50, 200),
        "craftingBonus": _r(2, 8),
        "value": _r(2, 10),
    },
    Tier.SILVER: {
        "purity": _r(70, 82),
        "stackSize": _r(100, 300),
        "craftingBonus": _r(5, 12),
        "value": _r(5, 20),
    },
    Tier.GOLD: {
        "purity": _r(78, 88),
        "stackSize": _r(150, 500),
        "craftingBonus": _r(8, 18),
        "value": _r(10, 40),
    },
    Tier.PLATINUM: {
        "purity": _r(85, 93),
        "stackSize": _r(200, 750),
        "craftingBonus": _r(12, 25),
        "value": _r(20, 80),
    },
    Tier.LEGENDARY: {
        "purity": _r(90, 97),
        "stackSize": _r(300, 999),
        "craftingBonus": _r(20, 35),
        "value": _r(40, 150),
    },
    Tier.CELESTIAL: {
        "purity": _r(95, 99),
        "stackSize": _r(500, 999),
        "craftingBonus": _r(30, 50),
        "value": _r(80, 300),
    },
}

# Rune / Artifact: not tier-scaled.
GENERIC_RANGES: dict[str, StatRange] = {
    "durability": _r(50, 200),
    "weight": _r(0.5, 5.0),
    "value": _r(50, 500),
}

STAT_RANGES: dict[ItemType, dict[Tier, dict[str, StatRange]]] = {
    ItemType.WEAPON: WEAPON_RANGES,
    ItemType.ARMOR: ARMOR_RANGES,
    ItemType.ACCESSORY: ACCESSORY_RANGES,
    ItemType.CONSUMABLE: CONSUMABLE_RANGES,
    ItemType.MATERIAL: MATERIAL_RANGES,
}

# Output stat name -> range key, in prompt / baseline order.
STAT_SOURCES: dict[ItemType, dict[str, str]] = {
    ItemType.WEAPON: {
        name: name
        for name in (
            "damage",
            "attackSpeed",
            "criticalChance",
            "criticalDamage",
            "range",
            "accuracy",
            "durability",
            "weight",
            "value",
        )
    },
    ItemType.ARMOR: {
        "defense": "defense",
        "magicResistance": "magicResistance",
        "fireResistance": "elementalResistance",
        "iceResistance": "elementalResistance",
        "lightningResistance": "elementalResistance",
        "poisonResistance": "elementalResistance",
        "durability": "durability",
        "weight": "weight",
        "value": "value",
    },
    ItemType.ACCESSORY: {
        "health": "health",
        "mana": "mana",
        "stamina": "stamina",
        "strength": "attributes",
        "dexterity": "attributes",
        "intelligence": "attributes",
        "wisdom": "attributes",
        "constitution": "attributes",
        "luck": "luck",
        "durability": "durability",
        "weight": "weight",
        "value": "value",
    },
    ItemType.CONSUMABLE: {
        name: name
        for name in ("healingPower", "manaPower", "duration", "stackSize", "value")
    },
    ItemType.MATERIAL: {
        name: name for name in ("purity", "stackSize", "craftingBonus", "value")
    },
    ItemType.RUNE: {name: name for name in ("durability", "weight", "value")},
    ItemType.ARTIFACT: {name: name for name in ("durability", "weight", "value")},
}

# Stats kept to two decimals; every other stat is a whole number.
DECIMAL_STATS = frozenset({"range", "weight"})

# Weight widens in both directions with tier (better items may be lighter).
NON_SCALING_STATS = frozenset({"weight"})

RARITY_RANGES: dict[Tier, StatRange] = {
    Tier.BRONZE: _r(5, 25),
    Tier.SILVER: _r(20, 40),
    Tier.GOLD: _r(35, 60),
    Tier.PLATINUM: _r(55, 75),
    Tier.LEGENDARY: _r(70, 90),
    Tier.CELESTIAL: _r(85, 100),
}


def ranges_for(item_type: ItemType, tier: Tier) -> dict[str, StatRange]:
    """Named stat ranges for an item type at a tier."""
    item_type = ItemType(item_type)
    table = STAT_RANGES.get(item_type)
    if table is None:
        return dict(GENERIC_RANGES)
    return dict(table[Tier(tier)])


def rarity_range_for(tier: Tier) -> StatRange:
    return RARITY_RANGES[Tier(tier)]


def round_stat(name: str, value: float) -> StatValue:
    """Whole numbers (half away from zero) except range / weight (2 decimals)."""
    if name in DECIMAL_STATS:
        return round(float(value), 2)
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def random_in_range(stat_range: StatRange, rng: Optional[random.Random] = None) -> float:
    """Uniform draw within the range, to two decimals."""
    rng = rng or random
    return round(rng.uniform(stat_range.min, stat_range.max), 2)


def roll_baseline_stats(
    item_type: ItemType, tier: Tier, rng: Optional[random.Random] = None
) -> dict[str, StatValue]:
    """Flat random stat map for an item type, every value inside its tier range."""
    item_type = ItemType(item_type)
    ranges = ranges_for(item_type, tier)
    return {
        stat: round_stat(stat, random_in_range(ranges[source], rng))
        for stat, source in STAT_SOURCES[item_type].items()
    }


def roll_rarity(tier: Tier, rng: Optional[random.Random] = None) -> int:
    """Uniform integer inside the tier's rarity band, bounds inclusive."""
    rng = rng or random
    band = rarity_range_for(tier)
    return rng.randint(int(band.min), int(band.max))
