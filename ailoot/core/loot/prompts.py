"""Generation prompt assembly. Deterministic apart from random subtype picks."""

from __future__ import annotations

import random
from typing import Optional

from .enums import TIER_MULTIPLIERS, ItemType, Tier, subtypes_for
from .models import GenerationRequest
from .stat_ranges import STAT_SOURCES, ranges_for

TIER_GUIDELINES = """TIER GUIDELINES:
- Bronze: Common items, basic materials, simple enchantments
- Silver: Uncommon items, minor magical properties, improved stats
- Gold: Rare items, moderate magical abilities, unique appearances
- Platinum: Very rare items, powerful enchantments, legendary craftsmanship
- Legendary: Extremely rare items, major magical powers, famous artifacts
- Celestial: Mythical items, divine powers, reality-altering abilities"""

STAT_LABELS: dict[str, str] = {
    "damage": "Base damage",
    "attackSpeed": "Attack speed modifier",
    "criticalChance": "Critical hit chance",
    "criticalDamage": "Critical damage multiplier",
    "range": "Weapon range in meters",
    "accuracy": "Hit chance modifier",
    "defense": "Armor rating",
    "magicResistance": "Magic damage reduction",
    "fireResistance": "Fire damage reduction",
    "iceResistance": "Ice damage reduction",
    "lightningResistance": "Lightning damage reduction",
    "poisonResistance": "Poison damage reduction",
    "health": "Health bonus",
    "mana": "Mana bonus",
    "stamina": "Stamina bonus",
    "strength": "Strength bonus",
    "dexterity": "Dexterity bonus",
    "intelligence": "Intelligence bonus",
    "wisdom": "Wisdom bonus",
    "constitution": "Constitution bonus",
    "luck": "Luck bonus",
    "healingPower": "Health restored",
    "manaPower": "Mana restored",
    "duration": "Effect duration in seconds",
    "stackSize": "Maximum stack size",
    "purity": "Material purity percentage",
    "craftingBonus": "Bonus to crafting success",
    "durability": "Item durability",
    "weight": "Weight in kg",
    "value": "Gold value",
}

# Modifiers that may be negative are written "a to b".
SIGNED_STATS = frozenset({"attackSpeed", "accuracy"})

SHAPE_INSTRUCTIONS = """IMPORTANT: The stats field should be a flat object where keys are stat names and values are numbers. For example:
- Weapons: { "damage": 25, "attackSpeed": 10, "criticalChance": 8, "durability": 150, "weight": 2.5, "value": 800 }
- Armor: { "defense": 15, "magicResistance": 12, "fireResistance": 8, "durability": 200, "weight": 8.0, "value": 600 }"""


def pick_item_type(rng: Optional[random.Random] = None) -> ItemType:
    rng = rng or random
    return rng.choice(list(ItemType))


def pick_subtype(item_type: ItemType, rng: Optional[random.Random] = None) -> str:
    """Uniform pick from the item type's subtype pool."""
    rng = rng or random
    return rng.choice(subtypes_for(item_type))


def _format_bound(value: float) -> str:
    return f"{value:g}"


def format_stat_requirements(item_type: ItemType, tier: Tier) -> str:
    """Per-stat inclusive bounds for the item type at this tier."""
    item_type = ItemType(item_type)
    if item_type in (ItemType.RUNE, ItemType.ARTIFACT):
        return (
            "Generate appropriate stats for this item type with durability, "
            "weight, and value fields."
        )

    ranges = ranges_for(item_type, tier)
    lines = [f"{item_type.value.upper()} STATS REQUIRED (as flat numeric values):"]
    for stat, source in STAT_SOURCES[item_type].items():
        r = ranges[source]
        sep = " to " if stat in SIGNED_STATS else "-"
        lines.append(
            f"- {stat}: {STAT_LABELS[stat]} "
            f"({_format_bound(r.min)}{sep}{_format_bound(r.max)})"
        )
    return "\n".join(lines)


def build_prompt(request: GenerationRequest, item_type: ItemType, sub_type: str) -> str:
    """Natural-language generation request for one item.

    ``item_type`` / ``sub_type`` are the values resolved for this attempt;
    the request supplies tier and set membership.
    """
    tier = Tier(request.tier)
    item_type = ItemType(item_type)
    multiplier = TIER_MULTIPLIERS[tier]

    header = (
        "You are a master loot generator for a fantasy RPG game. "
        f"Generate a {tier.value} tier {sub_type} ({item_type.value})"
    )
    if request.set_name:
        header += f' that belongs to the "{request.set_name}" set'
    header += "."

    sections = [
        header,
        TIER_GUIDELINES,
        f"The item should be appropriate for {tier.value} tier "
        f"(power level {multiplier:g}x).",
        "ITEM TYPE SPECIFIC REQUIREMENTS:",
        format_stat_requirements(item_type, tier),
    ]

    if request.set_name:
        sections.append(
            f'Since this is part of the "{request.set_name}" set, ensure it '
            "thematically fits with other items in that collection."
        )

    sections.append(
        "Create a detailed item with:\n"
        "- A memorable and fitting name\n"
        "- Rich description that captures its appearance and feel\n"
        f"- Appropriate stats for a {sub_type} of {tier.value} tier "
        "(as a flat object with numeric values)\n"
        "- Compelling lore that tells its story or origin\n"
        "- Magical properties should be structured with name, description, "
        "and optional magnitude"
    )
    sections.append(SHAPE_INSTRUCTIONS)
    sections.append(
        "Be creative and imaginative. Make each item unique and exciting to discover!"
    )
    return "\n\n".join(sections)
