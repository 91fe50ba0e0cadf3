"""Generation prompt assembly."""

import random

from ailoot.core.loot.enums import ItemType, Tier, subtypes_for
from ailoot.core.loot.models import GenerationRequest
from ailoot.core.loot.prompts import (
    build_prompt,
    format_stat_requirements,
    pick_item_type,
    pick_subtype,
)


class TestStatRequirements:
    """Per-stat bounds embedded in the prompt."""

    def test_gold_weapon_lists_damage_bounds(self):
        text = format_stat_requirements(ItemType.WEAPON, Tier.GOLD)
        assert text.startswith("WEAPON STATS REQUIRED")
        assert "- damage: Base damage (18-35)" in text

    def test_signed_stats_use_to(self):
        text = format_stat_requirements(ItemType.WEAPON, Tier.BRONZE)
        assert "attackSpeed: Attack speed modifier (-10 to 10)" in text
        assert "accuracy: Hit chance modifier (-5 to 5)" in text

    def test_decimal_bounds(self):
        text = format_stat_requirements(ItemType.WEAPON, Tier.SILVER)
        assert "weight: Weight in kg (0.8-4.5)" in text

    def test_armor_lists_each_elemental_resistance(self):
        text = format_stat_requirements(ItemType.ARMOR, Tier.BRONZE)
        for stat in ("fireResistance", "iceResistance", "lightningResistance", "poisonResistance"):
            assert f"- {stat}:" in text
        assert "(1-5)" in text

    def test_accessory_attributes_share_a_range(self):
        text = format_stat_requirements(ItemType.ACCESSORY, Tier.CELESTIAL)
        assert "- strength: Strength bonus (8-20)" in text
        assert "- wisdom: Wisdom bonus (8-20)" in text

    def test_rune_gets_generic_text(self):
        text = format_stat_requirements(ItemType.RUNE, Tier.LEGENDARY)
        assert "durability, weight, and value" in text
        assert "REQUIRED" not in text


class TestBuildPrompt:
    """Full prompt text."""

    def test_header_names_tier_subtype_and_type(self):
        request = GenerationRequest.build(tier=Tier.GOLD, item_type=ItemType.WEAPON)
        prompt = build_prompt(request, ItemType.WEAPON, "Sword")
        assert "Generate a Gold tier Sword (Weapon)." in prompt
        assert "power level 2x" in prompt
        assert "TIER GUIDELINES" in prompt
        assert "(18-35)" in prompt

    def test_set_name_adds_theme(self):
        request = GenerationRequest.build(
            tier=Tier.SILVER, item_type=ItemType.ARMOR, set_name="Frostward"
        )
        prompt = build_prompt(request, ItemType.ARMOR, "Helmet")
        assert 'Silver tier Helmet (Armor) that belongs to the "Frostward" set.' in prompt
        assert 'part of the "Frostward" set' in prompt

    def test_no_set_text_without_set(self):
        request = GenerationRequest.build(tier=Tier.BRONZE)
        prompt = build_prompt(request, ItemType.MATERIAL, "Ore")
        assert "belongs to" not in prompt
        assert "thematically" not in prompt

    def test_fractional_power_level(self):
        request = GenerationRequest.build(tier=Tier.SILVER)
        assert "power level 1.5x" in build_prompt(request, ItemType.WEAPON, "Axe")

    def test_prompt_is_deterministic(self):
        request = GenerationRequest.build(tier=Tier.PLATINUM, sub_type="Amulet")
        first = build_prompt(request, ItemType.ACCESSORY, "Amulet")
        assert first == build_prompt(request, ItemType.ACCESSORY, "Amulet")


class TestRandomPicks:
    """Random type and subtype selection."""

    def test_subtype_pick_stays_in_domain(self):
        rng = random.Random(5)
        for item_type in ItemType:
            pool = subtypes_for(item_type)
            for _ in range(20):
                assert pick_subtype(item_type, rng) in pool

    def test_item_type_pick(self):
        rng = random.Random(5)
        picks = {pick_item_type(rng) for _ in range(200)}
        assert picks == set(ItemType)
