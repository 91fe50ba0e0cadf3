"""Loot generation core: tables, prompts, reconciliation, identity."""

from .enums import (
    AccessorySubType,
    ArmorSubType,
    ConsumableSubType,
    ItemType,
    MaterialSubType,
    Tier,
    WeaponSubType,
)
from .errors import (
    GenerationAttemptFailed,
    ItemValidationError,
    LootError,
    ProviderError,
    RequestMalformed,
    ResponseParseError,
    StorageUnavailable,
)
from .identity import compute_identity
from .models import GenerationRequest, LootItem, MagicalProperty, StoredItem
from .prompts import build_prompt
from .reconcile import reconcile, response_schema
from .stat_ranges import ranges_for, rarity_range_for

__all__ = [
    "AccessorySubType",
    "ArmorSubType",
    "ConsumableSubType",
    "ItemType",
    "MaterialSubType",
    "Tier",
    "WeaponSubType",
    "GenerationAttemptFailed",
    "ItemValidationError",
    "LootError",
    "ProviderError",
    "RequestMalformed",
    "ResponseParseError",
    "StorageUnavailable",
    "compute_identity",
    "GenerationRequest",
    "LootItem",
    "MagicalProperty",
    "StoredItem",
    "build_prompt",
    "reconcile",
    "response_schema",
    "ranges_for",
    "rarity_range_for",
]
