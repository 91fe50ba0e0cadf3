"""Model response reconciliation.

Pipeline: raw text -> RawLootItem (permissive) -> merged flat stats ->
typed stat block -> validated LootItem. Each stage fails with its own
exception; nothing from the model is trusted without re-validation.
"""

from __future__ import annotations

import json
import logging
import math
import random
import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, StrictFloat, ValidationError
from pydantic.alias_generators import to_camel

from .enums import ItemType, Tier
from .errors import ItemValidationError, ResponseParseError
from .models import STAT_MODELS, GenerationRequest, LootItem, MagicalProperty
from .stat_ranges import StatValue, roll_baseline_stats, roll_rarity, round_stat

logger = logging.getLogger(__name__)

# Flat key -> ElementalResistance field
ELEMENTAL_KEYS: dict[str, str] = {
    "fire": "fireResistance",
    "ice": "iceResistance",
    "lightning": "lightningResistance",
    "poison": "poisonResistance",
    "dark": "darkResistance",
    "light": "lightResistance",
}


class RawLootItem(BaseModel):
    """Shape the text-generation service is asked to produce.

    type / subType / tier are plain strings and stats is
    any flat numeric map. The reconciler decides what survives.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    type: str
    sub_type: str
    tier: str
    description: str
    stats: dict[str, StrictFloat]
    magical_properties: Optional[list[MagicalProperty]] = None
    lore: Optional[str] = None
    set_name: Optional[str] = None
    rarity: StrictFloat


def response_schema() -> dict[str, Any]:
    """JSON schema handed to the text-generation service."""
    return RawLootItem.model_json_schema(by_alias=True)


# === Parsing ===


def _try_parse_json(text: str) -> dict | None:
    try:
        result = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return None
    return result if isinstance(result, dict) else None


def _extract_json_block(text: str) -> str | None:
    """```json ... ``` block."""
    match = re.search(r"```(?:json)?\s*(.*?)\s*```", text, re.DOTALL)
    if match:
        return match.group(1)
    return None


def parse_response(raw: str) -> RawLootItem:
    """Parse model output into the intermediate shape.

    1. whole text as JSON
    2. fenced ```json block
    3. otherwise ResponseParseError
    """
    if not isinstance(raw, str):
        raise ResponseParseError(f"Expected text response, got {type(raw).__name__}")

    parsed = _try_parse_json(raw.strip())
    if parsed is None:
        block = _extract_json_block(raw)
        if block is not None:
            parsed = _try_parse_json(block)
    if parsed is None:
        raise ResponseParseError("Response is not a JSON object")

    try:
        return RawLootItem.model_validate(parsed)
    except ValidationError as e:
        raise ResponseParseError(f"Response does not match item shape: {e}") from e


# === Stats ===


def merge_stats(
    baseline: dict[str, StatValue], supplied: dict[str, float]
) -> dict[str, StatValue]:
    """Per-field merge: model value when present and finite, else baseline.

    Values are rounded with :func:`round_stat` either way.
    """
    merged: dict[str, StatValue] = dict(baseline)
    for key, value in supplied.items():
        if not math.isfinite(value):
            continue
        merged[key] = round_stat(key, value)
    return merged


def _stat_keys(item_type: ItemType) -> list[str]:
    model = STAT_MODELS[item_type]
    return [field.alias or name for name, field in model.model_fields.items()]


def shape_stats(item_type: ItemType, flat: dict[str, StatValue]) -> dict[str, Any]:
    """Reshape a flat stat map into the block layout for ``item_type``.

    Keys the block does not define are dropped. Armor elemental resistances
    are nested under ``elementalResistance``.
    """
    item_type = ItemType(item_type)
    shaped: dict[str, Any] = {}
    for key in _stat_keys(item_type):
        if item_type is ItemType.ARMOR and key == "elementalResistance":
            nested = {
                element: flat[flat_key]
                for element, flat_key in ELEMENTAL_KEYS.items()
                if flat.get(flat_key) is not None
            }
            if nested:
                shaped[key] = nested
            continue
        if flat.get(key) is not None:
            shaped[key] = flat[key]
    return shaped


# === Reconcile ===


def reconcile(
    raw_text: str,
    request: GenerationRequest,
    item_type: ItemType,
    sub_type: str,
    rng: Optional[random.Random] = None,
) -> LootItem:
    """Turn one model response into a validated LootItem.

    The request (plus the type / subtype resolved for this attempt) is
    authoritative for type, subType and tier. Rarity from the model is
    discarded and re-rolled inside the tier band.

    Raises:
        ResponseParseError: output is not parseable as RawLootItem.
        ItemValidationError: assembled item violates the LootItem shape.
    """
    raw = parse_response(raw_text)
    tier = Tier(request.tier)
    item_type = ItemType(item_type)

    if raw.type != item_type.value or raw.tier != tier.value:
        logger.debug(
            "Overriding model type/tier %s/%s with %s/%s",
            raw.type,
            raw.tier,
            item_type.value,
            tier.value,
        )

    baseline = roll_baseline_stats(item_type, tier, rng)
    merged = merge_stats(baseline, raw.stats)

    data = {
        "name": raw.name,
        "type": item_type,
        "subType": sub_type,
        "tier": tier,
        "description": raw.description,
        "stats": shape_stats(item_type, merged),
        "magicalProperties": raw.magical_properties or [],
        "lore": raw.lore,
        "setName": request.set_name or raw.set_name,
        "rarity": roll_rarity(tier, rng),
    }

    try:
        return LootItem.model_validate(data)
    except ValidationError as e:
        raise ItemValidationError(f"Reconciled item failed validation: {e}") from e
