"""Content identity for duplicate detection."""

from __future__ import annotations

import hashlib
import json
from typing import Any

from .models import LootItem

# Never part of the identity: rarity is re-rolled per generation and
# id / createdAt / hash are storage metadata.
IDENTITY_FIELDS = (
    "name",
    "type",
    "subType",
    "tier",
    "description",
    "stats",
    "magicalProperties",
    "lore",
    "setName",
)


def canonical_payload(item: LootItem) -> dict[str, Any]:
    """Identity fields only, magical properties sorted by name."""
    wire = item.to_wire()
    payload = {key: wire.get(key) for key in IDENTITY_FIELDS}
    payload["magicalProperties"] = sorted(
        payload["magicalProperties"] or [],
        key=lambda prop: (prop["name"], prop["description"]),
    )
    return payload


def compute_identity(item: LootItem) -> str:
    """SHA-256 hex digest of the canonical JSON serialization."""
    content = json.dumps(
        canonical_payload(item),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(content.encode("utf-8")).hexdigest()
