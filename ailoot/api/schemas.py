"""API request/response schemas."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from ailoot.core.loot.enums import ItemType, Tier

# === Request Schemas ===


class GenerateRequest(BaseModel):
    """Loot generation request"""

    tier: Tier = Field(default=Tier.BRONZE, description="Loot tier")
    count: int = Field(default=1, ge=1, le=50, description="Number of items to generate")
    item_type: Optional[ItemType] = Field(default=None, description="Item type")
    sub_type: Optional[str] = Field(default=None, description="Subtype, e.g. Sword")
    set_name: Optional[str] = Field(default=None, description="Set to generate for")
    model: Optional[str] = Field(default=None, description="Model identifier")


class SetRequest(BaseModel):
    """Loot set generation request"""

    set_name: str = Field(..., min_length=1, description="Set name")
    tier: Tier = Field(default=Tier.BRONZE, description="Loot tier")
    item_types: Optional[list[ItemType]] = Field(
        default=None, description="Item types in order; Weapon/Armor/Accessory if omitted"
    )
    model: Optional[str] = Field(default=None, description="Model identifier")


# === Response Schemas ===


class GenerateResponse(BaseModel):
    """Batch generation result"""

    generated: int
    saved: int
    duplicates: int
    failed: int
    items: list[dict[str, Any]] = []


class ItemListResponse(BaseModel):
    """Stored item listing"""

    count: int
    items: list[dict[str, Any]] = []


class StatsResponse(BaseModel):
    """Store statistics"""

    total_items: int
    items_by_tier: dict[str, int]


class ModelsResponse(BaseModel):
    """Available model identifiers"""

    provider: str
    models: list[str] = []
