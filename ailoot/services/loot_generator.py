"""Loot generation service: best-effort batch generation, sets, saving.

Each attempt is {resolve type/subtype -> build prompt -> call provider ->
reconcile}. A failed attempt is logged and recorded as an outcome; it never
aborts the batch. Storage errors are not caught here.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional

from ailoot.core.logging import get_logger
from ailoot.core.loot.enums import ItemType, Tier
from ailoot.core.loot.errors import GenerationAttemptFailed, ProviderError, RequestMalformed
from ailoot.core.loot.models import GenerationRequest, LootItem, StoredItem
from ailoot.core.loot.prompts import build_prompt, pick_item_type, pick_subtype
from ailoot.core.loot.reconcile import reconcile, response_schema
from ailoot.services.ai.base import AIProvider
from ailoot.services.loot_store import LootStore

logger = get_logger(__name__)

DEFAULT_SET_TYPES: tuple[ItemType, ...] = (
    ItemType.WEAPON,
    ItemType.ARMOR,
    ItemType.ACCESSORY,
)


@dataclass
class AttemptOutcome:
    """Result of one generation attempt: exactly one of item / error is set."""

    attempt: int
    item: Optional[LootItem] = None
    error: Optional[GenerationAttemptFailed] = None

    @property
    def ok(self) -> bool:
        return self.item is not None


@dataclass
class GenerationReport:
    """Batch summary: what was generated and how it landed in the store."""

    generated: list[LootItem] = field(default_factory=list)
    stored: list[StoredItem] = field(default_factory=list)
    saved: int = 0
    duplicates: int = 0
    failed: int = 0


class LootGenerator:
    """Generation orchestrator over a text-generation provider."""

    def __init__(
        self,
        ai_provider: AIProvider,
        default_model: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Args:
            ai_provider: Text-generation service.
            default_model: Model used when a request names none; None
                defers to the provider's own default.
            rng: Random source for subtype picks, baseline stats and rarity.
        """
        self.ai = ai_provider
        self.default_model = default_model
        self._rng = rng or random.Random()
        self._schema = response_schema()

    # === Generation ===

    def run_attempts(self, request: GenerationRequest) -> list[AttemptOutcome]:
        """Run exactly ``request.count`` sequential attempts, in order."""
        outcomes: list[AttemptOutcome] = []
        for index in range(1, request.count + 1):
            try:
                item = self._attempt(request)
            except GenerationAttemptFailed as e:
                logger.warning("Failed to generate item %d: %s", index, e)
                outcomes.append(AttemptOutcome(attempt=index, error=e))
                continue
            except Exception as e:
                logger.warning("Failed to generate item %d: %s", index, e)
                error = ProviderError(f"Unexpected provider failure: {e}")
                error.__cause__ = e
                outcomes.append(AttemptOutcome(attempt=index, error=error))
                continue
            outcomes.append(AttemptOutcome(attempt=index, item=item))

        failed = sum(1 for o in outcomes if not o.ok)
        logger.info(
            "Generated %d/%d %s item(s) (%d failed)",
            request.count - failed,
            request.count,
            request.tier.value,
            failed,
        )
        return outcomes

    def generate(self, request: GenerationRequest) -> list[LootItem]:
        """Valid items only, in attempt order. May be shorter than ``count``."""
        return [o.item for o in self.run_attempts(request) if o.item is not None]

    def generate_and_save(
        self, request: GenerationRequest, store: LootStore
    ) -> GenerationReport:
        """Generate, then insert each item unless its identity is already stored.

        Raises:
            StorageUnavailable: propagated from the store, never retried.
        """
        outcomes = self.run_attempts(request)
        report = GenerationReport(failed=sum(1 for o in outcomes if not o.ok))
        report.generated = [o.item for o in outcomes if o.item is not None]
        self._save_all(report, store)
        return report

    # === Sets ===

    def generate_set(
        self,
        set_name: str,
        tier: Tier,
        item_types: Optional[list[ItemType]] = None,
        model: Optional[str] = None,
    ) -> list[LootItem]:
        """One item per type, in the given order, all tagged with ``set_name``.

        Types whose single attempt failed are skipped, not padded.
        """
        if not set_name or not set_name.strip():
            raise RequestMalformed("Set name must not be empty")

        items: list[LootItem] = []
        types = item_types if item_types is not None else DEFAULT_SET_TYPES
        for item_type in types:
            request = GenerationRequest.build(
                tier=tier,
                count=1,
                item_type=item_type,
                set_name=set_name,
                model=model,
            )
            items.extend(self.generate(request))
        return items

    def generate_set_and_save(
        self,
        set_name: str,
        tier: Tier,
        store: LootStore,
        item_types: Optional[list[ItemType]] = None,
        model: Optional[str] = None,
    ) -> GenerationReport:
        types = list(item_types if item_types is not None else DEFAULT_SET_TYPES)
        items = self.generate_set(set_name, tier, types, model=model)
        report = GenerationReport(generated=items, failed=len(types) - len(items))
        self._save_all(report, store)
        return report

    # === Provider passthrough ===

    def test_connection(self, model: Optional[str] = None) -> bool:
        return self.ai.test_connection(model or self.default_model)

    def available_models(self) -> list[str]:
        return self.ai.list_models()

    # === Internal ===

    def _attempt(self, request: GenerationRequest) -> LootItem:
        item_type = request.item_type or pick_item_type(self._rng)
        sub_type = request.sub_type or pick_subtype(item_type, self._rng)

        prompt = build_prompt(request, item_type, sub_type)
        raw = self.ai.generate(
            prompt,
            model=request.model or self.default_model,
            response_schema=self._schema,
        )
        return reconcile(raw, request, item_type, sub_type, self._rng)

    def _save_all(self, report: GenerationReport, store: LootStore) -> None:
        for item in report.generated:
            stored, created = store.save_if_absent(item)
            report.stored.append(stored)
            if created:
                report.saved += 1
            else:
                report.duplicates += 1
        logger.info(
            "Saved %d new item(s), %d duplicate(s)", report.saved, report.duplicates
        )
