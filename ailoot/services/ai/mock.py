"""Mock AI provider for testing and fallback."""

import json
from collections import deque
from typing import Any, Iterable, Optional, Union

from ailoot.core.loot.errors import ProviderError
from ailoot.services.ai.base import AIProvider

MOCK_LOOT_RESPONSE = json.dumps(
    {
        "name": "Mock Blade of Testing",
        "type": "Weapon",
        "subType": "Sword",
        "tier": "Bronze",
        "description": "A plain blade that exists only to be generated.",
        "stats": {"damage": 10, "durability": 80, "weight": 2.5, "value": 90},
        "magicalProperties": [
            {"name": "Placeholder", "description": "Does nothing, reliably."}
        ],
        "lore": "Forged in a fixture.",
        "rarity": 10,
    }
)

MockResponse = Union[str, Exception]


class MockProvider(AIProvider):
    """Mock AI provider that returns scripted or static text.

    Used for testing and as a fallback when no provider is configured.
    Scripted responses are consumed in order; an Exception entry is raised
    instead of returned. Once the script runs out, MOCK_LOOT_RESPONSE is
    returned.
    """

    def __init__(
        self,
        responses: Optional[Iterable[MockResponse]] = None,
        models: Optional[list[str]] = None,
        available: bool = True,
    ) -> None:
        self._responses: deque[MockResponse] = deque(responses or [])
        self._models = list(models) if models is not None else ["mock"]
        self._available = available
        self.prompts: list[str] = []
        self.calls: list[dict[str, Any]] = []

    @property
    def name(self) -> str:
        """Return the provider name."""
        return "mock"

    def is_available(self) -> bool:
        """Check if the provider is available."""
        return self._available

    def generate(
        self,
        prompt: str,
        model: Optional[str] = None,
        response_schema: Optional[dict[str, Any]] = None,
    ) -> str:
        """Return the next scripted response (or raise it)."""
        if not self._available:
            raise ProviderError("MockProvider is unavailable")

        self.prompts.append(prompt)
        self.calls.append({"model": model, "response_schema": response_schema})

        if not self._responses:
            return MOCK_LOOT_RESPONSE
        response = self._responses.popleft()
        if isinstance(response, Exception):
            raise response
        return response

    def queue(self, *responses: MockResponse) -> None:
        """Append scripted responses."""
        self._responses.extend(responses)

    def list_models(self) -> list[str]:
        return list(self._models) if self._available else []
