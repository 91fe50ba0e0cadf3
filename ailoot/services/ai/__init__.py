"""AI provider module."""

from ailoot.services.ai.base import AIProvider
from ailoot.services.ai.factory import get_ai_provider
from ailoot.services.ai.gemini import GeminiProvider
from ailoot.services.ai.mock import MockProvider
from ailoot.services.ai.ollama import OllamaProvider

__all__ = [
    "AIProvider",
    "GeminiProvider",
    "MockProvider",
    "OllamaProvider",
    "get_ai_provider",
]
