"""Factory for creating AI provider instances."""

from typing import Optional

from ailoot.config import settings
from ailoot.core.logging import get_logger
from ailoot.services.ai.base import AIProvider
from ailoot.services.ai.gemini import GeminiProvider
from ailoot.services.ai.mock import MockProvider
from ailoot.services.ai.ollama import OllamaProvider

logger = get_logger(__name__)


def get_ai_provider(provider_name: Optional[str] = None) -> AIProvider:
    """Get an AI provider instance.

    Args:
        provider_name: Optional provider name. If not specified,
                      uses AI_PROVIDER from config.

    Returns:
        An AIProvider instance.
    """
    name = provider_name or settings.AI_PROVIDER

    if name == "mock":
        logger.debug("Using MockProvider")
        return MockProvider()

    if name == "ollama":
        model = settings.AI_MODEL or "llama3.1"
        logger.debug("Using OllamaProvider with model: %s", model)
        return OllamaProvider(
            model=model,
            host=settings.AI_BASE_URL,
            timeout=settings.AI_TIMEOUT,
        )

    if name == "gemini":
        if settings.AI_API_KEY:
            model = settings.AI_MODEL or "gemini-2.0-flash"
            logger.debug("Using GeminiProvider with model: %s", model)
            return GeminiProvider(
                api_key=settings.AI_API_KEY, model=model, timeout=settings.AI_TIMEOUT
            )
        else:
            logger.warning("AI_API_KEY not set, falling back to MockProvider")
            return MockProvider()

    # Fallback to MockProvider for unknown providers
    logger.warning("Unknown provider '%s', falling back to MockProvider", name)
    return MockProvider()
