"""Gemini AI provider implementation."""

from typing import Any, Optional

import google.generativeai as genai

from ailoot.core.logging import get_logger
from ailoot.core.loot.errors import ProviderError
from ailoot.services.ai.base import AIProvider

logger = get_logger(__name__)


class GeminiProvider(AIProvider):
    """AI provider using Google Gemini API."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        timeout: float = 120.0,
    ) -> None:
        """Initialize the Gemini provider.

        Args:
            api_key: Google API key for Gemini.
            model: Default model name.
            timeout: Seconds to wait for any single call.
        """
        self._api_key = api_key
        self._model_name = model
        self._timeout = timeout

        if self._api_key:
            genai.configure(api_key=self._api_key)
            logger.info("GeminiProvider initialized with model: %s", self._model_name)

    @property
    def name(self) -> str:
        """Return the provider name."""
        return "gemini"

    def is_available(self) -> bool:
        """Check if the provider is available."""
        return bool(self._api_key)

    def generate(
        self,
        prompt: str,
        model: Optional[str] = None,
        response_schema: Optional[dict[str, Any]] = None,
    ) -> str:
        """Generate text using Gemini API.

        Gemini accepts only a subset of JSON schema, so ``response_schema``
        switches the response to JSON mode and the prompt carries the shape.

        Raises:
            ProviderError: If API call fails or provider is not available.
        """
        if not self.is_available():
            raise ProviderError("GeminiProvider is not available. Check API key.")

        generation_config = None
        if response_schema is not None:
            generation_config = genai.types.GenerationConfig(
                response_mime_type="application/json",
            )

        try:
            gemini_model = genai.GenerativeModel(model or self._model_name)
            response = gemini_model.generate_content(
                prompt,
                generation_config=generation_config,
                request_options={"timeout": self._timeout},
            )
            result: str = response.text.strip()
            return result
        except Exception as e:
            logger.error("Gemini API error: %s", e)
            raise ProviderError(f"Gemini API error: {e}") from e

    def list_models(self) -> list[str]:
        """Models supporting generateContent; [] on any failure."""
        if not self.is_available():
            return []
        try:
            return [
                m.name
                for m in genai.list_models()
                if "generateContent" in m.supported_generation_methods
            ]
        except Exception as e:
            logger.warning("Failed to list Gemini models: %s", e)
            return []
