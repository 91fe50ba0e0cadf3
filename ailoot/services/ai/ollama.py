"""Ollama AI provider implementation."""

from typing import Any, Optional

import httpx
import ollama

from ailoot.core.logging import get_logger
from ailoot.core.loot.errors import ProviderError
from ailoot.services.ai.base import AIProvider

logger = get_logger(__name__)


class OllamaProvider(AIProvider):
    """AI provider using a local or remote Ollama server."""

    def __init__(
        self,
        model: str = "llama3.1",
        host: Optional[str] = None,
        timeout: float = 120.0,
    ) -> None:
        """Initialize the Ollama provider.

        Args:
            model: Default model name.
            host: Ollama server URL; the library default when None.
            timeout: Seconds to wait for any single call.
        """
        self._model_name = model
        self._host = host
        self._timeout = timeout
        self._client: ollama.Client | None = None

    @property
    def name(self) -> str:
        """Return the provider name."""
        return "ollama"

    @property
    def client(self) -> ollama.Client:
        """Get or create Ollama client."""
        if self._client is None:
            self._client = ollama.Client(host=self._host, timeout=self._timeout)
        return self._client

    def is_available(self) -> bool:
        """Ollama needs no credentials; reachability is checked by test_connection."""
        return True

    def generate(
        self,
        prompt: str,
        model: Optional[str] = None,
        response_schema: Optional[dict[str, Any]] = None,
    ) -> str:
        """Single non-streaming chat call, constrained to ``response_schema``."""
        model_name = model or self._model_name
        kwargs: dict[str, Any] = {
            "model": model_name,
            "messages": [{"role": "user", "content": prompt}],
            "stream": False,
        }
        if response_schema is not None:
            kwargs["format"] = response_schema

        try:
            response = self.client.chat(**kwargs)
        except (ollama.ResponseError, httpx.HTTPError, ConnectionError, TimeoutError) as e:
            logger.error("Ollama API error (model=%s): %s", model_name, e)
            raise ProviderError(f"Ollama API error: {e}") from e

        content = response["message"]["content"]
        if not isinstance(content, str):
            raise ProviderError("Ollama returned no message content")
        return content

    def list_models(self) -> list[str]:
        """Installed model names; [] when the server is unreachable."""
        try:
            response = self.client.list()
            return [m["model"] for m in response["models"]]
        except Exception as e:
            logger.warning("Failed to list Ollama models: %s", e)
            return []
