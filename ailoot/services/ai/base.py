"""Abstract base class for AI providers."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from ailoot.core.logging import get_logger

logger = get_logger(__name__)

CONNECTION_TEST_PROMPT = "Test connection"


class AIProvider(ABC):
    """Abstract base class for AI providers.

    All AI providers must implement this interface to ensure
    consistent behavior across different LLM APIs.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the provider name."""
        ...

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the provider is available and configured."""
        ...

    @abstractmethod
    def generate(
        self,
        prompt: str,
        model: Optional[str] = None,
        response_schema: Optional[dict[str, Any]] = None,
    ) -> str:
        """Generate text based on the prompt.

        Args:
            prompt: The user prompt to send to the AI model.
            model: Model identifier; the provider default when omitted.
            response_schema: JSON schema the response should follow.

        Returns:
            Generated text response.

        Raises:
            ProviderError: If the call fails or times out.
        """
        ...

    @abstractmethod
    def list_models(self) -> list[str]:
        """Return available model identifiers, or [] on any failure."""
        ...

    def test_connection(self, model: Optional[str] = None) -> bool:
        """True iff a trivial prompt gets a response without error."""
        try:
            self.generate(CONNECTION_TEST_PROMPT, model=model)
            return True
        except Exception as e:
            logger.info("Connection test failed for %s: %s", self.name, e)
            return False
