"""Tests for AI provider module."""

from unittest.mock import MagicMock, patch

import httpx
import ollama
import pytest

from ailoot.core.loot.errors import ProviderError
from ailoot.services.ai import (
    AIProvider,
    GeminiProvider,
    MockProvider,
    OllamaProvider,
    get_ai_provider,
)
from ailoot.services.ai.mock import MOCK_LOOT_RESPONSE


class TestMockProvider:
    """Tests for MockProvider class."""

    def test_mock_provider_name(self):
        """Test that MockProvider name is 'mock'."""
        provider = MockProvider()
        assert provider.name == "mock"

    def test_mock_provider_is_available(self):
        """Test that MockProvider is available by default."""
        provider = MockProvider()
        assert provider.is_available() is True

    def test_mock_provider_generate(self):
        """Test that MockProvider falls back to a valid loot response."""
        provider = MockProvider()
        result = provider.generate("test prompt")

        assert result == MOCK_LOOT_RESPONSE
        assert provider.prompts == ["test prompt"]

    def test_mock_provider_scripted_responses(self):
        """Scripted responses are consumed in order; exceptions are raised."""
        provider = MockProvider(responses=["one", ProviderError("two")])

        assert provider.generate("a") == "one"
        with pytest.raises(ProviderError):
            provider.generate("b")
        assert provider.generate("c") == MOCK_LOOT_RESPONSE

    def test_mock_provider_unavailable(self):
        provider = MockProvider(available=False)
        with pytest.raises(ProviderError):
            provider.generate("x")
        assert provider.list_models() == []
        assert provider.test_connection() is False


class TestOllamaProvider:
    """Tests for OllamaProvider class (client patched)."""

    def test_ollama_provider_name(self):
        provider = OllamaProvider()
        assert provider.name == "ollama"
        assert provider.is_available() is True

    @patch("ailoot.services.ai.ollama.ollama.Client")
    def test_client_built_with_host_and_timeout(self, mock_client_cls: MagicMock):
        provider = OllamaProvider(host="http://gpu-box:11434", timeout=30.0)
        _ = provider.client
        mock_client_cls.assert_called_once_with(host="http://gpu-box:11434", timeout=30.0)

    @patch("ailoot.services.ai.ollama.ollama.Client")
    def test_generate_sends_schema_as_format(self, mock_client_cls: MagicMock):
        client = mock_client_cls.return_value
        client.chat.return_value = {"message": {"content": '{"name": "x"}'}}
        schema = {"type": "object"}

        provider = OllamaProvider(model="llama3.1")
        result = provider.generate("make loot", model="mistral", response_schema=schema)

        assert result == '{"name": "x"}'
        kwargs = client.chat.call_args.kwargs
        assert kwargs["model"] == "mistral"
        assert kwargs["format"] == schema
        assert kwargs["stream"] is False
        assert kwargs["messages"] == [{"role": "user", "content": "make loot"}]

    @patch("ailoot.services.ai.ollama.ollama.Client")
    def test_generate_uses_default_model(self, mock_client_cls: MagicMock):
        client = mock_client_cls.return_value
        client.chat.return_value = {"message": {"content": "ok"}}

        OllamaProvider(model="llama3.1").generate("hi")

        assert client.chat.call_args.kwargs["model"] == "llama3.1"
        assert "format" not in client.chat.call_args.kwargs

    @pytest.mark.parametrize(
        "error",
        [
            ollama.ResponseError("model not found", 404),
            httpx.ConnectError("connection refused"),
            httpx.ReadTimeout("timed out"),
        ],
    )
    @patch("ailoot.services.ai.ollama.ollama.Client")
    def test_generate_wraps_errors(self, mock_client_cls: MagicMock, error: Exception):
        mock_client_cls.return_value.chat.side_effect = error

        with pytest.raises(ProviderError):
            OllamaProvider().generate("hi")

    @patch("ailoot.services.ai.ollama.ollama.Client")
    def test_list_models(self, mock_client_cls: MagicMock):
        mock_client_cls.return_value.list.return_value = {
            "models": [{"model": "llama3.1:latest"}, {"model": "mistral:7b"}]
        }
        assert OllamaProvider().list_models() == ["llama3.1:latest", "mistral:7b"]

    @patch("ailoot.services.ai.ollama.ollama.Client")
    def test_list_models_unreachable(self, mock_client_cls: MagicMock):
        mock_client_cls.return_value.list.side_effect = httpx.ConnectError("refused")
        assert OllamaProvider().list_models() == []

    @patch("ailoot.services.ai.ollama.ollama.Client")
    def test_connection_false_when_unreachable(self, mock_client_cls: MagicMock):
        mock_client_cls.return_value.chat.side_effect = httpx.ConnectError("refused")
        assert OllamaProvider().test_connection() is False


class TestGeminiProvider:
    """Tests for GeminiProvider class."""

    @patch("ailoot.services.ai.gemini.genai")
    def test_gemini_provider_name(self, mock_genai: MagicMock):
        """Test that GeminiProvider name is 'gemini'."""
        provider = GeminiProvider(api_key="test_key")
        assert provider.name == "gemini"

    @patch("ailoot.services.ai.gemini.genai")
    def test_gemini_provider_not_available_without_key(self, mock_genai: MagicMock):
        """Test that GeminiProvider is not available without API key."""
        provider = GeminiProvider(api_key="")
        assert provider.is_available() is False
        with pytest.raises(ProviderError):
            provider.generate("hi")

    @patch("ailoot.services.ai.gemini.genai")
    def test_gemini_provider_available_with_key(self, mock_genai: MagicMock):
        """Test that GeminiProvider is available with API key."""
        provider = GeminiProvider(api_key="test_key")
        assert provider.is_available() is True
        mock_genai.configure.assert_called_once_with(api_key="test_key")

    @patch("ailoot.services.ai.gemini.genai")
    def test_generate_json_mode_and_timeout(self, mock_genai: MagicMock):
        model = mock_genai.GenerativeModel.return_value
        model.generate_content.return_value.text = '  {"name": "x"}  '

        provider = GeminiProvider(api_key="k", timeout=45.0)
        result = provider.generate("loot", model="gemini-pro", response_schema={"type": "object"})

        assert result == '{"name": "x"}'
        mock_genai.GenerativeModel.assert_called_once_with("gemini-pro")
        mock_genai.types.GenerationConfig.assert_called_once_with(
            response_mime_type="application/json"
        )
        assert model.generate_content.call_args.kwargs["request_options"] == {"timeout": 45.0}

    @patch("ailoot.services.ai.gemini.genai")
    def test_generate_wraps_errors(self, mock_genai: MagicMock):
        mock_genai.GenerativeModel.return_value.generate_content.side_effect = RuntimeError("quota")
        with pytest.raises(ProviderError):
            GeminiProvider(api_key="k").generate("loot")

    @patch("ailoot.services.ai.gemini.genai")
    def test_list_models_filters_generate_content(self, mock_genai: MagicMock):
        chat = MagicMock(supported_generation_methods=["generateContent"])
        chat.name = "models/gemini-2.0-flash"
        embed = MagicMock(supported_generation_methods=["embedContent"])
        embed.name = "models/embedding-001"
        mock_genai.list_models.return_value = [chat, embed]

        assert GeminiProvider(api_key="k").list_models() == ["models/gemini-2.0-flash"]

    @patch("ailoot.services.ai.gemini.genai")
    def test_list_models_failure(self, mock_genai: MagicMock):
        mock_genai.list_models.side_effect = RuntimeError("network")
        assert GeminiProvider(api_key="k").list_models() == []


class TestAIProviderFactory:
    """Tests for AI provider factory."""

    @patch("ailoot.services.ai.factory.settings")
    def test_factory_returns_mock_when_configured(self, mock_settings: MagicMock):
        """Test that factory returns MockProvider for 'mock'."""
        mock_settings.AI_PROVIDER = "mock"

        provider = get_ai_provider()

        assert isinstance(provider, AIProvider)
        assert isinstance(provider, MockProvider)
        assert provider.name == "mock"

    @patch("ailoot.services.ai.factory.settings")
    def test_factory_returns_ollama_by_default(self, mock_settings: MagicMock):
        mock_settings.AI_PROVIDER = "ollama"
        mock_settings.AI_MODEL = None
        mock_settings.AI_BASE_URL = "http://localhost:11434"
        mock_settings.AI_TIMEOUT = 120.0

        provider = get_ai_provider()

        assert isinstance(provider, OllamaProvider)
        assert provider._model_name == "llama3.1"
        assert provider._timeout == 120.0

    @patch("ailoot.services.ai.factory.settings")
    @patch("ailoot.services.ai.gemini.genai")
    def test_factory_returns_gemini_with_config(
        self, mock_genai: MagicMock, mock_settings: MagicMock
    ):
        """Test that factory returns GeminiProvider when configured."""
        mock_settings.AI_PROVIDER = "gemini"
        mock_settings.AI_API_KEY = "test_key"
        mock_settings.AI_MODEL = "gemini-2.0-flash"
        mock_settings.AI_TIMEOUT = 120.0

        provider = get_ai_provider()

        assert isinstance(provider, GeminiProvider)
        assert provider.name == "gemini"

    @patch("ailoot.services.ai.factory.settings")
    def test_factory_fallback_without_key(self, mock_settings: MagicMock):
        """Test that factory falls back to MockProvider without API key."""
        mock_settings.AI_PROVIDER = "gemini"
        mock_settings.AI_API_KEY = None

        provider = get_ai_provider()

        assert isinstance(provider, MockProvider)
        assert provider.name == "mock"

    def test_factory_unknown_provider_falls_back(self):
        assert isinstance(get_ai_provider("nonexistent"), MockProvider)
