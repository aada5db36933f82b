"""Unit tests for LLM factory module."""

import os
from unittest.mock import patch

import pytest
from langchain_anthropic import ChatAnthropic

from novel_translator.errors import ConfigurationError
from novel_translator.utils.llm_factory import (
    clear_cache,
    create_llm,
    require_api_key,
    resolve_provider,
)


class TestCreateLLM:
    """Test the create_llm factory function."""

    def setup_method(self):
        """Clear cache before each test."""
        clear_cache()

    def test_default_provider_is_openai(self):
        """Should use OpenAI by default."""
        with patch.dict(os.environ, {"PROVIDER": "", "OPENAI_API_KEY": "test-key"}):
            llm = create_llm()
            assert llm.__class__.__name__ == "ChatOpenAI"
            assert llm.temperature == 0.3

    def test_explicit_anthropic_provider(self):
        """Should create Anthropic LLM when provider='anthropic'."""
        with patch.dict(os.environ, {"ANTHROPIC_API_KEY": "test-key"}):
            llm = create_llm(provider="anthropic", temperature=0.5)
            assert isinstance(llm, ChatAnthropic)
            assert llm.temperature == 0.5

    def test_lmstudio_provider(self):
        """LM Studio goes through the OpenAI client with a local base URL."""
        with patch.dict(os.environ, {"LMSTUDIO_BASE_URL": "http://localhost:9999/v1"}):
            llm = create_llm(provider="lmstudio")
            assert llm.__class__.__name__ == "ChatOpenAI"
            assert llm.openai_api_base == "http://localhost:9999/v1"

    def test_provider_from_environment(self):
        """Should use PROVIDER env var when no provider specified."""
        with patch.dict(
            os.environ, {"PROVIDER": "anthropic", "ANTHROPIC_API_KEY": "test-key"}
        ):
            llm = create_llm()
            assert isinstance(llm, ChatAnthropic)

    def test_invalid_provider(self):
        with pytest.raises(ConfigurationError, match="Invalid provider"):
            create_llm(provider="nope")

    def test_caching(self):
        """Same (provider, model, temperature) returns the same instance."""
        with patch.dict(os.environ, {"OPENAI_API_KEY": "test-key"}):
            first = create_llm(provider="openai", temperature=0.3)
            second = create_llm(provider="openai", temperature=0.3)
            third = create_llm(provider="openai", temperature=0.9)
        assert first is second
        assert first is not third

    def test_clear_cache(self):
        with patch.dict(os.environ, {"OPENAI_API_KEY": "test-key"}):
            first = create_llm(provider="openai")
            clear_cache()
            assert create_llm(provider="openai") is not first


class TestRequireApiKey:
    """Tests for require_api_key and resolve_provider."""

    def test_missing_key(self):
        with patch.dict(os.environ, {"ANTHROPIC_API_KEY": ""}):
            with pytest.raises(ConfigurationError, match="ANTHROPIC_API_KEY"):
                require_api_key("anthropic")

    def test_present_key(self):
        with patch.dict(os.environ, {"OPENAI_API_KEY": "test-key"}):
            require_api_key("openai")

    def test_lmstudio_needs_no_key(self):
        require_api_key("lmstudio")

    def test_resolve_explicit(self):
        assert resolve_provider("anthropic") == "anthropic"

    def test_resolve_default(self):
        with patch.dict(os.environ, {"PROVIDER": ""}):
            assert resolve_provider() == "openai"
