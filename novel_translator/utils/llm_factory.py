"""LLM Factory - Multi-provider abstraction for chat models.

Creates and caches LangChain chat models for the translation client.
"""

import logging
import os
import threading
from typing import Literal

from langchain_core.language_models.chat_models import BaseChatModel

from novel_translator.config import API_KEY_ENV, DEFAULT_MODELS, DEFAULT_PROVIDER
from novel_translator.errors import ConfigurationError

logger = logging.getLogger(__name__)

ProviderType = Literal["anthropic", "lmstudio", "openai"]

# Thread-safe cache for LLM instances
_llm_cache: dict[tuple, BaseChatModel] = {}
_cache_lock = threading.Lock()


def resolve_provider(provider: str | None = None) -> str:
    """Pick the provider (parameter > PROVIDER env var > default) and validate it.

    Raises:
        ConfigurationError: If the provider is unknown
    """
    selected = provider or os.getenv("PROVIDER") or DEFAULT_PROVIDER
    if selected not in DEFAULT_MODELS:
        raise ConfigurationError(
            f"Invalid provider: {selected}. "
            f"Must be one of: {', '.join(DEFAULT_MODELS.keys())}"
        )
    return selected


def require_api_key(provider: str) -> None:
    """Fail early when the provider's API key is not configured.

    Raises:
        ConfigurationError: If the key env var is unset or empty
    """
    env_var = API_KEY_ENV.get(provider)
    if env_var and not os.getenv(env_var):
        raise ConfigurationError(f"{env_var} is not set")


def create_llm(
    provider: ProviderType | None = None,
    model: str | None = None,
    temperature: float = 0.3,
) -> BaseChatModel:
    """Create a chat model instance.

    Instances are cached by (provider, model, temperature).

    Args:
        provider: "openai" (default), "anthropic" or "lmstudio".
                 Defaults to PROVIDER env var.
        model: Model name. Defaults to {PROVIDER}_MODEL env var or provider default.
        temperature: Temperature for generation (0.0-1.0).

    Returns:
        Configured chat model.

    Raises:
        ConfigurationError: If provider is invalid.

    Examples:
        >>> llm = create_llm()
        >>> llm = create_llm(provider="anthropic", temperature=0.2)
    """
    selected_provider = resolve_provider(provider)
    selected_model = model or DEFAULT_MODELS[selected_provider]

    cache_key = (selected_provider, selected_model, temperature)

    with _cache_lock:
        if cache_key in _llm_cache:
            logger.debug(
                f"Using cached LLM: {selected_provider}/{selected_model} (temp={temperature})"
            )
            return _llm_cache[cache_key]

        logger.info(
            f"Creating LLM: {selected_provider}/{selected_model} (temp={temperature})"
        )

        if selected_provider == "anthropic":
            from langchain_anthropic import ChatAnthropic

            llm = ChatAnthropic(model=selected_model, temperature=temperature)
        elif selected_provider == "lmstudio":
            from langchain_openai import ChatOpenAI

            base_url = os.getenv("LMSTUDIO_BASE_URL") or "http://localhost:1234/v1"
            llm = ChatOpenAI(
                model=selected_model,
                temperature=temperature,
                base_url=base_url,
                api_key="not-needed",  # Local server, no API key required
            )
        else:  # openai (default)
            from langchain_openai import ChatOpenAI

            llm = ChatOpenAI(model=selected_model, temperature=temperature)

        _llm_cache[cache_key] = llm

        return llm


def clear_cache() -> None:
    """Clear the LLM instance cache."""
    with _cache_lock:
        _llm_cache.clear()
    logger.debug("LLM cache cleared")
