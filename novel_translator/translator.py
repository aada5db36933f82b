"""Chunk translator - async LLM client for single translation requests.

Each call translates one chunk (at most MAX_CHARS characters). Transient
API failures are retried with exponential backoff; everything else is
wrapped in TranslateError so the orchestrator can abort cleanly.
"""

import asyncio
import logging

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from novel_translator.config import (
    MAX_CHARS,
    MAX_RETRIES,
    RETRY_BASE_DELAY,
    RETRY_MAX_DELAY,
    TRANSLATE_TEMPERATURE,
)
from novel_translator.errors import (
    InputEmptyError,
    NovelTranslatorError,
    TextTooLongError,
    TranslateError,
)
from novel_translator.utils.llm_factory import create_llm, require_api_key, resolve_provider
from novel_translator.utils.prompts import format_prompt, load_prompt

logger = logging.getLogger(__name__)

# Exceptions that are retryable
RETRYABLE_EXCEPTIONS = (
    "RateLimitError",
    "APIConnectionError",
    "APITimeoutError",
    "InternalServerError",
    "ServiceUnavailableError",
)


def is_retryable(exception: Exception) -> bool:
    """Check if an exception is retryable.

    Args:
        exception: The exception to check

    Returns:
        True if the exception should be retried
    """
    exc_name = type(exception).__name__
    return exc_name in RETRYABLE_EXCEPTIONS or "rate" in exc_name.lower()


def _content_text(content) -> str:
    """Flatten a chat message content (string or content blocks) to text."""
    if isinstance(content, str):
        return content
    parts = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


class ChunkTranslator:
    """Translate single chunks with a cached chat model and retry logic.

    Example:
        >>> translator = ChunkTranslator()
        >>> korean = await translator.translate("第1話\\n\\n吾輩は猫である。")
    """

    def __init__(
        self,
        provider: str | None = None,
        model: str | None = None,
        temperature: float = TRANSLATE_TEMPERATURE,
        max_chars: int = MAX_CHARS,
        max_retries: int = MAX_RETRIES,
        prompt_name: str = "translate",
        llm: BaseChatModel | None = None,
    ):
        self._provider = provider
        self._model = model
        self._temperature = temperature
        self._max_chars = max_chars
        self._max_retries = max_retries
        self._prompt = load_prompt(prompt_name)
        self._llm = llm

    def _get_llm(self) -> BaseChatModel:
        if self._llm is None:
            provider = resolve_provider(self._provider)
            require_api_key(provider)
            self._llm = create_llm(
                provider=provider, model=self._model, temperature=self._temperature
            )
        return self._llm

    def build_messages(self, text: str) -> list:
        messages = []
        system_text = format_prompt(self._prompt.get("system", ""), {"text": text})
        if system_text.strip():
            messages.append(SystemMessage(content=system_text.strip()))
        messages.append(HumanMessage(content=format_prompt(self._prompt["user"], {"text": text})))
        return messages

    async def _invoke_with_retry(self, llm: BaseChatModel, messages: list) -> str:
        """Invoke the model with exponential backoff retry.

        Raises:
            Last exception if all retries fail
        """
        last_exception = None

        for attempt in range(self._max_retries):
            try:
                response = await llm.ainvoke(messages)
                return _content_text(response.content)

            except Exception as e:
                last_exception = e

                if not is_retryable(e) or attempt == self._max_retries - 1:
                    raise

                delay = min(RETRY_BASE_DELAY * (2**attempt), RETRY_MAX_DELAY)
                logger.warning(
                    f"Translate call failed (attempt {attempt + 1}/{self._max_retries}): {e}. "
                    f"Retrying in {delay:.1f}s..."
                )
                await asyncio.sleep(delay)

        raise last_exception

    async def translate(self, text: str) -> str:
        """Translate one chunk.

        Args:
            text: Source text, at most max_chars characters

        Returns:
            Translated text, stripped

        Raises:
            InputEmptyError: If text is blank
            TextTooLongError: If text exceeds max_chars
            ConfigurationError: If the provider API key is missing
            TranslateError: If the model call fails or returns nothing
        """
        if not text.strip():
            raise InputEmptyError("No text to translate")
        if len(text) > self._max_chars:
            raise TextTooLongError(len(text), self._max_chars)

        llm = self._get_llm()
        messages = self.build_messages(text)

        try:
            content = await self._invoke_with_retry(llm, messages)
        except NovelTranslatorError:
            raise
        except Exception as e:
            raise TranslateError(f"Translation API error: {e}") from e

        translated = content.strip()
        if not translated:
            raise TranslateError("Translation API returned an empty result")

        logger.debug(f"Translated {len(text)} chars -> {len(translated)} chars")
        return translated

    __call__ = translate
