"""Tests for novel_translator.translator module."""

import os
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from langchain_core.messages import HumanMessage, SystemMessage

from novel_translator.errors import (
    ConfigurationError,
    InputEmptyError,
    TextTooLongError,
    TranslateError,
)
from novel_translator.translator import ChunkTranslator, is_retryable


class RateLimitError(Exception):
    """Stand-in for a provider rate limit exception."""


class TestIsRetryable:
    """Tests for is_retryable function."""

    def test_rate_limit(self):
        assert is_retryable(RateLimitError()) is True

    def test_value_error(self):
        assert is_retryable(ValueError()) is False


class TestBuildMessages:
    """Tests for ChunkTranslator.build_messages."""

    def test_system_and_user(self, mock_llm):
        messages = ChunkTranslator(llm=mock_llm).build_messages("原文 {x}")
        assert isinstance(messages[0], SystemMessage)
        assert "웹소설" in messages[0].content
        assert isinstance(messages[1], HumanMessage)
        assert messages[1].content == "原文 {x}"


class TestTranslate:
    """Tests for ChunkTranslator.translate."""

    @pytest.mark.asyncio
    async def test_returns_stripped_translation(self, mock_llm):
        mock_llm.ainvoke.return_value = MagicMock(content="  번역.\n")
        result = await ChunkTranslator(llm=mock_llm).translate("原文。")
        assert result == "번역."
        mock_llm.ainvoke.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_callable(self, mock_llm):
        translator = ChunkTranslator(llm=mock_llm)
        assert await translator("原文。") == "번역된 문장."

    @pytest.mark.asyncio
    async def test_content_blocks(self, mock_llm):
        mock_llm.ainvoke.return_value = MagicMock(
            content=[{"type": "text", "text": "안녕"}, {"type": "image_url"}]
        )
        assert await ChunkTranslator(llm=mock_llm).translate("hi") == "안녕"

    @pytest.mark.asyncio
    async def test_empty_input(self, mock_llm):
        with pytest.raises(InputEmptyError):
            await ChunkTranslator(llm=mock_llm).translate("  \n ")
        mock_llm.ainvoke.assert_not_called()

    @pytest.mark.asyncio
    async def test_too_long(self, mock_llm):
        translator = ChunkTranslator(llm=mock_llm, max_chars=5)
        with pytest.raises(TextTooLongError) as exc_info:
            await translator.translate("x" * 6)
        assert exc_info.value.limit == 5
        mock_llm.ainvoke.assert_not_called()

    @pytest.mark.asyncio
    async def test_limit_is_inclusive(self, mock_llm):
        translator = ChunkTranslator(llm=mock_llm, max_chars=5)
        assert await translator.translate("x" * 5) == "번역된 문장."

    @pytest.mark.asyncio
    async def test_empty_result(self, mock_llm):
        mock_llm.ainvoke.return_value = MagicMock(content="   ")
        with pytest.raises(TranslateError, match="empty"):
            await ChunkTranslator(llm=mock_llm).translate("原文")

    @pytest.mark.asyncio
    async def test_api_error_wrapped(self, mock_llm):
        mock_llm.ainvoke.side_effect = ValueError("bad request")
        with pytest.raises(TranslateError, match="bad request"):
            await ChunkTranslator(llm=mock_llm).translate("原文")
        assert mock_llm.ainvoke.await_count == 1

    @pytest.mark.asyncio
    async def test_retries_transient_errors(self, mock_llm):
        mock_llm.ainvoke.side_effect = [
            RateLimitError("slow down"),
            MagicMock(content="재시도 성공"),
        ]
        with patch(
            "novel_translator.translator.asyncio.sleep", new_callable=AsyncMock
        ) as mock_sleep:
            result = await ChunkTranslator(llm=mock_llm).translate("原文")

        assert result == "재시도 성공"
        assert mock_llm.ainvoke.await_count == 2
        mock_sleep.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self, mock_llm):
        mock_llm.ainvoke.side_effect = RateLimitError("slow down")
        with patch(
            "novel_translator.translator.asyncio.sleep", new_callable=AsyncMock
        ):
            with pytest.raises(TranslateError):
                await ChunkTranslator(llm=mock_llm, max_retries=2).translate("原文")
        assert mock_llm.ainvoke.await_count == 2


class TestLLMResolution:
    """Tests for lazy model creation."""

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        with patch.dict(os.environ, {"OPENAI_API_KEY": ""}):
            translator = ChunkTranslator(provider="openai")
            with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
                await translator.translate("原文")

    @pytest.mark.asyncio
    async def test_creates_llm_once(self, mock_llm):
        with (
            patch.dict(os.environ, {"OPENAI_API_KEY": "test-key"}),
            patch(
                "novel_translator.translator.create_llm", return_value=mock_llm
            ) as mock_create,
        ):
            translator = ChunkTranslator(provider="openai", model="gpt-4o-mini")
            await translator.translate("one")
            await translator.translate("two")

        mock_create.assert_called_once_with(
            provider="openai", model="gpt-4o-mini", temperature=0.3
        )
