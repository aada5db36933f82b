"""Shared test fixtures for novel_translator tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from novel_translator.storage import HistoryDB
from novel_translator.utils.llm_factory import clear_cache


@pytest.fixture
def db():
    """In-memory history database."""
    database = HistoryDB(":memory:")
    yield database
    database.close()


@pytest.fixture
def temp_db(tmp_path):
    """File-backed history database in a temp directory."""
    database = HistoryDB(tmp_path / "outputs" / "history.db")
    yield database
    database.close()


@pytest.fixture
def identity_translate():
    """Async translate callable that echoes its input."""

    async def translate(text: str) -> str:
        return text

    return translate


@pytest.fixture
def mock_llm():
    """Chat model whose ainvoke returns a fixed translation."""
    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=MagicMock(content="번역된 문장."))
    return llm


@pytest.fixture(autouse=True)
def clear_llm_cache():
    """Keep cached chat models from leaking between tests."""
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def sample_source() -> str:
    """A short episode with a hash marker and dialogue."""
    return "#3\n\n彼女は言った。\n「こんにちは。」\n彼は去った。"
