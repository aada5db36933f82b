"""Novel Translator - chunked LLM translation for web fiction.

Splits a source episode into size-limited chunks, translates them one at a
time, then repairs the episode header and spacing of the joined output.
"""

from novel_translator.errors import (
    ChunkCountExceededError,
    ExtractError,
    InputEmptyError,
    NovelTranslatorError,
    TextTooLongError,
    TranslateError,
    TranslationCancelled,
)
from novel_translator.formatting import (
    apply_formatting_pipeline,
    chunk_text,
    extract_leading_episode_marker,
    parse_episode_header_line,
)
from novel_translator.models import ErrorType, PipelineError, TranslationResult
from novel_translator.orchestrator import CancelToken, run_translation
from novel_translator.storage import HistoryDB
from novel_translator.translator import ChunkTranslator

__all__ = [
    # Formatting
    "apply_formatting_pipeline",
    "chunk_text",
    "extract_leading_episode_marker",
    "parse_episode_header_line",
    # Translation
    "CancelToken",
    "ChunkTranslator",
    "TranslationResult",
    "run_translation",
    # Errors
    "ChunkCountExceededError",
    "ErrorType",
    "ExtractError",
    "InputEmptyError",
    "NovelTranslatorError",
    "PipelineError",
    "TextTooLongError",
    "TranslateError",
    "TranslationCancelled",
    # Storage
    "HistoryDB",
]
