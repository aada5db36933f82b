"""Exceptions raised by the translation pipeline and its collaborators.

Every exception carries an ``error_type`` so callers (the API layer in
particular) can map it to a ``PipelineError`` without inspecting classes.
"""

from novel_translator.models.schemas import ErrorType


class NovelTranslatorError(Exception):
    """Base class for all package errors."""

    error_type = ErrorType.UNKNOWN_ERROR


class InputEmptyError(NovelTranslatorError):
    """There is no text to translate."""

    error_type = ErrorType.INPUT_EMPTY


class TextTooLongError(NovelTranslatorError):
    """A single translate request exceeds the chunk size limit."""

    error_type = ErrorType.TEXT_TOO_LONG

    def __init__(self, length: int, limit: int):
        super().__init__(
            f"Text is too long ({length} chars). Send at most {limit} chars per request."
        )
        self.length = length
        self.limit = limit


class ChunkCountExceededError(NovelTranslatorError):
    """Source text splits into more chunks than we are willing to send."""

    error_type = ErrorType.CHUNK_COUNT_EXCEEDED

    def __init__(self, count: int, limit: int):
        super().__init__(
            f"Text is too long to process automatically ({count} chunks, limit {limit})"
        )
        self.count = count
        self.limit = limit


class TranslateError(NovelTranslatorError):
    """The external translation call failed or returned nothing."""

    error_type = ErrorType.TRANSLATE_ERROR


class TranslationCancelled(NovelTranslatorError):
    """The caller cancelled the translation."""

    error_type = ErrorType.CANCELLED


class ConfigurationError(NovelTranslatorError):
    """Required configuration (API key, provider) is missing or invalid."""

    error_type = ErrorType.CONFIG_ERROR


class ExtractError(NovelTranslatorError):
    """Fetching or extracting an article failed.

    Attributes:
        code: Machine-readable reason (INVALID_URL, PIXIV_COOKIE_REQUIRED,
            FETCH_FAILED, EXTRACT_EMPTY)
    """

    error_type = ErrorType.EXTRACT_ERROR

    INVALID_URL = "INVALID_URL"
    PIXIV_COOKIE_REQUIRED = "PIXIV_COOKIE_REQUIRED"
    FETCH_FAILED = "FETCH_FAILED"
    EXTRACT_EMPTY = "EXTRACT_EMPTY"

    def __init__(self, message: str, code: str):
        super().__init__(message)
        self.code = code
