"""Pydantic models shared by the API, storage and orchestrator layers."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


# =============================================================================
# Error Types
# =============================================================================


class ErrorType(str, Enum):
    """Types of errors that can occur while translating."""

    INPUT_EMPTY = "input_empty"  # Nothing to translate
    TEXT_TOO_LONG = "text_too_long"  # Single request over MAX_CHARS
    CHUNK_COUNT_EXCEEDED = "chunk_count_exceeded"  # Too many chunks to process
    TRANSLATE_ERROR = "translate_error"  # LLM API errors, empty results
    CANCELLED = "cancelled"  # Caller aborted the request
    EXTRACT_ERROR = "extract_error"  # Fetching or extracting the source failed
    CONFIG_ERROR = "config_error"  # Missing API key etc.
    UNKNOWN_ERROR = "unknown_error"  # Catch-all


class PipelineError(BaseModel):
    """Structured error information for translation failures."""

    type: ErrorType = Field(description="Category of error")
    message: str = Field(description="Human-readable error message")
    code: str | None = Field(default=None, description="Machine-readable code")
    timestamp: datetime = Field(default_factory=datetime.now)
    retryable: bool = Field(default=False, description="Whether this can be retried")
    details: dict[str, Any] = Field(default_factory=dict, description="Extra context")

    @classmethod
    def from_exception(
        cls, e: Exception, error_type: ErrorType | None = None
    ) -> "PipelineError":
        """Create a PipelineError from an exception.

        Args:
            e: The exception that occurred
            error_type: Optional explicit error type

        Returns:
            PipelineError instance
        """
        if error_type is None:
            error_type = getattr(e, "error_type", ErrorType.UNKNOWN_ERROR)

        return cls(
            type=error_type,
            message=str(e),
            code=getattr(e, "code", None),
            retryable=error_type == ErrorType.TRANSLATE_ERROR,
            details={"exception_type": type(e).__name__},
        )


# =============================================================================
# Translation Models
# =============================================================================


class Article(BaseModel):
    """Title and body text pulled out of a web page."""

    title: str = Field(default="", description="Page or work title")
    text: str = Field(description="Extracted body text")
    url: str | None = Field(default=None, description="Source URL")


class TranslationResult(BaseModel):
    """Outcome of a full orchestrated translation."""

    text: str = Field(description="Formatted translation")
    raw_text: str = Field(default="", description="Concatenated chunk output")
    chunk_count: int = Field(default=0, description="Number of chunks translated")
    episode_number: int | None = Field(
        default=None, description="Episode number found in the source"
    )


class Progress(BaseModel):
    """Chunk progress reported during a translation."""

    current: int
    total: int

    @property
    def percent(self) -> int:
        return int(self.current / self.total * 100) if self.total else 0


# =============================================================================
# History Models
# =============================================================================


class HistoryItem(BaseModel):
    """A saved translation."""

    id: str
    created_at: datetime
    series_title: str
    episode_no: int = Field(ge=1)
    subtitle: str = ""
    source_text: str
    translated_text: str
    url: str | None = None
    folder_id: str | None = None
    show_header: bool = False


class HistoryFolder(BaseModel):
    """A (possibly nested) folder grouping history items."""

    id: str
    created_at: datetime
    name: str
    parent_id: str | None = None


class FolderNode(BaseModel):
    """A folder with its depth in the folder tree."""

    folder: HistoryFolder
    depth: int
