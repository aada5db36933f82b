"""Pydantic models for errors, translations and history."""

from novel_translator.models.schemas import (
    Article,
    ErrorType,
    FolderNode,
    HistoryFolder,
    HistoryItem,
    PipelineError,
    Progress,
    TranslationResult,
)

__all__ = [
    "Article",
    "ErrorType",
    "FolderNode",
    "HistoryFolder",
    "HistoryItem",
    "PipelineError",
    "Progress",
    "TranslationResult",
]
