"""Storage utilities for translation history."""

from novel_translator.storage.database import HistoryDB
from novel_translator.storage.preview import HeaderPreview, render_header

__all__ = ["HeaderPreview", "HistoryDB", "render_header"]
