"""Source text fetching: generic article extraction and the Pixiv path."""

from novel_translator.sources.extractor import extract_article, fetch_article
from novel_translator.sources.pixiv import (
    clean_pixiv_markup,
    fetch_pixiv_novel,
    is_pixiv,
    pixiv_novel_id,
)

__all__ = [
    "clean_pixiv_markup",
    "extract_article",
    "fetch_article",
    "fetch_pixiv_novel",
    "is_pixiv",
    "pixiv_novel_id",
]
