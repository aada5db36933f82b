"""Paragraph-aligned chunking of source text for translation.

Long episodes are split into pieces small enough for a single model call.
Splits happen on blank-line paragraph boundaries; only a paragraph that is
longer than the limit on its own gets cut at fixed character offsets.
"""

import logging
import re

from novel_translator.config import MAX_CHARS
from novel_translator.formatting.text import normalize_newlines

logger = logging.getLogger(__name__)

PARAGRAPH_SPLIT_RE = re.compile(r"\n{2,}")
PARAGRAPH_SEPARATOR = "\n\n"


def split_paragraphs(text: str) -> list[str]:
    """Split text on blank-line runs, dropping empty paragraphs."""
    paragraphs = (p.strip() for p in PARAGRAPH_SPLIT_RE.split(normalize_newlines(text)))
    return [p for p in paragraphs if p]


def chunk_text(text: str, max_chars: int = MAX_CHARS) -> list[str]:
    """Split text into chunks of at most ``max_chars`` characters.

    Paragraphs are packed greedily: a paragraph joins the current chunk
    (with a blank-line separator) while the result still fits, otherwise
    the chunk is emitted and a new one starts. A paragraph longer than
    ``max_chars`` is hard-split into slices of exactly ``max_chars``
    characters (the last slice may be shorter).

    Args:
        text: Raw source text
        max_chars: Maximum characters per chunk

    Returns:
        Non-empty chunks in source order; empty list for blank input

    Raises:
        ValueError: If max_chars is not positive

    Example:
        >>> chunk_text("a" * 3000 + "\\n\\n" + "b" * 2000, max_chars=4500)
        ['aaa...', 'bbb...']
    """
    if max_chars < 1:
        raise ValueError(f"max_chars must be positive, got {max_chars}")

    text = normalize_newlines(text).strip()
    if not text:
        return []

    chunks: list[str] = []
    buffer = ""

    def flush() -> None:
        nonlocal buffer
        if buffer.strip():
            chunks.append(buffer.strip())
        buffer = ""

    for paragraph in split_paragraphs(text):
        if len(paragraph) > max_chars:
            flush()
            for start in range(0, len(paragraph), max_chars):
                piece = paragraph[start : start + max_chars]
                if piece.strip():
                    chunks.append(piece)
            logger.debug(
                f"Hard-split oversized paragraph ({len(paragraph)} chars) "
                f"at {max_chars} chars"
            )
            continue

        if not buffer:
            buffer = paragraph
        elif len(buffer) + len(paragraph) + len(PARAGRAPH_SEPARATOR) <= max_chars:
            buffer += PARAGRAPH_SEPARATOR + paragraph
        else:
            flush()
            buffer = paragraph

    flush()

    logger.debug(f"Split {len(text)} chars into {len(chunks)} chunks")
    return chunks


def join_chunks(chunks: list[str]) -> str:
    """Concatenate translated chunks with blank-line separators."""
    return PARAGRAPH_SEPARATOR.join(c.strip() for c in chunks if c.strip())
