"""Episode header reconciliation and header/body spacing.

Translation models handle chapter markers inconsistently: they keep ``#3``,
render it as ``제 3화``, or emit both on consecutive lines. ``reconcile``
leaves exactly one canonical marker that matches the source's episode
number. ``widen_header_to_body_gap`` then separates the short preamble
(marker, title, subtitle) from the narrative with two blank lines.

Both passes are conservative: when they cannot tell what the header is,
they return the text unchanged.
"""

import logging

from novel_translator.config import HEADER_BLOCK_MAX_LINES, HEADER_LINE_MAX_CHARS
from novel_translator.formatting.episode import (
    canonical_header,
    extract_leading_episode_marker,
    parse_episode_header_line,
)
from novel_translator.formatting.text import (
    collapse_blank_runs,
    first_content_index,
    is_blank,
    normalize_newlines,
)

logger = logging.getLogger(__name__)

# Redundant blank lines removed after dropping a duplicate marker
MAX_GAP_STRIP = 2

# Lines ending with one of these read as sentences, not titles
TERMINAL_PUNCTUATION = (".", "!", "?", "。", "！", "？", "…", '"', "”", "」", "』")

HEADER_GAP_BLANK_LINES = 2
MAX_BLANK_RUN = 4


def _marker_number(lines: list[str], index: int) -> int | None:
    if index >= len(lines):
        return None
    marker = parse_episode_header_line(lines[index])
    return marker.number if marker else None


def _drop_duplicate_markers(lines: list[str], index: int, number: int) -> None:
    """Delete every marker for ``number`` directly below ``lines[index]``.

    When anything was deleted, up to MAX_GAP_STRIP redundant blank lines go
    with it; one blank line is always kept as separator.
    """
    removed = 0
    while _marker_number(lines, index + 1) == number:
        del lines[index + 1]
        removed += 1
    if not removed:
        return

    blank_run = 0
    while index + 1 + blank_run < len(lines) and is_blank(lines[index + 1 + blank_run]):
        blank_run += 1
    strip = min(MAX_GAP_STRIP, max(0, blank_run - 1))
    del lines[index + 1 : index + 1 + strip]
    logger.debug(f"Removed {removed} duplicate marker(s) for episode {number}")


def reconcile(source_text: str, translated_text: str) -> str:
    """Rewrite the translated text's leading episode marker to canonical form.

    The source's leading marker decides the episode number. If the first
    non-blank line of the translation (or the line after it) carries that
    number in any convention, it becomes ``제 N화``; repeated markers for the
    same episode directly below it are dropped together with up to two
    redundant blank lines, keeping one blank line as separator.

    Args:
        source_text: Untranslated source (decides the episode number)
        translated_text: Model output to fix up

    Returns:
        Reconciled text, or the translated text unchanged when no confident
        match is possible

    Example:
        >>> reconcile("#3\\n\\n...", "#3\\n제 3화\\n\\nBody text here.")
        '제 3화\\n\\nBody text here.'
    """
    translated_text = normalize_newlines(translated_text)

    source_marker = extract_leading_episode_marker(source_text)
    if source_marker is None:
        return translated_text

    number = source_marker.number
    target = canonical_header(number)
    lines = translated_text.split("\n")

    i = first_content_index(lines)
    if i >= len(lines):
        return translated_text

    first = _marker_number(lines, i)
    second = _marker_number(lines, i + 1)

    if first == number:
        lines[i] = target
        _drop_duplicate_markers(lines, i, number)
        return "\n".join(lines).lstrip()

    if first is None and second == number:
        lines[i + 1] = target
        _drop_duplicate_markers(lines, i + 1, number)
        return "\n".join(lines).lstrip()

    return translated_text


def is_header_like(line: str) -> bool:
    """Whether a line looks like part of a title preamble.

    Any episode marker counts, as does a short line that does not end like
    a sentence. This is a heuristic: a short body sentence without final
    punctuation is misread as a header line.
    """
    if parse_episode_header_line(line) is not None:
        return True
    stripped = line.strip()
    return len(stripped) <= HEADER_LINE_MAX_CHARS and not stripped.endswith(
        TERMINAL_PUNCTUATION
    )


def widen_header_to_body_gap(text: str) -> str:
    """Put exactly two blank lines between the header block and the body.

    The header block is the leading run (at most HEADER_BLOCK_MAX_LINES
    non-blank lines, blank lines in between ignored) of header-like lines.
    Nothing changes when there is no header block or when the whole text
    looks like a header.

    Example:
        >>> widen_header_to_body_gap("#1\\n제목\\n본문 시작.")
        '#1\\n제목\\n\\n\\n본문 시작.'
    """
    text = normalize_newlines(text)
    lines = text.split("\n")

    end = first_content_index(lines)
    header_lines = 0
    cap_end = None
    while end < len(lines):
        if is_blank(lines[end]):
            end += 1
            continue
        if header_lines >= HEADER_BLOCK_MAX_LINES or not is_header_like(lines[end]):
            break
        header_lines += 1
        end += 1
        if header_lines == HEADER_BLOCK_MAX_LINES:
            cap_end = end

    # A full block followed only by blank lines still ends at the cap
    if end >= len(lines) and cap_end is not None:
        end = cap_end

    if header_lines == 0 or end >= len(lines):
        return text

    while end > 0 and is_blank(lines[end - 1]):
        del lines[end - 1]
        end -= 1

    lines[end:end] = [""] * HEADER_GAP_BLANK_LINES

    return "\n".join(collapse_blank_runs(lines, MAX_BLANK_RUN)).rstrip()
