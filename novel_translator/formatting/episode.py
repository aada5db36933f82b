"""Episode marker parsing.

Web novels mark chapters in several ways depending on where the text came
from: ``#12`` on the gallery platform, ``第12話`` in Japanese sources,
``제 12화`` or ``12화`` in Korean output. All of them map onto a single
``EpisodeMarker`` so the header passes can compare episode numbers without
caring which convention produced them.
"""

import re
from dataclasses import dataclass
from enum import Enum

from novel_translator.config import HEADER_SCAN_LINES
from novel_translator.formatting.text import is_blank, split_lines


class MarkerKind(str, Enum):
    """Typographic convention an episode marker was written in."""

    HASH = "hash"
    JAPANESE = "japanese"
    KOREAN = "korean"
    BARE_NUMBER = "bare_number"


@dataclass(frozen=True)
class EpisodeMarker:
    """An episode heading found on a single line.

    Attributes:
        kind: Which marker convention matched
        number: Episode number (always positive)
        raw_text: The trimmed line the marker was read from
    """

    kind: MarkerKind
    number: int
    raw_text: str


# Tried in order; the first match wins.
MARKER_PATTERNS: tuple[tuple[MarkerKind, re.Pattern], ...] = (
    (MarkerKind.KOREAN, re.compile(r"^제\s*(\d+)\s*화$")),
    (MarkerKind.JAPANESE, re.compile(r"^第\s*(\d+)\s*話$")),
    (MarkerKind.HASH, re.compile(r"^#(\d{1,4})$")),
    (MarkerKind.BARE_NUMBER, re.compile(r"^(\d+)화$")),
)

# Forms that may open a source text; bare numbers are too ambiguous.
LEADING_MARKER_KINDS = frozenset(
    {MarkerKind.HASH, MarkerKind.KOREAN, MarkerKind.JAPANESE}
)


def _match(
    line: str, kinds: frozenset[MarkerKind] | None = None
) -> EpisodeMarker | None:
    stripped = line.strip()
    if not stripped:
        return None

    for kind, pattern in MARKER_PATTERNS:
        if kinds is not None and kind not in kinds:
            continue
        match = pattern.match(stripped)
        if match:
            number = int(match.group(1))
            if number < 1:
                return None
            return EpisodeMarker(kind=kind, number=number, raw_text=stripped)
    return None


def parse_episode_header_line(line: str) -> EpisodeMarker | None:
    """Parse a single line as an episode marker.

    Args:
        line: One line of text (surrounding whitespace is ignored)

    Returns:
        EpisodeMarker if the whole line is a marker, else None

    Examples:
        >>> parse_episode_header_line("#7")
        EpisodeMarker(kind=<MarkerKind.HASH: 'hash'>, number=7, raw_text='#7')
        >>> parse_episode_header_line("제 12화").number
        12
        >>> parse_episode_header_line("random text") is None
        True
    """
    return _match(line)


def extract_leading_episode_marker(text: str) -> EpisodeMarker | None:
    """Find the episode marker that opens a text.

    Only the first meaningful line counts: blank lines are skipped, and the
    first non-blank line within the first HEADER_SCAN_LINES lines must be a
    hash, Korean or Japanese marker.
    """
    for line in split_lines(text)[:HEADER_SCAN_LINES]:
        if is_blank(line):
            continue
        return _match(line, LEADING_MARKER_KINDS)
    return None


def canonical_header(number: int) -> str:
    """Render an episode number in the target-language heading form."""
    return f"제 {number}화"

