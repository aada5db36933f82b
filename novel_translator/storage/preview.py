"""Display headers for saved translations."""

from dataclasses import dataclass

from novel_translator.config import DEFAULT_SERIES_TITLE
from novel_translator.formatting.episode import canonical_header


@dataclass(frozen=True)
class HeaderPreview:
    """Display header shown above a saved translation."""

    title: str
    episode_line: str


def render_header(
    series_title: str, episode_no: int, subtitle: str = ""
) -> HeaderPreview:
    """Build the series title and episode line for display.

    Example:
        >>> render_header("", 3, "재회").episode_line
        '제 3화 · 재회'
    """
    title = series_title.strip() or DEFAULT_SERIES_TITLE
    episode_line = canonical_header(max(1, int(episode_no)))
    if subtitle.strip():
        episode_line = f"{episode_line} · {subtitle.strip()}"
    return HeaderPreview(title=title, episode_line=episode_line)
