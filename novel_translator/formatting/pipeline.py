"""Post-translation formatting pipeline."""

import logging

from novel_translator.formatting.headers import reconcile, widen_header_to_body_gap
from novel_translator.formatting.spacing import (
    ensure_trailing_space_per_line,
    normalize_dialogue_spacing,
)
from novel_translator.formatting.text import normalize_newlines

logger = logging.getLogger(__name__)


def apply_formatting_pipeline(source_text: str, translated_text: str) -> str:
    """Format assembled translation output for reading.

    Order matters: headers are reconciled first, dialogue spacing and the
    header/body gap then shape the line structure, and trailing spaces are
    added last so they see the final lines.

    Args:
        source_text: Untranslated source (used for the episode number)
        translated_text: All translated chunks joined together

    Returns:
        Final formatted text ("" for blank input)
    """
    translated_text = normalize_newlines(translated_text)
    if not translated_text.strip():
        return ""

    text = reconcile(source_text, translated_text)
    text = normalize_dialogue_spacing(text)
    text = widen_header_to_body_gap(text)
    text = ensure_trailing_space_per_line(text)

    logger.debug(f"Formatted {len(translated_text)} chars into {len(text)} chars")
    return text
