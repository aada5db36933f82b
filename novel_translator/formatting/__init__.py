"""Chunking, episode header handling and spacing passes for translated text."""

from novel_translator.formatting.chunker import chunk_text, join_chunks, split_paragraphs
from novel_translator.formatting.episode import (
    EpisodeMarker,
    MarkerKind,
    canonical_header,
    extract_leading_episode_marker,
    parse_episode_header_line,
)
from novel_translator.formatting.headers import (
    is_header_like,
    reconcile,
    widen_header_to_body_gap,
)
from novel_translator.formatting.pipeline import apply_formatting_pipeline
from novel_translator.formatting.spacing import (
    ensure_trailing_space_per_line,
    is_dialogue_line,
    normalize_dialogue_spacing,
)

__all__ = [
    # Chunking
    "chunk_text",
    "join_chunks",
    "split_paragraphs",
    # Episode markers
    "EpisodeMarker",
    "MarkerKind",
    "canonical_header",
    "extract_leading_episode_marker",
    "parse_episode_header_line",
    # Header passes
    "is_header_like",
    "reconcile",
    "widen_header_to_body_gap",
    # Spacing passes
    "ensure_trailing_space_per_line",
    "is_dialogue_line",
    "normalize_dialogue_spacing",
    # Pipeline
    "apply_formatting_pipeline",
]
