"""Tests for novel_translator.formatting.episode module."""

import pytest

from novel_translator.formatting.episode import (
    EpisodeMarker,
    MarkerKind,
    canonical_header,
    extract_leading_episode_marker,
    parse_episode_header_line,
)


class TestParseEpisodeHeaderLine:
    """Tests for parse_episode_header_line function."""

    def test_hash_marker(self):
        assert parse_episode_header_line("#7") == EpisodeMarker(
            kind=MarkerKind.HASH, number=7, raw_text="#7"
        )

    def test_korean_marker(self):
        marker = parse_episode_header_line("제 12화")
        assert marker.kind == MarkerKind.KOREAN
        assert marker.number == 12

    @pytest.mark.parametrize("line", ["제12화", "제  12 화", "  제 12화  "])
    def test_korean_marker_spacing(self, line):
        """Spacing inside and around the Korean marker is tolerated."""
        assert parse_episode_header_line(line).number == 12

    def test_japanese_marker(self):
        marker = parse_episode_header_line("第 5 話")
        assert marker.kind == MarkerKind.JAPANESE
        assert marker.number == 5

    def test_bare_number_marker(self):
        marker = parse_episode_header_line("3화")
        assert marker.kind == MarkerKind.BARE_NUMBER
        assert marker.number == 3

    def test_raw_text_is_trimmed_line(self):
        assert parse_episode_header_line("  #42 ").raw_text == "#42"

    @pytest.mark.parametrize(
        "line",
        [
            "random text",
            "",
            "   ",
            "#12345",
            "#0",
            "제 0화",
            "# 7",
            "#7 시작",
            "제 3화 재회",
            "12",
        ],
    )
    def test_not_a_marker(self, line):
        """Partial matches, zero and over-long hash numbers are rejected."""
        assert parse_episode_header_line(line) is None


class TestExtractLeadingEpisodeMarker:
    """Tests for extract_leading_episode_marker function."""

    def test_first_line_marker(self):
        assert extract_leading_episode_marker("#3\n\nbody").number == 3

    def test_skips_leading_blank_lines(self):
        assert extract_leading_episode_marker("\n\n  \n第8話\nbody").number == 8

    def test_first_content_line_must_be_marker(self):
        """A marker after the first content line is ignored."""
        assert extract_leading_episode_marker("Title\n#3\nbody") is None

    def test_bare_number_not_accepted(self):
        """Bare "N화" is too ambiguous to open a source text."""
        assert extract_leading_episode_marker("3화\nbody") is None

    def test_scan_window(self):
        """Only the first twelve lines are considered."""
        assert extract_leading_episode_marker("\n" * 11 + "#4") is not None
        assert extract_leading_episode_marker("\n" * 12 + "#4") is None

    def test_empty_text(self):
        assert extract_leading_episode_marker("") is None


class TestCanonicalHeader:
    """Tests for canonical_header function."""

    def test_canonical_header(self):
        assert canonical_header(3) == "제 3화"
