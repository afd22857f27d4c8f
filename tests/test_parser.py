"""
Tests for subtitle_censor/subtitles/parser.py

Tests SRT block parsing, text cleaning, timestamp conversion and
serialization.
"""

import pytest

from subtitle_censor.error_handler import ParseError
from subtitle_censor.models import SubtitleEntry
from subtitle_censor.subtitles.parser import (
    clean_subtitle_text,
    format_timestamp,
    parse_srt,
    parse_srt_entries,
    parse_srt_file,
    parse_timestamp,
    parse_timestamp_line,
    serialize_srt,
    write_srt_file,
)


SAMPLE_SRT = """1
00:00:01,000 --> 00:00:02,500
Hello there

2
00:00:03,000 --> 00:00:05,000
<i>How are</i>
you?

"""


class TestParseTimestamp:
    def test_comma_separator(self):
        assert parse_timestamp("01:02:03,004") == 3723004

    def test_period_separator(self):
        assert parse_timestamp("00:00:20.000") == 20000

    def test_short_fraction_is_padded(self):
        assert parse_timestamp("00:00:03.5") == 3500
        assert parse_timestamp("00:00:04,25") == 4250

    def test_long_fraction_is_truncated(self):
        assert parse_timestamp("00:00:01,23456") == 1234

    def test_missing_fraction(self):
        assert parse_timestamp("00:01:00") == 60000

    def test_invalid_raises(self):
        with pytest.raises(ParseError):
            parse_timestamp("00:xx:01,000")

    def test_timing_line_with_position_hint(self):
        line = "00:00:01,000 --> 00:00:02,000 X1:100 X2:200"
        assert parse_timestamp_line(line) == (1000, 2000)

    def test_timing_line_error_has_line_number(self):
        with pytest.raises(ParseError) as exc_info:
            parse_timestamp_line("00:00:01,000 --> soon", line_number=7)
        assert exc_info.value.line_number == 7
        assert "line 7" in str(exc_info.value)


class TestFormatTimestamp:
    def test_format(self):
        assert format_timestamp(3723004) == "01:02:03,004"

    def test_zero(self):
        assert format_timestamp(0) == "00:00:00,000"

    def test_negative_clamps_to_zero(self):
        assert format_timestamp(-50) == "00:00:00,000"


class TestCleanSubtitleText:
    def test_strips_html_tags(self):
        assert clean_subtitle_text("<i>Hello</i> <font color=red>world</font>") == "Hello world"

    def test_strips_brace_formatting(self):
        assert clean_subtitle_text("{\\an8}Up here") == "Up here"

    def test_strips_leading_speaker_label(self):
        assert clean_subtitle_text("[JOHN] Get down!") == "Get down!"

    def test_keeps_bracket_in_middle(self):
        assert clean_subtitle_text("Fine [sighs] whatever") == "Fine [sighs] whatever"

    def test_speaker_label_on_each_line(self):
        assert clean_subtitle_text("[A] Hi\n[B] Hello") == "Hi Hello"

    def test_collapses_whitespace(self):
        assert clean_subtitle_text("  too    many\t spaces ") == "too many spaces"

    def test_idempotent(self):
        once = clean_subtitle_text("<b>[MAN]</b> {\\i1}Run!")
        assert clean_subtitle_text(once) == once


class TestParseSrt:
    """Tests for block parsing."""

    def test_parses_entries(self):
        """Test basic two-entry document."""
        entries = parse_srt_entries(SAMPLE_SRT)

        assert len(entries) == 2
        assert entries[0] == SubtitleEntry(index=1, start_ms=1000, end_ms=2500, original_text="Hello there")
        assert entries[1].index == 2
        assert entries[1].start_ms == 3000
        assert entries[1].end_ms == 5000

    def test_joins_and_cleans_lines(self):
        """Test multi-line text is joined with a single space."""
        entries = parse_srt_entries(SAMPLE_SRT)
        assert entries[1].original_text == "How are you?"

    def test_new_entries_are_unfiltered(self):
        entry = parse_srt_entries(SAMPLE_SRT)[0]
        assert entry.filtered_text is None
        assert entry.has_profanity is False
        assert entry.detected_words == ()

    def test_index_is_optional(self):
        """Test a block without a sequence number."""
        entries = parse_srt_entries("00:00:01,000 --> 00:00:02,000\nNo number\n")
        assert len(entries) == 1
        assert entries[0].index is None

    def test_malformed_timestamp_skips_only_that_entry(self):
        """Test an unparseable timing line drops one block, not the document."""
        content = (
            "1\n00:00:01,000 --> 00:00:xx,000\nBroken\n\n"
            "2\n00:00:03,000 --> 00:00:04,000\nGood\n"
        )
        entries = parse_srt_entries(content)

        assert [e.original_text for e in entries] == ["Good"]

    def test_empty_text_after_cleaning_is_dropped(self):
        content = "1\n00:00:01,000 --> 00:00:02,000\n<i></i>\n\n2\n00:00:03,000 --> 00:00:04,000\nKept\n"
        assert [e.original_text for e in parse_srt_entries(content)] == ["Kept"]

    def test_block_without_text_is_dropped(self):
        content = "1\n00:00:01,000 --> 00:00:02,000\n\n2\n00:00:03,000 --> 00:00:04,000\nKept\n"
        assert len(parse_srt_entries(content)) == 1

    def test_missing_blank_line_between_blocks(self):
        """Test a timing line starts a new block even without a separator."""
        content = (
            "1\n00:00:01,000 --> 00:00:02,000\nFirst\n"
            "2\n00:00:03,000 --> 00:00:04,000\nSecond\n"
        )
        entries = parse_srt_entries(content)

        assert [e.original_text for e in entries] == ["First", "Second"]
        assert [e.index for e in entries] == [1, 2]

    def test_arrow_in_caption_text(self):
        """Test a text line containing an arrow stays part of its caption."""
        content = (
            "1\n00:00:01,000 --> 00:00:02,000\nHe said --> go\nsecond line\n\n"
            "2\n00:00:03,000 --> 00:00:04,000\nok\n"
        )
        entries = parse_srt_entries(content)

        assert [(e.start_ms, e.original_text) for e in entries] == [
            (1000, "He said --> go second line"),
            (3000, "ok"),
        ]

    def test_arrow_in_skipped_block_text(self):
        content = (
            "1\n00:00:01,000 --> bad\nstill --> skipped\n\n"
            "2\n00:00:03,000 --> 00:00:04,000\nok\n"
        )
        assert [e.original_text for e in parse_srt_entries(content)] == ["ok"]

    def test_byte_order_mark(self):
        entries = parse_srt_entries("\ufeff1\n00:00:01,000 --> 00:00:02,000\nHi\n")
        assert entries[0].index == 1

    def test_windows_line_endings(self):
        content = "1\r\n00:00:01,000 --> 00:00:02,000\r\nHi\r\n\r\n"
        assert parse_srt_entries(content)[0].original_text == "Hi"

    def test_empty_input(self):
        assert parse_srt_entries("") == []
        assert parse_srt("   \n\n").is_empty

    def test_parse_srt_document_summary(self):
        parsed = parse_srt(SAMPLE_SRT)
        assert len(parsed) == 2
        assert parsed.total_profanity_entries == 0
        assert parsed.profanity_time_ranges == ()


class TestSerializeSrt:
    """Tests for writing SRT content."""

    def test_renumbers_from_one(self):
        """Test output numbering ignores source indexes."""
        entries = [
            SubtitleEntry(index=7, start_ms=1000, end_ms=2000, original_text="A"),
            SubtitleEntry(index=None, start_ms=3000, end_ms=4500, original_text="B"),
        ]
        assert serialize_srt(entries) == (
            "1\n00:00:01,000 --> 00:00:02,000\nA\n\n"
            "2\n00:00:03,000 --> 00:00:04,500\nB\n"
        )

    def test_uses_filtered_text(self):
        entry = SubtitleEntry(1, 0, 1000, "damn it").with_filter("darn it", True, ["damn"])
        assert "darn it" in serialize_srt([entry])
        assert "damn it" in serialize_srt([entry], use_filtered=False)

    def test_empty(self):
        assert serialize_srt([]) == ""

    def test_round_trip(self):
        """Test parse(serialize(parse(doc))) keeps entries."""
        content = (
            "00:00:01.5 --> 00:00:02,25\nOne\n\n"
            "5\n00:01:00,000 --> 00:01:02,000\n<b>Two</b>\nlines\n"
        )
        first = parse_srt(content)
        second = parse_srt(serialize_srt(first))

        assert len(second) == len(first)
        for a, b in zip(first, second):
            assert a.original_text == b.original_text
            assert a.start_ms == b.start_ms
            assert a.end_ms == b.end_ms


class TestSrtFiles:
    def test_write_and_read(self, tmp_path):
        parsed = parse_srt(SAMPLE_SRT)
        path = write_srt_file(parsed, tmp_path / "out" / "clean.srt")

        assert path.exists()
        assert len(parse_srt_file(path)) == 2

    def test_read_with_bom(self, tmp_path):
        path = tmp_path / "bom.srt"
        path.write_bytes("1\n00:00:01,000 --> 00:00:02,000\nHi\n".encode("utf-8-sig"))
        assert parse_srt_file(path).entries[0].original_text == "Hi"
