"""
Tests for subtitle_censor/subtitles/repair.py

Tests timestamp repair, overlap shifting, duplicate removal and timing
diagnostics.
"""

import random

import pytest

from subtitle_censor.models import SubtitleEntry
from subtitle_censor.subtitles.repair import (
    DEFAULT_DURATION_MS,
    detect_timing_issues,
    remove_duplicate_entries,
    repair_entries,
)


def entry(start, end, text="Line", index=None):
    return SubtitleEntry(index=index, start_ms=start, end_ms=end, original_text=text)


class TestRepairTimestamps:
    """Tests for clamping and duration repair."""

    def test_negative_start_clamped(self):
        """Test a negative start becomes zero."""
        repaired = repair_entries([entry(-500, 1000)])
        assert (repaired[0].start_ms, repaired[0].end_ms) == (0, 1000)

    def test_non_positive_duration_gets_default(self):
        """Test end <= start is replaced with start + default duration."""
        repaired = repair_entries([entry(4000, 4000), entry(9000, 8000, "Other")])

        assert repaired[0].end_ms == 4000 + DEFAULT_DURATION_MS
        assert repaired[1].end_ms == 9000 + DEFAULT_DURATION_MS

    def test_valid_entries_untouched(self):
        entries = [entry(0, 1000, "A"), entry(1000, 2000, "B")]
        assert repair_entries(entries) == entries


class TestRepairOverlaps:
    """Tests for overlap shifting."""

    def test_overlap_shifted_after_previous(self):
        """Test an overlapping start moves to 100ms after the previous end."""
        repaired = repair_entries([entry(0, 2000, "A"), entry(1500, 3000, "B")])
        assert (repaired[1].start_ms, repaired[1].end_ms) == (2100, 3000)

    def test_shift_rederives_end(self):
        """Test a shift past the end gives a default duration."""
        repaired = repair_entries([entry(0, 5000, "A"), entry(1000, 3000, "B")])
        assert (repaired[1].start_ms, repaired[1].end_ms) == (5100, 5100 + DEFAULT_DURATION_MS)

    def test_overlap_kept_without_validation(self):
        repaired = repair_entries(
            [entry(0, 2000, "A"), entry(1500, 3000, "B")],
            validate_timings=False,
        )
        assert repaired[1].start_ms == 1500

    def test_dropped_entry_does_not_count_as_previous(self):
        """Test overlap is measured against the last kept entry."""
        repaired = repair_entries([entry(0, 1000, "A"), entry(500, 9000, "   "), entry(1200, 2000, "C")])
        assert [e.original_text for e in repaired] == ["A", "C"]
        assert repaired[1].start_ms == 1200


class TestRepairText:
    def test_text_recleaned(self):
        repaired = repair_entries([entry(0, 1000, "<i>[BOB]</i>  Hi  there")])
        assert repaired[0].original_text == "Hi there"

    def test_blank_entry_dropped(self):
        assert repair_entries([entry(0, 1000, "<b></b>")]) == []

    def test_text_untouched_without_repair(self):
        repaired = repair_entries([entry(0, 1000, "<i>Hi</i>")], repair_malformed=False)
        assert repaired[0].original_text == "<i>Hi</i>"


class TestRemoveDuplicates:
    """Tests for near-duplicate caption removal."""

    def test_same_text_within_window_removed(self):
        """Test same text starting under 1000ms later is dropped."""
        entries = [entry(0, 500, "Hello"), entry(800, 1500, "hello ")]
        assert remove_duplicate_entries(entries) == [entries[0]]

    def test_same_text_outside_window_kept(self):
        entries = [entry(0, 500, "Hello"), entry(1000, 1500, "Hello")]
        assert len(remove_duplicate_entries(entries)) == 2

    def test_different_text_kept(self):
        entries = [entry(0, 500, "Hello"), entry(100, 600, "Goodbye")]
        assert len(remove_duplicate_entries(entries)) == 2

    def test_repair_removes_duplicates(self):
        repaired = repair_entries([entry(0, 400, "Hey"), entry(500, 900, "HEY"), entry(3000, 4000, "Hey")])
        assert [e.start_ms for e in repaired] == [0, 3000]


class TestRepairIdempotence:
    def test_repair_twice_is_repair_once(self):
        """Test repair(repair(x)) == repair(x) on a messy document."""
        messy = [
            entry(-100, -50, "<i>Start</i>"),
            entry(1000, 900, "Backwards"),
            entry(1500, 2500, "Overlap"),
            entry(1600, 1700, "overlap"),
            entry(2000, 8000, "{\\an8}[GUY] Long"),
            entry(2100, 2200, "  "),
            entry(2600, 2700, "Tail"),
        ]
        once = repair_entries(messy)
        assert repair_entries(once) == once

    def test_idempotent_without_validation(self):
        messy = [entry(0, 3000, "A"), entry(1000, 500, "B"), entry(1100, 1200, "b")]
        once = repair_entries(messy, validate_timings=False)
        assert repair_entries(once, validate_timings=False) == once


class TestDetectTimingIssues:
    """Tests for the timing report."""

    def test_clean_document(self):
        report = detect_timing_issues([entry(0, 1000), entry(1500, 2000, "B")])
        assert report.total_entries == 2
        assert not report.has_issues
        assert report.issues == []

    def test_reports_overlap_and_invalid_duration(self):
        report = detect_timing_issues([entry(0, 2000), entry(1000, 900, "B")])

        assert report.overlapping_entries == 1
        assert report.invalid_durations == 1
        assert report.has_issues
        assert len(report.issues) == 2

    def test_large_gap_is_not_an_issue(self):
        report = detect_timing_issues([entry(0, 1000), entry(7000, 8000, "B")])
        assert report.large_gaps == 1
        assert not report.has_issues

    def test_accepts_raw_text(self):
        content = (
            "1\n00:00:01,000 --> 00:00:03,000\nA\n\n"
            "2\n00:00:02,000 --> 00:00:04,000\nB\n"
        )
        report = detect_timing_issues(content)
        assert report.total_entries == 2
        assert report.overlapping_entries == 1


FLAG_COMBINATIONS = [(True, True), (True, False), (False, True), (False, False)]


class TestRepairIdempotenceAllModes:
    """repair(repair(x)) == repair(x) for every flag combination."""

    def test_backwards_and_duplicate_entries(self):
        """Test a duplicate and an inverted entry do not move the overlap baseline."""
        messy = [entry(972, 411, "c"), entry(5637, 4945, "c"), entry(4954, 4187, "c"), entry(1113, 1699, "c")]
        once = repair_entries(messy, validate_timings=True, repair_malformed=False)

        assert [(e.start_ms, e.end_ms) for e in once] == [(972, 411), (5637, 4945)]
        assert repair_entries(once, validate_timings=True, repair_malformed=False) == once

    def test_baseline_never_moves_backwards(self):
        repaired = repair_entries(
            [entry(0, 5000, "A"), entry(5100, 4000, "B"), entry(4500, 6000, "C")],
            validate_timings=True,
            repair_malformed=False,
        )
        assert repaired[2].start_ms == 5100

    @pytest.mark.parametrize("validate_timings,repair_malformed", FLAG_COMBINATIONS)
    def test_random_documents(self, validate_timings, repair_malformed):
        rng = random.Random(20261018)
        texts = ["c", "C ", "<i>c</i>", "d", "  ", "[BOB] d"]

        for _ in range(2000):
            messy = []
            for _ in range(rng.randint(0, 8)):
                start = rng.randint(-500, 8000)
                messy.append(entry(start, start + rng.randint(-2000, 3000), rng.choice(texts)))

            once = repair_entries(messy, validate_timings, repair_malformed)
            assert repair_entries(once, validate_timings, repair_malformed) == once, messy
