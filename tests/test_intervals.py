"""
Unit tests for muting range operations.

Tests TimeRange containment and the merging that keeps playback lookups
a binary search.
"""

import pytest

from subtitle_censor.models import TimeRange
from subtitle_censor.timeline.intervals import merge_ranges, pad_ranges, total_duration


class TestTimeRange:
    """Tests for TimeRange dataclass."""

    def test_duration(self):
        """Test duration calculation."""
        assert TimeRange(1000, 3500).duration_ms == 2500

    def test_contains_is_inclusive(self):
        """Test both endpoints are inside the range."""
        r = TimeRange(1000, 3000)

        assert not r.contains(999)
        assert r.contains(1000)
        assert r.contains(2000)
        assert r.contains(3000)
        assert not r.contains(3001)

    def test_overlaps(self):
        """Test overlapping and separate ranges."""
        assert TimeRange(0, 2000).overlaps(TimeRange(1000, 3000))
        assert not TimeRange(0, 1000).overlaps(TimeRange(2000, 3000))

    def test_overlaps_adjacent(self):
        """Test exactly adjacent ranges."""
        assert TimeRange(0, 1000).overlaps(TimeRange(1000, 2000))

    def test_overlaps_with_gap(self):
        """Test overlapping with gap tolerance."""
        a = TimeRange(0, 1000)
        b = TimeRange(1500, 2000)

        assert not a.overlaps(b, gap=0)
        assert a.overlaps(b, gap=500)

    def test_merge(self):
        assert TimeRange(0, 2000).merge(TimeRange(1000, 3000)) == TimeRange(0, 3000)

    def test_immutable(self):
        r = TimeRange(0, 1000)
        with pytest.raises(AttributeError):
            r.start_ms = 5


class TestMergeRanges:
    """Tests for merge_ranges function."""

    def test_empty_list(self):
        assert merge_ranges([]) == []

    def test_single_range(self):
        assert merge_ranges([TimeRange(0, 1000)]) == [TimeRange(0, 1000)]

    def test_sorts_and_merges(self):
        """Test unsorted overlapping ranges collapse."""
        ranges = [TimeRange(5000, 6000), TimeRange(0, 2000), TimeRange(1500, 3000)]
        assert merge_ranges(ranges) == [TimeRange(0, 3000), TimeRange(5000, 6000)]

    def test_contained_range(self):
        assert merge_ranges([TimeRange(0, 5000), TimeRange(1000, 2000)]) == [TimeRange(0, 5000)]

    def test_merge_with_gap(self):
        ranges = [TimeRange(0, 1000), TimeRange(1200, 2000)]
        assert len(merge_ranges(ranges)) == 2
        assert merge_ranges(ranges, gap=300) == [TimeRange(0, 2000)]


class TestPadRanges:
    def test_pad_after(self):
        assert pad_ranges([TimeRange(1000, 2000)], pad_after=500) == [TimeRange(1000, 2500)]

    def test_pad_before_clamps_at_zero(self):
        assert pad_ranges([TimeRange(100, 200)], pad_before=500) == [TimeRange(0, 200)]


class TestTotalDuration:
    def test_counts_overlap_once(self):
        assert total_duration([TimeRange(0, 2000), TimeRange(1000, 3000)]) == 3000

    def test_empty(self):
        assert total_duration([]) == 0
