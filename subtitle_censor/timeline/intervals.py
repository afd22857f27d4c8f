"""
Interval utilities for muting timelines.

Coalescing overlapping mute ranges keeps the playback lookup a plain binary
search and stops the audio layer from toggling gain between back-to-back
captions.
"""

import logging
from typing import Iterable, List

from ..models import TimeRange

logger = logging.getLogger(__name__)


def merge_ranges(ranges: Iterable[TimeRange], gap: int = 0) -> List[TimeRange]:
    """
    Merge overlapping or nearby ranges.

    Args:
        ranges: TimeRange objects in any order
        gap: Maximum gap (ms) between ranges to merge them

    Returns:
        Merged ranges, sorted by start time
    """
    sorted_ranges = sorted(ranges)
    if not sorted_ranges:
        return []

    merged: List[TimeRange] = [sorted_ranges[0]]

    for current in sorted_ranges[1:]:
        last = merged[-1]
        if last.overlaps(current, gap):
            merged[-1] = last.merge(current)
        else:
            merged.append(current)

    if len(merged) < len(sorted_ranges):
        logger.debug(f"Merged {len(sorted_ranges)} muting ranges into {len(merged)}")

    return merged


def pad_ranges(
    ranges: Iterable[TimeRange],
    pad_before: int = 0,
    pad_after: int = 0,
) -> List[TimeRange]:
    """
    Widen each range by a fixed amount on either side.

    Starts are clamped at zero.
    """
    return [
        TimeRange(
            start_ms=max(0, r.start_ms - pad_before),
            end_ms=r.end_ms + pad_after,
        )
        for r in ranges
    ]


def total_duration(ranges: Iterable[TimeRange]) -> int:
    """Milliseconds covered by the ranges, counting overlaps once."""
    return sum(r.duration_ms for r in merge_ranges(ranges))
