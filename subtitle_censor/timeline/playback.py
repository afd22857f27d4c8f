"""
Playback-time lookups.

Players poll these every tick, and seeks can move the position anywhere,
so every query is a binary search over data prepared once per result.
Nothing here mutates the result it reads.
"""

import logging
from bisect import bisect_left, bisect_right
from typing import Iterable, List, Optional, Sequence

from ..models import FilteredSubtitleResult, FilterLevel, SubtitleEntry, TimeRange
from .intervals import merge_ranges, pad_ranges

logger = logging.getLogger(__name__)


def is_muted(ranges: Iterable[TimeRange], position_ms: int, level: FilterLevel) -> bool:
    """True if position_ms lies inside any range. Always False at FilterLevel.NONE."""
    if FilterLevel.parse(level) is FilterLevel.NONE:
        return False
    return any(r.contains(position_ms) for r in ranges)


def find_caption(entries: Iterable[SubtitleEntry], position_ms: int) -> Optional[SubtitleEntry]:
    """First entry whose [start_ms, end_ms] contains position_ms."""
    for entry in entries:
        if entry.contains(position_ms):
            return entry
    return None


class _CaptionIndex:
    """
    Entries sorted by start with a running maximum of end times.

    The running maximum is non-decreasing, so the earliest-starting entry
    still showing at a position is found with two bisections.
    """

    def __init__(self, entries: Iterable[SubtitleEntry]):
        self.entries: List[SubtitleEntry] = sorted(entries, key=lambda e: e.start_ms)
        self.starts = [e.start_ms for e in self.entries]
        self.max_ends: List[int] = []
        running = None
        for entry in self.entries:
            running = entry.end_ms if running is None else max(running, entry.end_ms)
            self.max_ends.append(running)

    def __len__(self) -> int:
        return len(self.entries)

    def lookup(self, position_ms: int) -> Optional[SubtitleEntry]:
        started = bisect_right(self.starts, position_ms)
        if not started:
            return None
        candidate = bisect_left(self.max_ends, position_ms, 0, started)
        if candidate < started:
            return self.entries[candidate]
        return None


class PlaybackTimeline:
    """
    Read-only query handle over a FilteredSubtitleResult.

    Args:
        result: Completed analysis result
        level: Active filter level, defaults to the level the result was built at
        mute_padding_ms: Extra silence added after each muting range
    """

    def __init__(
        self,
        result: FilteredSubtitleResult,
        level: Optional[FilterLevel] = None,
        mute_padding_ms: int = 0,
    ):
        self.result = result
        self.level = FilterLevel.parse(level) if level is not None else result.level
        self.mute_padding_ms = max(0, int(mute_padding_ms))

        ranges = result.muting_ranges
        if self.mute_padding_ms:
            ranges = pad_ranges(ranges, pad_after=self.mute_padding_ms)
        self.mute_ranges: List[TimeRange] = merge_ranges(ranges)
        self._mute_starts = [r.start_ms for r in self.mute_ranges]

        self._original = _CaptionIndex(result.original.entries)
        self._filtered = _CaptionIndex(result.filtered.entries)
        self._profane = _CaptionIndex(e for e in result.filtered.entries if e.has_profanity)

        logger.debug(
            f"Playback timeline at {self.level.value}: {len(self._filtered)} captions, "
            f"{len(self.mute_ranges)} muting ranges"
        )

    @property
    def muting_enabled(self) -> bool:
        return self.level is not FilterLevel.NONE

    def is_muted(self, position_ms: int) -> bool:
        """True while audio should be silenced. Never True at FilterLevel.NONE."""
        if not self.muting_enabled:
            return False
        i = bisect_right(self._mute_starts, position_ms) - 1
        return i >= 0 and self.mute_ranges[i].end_ms >= position_ms

    def current_caption(self, position_ms: int) -> Optional[SubtitleEntry]:
        """Caption to display, original text at FilterLevel.NONE and filtered otherwise."""
        index = self._filtered if self.muting_enabled else self._original
        return index.lookup(position_ms)

    def current_profane_caption(self, position_ms: int) -> Optional[SubtitleEntry]:
        """Filtered profane caption at position_ms, shown even with subtitles turned off."""
        if not self.muting_enabled:
            return None
        return self._profane.lookup(position_ms)

    def next_mute(self, position_ms: int) -> Optional[TimeRange]:
        """Muting range in effect at or starting after position_ms."""
        if not self.muting_enabled:
            return None
        i = bisect_right(self._mute_starts, position_ms) - 1
        if i >= 0 and self.mute_ranges[i].end_ms >= position_ms:
            return self.mute_ranges[i]
        if i + 1 < len(self.mute_ranges):
            return self.mute_ranges[i + 1]
        return None


def caption_source(result: FilteredSubtitleResult, level: FilterLevel) -> Sequence[SubtitleEntry]:
    """Entries a player should display for the given level."""
    if FilterLevel.parse(level) is FilterLevel.NONE:
        return result.original.entries
    return result.filtered.entries
