"""
Defensive repair of parsed subtitle entries.

Third-party subtitle files routinely contain zero-length captions,
overlapping timestamps and flicker duplicates. repair_entries() fixes
these once, after parsing and before any filter pass.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional, Union

from ..models import SubtitleEntry
from .parser import clean_subtitle_text, parse_srt_entries

logger = logging.getLogger(__name__)

# Duration given to captions whose end is not after their start
DEFAULT_DURATION_MS = 2000
# Gap inserted after the previous caption when two overlap
OVERLAP_SHIFT_MS = 100
# Same-text captions starting closer than this are flicker duplicates
DUPLICATE_WINDOW_MS = 1000
# Silence between captions reported as a large gap
LARGE_GAP_MS = 5000


def repair_entries(
    entries: Iterable[SubtitleEntry],
    validate_timings: bool = True,
    repair_malformed: bool = True,
) -> List[SubtitleEntry]:
    """
    Repair timestamps and text of parsed entries.

    Per entry, in order: clamp a negative start to 0, give a non-positive
    duration DEFAULT_DURATION_MS, move a start that overlaps the previous
    caption to just after it, re-clean the text, drop it if blank or if it
    repeats the last kept caption. Overlaps are measured against the latest
    end among kept captions. Running it twice changes nothing.

    Args:
        entries: Parsed entries in source order
        validate_timings: Move starts that overlap the previous entry
        repair_malformed: Clamp bad timestamps and re-clean text

    Returns:
        New list of repaired entries
    """
    repaired: List[SubtitleEntry] = []
    last_end_ms = 0
    dropped = 0
    duplicates = 0

    for entry in entries:
        start_ms, end_ms, text = entry.start_ms, entry.end_ms, entry.original_text

        if repair_malformed:
            if start_ms < 0:
                start_ms = 0
            if end_ms <= start_ms:
                end_ms = start_ms + DEFAULT_DURATION_MS

        if validate_timings and start_ms < last_end_ms:
            start_ms = last_end_ms + OVERLAP_SHIFT_MS
            if end_ms <= start_ms:
                end_ms = start_ms + DEFAULT_DURATION_MS

        if repair_malformed:
            text = clean_subtitle_text(text)

        if not text.strip():
            dropped += 1
            continue

        if (start_ms, end_ms, text) != (entry.start_ms, entry.end_ms, entry.original_text):
            entry = replace(entry, start_ms=start_ms, end_ms=end_ms, original_text=text)

        if repaired and _is_duplicate(entry, repaired[-1]):
            duplicates += 1
            continue

        repaired.append(entry)
        last_end_ms = max(last_end_ms, entry.end_ms)

    if dropped or duplicates:
        logger.debug(f"Repair dropped {dropped} blank and {duplicates} duplicate entries")

    return repaired


def _is_duplicate(entry: SubtitleEntry, previous: SubtitleEntry) -> bool:
    same_text = entry.original_text.strip().lower() == previous.original_text.strip().lower()
    return same_text and abs(entry.start_ms - previous.start_ms) < DUPLICATE_WINDOW_MS


def remove_duplicate_entries(entries: Iterable[SubtitleEntry]) -> List[SubtitleEntry]:
    """Drop entries repeating the previous kept entry's text within DUPLICATE_WINDOW_MS."""
    unique: List[SubtitleEntry] = []
    last: Optional[SubtitleEntry] = None

    for entry in entries:
        if last is not None and _is_duplicate(entry, last):
            continue
        unique.append(entry)
        last = entry

    return unique


@dataclass
class TimingReport:
    """Timing problems found in an unrepaired subtitle document."""
    total_entries: int = 0
    overlapping_entries: int = 0
    large_gaps: int = 0
    invalid_durations: int = 0
    issues: List[str] = field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        return bool(self.overlapping_entries or self.invalid_durations)


def detect_timing_issues(subtitles: Union[str, Iterable[SubtitleEntry]]) -> TimingReport:
    """
    Report overlaps, large gaps and invalid durations without fixing them.

    Args:
        subtitles: Raw SRT content or already-parsed entries
    """
    if isinstance(subtitles, str):
        entries = parse_srt_entries(subtitles)
    else:
        entries = list(subtitles)

    report = TimingReport(total_entries=len(entries))

    for position, entry in enumerate(entries):
        number = position + 1
        if entry.end_ms <= entry.start_ms:
            report.invalid_durations += 1
            report.issues.append(
                f"Entry {number}: Invalid duration ({entry.start_ms} -> {entry.end_ms})"
            )

        if position > 0:
            previous = entries[position - 1]
            if entry.start_ms < previous.end_ms:
                report.overlapping_entries += 1
                report.issues.append(f"Entry {number}: Overlaps with previous entry")
            elif entry.start_ms - previous.end_ms > LARGE_GAP_MS:
                report.large_gaps += 1

    return report
