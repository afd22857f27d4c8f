"""
Timeline synthesis.

Runs the per-caption filter over a repaired document and collects the
filtered entries, one muting range per profane caption and the aggregate
statistics into a FilteredSubtitleResult.
"""

import logging
from collections import Counter
from dataclasses import replace
from typing import Callable, Iterable, List, Optional, Sequence

from ..markers import extract_marked_spans, has_markers, replace_marked_spans, strip_markers
from ..models import (
    FilteredSubtitleResult,
    FilterLevel,
    ParsedSubtitle,
    ProfanityStats,
    SubtitleEntry,
    SyncOptions,
    TimeRange,
)
from ..profanity.filter import FilterResult
from ..profanity.severity import (
    DEFAULT_THRESHOLDS,
    SeverityThresholds,
    classify_profanity_level,
    profanity_percentage,
)
from ..subtitles.parser import parse_srt_entries

logger = logging.getLogger(__name__)

# Shortest caption allowed after a timing transform
MIN_SYNCED_DURATION_MS = 100

# Stands in for a filtered word whose original text was not persisted
UNKNOWN_WORD_PLACEHOLDER = "***"

TextFilter = Callable[[str, FilterLevel], FilterResult]


def apply_sync(entries: Iterable[SubtitleEntry], options: SyncOptions) -> List[SubtitleEntry]:
    """
    Rescale and shift entry timestamps.

    Each time becomes round(t * speed_ratio) + offset_ms, clamped at 0.
    An end that lands closer than MIN_SYNCED_DURATION_MS to its start is
    pushed forward.
    """
    entries = list(entries)
    if options.is_identity:
        return entries

    synced = []
    for entry in entries:
        start_ms = max(0, int(round(entry.start_ms * options.speed_ratio)) + options.offset_ms)
        end_ms = int(round(entry.end_ms * options.speed_ratio)) + options.offset_ms
        end_ms = max(end_ms, start_ms + MIN_SYNCED_DURATION_MS)
        synced.append(replace(entry, start_ms=start_ms, end_ms=end_ms))

    logger.debug(
        f"Synced {len(synced)} entries (offset={options.offset_ms}ms, "
        f"speed={options.speed_ratio})"
    )
    return synced


def build_stats(
    filtered_entries: Sequence[SubtitleEntry],
    thresholds: SeverityThresholds = DEFAULT_THRESHOLDS,
) -> ProfanityStats:
    """Aggregate counts, percentage, word frequencies and level over filtered entries."""
    word_counts: Counter = Counter()
    profane = 0

    for entry in filtered_entries:
        if entry.has_profanity:
            profane += 1
            word_counts.update(entry.detected_words)

    total = len(filtered_entries)
    return ProfanityStats(
        total_entries=total,
        profanity_entries=profane,
        profanity_percentage=profanity_percentage(profane, total),
        word_counts=dict(word_counts),
        profanity_level=classify_profanity_level(profane, thresholds),
    )


def _assemble(
    original_entries: Sequence[SubtitleEntry],
    filtered_entries: Sequence[SubtitleEntry],
    level: FilterLevel,
    thresholds: SeverityThresholds,
) -> FilteredSubtitleResult:
    filtered = ParsedSubtitle.from_entries(filtered_entries)
    return FilteredSubtitleResult(
        original=ParsedSubtitle.from_entries(original_entries),
        filtered=filtered,
        muting_ranges=filtered.profanity_time_ranges,
        stats=build_stats(filtered_entries, thresholds),
        level=level,
    )


def synthesize(
    parsed: ParsedSubtitle,
    level: FilterLevel,
    text_filter: TextFilter,
    sync: Optional[SyncOptions] = None,
    thresholds: SeverityThresholds = DEFAULT_THRESHOLDS,
) -> FilteredSubtitleResult:
    """
    Filter every caption and build the muting timeline.

    Timing adjustments from `sync` are applied first, so both the original
    and filtered documents carry the synced times. Each profane caption
    contributes one muting range spanning the caption itself.

    Args:
        parsed: Repaired subtitle document
        level: Filter level to rewrite at
        text_filter: Callable running detection and rewriting on one text
        sync: Optional offset / speed adjustment
        thresholds: Profane-entry counts for the overall level

    Returns:
        FilteredSubtitleResult for this level
    """
    level = FilterLevel.parse(level)
    entries = parsed.entries
    if sync is not None:
        entries = apply_sync(entries, sync)

    filtered_entries = []
    for entry in entries:
        result = text_filter(entry.original_text, level)
        if result.has_profanity:
            entry = entry.with_filter(
                filtered_text=result.filtered_text,
                has_profanity=True,
                detected_words=result.detected_words,
            )
        filtered_entries.append(entry)

    outcome = _assemble(entries, filtered_entries, level, thresholds)

    logger.info(
        f"Filtered {outcome.stats.total_entries} captions at {level.value}: "
        f"{outcome.stats.profanity_entries} with profanity "
        f"({outcome.stats.profanity_percentage:.1f}%), "
        f"level {outcome.stats.profanity_level.value}"
    )
    return outcome


def restore_result(
    filtered_srt: str,
    original_srt: Optional[str] = None,
    level: FilterLevel = FilterLevel.MILD,
    thresholds: SeverityThresholds = DEFAULT_THRESHOLDS,
) -> FilteredSubtitleResult:
    """
    Rebuild a result from previously serialized filtered subtitles.

    Captions containing replacement markers are treated as profane and the
    marked replacement texts become their detected words. Original text is
    taken from `original_srt` when it has the same number of entries;
    otherwise each marked span is shown as UNKNOWN_WORD_PLACEHOLDER.
    """
    level = FilterLevel.parse(level)
    filtered_source = parse_srt_entries(filtered_srt)
    original_source = parse_srt_entries(original_srt) if original_srt else []

    aligned = len(original_source) == len(filtered_source)
    if original_srt and not aligned:
        logger.warning(
            f"Persisted original has {len(original_source)} entries but filtered has "
            f"{len(filtered_source)}; reconstructing original text from markers"
        )

    originals = []
    filtered_entries = []

    for position, entry in enumerate(filtered_source):
        text = entry.original_text
        marked = has_markers(text)

        if aligned:
            original_text = original_source[position].original_text
        elif marked:
            original_text = strip_markers(replace_marked_spans(text, UNKNOWN_WORD_PLACEHOLDER))
        else:
            original_text = text

        plain = replace(entry, original_text=original_text)
        originals.append(plain)

        if marked:
            words = dict.fromkeys(w.lower() for w in extract_marked_spans(text))
            filtered_entries.append(plain.with_filter(text, True, words))
        else:
            filtered_entries.append(plain)

    return _assemble(originals, filtered_entries, level, thresholds)
