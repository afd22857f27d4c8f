"""
Core data model for subtitle filtering.

Entries, parsed documents and results are frozen dataclasses. A filter pass
never mutates an entry; it produces a new one with dataclasses.replace.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple

from .markers import strip_markers


class FilterLevel(str, Enum):
    """Filtering strictness. Each level includes every word of the levels below it."""
    NONE = "none"
    MILD = "mild"
    MODERATE = "moderate"
    STRICT = "strict"

    @property
    def rank(self) -> int:
        return _LEVEL_RANKS[self]

    @property
    def description(self) -> str:
        return _LEVEL_DESCRIPTIONS[self]

    @classmethod
    def parse(cls, value) -> "FilterLevel":
        """Accept a FilterLevel or its name/value in any case."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown filter level '{value}'. "
                f"Expected one of: {', '.join(l.value for l in cls)}"
            ) from None


_LEVEL_RANKS = {
    FilterLevel.NONE: 0,
    FilterLevel.MILD: 1,
    FilterLevel.MODERATE: 2,
    FilterLevel.STRICT: 3,
}

_LEVEL_DESCRIPTIONS = {
    FilterLevel.NONE: "No filtering - all content shown as-is",
    FilterLevel.MILD: "Filters the strongest profanity and offensive language",
    FilterLevel.MODERATE: "Filters most profanity and inappropriate language",
    FilterLevel.STRICT: "Filters all known profanity including religious expressions",
}


@dataclass(frozen=True, order=True)
class TimeRange:
    """A span of playback time during which audio is muted."""
    start_ms: int
    end_ms: int

    @property
    def duration_ms(self) -> int:
        return self.end_ms - self.start_ms

    def __repr__(self) -> str:
        return f"TimeRange({self.start_ms}-{self.end_ms}ms)"

    def contains(self, position_ms: int) -> bool:
        """Check if a time point falls within this range."""
        return self.start_ms <= position_ms <= self.end_ms

    def overlaps(self, other: "TimeRange", gap: int = 0) -> bool:
        """
        Check if this range overlaps another, considering a gap tolerance.

        Adjacent ranges (one ends where the other starts) overlap.
        """
        return self.start_ms <= (other.end_ms + gap) and other.start_ms <= (self.end_ms + gap)

    def merge(self, other: "TimeRange") -> "TimeRange":
        return TimeRange(
            start_ms=min(self.start_ms, other.start_ms),
            end_ms=max(self.end_ms, other.end_ms),
        )


class ProfanityLevel(str, Enum):
    """How much profanity a title contains overall."""
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class SubtitleEntry:
    """
    One timed caption.

    Attributes:
        index: Source sequence number (informational, may be None)
        start_ms: Start time in milliseconds
        end_ms: End time in milliseconds
        original_text: Cleaned caption text as parsed
        filtered_text: Rewritten text after a filter pass, None means "use original"
        has_profanity: True if detection found at least one word
        detected_words: Canonical words found, in first-seen order
    """
    index: Optional[int]
    start_ms: int
    end_ms: int
    original_text: str
    filtered_text: Optional[str] = None
    has_profanity: bool = False
    detected_words: Tuple[str, ...] = ()

    @property
    def duration_ms(self) -> int:
        return self.end_ms - self.start_ms

    @property
    def display_text(self) -> str:
        return self.filtered_text if self.filtered_text is not None else self.original_text

    @property
    def clean_display_text(self) -> str:
        """Display text with replacement markers removed."""
        return strip_markers(self.display_text)

    def contains(self, position_ms: int) -> bool:
        return self.start_ms <= position_ms <= self.end_ms

    def with_filter(
        self,
        filtered_text: Optional[str],
        has_profanity: bool,
        detected_words: Iterable[str] = (),
    ) -> "SubtitleEntry":
        return replace(
            self,
            filtered_text=filtered_text,
            has_profanity=has_profanity,
            detected_words=tuple(detected_words),
        )


@dataclass(frozen=True)
class ParsedSubtitle:
    """An ordered sequence of entries plus profanity summary fields."""
    entries: Tuple[SubtitleEntry, ...] = ()
    total_profanity_entries: int = 0
    profanity_time_ranges: Tuple[TimeRange, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @classmethod
    def from_entries(cls, entries: Iterable[SubtitleEntry]) -> "ParsedSubtitle":
        """Build a document, deriving the summary fields from the entries."""
        entries = tuple(entries)
        ranges = tuple(
            TimeRange(e.start_ms, e.end_ms) for e in entries if e.has_profanity
        )
        return cls(
            entries=entries,
            total_profanity_entries=len(ranges),
            profanity_time_ranges=ranges,
        )


@dataclass(frozen=True)
class ProfanityStats:
    """Aggregate profanity statistics for one filtered document."""
    total_entries: int
    profanity_entries: int
    profanity_percentage: float
    word_counts: Dict[str, int] = field(default_factory=dict)
    profanity_level: ProfanityLevel = ProfanityLevel.NONE


@dataclass(frozen=True)
class FilteredSubtitleResult:
    """
    Output of one analysis run for a (content, filter level) pair.

    `original` holds the repaired and synced entries untouched, `filtered`
    holds the same entries after the filter pass.
    """
    original: ParsedSubtitle
    filtered: ParsedSubtitle
    muting_ranges: Tuple[TimeRange, ...]
    stats: ProfanityStats
    level: FilterLevel = FilterLevel.MILD


@dataclass(frozen=True)
class SyncOptions:
    """
    Timing adjustments applied before filtering.

    Attributes:
        offset_ms: Shift added to every timestamp after scaling
        speed_ratio: Multiplier for subtitles authored against another frame rate
        validate_timings: Resolve overlaps between consecutive entries
        repair_malformed: Clamp bad timestamps and re-clean text
    """
    offset_ms: int = 0
    speed_ratio: float = 1.0
    validate_timings: bool = True
    repair_malformed: bool = True

    @property
    def is_identity(self) -> bool:
        return self.offset_ms == 0 and self.speed_ratio == 1.0
