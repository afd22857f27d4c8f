"""
Subtitle Censor
===============

Filters profanity out of SRT subtitles and derives the time ranges during
which a player should mute audio.

All processing is local and in-memory. Fetching subtitles and persisting
results are left to the caller.
"""

__version__ = "0.1.0"
__author__ = "Subtitle Censor"

# Export key classes for convenience
from .models import (
    FilteredSubtitleResult,
    FilterLevel,
    ParsedSubtitle,
    ProfanityLevel,
    ProfanityStats,
    SubtitleEntry,
    SyncOptions,
    TimeRange,
)
from .analysis import ResultCache, SubtitleAnalyzer
from .timeline import PlaybackTimeline
