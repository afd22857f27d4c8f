"""Muting timeline construction and playback lookups."""

from .intervals import merge_ranges, pad_ranges, total_duration
from .synthesizer import apply_sync, build_stats, restore_result, synthesize
from .playback import PlaybackTimeline, caption_source, find_caption, is_muted

__all__ = [
    'merge_ranges',
    'pad_ranges',
    'total_duration',
    'apply_sync',
    'build_stats',
    'restore_result',
    'synthesize',
    'PlaybackTimeline',
    'caption_source',
    'find_caption',
    'is_muted',
]
