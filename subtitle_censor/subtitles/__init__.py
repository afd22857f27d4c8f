"""SRT parsing, serialization and repair."""

from .parser import (
    clean_subtitle_text,
    format_timestamp,
    parse_srt,
    parse_srt_entries,
    parse_srt_file,
    parse_timestamp,
    serialize_srt,
    write_srt_file,
)
from .repair import TimingReport, detect_timing_issues, remove_duplicate_entries, repair_entries

__all__ = [
    'clean_subtitle_text',
    'format_timestamp',
    'parse_srt',
    'parse_srt_entries',
    'parse_srt_file',
    'parse_timestamp',
    'serialize_srt',
    'write_srt_file',
    'TimingReport',
    'detect_timing_issues',
    'remove_duplicate_entries',
    'repair_entries',
]
