"""
Summary report generation.

Creates human-readable and JSON reports of subtitle filtering results.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from ..models import FilteredSubtitleResult, FilterLevel
from ..timeline.intervals import merge_ranges, pad_ranges, total_duration

logger = logging.getLogger(__name__)

# Items listed individually in console output
MAX_LISTED = 10


def format_duration(milliseconds: int) -> str:
    """Format milliseconds as HH:MM:SS.mmm"""
    seconds = max(0, milliseconds) / 1000
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = seconds % 60

    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{secs:06.3f}"
    else:
        return f"{minutes:02d}:{secs:06.3f}"


def generate_summary(
    result: FilteredSubtitleResult,
    level: Optional[FilterLevel] = None,
    source: Optional[Path] = None,
    mute_padding_ms: int = 0,
) -> Dict[str, Any]:
    """
    Generate a summary report of one filtering run.

    Args:
        result: Analysis result
        level: Level to report, defaults to the level of the result
        source: Path of the subtitle file, if any
        mute_padding_ms: Extra mute after each range, as a player would apply it

    Returns:
        Dictionary with summary data
    """
    level = FilterLevel.parse(level) if level is not None else result.level
    stats = result.stats
    ranges = list(result.muting_ranges)
    if mute_padding_ms > 0:
        ranges = merge_ranges(pad_ranges(ranges, pad_after=mute_padding_ms))
    muted_ms = total_duration(ranges)

    summary = {
        "timestamp": datetime.now().isoformat(),
        "source": str(source) if source else None,
        "filter": {
            "level": level.value,
            "description": level.description,
        },
        "stats": {
            "total_entries": stats.total_entries,
            "profanity_entries": stats.profanity_entries,
            "profanity_percentage": round(stats.profanity_percentage, 2),
            "profanity_level": stats.profanity_level.value,
        },
        "words": dict(sorted(stats.word_counts.items(), key=lambda kv: (-kv[1], kv[0]))),
        "muting": {
            "enabled": level is not FilterLevel.NONE,
            "range_count": len(ranges),
            "muted_ms": muted_ms,
            "muted_formatted": format_duration(muted_ms),
            "ranges": [
                {
                    "start_ms": r.start_ms,
                    "end_ms": r.end_ms,
                    "start": format_duration(r.start_ms),
                    "end": format_duration(r.end_ms),
                }
                for r in ranges
            ],
        },
    }

    return summary


def print_summary(summary: Dict[str, Any]) -> None:
    """
    Print a human-readable summary to console.

    Args:
        summary: Dictionary from generate_summary
    """
    width = 50
    stats = summary["stats"]
    muting = summary["muting"]

    print()
    print("=" * width)
    print("SUBTITLE CENSOR - FILTERING COMPLETE")
    print("=" * width)
    print()

    if summary.get("source"):
        print(f"Input:  {Path(summary['source']).name}")
    print(f"Level:  {summary['filter']['level']} ({summary['filter']['description']})")
    print()

    print("-" * width)
    print("PROFANITY")
    print("-" * width)
    print(f"  Captions:          {stats['total_entries']}")
    print(f"  With profanity:    {stats['profanity_entries']} ({stats['profanity_percentage']:.1f}%)")
    print(f"  Overall level:     {stats['profanity_level']}")

    words = summary["words"]
    if words:
        print()
        print("  Most frequent:")
        for i, (word, count) in enumerate(list(words.items())[:MAX_LISTED], 1):
            print(f"    {i}. {word} x{count}")
        if len(words) > MAX_LISTED:
            print(f"    ... and {len(words) - MAX_LISTED} more")
    print()

    print("-" * width)
    print("AUDIO MUTING")
    print("-" * width)
    if not muting["enabled"]:
        print("  Disabled at this level")
    else:
        print(f"  Ranges:      {muting['range_count']}")
        print(f"  Total muted: {muting['muted_formatted']}")
        for i, r in enumerate(muting["ranges"][:MAX_LISTED], 1):
            print(f"    {i}. {r['start']} - {r['end']}")
        if muting["range_count"] > MAX_LISTED:
            print(f"    ... and {muting['range_count'] - MAX_LISTED} more")

    print("=" * width)
    print()


def save_summary_json(
    summary: Dict[str, Any],
    output_path: Path
) -> None:
    """
    Save summary to a JSON file.

    Args:
        summary: Summary dictionary
        output_path: Path for JSON output
    """
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(summary, f, indent=2, ensure_ascii=False)

    logger.info(f"Summary saved to {output_path}")


def save_mute_timeline(
    result: FilteredSubtitleResult,
    output_path: Path
) -> None:
    """
    Save a plain-text timeline of muted captions.

    Args:
        result: Analysis result
        output_path: Path for timeline output
    """
    profane = [e for e in result.filtered.entries if e.has_profanity]

    with open(output_path, 'w', encoding='utf-8') as f:
        f.write("SUBTITLE CENSOR - MUTE TIMELINE\n")
        f.write(f"Generated: {datetime.now().isoformat()}\n")
        f.write(f"Level: {result.level.value}\n")
        f.write("=" * 60 + "\n\n")

        f.write("FILTERED CAPTIONS\n")
        f.write("-" * 40 + "\n")
        for i, entry in enumerate(profane, 1):
            f.write(f"{i:4d}. {format_duration(entry.start_ms)} - {format_duration(entry.end_ms)}\n")
            f.write(f"      Words: {', '.join(entry.detected_words)}\n")
            f.write(f"      Text:  {entry.clean_display_text}\n")
        f.write("\n")

        f.write("MUTE RANGES (after merging)\n")
        f.write("-" * 40 + "\n")
        for i, r in enumerate(merge_ranges(result.muting_ranges), 1):
            f.write(f"{i:4d}. {format_duration(r.start_ms)} - {format_duration(r.end_ms)}\n")

    logger.info(f"Mute timeline saved to {output_path}")
