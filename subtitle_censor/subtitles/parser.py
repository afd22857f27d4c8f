"""
Subtitle Parsing Module.

Parses SRT-style timed text into SubtitleEntry objects and serializes
them back. Parsing is forgiving: a block with a malformed timestamp is
skipped and the rest of the document still parses.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from ..error_handler import ParseError
from ..models import ParsedSubtitle, SubtitleEntry

logger = logging.getLogger(__name__)

_TIMESTAMP = r"(\d+):(\d{1,2}):(\d{1,2})(?:[,.](\d+))?"
_TIMESTAMP_RE = re.compile(rf"^{_TIMESTAMP}$")
_TIMESTAMP_LINE_RE = re.compile(rf"^\s*{_TIMESTAMP}\s*-->\s*{_TIMESTAMP}")
_INDEX_LINE_RE = re.compile(r"^\d+$", re.ASCII)

_HTML_TAG_RE = re.compile(r"<[^>]*>")
_BRACE_TAG_RE = re.compile(r"\{[^}]*\}")
_SPEAKER_LABEL_RE = re.compile(r"^[ \t]*(?:\[[^\]\n]*\][ \t]*)+", re.MULTILINE)
_WHITESPACE_RE = re.compile(r"\s+")


def clean_subtitle_text(text: str) -> str:
    """
    Strip formatting from caption text.

    Removes <html> tags, {brace} styling and leading [SPEAKER] labels on
    each line, then collapses whitespace. Safe to run more than once.
    """
    text = _HTML_TAG_RE.sub("", text)
    text = _BRACE_TAG_RE.sub("", text)
    text = _SPEAKER_LABEL_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def _to_ms(hours: str, minutes: str, seconds: str, fraction: Optional[str]) -> int:
    millis = int((fraction or "0").ljust(3, "0")[:3])
    return (int(hours) * 3600 + int(minutes) * 60 + int(seconds)) * 1000 + millis


def parse_timestamp(value: str) -> int:
    """
    Convert an SRT timestamp (00:00:20,000 or 00:00:20.000) to milliseconds.

    Raises:
        ParseError: If the value is not a timestamp
    """
    match = _TIMESTAMP_RE.match(value.strip())
    if not match:
        raise ParseError(f"invalid timestamp '{value}'")
    return _to_ms(*match.groups())


def parse_timestamp_line(line: str, line_number: Optional[int] = None) -> Tuple[int, int]:
    """
    Parse a 'start --> end' line into (start_ms, end_ms).

    Trailing content after the end timestamp (position hints) is ignored.

    Raises:
        ParseError: If either side is malformed
    """
    match = _TIMESTAMP_LINE_RE.match(line)
    if not match:
        raise ParseError(f"malformed timing line '{line.strip()}'", line_number, line)
    groups = match.groups()
    return _to_ms(*groups[:4]), _to_ms(*groups[4:])


def format_timestamp(milliseconds: int) -> str:
    """Format milliseconds as HH:MM:SS,mmm."""
    milliseconds = max(0, int(milliseconds))
    hours = milliseconds // 3_600_000
    minutes = (milliseconds % 3_600_000) // 60_000
    seconds = (milliseconds % 60_000) // 1000
    millis = milliseconds % 1000
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{millis:03d}"


class _BlockBuilder:
    """Accumulates the lines of one subtitle block."""

    def __init__(self):
        self.index: Optional[int] = None
        self.times: Optional[Tuple[int, int]] = None
        self.lines: List[str] = []
        self.skipping = False

    def build(self) -> Optional[SubtitleEntry]:
        if self.times is None or not self.lines:
            return None
        text = clean_subtitle_text("\n".join(self.lines))
        if not text:
            return None
        return SubtitleEntry(
            index=self.index,
            start_ms=self.times[0],
            end_ms=self.times[1],
            original_text=text,
        )


def parse_srt_entries(content: str) -> List[SubtitleEntry]:
    """
    Parse SRT content into a list of entries.

    Each block is an optional sequence number, a timing line and one or
    more text lines, terminated by a blank line or end of input.
    """
    entries: List[SubtitleEntry] = []
    skipped = 0
    block = _BlockBuilder()

    def flush():
        entry = block.build()
        if entry is not None:
            entries.append(entry)

    content = content.lstrip("\ufeff")

    for line_number, raw_line in enumerate(content.splitlines(), 1):
        line = raw_line.strip()

        if not line:
            flush()
            block = _BlockBuilder()
            continue

        # Inside a timed block only a well-formed timing line starts the next block
        in_text = block.times is not None or block.skipping
        if "-->" in line and (not in_text or _TIMESTAMP_LINE_RE.match(line)):
            carried_index = None
            if in_text:
                # Next block started without a blank separator
                if block.lines and _INDEX_LINE_RE.match(block.lines[-1]):
                    carried_index = int(block.lines.pop())
                flush()
                block = _BlockBuilder()
            elif block.index is not None:
                carried_index = block.index

            try:
                block.times = parse_timestamp_line(line, line_number)
            except ParseError as e:
                logger.debug(f"Skipping subtitle block: {e}")
                skipped += 1
                block.skipping = True
            block.index = carried_index
            continue

        if block.skipping:
            continue

        if block.times is None:
            if _INDEX_LINE_RE.match(line):
                block.index = int(line)
            else:
                logger.debug(f"Ignoring text outside a subtitle block at line {line_number}")
            continue

        block.lines.append(line)

    flush()

    if skipped:
        logger.warning(f"Skipped {skipped} subtitle block(s) with malformed timestamps")
    logger.debug(f"Parsed {len(entries)} subtitle entries")
    return entries


def parse_srt(content: str) -> ParsedSubtitle:
    """Parse SRT content into a ParsedSubtitle."""
    return ParsedSubtitle.from_entries(parse_srt_entries(content))


def parse_srt_file(srt_path: Path) -> ParsedSubtitle:
    """Read and parse an SRT file (UTF-8, BOM tolerated)."""
    content = Path(srt_path).read_text(encoding="utf-8-sig")
    parsed = parse_srt(content)
    logger.info(f"Parsed {len(parsed)} subtitle entries from {Path(srt_path).name}")
    return parsed


def serialize_srt(
    subtitle: Union[ParsedSubtitle, Iterable[SubtitleEntry]],
    use_filtered: bool = True,
) -> str:
    """
    Format entries back to SRT content.

    Entries are renumbered from 1. With use_filtered, each entry's filtered
    text is written when present, otherwise its original text.
    """
    entries = subtitle.entries if isinstance(subtitle, ParsedSubtitle) else list(subtitle)
    blocks = []

    for number, entry in enumerate(entries, 1):
        text = entry.display_text if use_filtered else entry.original_text
        blocks.append(
            f"{number}\n"
            f"{format_timestamp(entry.start_ms)} --> {format_timestamp(entry.end_ms)}\n"
            f"{text}"
        )

    if not blocks:
        return ""
    return "\n\n".join(blocks) + "\n"


def write_srt_file(
    subtitle: Union[ParsedSubtitle, Iterable[SubtitleEntry]],
    output_path: Path,
    use_filtered: bool = True,
) -> Path:
    """Serialize entries and write them to output_path."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(serialize_srt(subtitle, use_filtered), encoding="utf-8")
    logger.info(f"Wrote subtitles to {output_path}")
    return output_path
