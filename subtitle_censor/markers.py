"""
Invisible markers around injected replacement text.

Every replacement the rewriter injects is wrapped as START + text + END so
a renderer can restyle or strip it without re-running detection.
"""

import re
from typing import List

# Zero Width Space / Zero Width Non-Joiner
MARKER_START = "\u200b"
MARKER_END = "\u200c"

_MARKED_SPAN = re.compile(f"{MARKER_START}([^{MARKER_END}]*){MARKER_END}")


def wrap(text: str) -> str:
    return f"{MARKER_START}{text}{MARKER_END}"


def has_markers(text: str) -> bool:
    return MARKER_START in text and MARKER_END in text


def strip_markers(text: str) -> str:
    """Remove all marker characters, keeping the replacement text."""
    return text.replace(MARKER_START, "").replace(MARKER_END, "")


def extract_marked_spans(text: str) -> List[str]:
    """Return the replacement texts found between marker pairs, in order."""
    return [m.group(1) for m in _MARKED_SPAN.finditer(text)]


def replace_marked_spans(text: str, placeholder: str) -> str:
    """Replace every marked span (markers included) with a placeholder."""
    return _MARKED_SPAN.sub(lambda _m: placeholder, text)


def marked_regions(text: str) -> List[tuple]:
    """(start, end) offsets of every marked span, markers included."""
    return [(m.start(), m.end()) for m in _MARKED_SPAN.finditer(text)]
