"""
Rewriting detected profanity into filtered caption text.
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Tuple

from ..markers import marked_regions, wrap
from ..models import FilterLevel
from .detector import is_false_positive
from .lexicon import Lexicon, get_default_lexicon, normalize_words

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RewriteResult:
    text: str
    has_profanity: bool


def match_case(original: str, replacement: str) -> str:
    """
    Give the replacement the capitalization pattern of the original.

    "FUCK" -> "FRICK", "Fuck" -> "Frick", "fuck" -> "frick".
    """
    if len(original) > 1 and original.isupper():
        return replacement.upper()
    if original[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def active_words(
    level: FilterLevel,
    lexicon: Lexicon,
    custom_words: FrozenSet[str],
    whitelist: FrozenSet[str],
) -> FrozenSet[str]:
    """Words rewritten at a level: its predefined words plus custom words, minus whitelist."""
    return (lexicon.words_for_level(level) | custom_words) - whitelist


def _inside(regions: List[Tuple[int, int]], start: int, end: int) -> bool:
    return any(r_start < end and start < r_end for r_start, r_end in regions)


def replace_word(
    text: str,
    word: str,
    replacement_for,
    lexicon: Lexicon,
) -> str:
    """
    Replace every occurrence of one word, left to right.

    Occurrences inside an earlier replacement, and flexible occurrences that
    are part of a safe word, are copied through unchanged.
    """
    pattern = lexicon.pattern_for(word)
    flexible = lexicon.is_flexible(word)
    exceptions = lexicon.exceptions_for(word)
    protected = marked_regions(text)

    output = []
    position = 0

    for match in pattern.finditer(text):
        start, end = match.span()
        if _inside(protected, start, end):
            continue
        if flexible and is_false_positive(text, start, end, exceptions):
            continue
        output.append(text[position:start])
        output.append(wrap(replacement_for(match.group(0))))
        position = end

    if position == 0:
        return text

    output.append(text[position:])
    return "".join(output)


def rewrite(
    text: str,
    level: FilterLevel,
    detected_words: Iterable[str],
    lexicon: Optional[Lexicon] = None,
    custom_words: Optional[Iterable[str]] = None,
    whitelist: Optional[Iterable[str]] = None,
) -> RewriteResult:
    """
    Replace detected words that are filtered at the given level.

    Only words already found by detection are rewritten, longest first.
    Predefined words get their case-matched replacement, custom words get
    the placeholder. At NONE only custom words are replaced. Every
    replacement is wrapped in invisible markers.

    Args:
        text: Caption text
        level: Filter level
        detected_words: Canonical words reported by detect()
        lexicon: Word tables (defaults to the built-in lexicon)
        custom_words: User words always filtered
        whitelist: User words never filtered

    Returns:
        RewriteResult; has_profanity reflects detection, not rewriting
    """
    lexicon = lexicon or get_default_lexicon()
    level = FilterLevel.parse(level)
    detected = list(dict.fromkeys(detected_words))
    custom = normalize_words(custom_words)
    allowed = normalize_words(whitelist)

    if not detected:
        return RewriteResult(text=text, has_profanity=False)

    if level is FilterLevel.NONE:
        candidates = custom - allowed
    else:
        candidates = active_words(level, lexicon, custom, allowed)

    to_replace = sorted(
        (w for w in detected if w in candidates),
        key=lambda w: (-len(w), w),
    )

    filtered = text
    for word in to_replace:
        if word in custom:
            filtered = replace_word(filtered, word, lambda _o: lexicon.placeholder, lexicon)
        else:
            replacement = lexicon.replacement_for(word)
            filtered = replace_word(
                filtered, word, lambda o, r=replacement: match_case(o, r), lexicon
            )

    return RewriteResult(text=filtered, has_profanity=True)
