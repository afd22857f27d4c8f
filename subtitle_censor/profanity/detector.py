"""
Profanity detection in caption text.

Detection always scans for every STRICT word plus the caller's custom
words, whatever level is being filtered, so detected words and statistics
are the same at every level. Only the rewriting depends on the level.
"""

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple

from .lexicon import Lexicon, get_default_lexicon, normalize_words

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WordMatch:
    """One occurrence of a canonical word in the text."""
    start: int
    end: int
    word: str


@dataclass(frozen=True)
class DetectionResult:
    """
    Result of scanning one text.

    Attributes:
        words: Canonical words found, each once, in order of first occurrence
        matches: Every surviving occurrence, ordered by position
    """
    words: Tuple[str, ...] = ()
    matches: Tuple[WordMatch, ...] = ()

    @property
    def has_profanity(self) -> bool:
        return bool(self.matches)


def letter_run(text: str, start: int, end: int) -> Tuple[int, int]:
    """Widen [start, end) to the maximal run of letters around it."""
    while start > 0 and text[start - 1].isalpha():
        start -= 1
    while end < len(text) and text[end].isalpha():
        end += 1
    return start, end


def is_false_positive(text: str, start: int, end: int, exceptions: Iterable[str]) -> bool:
    """
    True if the letters around a match form a known safe word.

    "shitake" contains "shit", but the surrounding run "shitake" contains
    the exception "shitake", so the match is discarded.
    """
    if not exceptions:
        return False
    run_start, run_end = letter_run(text, start, end)
    surrounding = text[run_start:run_end].lower()
    return any(exception in surrounding for exception in exceptions)


def find_word_matches(text: str, word: str, lexicon: Lexicon) -> Iterator[WordMatch]:
    """Yield occurrences of one canonical word, skipping false positives."""
    pattern = lexicon.pattern_for(word)
    flexible = lexicon.is_flexible(word)
    exceptions = lexicon.exceptions_for(word) if flexible else frozenset()

    for match in pattern.finditer(text):
        if flexible and is_false_positive(text, match.start(), match.end(), exceptions):
            logger.debug(f"Ignoring '{match.group(0)}' inside a safe word")
            continue
        yield WordMatch(match.start(), match.end(), word)


def candidate_words(
    lexicon: Lexicon,
    custom_words: FrozenSet[str],
    whitelist: FrozenSet[str],
) -> List[str]:
    """STRICT words plus custom words minus whitelist, longest first."""
    candidates = (lexicon.strict_words | custom_words) - whitelist
    return sorted(candidates, key=lambda w: (-len(w), w))


def detect(
    text: str,
    lexicon: Optional[Lexicon] = None,
    custom_words: Optional[Iterable[str]] = None,
    whitelist: Optional[Iterable[str]] = None,
) -> DetectionResult:
    """
    Find every profane word in a text.

    Every canonical word with at least one surviving match is reported,
    including words found inside a longer word's match: "holy shit" yields
    both "holy shit" and "shit", so a level that only filters "shit" still
    rewrites it.

    Args:
        text: Caption text
        lexicon: Word tables (defaults to the built-in lexicon)
        custom_words: Extra words always treated as profane
        whitelist: Words never treated as profane

    Returns:
        DetectionResult with canonical words and match spans
    """
    if not text:
        return DetectionResult()

    lexicon = lexicon or get_default_lexicon()
    custom = normalize_words(custom_words)
    allowed = normalize_words(whitelist)

    found: List[WordMatch] = []
    first_seen: Dict[str, int] = {}

    for word in candidate_words(lexicon, custom, allowed):
        for match in find_word_matches(text, word, lexicon):
            found.append(match)
            first_seen.setdefault(word, match.start)

    if not found:
        return DetectionResult()

    words = sorted(first_seen, key=lambda w: (first_seen[w], -len(w), w))
    matches = sorted(found, key=lambda m: (m.start, -(m.end - m.start), m.word))

    return DetectionResult(words=tuple(words), matches=tuple(matches))
