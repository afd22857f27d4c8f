"""
Immutable profanity lexicon.

A Lexicon bundles the cumulative word tiers, the replacement table, the
flexible-match set and the false-positive exceptions, validates them once
and precompiles one pattern per word. It is built at startup and shared
read-only; per-profile custom words and whitelists are passed per call.
"""

import logging
import re
from functools import lru_cache
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Pattern

from ..error_handler import LexiconConfigError
from ..models import FilterLevel
from .exceptions import FALSE_POSITIVE_EXCEPTIONS
from .wordlist import (
    DEFAULT_PLACEHOLDER,
    FLEXIBLE_WORDS,
    MILD_WORDS,
    MODERATE_WORDS,
    REPLACEMENTS,
    STRICT_WORDS,
)

logger = logging.getLogger(__name__)

# A "word" is delimited by anything that is not a letter
_NOT_AFTER_LETTER = r"(?<![^\W\d_])"
_NOT_BEFORE_LETTER = r"(?![^\W\d_])"

_FILTER_TIERS = (FilterLevel.MILD, FilterLevel.MODERATE, FilterLevel.STRICT)


def normalize_words(words: Optional[Iterable[str]]) -> FrozenSet[str]:
    """Lowercase and trim user-supplied words, dropping blanks."""
    if not words:
        return frozenset()
    return frozenset(w.strip().lower() for w in words if w and w.strip())


def compile_word_pattern(word: str, flexible: bool = False) -> Pattern:
    """
    Compile a case-insensitive pattern for one canonical word.

    Flexible words match anywhere; all others must not touch a letter on
    either side, so "ass" does not match inside "class".
    """
    escaped = re.escape(word)
    if flexible:
        return re.compile(escaped, re.IGNORECASE)
    return re.compile(f"{_NOT_AFTER_LETTER}{escaped}{_NOT_BEFORE_LETTER}", re.IGNORECASE)


@lru_cache(maxsize=1024)
def _custom_word_pattern(word: str) -> Pattern:
    return compile_word_pattern(word)


class Lexicon:
    """
    Read-only profanity configuration.

    Args:
        tiers: Cumulative word sets for MILD, MODERATE and STRICT
        replacements: Canonical word -> replacement text
        flexible_words: Words matched as substrings
        exceptions: Flexible word -> substrings that suppress a match
        placeholder: Replacement for custom words

    Raises:
        LexiconConfigError: If the tables are inconsistent
    """

    def __init__(
        self,
        tiers: Optional[Mapping[FilterLevel, Iterable[str]]] = None,
        replacements: Optional[Mapping[str, str]] = None,
        flexible_words: Optional[Iterable[str]] = None,
        exceptions: Optional[Mapping[str, Iterable[str]]] = None,
        placeholder: str = DEFAULT_PLACEHOLDER,
    ):
        if tiers is None:
            tiers = {
                FilterLevel.MILD: MILD_WORDS,
                FilterLevel.MODERATE: MODERATE_WORDS,
                FilterLevel.STRICT: STRICT_WORDS,
            }
        self._tiers: Dict[FilterLevel, FrozenSet[str]] = {
            level: frozenset(tiers.get(level, ())) for level in _FILTER_TIERS
        }
        self._tiers[FilterLevel.NONE] = frozenset()
        self._replacements: Dict[str, str] = dict(
            REPLACEMENTS if replacements is None else replacements
        )
        self._flexible: FrozenSet[str] = frozenset(
            FLEXIBLE_WORDS if flexible_words is None else flexible_words
        )
        raw_exceptions = FALSE_POSITIVE_EXCEPTIONS if exceptions is None else exceptions
        self._exceptions: Dict[str, FrozenSet[str]] = {
            word: frozenset(s.lower() for s in subs) for word, subs in raw_exceptions.items()
        }
        self.placeholder = placeholder

        self.validate()

        self._patterns: Dict[str, Pattern] = {
            word: compile_word_pattern(word, word in self._flexible)
            for word in self.strict_words
        }
        logger.debug(
            f"Lexicon ready: {len(self._patterns)} words, "
            f"{len(self._flexible)} flexible"
        )

    def validate(self) -> None:
        """Check table consistency. Called once at construction."""
        problems = []
        strict = self._tiers[FilterLevel.STRICT]

        for lower, upper in zip(_FILTER_TIERS, _FILTER_TIERS[1:]):
            missing = self._tiers[lower] - self._tiers[upper]
            if missing:
                problems.append(
                    f"{upper.value} tier is missing {lower.value} words: {sorted(missing)}"
                )

        for word in sorted(strict):
            if not word or word != word.strip().lower():
                problems.append(f"word '{word}' is not lowercase and trimmed")
            if not self._replacements.get(word):
                problems.append(f"no replacement for '{word}'")

        for word in sorted(self._flexible):
            if word not in strict:
                problems.append(f"flexible word '{word}' is not in any tier")
            if word not in self._exceptions:
                problems.append(f"no exception entry for flexible word '{word}'")

        for word in sorted(self._exceptions):
            if word not in self._flexible:
                problems.append(f"exception entry for '{word}' which is not a flexible word")

        if not self.placeholder:
            problems.append("custom word placeholder is empty")

        if problems:
            raise LexiconConfigError("; ".join(problems))

    @property
    def strict_words(self) -> FrozenSet[str]:
        return self._tiers[FilterLevel.STRICT]

    def words_for_level(self, level: FilterLevel) -> FrozenSet[str]:
        """Predefined words filtered at this level (empty for NONE)."""
        return self._tiers[FilterLevel.parse(level)]

    def level_of(self, word: str) -> Optional[FilterLevel]:
        """Lowest level that filters this word, or None if it is not predefined."""
        word = word.lower()
        for level in _FILTER_TIERS:
            if word in self._tiers[level]:
                return level
        return None

    def replacement_for(self, word: str) -> str:
        return self._replacements[word.lower()]

    def is_flexible(self, word: str) -> bool:
        return word in self._flexible

    def exceptions_for(self, word: str) -> FrozenSet[str]:
        return self._exceptions.get(word, frozenset())

    def pattern_for(self, word: str) -> Pattern:
        """
        Precompiled pattern for a predefined word, cached pattern for a custom one.

        A custom word that is also predefined uses the predefined pattern, so a
        flexible word like "fuck" keeps substring matching: as a custom word at
        NONE it turns "fucking" into the placeholder followed by "ing".
        """
        pattern = self._patterns.get(word)
        if pattern is None:
            pattern = _custom_word_pattern(word)
        return pattern

    def __contains__(self, word: str) -> bool:
        return word in self._patterns

    def __len__(self) -> int:
        return len(self._patterns)


@lru_cache(maxsize=None)
def get_default_lexicon() -> Lexicon:
    """The built-in lexicon, constructed once per process."""
    return Lexicon()
