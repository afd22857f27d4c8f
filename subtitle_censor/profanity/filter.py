"""
Per-profile text filter.

Binds the shared lexicon to one profile's custom words and whitelist and
runs detection followed by rewriting for a single caption.
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional, Tuple

from ..models import FilterLevel
from .detector import detect
from .lexicon import Lexicon, get_default_lexicon, normalize_words
from .rewriter import rewrite

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterResult:
    """Filtered text of one caption plus what detection found."""
    filtered_text: str
    has_profanity: bool
    detected_words: Tuple[str, ...] = ()


class ProfanityFilter:
    """
    Detection and rewriting for one profile.

    Instances are immutable and safe to share between threads.

    Args:
        lexicon: Shared word tables
        custom_words: Words this profile always filters
        whitelist: Words this profile never filters
    """

    def __init__(
        self,
        lexicon: Optional[Lexicon] = None,
        custom_words: Optional[Iterable[str]] = None,
        whitelist: Optional[Iterable[str]] = None,
    ):
        self.lexicon = lexicon or get_default_lexicon()
        self.custom_words: FrozenSet[str] = normalize_words(custom_words)
        self.whitelist: FrozenSet[str] = normalize_words(whitelist)

    def __call__(self, text: str, level: FilterLevel) -> FilterResult:
        return self.filter_text(text, level)

    def filter_text(self, text: str, level: FilterLevel) -> FilterResult:
        detection = detect(text, self.lexicon, self.custom_words, self.whitelist)
        if not detection.has_profanity:
            return FilterResult(filtered_text=text, has_profanity=False)

        rewritten = rewrite(
            text,
            level,
            detection.words,
            self.lexicon,
            self.custom_words,
            self.whitelist,
        )
        return FilterResult(
            filtered_text=rewritten.text,
            has_profanity=rewritten.has_profanity,
            detected_words=detection.words,
        )
