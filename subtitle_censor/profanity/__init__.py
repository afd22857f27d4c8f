"""Profanity detection subpackage."""

from .wordlist import (
    DEFAULT_PLACEHOLDER,
    FLEXIBLE_WORDS,
    MILD_WORDS,
    MODERATE_WORDS,
    REPLACEMENTS,
    STRICT_WORDS,
)
from .lexicon import Lexicon, get_default_lexicon
from .detector import DetectionResult, WordMatch, detect
from .rewriter import RewriteResult, match_case, rewrite
from .filter import FilterResult, ProfanityFilter
from .severity import DEFAULT_THRESHOLDS, SeverityThresholds, classify_profanity_level

__all__ = [
    'DEFAULT_PLACEHOLDER',
    'FLEXIBLE_WORDS',
    'MILD_WORDS',
    'MODERATE_WORDS',
    'REPLACEMENTS',
    'STRICT_WORDS',
    'Lexicon',
    'get_default_lexicon',
    'DetectionResult',
    'WordMatch',
    'detect',
    'RewriteResult',
    'match_case',
    'rewrite',
    'FilterResult',
    'ProfanityFilter',
    'DEFAULT_THRESHOLDS',
    'SeverityThresholds',
    'classify_profanity_level',
]
