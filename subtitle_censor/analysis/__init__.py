"""Analysis orchestration and result caching."""

from .cache import CacheStats, NullCache, ResultCache
from .orchestrator import SubtitleAnalyzer

__all__ = ['CacheStats', 'NullCache', 'ResultCache', 'SubtitleAnalyzer']
