"""
Analysis orchestrator.

SubtitleAnalyzer ties the stages together for one (content, level) request:
parse, repair, filter every caption, then build the muting timeline. Results
are memoized per (content_id, level) in an injected cache. Failures become
None so a caller can play the title unfiltered.
"""

import logging
from typing import Callable, Dict, Hashable, Iterable, Optional

from ..error_handler import EmptyInputError, SubtitleCensorError
from ..models import FilteredSubtitleResult, FilterLevel, ParsedSubtitle, SyncOptions
from ..profanity.filter import ProfanityFilter
from ..profanity.lexicon import Lexicon, get_default_lexicon
from ..profanity.severity import DEFAULT_THRESHOLDS, SeverityThresholds
from ..subtitles.parser import parse_srt_entries
from ..subtitles.repair import repair_entries
from ..timeline.synthesizer import restore_result, synthesize
from .cache import NullCache, ResultCache

logger = logging.getLogger(__name__)

Synthesizer = Callable[..., FilteredSubtitleResult]


class SubtitleAnalyzer:
    """
    Entry point for filtering subtitles of a title.

    One analyzer is shared by every caller that should see the same cache.
    Custom words and whitelist are passed per call and are not part of the
    cache key; call invalidate() after a profile changes them.

    Args:
        lexicon: Word tables, defaults to the built-in lexicon
        cache: Result cache, defaults to a new ResultCache
        thresholds: Profane-entry counts for LOW/MEDIUM/HIGH
        sync: Default timing adjustment for analyze() calls that pass none
        synthesizer: Function building a result from a parsed document
    """

    def __init__(
        self,
        lexicon: Optional[Lexicon] = None,
        cache=None,
        thresholds: Optional[SeverityThresholds] = None,
        sync: Optional[SyncOptions] = None,
        synthesizer: Synthesizer = synthesize,
    ):
        self.lexicon = lexicon or get_default_lexicon()
        self.cache = cache if cache is not None else ResultCache()
        self.thresholds = thresholds or DEFAULT_THRESHOLDS
        self.sync = sync or SyncOptions()
        self.synthesizer = synthesizer

    @classmethod
    def from_config(cls, config, lexicon: Optional[Lexicon] = None) -> "SubtitleAnalyzer":
        """Build an analyzer from a loaded Config."""
        cache = ResultCache(config.cache.max_entries) if config.cache.enabled else NullCache()
        if lexicon is None and config.filter.placeholder != get_default_lexicon().placeholder:
            lexicon = Lexicon(placeholder=config.filter.placeholder)
        return cls(
            lexicon=lexicon,
            cache=cache,
            thresholds=config.to_thresholds(),
            sync=config.to_sync_options(),
        )

    def prepare(self, text: Optional[str], sync: Optional[SyncOptions] = None) -> ParsedSubtitle:
        """
        Parse and repair subtitle text.

        Raises:
            EmptyInputError: If no usable entry remains
        """
        sync = sync or self.sync
        if not text or not text.strip():
            raise EmptyInputError("No subtitle text provided")

        entries = parse_srt_entries(text)
        if not entries:
            raise EmptyInputError("Subtitle text contains no parseable entries")

        repaired = entries
        if sync.validate_timings or sync.repair_malformed:
            repaired = repair_entries(
                entries,
                validate_timings=sync.validate_timings,
                repair_malformed=sync.repair_malformed,
            )
        if not repaired:
            raise EmptyInputError("No subtitle entries left after repair")

        return ParsedSubtitle.from_entries(repaired)

    def analyze(
        self,
        content_id: Hashable,
        text: Optional[str],
        level: FilterLevel,
        custom_words: Iterable[str] = (),
        whitelist: Iterable[str] = (),
        sync: Optional[SyncOptions] = None,
    ) -> Optional[FilteredSubtitleResult]:
        """
        Filter a title's subtitles at one level.

        Args:
            content_id: Identifier of the title, used as the cache key with level
            text: Raw SRT document
            level: Filter level
            custom_words: Extra words to filter for this profile
            whitelist: Words never to filter for this profile
            sync: Timing adjustment, defaults to the analyzer's

        Returns:
            The filtered result, or None if the text had no usable subtitles
        """
        level = FilterLevel.parse(level)
        sync = sync or self.sync
        text_filter = ProfanityFilter(self.lexicon, custom_words, whitelist)

        def compute() -> Optional[FilteredSubtitleResult]:
            try:
                parsed = self.prepare(text, sync)
                return self.synthesizer(
                    parsed,
                    level,
                    text_filter,
                    sync=sync,
                    thresholds=self.thresholds,
                )
            except EmptyInputError as e:
                logger.warning(f"No subtitles for {content_id!r}: {e}")
                return None
            except SubtitleCensorError as e:
                logger.error(f"Analysis failed for {content_id!r} at {level.value}: {e}")
                return None

        return self.cache.get_or_compute(content_id, level, compute)

    def analyze_all_levels(
        self,
        content_id: Hashable,
        text: Optional[str],
        custom_words: Iterable[str] = (),
        whitelist: Iterable[str] = (),
        sync: Optional[SyncOptions] = None,
    ) -> Dict[FilterLevel, Optional[FilteredSubtitleResult]]:
        """Run analyze() for every filter level."""
        return {
            level: self.analyze(content_id, text, level, custom_words, whitelist, sync)
            for level in FilterLevel
        }

    def load_persisted(
        self,
        content_id: Hashable,
        level: FilterLevel,
        filtered_srt: str,
        original_srt: Optional[str] = None,
    ) -> Optional[FilteredSubtitleResult]:
        """
        Seed the cache from previously serialized subtitles.

        An existing cached result for the key wins over the persisted one.
        Returns None if the persisted text has no entries.
        """
        level = FilterLevel.parse(level)
        cached = self.cache.get(content_id, level)
        if cached is not None:
            return cached

        result = restore_result(filtered_srt, original_srt, level, self.thresholds)
        if not result.filtered.entries:
            logger.warning(f"Persisted subtitles for {content_id!r} have no entries")
            return None

        logger.info(
            f"Restored {len(result.filtered)} captions for {content_id!r} at {level.value}"
        )
        return self.cache.put_if_absent(content_id, level, result)

    def invalidate(
        self,
        content_id: Optional[Hashable] = None,
        level: Optional[FilterLevel] = None,
    ) -> int:
        """Drop cached results, e.g. after custom words or whitelist change."""
        return self.cache.invalidate(content_id, level)
