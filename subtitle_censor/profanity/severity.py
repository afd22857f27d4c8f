"""
Overall profanity level of a title.

The level is derived from how many captions contain profanity. The
thresholds are heuristics and come from configuration.
"""

from dataclasses import dataclass

from ..models import ProfanityLevel


@dataclass(frozen=True)
class SeverityThresholds:
    """
    Upper bounds (inclusive) on profane caption counts per level.

    0 entries is NONE, up to low_max_entries is LOW, up to
    medium_max_entries is MEDIUM, anything above is HIGH.
    """
    low_max_entries: int = 2
    medium_max_entries: int = 10

    def __post_init__(self):
        if self.low_max_entries < 1 or self.medium_max_entries < self.low_max_entries:
            raise ValueError(
                "Severity thresholds must satisfy 1 <= low_max_entries <= medium_max_entries, "
                f"got {self.low_max_entries} and {self.medium_max_entries}"
            )


DEFAULT_THRESHOLDS = SeverityThresholds()


def classify_profanity_level(
    profane_entries: int,
    thresholds: SeverityThresholds = DEFAULT_THRESHOLDS,
) -> ProfanityLevel:
    """Map a count of profane captions to a ProfanityLevel."""
    if profane_entries <= 0:
        return ProfanityLevel.NONE
    if profane_entries <= thresholds.low_max_entries:
        return ProfanityLevel.LOW
    if profane_entries <= thresholds.medium_max_entries:
        return ProfanityLevel.MEDIUM
    return ProfanityLevel.HIGH


def profanity_percentage(profane_entries: int, total_entries: int) -> float:
    """Share of profane captions in percent, 0 for an empty document."""
    if total_entries <= 0:
        return 0.0
    return profane_entries / total_entries * 100
