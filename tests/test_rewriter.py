"""
Tests for subtitle_censor/profanity/rewriter.py

Tests level policy, case matching, longest-first replacement and
per-occurrence false-positive skipping.
"""

import re

import pytest

from subtitle_censor.markers import extract_marked_spans, strip_markers
from subtitle_censor.models import FilterLevel
from subtitle_censor.profanity.detector import detect
from subtitle_censor.profanity.rewriter import match_case, rewrite


def filtered(text, level, custom_words=None, whitelist=None):
    detection = detect(text, custom_words=custom_words, whitelist=whitelist)
    return rewrite(text, level, detection.words, custom_words=custom_words, whitelist=whitelist)


class TestMatchCase:
    def test_uppercase(self):
        assert match_case("FUCK", "frick") == "FRICK"

    def test_capitalized(self):
        assert match_case("Fuck", "frick") == "Frick"

    def test_lowercase(self):
        assert match_case("fuck", "frick") == "frick"

    def test_mixed_case_uses_first_letter(self):
        assert match_case("fUCK", "frick") == "frick"

    def test_single_uppercase_letter(self):
        assert match_case("A", "butt") == "Butt"


class TestRewriteScenario:
    def test_mild_scenario(self):
        """Test the two profane words become two marked replacements."""
        result = filtered("You're a fucking bitch", FilterLevel.MILD)

        assert result.has_profanity
        assert result.text == "You're a \u200bfreaking\u200c \u200bjerk\u200c"
        assert re.search("\u200b\\w+\u200c \u200b\\w+\u200c", result.text)

    @pytest.mark.parametrize("original,expected", [
        ("FUCK", "FRICK"),
        ("Fuck", "Frick"),
        ("fuck", "frick"),
    ])
    def test_case_preserved(self, original, expected):
        result = filtered(original, FilterLevel.MILD)
        assert strip_markers(result.text) == expected


class TestRewriteLevels:
    """Tests for what each level rewrites."""

    def test_none_leaves_predefined_words(self):
        """Test NONE reports profanity but rewrites nothing predefined."""
        result = filtered("Damn, that fucking hell", FilterLevel.NONE)

        assert result.text == "Damn, that fucking hell"
        assert result.has_profanity

    def test_none_still_replaces_custom_words(self):
        result = filtered("What a muppet", FilterLevel.NONE, custom_words=["muppet"])
        assert result.text == "What a \u200b[filtered]\u200c"

    def test_custom_word_beats_predefined_replacement(self):
        result = filtered("damn", FilterLevel.STRICT, custom_words=["damn"])
        assert result.text == "\u200b[filtered]\u200c"

    def test_bullshit_not_filtered_at_mild(self):
        result = filtered("that's bullshit", FilterLevel.MILD)
        assert result.text == "that's bullshit"
        assert result.has_profanity

    def test_bullshit_filtered_at_moderate(self):
        """Test the longer word is replaced before the shorter one inside it."""
        result = filtered("that's bullshit", FilterLevel.MODERATE)
        assert result.text == "that's \u200bnonsense\u200c"

    def test_phrase_at_lower_level_replaces_inner_word(self):
        assert filtered("Holy shit", FilterLevel.MODERATE).text == "Holy \u200bshoot\u200c"
        assert filtered("Holy shit", FilterLevel.STRICT).text == "\u200bHoly shoot\u200c"

    def test_levels_are_monotonic(self):
        """Test each level replaces everything the level below it does."""
        text = "Damn, what the fucking hell"
        spans = {
            level: set(extract_marked_spans(filtered(text, level).text))
            for level in FilterLevel
        }

        assert spans[FilterLevel.NONE] == set()
        assert spans[FilterLevel.MILD] == {"freaking"}
        assert spans[FilterLevel.MODERATE] == {"Darn", "freaking"}
        assert spans[FilterLevel.STRICT] == {"Darn", "freaking", "heck"}

    def test_whitelist_blocks_rewrite(self):
        result = rewrite("damn it", FilterLevel.STRICT, ["damn"], whitelist=["damn"])
        assert result.text == "damn it"


class TestRewriteMechanics:
    def test_only_detected_words_rewritten(self):
        """Test rewrite does not scan for words detection did not report."""
        result = rewrite("damn it", FilterLevel.MODERATE, ["hell"])
        assert result.text == "damn it"
        assert result.has_profanity

    def test_nothing_detected(self):
        result = rewrite("damn it", FilterLevel.MODERATE, [])
        assert result.text == "damn it"
        assert not result.has_profanity

    def test_false_positive_occurrence_skipped(self):
        """Test a safe occurrence stays while a real one is replaced."""
        result = filtered("Shitake is shit", FilterLevel.MODERATE)
        assert result.text == "Shitake is \u200bshoot\u200c"

    def test_every_occurrence_replaced(self):
        result = filtered("Damn. DAMN!", FilterLevel.MODERATE)
        assert result.text == "\u200bDarn\u200c. \u200bDARN\u200c!"

    def test_compound_flexible_match(self):
        result = filtered("a shitshow", FilterLevel.MODERATE)
        assert result.text == "a \u200bshoot\u200cshow"
