"""
Pattern Matcher Adapter Tests

Tests for converting raw zxcvbn output into verdicts:
- Word list merging
- Defensive parsing of malformed results
- The real zxcvbn backend on a well-known password
"""

import pytest

from shared.config import GaugeConfig

from gauge.analyzers.matcher import (
    MATCHER_MAX_LENGTH,
    ZxcvbnMatcher,
    merge_word_lists,
    token_from_match,
    verdict_from_raw,
)
from gauge.core.models import MatcherVerdict, PatternKind


class RecordingBackend:
    """Stand-in for ``zxcvbn`` that records its arguments."""

    def __init__(self, result=None):
        self.result = result if result is not None else {"score": 1}
        self.calls = []

    def __call__(self, password, user_inputs=None):
        self.calls.append((password, user_inputs))
        return self.result


# =============================================================================
# Word List Tests
# =============================================================================


class TestMergeWordLists:
    """Tests for the context/custom word union."""

    def test_ordered_union(self):
        assert merge_word_lists(["alice", "acme"], ["widget"]) == ("alice", "acme", "widget")

    def test_case_insensitive_first_spelling_wins(self):
        assert merge_word_lists(["Alice"], ["alice", "ALICE", "bob"]) == ("Alice", "bob")

    def test_blanks_dropped_and_stripped(self):
        assert merge_word_lists(["  alice ", ""], ["   "]) == ("alice",)


# =============================================================================
# Raw Result Conversion Tests
# =============================================================================


class TestVerdictFromRaw:
    """Tests for best-effort conversion of matcher output."""

    def test_full_result(self):
        raw = {
            "score": 1,
            "feedback": {"warning": "This is a very common password.", "suggestions": []},
            "sequence": [
                {"pattern": "dictionary", "token": "monkey", "l33t": False,
                 "dictionary_name": "passwords"},
                {"pattern": "date", "token": "1987"},
            ],
        }
        verdict = verdict_from_raw(raw)

        assert verdict.score == 1
        assert verdict.warning == "This is a very common password."
        assert [t.pattern for t in verdict.sequence] == [PatternKind.DICTIONARY, PatternKind.DATE]
        assert verdict.sequence[0].token == "monkey"

    @pytest.mark.parametrize("raw", [None, "oops", 42, []])
    def test_non_mapping_gives_default(self, raw):
        assert verdict_from_raw(raw) == MatcherVerdict()

    def test_missing_fields_default(self):
        verdict = verdict_from_raw({"feedback": None, "sequence": "bad"})
        assert verdict.score == 0
        assert verdict.warning == ""
        assert verdict.sequence == ()

    @pytest.mark.parametrize("score,expected", [(7, 4), (-2, 0), ("3", 3), ("x", 0)])
    def test_score_clamped(self, score, expected):
        assert verdict_from_raw({"score": score}).score == expected

    def test_unknown_pattern_maps_to_other(self):
        token = token_from_match({"pattern": "bruteforce", "token": "x9"})
        assert token.pattern == PatternKind.OTHER

    def test_user_input_flag(self):
        token = token_from_match(
            {"pattern": "dictionary", "token": "alice", "dictionary_name": "user_inputs"}
        )
        assert token.from_user_input is True

    def test_l33t_requires_true(self):
        assert token_from_match({"pattern": "dictionary", "l33t": "yes"}).l33t is False
        assert token_from_match({"pattern": "dictionary", "l33t": True}).l33t is True


# =============================================================================
# Matcher Tests
# =============================================================================


class TestZxcvbnMatcher:
    """Tests for the zxcvbn-backed matcher."""

    def test_passes_merged_user_inputs(self):
        backend = RecordingBackend()
        config = GaugeConfig(context_words=("alice",), custom_words=("acme", "Alice"))
        matcher = ZxcvbnMatcher(config, backend=backend)

        matcher.match("alice-acme")

        assert backend.calls == [("alice-acme", ["alice", "acme"])]
        assert matcher.user_inputs == ("alice", "acme")

    def test_long_input_truncated(self):
        backend = RecordingBackend()
        ZxcvbnMatcher(backend=backend).match("x" * 200)
        assert len(backend.calls[0][0]) == MATCHER_MAX_LENGTH

    def test_real_backend_flags_common_password(self):
        verdict = ZxcvbnMatcher().match("password")

        assert verdict.score == 0
        assert verdict.warning
        assert verdict.sequence[0].pattern == PatternKind.DICTIONARY
        assert verdict.sequence[0].token == "password"
