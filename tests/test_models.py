"""
Model Tests

Tests for the Gauge data models:
- Time breakdown arithmetic and display
- Breach result accessors
- Result payload schema
"""

import math

import pytest

from gauge.core.models import (
    SECONDS_IN_DAY,
    SECONDS_IN_MONTH,
    SECONDS_IN_YEAR,
    AttackProfile,
    BreachCheckResult,
    BreachStatus,
    PasswordStrengthResult,
    PatternKind,
    StrengthLabel,
    TimeBreakdown,
)


# =============================================================================
# Time Breakdown Tests
# =============================================================================


class TestTimeBreakdown:
    """Tests for splitting seconds into calendar components."""

    def test_month_is_thirty_point_four_four_days(self):
        assert SECONDS_IN_MONTH == pytest.approx(30.44 * SECONDS_IN_DAY)
        assert SECONDS_IN_YEAR == 12 * SECONDS_IN_MONTH

    def test_components(self):
        parts = TimeBreakdown.from_seconds(SECONDS_IN_YEAR + 2 * SECONDS_IN_MONTH + 5)

        assert (parts.years, parts.months, parts.days) == (1, 2, 0)
        assert (parts.hours, parts.minutes, parts.seconds) == (0, 0, 5)

    @pytest.mark.parametrize(
        "seconds", [1, 59, 61, 3599, 90061, SECONDS_IN_MONTH - 1, 12345678.9, 9.9e12]
    )
    def test_total_round_trips_floored_input(self, seconds):
        assert TimeBreakdown.from_seconds(seconds).total_seconds() == math.floor(seconds)

    @pytest.mark.parametrize("seconds", [0, -5, 0.5, float("nan")])
    def test_instant(self, seconds):
        parts = TimeBreakdown.from_seconds(seconds)
        assert parts.is_instant
        assert parts.display() == "instant"

    def test_infinite_rejected(self):
        with pytest.raises(ValueError):
            TimeBreakdown.from_seconds(float("inf"))

    def test_display_singular_and_plural(self):
        assert TimeBreakdown.from_seconds(90061).display() == "1 day, 1 hour, 1 minute, 1 second"
        assert TimeBreakdown.from_seconds(125).display() == "2 minutes, 5 seconds"

    def test_display_scales_large_year_counts(self):
        parts = TimeBreakdown.from_seconds(3_200_000 * SECONDS_IN_YEAR)
        assert parts.years == 3_200_000
        assert parts.display() == "3.2 million years"

    def test_negative_component_rejected(self):
        with pytest.raises(ValueError):
            TimeBreakdown(years=-1)


# =============================================================================
# Breach Result Tests
# =============================================================================


class TestBreachCheckResult:
    """Tests for the public view of a breach lookup."""

    def test_skipped(self):
        result = BreachCheckResult()
        assert result.is_pwned is None
        assert result.pwned_count is None

    def test_found(self):
        result = BreachCheckResult(status=BreachStatus.FOUND, count=42)
        assert result.is_pwned is True
        assert result.pwned_count == 42

    @pytest.mark.parametrize("status", [BreachStatus.NOT_FOUND, BreachStatus.UNKNOWN])
    def test_not_found_and_unknown_report_zero(self, status):
        result = BreachCheckResult(status=status)
        assert result.is_pwned is False
        assert result.pwned_count == 0


# =============================================================================
# Result Schema Tests
# =============================================================================


class TestPasswordStrengthResult:
    """Tests for the unified result record."""

    def test_payload_uses_camel_case(self):
        result = PasswordStrengthResult(
            score=3,
            crack_times_seconds={"offlineFast": 12.0},
            crack_times_display={"offlineFast": "12 seconds"},
            suggestions=["x"],
            is_pwned=False,
            pwned_count=0,
            breach_status=BreachStatus.NOT_FOUND,
        )
        payload = result.to_payload()

        assert set(payload) == {
            "score",
            "crackTimesSeconds",
            "crackTimesDisplay",
            "warning",
            "suggestions",
            "isPwned",
            "pwnedCount",
            "breachStatus",
        }
        assert payload["breachStatus"] == "not_found"
        assert payload["crackTimesDisplay"] == {"offlineFast": "12 seconds"}

    def test_score_bounds(self):
        with pytest.raises(ValueError):
            PasswordStrengthResult(score=5)

    def test_strength_label(self):
        assert PasswordStrengthResult(score=0).strength == StrengthLabel.VERY_WEAK
        assert PasswordStrengthResult(score=4).strength == StrengthLabel.VERY_STRONG

    def test_breakdown_for_profile(self):
        result = PasswordStrengthResult(crack_times_seconds={"offlineSlow": 3661.0})
        assert result.breakdown("offlineSlow").display() == "1 hour, 1 minute, 1 second"


class TestEnums:
    def test_pattern_kind_parse(self):
        assert PatternKind.parse("SPATIAL") == PatternKind.SPATIAL
        assert PatternKind.parse("bruteforce") == PatternKind.OTHER

    def test_attack_profile_rate_positive(self):
        with pytest.raises(ValueError):
            AttackProfile(name="x", label="x", guesses_per_second=0)
