"""
Gauge Core Data Models
=======================

Pydantic models for the Gauge password-strength engine: attacker
profiles, matched weakness tokens, entropy estimates, crack-time
breakdowns, breach-check outcomes and the unified result record handed
to the presentation layer.

Every model except the attack-profile table is created per analysis
and discarded once the caller has consumed the result.

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines --
      Authentication and Lifecycle Management.
    - Wheeler, D. L. (2016). zxcvbn: Low-Budget Password Strength
      Estimation. USENIX Security.
"""

from __future__ import annotations

import enum
import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ===================================================================== #
#  Enumerations
# ===================================================================== #


class PatternKind(str, enum.Enum):
    """Kind of weakness the pattern matcher found in a token."""

    DICTIONARY = "dictionary"
    SEQUENCE = "sequence"
    SPATIAL = "spatial"
    REPEAT = "repeat"
    DATE = "date"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Any) -> PatternKind:
        """Map a raw pattern name to a kind; unknown names become OTHER."""
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.OTHER


class BreachStatus(str, enum.Enum):
    """Outcome of the k-Anonymity breach lookup.

    ``UNKNOWN`` means the lookup was attempted and failed; it is reported
    like ``NOT_FOUND`` for display but kept distinct for callers that
    need to tell "not breached" from "could not check".
    """

    FOUND = "found"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"
    SKIPPED = "skipped"


class StrengthLabel(str, enum.Enum):
    """Qualitative label for the 0-4 score."""

    VERY_WEAK = "very_weak"
    WEAK = "weak"
    FAIR = "fair"
    STRONG = "strong"
    VERY_STRONG = "very_strong"

    @classmethod
    def from_score(cls, score: int) -> StrengthLabel:
        order = list(cls)
        return order[max(0, min(len(order) - 1, score))]


# ===================================================================== #
#  Attack Profiles
# ===================================================================== #


class AttackProfile(BaseModel):
    """A named assumption about attacker throughput.

    Attributes:
        name: Key used in the result schema (e.g. ``offlineFast``).
        label: Human-readable description.
        guesses_per_second: Attempts per second.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    label: str
    guesses_per_second: float = Field(..., gt=0)


ATTACK_PROFILES: tuple[AttackProfile, ...] = (
    AttackProfile(
        name="onlineThrottled",
        label="Online attack, throttled (100 guesses/hour)",
        guesses_per_second=100 / 3600,
    ),
    AttackProfile(
        name="onlineUnthrottled",
        label="Online attack, unthrottled (10 guesses/second)",
        guesses_per_second=10,
    ),
    AttackProfile(
        name="offlineSlow",
        label="Offline attack, slow hash (1e4 guesses/second)",
        guesses_per_second=1e4,
    ),
    AttackProfile(
        name="offlineFast",
        label="Offline attack, fast hash (1e10 guesses/second)",
        guesses_per_second=1e10,
    ),
)

PROFILE_NAMES: tuple[str, ...] = tuple(p.name for p in ATTACK_PROFILES)


# ===================================================================== #
#  Pattern Matcher Output
# ===================================================================== #


class MatchedToken(BaseModel):
    """One weakness token reported by the pattern matcher.

    Attributes:
        pattern: Kind of weakness.
        token: Matched substring of the password.
        l33t: The match relied on letter/number substitution.
        from_user_input: The word came from user-supplied context.
    """

    model_config = ConfigDict(frozen=True)

    pattern: PatternKind = PatternKind.OTHER
    token: str = ""
    l33t: bool = False
    from_user_input: bool = False


class MatcherVerdict(BaseModel):
    """Score, warning and token sequence from the pattern matcher."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(default=0, ge=0, le=4)
    warning: str = ""
    sequence: tuple[MatchedToken, ...] = ()


# ===================================================================== #
#  Entropy Estimate
# ===================================================================== #


class HeuristicMatch(BaseModel):
    """A penalty heuristic that fired, with the factor it applied."""

    name: str
    factor: float


class EntropyEstimate(BaseModel):
    """Entropy-based crack-time estimate for one password.

    Attributes:
        length: Password length in characters.
        charset_size: Sum of the sizes of the character classes used.
        entropy_bits: ``length * log2(charset_size)``.
        penalty_multiplier: Product of the factors of every heuristic
            that fired (1.0 when none did).
        heuristics: Heuristics that fired, in table order.
        crack_times_seconds: Seconds to crack keyed by profile name.
    """

    length: int = 0
    charset_size: int = 0
    entropy_bits: float = 0.0
    penalty_multiplier: float = 1.0
    heuristics: list[HeuristicMatch] = Field(default_factory=list)
    crack_times_seconds: dict[str, float] = Field(default_factory=dict)


# ===================================================================== #
#  Time Breakdown
# ===================================================================== #

SECONDS_IN_MINUTE = 60
SECONDS_IN_HOUR = 60 * SECONDS_IN_MINUTE
SECONDS_IN_DAY = 24 * SECONDS_IN_HOUR
SECONDS_IN_MONTH = 2_630_016  # 30.44 days
SECONDS_IN_YEAR = 12 * SECONDS_IN_MONTH

_UNITS: tuple[tuple[str, int], ...] = (
    ("years", SECONDS_IN_YEAR),
    ("months", SECONDS_IN_MONTH),
    ("days", SECONDS_IN_DAY),
    ("hours", SECONDS_IN_HOUR),
    ("minutes", SECONDS_IN_MINUTE),
    ("seconds", 1),
)

_YEAR_SCALES: tuple[tuple[int, str], ...] = (
    (10 ** 12, "trillion"),
    (10 ** 9, "billion"),
    (10 ** 6, "million"),
    (10 ** 3, "thousand"),
)


class TimeBreakdown(BaseModel):
    """A duration split into calendar-like components.

    A month is 30.44 days and a year is twelve such months.  All-zero
    components mean "instant".
    """

    model_config = ConfigDict(frozen=True)

    years: int = Field(default=0, ge=0)
    months: int = Field(default=0, ge=0)
    days: int = Field(default=0, ge=0)
    hours: int = Field(default=0, ge=0)
    minutes: int = Field(default=0, ge=0)
    seconds: int = Field(default=0, ge=0)

    @classmethod
    def from_seconds(cls, total_seconds: float) -> TimeBreakdown:
        """Decompose *total_seconds* (floored) into components.

        Raises:
            ValueError: If *total_seconds* is infinite.
        """
        if math.isnan(total_seconds) or total_seconds <= 0:
            return cls()
        if math.isinf(total_seconds):
            raise ValueError("Cannot break down an infinite duration")

        remainder = math.floor(total_seconds)
        parts: dict[str, int] = {}
        for name, size in _UNITS:
            parts[name], remainder = divmod(remainder, size)
        return cls(**parts)

    def total_seconds(self) -> int:
        """Reconstruct the floored total from the components."""
        return sum(getattr(self, name) * size for name, size in _UNITS)

    @property
    def is_instant(self) -> bool:
        return self.total_seconds() == 0

    def display(self) -> str:
        """Render the non-zero components, largest first.

        Durations of a thousand years or more collapse to a scaled year
        count (``"3.2 million years"``).
        """
        if self.is_instant:
            return "instant"

        if self.years >= 1000:
            for scale, word in _YEAR_SCALES:
                if self.years >= scale:
                    value = self.years / scale
                    if value >= 1000:
                        return f"{value:.1e} {word} years"
                    return f"{value:.1f} {word} years"

        pieces = []
        for name, _size in _UNITS:
            value = getattr(self, name)
            if value:
                unit = name if value != 1 else name[:-1]
                pieces.append(f"{value} {unit}")
        return ", ".join(pieces)


# ===================================================================== #
#  Breach Check
# ===================================================================== #


class BreachCheckResult(BaseModel):
    """Outcome of a k-Anonymity breach lookup."""

    status: BreachStatus = BreachStatus.SKIPPED
    count: int = Field(default=0, ge=0)

    @property
    def is_pwned(self) -> Optional[bool]:
        """True/False once a check was attempted, ``None`` when skipped."""
        if self.status == BreachStatus.SKIPPED:
            return None
        return self.status == BreachStatus.FOUND

    @property
    def pwned_count(self) -> Optional[int]:
        if self.status == BreachStatus.SKIPPED:
            return None
        return self.count if self.status == BreachStatus.FOUND else 0


# ===================================================================== #
#  Unified Result
# ===================================================================== #


class PasswordStrengthResult(BaseModel):
    """Complete verdict for one password.

    Attributes:
        score: Coarse strength score from the pattern matcher, 0-4.
        crack_times_seconds: Estimated seconds to crack per profile name.
        crack_times_display: Human-readable form of each estimate.
        warning: Matcher warning (may be empty).
        suggestions: Ordered, unique advisory strings.
        is_pwned: Breach exposure, ``None`` when no check was attempted.
        pwned_count: Occurrences in the breach corpus, ``None`` when no
            check was attempted.
        breach_status: Detailed breach-check outcome.
        entropy: Estimator detail; absent for the empty password.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    score: int = Field(default=0, ge=0, le=4)
    crack_times_seconds: dict[str, float] = Field(default_factory=dict)
    crack_times_display: dict[str, str] = Field(default_factory=dict)
    warning: str = ""
    suggestions: list[str] = Field(default_factory=list)
    is_pwned: Optional[bool] = None
    pwned_count: Optional[int] = Field(default=None, ge=0)
    breach_status: BreachStatus = BreachStatus.SKIPPED
    entropy: Optional[EntropyEstimate] = None

    @property
    def strength(self) -> StrengthLabel:
        return StrengthLabel.from_score(self.score)

    def breakdown(self, profile_name: str) -> TimeBreakdown:
        """Time breakdown of the estimate for *profile_name*."""
        return TimeBreakdown.from_seconds(self.crack_times_seconds[profile_name])

    def to_payload(self) -> dict[str, Any]:
        """Serialise with camelCase keys for the presentation layer."""
        return self.model_dump(by_alias=True, mode="json", exclude={"entropy"})
