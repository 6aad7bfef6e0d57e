"""
Gauge Core Module
==================

Data models and the exception hierarchy for the Gauge tool.  The
engine lives in :mod:`gauge.core.engine`.
"""

from gauge.core.errors import DigestUnavailableError, EmptyPasswordError, GaugeError
from gauge.core.models import (
    ATTACK_PROFILES,
    AttackProfile,
    BreachCheckResult,
    BreachStatus,
    EntropyEstimate,
    MatchedToken,
    MatcherVerdict,
    PasswordStrengthResult,
    PatternKind,
    StrengthLabel,
    TimeBreakdown,
)

__all__ = [
    "ATTACK_PROFILES",
    "AttackProfile",
    "BreachCheckResult",
    "BreachStatus",
    "DigestUnavailableError",
    "EmptyPasswordError",
    "EntropyEstimate",
    "GaugeError",
    "MatchedToken",
    "MatcherVerdict",
    "PasswordStrengthResult",
    "PatternKind",
    "StrengthLabel",
    "TimeBreakdown",
]
