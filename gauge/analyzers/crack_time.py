"""
Entropy & Attack-Time Estimator
================================

Deterministic crack-time model combining character-set entropy with a
compounding table of pattern penalties.

Raw resistance is the number of equally likely strings over the
character classes the password uses::

    combinations = charset_size ** length
    entropy      = length * log2(charset_size)

Human-chosen structure narrows the real search space, so each matching
heuristic multiplies the combination count by a fixed factor.  The
heuristics inspect the password directly and are independent of the
external pattern matcher.  Seconds to crack per attack profile are the
effective combinations divided by the profile's guess rate, floored at
one millisecond.

The estimate is comparative and explainable, not a prediction of
real-world cracking time.

References:
    - Weir, M., Aggarwal, S., Collins, M., & Stern, H. (2010). Testing
      Metrics for Password Creation Policies by Attacking Large Sets of
      Revealed Passwords. CCS.
    - Bonneau, J. (2012). The Science of Guessing: Analyzing an
      Anonymized Corpus of 70 Million Passwords. IEEE S&P.
    - NIST SP 800-63B (2017), Appendix A -- Strength of Memorized Secrets.
"""

from __future__ import annotations

import math
import re
import string
from dataclasses import dataclass
from typing import Callable, Sequence

from gauge.core.errors import EmptyPasswordError
from gauge.core.models import (
    ATTACK_PROFILES,
    AttackProfile,
    EntropyEstimate,
    HeuristicMatch,
)


# ===================================================================== #
#  Character Classes
# ===================================================================== #

_LOWER = frozenset(string.ascii_lowercase)
_UPPER = frozenset(string.ascii_uppercase)
_DIGITS = frozenset(string.digits)
_ALNUM = _LOWER | _UPPER | _DIGITS

# (predicate, class size)
_CHAR_CLASSES: tuple[tuple[Callable[[str], bool], int], ...] = (
    (lambda c: c in _LOWER, 26),
    (lambda c: c in _UPPER, 26),
    (lambda c: c in _DIGITS, 10),
    (lambda c: c not in _ALNUM, 33),
)

_DEFAULT_CHARSET = 26

MIN_SECONDS = 0.001
# 2**1000 s is roughly 3e293 years; anything above is reported at the cap
_MAX_LOG2_SECONDS = 1000.0


def _classes_present(password: str) -> int:
    return sum(1 for test, _ in _CHAR_CLASSES if any(test(c) for c in password))


# ===================================================================== #
#  Static Pattern Tables
# ===================================================================== #

# Substring checked against the lowercased password
_COMMON_PASSWORDS: frozenset[str] = frozenset({
    "password", "123456", "12345678", "qwerty", "abc123", "monkey",
    "1234567", "letmein", "trustno1", "dragon", "baseball", "iloveyou",
    "master", "sunshine", "ashley", "bailey", "passw0rd", "shadow",
    "123123", "654321", "superman", "qazwsx", "michael", "football",
    "password1", "welcome", "charlie", "donald", "login", "starwars",
    "princess", "azerty", "000000", "access", "admin", "changeme",
    "111111", "666666", "7777777", "123456789", "hunter2", "freedom",
    "whatever", "mustang", "batman", "jordan23", "secret", "p@ssw0rd",
})

# Keyboard walks; any run of four consecutive keys, forwards or
# backwards, counts.  The digit row is left to the digit-run heuristic.
_KEYBOARD_WALKS: tuple[str, ...] = (
    "qwertyuiop", "asdfghjkl", "zxcvbnm",
    "qwertzuiop", "yxcvbnm",
    "azertyuiop", "qsdfghjklm", "wxcvbn",
    "!@#$%^&*()",
    "1qaz2wsx3edc4rfv5tgb", "zaq12wsxcde3",
    "1q2w3e4r5t6y", "qazwsxedc",
)
_WALK_WINDOW = 4


def _walk_windows(walks: Sequence[str], width: int) -> frozenset[str]:
    windows: set[str] = set()
    for walk in walks:
        for candidate in (walk, walk[::-1]):
            for i in range(len(candidate) - width + 1):
                windows.add(candidate[i : i + width])
    return frozenset(windows)


_KEYBOARD_WINDOWS: frozenset[str] = _walk_windows(_KEYBOARD_WALKS, _WALK_WINDOW)

_DIGIT_RUNS: frozenset[str] = frozenset(
    [string.digits[i : i + 4] for i in range(7)]
    + [string.digits[::-1][i : i + 4] for i in range(7)]
)

_RE_CAP_DIGITS_SYMBOL = re.compile(r"[A-Z][a-z]+[0-9]+[^A-Za-z0-9]?")
_RE_CAP_DIGITS = re.compile(r"[A-Z][a-z]+[0-9]+")
_RE_CAP_TAIL = re.compile(r"[A-Z][a-z]+[^A-Za-z]+")
_RE_TRAILING_DIGITS = re.compile(r"(?:^|[^0-9])(?:[0-9]{2}|[0-9]{4})$")
_RE_SYMBOL_DIGITS = re.compile(r"[^A-Za-z0-9][0-9]+$")
_RE_YEAR = re.compile(r"(?:19|20)[0-9]{2}")
_RE_DATE_SEPARATED = re.compile(
    r"(?:0?[1-9]|[12][0-9]|3[01])[-/.](?:0?[1-9]|[12][0-9]|3[01])"
)
_RE_DATE_COMPACT = re.compile(
    r"(?:0[1-9]|1[0-2])(?:0[1-9]|[12][0-9]|3[01])(?:19|20)[0-9]{2}"
    r"|(?:0[1-9]|[12][0-9]|3[01])(?:0[1-9]|1[0-2])(?:19|20)[0-9]{2}"
)
_RE_REPEAT = re.compile(r"(.)\1\1")
_RE_LEET = re.compile(r"[A-Za-z][43@1!0][A-Za-z]")


# ===================================================================== #
#  Heuristic Predicates
# ===================================================================== #


def contains_common_password(password: str) -> bool:
    lowered = password.lower()
    return any(word in lowered for word in _COMMON_PASSWORDS)


def is_capitalized_word_digits_symbol(password: str) -> bool:
    """``Summer2024!`` -- capital, lowercase word, digits, optional symbol."""
    return _RE_CAP_DIGITS_SYMBOL.fullmatch(password) is not None


def is_capitalized_word_digits(password: str) -> bool:
    """``Summer2024`` -- capital, lowercase word, digits."""
    return _RE_CAP_DIGITS.fullmatch(password) is not None


def is_dictionary_complexity(password: str) -> bool:
    """Word padded to satisfy a composition policy (``Monkey#12``).

    At least eight characters, all four classes present, and the shape
    capital + lowercase word + tail of digits and symbols only.
    """
    return (
        len(password) >= 8
        and _classes_present(password) == len(_CHAR_CLASSES)
        and _RE_CAP_TAIL.fullmatch(password) is not None
    )


def has_trailing_digits(password: str) -> bool:
    """Ends in exactly two or exactly four digits."""
    return _RE_TRAILING_DIGITS.search(password) is not None


def has_symbol_digit_suffix(password: str) -> bool:
    return _RE_SYMBOL_DIGITS.search(password) is not None


def contains_year_or_date(password: str) -> bool:
    return any(
        rx.search(password) is not None
        for rx in (_RE_YEAR, _RE_DATE_SEPARATED, _RE_DATE_COMPACT)
    )


def contains_keyboard_walk(password: str) -> bool:
    lowered = password.lower()
    return any(
        lowered[i : i + _WALK_WINDOW] in _KEYBOARD_WINDOWS
        for i in range(len(lowered) - _WALK_WINDOW + 1)
    )


def has_repeated_characters(password: str) -> bool:
    """Three or more identical characters in a row."""
    return _RE_REPEAT.search(password) is not None


def has_leet_substitution(password: str) -> bool:
    """A vowel substitute (4 @ 3 1 ! 0) sitting between two letters."""
    return _RE_LEET.search(password) is not None


def contains_digit_run(password: str) -> bool:
    """Four digits ascending or descending by one."""
    return any(
        password[i : i + 4] in _DIGIT_RUNS for i in range(len(password) - 3)
    )


@dataclass(frozen=True, slots=True)
class PenaltyHeuristic:
    """One row of the penalty table."""

    name: str
    predicate: Callable[[str], bool]
    factor: float


PENALTY_TABLE: tuple[PenaltyHeuristic, ...] = (
    PenaltyHeuristic("common_password", contains_common_password, 1e-5),
    PenaltyHeuristic(
        "capitalized_word_digits_symbol", is_capitalized_word_digits_symbol, 1e-3
    ),
    PenaltyHeuristic("capitalized_word_digits", is_capitalized_word_digits, 1e-2),
    PenaltyHeuristic("dictionary_complexity", is_dictionary_complexity, 1e-4),
    PenaltyHeuristic("trailing_digits", has_trailing_digits, 1e-2),
    PenaltyHeuristic("symbol_digit_suffix", has_symbol_digit_suffix, 1e-2),
    PenaltyHeuristic("year_or_date", contains_year_or_date, 1e-4),
    PenaltyHeuristic("keyboard_walk", contains_keyboard_walk, 1e-5),
    PenaltyHeuristic("repeated_characters", has_repeated_characters, 1e-3),
    PenaltyHeuristic("leet_substitution", has_leet_substitution, 1e-2),
    PenaltyHeuristic("digit_run", contains_digit_run, 1e-4),
)


# ===================================================================== #
#  Estimator
# ===================================================================== #


class EntropyEstimator:
    """Estimates seconds-to-crack per attack profile.

    Usage::

        estimator = EntropyEstimator()
        estimate = estimator.estimate("Summer2024!")
        print(estimate.crack_times_seconds["offlineFast"])

    Args:
        profiles: Attack profiles to report on.
        heuristics: Penalty table, evaluated in order.
    """

    def __init__(
        self,
        profiles: Sequence[AttackProfile] = ATTACK_PROFILES,
        heuristics: Sequence[PenaltyHeuristic] = PENALTY_TABLE,
    ) -> None:
        self._profiles = tuple(profiles)
        self._heuristics = tuple(heuristics)

    @staticmethod
    def charset_size(password: str) -> int:
        """Sum of the sizes of the character classes present."""
        size = sum(
            class_size
            for test, class_size in _CHAR_CLASSES
            if any(test(c) for c in password)
        )
        return size or _DEFAULT_CHARSET

    def raw_combinations(self, password: str) -> int:
        """Exact ``charset_size ** length`` before any penalty."""
        return self.charset_size(password) ** len(password)

    def entropy_bits(self, password: str) -> float:
        return len(password) * math.log2(self.charset_size(password))

    def penalty_multiplier(
        self, password: str
    ) -> tuple[float, list[HeuristicMatch]]:
        """Compound the factor of every heuristic that matches."""
        multiplier = 1.0
        matched: list[HeuristicMatch] = []
        for heuristic in self._heuristics:
            if heuristic.predicate(password):
                multiplier *= heuristic.factor
                matched.append(
                    HeuristicMatch(name=heuristic.name, factor=heuristic.factor)
                )
        return multiplier, matched

    def estimate(self, password: str) -> EntropyEstimate:
        """Estimate crack times for a non-empty *password*.

        Raises:
            EmptyPasswordError: If *password* is empty.
        """
        if not password:
            raise EmptyPasswordError("Cannot estimate an empty password")

        charset = self.charset_size(password)
        bits = len(password) * math.log2(charset)
        multiplier, matched = self.penalty_multiplier(password)

        # log2(effective combinations); the multiplier is always > 0
        log2_effective = bits + math.log2(multiplier)
        seconds = {
            profile.name: self._seconds(log2_effective, profile.guesses_per_second)
            for profile in self._profiles
        }

        return EntropyEstimate(
            length=len(password),
            charset_size=charset,
            entropy_bits=bits,
            penalty_multiplier=multiplier,
            heuristics=matched,
            crack_times_seconds=seconds,
        )

    @staticmethod
    def _seconds(log2_combinations: float, guesses_per_second: float) -> float:
        log2_seconds = log2_combinations - math.log2(guesses_per_second)
        return max(MIN_SECONDS, 2.0 ** min(log2_seconds, _MAX_LOG2_SECONDS))


_DEFAULT_ESTIMATOR = EntropyEstimator()


def estimate_crack_times(password: str) -> dict[str, float]:
    """Seconds to crack *password* keyed by attack-profile name."""
    return _DEFAULT_ESTIMATOR.estimate(password).crack_times_seconds
