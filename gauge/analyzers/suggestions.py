"""
Suggestion Synthesizer
=======================

Turns the pattern matcher's token sequence into short, deduplicated
advice for the end user.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from gauge.core.models import MatchedToken, PatternKind

DEFAULT_SUGGESTION = (
    "Use a mix of uppercase letters, lowercase letters, numbers, and symbols."
)
LENGTH_SUGGESTION = "Add more characters to increase strength significantly."
MIX_SUGGESTION = "Combine different character types (letters, numbers, symbols)."
PERSONAL_INFO_SUGGESTION = (
    "Avoid using personal information easily guessable from context."
)

# Tokens this short are noise unless they are repeats
_NOISE_LENGTH = 2
_MIN_SPECIFIC = 2


def _advice_for(token: MatchedToken) -> list[str]:
    text = token.token
    kind = token.pattern

    if kind == PatternKind.DICTIONARY:
        qualifier = " (even with substitutions)" if token.l33t else ""
        advice = [f"Avoid common words like '{text}'{qualifier}."]
        if token.from_user_input:
            advice.append(PERSONAL_INFO_SUGGESTION)
        return advice
    if kind == PatternKind.SEQUENCE:
        return [f"Avoid predictable sequences like '{text}'."]
    if kind == PatternKind.SPATIAL:
        return [f"Avoid keyboard patterns like '{text}' (easy to guess)."]
    if kind == PatternKind.REPEAT:
        return [f"Avoid repeating characters like '{text}'."]
    if kind == PatternKind.DATE:
        return [f"Avoid using dates like '{text}', especially personal ones."]
    return []


def dedupe(items: Iterable[str]) -> list[str]:
    """Drop repeated strings, keeping first-seen order."""
    return list(dict.fromkeys(items))


def synthesize_suggestions(sequence: Sequence[MatchedToken]) -> list[str]:
    """Build advice from *sequence*; the result is never empty."""
    if not sequence:
        return [DEFAULT_SUGGESTION]

    suggestions: list[str] = []
    for token in sequence:
        if len(token.token) <= _NOISE_LENGTH and token.pattern != PatternKind.REPEAT:
            continue
        suggestions.extend(_advice_for(token))

    if len(suggestions) < _MIN_SPECIFIC:
        suggestions.extend((LENGTH_SUGGESTION, MIX_SUGGESTION))

    return dedupe(suggestions)
