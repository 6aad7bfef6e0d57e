"""
Pattern Matcher Adapter
========================

Wraps the external pattern-matching service (the ``zxcvbn`` library)
and converts its loosely-typed output into :class:`MatcherVerdict`
records.

Feedback is best-effort: missing or malformed fields fall back to safe
defaults instead of failing the analysis.

References:
    - Wheeler, D. L. (2016). zxcvbn: Low-Budget Password Strength
      Estimation. USENIX Security.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Optional, Protocol

from zxcvbn import zxcvbn

from shared.config import GaugeConfig

from gauge.core.models import MatchedToken, MatcherVerdict, PatternKind

# zxcvbn refuses longer inputs; the tail adds nothing to its verdict
MATCHER_MAX_LENGTH = 72

_USER_INPUTS_DICTIONARY = "user_inputs"


class PatternMatcher(Protocol):
    """Anything that maps a password to a :class:`MatcherVerdict`."""

    def match(self, password: str) -> MatcherVerdict: ...


def merge_word_lists(
    primary: Iterable[str], secondary: Iterable[str]
) -> tuple[str, ...]:
    """Ordered union of two word lists.

    Words are stripped and compared case-insensitively; the first
    spelling seen wins and blanks are dropped.
    """
    merged: dict[str, str] = {}
    for word in (*primary, *secondary):
        cleaned = str(word).strip()
        if cleaned:
            merged.setdefault(cleaned.lower(), cleaned)
    return tuple(merged.values())


def _as_bool(value: Any) -> bool:
    return value is True


def _as_score(value: Any) -> int:
    try:
        score = int(value)
    except (TypeError, ValueError):
        return 0
    return max(0, min(4, score))


def token_from_match(match: Mapping[str, Any]) -> MatchedToken:
    """Convert one raw ``sequence`` entry into a :class:`MatchedToken`."""
    pattern = PatternKind.parse(match.get("pattern", PatternKind.OTHER.value))
    token = match.get("token")
    return MatchedToken(
        pattern=pattern,
        token=token if isinstance(token, str) else "",
        l33t=_as_bool(match.get("l33t")),
        from_user_input=(
            pattern == PatternKind.DICTIONARY
            and match.get("dictionary_name") == _USER_INPUTS_DICTIONARY
        ),
    )


def verdict_from_raw(raw: Any) -> MatcherVerdict:
    """Convert a raw matcher result dict into a :class:`MatcherVerdict`."""
    if not isinstance(raw, Mapping):
        return MatcherVerdict()

    feedback = raw.get("feedback")
    warning = feedback.get("warning") if isinstance(feedback, Mapping) else None

    sequence = raw.get("sequence")
    tokens: tuple[MatchedToken, ...] = ()
    if isinstance(sequence, (list, tuple)):
        tokens = tuple(
            token_from_match(item) for item in sequence if isinstance(item, Mapping)
        )

    return MatcherVerdict(
        score=_as_score(raw.get("score")),
        warning=warning if isinstance(warning, str) else "",
        sequence=tokens,
    )


class ZxcvbnMatcher:
    """:class:`PatternMatcher` backed by ``zxcvbn``.

    The context and custom word lists are merged once at construction
    and handed to every call as ``user_inputs``.

    Args:
        config: Frozen tool configuration.
        backend: Callable with the ``zxcvbn(password, user_inputs)``
            signature.
    """

    def __init__(
        self,
        config: Optional[GaugeConfig] = None,
        backend: Callable[..., Any] = zxcvbn,
    ) -> None:
        config = config or GaugeConfig()
        self._user_inputs = list(
            merge_word_lists(config.context_words, config.custom_words)
        )
        self._backend = backend

    @property
    def user_inputs(self) -> tuple[str, ...]:
        return tuple(self._user_inputs)

    def match(self, password: str) -> MatcherVerdict:
        raw = self._backend(
            password[:MATCHER_MAX_LENGTH], user_inputs=list(self._user_inputs)
        )
        return verdict_from_raw(raw)
