"""
Shared fixtures for the Gauge test suite.

Provides a scripted pattern matcher, a recording range-API transport
and ready-made engines wired to both, so no test touches the network.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional

import httpx
import pytest

from shared.config import GaugeConfig, PwGaugeConfig
from shared.logger import GaugeLogger

from gauge.analyzers.breach import BreachChecker, digest_parts
from gauge.core.engine import GaugeEngine
from gauge.core.models import MatchedToken, MatcherVerdict, PatternKind

# 20 characters, all four classes, no structural weakness
STRONG_PASSWORD = "Tq9#vLx2$Rm7&kWz5!Pj"


class FakeMatcher:
    """Pattern matcher returning a fixed verdict and recording its inputs."""

    def __init__(
        self,
        verdict: Optional[MatcherVerdict] = None,
        error: Optional[BaseException] = None,
    ) -> None:
        self.verdict = verdict or MatcherVerdict()
        self.error = error
        self.calls: list[str] = []

    def match(self, password: str) -> MatcherVerdict:
        self.calls.append(password)
        if self.error is not None:
            raise self.error
        return self.verdict


class RangeServer:
    """Callable for :class:`httpx.MockTransport` that serves range bodies.

    ``entries`` maps uppercase 35-character suffixes to counts.  Every
    request is recorded for later inspection.
    """

    def __init__(
        self,
        entries: Optional[dict[str, int]] = None,
        status_code: int = 200,
        body: Optional[str] = None,
    ) -> None:
        self.entries = entries or {}
        self.status_code = status_code
        self.body = body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.body is not None:
            text = self.body
        else:
            text = "\r\n".join(f"{s}:{c}" for s, c in self.entries.items())
        return httpx.Response(self.status_code, text=text)

    @classmethod
    def containing(cls, password: str, count: int, **kwargs: Any) -> RangeServer:
        _, suffix = digest_parts(password)
        entries = {"0018A45C4D1DEF81644B54AB7F969B88D65": 1, suffix: count}
        return cls(entries, **kwargs)


def make_token(
    pattern: PatternKind,
    token: str,
    *,
    l33t: bool = False,
    from_user_input: bool = False,
) -> MatchedToken:
    return MatchedToken(
        pattern=pattern, token=token, l33t=l33t, from_user_input=from_user_input
    )


def make_engine(
    server: Optional[Callable[[httpx.Request], Any]] = None,
    *,
    matcher: Optional[FakeMatcher] = None,
    breach_check_enabled: bool = True,
    algorithm: str = "sha1",
    context_words: Iterable[str] = (),
) -> GaugeEngine:
    gauge = GaugeConfig(
        breach_check_enabled=breach_check_enabled,
        breach_max_retries=0,
        context_words=tuple(context_words),
    )
    config = PwGaugeConfig(gauge=gauge)
    transport = httpx.MockTransport(server or RangeServer())
    checker = BreachChecker(
        gauge,
        transport=transport,
        algorithm=algorithm,
        logger=GaugeLogger("test.breach", console_output=False),
    )
    return GaugeEngine(
        config,
        matcher=matcher or FakeMatcher(),
        breach_checker=checker,
        logger=GaugeLogger("test.engine", console_output=False),
    )


@pytest.fixture
def strong_password() -> str:
    return STRONG_PASSWORD


@pytest.fixture
def fake_matcher() -> FakeMatcher:
    return FakeMatcher()


@pytest.fixture
def quiet_logger() -> GaugeLogger:
    return GaugeLogger("test", console_output=False)
