"""
Gauge Analysis Engine
======================

Central orchestrator for the Gauge password-strength tool.
:class:`GaugeEngine` coordinates the pattern matcher, the entropy
estimator, the suggestion synthesizer and the breach checker, and
merges their outputs into one :class:`PasswordStrengthResult`.

The breach lookup is the only step that waits on I/O.  It is started as
a task before the synchronous analyzers run, so the round trip overlaps
with local computation.

References:
    - Gamma, E., Helm, R., Johnson, R., & Vlissides, J. (1994).
      Design Patterns: Elements of Reusable Object-Oriented Software.
      Addison-Wesley.  (Facade)
"""

from __future__ import annotations

import asyncio
from typing import Optional

import httpx

from shared.config import PwGaugeConfig
from shared.logger import GaugeLogger

from gauge.analyzers.breach import BreachChecker
from gauge.analyzers.crack_time import EntropyEstimator
from gauge.analyzers.matcher import PatternMatcher, ZxcvbnMatcher
from gauge.analyzers.suggestions import synthesize_suggestions
from gauge.core.models import (
    PROFILE_NAMES,
    BreachCheckResult,
    BreachStatus,
    EntropyEstimate,
    PasswordStrengthResult,
    TimeBreakdown,
)

EMPTY_WARNING = "No password provided"
EMPTY_SUGGESTION = "Enter a password to analyze"


def empty_result() -> PasswordStrengthResult:
    """The fixed verdict for an empty password."""
    return PasswordStrengthResult(
        score=0,
        crack_times_seconds={name: 0.0 for name in PROFILE_NAMES},
        crack_times_display={name: "instant" for name in PROFILE_NAMES},
        warning=EMPTY_WARNING,
        suggestions=[EMPTY_SUGGESTION],
        is_pwned=None,
        pwned_count=None,
        breach_status=BreachStatus.SKIPPED,
    )


class GaugeEngine:
    """Produces a :class:`PasswordStrengthResult` for one password.

    Usage::

        engine = GaugeEngine(PwGaugeConfig.load())
        result = await engine.analyze("correct horse battery staple")
        print(result.score, result.crack_times_display["offlineFast"])

    Collaborators can be injected; by default they are built from
    *config*, with *transport* handed to the breach checker's HTTP
    client.

    Attributes:
        config: Configuration instance.
        logger: Logger for the engine.
    """

    def __init__(
        self,
        config: Optional[PwGaugeConfig] = None,
        *,
        matcher: Optional[PatternMatcher] = None,
        estimator: Optional[EntropyEstimator] = None,
        breach_checker: Optional[BreachChecker] = None,
        logger: Optional[GaugeLogger] = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or PwGaugeConfig()
        self.logger = logger or GaugeLogger.from_config(
            "engine", self.config.global_settings
        )

        self._matcher = matcher or ZxcvbnMatcher(self.config.gauge)
        self._estimator = estimator or EntropyEstimator()
        self._breach_checker = breach_checker or BreachChecker(
            self.config.gauge,
            transport=transport,
            logger=GaugeLogger.from_config("breach", self.config.global_settings),
        )

    @property
    def breach_check_enabled(self) -> bool:
        return self.config.gauge.breach_check_enabled

    # ------------------------------------------------------------------ #
    #  Full analysis
    # ------------------------------------------------------------------ #

    async def analyze(self, password: str) -> PasswordStrengthResult:
        """Analyse *password*.

        Raises:
            DigestUnavailableError: If the breach-check digest cannot be
                computed.  No other failure escapes.
        """
        if not password:
            self.logger.debug("Empty password; returning default verdict")
            return empty_result()

        with self.logger.operation("analyze"), self.logger.timed("password analysis"):
            breach_task: Optional[asyncio.Task[BreachCheckResult]] = None
            if self.breach_check_enabled:
                # Digest computed here so a digest failure aborts before any work
                prefix, suffix = self._breach_checker.digest_parts(password)
                breach_task = asyncio.create_task(
                    self._breach_checker.lookup(prefix, suffix)
                )

            try:
                if breach_task is not None:
                    # Let the lookup reach its first network wait before the
                    # CPU-bound steps below hold the loop
                    await asyncio.sleep(0)
                verdict = self._matcher.match(password)
                estimate = self._estimator.estimate(password)
                suggestions = synthesize_suggestions(verdict.sequence)
            except BaseException:
                if breach_task is not None:
                    breach_task.cancel()
                raise

            breach = (
                await breach_task if breach_task is not None else BreachCheckResult()
            )

        self.logger.info(
            "Analysis complete",
            length=len(password),
            score=verdict.score,
            heuristics=[h.name for h in estimate.heuristics],
            breach_status=breach.status.value,
        )

        return PasswordStrengthResult(
            score=verdict.score,
            crack_times_seconds=dict(estimate.crack_times_seconds),
            crack_times_display=self.display_times(estimate),
            warning=verdict.warning,
            suggestions=suggestions,
            is_pwned=breach.is_pwned,
            pwned_count=breach.pwned_count,
            breach_status=breach.status,
            entropy=estimate,
        )

    # ------------------------------------------------------------------ #
    #  Partial analyses (CLI subcommands)
    # ------------------------------------------------------------------ #

    def estimate(self, password: str) -> EntropyEstimate:
        """Entropy estimate only; no matcher call and no network."""
        return self._estimator.estimate(password)

    async def check_breach(self, password: str) -> BreachCheckResult:
        """Breach lookup only."""
        if not password:
            return BreachCheckResult()
        return await self._breach_checker.check(password)

    @staticmethod
    def display_times(estimate: EntropyEstimate) -> dict[str, str]:
        return {
            name: TimeBreakdown.from_seconds(seconds).display()
            for name, seconds in estimate.crack_times_seconds.items()
        }


class AnalysisSession:
    """Runs analyses where each new submission supersedes the previous one.

    Suited to as-you-type checking: when :meth:`submit` is called while
    an earlier analysis is still waiting on the network, the earlier one
    is cancelled and its caller receives ``None``.

    Usage::

        session = AnalysisSession(engine)
        result = await session.submit(current_text)
        if result is not None:
            render(result)
    """

    def __init__(self, engine: GaugeEngine) -> None:
        self._engine = engine
        self._pending: Optional[asyncio.Task[PasswordStrengthResult]] = None

    async def submit(self, password: str) -> Optional[PasswordStrengthResult]:
        previous = self._pending
        if previous is not None and not previous.done():
            previous.cancel()

        task = asyncio.create_task(self._engine.analyze(password))
        self._pending = task
        try:
            return await task
        except asyncio.CancelledError:
            if self._pending is not task:
                # Superseded by a newer submission
                return None
            raise
        finally:
            if self._pending is task:
                self._pending = None

    async def cancel(self) -> None:
        """Cancel the in-flight analysis, if any, and wait for it to stop."""
        task = self._pending
        if task is None or task.done():
            return
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
