"""
Gauge Console Output
=====================

Rich-based rendering of a :class:`PasswordStrengthResult`: strength
meter, crack-time table with per-profile breakdowns, suggestions and
breach exposure.

References:
    - Rich Library Documentation. https://rich.readthedocs.io/
"""

from __future__ import annotations

from typing import Optional

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shared.console import GaugeConsole

from gauge.core.models import (
    ATTACK_PROFILES,
    BreachCheckResult,
    BreachStatus,
    EntropyEstimate,
    PasswordStrengthResult,
    TimeBreakdown,
)

_STRENGTH_COLOURS: dict[str, str] = {
    "very_weak": "bold white on red",
    "weak": "bold red",
    "fair": "bold yellow",
    "strong": "bold green",
    "very_strong": "bold bright_green",
}

_SEGMENT_COLOURS = ("red", "dark_orange", "yellow", "green", "bright_green")

_PROFILE_LABELS: dict[str, str] = {p.name: p.label for p in ATTACK_PROFILES}

SECURITY_RECOMMENDATIONS: tuple[tuple[str, str], ...] = (
    (
        "Use a Password Manager",
        "Store and generate strong, unique passwords for all your accounts "
        "using a reputable password manager.",
    ),
    (
        "Enable Two-Factor Authentication",
        "Add an extra layer of security by enabling 2FA on all accounts that "
        "support it.",
    ),
    (
        "Safe Storage Practices",
        "Never share passwords via email or text. Use secure channels and "
        "avoid storing passwords in plain text.",
    ),
    (
        "Regular Updates",
        "Change passwords every 3-6 months and immediately after any security "
        "breach notifications.",
    ),
)


def _time_style(breakdown: TimeBreakdown) -> str:
    if breakdown.is_instant or breakdown.total_seconds() < 60:
        return "bold red"
    if breakdown.total_seconds() < 86400:
        return "dark_orange"
    if breakdown.years < 1:
        return "yellow"
    return "green"


class GaugeConsoleOutput:
    """Console formatter for Gauge results.

    Usage::

        output = GaugeConsoleOutput(GaugeConsole())
        output.display_result(result)
    """

    def __init__(self, console: Optional[GaugeConsole] = None) -> None:
        self.console = console or GaugeConsole()
        self._rich = self.console.rich

    def display_result(self, result: PasswordStrengthResult) -> None:
        """Render the full verdict."""
        self.display_score(result)
        self.display_crack_times(result.crack_times_seconds, result.crack_times_display)
        if result.entropy is not None:
            self.display_entropy(result.entropy)
        self.display_feedback(result)
        self.display_breach(
            BreachCheckResult(
                status=result.breach_status,
                count=result.pwned_count or 0,
            )
        )
        self.display_recommendations()

    def display_score(self, result: PasswordStrengthResult) -> None:
        self.console.section("Password Strength")

        label = result.strength.value
        colour = _STRENGTH_COLOURS.get(label, "white")

        meter = Text()
        meter.append("Score: ", style="bold")
        meter.append(f"{result.score}/4  ")
        for segment in range(5):
            if segment <= result.score:
                meter.append("████ ", style=_SEGMENT_COLOURS[result.score])
            else:
                meter.append("░░░░ ", style="dim")
        meter.append(f" {label.replace('_', ' ').upper()}", style=colour)

        self._rich.print(Panel(meter, title="Strength Meter", border_style="cyan"))

    def display_crack_times(
        self, seconds: dict[str, float], display: dict[str, str]
    ) -> None:
        tbl = Table(
            title="Crack Time Estimates",
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("Attack Scenario", style="bold")
        tbl.add_column("Estimated Time", justify="right")

        for name, value in seconds.items():
            breakdown = TimeBreakdown.from_seconds(value)
            text = display.get(name) or breakdown.display()
            tbl.add_row(
                _PROFILE_LABELS.get(name, name),
                Text(text, style=_time_style(breakdown)),
            )

        self._rich.print(tbl)

    def display_entropy(self, estimate: EntropyEstimate) -> None:
        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("Property", style="bold")
        tbl.add_column("Value")

        tbl.add_row("Length", str(estimate.length))
        tbl.add_row("Character Pool", str(estimate.charset_size))
        tbl.add_row("Raw Entropy", f"{estimate.entropy_bits:.2f} bits")
        tbl.add_row("Penalty Multiplier", f"{estimate.penalty_multiplier:.0e}")
        tbl.add_row(
            "Structural Weaknesses",
            ", ".join(h.name.replace("_", " ") for h in estimate.heuristics) or "none",
        )
        self._rich.print(tbl)

    def display_feedback(self, result: PasswordStrengthResult) -> None:
        if result.warning:
            self.console.warning(result.warning)

        self.console.section("Suggestions")
        for suggestion in result.suggestions:
            self._rich.print(f"  [bright_cyan]•[/bright_cyan] {escape(suggestion)}")

    def display_breach(self, breach: BreachCheckResult) -> None:
        self.console.section("Breach Exposure")
        if breach.status == BreachStatus.FOUND:
            self.console.error(
                f"Found in known breaches {breach.count:,} times. "
                "Do not use this password."
            )
        elif breach.status == BreachStatus.NOT_FOUND:
            self.console.success("Not found in known breaches.")
        elif breach.status == BreachStatus.UNKNOWN:
            self.console.warning("Breach check could not be completed.")
        else:
            self.console.info("Breach check skipped.")

    def display_recommendations(self) -> None:
        """General account-hygiene advice, independent of the password."""
        tbl = Table(
            title="Security Recommendations",
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("Practice", style="bold", no_wrap=True)
        tbl.add_column("Advice")
        for title, advice in SECURITY_RECOMMENDATIONS:
            tbl.add_row(title, advice)
        self._rich.print(tbl)
