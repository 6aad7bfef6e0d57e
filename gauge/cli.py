"""
Gauge CLI
==========

Click-based command-line interface for the Gauge password-strength
tool.

When the password argument is omitted it is read from a hidden prompt,
which keeps it out of shell history and process listings.

Usage::

    python -m gauge analyze
    python -m gauge analyze "Summer2024!" --context alice
    python -m gauge -o json estimate "correct horse battery staple"
    python -m gauge breach

References:
    - Click Documentation. https://click.palletsprojects.com/
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import replace
from pathlib import Path
from typing import Any, Optional

import click

from shared.config import PwGaugeConfig
from shared.console import GaugeConsole

from gauge import __version__
from gauge.core.engine import GaugeEngine
from gauge.core.errors import DigestUnavailableError
from gauge.core.models import BreachCheckResult, TimeBreakdown
from gauge.output.console import GaugeConsoleOutput
from gauge.output.report import GaugeReportGenerator

EXIT_DIGEST_FAILURE = 2

_BANNERLESS_COMMANDS = frozenset({"breakdown"})


def _read_password(password: Optional[str]) -> str:
    if password is not None:
        return password
    return click.prompt("Password", hide_input=True, default="", show_default=False)


def _emit_json(ctx: click.Context, payload: dict[str, Any]) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    output_file = ctx.obj["output_file"]
    if output_file:
        path = Path(output_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        ctx.obj["console"].success(f"JSON report saved to: {path}")
    else:
        click.echo(text)


def _engine_for(ctx: click.Context, **gauge_overrides: Any) -> GaugeEngine:
    config: PwGaugeConfig = ctx.obj["config"]
    gauge = config.gauge
    context_words = gauge_overrides.pop("context_words", ())
    if gauge_overrides:
        gauge = replace(gauge, **gauge_overrides)
    gauge = gauge.with_context(context_words)
    return GaugeEngine(
        PwGaugeConfig(global_settings=config.global_settings, gauge=gauge)
    )


def _abort_digest(ctx: click.Context, exc: DigestUnavailableError) -> None:
    ctx.obj["console"].error(str(exc))
    ctx.exit(EXIT_DIGEST_FAILURE)


# ===================================================================== #
#  CLI Group
# ===================================================================== #

@click.group()
@click.version_option(__version__, prog_name="gauge")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to a TOML configuration file.",
)
@click.option(
    "--output", "-o",
    type=click.Choice(["console", "json"]),
    default=None,
    help="Output format (defaults to the configured format).",
)
@click.option(
    "--output-file", "-f",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write JSON output to this file.",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Suppress the banner.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    output: Optional[str],
    output_file: Optional[str],
    quiet: bool,
) -> None:
    """PwGauge -- password strength and breach exposure."""
    ctx.ensure_object(dict)

    gauge_config = PwGaugeConfig.load(config) if config else PwGaugeConfig()
    ctx.obj["config"] = gauge_config
    ctx.obj["output_format"] = output or gauge_config.gauge.output_format
    ctx.obj["output_file"] = output_file

    console = GaugeConsole()
    ctx.obj["console"] = console
    ctx.obj["display"] = GaugeConsoleOutput(console)
    ctx.obj["reporter"] = GaugeReportGenerator(version=__version__)

    # breakdown prints a bare string for scripting
    show_banner = ctx.invoked_subcommand not in _BANNERLESS_COMMANDS
    if show_banner and not quiet and ctx.obj["output_format"] == "console":
        console.banner(version=__version__)


# ===================================================================== #
#  Subcommands
# ===================================================================== #

@cli.command()
@click.argument("password", required=False)
@click.option(
    "--context", "context_words",
    multiple=True,
    help="Word the password should not contain (name, email, site). Repeatable.",
)
@click.option(
    "--no-breach-check",
    is_flag=True,
    default=False,
    help="Skip the online breach lookup.",
)
@click.pass_context
def analyze(
    ctx: click.Context,
    password: Optional[str],
    context_words: tuple[str, ...],
    no_breach_check: bool,
) -> None:
    """Full analysis: score, crack times, suggestions and breach exposure."""
    overrides: dict[str, Any] = {"context_words": context_words}
    if no_breach_check:
        overrides["breach_check_enabled"] = False
    engine = _engine_for(ctx, **overrides)
    secret = _read_password(password)

    try:
        if ctx.obj["output_format"] == "console":
            with ctx.obj["console"].status("Analysing password..."):
                result = asyncio.run(engine.analyze(secret))
        else:
            result = asyncio.run(engine.analyze(secret))
    except DigestUnavailableError as exc:
        _abort_digest(ctx, exc)
        return

    if ctx.obj["output_format"] == "json":
        reporter: GaugeReportGenerator = ctx.obj["reporter"]
        _emit_json(ctx, reporter.build(result))
    else:
        ctx.obj["display"].display_result(result)


@cli.command()
@click.argument("password", required=False)
@click.pass_context
def estimate(ctx: click.Context, password: Optional[str]) -> None:
    """Offline entropy and crack-time estimate (no network)."""
    engine = _engine_for(ctx, breach_check_enabled=False)
    secret = _read_password(password)
    if not secret:
        raise click.UsageError("Password must not be empty.")

    result = engine.estimate(secret)

    if ctx.obj["output_format"] == "json":
        payload = result.model_dump(mode="json")
        payload["crack_times_display"] = GaugeEngine.display_times(result)
        _emit_json(ctx, payload)
    else:
        display: GaugeConsoleOutput = ctx.obj["display"]
        display.display_crack_times(
            result.crack_times_seconds, GaugeEngine.display_times(result)
        )
        display.display_entropy(result)


@cli.command()
@click.argument("password", required=False)
@click.pass_context
def breach(ctx: click.Context, password: Optional[str]) -> None:
    """Look the password up in known breaches (k-Anonymity)."""
    engine = _engine_for(ctx)
    secret = _read_password(password)

    try:
        result: BreachCheckResult = asyncio.run(engine.check_breach(secret))
    except DigestUnavailableError as exc:
        _abort_digest(ctx, exc)
        return

    if ctx.obj["output_format"] == "json":
        _emit_json(ctx, {
            "isPwned": result.is_pwned,
            "pwnedCount": result.pwned_count,
            "breachStatus": result.status.value,
        })
    else:
        ctx.obj["display"].display_breach(result)


@cli.command("breakdown")
@click.argument("seconds", type=float)
def breakdown(seconds: float) -> None:
    """Show how SECONDS splits into years, months, days and so on."""
    try:
        parts = TimeBreakdown.from_seconds(seconds)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="SECONDS") from exc
    click.echo(parts.display())


def main() -> None:
    """Main entry point for the Gauge CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
