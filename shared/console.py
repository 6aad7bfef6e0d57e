"""
PwGauge Console Interface
==========================

Rich-powered console abstraction giving the CLI a consistent look:
banner, section headers, coloured status messages and a spinner.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

import datetime as _dt
from contextlib import contextmanager
from typing import Any, Generator

from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

_GAUGE_THEME = Theme(
    {
        "gauge.banner": "bold bright_cyan",
        "gauge.section": "bold bright_magenta",
        "gauge.success": "bold green",
        "gauge.warning": "bold yellow",
        "gauge.error": "bold red",
        "gauge.info": "bold bright_blue",
        "gauge.dim": "dim white",
    }
)

_BANNER_ART = r"""[bright_cyan]
   ___       _____
  / _ \_ __ / ___/__ ___ _____ ____
 / ___/ |/|/ (_ / _ `/ // / _ `/ -_)
/_/   |__,__/\___/\_,_/\_,_/\_, /\__/
                           /___/
[/bright_cyan]"""

_TAGLINE = "Password Strength & Breach Exposure"


class GaugeConsole:
    """Console interface shared by the CLI and the result renderer.

    Usage::

        con = GaugeConsole()
        con.banner()
        con.section("Crack Time Estimates")
        con.success("Not found in known breaches")
    """

    def __init__(self, *, quiet: bool = False, record: bool = False) -> None:
        """Initialise the console.

        Args:
            quiet:  Suppress all output (library / test mode).
            record: Enable Rich recording for export.
        """
        self._console = Console(
            theme=_GAUGE_THEME,
            quiet=quiet,
            record=record,
            highlight=False,
        )

    @property
    def rich(self) -> Console:
        """Direct access to the underlying Rich Console instance."""
        return self._console

    def banner(self, version: str = "1.0.0") -> None:
        now = _dt.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        subtitle = (
            f"[gauge.banner]{_TAGLINE}[/gauge.banner]\n"
            f"[gauge.dim]Version: {version}  |  {now}[/gauge.dim]"
        )
        panel = Panel(
            Align.center(Text.from_markup(_BANNER_ART + "\n" + subtitle)),
            border_style="bright_cyan",
            padding=(0, 2),
        )
        self._console.print(panel)

    def section(self, title: str) -> None:
        self._console.rule(f"  {title}  ", style="gauge.section", characters="─")

    # ------------------------------------------------------------------ #
    #  Message helpers
    # ------------------------------------------------------------------ #

    def success(self, message: str) -> None:
        self._console.print(f"[gauge.success][✔] {escape(message)}[/gauge.success]")

    def warning(self, message: str) -> None:
        self._console.print(f"[gauge.warning][⚠] WARNING:[/gauge.warning] {escape(message)}")

    def error(self, message: str) -> None:
        self._console.print(f"[gauge.error][✘] ERROR:[/gauge.error] {escape(message)}")

    def info(self, message: str) -> None:
        self._console.print(f"[gauge.info][ℹ][/gauge.info] {escape(message)}")

    @contextmanager
    def status(self, message: str = "Working...") -> Generator[Any, None, None]:
        """Show a spinner with *message* while the block runs."""
        with self._console.status(
            f"[gauge.info]{message}[/gauge.info]",
            spinner="dots",
            spinner_style="bright_cyan",
        ) as spinner:
            yield spinner
