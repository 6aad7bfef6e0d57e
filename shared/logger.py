"""
PwGauge Structured Logger
==========================

:class:`GaugeLogger` binds a stdlib logger to one component of the
toolkit.  Console records are rendered by Rich on stderr; an optional
rotating file receives plain text or JSON lines.

Records never carry a password.  Call sites log lengths, hash prefixes
and outcomes only.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterator

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_ROOT_NAME = "pwgauge"

_LEVEL_STYLES = Theme(
    {
        "logging.level.debug": "dim cyan",
        "logging.level.info": "bright_blue",
        "logging.level.warning": "yellow",
        "logging.level.error": "bold red",
        "logging.level.critical": "bold white on red",
    }
)

_PLAIN_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(operation)s %(message)s"

# Keyword arguments the stdlib logging calls understand themselves
_LOGGING_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel"})


class _JSONFormatter(logging.Formatter):
    """One JSON object per record.

    Keys: ``ts``, ``level``, ``logger``, ``msg``, plus ``operation``,
    ``extra`` and ``exc_info`` when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "ts": created.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key, attr in (("operation", "operation"), ("extra", "gauge_extra")):
            value = getattr(record, attr, None)
            if value:
                entry[key] = value
        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class _PlainFormatter(logging.Formatter):
    """Text lines that tolerate records without an ``operation``."""

    def __init__(self) -> None:
        super().__init__(fmt=_PLAIN_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")

    def format(self, record: logging.LogRecord) -> str:
        if not getattr(record, "operation", None):
            record.operation = "-"
        return super().format(record)


def _console_handler(level: int) -> RichHandler:
    handler = RichHandler(
        console=Console(theme=_LEVEL_STYLES, stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setLevel(level)
    return handler


def _file_handler(
    path: str | Path, level: int, *, json_lines: bool, max_bytes: int, backups: int
) -> RotatingFileHandler:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        target, maxBytes=max_bytes, backupCount=backups, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(_JSONFormatter() if json_lines else _PlainFormatter())
    return handler


class Stopwatch:
    """Elapsed-time reading handed out by :meth:`GaugeLogger.timed`."""

    def __init__(self) -> None:
        self._started = time.perf_counter()
        self._stopped: float | None = None

    def stop(self) -> None:
        self._stopped = time.perf_counter()

    @property
    def elapsed(self) -> float:
        end = self._stopped if self._stopped is not None else time.perf_counter()
        return end - self._started


class GaugeLogger:
    """Component logger with an operation scope and timing helper.

    Usage::

        log = GaugeLogger("breach", log_file="gauge.log", json_logs=True)
        with log.operation("breach_check"):
            log.debug("Querying range %s", prefix)
        with log.timed("analysis") as watch:
            ...
        log.info("done", seconds=watch.elapsed)

    Keyword arguments that the stdlib logging call does not understand
    are gathered into the record's ``gauge_extra`` mapping.

    Args:
        component:       Suffix of the ``pwgauge.<component>`` logger name.
        log_level:       Minimum severity name.
        log_file:        Rotating log file path; ``None`` disables it.
        json_logs:       Write JSON lines instead of plain text to the file.
        max_bytes:       Size at which the file rotates.
        backup_count:    Number of rotated files kept.
        console_output:  Attach the Rich stderr handler.
    """

    def __init__(
        self,
        component: str,
        *,
        log_level: str = "WARNING",
        log_file: str | Path | None = None,
        json_logs: bool = False,
        max_bytes: int = 5_242_880,
        backup_count: int = 3,
        console_output: bool = True,
    ) -> None:
        self._component = component
        self._operation: str | None = None

        level = logging.getLevelName(log_level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

        self._logger = logging.getLogger(f"{_ROOT_NAME}.{component}")
        self._logger.setLevel(level)
        self._logger.propagate = False
        for existing in list(self._logger.handlers):
            self._logger.removeHandler(existing)
            existing.close()

        if console_output:
            self._logger.addHandler(_console_handler(level))
        if log_file is not None:
            self._logger.addHandler(
                _file_handler(
                    log_file,
                    level,
                    json_lines=json_logs,
                    max_bytes=max_bytes,
                    backups=backup_count,
                )
            )

    @classmethod
    def from_config(cls, component: str, settings: Any) -> GaugeLogger:
        """Build a logger from a :class:`shared.config.GlobalConfig`.

        ``debug = true`` forces the DEBUG level.
        """
        return cls(
            component,
            log_level="DEBUG" if settings.debug else settings.log_level,
            log_file=settings.log_file,
            json_logs=settings.log_json,
        )

    @property
    def component(self) -> str:
        return self._component

    @property
    def underlying(self) -> logging.Logger:
        return self._logger

    # ------------------------------------------------------------------ #
    #  Scopes
    # ------------------------------------------------------------------ #

    @contextmanager
    def operation(self, name: str) -> Iterator[GaugeLogger]:
        """Stamp ``operation=<name>`` on every record logged in the block."""
        outer, self._operation = self._operation, name
        try:
            yield self
        finally:
            self._operation = outer

    @contextmanager
    def timed(self, label: str) -> Iterator[Stopwatch]:
        """Debug-log how long the block took."""
        watch = Stopwatch()
        self.debug("Started: %s", label)
        try:
            yield watch
        finally:
            watch.stop()
            self.debug("Finished: %s in %.3fs", label, watch.elapsed)

    # ------------------------------------------------------------------ #
    #  Emitters
    # ------------------------------------------------------------------ #

    def _log(
        self, level: int, msg: str, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> None:
        if not self._logger.isEnabledFor(level):
            return
        extra = dict(kwargs.pop("extra", None) or {})
        passthrough = {k: kwargs.pop(k) for k in list(kwargs) if k in _LOGGING_KWARGS}
        extra["operation"] = self._operation
        if kwargs:
            extra["gauge_extra"] = kwargs
        passthrough.setdefault("stacklevel", 3)
        self._logger.log(level, msg, *args, extra=extra, **passthrough)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, args, kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, args, kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, args, kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, args, kwargs)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """ERROR record with the active traceback attached."""
        kwargs.setdefault("exc_info", True)
        self._log(logging.ERROR, msg, args, kwargs)
