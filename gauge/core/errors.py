"""Exception hierarchy for the Gauge tool."""

from __future__ import annotations


class GaugeError(Exception):
    """Base class for all Gauge errors."""


class DigestUnavailableError(GaugeError):
    """The breach-check digest algorithm cannot be used on this interpreter.

    There is no fallback digest, so the analysis is aborted rather than
    silently skipping the breach check.
    """

    def __init__(self, algorithm: str) -> None:
        super().__init__(f"Digest algorithm unavailable: {algorithm}")
        self.algorithm = algorithm


class EmptyPasswordError(GaugeError, ValueError):
    """An empty password reached a routine that requires at least one character."""
