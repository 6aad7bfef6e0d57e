"""
Gauge Report Generator
=======================

Writes analysis results as JSON for other tools to consume.  The
payload uses the camelCase result schema plus a small envelope with the
tool name, version and generation time.  The password itself is never
written.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from gauge.core.models import PasswordStrengthResult


class GaugeReportGenerator:
    """Serialises :class:`PasswordStrengthResult` objects to JSON."""

    def __init__(self, tool_name: str = "gauge", version: str = "1.0.0") -> None:
        self._tool_name = tool_name
        self._version = version

    def build(
        self, result: PasswordStrengthResult, *, include_entropy: bool = True
    ) -> dict[str, Any]:
        """Build the report dictionary for *result*."""
        report: dict[str, Any] = {
            "tool": self._tool_name,
            "version": self._version,
            "generatedAt": datetime.now(timezone.utc).isoformat(),
            "result": result.to_payload(),
        }
        if include_entropy and result.entropy is not None:
            report["entropy"] = result.entropy.model_dump(mode="json")
        return report

    def to_json(self, result: PasswordStrengthResult, *, indent: int = 2) -> str:
        return json.dumps(self.build(result), indent=indent, ensure_ascii=False)

    def generate_json(self, result: PasswordStrengthResult, output_path: Path) -> Path:
        """Write the JSON report to *output_path* and return the path."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.to_json(result), encoding="utf-8")
        return output_path
