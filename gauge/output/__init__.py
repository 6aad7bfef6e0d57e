"""
Gauge Output Module
====================

Console display and report generation for Gauge analysis results.
"""

from gauge.output.console import GaugeConsoleOutput
from gauge.output.report import GaugeReportGenerator

__all__ = [
    "GaugeConsoleOutput",
    "GaugeReportGenerator",
]
