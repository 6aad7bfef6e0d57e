"""
PwGauge Shared Module
=====================

Configuration, structured logging, async HTTP and console helpers used
by the Gauge tool.
"""

from shared.config import GaugeConfig, PwGaugeConfig, get_config

__all__ = ["GaugeConfig", "PwGaugeConfig", "get_config"]
