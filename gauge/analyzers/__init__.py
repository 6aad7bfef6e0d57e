"""
Gauge Analyzers
================

Individual analysis steps for the Gauge tool.  Each one covers a
single concern and knows nothing about the others.
"""

from gauge.analyzers.breach import BreachChecker
from gauge.analyzers.crack_time import EntropyEstimator, estimate_crack_times
from gauge.analyzers.matcher import PatternMatcher, ZxcvbnMatcher
from gauge.analyzers.suggestions import synthesize_suggestions

__all__ = [
    "BreachChecker",
    "EntropyEstimator",
    "PatternMatcher",
    "ZxcvbnMatcher",
    "estimate_crack_times",
    "synthesize_suggestions",
]
