"""Pattern and trend signal fusion."""

from .aggregator import AggregatedSignal, SignalAggregator
from .summary import PatternSummarizer

__all__ = ["AggregatedSignal", "SignalAggregator", "PatternSummarizer"]
