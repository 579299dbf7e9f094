"""Candlestick pattern classification."""

from .classifier import PatternClassifier
from .library import PATTERN_LIBRARY, PatternDescriptor
from .rules import DEFAULT_RULES, PatternRule

__all__ = [
    "PatternClassifier",
    "PatternDescriptor",
    "PATTERN_LIBRARY",
    "DEFAULT_RULES",
    "PatternRule",
]
