"""
candle_signals - Candlestick pattern, trend and options strategy analysis

Classifies OHLCV candle sequences into named patterns, fits a least-squares
trend, fuses both into a five-level signal and maps it onto an options
strategy from a fixed catalog.
"""

__version__ = "1.0.0"

from .models import (
    Candle,
    CandlestickPattern,
    InvalidInputError,
    PatternAnalysisResult,
    PatternSentiment,
    PatternSummary,
    PatternType,
    Reliability,
    Signal,
    TrendAnalysis,
    TrendDirection,
    TrendLine,
    TrendStrength,
)
from .config import AnalysisConfig, ConfigManager, ConfigValidationError
from .data import candles_from_dataframe, candles_to_dataframe
from .analyzer import PatternAnalyzer

__all__ = [
    # Main analyzer
    "PatternAnalyzer",
    # Configuration
    "AnalysisConfig",
    "ConfigManager",
    "ConfigValidationError",
    # pandas adapters
    "candles_from_dataframe",
    "candles_to_dataframe",
    # Models
    "Candle",
    "CandlestickPattern",
    "InvalidInputError",
    "PatternAnalysisResult",
    "PatternSentiment",
    "PatternSummary",
    "PatternType",
    "Reliability",
    "Signal",
    "TrendAnalysis",
    "TrendDirection",
    "TrendLine",
    "TrendStrength",
]
