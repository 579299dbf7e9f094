"""Core data models for the candle_signals analysis core.

Defines the candle input, the closed enums shared by every stage, and the
immutable result values produced by a single analysis pass.
"""

import math
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .options.models import OptionsAnalysisResult


class InvalidInputError(ValueError):
    """Raised when the caller supplies input no analysis can run on."""
    pass


class PatternType(Enum):
    """Directional character of a candlestick pattern."""
    BULLISH = "BULLISH"
    BEARISH = "BEARISH"
    NEUTRAL = "NEUTRAL"
    REVERSAL = "REVERSAL"
    CONTINUATION = "CONTINUATION"


class Reliability(Enum):
    """Fixed reliability tier attached to a pattern rule."""
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class Signal(Enum):
    """Five-level directional recommendation."""
    STRONG_BUY = "STRONG_BUY"
    BUY = "BUY"
    NEUTRAL = "NEUTRAL"
    SELL = "SELL"
    STRONG_SELL = "STRONG_SELL"

    @property
    def is_buy(self) -> bool:
        return self in (Signal.BUY, Signal.STRONG_BUY)

    @property
    def is_sell(self) -> bool:
        return self in (Signal.SELL, Signal.STRONG_SELL)


class PatternSentiment(Enum):
    """Pattern-only sentiment from the strength-weighted summary."""
    STRONG_BULLISH = "STRONG_BULLISH"
    BULLISH = "BULLISH"
    NEUTRAL = "NEUTRAL"
    BEARISH = "BEARISH"
    STRONG_BEARISH = "STRONG_BEARISH"


class TrendDirection(Enum):
    """Direction of the fitted trend line."""
    UPTREND = "UPTREND"
    DOWNTREND = "DOWNTREND"
    SIDEWAYS = "SIDEWAYS"


class TrendStrength(Enum):
    """Strength of the fitted trend from r2 and normalized slope."""
    STRONG = "STRONG"      # r2 > 0.8 and slope > 0.5% per bar
    MODERATE = "MODERATE"  # r2 > 0.5 and slope > 0.2% per bar
    WEAK = "WEAK"


@dataclass(frozen=True)
class Candle:
    """One OHLCV bar. Timestamp is epoch milliseconds."""
    timestamp: int
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

    def __post_init__(self):
        values = (self.open, self.high, self.low, self.close, self.volume)
        if not all(math.isfinite(v) for v in values):
            raise InvalidInputError(f"Candle values must be finite: {self}")
        if min(self.open, self.high, self.low, self.close) <= 0:
            raise InvalidInputError(f"Candle prices must be positive: {self}")
        if self.volume < 0:
            raise InvalidInputError(f"Candle volume must be non-negative: {self}")
        if not (self.low <= min(self.open, self.close) and max(self.open, self.close) <= self.high):
            raise InvalidInputError(f"Candle violates low <= open,close <= high: {self}")

    @property
    def body(self) -> float:
        return abs(self.close - self.open)

    @property
    def upper_shadow(self) -> float:
        return self.high - max(self.open, self.close)

    @property
    def lower_shadow(self) -> float:
        return min(self.open, self.close) - self.low

    @property
    def range(self) -> float:
        return self.high - self.low

    @property
    def body_midpoint(self) -> float:
        return (self.open + self.close) / 2

    @property
    def is_bullish(self) -> bool:
        return self.close > self.open

    @property
    def is_bearish(self) -> bool:
        return self.close < self.open


@dataclass(frozen=True)
class CandlestickPattern:
    """A pattern match at one candle position.

    Created fresh by each classification pass. Several matches may share
    the same ``detected_at`` when different rules fire on the same candle.
    """
    id: str
    name: str
    type: PatternType
    reliability: Reliability
    signal: Signal
    confidence: int
    candles_required: int
    detected_at: int
    success_probability: int = 50
    strength: int = 5
    description: str = ""
    implications: str = ""
    timeframe: Optional[str] = None
    options_strategies: Tuple[str, ...] = ()

    @property
    def is_bullish(self) -> bool:
        """Bullish-leaning by type or by signal."""
        return self.type == PatternType.BULLISH or self.signal.is_buy

    @property
    def is_bearish(self) -> bool:
        """Bearish-leaning, checked only when not bullish-leaning."""
        if self.is_bullish:
            return False
        return self.type == PatternType.BEARISH or self.signal.is_sell


@dataclass(frozen=True)
class PatternSummary:
    """Strength-weighted digest of the patterns detected in one pass.

    Attributes:
        sentiment: Pattern-only sentiment from the weighted net score
        net_score: (bullish - bearish) / total weight, in [-1, 1]
        pattern_confidence: 50 + 15 * |net_score|, clamped to [50, 95]
        success_probability: Weighted mean of the patterns' success rates
        pattern_count: Number of patterns summarized
        bullish_count: Bullish-leaning patterns
        bearish_count: Bearish-leaning patterns
        neutral_count: Patterns leaning neither way
    """
    sentiment: PatternSentiment
    net_score: float
    pattern_confidence: float
    success_probability: float
    pattern_count: int = 0
    bullish_count: int = 0
    bearish_count: int = 0
    neutral_count: int = 0

    @classmethod
    def empty(cls) -> "PatternSummary":
        """Summary of a pass that detected nothing."""
        return cls(
            sentiment=PatternSentiment.NEUTRAL,
            net_score=0.0,
            pattern_confidence=50.0,
            success_probability=50.0,
        )


@dataclass(frozen=True)
class TrendLine:
    """Least-squares fit of close against bar index."""
    slope: float
    intercept: float
    r2: float


@dataclass(frozen=True)
class TrendAnalysis:
    """Trend fitted over a trailing window of candles."""
    direction: TrendDirection
    strength: TrendStrength
    duration: int
    confidence: int
    support_level: float
    resistance_level: float
    trend_line: TrendLine

    @classmethod
    def neutral(cls) -> "TrendAnalysis":
        """Default returned when there is too little history to fit."""
        return cls(
            direction=TrendDirection.SIDEWAYS,
            strength=TrendStrength.WEAK,
            duration=0,
            confidence=50,
            support_level=0.0,
            resistance_level=0.0,
            trend_line=TrendLine(slope=0.0, intercept=0.0, r2=0.0),
        )


def _enum_values(value):
    """Recursively replace enums with their string values."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _enum_values(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_enum_values(v) for v in value]
    return value


@dataclass(frozen=True)
class PatternAnalysisResult:
    """Terminal output of one analysis call."""
    detected_patterns: Tuple[CandlestickPattern, ...]
    trend_analysis: TrendAnalysis
    overall_signal: Signal
    pattern_confirmation: bool
    conflicting_signals: bool
    options_recommendation: "OptionsAnalysisResult"
    current_price: float
    timeframe: Optional[str] = None
    net_score: float = 0.0
    pattern_summary: Optional[PatternSummary] = None

    @property
    def pattern_ids(self) -> Tuple[str, ...]:
        return tuple(p.id for p in self.detected_patterns)

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dictionary."""
        return _enum_values(asdict(self))
