"""Signal Aggregator.

Fuses pattern matches and the fitted trend into one five-level signal.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..config import SignalConfig
from ..models import CandlestickPattern, Signal, TrendAnalysis, TrendDirection


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregatedSignal:
    """Result of signal fusion.

    Attributes:
        overall_signal: Five-level recommendation
        net_score: (bullish - bearish) / total weight, in [-1, 1]
        bullish_score: Weighted bullish contributions
        bearish_score: Weighted bearish contributions
        total_weight: Sum of all pattern weights plus the trend weight
        pattern_confirmation: A pattern leans the same way as the trend
        conflicting_signals: Both bullish and bearish patterns are present
    """
    overall_signal: Signal
    net_score: float
    bullish_score: float
    bearish_score: float
    total_weight: float
    pattern_confirmation: bool
    conflicting_signals: bool


class SignalAggregator:
    """Weights patterns by reliability and confidence, adds a trend term.

    Weights:
    - Pattern: reliability weight (HIGH=3, MEDIUM=2, LOW=1) x confidence/100
    - Trend: 2 x trend confidence/100, into the bucket matching its direction

    The total weight mixes two scales: pattern weights enter it already
    scaled by confidence, while the trend always adds its full weight of 2,
    even when SIDEWAYS. Only the trend's bucket contribution is scaled by
    its confidence, so a weak or flat trend pulls the net score toward zero.

    Cut points on the net score: > 0.6 STRONG_BUY, > 0.2 BUY,
    < -0.6 STRONG_SELL, < -0.2 SELL, otherwise NEUTRAL.
    """

    def __init__(self, config: Optional[SignalConfig] = None):
        self.config = config or SignalConfig()

    def aggregate(
        self,
        patterns: Sequence[CandlestickPattern],
        trend: TrendAnalysis,
    ) -> AggregatedSignal:
        """Fuse pattern matches with the trend analysis.

        Args:
            patterns: Pattern matches from the classifier
            trend: Trend analysis from the fitter

        Returns:
            AggregatedSignal with the overall signal and agreement flags
        """
        bullish_score = 0.0
        bearish_score = 0.0
        total_weight = 0.0

        for pattern in patterns:
            weight = self.pattern_weight(pattern)
            total_weight += weight
            if pattern.is_bullish:
                bullish_score += weight
            elif pattern.is_bearish:
                bearish_score += weight

        trend_weight = self.config.trend_weight
        total_weight += trend_weight
        if trend.direction == TrendDirection.UPTREND:
            bullish_score += trend_weight * (trend.confidence / 100)
        elif trend.direction == TrendDirection.DOWNTREND:
            bearish_score += trend_weight * (trend.confidence / 100)

        net_score = (bullish_score - bearish_score) / total_weight if total_weight > 0 else 0.0
        overall_signal = self.classify_score(net_score)

        has_bullish = any(p.is_bullish for p in patterns)
        has_bearish = any(p.is_bearish for p in patterns)
        pattern_confirmation = (
            (has_bullish and trend.direction == TrendDirection.UPTREND)
            or (has_bearish and trend.direction == TrendDirection.DOWNTREND)
        )

        logger.debug(
            f"Aggregated {len(patterns)} pattern(s) with {trend.direction.value}: "
            f"net={net_score:.3f} -> {overall_signal.value}"
        )
        return AggregatedSignal(
            overall_signal=overall_signal,
            net_score=net_score,
            bullish_score=bullish_score,
            bearish_score=bearish_score,
            total_weight=total_weight,
            pattern_confirmation=pattern_confirmation,
            conflicting_signals=has_bullish and has_bearish,
        )

    def pattern_weight(self, pattern: CandlestickPattern) -> float:
        """Reliability weight scaled by pattern confidence."""
        base = self.config.reliability_weights[pattern.reliability.value]
        return base * (pattern.confidence / 100)

    def classify_score(self, net_score: float) -> Signal:
        """Map a net score to the five-level signal."""
        if net_score > self.config.strong_threshold:
            return Signal.STRONG_BUY
        if net_score > self.config.threshold:
            return Signal.BUY
        if net_score < -self.config.strong_threshold:
            return Signal.STRONG_SELL
        if net_score < -self.config.threshold:
            return Signal.SELL
        return Signal.NEUTRAL
