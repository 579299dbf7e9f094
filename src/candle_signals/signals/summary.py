"""Pattern Summarizer.

Digests the detected patterns on their own, without the trend term: a
strength-weighted sentiment, a weighted success probability and leaning
counts.
"""

import logging
from typing import Optional, Sequence

from ..config import SignalConfig
from ..models import CandlestickPattern, PatternSentiment, PatternSummary, Reliability


logger = logging.getLogger(__name__)


class PatternSummarizer:
    """Summarizes pattern matches weighted by strength and reliability.

    Weight per pattern: strength (1-10) x reliability multiplier
    (HIGH=1.5, MEDIUM=1.0, LOW=0.7). Sentiment uses the same cut points as
    the signal aggregator.
    """

    RELIABILITY_MULTIPLIERS = {
        Reliability.HIGH: 1.5,
        Reliability.MEDIUM: 1.0,
        Reliability.LOW: 0.7,
    }

    CONFIDENCE_FLOOR = 50.0
    CONFIDENCE_CEILING = 95.0
    CONFIDENCE_PER_NET_SCORE = 15.0

    def __init__(self, config: Optional[SignalConfig] = None):
        self.config = config or SignalConfig()

    def summarize(self, patterns: Sequence[CandlestickPattern]) -> PatternSummary:
        if not patterns:
            return PatternSummary.empty()

        bullish_score = 0.0
        bearish_score = 0.0
        total_weight = 0.0
        weighted_success = 0.0

        for pattern in patterns:
            weight = self.weight(pattern)
            total_weight += weight
            weighted_success += pattern.success_probability * weight
            if pattern.is_bullish:
                bullish_score += weight
            elif pattern.is_bearish:
                bearish_score += weight

        if total_weight > 0:
            net_score = (bullish_score - bearish_score) / total_weight
            success_probability = weighted_success / total_weight
        else:
            net_score = 0.0
            success_probability = 50.0

        confidence = min(
            self.CONFIDENCE_CEILING,
            max(self.CONFIDENCE_FLOOR, abs(net_score) * self.CONFIDENCE_PER_NET_SCORE + 50),
        )
        bullish_count = sum(1 for p in patterns if p.is_bullish)
        bearish_count = sum(1 for p in patterns if p.is_bearish)

        summary = PatternSummary(
            sentiment=self.sentiment(net_score),
            net_score=net_score,
            pattern_confidence=confidence,
            success_probability=success_probability,
            pattern_count=len(patterns),
            bullish_count=bullish_count,
            bearish_count=bearish_count,
            neutral_count=len(patterns) - bullish_count - bearish_count,
        )
        logger.debug(
            f"Pattern summary: {summary.sentiment.value}, net={net_score:.3f}, "
            f"success={success_probability:.1f}%"
        )
        return summary

    def weight(self, pattern: CandlestickPattern) -> float:
        """Strength scaled by the reliability multiplier."""
        return pattern.strength * self.RELIABILITY_MULTIPLIERS[pattern.reliability]

    def sentiment(self, net_score: float) -> PatternSentiment:
        if net_score > self.config.strong_threshold:
            return PatternSentiment.STRONG_BULLISH
        if net_score > self.config.threshold:
            return PatternSentiment.BULLISH
        if net_score < -self.config.strong_threshold:
            return PatternSentiment.STRONG_BEARISH
        if net_score < -self.config.threshold:
            return PatternSentiment.BEARISH
        return PatternSentiment.NEUTRAL
