"""Trend Fitter.

Fits a least-squares line of close against bar index over a trailing window
and derives direction, strength, duration, confidence and support/resistance.
"""

import logging
from typing import Optional, Sequence, Tuple

import numpy as np

from ..config import TrendConfig
from ..models import (
    Candle,
    InvalidInputError,
    TrendAnalysis,
    TrendDirection,
    TrendLine,
    TrendStrength,
)


logger = logging.getLogger(__name__)


class TrendFitter:
    """Computes a TrendAnalysis from closing prices.

    Classification thresholds:
    - Direction: slope sign, only when r2 > 0.5
    - STRONG: r2 > 0.8 and slope > 0.5% of final close per bar
    - MODERATE: r2 > 0.5 and slope > 0.2% of final close per bar
    - Confidence: r2 * 100 clamped to 50-95
    """

    def __init__(self, config: Optional[TrendConfig] = None):
        self.config = config or TrendConfig()

    def analyze(self, candles: Sequence[Candle]) -> TrendAnalysis:
        """Fit the trend over the trailing window.

        Args:
            candles: Chronological candles, oldest first

        Returns:
            TrendAnalysis, or the neutral default when fewer than
            ``min_window`` candles are available

        Raises:
            InvalidInputError: If no candles are supplied
        """
        if not candles:
            raise InvalidInputError("Cannot fit trend: no candles supplied")

        if len(candles) < self.config.min_window:
            logger.warning(
                f"Only {len(candles)} candles, need {self.config.min_window} to fit a trend; "
                f"returning neutral default"
            )
            return TrendAnalysis.neutral()

        window = tuple(candles[-self.config.window:])
        closes = np.array([c.close for c in window], dtype=float)

        trend_line = self.fit_line(closes)
        direction = self._direction(trend_line)
        strength = self._strength(trend_line, closes[-1])
        support, resistance = self.support_resistance(candles)

        analysis = TrendAnalysis(
            direction=direction,
            strength=strength,
            duration=self._duration(closes, direction),
            confidence=self._confidence(trend_line.r2),
            support_level=support,
            resistance_level=resistance,
            trend_line=trend_line,
        )
        logger.debug(
            f"Trend {direction.value}/{strength.value} over {len(window)} bars: "
            f"slope={trend_line.slope:.6f} r2={trend_line.r2:.3f} "
            f"support={support} resistance={resistance}"
        )
        return analysis

    def fit_line(self, closes: np.ndarray) -> TrendLine:
        """Ordinary least squares of closes against bar index."""
        x = np.arange(len(closes), dtype=float)
        slope, intercept = np.polyfit(x, closes, 1)

        fitted = slope * x + intercept
        ss_res = float(np.sum((closes - fitted) ** 2))
        ss_tot = float(np.sum((closes - closes.mean()) ** 2))
        r2 = 1.0 - ss_res / ss_tot if ss_tot > 0 else 0.0

        return TrendLine(
            slope=float(slope),
            intercept=float(intercept),
            r2=float(min(1.0, max(0.0, r2))),
        )

    def support_resistance(self, candles: Sequence[Candle]) -> Tuple[float, float]:
        """Lowest low and highest high over the trailing lookback."""
        recent = candles[-self.config.sr_lookback:]
        return min(c.low for c in recent), max(c.high for c in recent)

    def _direction(self, line: TrendLine) -> TrendDirection:
        if line.r2 > self.config.direction_r2:
            if line.slope > 0:
                return TrendDirection.UPTREND
            if line.slope < 0:
                return TrendDirection.DOWNTREND
        return TrendDirection.SIDEWAYS

    def _strength(self, line: TrendLine, last_close: float) -> TrendStrength:
        slope_pct = abs(line.slope) / last_close * 100 if last_close > 0 else 0.0

        if line.r2 > self.config.strong_r2 and slope_pct > self.config.strong_slope_pct:
            return TrendStrength.STRONG
        if line.r2 > self.config.direction_r2 and slope_pct > self.config.moderate_slope_pct:
            return TrendStrength.MODERATE
        return TrendStrength.WEAK

    def _confidence(self, r2: float) -> int:
        return int(round(min(self.config.max_confidence, max(self.config.min_confidence, r2 * 100))))

    def _duration(self, closes: np.ndarray, direction: TrendDirection) -> int:
        """Consecutive trailing bar-to-bar steps agreeing with the direction."""
        steps = np.diff(closes)
        duration = 0
        for step in steps[::-1]:
            if direction == TrendDirection.UPTREND and step <= 0:
                break
            if direction == TrendDirection.DOWNTREND and step >= 0:
                break
            duration += 1
        return duration
