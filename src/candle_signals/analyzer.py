"""Pattern Analyzer - main orchestrator.

Runs the classifier, trend fitter, signal aggregator, pattern summarizer and
options selector in order and assembles a PatternAnalysisResult.
"""

import logging
from typing import Optional, Sequence

from .config import DEFAULT_ANALYSIS_CONFIG, AnalysisConfig
from .models import Candle, InvalidInputError, PatternAnalysisResult
from .options import OptionsStrategySelector
from .patterns import PatternClassifier
from .signals import PatternSummarizer, SignalAggregator
from .trend import TrendFitter


logger = logging.getLogger(__name__)


class PatternAnalyzer:
    """Main entry point for candle sequence analysis.

    Holds only its configured components, so one instance can be shared
    between threads.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or DEFAULT_ANALYSIS_CONFIG
        self.classifier = PatternClassifier(self.config.patterns)
        self.trend_fitter = TrendFitter(self.config.trend)
        self.aggregator = SignalAggregator(self.config.signals)
        self.summarizer = PatternSummarizer(self.config.signals)
        self.selector = OptionsStrategySelector(self.config.options)

    def analyze(
        self,
        candles: Sequence[Candle],
        timeframe: Optional[str] = None,
        current_price: Optional[float] = None,
        implied_volatility: Optional[float] = None,
    ) -> PatternAnalysisResult:
        """Analyze a candle sequence.

        Args:
            candles: Chronological candles, oldest first
            timeframe: Opaque label echoed back on the result
            current_price: Price for strike offsets (defaults to last close)
            implied_volatility: IV in percent (defaults to configured value)

        Returns:
            PatternAnalysisResult

        Raises:
            InvalidInputError: If no candles are supplied
        """
        if not candles:
            raise InvalidInputError("Cannot analyze: no candles supplied")

        price = candles[-1].close if current_price is None else current_price

        patterns = self.classifier.classify(candles, timeframe)
        trend = self.trend_fitter.analyze(candles)
        signal = self.aggregator.aggregate(patterns, trend)
        summary = self.summarizer.summarize(patterns)
        options = self.selector.select(
            signal.overall_signal, trend, patterns, price, implied_volatility,
        )

        logger.info(
            f"Analysis{f' [{timeframe}]' if timeframe else ''}: {len(candles)} candles, "
            f"{len(patterns)} pattern(s), trend {trend.direction.value}, "
            f"signal {signal.overall_signal.value}, strategy {options.primary_strategy.name}"
        )

        return PatternAnalysisResult(
            detected_patterns=tuple(patterns),
            trend_analysis=trend,
            overall_signal=signal.overall_signal,
            pattern_confirmation=signal.pattern_confirmation,
            conflicting_signals=signal.conflicting_signals,
            options_recommendation=options,
            current_price=price,
            timeframe=timeframe,
            net_score=signal.net_score,
            pattern_summary=summary,
        )
