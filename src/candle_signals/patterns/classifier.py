"""Pattern Classifier.

Runs every rule over the trailing window at the final candle position and
collects all matches.
"""

import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from ..config import PatternConfig
from ..models import Candle, CandlestickPattern, InvalidInputError
from .rules import DEFAULT_RULES, PatternRule


logger = logging.getLogger(__name__)


class PatternClassifier:
    """Detects candlestick patterns at the end of a candle sequence.

    Rules are independent and side-effect free, so several may match the
    same candle. Rules that need more candles than are available are
    skipped without error.
    """

    def __init__(
        self,
        config: Optional[PatternConfig] = None,
        rules: Sequence[PatternRule] = DEFAULT_RULES,
    ):
        """Initialize with configuration.

        Args:
            config: Pattern thresholds (defaults to PatternConfig())
            rules: Ordered rule functions to evaluate
        """
        self.config = config or PatternConfig()
        self.rules = tuple(rules)

    def classify(
        self,
        candles: Sequence[Candle],
        timeframe: Optional[str] = None,
    ) -> List[CandlestickPattern]:
        """Detect all patterns whose final candle is the last candle.

        Args:
            candles: Chronological candles, oldest first
            timeframe: Opaque label echoed onto each match

        Returns:
            Matches ordered by confidence (highest first), then rule order

        Raises:
            InvalidInputError: If no candles are supplied
        """
        if not candles:
            raise InvalidInputError("Cannot classify patterns: no candles supplied")

        window = tuple(candles[-self.config.lookback:])
        matches = self._apply_rules(window, timeframe)

        if matches:
            logger.debug(
                f"Detected {len(matches)} pattern(s) at {window[-1].timestamp}: "
                f"{', '.join(m.id for m in matches)}"
            )
        return matches

    def scan_history(
        self,
        candles: Sequence[Candle],
        timeframe: Optional[str] = None,
    ) -> List[CandlestickPattern]:
        """Detect patterns at every position of the sequence.

        Each position only sees its own trailing window.

        Returns:
            Matches ordered most recent first, then by confidence
        """
        if not candles:
            raise InvalidInputError("Cannot scan patterns: no candles supplied")

        candles = tuple(candles)
        lookback = self.config.lookback
        matches: List[CandlestickPattern] = []
        for end in range(1, len(candles) + 1):
            window = candles[max(0, end - lookback):end]
            matches.extend(self._apply_rules(window, timeframe))

        # Stable sort keeps rule order for ties
        matches.sort(key=lambda m: (-m.detected_at, -m.confidence))
        logger.debug(f"History scan over {len(candles)} candles found {len(matches)} pattern(s)")
        return matches

    def _apply_rules(self, window, timeframe: Optional[str]) -> List[CandlestickPattern]:
        matches = []
        for rule in self.rules:
            match = rule(window, self.config)
            if match is None:
                continue
            if timeframe is not None:
                match = replace(match, timeframe=timeframe)
            matches.append(match)
        matches.sort(key=lambda m: -m.confidence)
        return matches
