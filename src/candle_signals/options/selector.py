"""Options Strategy Selector.

Maps the overall signal, trend, pattern mix and implied volatility onto a
primary catalog strategy plus ranked alternatives, and derives sizing,
expiration, strike, timing and hedging guidance. A decision table plus
simple arithmetic; no pricing model.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from ..config import OptionsConfig
from ..models import (
    CandlestickPattern,
    InvalidInputError,
    PatternType,
    Reliability,
    Signal,
    TrendAnalysis,
    TrendDirection,
)
from .catalog import StrategyKey, find_strategy, get_strategy
from .models import (
    MarketContext,
    OptionsAnalysisResult,
    OptionsRecommendations,
    PatternOptionsIdea,
    RiskLevel,
    VolatilityBand,
)


logger = logging.getLogger(__name__)


Selection = Tuple[StrategyKey, Tuple[StrategyKey, ...]]


class OptionsStrategySelector:
    """Selects an options strategy from the fixed catalog.

    Selection priority (first match wins):
    1. STRONG_BUY + UPTREND -> backspread or long call
    2. STRONG_SELL + DOWNTREND -> backspread or long put
    3. BUY + UPTREND / SELL + DOWNTREND -> debit spread
    4. Volatility or reversal patterns -> straddle or condor by IV
    5. SIDEWAYS without a strong signal -> condor or straddle by IV
    6. Fallback -> iron condor
    """

    POSITION_SIZES = {
        RiskLevel.LOW: "2-5% of portfolio",
        RiskLevel.MEDIUM: "1-3% of portfolio",
        RiskLevel.HIGH: "0.5-2% of portfolio",
    }

    EXPIRATIONS = {
        StrategyKey.LONG_CALL: "45-60 days for time to work",
        StrategyKey.LONG_PUT: "45-60 days for time to work",
        StrategyKey.BULL_CALL_SPREAD: "30-45 days for optimal theta decay",
        StrategyKey.BEAR_PUT_SPREAD: "30-45 days for optimal theta decay",
        StrategyKey.IRON_CONDOR: "30-45 days for maximum theta collection",
        StrategyKey.IRON_BUTTERFLY: "30-45 days for maximum theta collection",
        StrategyKey.SHORT_STRADDLE: "30-45 days for maximum theta collection",
        StrategyKey.LONG_STRADDLE: "30-60 days depending on catalyst timing",
        StrategyKey.LONG_STRANGLE: "30-60 days depending on catalyst timing",
        StrategyKey.CALL_BACKSPREAD: "45-90 days for explosive moves",
        StrategyKey.PUT_BACKSPREAD: "45-90 days for explosive moves",
    }
    VOLATILE_EXPIRATION = "20-30 days to capture quick moves"

    HEDGES = {
        StrategyKey.LONG_CALL: "Consider protective put if position becomes profitable",
        StrategyKey.LONG_PUT: "Consider protective call if position becomes profitable",
        StrategyKey.SHORT_STRADDLE: "Essential: have adjustment plan ready, consider delta hedging",
        StrategyKey.CALL_BACKSPREAD: "Monitor carefully, have exit plan for unfavorable scenarios",
        StrategyKey.PUT_BACKSPREAD: "Monitor carefully, have exit plan for unfavorable scenarios",
    }
    HIGH_RISK_HEDGE = "Consider hedging with opposite direction position or protective stops"
    DEFAULT_HEDGE = "Standard position sizing and stop losses sufficient"

    DEFAULT_LEVEL_OFFSET = 0.05  # fallback support/resistance distance

    def __init__(self, config: Optional[OptionsConfig] = None):
        self.config = config or OptionsConfig()

    def select(
        self,
        overall_signal: Signal,
        trend: TrendAnalysis,
        patterns: Sequence[CandlestickPattern],
        current_price: float,
        implied_volatility: Optional[float] = None,
    ) -> OptionsAnalysisResult:
        """Choose the primary strategy and build recommendations.

        Args:
            overall_signal: Fused signal from the aggregator
            trend: Trend analysis from the fitter
            patterns: Detected pattern matches
            current_price: Price used for strike offsets
            implied_volatility: IV in percent (defaults to config value)

        Returns:
            OptionsAnalysisResult

        Raises:
            InvalidInputError: If the price is not positive or IV is negative
        """
        if current_price <= 0:
            raise InvalidInputError(f"Current price must be positive, got {current_price}")
        iv = self.config.default_implied_volatility if implied_volatility is None else implied_volatility
        if iv < 0:
            raise InvalidInputError(f"Implied volatility must be non-negative, got {iv}")

        primary, alternatives = self.choose(overall_signal, trend, patterns, iv)
        risk_level = self.risk_level(patterns, trend)
        has_volatility_patterns = bool(self._volatility_patterns(patterns))
        strike_selection, strikes = self.strikes(primary, current_price, trend)

        logger.debug(
            f"Selected {primary.value} (alternatives: {', '.join(a.value for a in alternatives)}) "
            f"for {overall_signal.value}/{trend.direction.value} at IV {iv}"
        )

        return OptionsAnalysisResult(
            primary_strategy=get_strategy(primary),
            alternative_strategies=tuple(get_strategy(k) for k in alternatives),
            market_context=MarketContext(
                implied_volatility_band=self.volatility_band(iv),
                implied_volatility=iv,
                technical_bias=f"{overall_signal.value.replace('_', ' ')} - {trend.direction.value}",
                risk_level=risk_level,
            ),
            recommendations=OptionsRecommendations(
                position_size=self.POSITION_SIZES[risk_level],
                expiration_window=self.expiration(primary, has_volatility_patterns),
                strike_selection=strike_selection,
                strikes=strikes,
                entry_timing=self.entry_timing(patterns, trend),
                hedging=self.hedging(primary, risk_level),
            ),
            pattern_ideas=self.pattern_ideas(patterns, current_price, trend),
        )

    def choose(
        self,
        overall_signal: Signal,
        trend: TrendAnalysis,
        patterns: Sequence[CandlestickPattern],
        implied_volatility: float,
    ) -> Selection:
        """Walk the decision table and return (primary, alternatives)."""
        direction = trend.direction
        has_high_reliability = any(p.reliability == Reliability.HIGH for p in patterns)
        high_conviction = has_high_reliability and trend.confidence > self.config.high_trend_confidence

        if overall_signal == Signal.STRONG_BUY and direction == TrendDirection.UPTREND:
            if high_conviction:
                return StrategyKey.CALL_BACKSPREAD, (StrategyKey.LONG_CALL, StrategyKey.BULL_CALL_SPREAD)
            return StrategyKey.LONG_CALL, (StrategyKey.BULL_CALL_SPREAD, StrategyKey.CALL_BACKSPREAD)

        if overall_signal == Signal.STRONG_SELL and direction == TrendDirection.DOWNTREND:
            if high_conviction:
                return StrategyKey.PUT_BACKSPREAD, (StrategyKey.LONG_PUT, StrategyKey.BEAR_PUT_SPREAD)
            return StrategyKey.LONG_PUT, (StrategyKey.BEAR_PUT_SPREAD, StrategyKey.PUT_BACKSPREAD)

        if overall_signal == Signal.BUY and direction == TrendDirection.UPTREND:
            return StrategyKey.BULL_CALL_SPREAD, (StrategyKey.LONG_CALL, StrategyKey.IRON_CONDOR)

        if overall_signal == Signal.SELL and direction == TrendDirection.DOWNTREND:
            return StrategyKey.BEAR_PUT_SPREAD, (StrategyKey.LONG_PUT, StrategyKey.IRON_CONDOR)

        has_reversal = any(p.type == PatternType.REVERSAL for p in patterns)
        if self._volatility_patterns(patterns) or has_reversal:
            if implied_volatility < self.config.low_iv_threshold:
                return StrategyKey.LONG_STRADDLE, (
                    StrategyKey.LONG_STRANGLE, StrategyKey.LONG_CALL, StrategyKey.LONG_PUT,
                )
            return StrategyKey.IRON_CONDOR, (StrategyKey.IRON_BUTTERFLY, StrategyKey.SHORT_STRADDLE)

        strong_signal = overall_signal in (Signal.STRONG_BUY, Signal.STRONG_SELL)
        if direction == TrendDirection.SIDEWAYS and not strong_signal:
            if implied_volatility > self.config.high_iv_threshold:
                return StrategyKey.IRON_CONDOR, (StrategyKey.SHORT_STRADDLE, StrategyKey.IRON_BUTTERFLY)
            return StrategyKey.LONG_STRADDLE, (StrategyKey.LONG_STRANGLE, StrategyKey.IRON_CONDOR)

        return StrategyKey.IRON_CONDOR, (StrategyKey.IRON_BUTTERFLY, StrategyKey.BULL_CALL_SPREAD)

    def risk_level(self, patterns: Sequence[CandlestickPattern], trend: TrendAnalysis) -> RiskLevel:
        """LOW with several patterns incl. a HIGH one; MEDIUM with some support; else HIGH."""
        has_high_reliability = any(p.reliability == Reliability.HIGH for p in patterns)
        if len(patterns) > 2 and has_high_reliability:
            return RiskLevel.LOW
        if len(patterns) > 1 or trend.confidence > 70:
            return RiskLevel.MEDIUM
        return RiskLevel.HIGH

    def volatility_band(self, implied_volatility: float) -> VolatilityBand:
        if implied_volatility > self.config.high_iv_threshold:
            return VolatilityBand.HIGH
        if implied_volatility > self.config.low_iv_threshold:
            return VolatilityBand.MEDIUM
        return VolatilityBand.LOW

    def expiration(self, key: StrategyKey, has_volatility_patterns: bool) -> str:
        if has_volatility_patterns:
            return self.VOLATILE_EXPIRATION
        return self.EXPIRATIONS.get(key, "30-45 days standard")

    def strikes(
        self,
        key: StrategyKey,
        current_price: float,
        trend: TrendAnalysis,
    ) -> Tuple[str, Tuple[float, ...]]:
        """Strike plan text and the strike prices it references."""
        price = current_price
        support = trend.support_level if trend.support_level > 0 else price * (1 - self.DEFAULT_LEVEL_OFFSET)
        resistance = (
            trend.resistance_level if trend.resistance_level > 0 else price * (1 + self.DEFAULT_LEVEL_OFFSET)
        )

        def at(multiple: float) -> float:
            return round(price * multiple, 2)

        atm = round(price, 2)

        if key == StrategyKey.LONG_CALL:
            target = round(resistance, 2)
            return f"ATM (${atm:.2f}) or slightly OTM targeting ${target:.2f}", (atm, target)
        if key == StrategyKey.LONG_PUT:
            target = round(support, 2)
            return f"ATM (${atm:.2f}) or slightly OTM targeting ${target:.2f}", (atm, target)
        if key == StrategyKey.BULL_CALL_SPREAD:
            return f"Buy ${atm:.2f} call, Sell ${at(1.05):.2f} call", (atm, at(1.05))
        if key == StrategyKey.BEAR_PUT_SPREAD:
            return f"Buy ${atm:.2f} put, Sell ${at(0.95):.2f} put", (atm, at(0.95))
        if key == StrategyKey.IRON_CONDOR:
            return (
                f"Short ${at(0.95):.2f} put & ${at(1.05):.2f} call, "
                f"protect with ${at(0.90):.2f} put & ${at(1.10):.2f} call wings",
                (at(0.90), at(0.95), at(1.05), at(1.10)),
            )
        if key == StrategyKey.IRON_BUTTERFLY:
            return (
                f"Short ${atm:.2f} straddle, protect with ${at(0.95):.2f} put & ${at(1.05):.2f} call wings",
                (at(0.95), atm, at(1.05)),
            )
        if key in (StrategyKey.LONG_STRADDLE, StrategyKey.SHORT_STRADDLE):
            return f"ATM straddle at ${atm:.2f}", (atm,)
        if key == StrategyKey.LONG_STRANGLE:
            # Use trend levels when they bracket the price
            put_strike = round(support, 2) if support < price else at(0.95)
            call_strike = round(resistance, 2) if resistance > price else at(1.05)
            return f"Buy ${put_strike:.2f} put & ${call_strike:.2f} call", (put_strike, call_strike)
        if key == StrategyKey.CALL_BACKSPREAD:
            return f"Sell ${at(0.98):.2f} call, Buy 2x ${at(1.03):.2f} calls", (at(0.98), at(1.03))
        if key == StrategyKey.PUT_BACKSPREAD:
            return f"Sell ${at(1.02):.2f} put, Buy 2x ${at(0.97):.2f} puts", (at(1.02), at(0.97))
        return f"Center strikes around ${atm:.2f}", (atm,)

    def entry_timing(self, patterns: Sequence[CandlestickPattern], trend: TrendAnalysis) -> str:
        has_reversal = any(p.type == PatternType.REVERSAL for p in patterns)
        has_high_confidence = any(p.confidence > 85 for p in patterns)

        if has_high_confidence and has_reversal:
            return "Enter immediately - high conviction setup"
        if trend.confidence > 80:
            return "Enter on any minor pullback in trend direction"
        if len(patterns) > 2:
            return "Wait for confirmation candle before entry"
        return "Scale into position over 2-3 days"

    def hedging(self, key: StrategyKey, risk_level: RiskLevel) -> str:
        if risk_level == RiskLevel.HIGH:
            return self.HIGH_RISK_HEDGE
        return self.HEDGES.get(key, self.DEFAULT_HEDGE)

    def pattern_ideas(
        self,
        patterns: Sequence[CandlestickPattern],
        current_price: float,
        trend: TrendAnalysis,
    ) -> Tuple[PatternOptionsIdea, ...]:
        """One trade idea per pattern from the first of its suggested strategies in the catalog."""
        ideas = []
        for pattern in patterns:
            strategy = next(
                (s for s in map(find_strategy, pattern.options_strategies) if s is not None), None,
            )
            if strategy is None:
                continue
            is_volatility = pattern.id in self.config.volatility_pattern_ids
            ideas.append(PatternOptionsIdea(
                pattern_id=pattern.id,
                strategy=strategy.name,
                reasoning=(
                    f"{pattern.name} ({pattern.reliability.value} reliability, "
                    f"{pattern.success_probability}% historical success): {strategy.market_outlook.lower()}"
                ),
                expiration=self.expiration(strategy.key, is_volatility),
                strikes=self.strikes(strategy.key, current_price, trend)[0],
            ))
        return tuple(ideas)

    def _volatility_patterns(self, patterns: Sequence[CandlestickPattern]) -> List[CandlestickPattern]:
        return [p for p in patterns if p.id in self.config.volatility_pattern_ids]
