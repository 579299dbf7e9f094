"""Tests for options strategy selection."""

import pytest
from hypothesis import given, strategies as st, settings

from candle_signals.models import (
    Candle,
    CandlestickPattern,
    InvalidInputError,
    PatternType,
    Reliability,
    Signal,
    TrendAnalysis,
    TrendDirection,
    TrendLine,
    TrendStrength,
)
from candle_signals.options import (
    STRATEGY_CATALOG,
    OptionsStrategySelector,
    RiskLevel,
    StrategyKey,
    VolatilityBand,
    find_strategy,
    get_strategy,
)
from candle_signals.patterns.library import PATTERN_LIBRARY


CANDLE = Candle(timestamp=0, open=100, high=101, low=99, close=100.5)


def pattern(pattern_id):
    return PATTERN_LIBRARY[pattern_id].match(CANDLE)


def trend(direction=TrendDirection.SIDEWAYS, confidence=60, support=0.0, resistance=0.0):
    return TrendAnalysis(
        direction=direction,
        strength=TrendStrength.MODERATE,
        duration=3,
        confidence=confidence,
        support_level=support,
        resistance_level=resistance,
        trend_line=TrendLine(slope=0.0, intercept=100.0, r2=confidence / 100),
    )


class TestDecisionTable:
    """Tests for primary strategy selection."""

    def test_strong_buy_high_conviction_uses_call_backspread(self):
        primary, alternatives = OptionsStrategySelector().choose(
            Signal.STRONG_BUY, trend(TrendDirection.UPTREND, 90), [pattern("morning-star")], 25.0,
        )
        assert primary == StrategyKey.CALL_BACKSPREAD
        assert alternatives == (StrategyKey.LONG_CALL, StrategyKey.BULL_CALL_SPREAD)

    def test_strong_buy_without_conviction_uses_long_call(self):
        primary, _ = OptionsStrategySelector().choose(
            Signal.STRONG_BUY, trend(TrendDirection.UPTREND, 70), [pattern("morning-star")], 25.0,
        )
        assert primary == StrategyKey.LONG_CALL

    def test_strong_sell_high_conviction_uses_put_backspread(self):
        primary, alternatives = OptionsStrategySelector().choose(
            Signal.STRONG_SELL, trend(TrendDirection.DOWNTREND, 90), [pattern("evening-star")], 25.0,
        )
        assert primary == StrategyKey.PUT_BACKSPREAD
        assert alternatives == (StrategyKey.LONG_PUT, StrategyKey.BEAR_PUT_SPREAD)

    def test_strong_sell_without_high_pattern_uses_long_put(self):
        primary, _ = OptionsStrategySelector().choose(
            Signal.STRONG_SELL, trend(TrendDirection.DOWNTREND, 90), [pattern("dark-cloud-cover")], 25.0,
        )
        assert primary == StrategyKey.LONG_PUT

    def test_buy_with_uptrend_uses_bull_call_spread(self):
        primary, _ = OptionsStrategySelector().choose(
            Signal.BUY, trend(TrendDirection.UPTREND), [], 25.0,
        )
        assert primary == StrategyKey.BULL_CALL_SPREAD

    def test_sell_with_downtrend_uses_bear_put_spread(self):
        primary, _ = OptionsStrategySelector().choose(
            Signal.SELL, trend(TrendDirection.DOWNTREND), [], 25.0,
        )
        assert primary == StrategyKey.BEAR_PUT_SPREAD

    def test_volatility_pattern_with_low_iv_buys_straddle(self):
        primary, alternatives = OptionsStrategySelector().choose(
            Signal.NEUTRAL, trend(), [pattern("outside-bar")], 15.0,
        )
        assert primary == StrategyKey.LONG_STRADDLE
        assert StrategyKey.LONG_STRANGLE in alternatives

    def test_volatility_pattern_with_normal_iv_sells_condor(self):
        primary, _ = OptionsStrategySelector().choose(
            Signal.NEUTRAL, trend(), [pattern("pin-bar")], 25.0,
        )
        assert primary == StrategyKey.IRON_CONDOR

    def test_sideways_with_high_iv_sells_condor(self):
        primary, alternatives = OptionsStrategySelector().choose(Signal.NEUTRAL, trend(), [], 35.0)
        assert primary == StrategyKey.IRON_CONDOR
        assert alternatives[0] == StrategyKey.SHORT_STRADDLE

    def test_sideways_with_normal_iv_buys_straddle(self):
        primary, _ = OptionsStrategySelector().choose(Signal.NEUTRAL, trend(), [], 25.0)
        assert primary == StrategyKey.LONG_STRADDLE

    def test_mismatched_signal_and_trend_falls_back_to_condor(self):
        primary, alternatives = OptionsStrategySelector().choose(
            Signal.BUY, trend(TrendDirection.DOWNTREND), [], 25.0,
        )
        assert primary == StrategyKey.IRON_CONDOR
        assert alternatives == (StrategyKey.IRON_BUTTERFLY, StrategyKey.BULL_CALL_SPREAD)

    def test_strong_signal_in_sideways_market_falls_back_to_condor(self):
        primary, _ = OptionsStrategySelector().choose(Signal.STRONG_BUY, trend(), [], 15.0)
        assert primary == StrategyKey.IRON_CONDOR


class TestSelect:
    """Tests for the assembled options analysis."""

    def test_invalid_price_raises(self):
        with pytest.raises(InvalidInputError):
            OptionsStrategySelector().select(Signal.NEUTRAL, trend(), [], 0.0)

    def test_negative_iv_raises(self):
        with pytest.raises(InvalidInputError):
            OptionsStrategySelector().select(Signal.NEUTRAL, trend(), [], 100.0, implied_volatility=-1.0)

    def test_default_iv_is_used(self):
        result = OptionsStrategySelector().select(Signal.NEUTRAL, trend(), [], 100.0)
        assert result.market_context.implied_volatility == 25.0
        assert result.market_context.implied_volatility_band == VolatilityBand.MEDIUM

    def test_technical_bias_text(self):
        result = OptionsStrategySelector().select(
            Signal.STRONG_BUY, trend(TrendDirection.UPTREND, 90), [pattern("morning-star")], 100.0,
        )
        assert result.market_context.technical_bias == "STRONG BUY - UPTREND"
        assert result.primary_strategy == STRATEGY_CATALOG[StrategyKey.CALL_BACKSPREAD]
        assert [s.key for s in result.alternative_strategies] == [
            StrategyKey.LONG_CALL, StrategyKey.BULL_CALL_SPREAD,
        ]

    def test_volatility_patterns_shorten_expiration(self):
        selector = OptionsStrategySelector()
        result = selector.select(Signal.NEUTRAL, trend(), [pattern("outside-bar")], 100.0, 15.0)
        assert result.recommendations.expiration_window == selector.VOLATILE_EXPIRATION

    def test_high_risk_position_size_and_hedge(self):
        selector = OptionsStrategySelector()
        result = selector.select(Signal.NEUTRAL, trend(confidence=60), [], 100.0)
        assert result.market_context.risk_level == RiskLevel.HIGH
        assert result.recommendations.position_size == "0.5-2% of portfolio"
        assert result.recommendations.hedging == selector.HIGH_RISK_HEDGE

    @given(
        signal=st.sampled_from(list(Signal)),
        direction=st.sampled_from(list(TrendDirection)),
        confidence=st.integers(min_value=50, max_value=95),
        ids=st.lists(st.sampled_from(sorted(PATTERN_LIBRARY)), max_size=4),
        iv=st.floats(min_value=0.0, max_value=150.0),
        price=st.floats(min_value=0.01, max_value=100_000.0),
    )
    @settings(max_examples=200)
    def test_selection_is_idempotent(self, signal, direction, confidence, ids, iv, price):
        """Property: the same inputs SHALL always yield the same recommendation."""
        selector = OptionsStrategySelector()
        patterns = [pattern(i) for i in ids]
        first = selector.select(signal, trend(direction, confidence), patterns, price, iv)
        second = selector.select(signal, trend(direction, confidence), patterns, price, iv)
        assert first == second
        assert first.primary_strategy.key in STRATEGY_CATALOG
        assert first.primary_strategy not in first.alternative_strategies


class TestDerivedRecommendations:
    """Tests for risk level, volatility band, strikes and timing."""

    def test_risk_level_low_with_several_patterns(self):
        patterns = [pattern("morning-star"), pattern("doji"), pattern("inside-bar")]
        assert OptionsStrategySelector().risk_level(patterns, trend()) == RiskLevel.LOW

    def test_risk_level_medium_with_two_patterns(self):
        patterns = [pattern("doji"), pattern("inside-bar")]
        assert OptionsStrategySelector().risk_level(patterns, trend()) == RiskLevel.MEDIUM

    def test_risk_level_medium_with_confident_trend(self):
        assert OptionsStrategySelector().risk_level([], trend(confidence=75)) == RiskLevel.MEDIUM

    def test_risk_level_high_otherwise(self):
        assert OptionsStrategySelector().risk_level([pattern("doji")], trend()) == RiskLevel.HIGH

    @pytest.mark.parametrize("iv,band", [
        (10.0, VolatilityBand.LOW),
        (20.0, VolatilityBand.LOW),
        (20.5, VolatilityBand.MEDIUM),
        (30.0, VolatilityBand.MEDIUM),
        (30.5, VolatilityBand.HIGH),
    ])
    def test_volatility_band(self, iv, band):
        assert OptionsStrategySelector().volatility_band(iv) == band

    def test_bull_call_spread_strikes(self):
        _, strikes = OptionsStrategySelector().strikes(StrategyKey.BULL_CALL_SPREAD, 100.0, trend())
        assert strikes == (100.0, 105.0)

    def test_iron_condor_strikes(self):
        text, strikes = OptionsStrategySelector().strikes(StrategyKey.IRON_CONDOR, 100.0, trend())
        assert strikes == (90.0, 95.0, 105.0, 110.0)
        assert "$95.00" in text

    def test_long_call_targets_resistance(self):
        _, strikes = OptionsStrategySelector().strikes(
            StrategyKey.LONG_CALL, 100.0, trend(support=96.0, resistance=108.0),
        )
        assert strikes == (100.0, 108.0)

    def test_missing_levels_fall_back_to_five_percent(self):
        _, strikes = OptionsStrategySelector().strikes(StrategyKey.LONG_PUT, 100.0, trend())
        assert strikes == (100.0, 95.0)

    def test_strangle_uses_bracketing_levels(self):
        _, strikes = OptionsStrategySelector().strikes(
            StrategyKey.LONG_STRANGLE, 100.0, trend(support=96.0, resistance=108.0),
        )
        assert strikes == (96.0, 108.0)

    def test_every_catalog_strategy_has_strikes(self):
        selector = OptionsStrategySelector()
        for key in StrategyKey:
            text, strikes = selector.strikes(key, 250.0, trend())
            assert text
            assert all(s > 0 for s in strikes)

    def test_entry_timing_for_high_confidence_reversal(self):
        reversal = CandlestickPattern(
            id="outside-bar", name="Outside Bar", type=PatternType.REVERSAL,
            reliability=Reliability.HIGH, signal=Signal.NEUTRAL, confidence=90,
            candles_required=2, detected_at=0,
        )
        timing = OptionsStrategySelector().entry_timing([reversal], trend())
        assert timing == "Enter immediately - high conviction setup"

    def test_entry_timing_for_confident_trend(self):
        timing = OptionsStrategySelector().entry_timing([], trend(confidence=90))
        assert timing == "Enter on any minor pullback in trend direction"

    def test_entry_timing_default(self):
        timing = OptionsStrategySelector().entry_timing([pattern("doji")], trend())
        assert timing == "Scale into position over 2-3 days"


class TestPatternIdeas:
    """Tests for per-pattern options trade ideas."""

    def test_one_idea_per_pattern_from_first_suggested_strategy(self):
        ideas = OptionsStrategySelector().pattern_ideas(
            [pattern("three-white-soldiers"), pattern("pin-bar")], 100.0, trend(),
        )
        assert [(i.pattern_id, i.strategy) for i in ideas] == [
            ("three-white-soldiers", "Call Backspread"),
            ("pin-bar", "Long Straddle"),
        ]

    def test_idea_carries_expiration_and_strikes(self):
        soldiers, pin_bar = OptionsStrategySelector().pattern_ideas(
            [pattern("three-white-soldiers"), pattern("pin-bar")], 100.0, trend(),
        )
        assert soldiers.expiration == "45-90 days for explosive moves"
        assert soldiers.strikes == "Sell $98.00 call, Buy 2x $103.00 calls"
        assert "80% historical success" in soldiers.reasoning
        assert pin_bar.expiration == OptionsStrategySelector.VOLATILE_EXPIRATION
        assert pin_bar.strikes == "ATM straddle at $100.00"

    def test_uncatalogued_strategy_is_skipped(self):
        custom = CandlestickPattern(
            id="custom", name="Custom", type=PatternType.BULLISH,
            reliability=Reliability.LOW, signal=Signal.BUY, confidence=50,
            candles_required=1, detected_at=0, options_strategies=("Covered Call", "Long Call"),
        )
        bare = CandlestickPattern(
            id="bare", name="Bare", type=PatternType.NEUTRAL,
            reliability=Reliability.LOW, signal=Signal.NEUTRAL, confidence=50,
            candles_required=1, detected_at=0, options_strategies=("Covered Call",),
        )
        ideas = OptionsStrategySelector().pattern_ideas([custom, bare], 100.0, trend())
        assert [(i.pattern_id, i.strategy) for i in ideas] == [("custom", "Long Call")]

    def test_select_attaches_ideas(self):
        result = OptionsStrategySelector().select(
            Signal.BUY, trend(), [pattern("piercing")], 100.0,
        )
        assert [i.strategy for i in result.pattern_ideas] == ["Bull Call Spread"]

    def test_every_library_pattern_suggests_a_catalogued_strategy(self):
        for descriptor in PATTERN_LIBRARY.values():
            assert find_strategy(descriptor.options_strategies[0]) is not None


class TestCatalog:
    """Tests for the static strategy catalog."""

    def test_every_key_is_catalogued(self):
        assert set(STRATEGY_CATALOG) == set(StrategyKey)
        for key, strategy in STRATEGY_CATALOG.items():
            assert strategy.key == key
            assert 0 < strategy.success_probability < 100

    def test_get_strategy(self):
        assert get_strategy(StrategyKey.IRON_CONDOR).name == "Iron Condor"
