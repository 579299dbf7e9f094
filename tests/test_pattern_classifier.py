"""Tests for the pattern classifier."""

import pytest
from hypothesis import given, strategies as st, settings

from candle_signals.config import PatternConfig
from candle_signals.models import Candle, InvalidInputError, Reliability
from candle_signals.patterns import PatternClassifier


@st.composite
def candle_windows(draw, max_size=8):
    """Lists of valid candles with increasing timestamps."""
    size = draw(st.integers(min_value=1, max_value=max_size))
    candles = []
    for i in range(size):
        low = draw(st.floats(min_value=1.0, max_value=1000.0, allow_nan=False))
        high = low + draw(st.floats(min_value=0.0, max_value=low, allow_nan=False))
        open_ = draw(st.floats(min_value=low, max_value=high))
        close = draw(st.floats(min_value=low, max_value=high))
        candles.append(Candle(timestamp=i * 60_000, open=open_, high=high, low=low, close=close))
    return candles


def scaled(candles, factor):
    return [
        Candle(timestamp=c.timestamp, open=c.open * factor, high=c.high * factor,
               low=c.low * factor, close=c.close * factor, volume=c.volume)
        for c in candles
    ]


def _candle(open_, high, low, close, ts=0):
    return Candle(timestamp=ts, open=open_, high=high, low=low, close=close)


class TestClassify:
    """Tests for classification at the final candle."""

    def test_empty_input_raises(self):
        with pytest.raises(InvalidInputError):
            PatternClassifier().classify([])

    def test_three_white_soldiers_at_end_of_uptrend(self, uptrend_candles):
        matches = PatternClassifier().classify(uptrend_candles)
        assert [m.id for m in matches] == ["three-white-soldiers"]
        assert matches[0].detected_at == uptrend_candles[-1].timestamp

    def test_three_black_crows_at_end_of_downtrend(self, downtrend_candles):
        matches = PatternClassifier().classify(downtrend_candles)
        assert [m.id for m in matches] == ["three-black-crows"]

    def test_single_candle_only_runs_single_candle_rules(self):
        hammer = _candle(100, 100.6, 98.6, 100.5)
        matches = PatternClassifier().classify([hammer])
        assert [m.id for m in matches] == ["pin-bar", "hammer"]

    def test_hammer_after_decline_ranks_first(self):
        candles = [
            _candle(112, 113, 109, 110, ts=1),
            _candle(108, 109, 105, 106, ts=2),
            _candle(104, 105, 101, 102, ts=3),
            _candle(100, 100.6, 98.6, 100.5, ts=4),
        ]
        matches = PatternClassifier().classify(candles)
        assert [m.id for m in matches] == ["hammer", "pin-bar"]
        assert matches[0].reliability == Reliability.HIGH

    def test_zero_range_candles_match_nothing(self):
        candles = [_candle(100, 100, 100, 100, ts=i) for i in range(5)]
        assert PatternClassifier().classify(candles) == []

    def test_timeframe_is_echoed_on_matches(self, uptrend_candles):
        matches = PatternClassifier().classify(uptrend_candles, timeframe="1h")
        assert all(m.timeframe == "1h" for m in matches)

    def test_rules_see_only_the_lookback_window(self, uptrend_candles):
        seen = []

        def recording_rule(window, config):
            seen.append(window)
            return None

        classifier = PatternClassifier(PatternConfig(lookback=4), rules=[recording_rule])
        classifier.classify(uptrend_candles)
        assert len(seen) == 1
        assert isinstance(seen[0], tuple)
        assert seen[0] == tuple(uptrend_candles[-4:])

    @given(candles=candle_windows())
    @settings(max_examples=200)
    def test_classify_never_fails_on_valid_candles(self, candles):
        """Property: any valid candle sequence SHALL classify without error."""
        matches = PatternClassifier().classify(candles)
        confidences = [m.confidence for m in matches]
        assert confidences == sorted(confidences, reverse=True)
        for m in matches:
            assert m.detected_at == candles[-1].timestamp
            assert 0 <= m.confidence <= 100

    @given(
        candles=candle_windows(max_size=4),
        factor=st.sampled_from([0.25, 0.5, 2.0, 4.0, 1024.0]),
    )
    @settings(max_examples=200)
    def test_scale_invariance(self, candles, factor):
        """Property: multiplying all prices by a constant SHALL NOT change the matches."""
        classifier = PatternClassifier()
        unscaled = [(m.id, m.name, m.confidence) for m in classifier.classify(candles)]
        rescaled = [(m.id, m.name, m.confidence) for m in classifier.classify(scaled(candles, factor))]
        assert unscaled == rescaled


class TestScanHistory:
    """Tests for classification at every position."""

    def test_empty_input_raises(self):
        with pytest.raises(InvalidInputError):
            PatternClassifier().scan_history([])

    def test_most_recent_first(self, uptrend_candles):
        matches = PatternClassifier().scan_history(uptrend_candles)
        timestamps = [m.detected_at for m in matches]
        assert timestamps == sorted(timestamps, reverse=True)

    def test_soldiers_found_at_every_position_from_third(self, uptrend_candles):
        matches = PatternClassifier().scan_history(uptrend_candles)
        soldiers = [m for m in matches if m.id == "three-white-soldiers"]
        assert len(soldiers) == len(uptrend_candles) - 2
        assert soldiers[0].detected_at == uptrend_candles[-1].timestamp

    def test_final_position_matches_classify(self, downtrend_candles):
        classifier = PatternClassifier()
        history = classifier.scan_history(downtrend_candles)
        latest = [m for m in history if m.detected_at == downtrend_candles[-1].timestamp]
        assert latest == classifier.classify(downtrend_candles)
