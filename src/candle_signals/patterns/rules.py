"""Candlestick pattern rules.

Each rule is an independent function taking the immutable trailing window of
candles (oldest first, the candle under test last) and returning a match or
None. Rules return None when the window is shorter than they need. Every
threshold is a ratio of the candle's own range or body, so matches do not
depend on the absolute price level. A zero-range candle never matches a
shadow or body ratio rule.
"""

from typing import Callable, Optional, Sequence, Tuple

from ..config import PatternConfig
from ..models import Candle, CandlestickPattern, PatternType, Reliability, Signal
from . import library


Window = Tuple[Candle, ...]
PatternRule = Callable[[Window, PatternConfig], Optional[CandlestickPattern]]


def _is_decline(candles: Sequence[Candle]) -> bool:
    """At least two candles with strictly falling closes."""
    if len(candles) < 2:
        return False
    return all(b.close < a.close for a, b in zip(candles, candles[1:]))


def _is_rise(candles: Sequence[Candle]) -> bool:
    """At least two candles with strictly rising closes."""
    if len(candles) < 2:
        return False
    return all(b.close > a.close for a, b in zip(candles, candles[1:]))


def _prior(window: Window, config: PatternConfig) -> Window:
    """Context candles preceding the candle under test."""
    return window[-1 - config.trend_context_candles:-1]


# --- Single candle rules ---

def detect_doji(window: Window, config: PatternConfig) -> Optional[CandlestickPattern]:
    """Body no larger than a tenth of the range.

    Dragonfly (long lower shadow) leans bullish and gravestone (long upper
    shadow) leans bearish; otherwise the doji is neutral.
    """
    if not window:
        return None
    c = window[-1]
    if c.range <= 0 or c.body > config.doji_body_ratio * c.range:
        return None

    if c.lower_shadow > c.upper_shadow * 2:
        return library.DOJI.match(
            c, name="Dragonfly Doji", type=PatternType.BULLISH, signal=Signal.BUY,
            confidence=70, success_probability=70,
        )
    if c.upper_shadow > c.lower_shadow * 2:
        return library.DOJI.match(
            c, name="Gravestone Doji", type=PatternType.BEARISH, signal=Signal.SELL,
            confidence=70, success_probability=70,
        )
    return library.DOJI.match(c)


def _is_hammer_shape(c: Candle, config: PatternConfig) -> bool:
    if c.range <= 0:
        return False
    # Lower bound keeps hammers disjoint from doji
    if not config.doji_body_ratio * c.range < c.body < config.hammer_body_ratio * c.range:
        return False
    return (
        c.lower_shadow >= c.body * config.shadow_body_multiple
        and c.upper_shadow <= c.body * config.opposite_shadow_body_ratio
    )


def _is_shooting_star_shape(c: Candle, config: PatternConfig) -> bool:
    if c.range <= 0:
        return False
    if not config.doji_body_ratio * c.range < c.body < config.hammer_body_ratio * c.range:
        return False
    return (
        c.upper_shadow >= c.body * config.shadow_body_multiple
        and c.lower_shadow <= c.body * config.opposite_shadow_body_ratio
    )


def detect_hammer(window: Window, config: PatternConfig) -> Optional[CandlestickPattern]:
    """Long lower shadow, small body near the high. Stronger after a decline."""
    if not window or not _is_hammer_shape(window[-1], config):
        return None
    c = window[-1]
    if _is_decline(_prior(window, config)):
        return library.HAMMER.match(
            c, reliability=Reliability.HIGH, signal=Signal.BUY, confidence=75,
            success_probability=75, strength=8,
        )
    return library.HAMMER.match(c)


def detect_shooting_star(window: Window, config: PatternConfig) -> Optional[CandlestickPattern]:
    """Long upper shadow, small body near the low. Stronger after a rise."""
    if not window or not _is_shooting_star_shape(window[-1], config):
        return None
    c = window[-1]
    if _is_rise(_prior(window, config)):
        return library.SHOOTING_STAR.match(
            c, reliability=Reliability.HIGH, signal=Signal.SELL, confidence=75,
            success_probability=75, strength=8,
        )
    return library.SHOOTING_STAR.match(c)


def detect_pin_bar(window: Window, config: PatternConfig) -> Optional[CandlestickPattern]:
    """One shadow at least 60% of the range with a body of at most 30%."""
    if not window:
        return None
    c = window[-1]
    if c.range <= 0 or c.body > config.pin_bar_body_ratio * c.range:
        return None

    threshold = config.pin_bar_shadow_ratio * c.range
    if c.lower_shadow >= threshold:
        return library.PIN_BAR.match(c, name="Bullish Pin Bar")
    if c.upper_shadow >= threshold:
        return library.PIN_BAR.match(
            c, name="Bearish Pin Bar", type=PatternType.BEARISH, signal=Signal.SELL,
        )
    return None


def detect_spinning_top(window: Window, config: PatternConfig) -> Optional[CandlestickPattern]:
    if not window:
        return None
    c = window[-1]
    if c.range <= 0:
        return None
    if not config.doji_body_ratio * c.range < c.body < config.spinning_top_body_ratio * c.range:
        return None
    if c.upper_shadow > c.body and c.lower_shadow > c.body:
        return library.SPINNING_TOP.match(c)
    return None


# --- Two candle rules ---

def detect_engulfing(window: Window, config: PatternConfig) -> Optional[CandlestickPattern]:
    """Current body strictly contains and exceeds the previous opposite-coloured body."""
    if len(window) < 2:
        return None
    prev, curr = window[-2], window[-1]
    if curr.body <= prev.body:
        return None

    if (prev.is_bearish and curr.is_bullish
            and curr.open < prev.close and curr.close > prev.open):
        return library.BULLISH_ENGULFING.match(curr)
    if (prev.is_bullish and curr.is_bearish
            and curr.open > prev.close and curr.close < prev.open):
        return library.BEARISH_ENGULFING.match(curr)
    return None


def detect_piercing(window: Window, config: PatternConfig) -> Optional[CandlestickPattern]:
    if len(window) < 2:
        return None
    prev, curr = window[-2], window[-1]
    if (prev.is_bearish and curr.is_bullish
            and curr.open < prev.low
            and prev.body_midpoint < curr.close < prev.open):
        return library.PIERCING.match(curr)
    return None


def detect_dark_cloud_cover(window: Window, config: PatternConfig) -> Optional[CandlestickPattern]:
    if len(window) < 2:
        return None
    prev, curr = window[-2], window[-1]
    if (prev.is_bullish and curr.is_bearish
            and curr.open > prev.high
            and prev.open < curr.close < prev.body_midpoint):
        return library.DARK_CLOUD_COVER.match(curr)
    return None


def detect_inside_bar(window: Window, config: PatternConfig) -> Optional[CandlestickPattern]:
    if len(window) < 2:
        return None
    prev, curr = window[-2], window[-1]
    if curr.high < prev.high and curr.low > prev.low:
        return library.INSIDE_BAR.match(curr)
    return None


def detect_outside_bar(window: Window, config: PatternConfig) -> Optional[CandlestickPattern]:
    """Range beyond both sides of the previous candle; the close picks the side."""
    if len(window) < 2:
        return None
    prev, curr = window[-2], window[-1]
    if not (curr.high > prev.high and curr.low < prev.low):
        return None

    if curr.is_bullish:
        return library.OUTSIDE_BAR.match(curr, name="Bullish Outside Bar", signal=Signal.BUY)
    if curr.is_bearish:
        return library.OUTSIDE_BAR.match(curr, name="Bearish Outside Bar", signal=Signal.SELL)
    return library.OUTSIDE_BAR.match(curr)


# --- Three candle rules ---

def detect_star(window: Window, config: PatternConfig) -> Optional[CandlestickPattern]:
    """Morning star or evening star."""
    if len(window) < 3:
        return None
    first, middle, last = window[-3], window[-2], window[-1]
    if middle.body >= first.body * config.star_middle_body_ratio:
        return None

    if first.is_bearish and last.is_bullish and last.close > first.body_midpoint:
        return library.MORNING_STAR.match(last)
    if first.is_bullish and last.is_bearish and last.close < first.body_midpoint:
        return library.EVENING_STAR.match(last)
    return None


def detect_three_white_soldiers(window: Window, config: PatternConfig) -> Optional[CandlestickPattern]:
    """Three bullish candles, rising closes, each opening inside the previous body."""
    if len(window) < 3:
        return None
    first, second, third = window[-3], window[-2], window[-1]
    if not (first.is_bullish and second.is_bullish and third.is_bullish):
        return None
    if not (first.close < second.close < third.close):
        return None
    if first.open < second.open < first.close and second.open < third.open < second.close:
        return library.THREE_WHITE_SOLDIERS.match(third)
    return None


def detect_three_black_crows(window: Window, config: PatternConfig) -> Optional[CandlestickPattern]:
    """Three bearish candles, falling closes, each opening inside the previous body."""
    if len(window) < 3:
        return None
    first, second, third = window[-3], window[-2], window[-1]
    if not (first.is_bearish and second.is_bearish and third.is_bearish):
        return None
    if not (first.close > second.close > third.close):
        return None
    if first.close < second.open < first.open and second.close < third.open < second.open:
        return library.THREE_BLACK_CROWS.match(third)
    return None


# Evaluation order; also the tie-break order for equal confidence.
DEFAULT_RULES: Tuple[PatternRule, ...] = (
    detect_star,
    detect_three_white_soldiers,
    detect_three_black_crows,
    detect_engulfing,
    detect_piercing,
    detect_dark_cloud_cover,
    detect_outside_bar,
    detect_inside_bar,
    detect_hammer,
    detect_shooting_star,
    detect_pin_bar,
    detect_doji,
    detect_spinning_top,
)
