"""Static descriptors for every candlestick pattern the classifier knows.

Reliability, confidence, signal, success probability and strength values are
fixed per rule. Rules with a context-dependent variant (hammer after a
decline, dragonfly doji) pick between fixed constants, they never compute
them from data.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..models import Candle, CandlestickPattern, PatternType, Reliability, Signal


@dataclass(frozen=True)
class PatternDescriptor:
    """Fixed metadata for one pattern id."""
    id: str
    name: str
    type: PatternType
    reliability: Reliability
    signal: Signal
    confidence: int
    success_probability: int  # historical hit rate, percent
    strength: int  # 1-10, weights the pattern summary
    candles_required: int
    description: str
    implications: str
    options_strategies: Tuple[str, ...] = ()

    def match(
        self,
        candle: Candle,
        *,
        name: Optional[str] = None,
        type: Optional[PatternType] = None,
        reliability: Optional[Reliability] = None,
        signal: Optional[Signal] = None,
        confidence: Optional[int] = None,
        success_probability: Optional[int] = None,
        strength: Optional[int] = None,
    ) -> CandlestickPattern:
        """Build a match detected at ``candle``, optionally using a fixed variant."""
        return CandlestickPattern(
            id=self.id,
            name=name or self.name,
            type=type or self.type,
            reliability=reliability or self.reliability,
            signal=signal or self.signal,
            confidence=confidence if confidence is not None else self.confidence,
            success_probability=(
                success_probability if success_probability is not None else self.success_probability
            ),
            strength=strength if strength is not None else self.strength,
            candles_required=self.candles_required,
            detected_at=candle.timestamp,
            description=self.description,
            implications=self.implications,
            options_strategies=self.options_strategies,
        )


DOJI = PatternDescriptor(
    id="doji",
    name="Doji",
    type=PatternType.NEUTRAL,
    reliability=Reliability.MEDIUM,
    signal=Signal.NEUTRAL,
    confidence=60,
    success_probability=55,
    strength=5,
    candles_required=1,
    description="Indecision pattern with open and close at nearly the same level",
    implications="Buyers and sellers are balanced; watch the next candle for direction",
    options_strategies=("Long Straddle", "Iron Condor"),
)

HAMMER = PatternDescriptor(
    id="hammer",
    name="Hammer",
    type=PatternType.BULLISH,
    reliability=Reliability.MEDIUM,
    signal=Signal.NEUTRAL,
    confidence=65,
    success_probability=65,
    strength=6,
    candles_required=1,
    description="Small body near the high with a long lower shadow",
    implications="Sellers pushed price down but buyers recovered most of the range",
    options_strategies=("Long Call", "Bull Call Spread"),
)

SHOOTING_STAR = PatternDescriptor(
    id="shooting-star",
    name="Shooting Star",
    type=PatternType.BEARISH,
    reliability=Reliability.MEDIUM,
    signal=Signal.NEUTRAL,
    confidence=65,
    success_probability=65,
    strength=6,
    candles_required=1,
    description="Small body near the low with a long upper shadow",
    implications="Buyers pushed price up but sellers rejected the advance",
    options_strategies=("Long Put", "Bear Put Spread"),
)

PIN_BAR = PatternDescriptor(
    id="pin-bar",
    name="Pin Bar",
    type=PatternType.BULLISH,
    reliability=Reliability.MEDIUM,
    signal=Signal.BUY,
    confidence=70,
    success_probability=70,
    strength=7,
    candles_required=1,
    description="One shadow covers most of the range, showing sharp price rejection",
    implications="Rejected prices often mark a short-term turning point",
    options_strategies=("Long Straddle", "Long Strangle"),
)

SPINNING_TOP = PatternDescriptor(
    id="spinning-top",
    name="Spinning Top",
    type=PatternType.NEUTRAL,
    reliability=Reliability.MEDIUM,
    signal=Signal.NEUTRAL,
    confidence=60,
    success_probability=60,
    strength=4,
    candles_required=1,
    description="Small body with long shadows on both sides",
    implications="Indecision; momentum of the prior move is fading",
    options_strategies=("Iron Condor",),
)

BULLISH_ENGULFING = PatternDescriptor(
    id="bullish-engulfing",
    name="Bullish Engulfing",
    type=PatternType.BULLISH,
    reliability=Reliability.HIGH,
    signal=Signal.BUY,
    confidence=78,
    success_probability=78,
    strength=8,
    candles_required=2,
    description="Bullish candle whose body engulfs the previous bearish body",
    implications="Buyers overwhelmed the prior session's sellers",
    options_strategies=("Long Call", "Bull Call Spread"),
)

BEARISH_ENGULFING = PatternDescriptor(
    id="bearish-engulfing",
    name="Bearish Engulfing",
    type=PatternType.BEARISH,
    reliability=Reliability.HIGH,
    signal=Signal.SELL,
    confidence=78,
    success_probability=78,
    strength=8,
    candles_required=2,
    description="Bearish candle whose body engulfs the previous bullish body",
    implications="Sellers overwhelmed the prior session's buyers",
    options_strategies=("Long Put", "Bear Put Spread"),
)

PIERCING = PatternDescriptor(
    id="piercing",
    name="Piercing Pattern",
    type=PatternType.BULLISH,
    reliability=Reliability.MEDIUM,
    signal=Signal.BUY,
    confidence=72,
    success_probability=72,
    strength=7,
    candles_required=2,
    description="Bullish candle opening below the prior low and closing above its midpoint",
    implications="A gap down was bought aggressively",
    options_strategies=("Bull Call Spread",),
)

DARK_CLOUD_COVER = PatternDescriptor(
    id="dark-cloud-cover",
    name="Dark Cloud Cover",
    type=PatternType.BEARISH,
    reliability=Reliability.MEDIUM,
    signal=Signal.SELL,
    confidence=72,
    success_probability=72,
    strength=7,
    candles_required=2,
    description="Bearish candle opening above the prior high and closing below its midpoint",
    implications="A gap up was sold aggressively",
    options_strategies=("Bear Put Spread",),
)

INSIDE_BAR = PatternDescriptor(
    id="inside-bar",
    name="Inside Bar",
    type=PatternType.CONTINUATION,
    reliability=Reliability.LOW,
    signal=Signal.NEUTRAL,
    confidence=50,
    success_probability=50,
    strength=4,
    candles_required=2,
    description="Range contained strictly within the previous candle's range",
    implications="Consolidation; a break of the mother bar sets direction",
    options_strategies=("Iron Condor", "Long Strangle"),
)

OUTSIDE_BAR = PatternDescriptor(
    id="outside-bar",
    name="Outside Bar",
    type=PatternType.REVERSAL,
    reliability=Reliability.MEDIUM,
    signal=Signal.NEUTRAL,
    confidence=65,
    success_probability=65,
    strength=6,
    candles_required=2,
    description="Range extends strictly beyond both sides of the previous candle",
    implications="Volatility expansion; the close shows which side won",
    options_strategies=("Long Straddle",),
)

MORNING_STAR = PatternDescriptor(
    id="morning-star",
    name="Morning Star",
    type=PatternType.BULLISH,
    reliability=Reliability.HIGH,
    signal=Signal.BUY,
    confidence=90,
    success_probability=82,
    strength=9,
    candles_required=3,
    description="Three-candle bullish reversal: bearish, small body, strong bullish",
    implications="Selling exhausted and buyers took control",
    options_strategies=("Long Call", "Call Backspread"),
)

EVENING_STAR = PatternDescriptor(
    id="evening-star",
    name="Evening Star",
    type=PatternType.BEARISH,
    reliability=Reliability.HIGH,
    signal=Signal.SELL,
    confidence=90,
    success_probability=82,
    strength=9,
    candles_required=3,
    description="Three-candle bearish reversal: bullish, small body, strong bearish",
    implications="Buying exhausted and sellers took control",
    options_strategies=("Long Put", "Put Backspread"),
)

THREE_WHITE_SOLDIERS = PatternDescriptor(
    id="three-white-soldiers",
    name="Three White Soldiers",
    type=PatternType.BULLISH,
    reliability=Reliability.HIGH,
    signal=Signal.STRONG_BUY,
    confidence=80,
    success_probability=80,
    strength=9,
    candles_required=3,
    description="Three consecutive bullish candles with progressively higher closes",
    implications="Sustained buying pressure across three sessions",
    options_strategies=("Call Backspread", "Long Call"),
)

THREE_BLACK_CROWS = PatternDescriptor(
    id="three-black-crows",
    name="Three Black Crows",
    type=PatternType.BEARISH,
    reliability=Reliability.HIGH,
    signal=Signal.STRONG_SELL,
    confidence=80,
    success_probability=80,
    strength=9,
    candles_required=3,
    description="Three consecutive bearish candles with progressively lower closes",
    implications="Sustained selling pressure across three sessions",
    options_strategies=("Put Backspread", "Long Put"),
)


PATTERN_LIBRARY = {
    d.id: d
    for d in (
        DOJI, HAMMER, SHOOTING_STAR, PIN_BAR, SPINNING_TOP,
        BULLISH_ENGULFING, BEARISH_ENGULFING, PIERCING, DARK_CLOUD_COVER,
        INSIDE_BAR, OUTSIDE_BAR,
        MORNING_STAR, EVENING_STAR, THREE_WHITE_SOLDIERS, THREE_BLACK_CROWS,
    )
}
