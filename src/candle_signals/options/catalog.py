"""Fixed catalog of options strategies.

Descriptors are static. The selector only chooses among them; it never
builds a new strategy.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class StrategyKey(Enum):
    """Identifier of a catalog strategy."""
    LONG_CALL = "long_call"
    LONG_PUT = "long_put"
    BULL_CALL_SPREAD = "bull_call_spread"
    BEAR_PUT_SPREAD = "bear_put_spread"
    IRON_CONDOR = "iron_condor"
    IRON_BUTTERFLY = "iron_butterfly"
    LONG_STRADDLE = "long_straddle"
    LONG_STRANGLE = "long_strangle"
    SHORT_STRADDLE = "short_straddle"
    CALL_BACKSPREAD = "call_backspread"
    PUT_BACKSPREAD = "put_backspread"


class StrategyType(Enum):
    BULLISH = "BULLISH"
    BEARISH = "BEARISH"
    NEUTRAL = "NEUTRAL"
    VOLATILITY = "VOLATILITY"


class Complexity(Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


class Sensitivity(Enum):
    """Effect of time decay or volatility on the position's value."""
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"
    NEUTRAL = "NEUTRAL"


@dataclass(frozen=True)
class OptionsStrategy:
    """Static descriptor of one options strategy."""
    key: StrategyKey
    name: str
    type: StrategyType
    complexity: Complexity
    max_risk: str
    max_profit: str
    breakeven: Tuple[str, ...]
    time_decay: Sensitivity
    volatility_impact: Sensitivity
    description: str
    setup: Tuple[str, ...]
    market_outlook: str
    risk_reward: str
    success_probability: int  # historical estimate, percent
    ideal_conditions: Tuple[str, ...]
    exit_rules: Tuple[str, ...]
    adjustments: Tuple[str, ...]


STRATEGY_CATALOG: Dict[StrategyKey, OptionsStrategy] = {
    StrategyKey.LONG_CALL: OptionsStrategy(
        key=StrategyKey.LONG_CALL,
        name="Long Call",
        type=StrategyType.BULLISH,
        complexity=Complexity.BEGINNER,
        max_risk="Premium paid",
        max_profit="Unlimited",
        breakeven=("Strike + Premium",),
        time_decay=Sensitivity.NEGATIVE,
        volatility_impact=Sensitivity.POSITIVE,
        description="Simple bullish strategy with limited risk and unlimited profit potential",
        setup=("Buy 1 call ATM or slightly OTM",),
        market_outlook="Expecting significant upward movement",
        risk_reward="Limited risk, unlimited reward",
        success_probability=35,
        ideal_conditions=(
            "Strong bullish momentum", "Low to rising implied volatility", "Clear breakout patterns",
        ),
        exit_rules=(
            "Close at 50-100% profit", "Close at 50% loss", "Roll to next expiration if still bullish",
        ),
        adjustments=("Roll up and out if profitable", "Add protective put if the move reverses"),
    ),
    StrategyKey.LONG_PUT: OptionsStrategy(
        key=StrategyKey.LONG_PUT,
        name="Long Put",
        type=StrategyType.BEARISH,
        complexity=Complexity.BEGINNER,
        max_risk="Premium paid",
        max_profit="Strike - Premium (if the underlying goes to zero)",
        breakeven=("Strike - Premium",),
        time_decay=Sensitivity.NEGATIVE,
        volatility_impact=Sensitivity.POSITIVE,
        description="Simple bearish strategy with limited risk and high profit potential",
        setup=("Buy 1 put ATM or slightly OTM",),
        market_outlook="Expecting significant downward movement",
        risk_reward="Limited risk, high reward potential",
        success_probability=35,
        ideal_conditions=(
            "Strong bearish momentum", "Low to rising implied volatility", "Clear breakdown patterns",
        ),
        exit_rules=(
            "Close at 50-100% profit", "Close at 50% loss", "Roll to next expiration if still bearish",
        ),
        adjustments=("Roll down and out if profitable", "Add protective call if the move reverses"),
    ),
    StrategyKey.BULL_CALL_SPREAD: OptionsStrategy(
        key=StrategyKey.BULL_CALL_SPREAD,
        name="Bull Call Spread",
        type=StrategyType.BULLISH,
        complexity=Complexity.INTERMEDIATE,
        max_risk="Net premium paid",
        max_profit="Difference between strikes - net premium",
        breakeven=("Lower strike + net premium",),
        time_decay=Sensitivity.NEGATIVE,
        volatility_impact=Sensitivity.NEUTRAL,
        description="Moderate bullish strategy with limited risk and limited profit",
        setup=("Buy ATM call", "Sell OTM call (+5-10%)"),
        market_outlook="Expecting moderate upward movement",
        risk_reward="Limited risk, limited reward",
        success_probability=50,
        ideal_conditions=(
            "Moderate bullish momentum", "High implied volatility", "Range-bound to mildly bullish",
        ),
        exit_rules=("Close at 50% of max profit", "Close at 50% loss", "Manage near expiration"),
        adjustments=("Close short leg if breached", "Roll the entire spread if needed"),
    ),
    StrategyKey.BEAR_PUT_SPREAD: OptionsStrategy(
        key=StrategyKey.BEAR_PUT_SPREAD,
        name="Bear Put Spread",
        type=StrategyType.BEARISH,
        complexity=Complexity.INTERMEDIATE,
        max_risk="Net premium paid",
        max_profit="Difference between strikes - net premium",
        breakeven=("Higher strike - net premium",),
        time_decay=Sensitivity.NEGATIVE,
        volatility_impact=Sensitivity.NEUTRAL,
        description="Moderate bearish strategy with limited risk and limited profit",
        setup=("Buy ATM put", "Sell OTM put (-5-10%)"),
        market_outlook="Expecting moderate downward movement",
        risk_reward="Limited risk, limited reward",
        success_probability=50,
        ideal_conditions=(
            "Moderate bearish momentum", "High implied volatility", "Range-bound to mildly bearish",
        ),
        exit_rules=("Close at 50% of max profit", "Close at 50% loss", "Manage near expiration"),
        adjustments=("Close short leg if breached", "Roll the entire spread if needed"),
    ),
    StrategyKey.IRON_CONDOR: OptionsStrategy(
        key=StrategyKey.IRON_CONDOR,
        name="Iron Condor",
        type=StrategyType.NEUTRAL,
        complexity=Complexity.ADVANCED,
        max_risk="Spread width - net credit",
        max_profit="Net premium received",
        breakeven=("Short put strike - net credit", "Short call strike + net credit"),
        time_decay=Sensitivity.POSITIVE,
        volatility_impact=Sensitivity.NEGATIVE,
        description="Neutral strategy profiting from range-bound movement",
        setup=("Sell OTM put", "Buy further OTM put", "Sell OTM call", "Buy further OTM call"),
        market_outlook="Expecting sideways movement within a range",
        risk_reward="Limited risk, limited reward",
        success_probability=65,
        ideal_conditions=("Range-bound market", "High implied volatility", "Expected volatility contraction"),
        exit_rules=(
            "Close at 25-50% of max profit", "Manage the tested side",
            "Close if price approaches short strikes",
        ),
        adjustments=("Close untested side early", "Convert to iron butterfly", "Roll strikes if needed"),
    ),
    StrategyKey.IRON_BUTTERFLY: OptionsStrategy(
        key=StrategyKey.IRON_BUTTERFLY,
        name="Iron Butterfly",
        type=StrategyType.NEUTRAL,
        complexity=Complexity.ADVANCED,
        max_risk="Wing width - net credit",
        max_profit="Net premium received",
        breakeven=("Center strike - net credit", "Center strike + net credit"),
        time_decay=Sensitivity.POSITIVE,
        volatility_impact=Sensitivity.NEGATIVE,
        description="Neutral strategy collecting premium around a pinned price",
        setup=("Sell ATM put", "Sell ATM call", "Buy OTM put wing", "Buy OTM call wing"),
        market_outlook="Expecting price to stay near the current level",
        risk_reward="Limited risk, limited reward",
        success_probability=45,
        ideal_conditions=("Very low realized movement", "High implied volatility", "No upcoming catalysts"),
        exit_rules=("Close at 25% of max profit", "Close if price leaves the wings"),
        adjustments=("Widen into an iron condor", "Roll the body toward price"),
    ),
    StrategyKey.LONG_STRADDLE: OptionsStrategy(
        key=StrategyKey.LONG_STRADDLE,
        name="Long Straddle",
        type=StrategyType.VOLATILITY,
        complexity=Complexity.INTERMEDIATE,
        max_risk="Total premium paid",
        max_profit="Unlimited",
        breakeven=("Strike + total premium", "Strike - total premium"),
        time_decay=Sensitivity.NEGATIVE,
        volatility_impact=Sensitivity.POSITIVE,
        description="Volatility strategy profiting from a large move in either direction",
        setup=("Buy ATM call", "Buy ATM put"),
        market_outlook="Expecting a large move in either direction",
        risk_reward="Limited risk, unlimited reward",
        success_probability=30,
        ideal_conditions=("Low implied volatility", "Expected news or events", "Volatility patterns present"),
        exit_rules=(
            "Close profitable leg first", "Hold other leg for further movement", "Close both at 50% loss",
        ),
        adjustments=("Convert to strangle", "Close one side and run the other", "Roll to different strikes"),
    ),
    StrategyKey.LONG_STRANGLE: OptionsStrategy(
        key=StrategyKey.LONG_STRANGLE,
        name="Long Strangle",
        type=StrategyType.VOLATILITY,
        complexity=Complexity.INTERMEDIATE,
        max_risk="Total premium paid",
        max_profit="Unlimited",
        breakeven=("Call strike + total premium", "Put strike - total premium"),
        time_decay=Sensitivity.NEGATIVE,
        volatility_impact=Sensitivity.POSITIVE,
        description="Cheaper volatility strategy using OTM options on both sides",
        setup=("Buy OTM call", "Buy OTM put"),
        market_outlook="Expecting a very large move in either direction",
        risk_reward="Limited risk, unlimited reward",
        success_probability=25,
        ideal_conditions=("Low implied volatility", "Compressed range before a breakout"),
        exit_rules=("Close on a decisive breakout", "Close both at 50% loss"),
        adjustments=("Roll the untested leg toward price", "Convert to straddle"),
    ),
    StrategyKey.SHORT_STRADDLE: OptionsStrategy(
        key=StrategyKey.SHORT_STRADDLE,
        name="Short Straddle",
        type=StrategyType.NEUTRAL,
        complexity=Complexity.ADVANCED,
        max_risk="Unlimited",
        max_profit="Net premium received",
        breakeven=("Strike + net credit", "Strike - net credit"),
        time_decay=Sensitivity.POSITIVE,
        volatility_impact=Sensitivity.NEGATIVE,
        description="High-risk neutral strategy profiting from minimal movement",
        setup=("Sell ATM call", "Sell ATM put"),
        market_outlook="Expecting minimal price movement",
        risk_reward="Unlimited risk, limited reward",
        success_probability=70,
        ideal_conditions=("High implied volatility", "Expected volatility contraction", "Range-bound market"),
        exit_rules=("Close at 25% of max profit", "Manage aggressively", "Keep a stop-loss plan"),
        adjustments=("Convert to iron condor", "Roll strikes", "Close early if volatility expands"),
    ),
    StrategyKey.CALL_BACKSPREAD: OptionsStrategy(
        key=StrategyKey.CALL_BACKSPREAD,
        name="Call Backspread",
        type=StrategyType.BULLISH,
        complexity=Complexity.ADVANCED,
        max_risk="Net debit + spread width",
        max_profit="Unlimited above upper breakeven",
        breakeven=("Lower strike + net cost", "Upper strike + ratio adjustment"),
        time_decay=Sensitivity.NEGATIVE,
        volatility_impact=Sensitivity.POSITIVE,
        description="Advanced bullish ratio strategy with unlimited profit potential",
        setup=("Sell 1 ITM call", "Buy 2 OTM calls"),
        market_outlook="Expecting explosive upward movement",
        risk_reward="Limited risk, unlimited reward above upper breakeven",
        success_probability=25,
        ideal_conditions=("Strong bullish patterns", "Low implied volatility", "Expecting major breakout"),
        exit_rules=(
            "Close at significant profit", "Manage carefully near expiration", "Close if movement stalls",
        ),
        adjustments=("Close short leg if breached", "Adjust ratio if needed", "Convert to a different strategy"),
    ),
    StrategyKey.PUT_BACKSPREAD: OptionsStrategy(
        key=StrategyKey.PUT_BACKSPREAD,
        name="Put Backspread",
        type=StrategyType.BEARISH,
        complexity=Complexity.ADVANCED,
        max_risk="Net debit + spread width",
        max_profit="Substantial below lower breakeven",
        breakeven=("Upper strike - net cost", "Lower strike - ratio adjustment"),
        time_decay=Sensitivity.NEGATIVE,
        volatility_impact=Sensitivity.POSITIVE,
        description="Advanced bearish ratio strategy with high profit potential",
        setup=("Sell 1 ITM put", "Buy 2 OTM puts"),
        market_outlook="Expecting explosive downward movement",
        risk_reward="Limited risk, high reward below lower breakeven",
        success_probability=25,
        ideal_conditions=("Strong bearish patterns", "Low implied volatility", "Expecting major breakdown"),
        exit_rules=(
            "Close at significant profit", "Manage carefully near expiration", "Close if movement stalls",
        ),
        adjustments=("Close short leg if breached", "Adjust ratio if needed", "Convert to a different strategy"),
    ),
}


def get_strategy(key: StrategyKey) -> OptionsStrategy:
    """Look up a catalog entry. Unknown keys are a programming error."""
    return STRATEGY_CATALOG[key]


def find_strategy(name: str) -> Optional[OptionsStrategy]:
    """Look up a catalog entry by display name, e.g. "Long Call"."""
    for strategy in STRATEGY_CATALOG.values():
        if strategy.name == name:
            return strategy
    return None
