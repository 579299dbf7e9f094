"""Options analysis result models."""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .catalog import OptionsStrategy


class RiskLevel(Enum):
    """Setup risk derived from pattern count, reliability and trend confidence."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class VolatilityBand(Enum):
    """Coarse implied volatility classification."""
    LOW = "LOW"        # IV <= 20
    MEDIUM = "MEDIUM"  # 20 < IV <= 30
    HIGH = "HIGH"      # IV > 30


@dataclass(frozen=True)
class MarketContext:
    implied_volatility_band: VolatilityBand
    implied_volatility: float
    technical_bias: str
    risk_level: RiskLevel
    time_to_expiration: str = "30-45 days optimal for most strategies"


@dataclass(frozen=True)
class OptionsRecommendations:
    """Concrete sizing, timing and strike guidance for the primary strategy.

    Attributes:
        position_size: Percent-of-portfolio range
        expiration_window: Days-to-expiration guidance
        strike_selection: Human readable strike plan
        strikes: Strike prices referenced by the plan, in leg order
        entry_timing: When to enter
        hedging: How to hedge the position
    """
    position_size: str
    expiration_window: str
    strike_selection: str
    strikes: Tuple[float, ...]
    entry_timing: str
    hedging: str


@dataclass(frozen=True)
class PatternOptionsIdea:
    """Options trade suggested by one detected pattern on its own."""
    pattern_id: str
    strategy: str
    reasoning: str
    expiration: str
    strikes: str


@dataclass(frozen=True)
class OptionsAnalysisResult:
    primary_strategy: OptionsStrategy
    alternative_strategies: Tuple[OptionsStrategy, ...]
    market_context: MarketContext
    recommendations: OptionsRecommendations
    pattern_ideas: Tuple[PatternOptionsIdea, ...] = ()
