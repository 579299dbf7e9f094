"""Options strategy selection over a fixed catalog."""

from .catalog import (
    STRATEGY_CATALOG,
    Complexity,
    OptionsStrategy,
    Sensitivity,
    StrategyKey,
    StrategyType,
    find_strategy,
    get_strategy,
)
from .models import (
    MarketContext,
    OptionsAnalysisResult,
    OptionsRecommendations,
    PatternOptionsIdea,
    RiskLevel,
    VolatilityBand,
)
from .selector import OptionsStrategySelector

__all__ = [
    "OptionsStrategySelector",
    "STRATEGY_CATALOG",
    "StrategyKey",
    "StrategyType",
    "Complexity",
    "Sensitivity",
    "OptionsStrategy",
    "get_strategy",
    "find_strategy",
    "MarketContext",
    "OptionsAnalysisResult",
    "OptionsRecommendations",
    "PatternOptionsIdea",
    "RiskLevel",
    "VolatilityBand",
]
