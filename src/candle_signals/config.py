"""Configuration management module for candle_signals.

Every threshold used by the analysis stages lives in one of the dataclasses
below. Defaults are the fixed design constants; a host may override them
from a JSON file or environment variables through ``ConfigManager``.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import load_dotenv


@dataclass(frozen=True)
class PatternConfig:
    """Candlestick geometry thresholds. All ratios are dimensionless."""
    lookback: int = 4                         # trailing candles handed to each rule
    doji_body_ratio: float = 0.10             # body <= 10% of range
    hammer_body_ratio: float = 0.30           # hammer/shooting star body < 30% of range
    shadow_body_multiple: float = 2.0         # dominant shadow >= 2x body
    opposite_shadow_body_ratio: float = 0.5   # other shadow <= 0.5x body
    pin_bar_shadow_ratio: float = 0.60        # long shadow >= 60% of range
    pin_bar_body_ratio: float = 0.30
    spinning_top_body_ratio: float = 0.25
    star_middle_body_ratio: float = 0.5       # star middle body < 50% of first body
    trend_context_candles: int = 3            # prior candles checked for hammer context


@dataclass(frozen=True)
class TrendConfig:
    """Trend fitting parameters."""
    min_window: int = 10
    window: int = 50
    sr_lookback: int = 20
    direction_r2: float = 0.5
    strong_r2: float = 0.8
    strong_slope_pct: float = 0.5    # percent of final close per bar
    moderate_slope_pct: float = 0.2
    min_confidence: int = 50
    max_confidence: int = 95


@dataclass(frozen=True)
class SignalConfig:
    """Signal fusion weights and cut points."""
    reliability_weights: dict[str, float] = field(default_factory=lambda: {
        "HIGH": 3.0, "MEDIUM": 2.0, "LOW": 1.0,
    })
    trend_weight: float = 2.0
    strong_threshold: float = 0.6
    threshold: float = 0.2


@dataclass(frozen=True)
class OptionsConfig:
    """Options strategy selection thresholds."""
    default_implied_volatility: float = 25.0
    low_iv_threshold: float = 20.0
    high_iv_threshold: float = 30.0
    high_trend_confidence: int = 80
    volatility_pattern_ids: tuple[str, ...] = (
        "outside-bar", "pin-bar", "morning-star", "evening-star",
    )


@dataclass(frozen=True)
class AnalysisConfig:
    """Main configuration container."""
    patterns: PatternConfig = field(default_factory=PatternConfig)
    trend: TrendConfig = field(default_factory=TrendConfig)
    signals: SignalConfig = field(default_factory=SignalConfig)
    options: OptionsConfig = field(default_factory=OptionsConfig)


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


DEFAULT_ANALYSIS_CONFIG = AnalysisConfig()


class ConfigManager:
    """Manages loading and validation of configuration."""

    ENV_PREFIX = "CANDLE_SIGNALS_"

    def __init__(self, config_path: str | Path | None = None, load_env: bool = True):
        """Initialize configuration manager.

        Args:
            config_path: Path to a JSON config file. If None, only defaults
                and environment overrides are used.
            load_env: Whether to load .env and apply environment overrides.
                Set to False for testing.
        """
        self.config_path = Path(config_path) if config_path else None
        self._config: AnalysisConfig | None = None
        self._load_env = load_env
        if load_env:
            load_dotenv()

    @property
    def config(self) -> AnalysisConfig:
        if self._config is None:
            return self.load()
        return self._config

    def load(self) -> AnalysisConfig:
        """Load configuration from file and environment variables.

        Returns:
            Loaded and validated AnalysisConfig.

        Raises:
            ConfigValidationError: If values are malformed or out of range.
        """
        data = self._load_json()
        self._override_from_env(data)
        self._config = self._parse_config(data)
        self._validate(self._config)
        return self._config

    def _load_json(self) -> dict[str, Any]:
        """Load JSON configuration file."""
        if self.config_path is None or not self.config_path.exists():
            return {}

        with open(self.config_path) as f:
            try:
                return json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigValidationError(f"Invalid JSON in {self.config_path}: {e}") from e

    def _parse_config(self, data: dict[str, Any]) -> AnalysisConfig:
        """Parse configuration dictionary into AnalysisConfig."""
        try:
            patterns = PatternConfig(**data.get("patterns", {}))
            trend = TrendConfig(**data.get("trend", {}))
            signals = SignalConfig(**data.get("signals", {}))
            options_data = dict(data.get("options", {}))
            if "volatility_pattern_ids" in options_data:
                options_data["volatility_pattern_ids"] = tuple(options_data["volatility_pattern_ids"])
            options = OptionsConfig(**options_data)
        except TypeError as e:
            raise ConfigValidationError(f"Unknown configuration key: {e}") from e

        return AnalysisConfig(patterns=patterns, trend=trend, signals=signals, options=options)

    def _override_from_env(self, data: dict[str, Any]) -> None:
        """Override configuration values from environment variables."""
        if not self._load_env:
            return

        try:
            if iv := os.getenv(f"{self.ENV_PREFIX}DEFAULT_IV"):
                data.setdefault("options", {})["default_implied_volatility"] = float(iv)
            if window := os.getenv(f"{self.ENV_PREFIX}TREND_WINDOW"):
                data.setdefault("trend", {})["window"] = int(window)
            if min_window := os.getenv(f"{self.ENV_PREFIX}MIN_TREND_WINDOW"):
                data.setdefault("trend", {})["min_window"] = int(min_window)
            if lookback := os.getenv(f"{self.ENV_PREFIX}SR_LOOKBACK"):
                data.setdefault("trend", {})["sr_lookback"] = int(lookback)
        except ValueError as e:
            raise ConfigValidationError(f"Invalid environment override: {e}") from e

    def _validate(self, config: AnalysisConfig) -> None:
        """Validate ranges and ordering of thresholds.

        Raises:
            ConfigValidationError: If validation fails.
        """
        errors = []

        p = config.patterns
        if p.lookback < 3:
            errors.append("patterns.lookback must be at least 3")
        for name in (
            "doji_body_ratio", "hammer_body_ratio", "opposite_shadow_body_ratio",
            "pin_bar_shadow_ratio", "pin_bar_body_ratio", "spinning_top_body_ratio",
            "star_middle_body_ratio",
        ):
            value = getattr(p, name)
            if not 0 < value <= 1:
                errors.append(f"patterns.{name} must be in (0, 1], got {value}")
        if p.doji_body_ratio >= p.hammer_body_ratio:
            errors.append("patterns.doji_body_ratio must be below hammer_body_ratio")
        if p.shadow_body_multiple <= 1:
            errors.append("patterns.shadow_body_multiple must be greater than 1")

        t = config.trend
        if t.min_window < 2:
            errors.append("trend.min_window must be at least 2")
        if t.window < t.min_window:
            errors.append("trend.window must be >= trend.min_window")
        if t.sr_lookback < 1:
            errors.append("trend.sr_lookback must be at least 1")
        if not 0 <= t.direction_r2 <= t.strong_r2 <= 1:
            errors.append("trend r2 thresholds must satisfy 0 <= direction_r2 <= strong_r2 <= 1")
        if not 0 <= t.min_confidence <= t.max_confidence <= 100:
            errors.append("trend confidence bounds must satisfy 0 <= min <= max <= 100")

        s = config.signals
        if set(s.reliability_weights) != {"HIGH", "MEDIUM", "LOW"}:
            errors.append("signals.reliability_weights must define HIGH, MEDIUM and LOW")
        elif any(w <= 0 for w in s.reliability_weights.values()):
            errors.append("signals.reliability_weights must be positive")
        if s.trend_weight < 0:
            errors.append("signals.trend_weight must be non-negative")
        if not 0 < s.threshold < s.strong_threshold:
            errors.append("signals thresholds must satisfy 0 < threshold < strong_threshold")

        o = config.options
        if o.default_implied_volatility < 0:
            errors.append("options.default_implied_volatility must be non-negative")
        if o.low_iv_threshold > o.high_iv_threshold:
            errors.append("options.low_iv_threshold must not exceed high_iv_threshold")

        if errors:
            raise ConfigValidationError(f"Invalid configuration: {'; '.join(errors)}")
