#!/usr/bin/env python3
"""candle_signals - command line entry point.

Reads OHLCV candles from a CSV file, runs one analysis pass and prints the
result as JSON.

Usage:
    python main.py candles.csv --timeframe 1d --iv 22 --config config.json
"""

import argparse
import json
import logging
import os
import sys

import pandas as pd

# Add src to path so the CLI runs from a checkout
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "src"))

from candle_signals import (
    ConfigManager,
    ConfigValidationError,
    InvalidInputError,
    PatternAnalyzer,
    candles_from_dataframe,
)

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Candlestick pattern and options strategy analysis")
    parser.add_argument("csv", help="CSV file with timestamp, open, high, low, close[, volume] columns")
    parser.add_argument("--timeframe", default=None, help="Label echoed on the result, e.g. 1h or 1d")
    parser.add_argument("--iv", type=float, default=None, help="Implied volatility in percent")
    parser.add_argument("--price", type=float, default=None, help="Current price (defaults to last close)")
    parser.add_argument("--config", default=None, help="JSON configuration file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s | %(levelname)-8s | %(name)-32s | %(message)s',
        datefmt='%H:%M:%S',
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    try:
        config = ConfigManager(config_path=args.config).load()
    except ConfigValidationError as e:
        logger.error(f"Configuration error: {e}")
        return 2

    try:
        candles = candles_from_dataframe(pd.read_csv(args.csv))
        result = PatternAnalyzer(config).analyze(
            candles,
            timeframe=args.timeframe,
            current_price=args.price,
            implied_volatility=args.iv,
        )
    except InvalidInputError as e:
        logger.error(f"Invalid input: {e}")
        return 1

    print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
