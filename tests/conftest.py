"""Pytest configuration and shared fixtures."""

import pytest

from candle_signals.models import Candle


BASE_TS = 1_700_000_000_000
HOUR_MS = 3_600_000


def build_series(n: int, start: float = 100.0, step: float = 1.0, body: float = 1.5,
                 wick: float = 0.2) -> list[Candle]:
    """Candles whose opens move by ``step`` per bar and close ``body`` away from the open."""
    candles = []
    for i in range(n):
        open_ = start + i * step
        close = open_ + body
        candles.append(Candle(
            timestamp=BASE_TS + i * HOUR_MS,
            open=open_,
            high=max(open_, close) + wick,
            low=min(open_, close) - wick,
            close=close,
            volume=1000.0,
        ))
    return candles


@pytest.fixture
def series_builder():
    """Return the candle series builder."""
    return build_series


@pytest.fixture
def uptrend_candles():
    """20 rising bullish candles; the last three form three white soldiers."""
    return build_series(20)


@pytest.fixture
def downtrend_candles():
    """20 falling bearish candles; the last three form three black crows."""
    return build_series(20, start=200.0, step=-1.0, body=-1.5)


@pytest.fixture
def flat_candles():
    """12 identical small-bodied candles."""
    return build_series(12, step=0.0, body=0.5, wick=1.0)
