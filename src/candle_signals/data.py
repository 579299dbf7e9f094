"""pandas adapters between OHLCV DataFrames and Candle sequences."""

from typing import List, Sequence

import pandas as pd

from .models import Candle, InvalidInputError


OHLCV_COLUMNS = ["open", "high", "low", "close", "volume"]

_EPOCH = pd.Timestamp("1970-01-01", tz="UTC")


def _timestamps_ms(df: pd.DataFrame) -> pd.Series:
    """Epoch millisecond timestamps from a timestamp column or DatetimeIndex."""
    if "timestamp" in df.columns:
        ts = df["timestamp"]
        if ts.isna().any():
            raise InvalidInputError(f"Missing timestamps in rows: {list(df.index[ts.isna()])}")
        if pd.api.types.is_numeric_dtype(ts):
            return ts.astype("int64")
        # Datetimes or date strings, e.g. from read_csv
        try:
            parsed = pd.to_datetime(ts, utc=True)
        except (ValueError, TypeError) as e:
            raise InvalidInputError(f"Unparseable timestamp column: {e}") from e
        if parsed.isna().any():
            raise InvalidInputError(f"Unparseable timestamps in rows: {list(df.index[parsed.isna()])}")
        return (parsed - _EPOCH) // pd.Timedelta(milliseconds=1)

    if isinstance(df.index, pd.DatetimeIndex):
        index = df.index.tz_localize("UTC") if df.index.tz is None else df.index
        return pd.Series((index - _EPOCH) // pd.Timedelta(milliseconds=1), index=df.index)

    raise InvalidInputError("DataFrame needs a 'timestamp' column or a DatetimeIndex")


def candles_from_dataframe(df: pd.DataFrame) -> List[Candle]:
    """Convert an OHLCV DataFrame into candles, sorted oldest first.

    Args:
        df: DataFrame with open, high, low, close columns, an optional volume
            column, and a timestamp column or DatetimeIndex

    Returns:
        List of Candle

    Raises:
        InvalidInputError: If columns are missing or a row is not a valid candle
    """
    df = df.rename(columns=str.lower)
    missing = [c for c in OHLCV_COLUMNS[:4] if c not in df.columns]
    if missing:
        raise InvalidInputError(f"DataFrame is missing columns: {', '.join(missing)}")

    df = df.copy()
    if "volume" not in df.columns:
        df["volume"] = 0.0

    # Non-numeric cells become NaN; only cells that were blank to begin with may be dropped
    for column in OHLCV_COLUMNS:
        values = pd.to_numeric(df[column], errors="coerce")
        garbled = values.isna() & df[column].notna()
        if garbled.any():
            raise InvalidInputError(
                f"Non-numeric {column} values in rows: {list(df.index[garbled])}"
            )
        df[column] = values

    df["ts_ms"] = _timestamps_ms(df)
    df = df.sort_values("ts_ms").dropna(subset=OHLCV_COLUMNS)

    return [
        Candle(
            timestamp=int(row.ts_ms),
            open=float(row.open),
            high=float(row.high),
            low=float(row.low),
            close=float(row.close),
            volume=float(row.volume),
        )
        for row in df.itertuples(index=False)
    ]


def candles_to_dataframe(candles: Sequence[Candle]) -> pd.DataFrame:
    """Convert candles into a DataFrame indexed by UTC timestamp."""
    df = pd.DataFrame(
        [
            {"timestamp": c.timestamp, "open": c.open, "high": c.high,
             "low": c.low, "close": c.close, "volume": c.volume}
            for c in candles
        ],
        columns=["timestamp"] + OHLCV_COLUMNS,
    )
    df.index = pd.to_datetime(df["timestamp"], unit="ms", utc=True)
    df.index.name = "datetime"
    return df
