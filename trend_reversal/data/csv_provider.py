from __future__ import annotations
from pathlib import Path
import pandas as pd
from ..types import Candle, Timeframe
from .base import CandleProvider

_REQUIRED = ("open", "high", "low", "close")

class CsvProvider(CandleProvider):
    """Historical candles from a CSV export (time/datetime, open, high, low, close[, volume])."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    async def get_recent_candles(self, symbol: str, timeframe: Timeframe, limit: int = 500) -> list[Candle]:
        if not self.path.exists():
            raise RuntimeError(f"CSV file not found: {self.path}")
        df = pd.read_csv(self.path)
        df.columns = [str(col).strip().lower() for col in df.columns]
        time_col = next((col for col in ("time", "datetime", "timestamp", "date") if col in df.columns), None)
        missing = [col for col in _REQUIRED if col not in df.columns]
        if time_col is None or missing:
            raise RuntimeError(f"CSV {self.path.name}: missing columns {missing or ['time']}")

        df[time_col] = pd.to_datetime(df[time_col], utc=True)
        for col in (*_REQUIRED, "volume"):
            if col in df.columns:
                df[col] = pd.to_numeric(df[col], errors="coerce")
        df = df.dropna(subset=list(_REQUIRED)).sort_values(time_col).tail(limit)
        has_volume = "volume" in df.columns
        return [
            Candle(time=row[time_col].to_pydatetime(),
                   open=float(row["open"]),
                   high=float(row["high"]),
                   low=float(row["low"]),
                   close=float(row["close"]),
                   volume=float(row["volume"]) if has_volume and pd.notna(row["volume"]) else None)
            for _, row in df.iterrows()
        ]
