from __future__ import annotations
from datetime import datetime, timedelta, timezone
import math
import random
from ..types import Candle, Timeframe
from .base import CandleProvider

_TF_MINUTES: dict[str, int] = {
    "1min": 1, "5min": 5, "15min": 15, "30min": 30, "60min": 60, "4h": 240, "1d": 1440,
}

class MockProvider(CandleProvider):
    """Deterministic synthetic candles: a slow sine swing plus seeded noise."""

    def __init__(self, seed: int = 42, start_price: float = 100.0, swing_pct: float = 3.0):
        self._seed = seed
        self.start_price = start_price
        self.swing_pct = swing_pct

    async def get_recent_candles(self, symbol: str, timeframe: Timeframe, limit: int = 500) -> list[Candle]:
        rnd = random.Random(self._seed)
        now = datetime.now(timezone.utc).replace(second=0, microsecond=0)
        tf_minutes = _TF_MINUTES.get(timeframe, 15)
        candles: list[Candle] = []
        base = self.start_price
        amp = base * self.swing_pct / 100.0
        prev_close = base

        for i in range(limit):
            t = now - timedelta(minutes=tf_minutes * (limit - i))
            target = base + amp * math.sin(i / 9.0) + 0.3 * amp * math.sin(i / 2.5)
            noise = (rnd.random() - 0.5) * amp * 0.15
            open_ = prev_close
            close = max(0.01, target + noise)
            wick = abs(noise) + amp * 0.05 * rnd.random()
            high = max(open_, close) + wick
            low = max(0.005, min(open_, close) - wick)
            candles.append(Candle(time=t, open=open_, high=high, low=low, close=close, volume=None))
            prev_close = close
        return candles
