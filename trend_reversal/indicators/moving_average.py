# trend_reversal/indicators/moving_average.py
from __future__ import annotations
from typing import Sequence
from ..types import Candle
from ..utils.ta import AppliedPrice, MaMethod, ema, price_series, sma
from .base import bar_index

def moving_average(
    candles: Sequence[Candle],
    bar: int,
    period: int,
    method: MaMethod = "sma",
    applied_price: AppliedPrice = "close",
) -> float:
    """Moving average of `applied_price` evaluated at bar offset `bar`.

    Only candles up to and including that bar take part, so the value at bar 1
    never sees the forming bar.
    """
    idx = bar_index(len(candles), bar)
    if idx is None:
        raise IndexError(f"bar {bar} out of range for {len(candles)} candles")
    prices = price_series(candles[: idx + 1], applied_price)
    if method == "sma":
        return float(sma(prices, period)[-1])
    if method == "ema":
        return float(ema(prices, period)[-1])
    raise ValueError(f"unknown moving average method: {method}")
