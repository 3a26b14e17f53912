# trend_reversal/utils/ta.py
from __future__ import annotations
from typing import Literal, Sequence
import numpy as np
from ..types import Candle

AppliedPrice = Literal["close", "open", "high", "low", "median", "typical", "weighted"]
MaMethod = Literal["sma", "ema"]

def to_arrays(candles: Sequence[Candle]):
    opens  = np.array([c.open  for c in candles], dtype=float)
    highs  = np.array([c.high  for c in candles], dtype=float)
    lows   = np.array([c.low   for c in candles], dtype=float)
    closes = np.array([c.close for c in candles], dtype=float)
    return opens, highs, lows, closes

def price_series(candles: Sequence[Candle], kind: AppliedPrice = "close") -> np.ndarray:
    o, h, l, c = to_arrays(candles)
    if kind == "close": return c
    if kind == "open": return o
    if kind == "high": return h
    if kind == "low": return l
    if kind == "median": return (h + l) / 2.0
    if kind == "typical": return (h + l + c) / 3.0
    if kind == "weighted": return (h + l + 2 * c) / 4.0
    raise ValueError(f"unknown applied price: {kind}")

def ema(values: np.ndarray, period: int) -> np.ndarray:
    if period <= 0: raise ValueError("period must be > 0")
    alpha = 2 / (period + 1.0)
    out = np.empty_like(values, dtype=float)
    if len(values) == 0:
        return out
    out[0] = values[0]
    for i in range(1, len(values)):
        out[i] = alpha * values[i] + (1 - alpha) * out[i-1]
    return out

def sma(values: np.ndarray, period: int) -> np.ndarray:
    """Rolling mean; the first period-1 slots average whatever is available."""
    if period <= 0: raise ValueError("period must be > 0")
    values = np.asarray(values, dtype=float)
    cumsum = np.cumsum(values, dtype=float)
    out = np.empty_like(values, dtype=float)
    n = len(values)
    head = min(period - 1, n)
    out[:head] = cumsum[:head] / np.arange(1, head + 1)
    if n >= period:
        out[period-1:] = (cumsum[period-1:] - np.concatenate(([0.0], cumsum[:-period]))) / period
    return out

def rolling_max(values: np.ndarray, period: int) -> np.ndarray:
    out = np.empty_like(values, dtype=float)
    for i in range(len(values)):
        start = max(0, i-period+1)
        out[i] = np.max(values[start:i+1])
    return out

def rolling_min(values: np.ndarray, period: int) -> np.ndarray:
    out = np.empty_like(values, dtype=float)
    for i in range(len(values)):
        start = max(0, i-period+1)
        out[i] = np.min(values[start:i+1])
    return out

def stochastic(high: np.ndarray, low: np.ndarray, close: np.ndarray, period: int) -> np.ndarray:
    """%K in 0..100; flat ranges read as 50."""
    if period <= 0: raise ValueError("period must be > 0")
    hh = rolling_max(high, period)
    ll = rolling_min(low, period)
    rng = hh - ll
    k = np.divide(close - ll, rng, out=np.full_like(close, 0.5, dtype=float), where=rng != 0)
    return 100.0 * k
