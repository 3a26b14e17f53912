# trend_reversal/indicators/zigzag.py
from __future__ import annotations
import numpy as np
from ..types import ArrowType, Instrument
from ..utils.ta import to_arrays
from .base import bar_index

class ZigZag:
    """Swing zigzag over highs/lows.

    A swing low becomes a "buy" arrow once price rises `deviation_pct` percent
    above it; a swing high becomes a "sell" arrow once price drops that much
    below it. A reversal is confirmed no sooner than `depth` bars after the
    previous pivot; until then the leg stays open and may still extend.
    """
    name = "ZigZag"

    def __init__(self, deviation_pct: float = 0.5, depth: int = 3):
        if deviation_pct <= 0: raise ValueError("deviation_pct must be > 0")
        if depth < 1: raise ValueError("depth must be >= 1")
        self.dev = deviation_pct / 100.0
        self.depth = depth
        self._arrows: list[ArrowType] = []

    def refresh(self, instrument: Instrument) -> None:
        candles = instrument.candles or []
        _, h, l, _ = to_arrays(candles)
        self._arrows = self._compute(h, l)

    def arrow(self, bar: int) -> ArrowType:
        idx = bar_index(len(self._arrows), bar)
        return "none" if idx is None else self._arrows[idx]

    def _compute(self, h: np.ndarray, l: np.ndarray) -> list[ArrowType]:
        n = len(h)
        arrows: list[ArrowType] = ["none"] * n
        if n < 2:
            return arrows

        direction = 0   # 1 = up leg (tracking a high), -1 = down leg (tracking a low)
        hi = lo = ext = last = 0
        for i in range(1, n):
            if direction == 0:
                if h[i] > h[hi]: hi = i
                if l[i] < l[lo]: lo = i
                # a single wide bar holding both extremes gives no direction yet
                if hi != lo and h[hi] >= l[lo] * (1 + self.dev):
                    if lo < hi:
                        arrows[lo] = "buy"
                        direction, ext, last = 1, hi, lo
                    else:
                        arrows[hi] = "sell"
                        direction, ext, last = -1, lo, hi
                continue

            if direction == 1:
                if h[i] > h[ext]:
                    ext = i
                    continue
                j = ext + 1 + int(np.argmin(l[ext + 1:i + 1]))  # deepest low since the high
                if l[j] <= h[ext] * (1 - self.dev) and i - last >= self.depth:
                    arrows[ext] = "sell"
                    direction, last, ext = -1, ext, j
            else:
                if l[i] < l[ext]:
                    ext = i
                    continue
                j = ext + 1 + int(np.argmax(h[ext + 1:i + 1]))  # highest high since the low
                if h[j] >= l[ext] * (1 + self.dev) and i - last >= self.depth:
                    arrows[ext] = "buy"
                    direction, last, ext = 1, ext, j
        return arrows
