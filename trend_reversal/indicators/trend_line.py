# trend_reversal/indicators/trend_line.py
from __future__ import annotations
import numpy as np
from ..types import Instrument
from ..utils.ta import ema, to_arrays
from .base import bar_index

class TrendLine:
    """EMA of close coloured by slope: green while it holds or rises, red while it falls."""
    name = "TrendLine"

    def __init__(self, period: int = 21):
        if period <= 0: raise ValueError("period must be > 0")
        self.period = period
        self._green = np.empty(0, dtype=bool)

    def refresh(self, instrument: Instrument) -> None:
        candles = instrument.candles or []
        _, _, _, c = to_arrays(candles)
        line = ema(c, self.period)
        green = np.ones(len(line), dtype=bool)
        if len(line) > 1:
            green[1:] = line[1:] >= line[:-1]
        self._green = green

    def is_green(self, bar: int) -> bool:
        idx = bar_index(len(self._green), bar)
        return idx is not None and bool(self._green[idx])

    def is_red(self, bar: int) -> bool:
        idx = bar_index(len(self._green), bar)
        return idx is not None and not bool(self._green[idx])
