# trend_reversal/indicators/mbfx.py
from __future__ import annotations
import numpy as np
from ..types import Instrument
from ..utils.ta import ema, stochastic, to_arrays
from .base import EMPTY_VALUE, bar_index

class Mbfx:
    """Two-colour timing oscillator (0..100).

    A smoothed stochastic of close. Bars where the line rises are drawn in the
    green channel, falling bars in the red one; the undrawn channel holds
    EMPTY_VALUE. A turning bar is drawn in both so the line stays continuous.
    """
    name = "MBFX"

    def __init__(self, length: int = 7, smoothing: int = 5):
        if length <= 0 or smoothing <= 0: raise ValueError("length and smoothing must be > 0")
        self.length, self.smoothing = length, smoothing
        self._red = np.empty(0)
        self._green = np.empty(0)

    def refresh(self, instrument: Instrument) -> None:
        candles = instrument.candles or []
        _, h, l, c = to_arrays(candles)
        line = ema(stochastic(h, l, c, self.length), self.smoothing) if len(c) else np.empty(0)
        self._red, self._green = self._split(line)

    @staticmethod
    def _split(line: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        n = len(line)
        red = np.full(n, EMPTY_VALUE)
        green = np.full(n, EMPTY_VALUE)
        rising = np.zeros(n, dtype=bool)
        if n:
            rising[1:] = line[1:] >= line[:-1]
            rising[0] = True
        green[rising] = line[rising]
        red[~rising] = line[~rising]
        # turning bars: the previous bar's colour continues up to this point
        turn = np.zeros(n, dtype=bool)
        turn[1:] = rising[1:] != rising[:-1]
        green[turn] = line[turn]
        red[turn] = line[turn]
        return red, green

    def red_value(self, bar: int) -> float:
        idx = bar_index(len(self._red), bar)
        return EMPTY_VALUE if idx is None else float(self._red[idx])

    def green_value(self, bar: int) -> float:
        idx = bar_index(len(self._green), bar)
        return EMPTY_VALUE if idx is None else float(self._green[idx])
