# trend_reversal/strategies/rules.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Sequence
from ..types import ArrowType, Candle
from ..utils.ta import AppliedPrice, MaMethod
from ..indicators.base import MovingAverage, Oscillator, PivotDetector, TrendClassifier, bar_index

Direction = Literal["buy", "sell"]

@dataclass(slots=True)
class TrendReversalConfig:
    pivot_lookback: int = 10
    oscillator_lookback: int = 10
    ma_period: int = 15
    ma_method: MaMethod = "sma"
    applied_price: AppliedPrice = "close"
    oversold_level: float = 30.0
    overbought_level: float = 70.0
    oscillator_ceiling: float = 200.0  # readings at or above this are invalid
    min_window: int = 2

    def validate(self) -> TrendReversalConfig:
        if self.pivot_lookback <= 0: raise ValueError("pivot_lookback must be > 0")
        if self.oscillator_lookback <= 0: raise ValueError("oscillator_lookback must be > 0")
        if self.ma_period <= 0: raise ValueError("ma_period must be > 0")
        if self.min_window <= 0: raise ValueError("min_window must be > 0")
        if self.oversold_level >= self.overbought_level:
            raise ValueError("oversold_level must be below overbought_level")
        if self.overbought_level >= self.oscillator_ceiling:
            raise ValueError("overbought_level must be below oscillator_ceiling")
        return self


def find_pivot(detector: PivotDetector, lookback: int) -> tuple[ArrowType, int | None]:
    """Most recent arrow within bars lookback..1.

    Walks from the oldest bar toward the present and lets every hit overwrite
    the previous one, so the closest pivot wins.
    """
    direction: ArrowType = "none"
    pivot_bar: int | None = None
    for bar in range(lookback, 0, -1):
        arrow = detector.arrow(bar)
        if arrow == "buy" or arrow == "sell":
            direction, pivot_bar = arrow, bar
    return direction, pivot_bar


def oscillator_window(pivot_bar: int, lookback: int, min_window: int = 2) -> range:
    """Bars start..1 to search for an oscillator excursion; never narrower than `min_window` bars."""
    start = min(max(pivot_bar, min_window), lookback)
    return range(start, 0, -1)


def is_oversold(value: float, level: float = 30.0) -> bool:
    return value < level


def is_overbought(value: float, level: float = 70.0, ceiling: float = 200.0) -> bool:
    return level < value < ceiling


def oscillator_confirms(osc: Oscillator, direction: Direction, window: range, cfg: TrendReversalConfig) -> bool:
    for bar in window:
        red, green = osc.red_value(bar), osc.green_value(bar)
        if direction == "buy":
            if is_oversold(red, cfg.oversold_level) or is_oversold(green, cfg.oversold_level):
                return True
        elif (is_overbought(red, cfg.overbought_level, cfg.oscillator_ceiling)
              or is_overbought(green, cfg.overbought_level, cfg.oscillator_ceiling)):
            return True
    return False


def trend_confirms(trend: TrendClassifier, direction: Direction) -> bool:
    return trend.is_green(1) if direction == "buy" else trend.is_red(1)


def ma_confirms(candles: Sequence[Candle], direction: Direction, ma: MovingAverage, cfg: TrendReversalConfig) -> bool:
    idx = bar_index(len(candles), 1)
    if idx is None:
        return False  # no closed bar yet
    value = ma(candles, 1, cfg.ma_period, cfg.ma_method, cfg.applied_price)
    close = candles[idx].close
    return close > value if direction == "buy" else close < value
