from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Literal
from datetime import datetime

Timeframe = Literal["1min", "5min", "15min", "30min", "60min", "4h", "1d"]
ArrowType = Literal["buy", "sell", "none"]
SignalType = Literal["none", "buy", "sell"]

# rule ids, in display order: pivot, oscillator, trend, moving average
RULES: tuple[str, ...] = ("zigzag", "mbfx", "trend", "ma15")

@dataclass(frozen=True, slots=True)
class Candle:
    time: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float | None = None

@dataclass(slots=True)
class Instrument:
    """Instrument a strategy is bound to. `candles` are oldest first; the host
    appends/replaces them between evaluation cycles."""
    symbol: str
    timeframe: Timeframe = "15min"
    candles: list[Candle] | None = field(default=None, repr=False)

@dataclass(frozen=True, slots=True)
class Indicator:
    name: str
    is_valid: bool = False

@dataclass(frozen=True, slots=True)
class Signal:
    symbol: str
    type: SignalType
    indicators: tuple[Indicator, ...]
    pivot_bar: int | None = None  # bar offset of the pivot that produced it

    @classmethod
    def empty(cls, symbol: str) -> Signal:
        return cls(symbol, "none", tuple(Indicator(name) for name in RULES))

    @property
    def flags(self) -> dict[str, bool]:
        return {ind.name: ind.is_valid for ind in self.indicators}

    def indicator(self, name: str) -> Indicator:
        for ind in self.indicators:
            if ind.name == name:
                return ind
        raise KeyError(name)

    def with_flags(self, type_: SignalType, flags: dict[str, bool], pivot_bar: int | None) -> Signal:
        """New signal with the given flags; rules missing from `flags` keep their value."""
        inds = tuple(Indicator(ind.name, flags.get(ind.name, ind.is_valid)) for ind in self.indicators)
        return replace(self, type=type_, indicators=inds, pivot_bar=pivot_bar)
