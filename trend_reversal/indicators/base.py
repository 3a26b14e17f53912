"""Capabilities the rule engine consumes.

Bar arguments are offsets from the present: 0 is the forming bar, 1 the last
closed bar, N the bar N steps back. Implementations keep their own series and
recompute them on `refresh`.
"""
from __future__ import annotations
from typing import Protocol, Sequence, runtime_checkable
from ..types import ArrowType, Candle, Instrument
from ..utils.ta import AppliedPrice, MaMethod

# value stored in an oscillator channel that is not drawn on a bar
EMPTY_VALUE = 2147483647.0


@runtime_checkable
class PivotDetector(Protocol):
    def refresh(self, instrument: Instrument) -> None: ...

    def arrow(self, bar: int) -> ArrowType: ...


@runtime_checkable
class Oscillator(Protocol):
    def refresh(self, instrument: Instrument) -> None: ...

    def red_value(self, bar: int) -> float:
        """Upper (falling) channel."""
        ...

    def green_value(self, bar: int) -> float:
        """Lower (rising) channel."""
        ...


@runtime_checkable
class TrendClassifier(Protocol):
    def refresh(self, instrument: Instrument) -> None: ...

    def is_green(self, bar: int) -> bool: ...

    def is_red(self, bar: int) -> bool: ...


@runtime_checkable
class MovingAverage(Protocol):
    def __call__(
        self,
        candles: Sequence[Candle],
        bar: int,
        period: int,
        method: MaMethod = "sma",
        applied_price: AppliedPrice = "close",
    ) -> float: ...


def bar_index(length: int, bar: int) -> int | None:
    """List index of bar offset `bar` in an oldest-first series, None if out of range."""
    if bar < 0 or bar >= length:
        return None
    return length - 1 - bar
