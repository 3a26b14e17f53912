# trend_reversal/strategies/trend_reversal.py
from __future__ import annotations
import logging
from ..types import Instrument, Signal
from ..indicators import Mbfx, TrendLine, ZigZag, moving_average
from ..indicators.base import MovingAverage, Oscillator, PivotDetector, TrendClassifier
from .base import Strategy
from .rules import (
    TrendReversalConfig,
    find_pivot,
    ma_confirms,
    oscillator_confirms,
    oscillator_window,
    trend_confirms,
)

log = logging.getLogger(__name__)

class TrendReversalStrategy(Strategy):
    """ZigZag pivot confirmed by MBFX excursion, trend line colour and price vs MA15.

    A pivot in the last `pivot_lookback` closed bars arms the rules; the signal
    fires only when all three confirmations agree with the pivot direction.
    Cycles without a pivot leave the previous signal in place.
    """
    name = "Trend Reversal"

    def __init__(
        self,
        instrument: Instrument,
        cfg: TrendReversalConfig | None = None,
        *,
        pivots: PivotDetector | None = None,
        oscillator: Oscillator | None = None,
        trend: TrendClassifier | None = None,
        ma: MovingAverage | None = None,
    ):
        super().__init__(instrument)
        self.cfg = (cfg or TrendReversalConfig()).validate()
        self.pivots = pivots if pivots is not None else ZigZag()
        self.oscillator = oscillator if oscillator is not None else Mbfx()
        self.trend = trend if trend is not None else TrendLine()
        self.ma = ma if ma is not None else moving_average

    def evaluate(self) -> Signal:
        candles = self.instrument.candles
        if not candles:
            return self._signal

        self.pivots.refresh(self.instrument)
        self.oscillator.refresh(self.instrument)
        self.trend.refresh(self.instrument)

        direction, pivot_bar = find_pivot(self.pivots, self.cfg.pivot_lookback)
        if direction == "none" or pivot_bar is None or pivot_bar < 1:
            return self._signal

        window = oscillator_window(pivot_bar, self.cfg.oscillator_lookback, self.cfg.min_window)
        mbfx_ok = oscillator_confirms(self.oscillator, direction, window, self.cfg)
        trend_ok = trend_confirms(self.trend, direction)
        ma_ok = ma_confirms(candles, direction, self.ma, self.cfg)

        type_ = direction if (mbfx_ok and trend_ok and ma_ok) else "none"
        self._signal = self._signal.with_flags(
            type_,
            {"zigzag": True, "mbfx": mbfx_ok, "trend": trend_ok, "ma15": ma_ok},
            pivot_bar,
        )
        log.debug(
            "pivot symbol=%s dir=%s bar=%d mbfx=%s trend=%s ma=%s",
            self.instrument.symbol, direction, pivot_bar, mbfx_ok, trend_ok, ma_ok,
        )
        if type_ != "none":
            log.info("signal symbol=%s type=%s pivot_bar=%d", self.instrument.symbol, type_, pivot_bar)
        return self._signal
