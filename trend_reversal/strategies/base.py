from __future__ import annotations
from abc import ABC, abstractmethod
from ..types import Instrument, Signal

class Strategy(ABC):
    name: str

    def __init__(self, instrument: Instrument):
        self._instrument = instrument
        self._signal = Signal.empty(instrument.symbol)

    @property
    def instrument(self) -> Instrument:
        return self._instrument

    @property
    def signal(self) -> Signal:
        """Last signal emitted for the bound instrument."""
        return self._signal

    @abstractmethod
    def evaluate(self) -> Signal:
        """
        Evaluates the instrument's current candles and returns the signal.
        Called once per market-data cycle; reads only `instrument.candles`
        and the strategy's own indicators, no I/O.
        """
