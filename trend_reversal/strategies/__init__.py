# trend_reversal/strategies/__init__.py
from ..types import Instrument
from .base import Strategy
from .rules import TrendReversalConfig
from .trend_reversal import TrendReversalStrategy

def default_strategies(instrument: Instrument, cfg: TrendReversalConfig | None = None) -> list[Strategy]:
    return [
        TrendReversalStrategy(instrument, cfg),
    ]
