# trend_reversal/replay/replay.py
from __future__ import annotations
from typing import Sequence
import pandas as pd
from ..types import Candle, Instrument, RULES, Timeframe
from ..strategies import TrendReversalConfig, TrendReversalStrategy

COLUMNS = ["time", "close", "type", "pivot_found", "pivot_bar", *RULES]

def replay(
    candles: Sequence[Candle],
    symbol: str,
    timeframe: Timeframe = "15min",
    cfg: TrendReversalConfig | None = None,
    warmup: int = 30,
) -> pd.DataFrame:
    """
    Feeds the history to one strategy bar by bar, the way a host calls it once
    per cycle: at step i, candles[i] is the forming bar. One row per cycle with
    the signal as returned, stale flags included; `pivot_found` tells cycles
    that produced a new signal apart from those that re-emitted the old one.
    `pivot_bar` is only filled on the former, as it is relative to that cycle.
    """
    instrument = Instrument(symbol, timeframe, [])
    strat = TrendReversalStrategy(instrument, cfg)

    rows: list[dict] = []
    prev = strat.signal
    for i in range(max(1, warmup), len(candles)):
        instrument.candles = list(candles[: i + 1])
        sig = strat.evaluate()
        closed = candles[i - 1]
        rows.append({
            "time": closed.time,
            "close": closed.close,
            "type": sig.type,
            "pivot_found": sig is not prev,
            "pivot_bar": sig.pivot_bar if sig is not prev else None,
            **sig.flags,
        })
        prev = sig
    return pd.DataFrame(rows, columns=COLUMNS)

def summarize(frame: pd.DataFrame) -> dict:
    """Signal counts and per-rule pass rates over the cycles that found a pivot."""
    fresh = frame[frame["pivot_found"].astype(bool)]
    out = {
        "cycles": len(frame),
        "cycles_with_pivot": len(fresh),
        "buy_signals": int((fresh["type"] == "buy").sum()),
        "sell_signals": int((fresh["type"] == "sell").sum()),
    }
    for rule in RULES[1:]:
        out[f"{rule}_pass_rate"] = round(float(fresh[rule].astype(bool).mean()), 4) if len(fresh) else 0.0
    return out
