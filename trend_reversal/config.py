from __future__ import annotations
import os
from pydantic import BaseModel
from dotenv import load_dotenv
from .strategies.rules import TrendReversalConfig

load_dotenv()

class Settings(BaseModel):
    default_symbol: str = os.getenv("DEFAULT_SYMBOL", "BTCUSDT")
    default_timeframe: str = os.getenv("DEFAULT_TIMEFRAME", "15min")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    pivot_lookback: int = int(os.getenv("PIVOT_LOOKBACK", "10"))
    oscillator_lookback: int = int(os.getenv("OSCILLATOR_LOOKBACK", "10"))
    ma_period: int = int(os.getenv("MA_PERIOD", "15"))

    def strategy_config(self) -> TrendReversalConfig:
        return TrendReversalConfig(
            pivot_lookback=self.pivot_lookback,
            oscillator_lookback=self.oscillator_lookback,
            ma_period=self.ma_period,
        ).validate()

settings = Settings()
