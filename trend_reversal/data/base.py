from __future__ import annotations
from abc import ABC, abstractmethod
from ..types import Candle, Timeframe

class CandleProvider(ABC):
    """Source of historical candles for one symbol (oldest first)."""

    @abstractmethod
    async def get_recent_candles(
        self, symbol: str, timeframe: Timeframe, limit: int = 500
    ) -> list[Candle]:
        """Returns the last `limit` candles."""

    async def close(self) -> None:
        """Cleanup hook; override when holding files or sessions."""
        return None
