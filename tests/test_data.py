import asyncio
import pytest
from trend_reversal.data.csv_provider import CsvProvider
from trend_reversal.data.mock_provider import MockProvider

def test_mock_provider_is_deterministic():
    a = asyncio.run(MockProvider(seed=7).get_recent_candles("BTCUSDT", "15min", limit=50))
    b = asyncio.run(MockProvider(seed=7).get_recent_candles("BTCUSDT", "15min", limit=50))
    assert len(a) == 50
    assert [c.close for c in a] == [c.close for c in b]
    assert all(c.low <= min(c.open, c.close) and c.high >= max(c.open, c.close) for c in a)
    assert all(x.time < y.time for x, y in zip(a, a[1:]))

def test_csv_provider_sorts_and_limits(tmp_path):
    path = tmp_path / "candles.csv"
    path.write_text(
        "Datetime,Open,High,Low,Close\n"
        "2024-01-01 00:30,3,4,2,3.5\n"
        "2024-01-01 00:00,1,2,0.5,1.5\n"
        "2024-01-01 00:15,2,3,1,2.5\n"
    )
    candles = asyncio.run(CsvProvider(path).get_recent_candles("X", "15min", limit=2))
    assert [c.close for c in candles] == [2.5, 3.5]
    assert candles[0].volume is None
    assert candles[0].time.tzinfo is not None

def test_csv_provider_reads_volume(tmp_path):
    path = tmp_path / "candles.csv"
    path.write_text("time,open,high,low,close,volume\n2024-01-01,1,2,0.5,1.5,10\n")
    candles = asyncio.run(CsvProvider(path).get_recent_candles("X", "1d"))
    assert candles[0].volume == 10.0

def test_csv_provider_missing_columns(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("time,open,close\n2024-01-01,1,2\n")
    with pytest.raises(RuntimeError, match="missing columns"):
        asyncio.run(CsvProvider(path).get_recent_candles("X", "1d"))

def test_csv_provider_missing_file(tmp_path):
    with pytest.raises(RuntimeError, match="not found"):
        asyncio.run(CsvProvider(tmp_path / "nope.csv").get_recent_candles("X", "1d"))
