from datetime import datetime, timedelta, timezone
import numpy as np
import pytest
from trend_reversal.indicators import (
    EMPTY_VALUE,
    Mbfx,
    MovingAverage,
    Oscillator,
    PivotDetector,
    TrendClassifier,
    TrendLine,
    ZigZag,
    moving_average,
)
from trend_reversal.types import Candle, Instrument
from trend_reversal.utils.ta import sma, stochastic

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)

def flat(prices):
    return [Candle(T0 + timedelta(minutes=i), p, p, p, p) for i, p in enumerate(prices)]

def inst(prices):
    return Instrument("TEST", "1min", flat(prices))

def test_defaults_satisfy_protocols():
    assert isinstance(ZigZag(), PivotDetector)
    assert isinstance(Mbfx(), Oscillator)
    assert isinstance(TrendLine(), TrendClassifier)
    assert isinstance(moving_average, MovingAverage)

# --- moving average

def test_sma_backfills_warmup():
    np.testing.assert_allclose(sma(np.array([1.0, 2.0, 3.0, 4.0]), 2), [1.0, 1.5, 2.5, 3.5])

def test_moving_average_at_offset():
    cs = flat([float(i) for i in range(1, 21)])
    # bar 1 is close 19; the 15 closes ending there are 5..19
    assert moving_average(cs, 1, 15) == pytest.approx(12.0)
    assert moving_average(cs, 0, 15) == pytest.approx(13.0)

def test_moving_average_short_history():
    assert moving_average(flat([1.0, 2.0, 3.0]), 1, 15) == pytest.approx(1.5)

def test_moving_average_ema_and_prices():
    cs = flat([5.0] * 30)
    assert moving_average(cs, 1, 15, method="ema") == pytest.approx(5.0)
    assert moving_average(cs, 1, 15, applied_price="typical") == pytest.approx(5.0)

def test_moving_average_errors():
    cs = flat([1.0, 2.0])
    with pytest.raises(IndexError):
        moving_average(cs, 2, 15)
    with pytest.raises(ValueError):
        moving_average(cs, 1, 15, method="wma")
    with pytest.raises(ValueError):
        moving_average(cs, 1, 0)

# --- zigzag

SWING = [100, 102, 103, 104, 105, 104, 103, 102, 101, 100, 99, 100, 101, 102]

def test_zigzag_marks_confirmed_swings():
    zz = ZigZag(deviation_pct=1.0, depth=1)
    zz.refresh(inst(SWING))
    # 14 bars: low at index 10 -> bar 3, high at index 4 -> bar 9, first low -> bar 13
    assert zz.arrow(3) == "buy"
    assert zz.arrow(9) == "sell"
    assert zz.arrow(13) == "buy"
    assert [zz.arrow(b) for b in (0, 1, 2, 4, 5, 6, 7, 8, 10, 11, 12)] == ["none"] * 11

def test_zigzag_depth_delays_confirmation():
    zz = ZigZag(deviation_pct=1.0, depth=8)
    # the drop off the 105 high is deep enough by bar index 6, but only 8 bars
    # after the first pivot may it be confirmed
    zz.refresh(inst(SWING[:8]))
    assert zz.arrow(3) == "none"
    zz.refresh(inst(SWING[:9]))
    assert zz.arrow(4) == "sell"
    zz.refresh(inst(SWING))
    assert (zz.arrow(13), zz.arrow(9), zz.arrow(3)) == ("buy", "sell", "buy")

def test_zigzag_keeps_turning_after_short_first_leg():
    prices = [100.0, 100.0, 110.0] + [110.0 - 2 * k for k in range(1, 21)] + [70.0 + 3 * k for k in range(1, 11)]
    zz = ZigZag()
    zz.refresh(inst(prices))
    marked = {b: zz.arrow(b) for b in range(len(prices)) if zz.arrow(b) != "none"}
    # 110 high two bars after the first low, then the 70 low before the recovery
    assert marked == {32: "buy", 30: "sell", 10: "buy"}

def test_zigzag_wide_first_bar_waits_for_direction():
    wide = Candle(T0, 100.0, 110.0, 90.0, 100.0)
    inside = Candle(T0 + timedelta(minutes=1), 100.0, 105.0, 95.0, 100.0)
    breakout = Candle(T0 + timedelta(minutes=2), 104.0, 112.0, 104.0, 110.0)
    zz = ZigZag()
    zz.refresh(Instrument("TEST", "1min", [wide, inside]))
    assert zz.arrow(1) == "none"
    zz.refresh(Instrument("TEST", "1min", [wide, inside, breakout]))
    assert zz.arrow(2) == "buy"

def test_zigzag_out_of_range_and_empty():
    zz = ZigZag()
    zz.refresh(Instrument("TEST", "1min", None))
    assert zz.arrow(1) == "none"
    zz.refresh(inst(SWING))
    assert zz.arrow(100) == "none"
    assert zz.arrow(-1) == "none"

def test_zigzag_rejects_bad_params():
    with pytest.raises(ValueError):
        ZigZag(deviation_pct=0)
    with pytest.raises(ValueError):
        ZigZag(depth=0)

# --- mbfx

def test_stochastic_flat_range_is_mid():
    c = np.array([3.0, 3.0, 3.0])
    np.testing.assert_allclose(stochastic(c, c, c, 2), [50.0, 50.0, 50.0])

def test_mbfx_split_colours():
    red, green = Mbfx._split(np.array([10.0, 20.0, 30.0, 25.0, 15.0, 20.0]))
    E = EMPTY_VALUE
    np.testing.assert_allclose(red, [E, E, E, 25.0, 15.0, 20.0])
    np.testing.assert_allclose(green, [10.0, 20.0, 30.0, 25.0, E, 20.0])

def test_mbfx_reads_by_offset():
    osc = Mbfx()
    osc.refresh(inst([5.0] * 20))
    assert osc.green_value(1) == pytest.approx(50.0)
    assert osc.red_value(1) == EMPTY_VALUE
    assert osc.green_value(50) == EMPTY_VALUE

def test_mbfx_falling_prices_draw_red():
    osc = Mbfx(length=5, smoothing=3)
    osc.refresh(inst([100.0 + 5 * np.sin(i / 3.0) for i in range(12)] + [90.0 - i for i in range(10)]))
    assert osc.red_value(1) < 30.0
    assert osc.green_value(1) == EMPTY_VALUE

def test_mbfx_empty():
    osc = Mbfx()
    osc.refresh(Instrument("TEST", "1min", []))
    assert osc.red_value(1) == EMPTY_VALUE

# --- trend line

def test_trend_line_colours():
    up, down = TrendLine(period=5), TrendLine(period=5)
    up.refresh(inst([float(i) for i in range(30)]))
    down.refresh(inst([float(30 - i) for i in range(30)]))
    assert up.is_green(1) and not up.is_red(1)
    assert down.is_red(1) and not down.is_green(1)

def test_trend_line_out_of_range():
    tl = TrendLine()
    tl.refresh(inst([1.0, 2.0]))
    assert not tl.is_green(5) and not tl.is_red(5)
