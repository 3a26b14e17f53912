# trend_reversal/indicators/__init__.py
from .base import (
    EMPTY_VALUE,
    MovingAverage,
    Oscillator,
    PivotDetector,
    TrendClassifier,
    bar_index,
)
from .mbfx import Mbfx
from .moving_average import moving_average
from .trend_line import TrendLine
from .zigzag import ZigZag
