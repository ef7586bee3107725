"""Indicator calculations for daily price series"""

from .calculator import IndicatorCalculator
from .rolling import rolling_high, simple_moving_average
from .rsi import calculate_rsi

__all__ = [
    "IndicatorCalculator",
    "calculate_rsi",
    "rolling_high",
    "simple_moving_average",
]
