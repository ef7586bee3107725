"""Indicator calculator coordinating RSI and rolling benchmarks"""

from typing import Optional

from ..config.defaults import IndicatorParams
from ..data.models import NormalizedSeries
from ..logging.config import get_logger
from ..models.indicators import IndicatorSet
from ..models.signals import InstrumentClass
from .rolling import rolling_high, simple_moving_average
from .rsi import calculate_rsi

logger = get_logger(__name__)


class IndicatorCalculator:
    """
    Computes the IndicatorSet for one normalized series

    Stateless: the same series and parameters always give the same set.
    """

    def __init__(self, params: Optional[IndicatorParams] = None):
        self.params = params or IndicatorParams()

    def calculate(self, series: NormalizedSeries, instrument_class: InstrumentClass,
                  price: float) -> IndicatorSet:
        """
        Calculate indicators for a normalized series

        Args:
            series: Normalized highs and closes, oldest first
            instrument_class: Decides whether an SMA is computed
            price: Current price, last-resort benchmark fallback

        Returns:
            IndicatorSet with RSI, rolling high and optional rolling average
        """
        params = self.params

        if len(series.closes) < params.rsi_period + 1:
            logger.debug(
                "Thin close history, RSI set to neutral",
                available=len(series.closes),
                required=params.rsi_period + 1,
            )
        rsi = calculate_rsi(series.closes, period=params.rsi_period, neutral=params.rsi_neutral)

        fallback = series.last_close if series.last_close is not None else price
        high = rolling_high(series.highs, window=params.rolling_high_window, fallback=fallback)

        rolling_average = None
        if instrument_class is InstrumentClass.EQUITY_FUND:
            rolling_average = simple_moving_average(series.closes, window=params.sma_window)

        return IndicatorSet(
            rsi=rsi,
            rolling_high=high if high is not None else price,
            rolling_average=rolling_average,
        )

    def get_warmup_period(self) -> int:
        """Closes needed before every indicator is computed from real data"""
        return max(self.params.rsi_period + 1, self.params.sma_window)
