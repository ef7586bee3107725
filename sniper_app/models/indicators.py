"""Data models for indicator calculations"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class IndicatorSet:
    """Indicators derived from one normalized series"""
    rsi: float
    rolling_high: float
    rolling_average: Optional[float] = None

    def benchmark_for(self, kind: str) -> float:
        """
        Resolve the rolling benchmark a ruleset compares the price against.

        ``rolling_average`` falls back to the rolling high when no average
        was computed for this instrument.
        """
        if kind == "rolling_average" and self.rolling_average is not None:
            return self.rolling_average
        return self.rolling_high
