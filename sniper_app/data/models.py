"""
Canonical data models for daily price series.

Raw series arrive as parallel high/close lists, oldest first, where any
entry may be missing (market holidays, provider gaps). Normalized series
hold only valid values, in the same order.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Bar:
    """One trading day. Missing fields are None."""
    high: Optional[float]
    close: Optional[float]


@dataclass(frozen=True)
class PriceSeries:
    """Raw series for one instrument, chronological (most recent last)."""
    current_price: Optional[float]
    highs: list[Optional[float]] = field(default_factory=list)
    closes: list[Optional[float]] = field(default_factory=list)
    identifier: Optional[str] = None  # Provider identifier that produced the series

    @classmethod
    def from_bars(cls, bars: list[Bar], current_price: Optional[float] = None,
                  identifier: Optional[str] = None) -> "PriceSeries":
        """Build a series from bars, oldest first."""
        return cls(
            current_price=current_price,
            highs=[bar.high for bar in bars],
            closes=[bar.close for bar in bars],
            identifier=identifier,
        )

    @property
    def bars(self) -> list[Bar]:
        """Zip highs and closes into bars; a shorter list pads with None."""
        length = max(len(self.highs), len(self.closes))
        return [
            Bar(
                high=self.highs[i] if i < len(self.highs) else None,
                close=self.closes[i] if i < len(self.closes) else None,
            )
            for i in range(length)
        ]


@dataclass(frozen=True)
class NormalizedSeries:
    """Valid highs and closes with missing entries removed."""
    highs: tuple[float, ...] = ()
    closes: tuple[float, ...] = ()

    @property
    def last_close(self) -> Optional[float]:
        return self.closes[-1] if self.closes else None

    @property
    def is_empty(self) -> bool:
        return not self.highs and not self.closes
