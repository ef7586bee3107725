"""
Series normalization for raw daily price history.

Missing entries never raise: they are dropped, and callers receive
shorter windows. Deciding what a short window means is left to the
indicator functions.
"""

import math
from typing import Any, Iterable, Optional

from ..errors import MissingDataError
from ..logging.config import get_logger
from .models import NormalizedSeries, PriceSeries

logger = get_logger(__name__)


def is_valid_price(value: Any) -> bool:
    """A usable price is a finite, strictly positive real number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def valid_values(values: Optional[Iterable[Any]]) -> list[float]:
    """Drop missing or invalid entries, preserving order."""
    if values is None:
        return []
    return [float(v) for v in values if is_valid_price(v)]


def last_n(values: Optional[Iterable[Any]], n: int) -> list[float]:
    """
    Trailing ``n`` valid values, oldest first.

    Returns fewer than ``n`` values when the series is short, and an
    empty list for ``n <= 0``.
    """
    if n <= 0:
        return []
    return valid_values(values)[-n:]


class SeriesNormalizer:
    """Turns raw price series into clean, order-preserving value sequences."""

    def normalize(self, series: PriceSeries) -> NormalizedSeries:
        """
        Normalize a raw series.

        Args:
            series: Raw series with possibly missing highs/closes

        Returns:
            NormalizedSeries holding only valid values
        """
        highs = valid_values(series.highs)
        closes = valid_values(series.closes)

        dropped_highs = len(series.highs) - len(highs)
        dropped_closes = len(series.closes) - len(closes)
        if dropped_highs or dropped_closes:
            logger.debug(
                "Dropped missing entries from series",
                identifier=series.identifier,
                dropped_highs=dropped_highs,
                dropped_closes=dropped_closes,
            )

        return NormalizedSeries(highs=tuple(highs), closes=tuple(closes))

    def resolve_price(self, series: PriceSeries, normalized: NormalizedSeries) -> float:
        """
        Current price for classification.

        Falls back to the most recent valid close when the provider did not
        report a usable current price.

        Raises:
            MissingDataError: If neither a current price nor any close exists
        """
        if is_valid_price(series.current_price):
            return float(series.current_price)  # type: ignore[arg-type]

        if normalized.last_close is not None:
            logger.debug(
                "Current price missing, using last valid close",
                identifier=series.identifier,
                last_close=normalized.last_close,
            )
            return normalized.last_close

        raise MissingDataError(
            "No current price and no valid closes in series",
            data_type="price",
            context={"identifier": series.identifier}
        )
