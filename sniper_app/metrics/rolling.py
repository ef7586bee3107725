"""Rolling high and simple moving average over trailing windows"""

from typing import Iterable, Optional

from ..data.normalizer import last_n, valid_values


def rolling_high(highs: Optional[Iterable[float]], window: int = 20,
                 fallback: Optional[float] = None) -> Optional[float]:
    """
    Maximum of the trailing ``window`` valid highs

    Args:
        highs: High prices, oldest first
        window: Lookback length (default 20)
        fallback: Returned when there are no valid highs

    Returns:
        Rolling high, or ``fallback`` if no valid highs exist
    """
    recent = last_n(highs, window)
    if not recent:
        return fallback
    return max(recent)


def simple_moving_average(closes: Optional[Iterable[float]], window: int = 50) -> Optional[float]:
    """
    Arithmetic mean of the trailing ``window`` valid closes

    With fewer than ``window`` valid closes the most recent valid close is
    returned instead; None only when there are no valid closes at all.
    """
    values = valid_values(closes)
    if not values:
        return None
    if window <= 0 or len(values) < window:
        return values[-1]

    recent = values[-window:]
    return sum(recent) / window
