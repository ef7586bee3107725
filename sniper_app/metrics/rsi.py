"""RSI (Relative Strength Index) calculation"""

from typing import Iterable, Optional

from ..data.normalizer import last_n


def calculate_rsi(closes: Optional[Iterable[float]], period: int = 14,
                  neutral: float = 50.0) -> float:
    """
    Calculate RSI over the trailing ``period + 1`` valid closes

    avg_gain = sum(positive diffs) / period
    avg_loss = sum(|negative diffs|) / period
    RSI = 100 - 100 / (1 + avg_gain / avg_loss)

    Args:
        closes: Close prices, oldest first; invalid entries are skipped
        period: Number of differences (default 14, so 15 closes)
        neutral: Value returned when fewer than ``period + 1`` closes exist

    Returns:
        RSI in [0, 100]; exactly 100 when there were no losses
    """
    window = last_n(closes, period + 1)
    if len(window) < period + 1:
        return neutral

    gain_sum = 0.0
    loss_sum = 0.0
    for previous, current in zip(window, window[1:]):
        diff = current - previous
        if diff >= 0:
            gain_sum += diff
        else:
            loss_sum -= diff

    avg_gain = gain_sum / period
    avg_loss = loss_sum / period

    if avg_loss == 0:
        return 100.0

    rsi = 100.0 - 100.0 / (1.0 + avg_gain / avg_loss)
    return min(max(rsi, 0.0), 100.0)
