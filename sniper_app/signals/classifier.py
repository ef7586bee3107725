"""
Rule-based signal classifier.

Pure functions: the same price, RSI, benchmark, instrument class and
rules always give the same Signal. Any numeric input produces a tier;
non-finite values are clamped rather than propagated into a rationale.
"""

import math
from typing import Callable, Optional, Union

from ..config.defaults import CommodityRules, EquityFundRules, SniperConfig
from ..models.signals import InstrumentClass, Signal, SignalTier

Rules = Union[CommodityRules, EquityFundRules]

NEUTRAL_RSI = 50.0


def calculate_dip_percent(price: float, benchmark: float) -> float:
    """
    Percentage decline of price below the benchmark.

    Negative when the price is above the benchmark. Returns 0.0 for a
    non-positive benchmark or any non-finite input.
    """
    if not (math.isfinite(price) and math.isfinite(benchmark)) or benchmark <= 0:
        return 0.0
    return (benchmark - price) / benchmark * 100.0


def _sanitize_rsi(rsi: float) -> float:
    if not math.isfinite(rsi):
        return NEUTRAL_RSI
    return min(max(rsi, 0.0), 100.0)


def classify_commodity(rsi: float, dip: float, rules: CommodityRules) -> Signal:
    """Metals ruleset, first match wins."""
    if rsi <= rules.green_rsi_max and dip >= rules.green_min_dip_pct:
        return Signal(
            tier=SignalTier.GREEN,
            action="AGGRESSIVE BUY",
            rationale=(
                f"Significant dip of {dip:.1f}% from rolling high. RSI oversold at {rsi:.1f}. "
                "Deploy base allocation plus saved tranches."
            ),
            dip_percent=dip,
        )

    if rules.yellow_rsi_min < rsi < rules.yellow_rsi_max and dip >= rules.yellow_min_dip_pct:
        return Signal(
            tier=SignalTier.YELLOW,
            action="STANDARD TRANCHE",
            rationale=(
                f"Healthy pullback of {dip:.1f}% with RSI at {rsi:.1f}. "
                "Deploy base allocation only."
            ),
            dip_percent=dip,
        )

    if rsi >= rules.overheated_rsi:
        rationale = (
            f"Market overheated (RSI {rsi:.1f} >= {rules.overheated_rsi:g}). "
            "Pause buying and park funds."
        )
    else:
        rationale = (
            f"Noise dip of {dip:.1f}% with RSI at {rsi:.1f} is insufficient. "
            "Park funds in a high-yield account."
        )
    return Signal(
        tier=SignalTier.RED,
        action="PAUSE BUYING",
        rationale=rationale,
        dip_percent=dip,
    )


def classify_equity_fund(rsi: float, dip: float, rules: EquityFundRules) -> Signal:
    """Index and mutual fund ruleset, first match wins."""
    if rsi < rules.green_rsi_max and dip > rules.green_min_dip_pct:
        return Signal(
            tier=SignalTier.GREEN,
            action="ACCUMULATE",
            rationale=(
                f"Corrected {dip:.1f}% from rolling high. RSI at {rsi:.1f} "
                "indicates a mean-reversion opportunity."
            ),
            dip_percent=dip,
        )

    if rules.yellow_rsi_min <= rsi < rules.yellow_rsi_max:
        return Signal(
            tier=SignalTier.YELLOW,
            action="SIT TIGHT / SIP",
            rationale=(
                f"Neutral momentum zone (RSI {rsi:.1f}, dip {dip:.1f}%). "
                "Maintain recurring contributions, no lump sum deployment."
            ),
            dip_percent=dip,
        )

    if rsi >= rules.overextended_rsi:
        rationale = f"Momentum overextended (RSI {rsi:.1f} >= {rules.overextended_rsi:g})."
    else:
        rationale = (
            f"Minor dip of {dip:.1f}% with RSI at {rsi:.1f} is insufficient for entry."
        )
    return Signal(
        tier=SignalTier.RED,
        action="AVOID FRESH BUYS",
        rationale=rationale,
        dip_percent=dip,
    )


# instrument class -> (ruleset, rules type, SniperConfig section)
_RULESETS: dict[InstrumentClass, tuple[Callable[..., Signal], type, str]] = {
    InstrumentClass.COMMODITY: (classify_commodity, CommodityRules, "commodity"),
    InstrumentClass.EQUITY_FUND: (classify_equity_fund, EquityFundRules, "equity_fund"),
}


def rules_for(config: SniperConfig, instrument_class: InstrumentClass) -> Rules:
    """Threshold set that ``config`` carries for ``instrument_class``."""
    _, _, section = _RULESETS[instrument_class]
    return getattr(config, section)  # type: ignore[no-any-return]


def classify(price: float, rsi: float, benchmark: float,
             instrument_class: InstrumentClass,
             rules: Optional[Rules] = None) -> Signal:
    """
    Classify an instrument into a signal tier.

    Args:
        price: Current price
        rsi: RSI value; non-finite values are treated as neutral
        benchmark: Rolling benchmark (rolling high by default)
        instrument_class: Selects the ruleset
        rules: Threshold set for that ruleset; defaults when omitted

    Returns:
        Signal with tier, action, rationale and dip percent
    """
    ruleset, rules_cls, _ = _RULESETS[instrument_class]
    if rules is None:
        rules = rules_cls()
    elif not isinstance(rules, rules_cls):
        raise TypeError(
            f"{instrument_class.value} requires {rules_cls.__name__}, got {type(rules).__name__}"
        )

    dip = calculate_dip_percent(price, benchmark)
    return ruleset(_sanitize_rsi(rsi), dip, rules)
