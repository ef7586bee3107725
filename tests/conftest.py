"""Pytest configuration and shared fixtures."""

import pytest
from typing import Any, Dict, List, Optional

from sniper_app.config.defaults import InstrumentSpec
from sniper_app.data.models import PriceSeries
from sniper_app.models.signals import InstrumentClass


@pytest.fixture
def commodity_spec() -> InstrumentSpec:
    """Silver, traded under the commodity ruleset."""
    return InstrumentSpec(
        symbol="XAG",
        name="Silver",
        instrument_class=InstrumentClass.COMMODITY,
        candidates=("XAGUSD=X", "SI=F", "SILVER"),
    )


@pytest.fixture
def equity_spec() -> InstrumentSpec:
    """Nifty 50, traded under the equity/fund ruleset."""
    return InstrumentSpec(
        symbol="NIFTY50",
        name="Nifty 50 Index",
        instrument_class=InstrumentClass.EQUITY_FUND,
        candidates=("^NSEI", "NIFTY_50.NS"),
        history_range="60d",
    )


@pytest.fixture
def rising_closes() -> List[float]:
    """Twenty strictly rising closes: no losses, RSI 100."""
    return [100.0 + i for i in range(20)]


@pytest.fixture
def pullback_series() -> PriceSeries:
    """
    Thirty days peaking at 110 then falling back to 99.

    Highs sit 1.0 above closes, with two holiday gaps.
    """
    closes: List[Optional[float]] = [90.0 + i for i in range(21)]  # 90 .. 110
    closes += [108.0, 106.0, None, 104.0, 103.0, 102.0, None, 100.0, 99.0]
    highs = [c + 1.0 if c is not None else None for c in closes]
    return PriceSeries(current_price=99.0, highs=highs, closes=closes, identifier="XAGUSD=X")


@pytest.fixture
def chart_payload() -> Dict[str, Any]:
    """Minimal daily chart document with a holiday gap."""
    return {
        "chart": {
            "result": [
                {
                    "meta": {"regularMarketPrice": 31.2, "symbol": "XAGUSD=X"},
                    "indicators": {
                        "quote": [
                            {
                                "high": [32.0, None, 33.5, 34.8],
                                "close": [31.5, None, 33.0, 31.4],
                            }
                        ]
                    },
                }
            ],
            "error": None,
        }
    }
