#!/usr/bin/env python3
"""
Basic Usage Example - Sniper Signal Engine

Classifies three instruments from in-memory price history, without any
network access. It shows how to:
- Initialize the engine
- Build raw series with holiday gaps
- Evaluate instruments and read the result records

Run: python examples/basic_usage.py
"""

import json

from sniper_app.config.defaults import DEFAULT_WATCHLIST
from sniper_app.data.models import PriceSeries
from sniper_app.engine import SignalEngine
from sniper_app.logging.config import configure_logging


def sample_series() -> dict[str, PriceSeries]:
    """Hand-made daily history, oldest first; None marks a market holiday."""
    silver = [30.0 + i * 0.25 for i in range(20)] + [34.0, 33.0, None, 32.0, 31.5, 31.2]
    gold = [2500.0 + i * 10 for i in range(22)]
    nifty = [25000.0 + (i % 3) * 40 for i in range(40)]

    return {
        "XAG": PriceSeries(31.2, [c + 0.2 if c else None for c in silver], silver),
        "XAU": PriceSeries(2712.0, [c + 5 for c in gold], gold),
        "NIFTY50": PriceSeries(25050.0, [c + 60 for c in nifty], nifty),
    }


def main():
    configure_logging(level="INFO")

    engine = SignalEngine()
    series = sample_series()

    outcomes = engine.evaluate_many(
        (spec, series.get(spec.symbol)) for spec in DEFAULT_WATCHLIST
    )

    print("\n📊 Signals")
    for outcome in outcomes:
        print(json.dumps(outcome.to_dict(), indent=2))


if __name__ == "__main__":
    main()
