"""
Sniper App - Indicator & Signal Engine

Derives RSI and rolling benchmarks from daily price history for metals,
an equity index and mutual funds, and classifies each instrument into a
GREEN / YELLOW / RED capital-deployment signal.
"""

__version__ = "0.1.0"
__author__ = "Sniper Team"
