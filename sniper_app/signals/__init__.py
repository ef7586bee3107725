"""
Signal classification module.

Rule-based mapping from price, RSI and rolling benchmark to a tier and
recommended action, one ruleset per instrument class.
"""
from .classifier import calculate_dip_percent, classify, rules_for

__all__ = ["calculate_dip_percent", "classify", "rules_for"]
