"""
Value objects for indicators, signals and per-instrument results.

Immutable data structures; every value is recomputed on each request.
"""
