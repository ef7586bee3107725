"""
Price series ingestion and normalization module.

Handles raw daily series with holiday gaps, normalization into clean
trailing windows, and retrieval from chart providers.
"""
