"""
System failure error classifications.

These exceptions represent failures of the engine or its configuration
rather than of the market data it was given.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class IndicatorCalculationError(SystemFailureError):
    """Unexpected error while computing indicators or classifying an instrument."""

    def __init__(self, message: str, symbol: Optional[str] = None,
                 stage: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.symbol = symbol
        self.stage = stage


class ConfigurationError(SystemFailureError):
    """Configuration file or override values are unusable."""

    def __init__(self, message: str, source: Optional[str] = None,
                 errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.source = source
        self.errors = list(errors or [])
