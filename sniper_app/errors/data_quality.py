"""
Data quality error classifications for price series processing.

These exceptions categorize problems with the raw series handed to the
engine. They are reported per instrument and never abort other instruments.
"""

from typing import Optional, Dict, Any


class DataQualityError(Exception):
    """Base class for data quality issues that can be handled gracefully."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class MissingDataError(DataQualityError):
    """Required data is completely missing."""

    def __init__(self, message: str, data_type: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.data_type = data_type


class MalformedDataError(DataQualityError):
    """Data exists but is in incorrect format."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format


class SeriesUnavailableError(MissingDataError):
    """No price series could be obtained for an instrument from any identifier."""

    def __init__(self, message: str, symbol: Optional[str] = None,
                 attempted: Optional[list] = None, **kwargs):
        super().__init__(message, data_type="series", **kwargs)
        self.symbol = symbol
        self.attempted = list(attempted or [])
