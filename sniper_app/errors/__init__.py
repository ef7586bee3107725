"""
Error classification for the signal engine.

Data thinness is never an error: indicators degrade to neutral values.
The classes here cover data absence, malformed provider payloads,
configuration problems and failures inside the engine itself.
"""

from .data_quality import (
    DataQualityError,
    MissingDataError,
    MalformedDataError,
    SeriesUnavailableError,
)
from .system_failures import (
    SystemFailureError,
    IndicatorCalculationError,
    ConfigurationError,
)
from .recovery import (
    RecoverableError,
    CandidateFetchError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MissingDataError",
    "MalformedDataError",
    "SeriesUnavailableError",
    # System Failures
    "SystemFailureError",
    "IndicatorCalculationError",
    "ConfigurationError",
    # Recovery Categories
    "RecoverableError",
    "CandidateFetchError",
]
