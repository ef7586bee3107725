"""
Recovery strategy classifications for error handling.

These classes categorize errors by their recovery characteristics
and guide the error handling strategy.
"""

from typing import Optional


class RecoverableError(Exception):
    """Mixin for errors that can be recovered from automatically."""

    def __init__(self, message: str, retry_count: int = 0, **kwargs):
        super().__init__(message)
        self.retry_count = retry_count
        self.recoverable = True


class CandidateFetchError(RecoverableError):
    """A single candidate identifier failed; the next candidate may still succeed."""

    def __init__(self, message: str, identifier: Optional[str] = None,
                 status_code: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.identifier = identifier
        self.status_code = status_code
