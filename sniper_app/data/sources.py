"""
Price series retrieval with prioritized identifier fallback.

Providers list the same instrument under several identifiers (spot pair,
futures contract, plain name), and any of them may 404 on a given day.
``CandidateSeriesProvider`` tries them in order and returns the first
series that parses.
"""

import socket
from http.client import HTTPException
from typing import Any, Callable, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import quote, urlencode
from urllib.request import Request, urlopen

from ..config.defaults import FetchParams, InstrumentSpec
from ..errors import CandidateFetchError, SeriesUnavailableError
from ..logging.config import get_logger
from .models import PriceSeries
from .parsers import ParseError, parse_chart_payload, parse_json_payload

logger = get_logger(__name__)

DEFAULT_HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
                  '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36',
    'Accept': 'application/json',
    'Accept-Language': 'en-US,en;q=0.9',
}


class ChartSeriesSource:
    """Fetches one identifier's daily chart over HTTP GET."""

    def __init__(self, params: Optional[FetchParams] = None,
                 headers: Optional[dict[str, str]] = None,
                 opener: Callable[..., Any] = urlopen):
        self.params = params or FetchParams()
        self.headers = dict(DEFAULT_HEADERS)
        if headers:
            self.headers.update(headers)
        self._opener = opener

    def build_url(self, identifier: str, history_range: str) -> str:
        query = urlencode({"interval": self.params.interval, "range": history_range})
        return f"{self.params.base_url.rstrip('/')}/{quote(identifier, safe='')}?{query}"

    def fetch(self, identifier: str, history_range: str = "30d") -> PriceSeries:
        """
        Fetch and parse one identifier.

        Raises:
            CandidateFetchError: On HTTP, network, timeout, decoding or payload errors
        """
        url = self.build_url(identifier, history_range)
        req = Request(url, headers=self.headers, method="GET")

        try:
            with self._opener(req, timeout=self.params.timeout_seconds) as response:
                status = response.getcode()
                body = response.read().decode('utf-8')

        except HTTPError as e:
            raise CandidateFetchError(
                f"HTTP {e.code} for {identifier}: {e.reason}",
                identifier=identifier,
                status_code=e.code
            )

        except (socket.timeout, TimeoutError) as e:
            raise CandidateFetchError(
                f"Timed out after {self.params.timeout_seconds}s for {identifier}: {e}",
                identifier=identifier
            )

        except (URLError, OSError) as e:
            raise CandidateFetchError(
                f"Network error for {identifier}: {e}",
                identifier=identifier
            )

        except HTTPException as e:
            raise CandidateFetchError(
                f"Bad HTTP response for {identifier}: {e!r}",
                identifier=identifier
            )

        except UnicodeDecodeError as e:
            raise CandidateFetchError(
                f"Undecodable body for {identifier}: {e}",
                identifier=identifier
            )

        if not 200 <= status < 300:
            raise CandidateFetchError(
                f"HTTP {status} for {identifier}",
                identifier=identifier,
                status_code=status
            )

        try:
            return parse_chart_payload(parse_json_payload(body), identifier=identifier)
        except ParseError as e:
            raise CandidateFetchError(
                f"Unusable payload for {identifier}: {e}",
                identifier=identifier,
                status_code=status
            )


class CandidateSeriesProvider:
    """
    Resolves an instrument to a series by trying its candidate identifiers in order.

    Callable, so it can be handed to ``SignalEngine`` as its provider.
    """

    def __init__(self, source: Optional[ChartSeriesSource] = None):
        self.source = source or ChartSeriesSource()

    def __call__(self, spec: InstrumentSpec) -> PriceSeries:
        return self.get_series(spec)

    def get_series(self, spec: InstrumentSpec) -> PriceSeries:
        """
        Return the first successfully fetched series.

        Raises:
            SeriesUnavailableError: When every candidate failed
        """
        attempted = []
        last_error: Optional[CandidateFetchError] = None

        for retry_count, identifier in enumerate(spec.candidates):
            attempted.append(identifier)
            try:
                series = self.source.fetch(identifier, spec.history_range)
            except CandidateFetchError as e:
                e.retry_count = retry_count
                last_error = e
                logger.warning(
                    "Candidate identifier failed, trying next",
                    symbol=spec.symbol,
                    identifier=identifier,
                    status_code=e.status_code,
                    error=str(e),
                )
                continue

            if retry_count:
                logger.info(
                    "Series resolved via fallback identifier",
                    symbol=spec.symbol,
                    identifier=identifier,
                    attempts=len(attempted),
                )
            return series

        message = f"All identifiers for {spec.symbol} failed"
        if last_error is not None:
            message = f"{message}: {last_error}"
        raise SeriesUnavailableError(
            message,
            symbol=spec.symbol,
            attempted=attempted,
        )
