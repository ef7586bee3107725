"""
Chart payload parsers for converting provider responses to price series.

Handles the daily chart document shape:
``{"chart": {"result": [{"meta": {...}, "indicators": {"quote": [{...}]}}]}}``
Individual null entries are kept; the normalizer removes them later.
"""

import json
from typing import Any, Optional

from ..errors import MalformedDataError
from .models import PriceSeries

CHART_FORMAT = "chart.result[0].{meta, indicators.quote[0]}"


class ParseError(MalformedDataError):
    """Raised when parsing fails due to invalid data format."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("expected_format", CHART_FORMAT)
        super().__init__(message, **kwargs)


class ProviderErrorResponse(ParseError):
    """Raised when the provider answered with an explicit error object."""
    pass


class EmptySeriesError(ParseError):
    """Raised when the payload parses but holds no usable series."""
    pass


def parse_json_payload(raw_data: str) -> dict[str, Any]:
    """
    Parse raw JSON string into dictionary.

    Raises:
        ParseError: If JSON parsing fails or the document is not an object
    """
    try:
        payload = json.loads(raw_data)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e}", raw_data=raw_data[:200])

    if not isinstance(payload, dict):
        raise ParseError(f"Expected JSON object, got {type(payload).__name__}")
    return payload


def _number_list(values: Any, field_name: str) -> list[Optional[float]]:
    if values is None:
        return []
    if not isinstance(values, list):
        raise ParseError(f"'{field_name}' must be a list")

    result: list[Optional[float]] = []
    for value in values:
        if value is None or isinstance(value, bool):
            result.append(None)
            continue
        try:
            result.append(float(value))
        except (TypeError, ValueError):
            result.append(None)
    return result


def parse_chart_payload(payload: dict[str, Any], identifier: Optional[str] = None) -> PriceSeries:
    """
    Parse a chart document into a raw PriceSeries.

    Args:
        payload: Decoded chart document
        identifier: Provider identifier the document was requested for

    Returns:
        PriceSeries with current price and raw high/close lists, oldest first

    Raises:
        ProviderErrorResponse: If the document carries an error object
        EmptySeriesError: If there is no current price and no closes
        ParseError: If the structure is not a chart document
    """
    chart = payload.get("chart")
    if not isinstance(chart, dict):
        raise ParseError("Missing 'chart' field")

    error = chart.get("error")
    if error:
        description = error.get("description") if isinstance(error, dict) else str(error)
        raise ProviderErrorResponse(f"Provider error for {identifier}: {description}")

    results = chart.get("result")
    if not isinstance(results, list) or not results or not isinstance(results[0], dict):
        raise EmptySeriesError(f"No chart result for {identifier}")
    result = results[0]

    meta = result.get("meta") or {}
    if not isinstance(meta, dict):
        raise ParseError(f"'meta' must be an object, got {type(meta).__name__}")
    current_price = meta.get("regularMarketPrice")
    if isinstance(current_price, bool) or not isinstance(current_price, (int, float)):
        current_price = None

    indicators = result.get("indicators") or {}
    if not isinstance(indicators, dict):
        raise ParseError(f"'indicators' must be an object, got {type(indicators).__name__}")

    quotes = indicators.get("quote") or [{}]
    if not isinstance(quotes, list) or not isinstance(quotes[0], dict):
        raise ParseError("'indicators.quote' must be a list of objects")
    quote = quotes[0]

    highs = _number_list(quote.get("high"), "high")
    closes = _number_list(quote.get("close"), "close")

    if current_price is None and not any(c is not None for c in closes):
        raise EmptySeriesError(f"No price data in chart for {identifier}")

    return PriceSeries(
        current_price=float(current_price) if current_price is not None else None,
        highs=highs,
        closes=closes,
        identifier=identifier,
    )
