"""
Centralized logging configuration for the Sniper signal engine.

Every module logs through structlog. Call ``configure_logging`` once at
startup; ``get_signal_logger`` and ``log_signal_decision`` produce the
audit records for tier decisions.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import EventDict, FilteringBoundLogger, WrappedLogger

from .. import __version__

APP_NAME = "sniper_app"


def add_app_context(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp every record with the application name and version."""
    event_dict.setdefault("app", APP_NAME)
    event_dict.setdefault("app_version", __version__)
    return event_dict


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Records carry the app name and version, plus any context bound with
    ``structlog.contextvars`` (``SignalEngine.run`` binds a ``run_id``).

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper(), None)
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level}")

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # rendered by structlog
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        add_app_context,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    # ISO-8601, UTC
    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    # Renderer must be last
    if format_json:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_signal_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for signal classification decisions.

    Every tier decision is an audit record: it is what a human acts on
    when deploying capital.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for signal decisions
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="signals",
        audit_trail=True
    )


def log_signal_decision(
    logger: FilteringBoundLogger,
    symbol: str,
    tier: str,
    rsi: float,
    dip_percent: float,
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a signal classification with standardized format.

    Args:
        logger: Structlog logger instance
        symbol: Instrument symbol being classified
        tier: Resulting tier name (GREEN, YELLOW, RED)
        rsi: RSI value the decision was based on
        dip_percent: Dip below the rolling benchmark, in percent
        reason: Human-readable rationale
        context: Additional context data
    """
    bound_logger = logger.bind(
        symbol=symbol,
        tier=tier,
        rsi=round(rsi, 2),
        dip_percent=round(dip_percent, 2),
        reason=reason
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("signal_decision")
