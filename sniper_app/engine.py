"""
Main signal engine facade.

Orchestrates the per-instrument pipeline:
Raw Series → Normalization → Indicators → Classification → Result record

Instruments are evaluated independently: a failure while fetching or
evaluating one instrument becomes that instrument's failure record and
never affects the others.
"""

import uuid
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Union

import structlog

from .config.defaults import DEFAULT_WATCHLIST, FetchParams, InstrumentSpec, SniperConfig
from .config.loader import ConfigLoader
from .data.models import PriceSeries
from .data.normalizer import SeriesNormalizer
from .data.sources import CandidateSeriesProvider, ChartSeriesSource
from .errors import (
    ConfigurationError,
    DataQualityError,
    IndicatorCalculationError,
    SeriesUnavailableError,
)
from .logging.config import get_signal_logger, log_signal_decision
from .metrics.calculator import IndicatorCalculator
from .models.signals import (
    EvaluationOutcome,
    InstrumentFailure,
    InstrumentResult,
)
from .signals.classifier import classify, rules_for

logger = structlog.get_logger(__name__)

SeriesProvider = Callable[[InstrumentSpec], PriceSeries]


class SignalEngine:
    """
    Entry point for notification and dashboard collaborators.

    ``evaluate_series`` classifies series the caller already holds;
    ``run`` fetches every watchlist instrument through the provider first.
    """

    def __init__(
        self,
        config_dir: Optional[Union[str, Path]] = None,
        provider: Optional[SeriesProvider] = None,
        overrides: Optional[dict[str, Any]] = None,
    ) -> None:
        """Initialize the signal engine."""
        self.logger = logger
        self.signal_logger = get_signal_logger(__name__)

        self.config_loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
        self.overrides = overrides or {}
        self.normalizer = SeriesNormalizer()
        self.provider = provider

        self.logger.info("Signal engine initialized", config_dir=str(self.config_loader.config_dir))

    def config_for(self, symbol: Optional[str]) -> SniperConfig:
        """
        Effective configuration for one instrument.

        Invalid instrument overrides are logged and the defaults are used.
        """
        try:
            return self.config_loader.load_config(symbol, self.overrides)
        except ConfigurationError as e:
            self.logger.error(
                "Instrument configuration invalid, using defaults",
                symbol=symbol,
                error=str(e),
                errors=[f"{err.field}: {err.message} (got: {err.value})" for err in e.errors],
            )
            return self.config_loader.defaults

    @classmethod
    def from_http(
        cls,
        config_dir: Optional[Union[str, Path]] = None,
        overrides: Optional[dict[str, Any]] = None,
    ) -> "SignalEngine":
        """Engine fetching over HTTP with the effective ``fetch`` configuration."""
        engine = cls(config_dir=config_dir, overrides=overrides)
        source = ChartSeriesSource(engine.fetch_params())
        engine.provider = CandidateSeriesProvider(source)
        return engine

    def fetch_params(self) -> FetchParams:
        """Fetch parameters from defaults and call overrides; instrument entries do not apply."""
        return self.config_for(None).fetch

    def watchlist(self) -> tuple[InstrumentSpec, ...]:
        """
        Instruments to evaluate.

        An unreadable instruments file is logged and the default watchlist used.
        """
        try:
            return self.config_loader.load_watchlist()
        except ConfigurationError as e:
            self.logger.error(
                "Watchlist configuration unusable, using default watchlist",
                error=str(e),
                source=e.source,
            )
            return DEFAULT_WATCHLIST

    def evaluate_series(self, spec: InstrumentSpec,
                        series: Optional[PriceSeries]) -> EvaluationOutcome:
        """
        Run normalization, indicators and classification for one instrument.

        Args:
            spec: Instrument being evaluated
            series: Raw series, or None when retrieval produced nothing

        Returns:
            InstrumentResult, or InstrumentFailure when the series is absent
            or evaluation failed
        """
        if series is None:
            return self._failure(spec, "No price series available")

        try:
            return self._evaluate(spec, series)

        except DataQualityError as e:
            self.logger.warning(
                "Data quality issue during evaluation",
                symbol=spec.symbol,
                error=str(e),
                error_type=type(e).__name__,
                context=getattr(e, 'context', {}),
            )
            return self._failure(spec, str(e), series)

        except Exception as e:
            error = IndicatorCalculationError(
                f"Unexpected error evaluating {spec.symbol}: {e}",
                symbol=spec.symbol,
                stage="evaluate",
            )
            self.logger.error(
                "Unexpected error during evaluation",
                symbol=spec.symbol,
                error=str(e),
                error_type=type(e).__name__,
            )
            return self._failure(spec, str(error), series)

    def _evaluate(self, spec: InstrumentSpec, series: PriceSeries) -> InstrumentResult:
        config = self.config_for(spec.symbol)
        calculator = IndicatorCalculator(config.indicators)

        normalized = self.normalizer.normalize(series)
        price = self.normalizer.resolve_price(series, normalized)

        if len(normalized.closes) < calculator.get_warmup_period():
            self.logger.debug(
                "Series shorter than warmup period, degraded indicators in use",
                symbol=spec.symbol,
                closes=len(normalized.closes),
                warmup=calculator.get_warmup_period(),
            )

        indicators = calculator.calculate(normalized, spec.instrument_class, price)

        rules = rules_for(config, spec.instrument_class)
        benchmark = indicators.benchmark_for(rules.benchmark)
        signal = classify(price, indicators.rsi, benchmark, spec.instrument_class, rules)

        log_signal_decision(
            self.signal_logger,
            symbol=spec.symbol,
            tier=signal.tier.value,
            rsi=indicators.rsi,
            dip_percent=signal.dip_percent,
            reason=signal.rationale,
            context={"price": price, "benchmark": benchmark, "identifier": series.identifier},
        )

        return InstrumentResult(
            symbol=spec.symbol,
            name=spec.name,
            instrument_class=spec.instrument_class,
            price=price,
            rsi=indicators.rsi,
            rolling_high=indicators.rolling_high,
            rolling_average=indicators.rolling_average,
            benchmark=benchmark,
            signal=signal,
        )

    def evaluate_many(
        self,
        pairs: Iterable[tuple[InstrumentSpec, Optional[PriceSeries]]]
    ) -> list[EvaluationOutcome]:
        """Evaluate each (spec, series) pair independently, preserving order."""
        return [self.evaluate_series(spec, series) for spec, series in pairs]

    def run(self, instruments: Optional[Iterable[InstrumentSpec]] = None) -> list[EvaluationOutcome]:
        """
        Fetch and evaluate every instrument.

        Fetches fan out on a thread pool; evaluation happens here after all
        fetches complete, in watchlist order. Log records emitted while
        evaluating carry a per-run ``run_id``.

        Raises:
            ConfigurationError: If no provider was configured
        """
        if self.provider is None:
            raise ConfigurationError("SignalEngine.run requires a series provider")

        specs = list(instruments) if instruments is not None else list(self.watchlist())
        if not specs:
            return []

        with structlog.contextvars.bound_contextvars(run_id=uuid.uuid4().hex[:12]):
            return self._run(specs)

    def _run(self, specs: list[InstrumentSpec]) -> list[EvaluationOutcome]:
        max_workers = min(self.fetch_params().max_workers, len(specs))
        with ThreadPoolExecutor(max_workers=max_workers) as ex:
            futures = [ex.submit(self.provider, spec) for spec in specs]

        outcomes: list[EvaluationOutcome] = []
        for spec, future in zip(specs, futures):
            try:
                series = future.result()
            except SeriesUnavailableError as e:
                self.logger.warning(
                    "Series unavailable for instrument",
                    symbol=spec.symbol,
                    attempted=e.attempted,
                    error=str(e),
                )
                outcomes.append(self._failure(spec, str(e), attempted=e.attempted))
                continue
            except Exception as e:
                self.logger.error(
                    "Unexpected error fetching series",
                    symbol=spec.symbol,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                outcomes.append(self._failure(spec, f"Fetch failed: {e}"))
                continue

            outcomes.append(self.evaluate_series(spec, series))

        self.logger.info(
            "Signal run complete",
            instruments=len(specs),
            failures=sum(1 for o in outcomes if not o.ok),
        )
        return outcomes

    def _failure(self, spec: InstrumentSpec, error: str,
                 series: Optional[PriceSeries] = None,
                 attempted: Optional[list[str]] = None) -> InstrumentFailure:
        if attempted is None:
            attempted = [series.identifier] if series is not None and series.identifier else []
        return InstrumentFailure(
            symbol=spec.symbol,
            name=spec.name,
            error=error,
            attempted=list(attempted),
        )
