"""Default configuration parameters for the signal engine."""

from dataclasses import dataclass

from ..models.signals import InstrumentClass


@dataclass(frozen=True)
class IndicatorParams:
    """Indicator windows. RSI uses rsi_period + 1 closes (one anchor)."""
    rsi_period: int = 14
    rsi_neutral: float = 50.0                       # RSI on thin history
    rolling_high_window: int = 20                   # Trailing highs for the benchmark
    sma_window: int = 50                            # Trailing closes for equity/fund SMA


@dataclass(frozen=True)
class CommodityRules:
    """Metals ruleset thresholds."""
    # GREEN: rsi <= green_rsi_max and dip >= green_min_dip_pct
    green_rsi_max: float = 40.0
    green_min_dip_pct: float = 6.0

    # YELLOW: yellow_rsi_min < rsi < yellow_rsi_max and dip >= yellow_min_dip_pct
    yellow_rsi_min: float = 40.0
    yellow_rsi_max: float = 65.0
    yellow_min_dip_pct: float = 2.0

    # RED rationale: overheated at or above this RSI
    overheated_rsi: float = 65.0

    benchmark: str = "rolling_high"


@dataclass(frozen=True)
class EquityFundRules:
    """Index and mutual fund ruleset thresholds."""
    # GREEN: rsi < green_rsi_max and dip > green_min_dip_pct
    green_rsi_max: float = 45.0
    green_min_dip_pct: float = 4.0

    # YELLOW: yellow_rsi_min <= rsi < yellow_rsi_max
    yellow_rsi_min: float = 45.0
    yellow_rsi_max: float = 60.0

    # RED rationale: overextended at or above this RSI
    overextended_rsi: float = 60.0

    benchmark: str = "rolling_high"


@dataclass(frozen=True)
class FetchParams:
    """Series retrieval parameters."""
    base_url: str = "https://query1.finance.yahoo.com/v8/finance/chart"
    interval: str = "1d"
    timeout_seconds: float = 10.0                   # Per candidate attempt
    max_workers: int = 4


@dataclass(frozen=True)
class InstrumentSpec:
    """Watchlist entry: one instrument and its prioritized identifiers."""
    symbol: str
    name: str
    instrument_class: InstrumentClass
    candidates: tuple[str, ...]
    history_range: str = "30d"


@dataclass(frozen=True)
class SniperConfig:
    """Complete default configuration."""
    indicators: IndicatorParams
    commodity: CommodityRules
    equity_fund: EquityFundRules
    fetch: FetchParams


DEFAULT_WATCHLIST: tuple[InstrumentSpec, ...] = (
    InstrumentSpec(
        symbol="XAG",
        name="Silver",
        instrument_class=InstrumentClass.COMMODITY,
        candidates=("XAGUSD=X", "SI=F", "SILVER"),
    ),
    InstrumentSpec(
        symbol="XAU",
        name="Gold",
        instrument_class=InstrumentClass.COMMODITY,
        candidates=("XAUUSD=X", "GC=F", "GOLD"),
    ),
    InstrumentSpec(
        symbol="NIFTY50",
        name="Nifty 50 Index",
        instrument_class=InstrumentClass.EQUITY_FUND,
        candidates=("^NSEI", "NIFTY_50.NS"),
        history_range="60d",
    ),
)


def get_default_config() -> SniperConfig:
    """Get the default configuration instance."""
    return SniperConfig(
        indicators=IndicatorParams(),
        commodity=CommodityRules(),
        equity_fund=EquityFundRules(),
        fetch=FetchParams(),
    )
