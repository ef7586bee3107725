"""Signal tiers, instrument classes and per-instrument result records."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class InstrumentClass(Enum):
    """Selects which classifier ruleset applies to an instrument."""
    COMMODITY = "commodity"
    EQUITY_FUND = "equity_fund"


class SignalTier(Enum):
    """Discrete capital-deployment posture."""
    GREEN = "GREEN"
    YELLOW = "YELLOW"
    RED = "RED"


@dataclass(frozen=True)
class Signal:
    """Classifier output for one instrument"""
    tier: SignalTier
    action: str
    rationale: str
    dip_percent: float


@dataclass(frozen=True)
class InstrumentResult:
    """Successful evaluation of one instrument."""
    symbol: str
    name: str
    instrument_class: InstrumentClass
    price: float
    rsi: float
    rolling_high: float
    signal: Signal
    rolling_average: Optional[float] = None
    benchmark: Optional[float] = None

    ok = True

    @property
    def tier(self) -> SignalTier:
        return self.signal.tier

    def to_dict(self) -> dict[str, Any]:
        """Flat record consumed by notification and dashboard collaborators."""
        return {
            "symbol": self.symbol,
            "name": self.name,
            "ok": True,
            "instrument_class": self.instrument_class.value,
            "price": self.price,
            "rsi": self.rsi,
            "rolling_high": self.rolling_high,
            "rolling_average": self.rolling_average,
            "dip_percent": self.signal.dip_percent,
            "tier": self.signal.tier.value,
            "action": self.signal.action,
            "rationale": self.signal.rationale,
        }


@dataclass(frozen=True)
class InstrumentFailure:
    """Explicit per-instrument absence: no series could be evaluated."""
    symbol: str
    name: str
    error: str
    attempted: list[str] = field(default_factory=list)

    ok = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "symbol": self.symbol,
            "name": self.name,
            "ok": False,
            "error": self.error,
            "attempted": list(self.attempted),
        }


EvaluationOutcome = Union[InstrumentResult, InstrumentFailure]
