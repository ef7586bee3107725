"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from ..logging.config import get_logger
from ..models.signals import InstrumentClass
from .defaults import (
    DEFAULT_WATCHLIST,
    CommodityRules,
    EquityFundRules,
    FetchParams,
    IndicatorParams,
    InstrumentSpec,
    SniperConfig,
    get_default_config,
)
from .validation import ConfigValidator

logger = get_logger(__name__)

_SECTIONS = {
    "indicators": IndicatorParams,
    "commodity": CommodityRules,
    "equity_fund": EquityFundRules,
    "fetch": FetchParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: SniperConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def _load_instruments_file(self) -> dict[str, Any]:
        instruments_file = self.config_dir / "instruments.yaml"

        if not instruments_file.exists():
            return {}

        try:
            with open(instruments_file) as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in {instruments_file}: {e}",
                source=str(instruments_file)
            )

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigurationError(
                "instruments.yaml must contain a mapping at the top level",
                source=str(instruments_file)
            )
        return content

    def load_instrument_config(self, symbol: str) -> dict[str, Any]:
        """Load instrument-specific configuration overrides."""
        instruments = self._load_instruments_file().get("instruments") or {}
        return instruments.get(symbol) or {}  # type: ignore[no-any-return]

    def load_watchlist(self, strict: bool = False) -> tuple[InstrumentSpec, ...]:
        """
        Default watchlist plus entries declared under ``watchlist`` in
        instruments.yaml. A declared entry replaces a default with the same symbol.

        Invalid entries are logged and skipped unless ``strict`` is set, in
        which case the first one raises ConfigurationError.
        """
        entries = self._load_instruments_file().get("watchlist") or []
        if not isinstance(entries, list):
            raise ConfigurationError(
                f"'watchlist' must be a list, got {type(entries).__name__}",
                source="watchlist"
            )

        declared = []
        for entry in entries:
            try:
                declared.append(self._parse_watchlist_entry(entry))
            except ConfigurationError as e:
                if strict:
                    raise
                logger.warning("Skipping invalid watchlist entry", entry=entry, error=str(e))
        declared_symbols = {spec.symbol for spec in declared}

        kept = [spec for spec in DEFAULT_WATCHLIST if spec.symbol not in declared_symbols]
        return tuple(kept + declared)

    def _parse_watchlist_entry(self, entry: Any) -> InstrumentSpec:
        if not isinstance(entry, dict) or not entry.get("symbol"):
            raise ConfigurationError(
                f"Watchlist entry must be a mapping with a symbol, got: {entry!r}",
                source="watchlist"
            )

        symbol = str(entry["symbol"])
        try:
            instrument_class = InstrumentClass(entry.get("instrument_class", "equity_fund"))
        except ValueError:
            raise ConfigurationError(
                f"Unknown instrument_class for {symbol}: {entry.get('instrument_class')}",
                source="watchlist"
            )

        candidates = entry.get("candidates") or [symbol]
        if isinstance(candidates, str):
            candidates = [candidates]

        return InstrumentSpec(
            symbol=symbol,
            name=str(entry.get("name", symbol)),
            instrument_class=instrument_class,
            candidates=tuple(str(c) for c in candidates),
            history_range=str(entry.get("history_range", "30d")),
        )

    def merge_config(
        self,
        symbol: Optional[str],
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Call-time overrides (highest priority)
        2. Instrument-specific overrides
        3. Global defaults (lowest priority)

        With ``symbol=None`` the instrument tier is skipped.
        """
        config = self._dataclass_to_dict(self.defaults)

        if symbol is not None:
            config = self._deep_merge(config, self.load_instrument_config(symbol))

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def build_config(self, merged: dict[str, Any]) -> SniperConfig:
        """Turn a merged configuration dict back into typed, frozen config."""
        sections = {}
        for section_name, section_cls in _SECTIONS.items():
            values = merged.get(section_name) or {}
            known = {f.name for f in fields(section_cls)}
            sections[section_name] = section_cls(
                **{k: v for k, v in values.items() if k in known}
            )
        return SniperConfig(**sections)

    def load_config(
        self,
        symbol: Optional[str],
        overrides: Optional[dict[str, Any]] = None
    ) -> SniperConfig:
        """Merge, validate and build the configuration for one instrument."""
        merged = self.merge_config(symbol, overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            raise ConfigurationError(
                f"Invalid configuration for {symbol or 'defaults'}",
                source=symbol or "defaults",
                errors=errors
            )

        return self.build_config(merged)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
