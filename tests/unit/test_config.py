"""Unit tests for configuration management."""

import pytest
from pathlib import Path

from sniper_app.config.defaults import DEFAULT_WATCHLIST, get_default_config
from sniper_app.config.loader import ConfigLoader
from sniper_app.config.validation import ConfigValidator
from sniper_app.errors import ConfigurationError
from sniper_app.models.signals import InstrumentClass


@pytest.fixture
def write_instruments(tmp_path):
    """Write an instruments.yaml into a temporary config dir."""
    def _write(text: str) -> ConfigLoader:
        (tmp_path / "instruments.yaml").write_text(text)
        return ConfigLoader.create(tmp_path)
    return _write


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        config = get_default_config()
        assert config.indicators.rsi_period == 14
        assert config.indicators.rolling_high_window == 20
        assert config.indicators.sma_window == 50
        assert config.commodity.green_min_dip_pct == 6.0
        assert config.equity_fund.green_rsi_max == 45.0

    def test_default_config_is_immutable(self) -> None:
        config = get_default_config()
        with pytest.raises(AttributeError):
            config.commodity.green_rsi_max = 10.0  # type: ignore[misc]

    def test_default_watchlist(self) -> None:
        symbols = [spec.symbol for spec in DEFAULT_WATCHLIST]
        assert symbols == ["XAG", "XAU", "NIFTY50"]
        assert DEFAULT_WATCHLIST[2].instrument_class is InstrumentClass.EQUITY_FUND
        assert DEFAULT_WATCHLIST[0].candidates[0] == "XAGUSD=X"


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_config_loader_creation(self) -> None:
        loader = ConfigLoader.create()
        assert isinstance(loader.config_dir, Path)

    def test_merge_config_defaults_only(self, tmp_path) -> None:
        loader = ConfigLoader.create(tmp_path)
        config = loader.merge_config("UNKNOWN")

        assert config["commodity"]["green_rsi_max"] == 40.0
        assert config["indicators"]["rsi_period"] == 14

    def test_merge_config_with_overrides(self, tmp_path) -> None:
        loader = ConfigLoader.create(tmp_path)
        config = loader.merge_config("UNKNOWN", {"commodity": {"green_rsi_max": 35.0}})

        assert config["commodity"]["green_rsi_max"] == 35.0
        # Other defaults should remain
        assert config["commodity"]["yellow_rsi_max"] == 65.0

    def test_instrument_overrides_from_yaml(self, write_instruments) -> None:
        loader = write_instruments(
            "instruments:\n"
            "  XAU:\n"
            "    commodity:\n"
            "      green_min_dip_pct: 5.0\n"
        )

        assert loader.load_config("XAU").commodity.green_min_dip_pct == 5.0
        assert loader.load_config("XAG").commodity.green_min_dip_pct == 6.0

    def test_call_overrides_beat_instrument_overrides(self, write_instruments) -> None:
        loader = write_instruments(
            "instruments:\n"
            "  XAU:\n"
            "    commodity:\n"
            "      green_min_dip_pct: 5.0\n"
        )
        config = loader.load_config("XAU", {"commodity": {"green_min_dip_pct": 8.0}})
        assert config.commodity.green_min_dip_pct == 8.0

    def test_load_config_rejects_invalid_values(self, tmp_path) -> None:
        loader = ConfigLoader.create(tmp_path)
        with pytest.raises(ConfigurationError) as exc_info:
            loader.load_config("XAG", {"indicators": {"rsi_period": 0}})
        assert exc_info.value.errors[0].field == "rsi_period"

    def test_build_config_ignores_unknown_keys(self, tmp_path) -> None:
        loader = ConfigLoader.create(tmp_path)
        merged = loader.merge_config("XAG", {"commodity": {"unknown_knob": 1}})
        assert loader.build_config(merged).commodity == get_default_config().commodity

    def test_missing_file_yields_default_watchlist(self, tmp_path) -> None:
        assert ConfigLoader.create(tmp_path).load_watchlist() == DEFAULT_WATCHLIST

    def test_shipped_config_is_valid(self) -> None:
        loader = ConfigLoader.create()
        assert loader.load_watchlist()[:3] == DEFAULT_WATCHLIST
        assert loader.load_config("XAG") is not None

    def test_watchlist_adds_fund(self, write_instruments) -> None:
        loader = write_instruments(
            "watchlist:\n"
            "  - symbol: FUND\n"
            "    name: Flexi Cap Fund\n"
            "    instrument_class: equity_fund\n"
            "    candidates: [FUND.BO, FUND.NS]\n"
            "    history_range: 60d\n"
        )

        watchlist = loader.load_watchlist()

        assert [spec.symbol for spec in watchlist] == ["XAG", "XAU", "NIFTY50", "FUND"]
        fund = watchlist[-1]
        assert fund.instrument_class is InstrumentClass.EQUITY_FUND
        assert fund.candidates == ("FUND.BO", "FUND.NS")

    def test_watchlist_entry_replaces_default(self, write_instruments) -> None:
        loader = write_instruments(
            "watchlist:\n"
            "  - symbol: XAU\n"
            "    instrument_class: commodity\n"
            "    candidates: GC=F\n"
        )
        watchlist = loader.load_watchlist()
        xau = [spec for spec in watchlist if spec.symbol == "XAU"]
        assert len(xau) == 1
        assert xau[0].candidates == ("GC=F",)

    def test_watchlist_bad_class_strict(self, write_instruments) -> None:
        loader = write_instruments("watchlist:\n  - symbol: X\n    instrument_class: crypto\n")
        with pytest.raises(ConfigurationError, match="Unknown instrument_class"):
            loader.load_watchlist(strict=True)

    def test_watchlist_invalid_entries_skipped(self, write_instruments) -> None:
        loader = write_instruments(
            "watchlist:\n"
            "  - symbol: X\n"
            "    instrument_class: crypto\n"
            "  - just-a-string\n"
            "  - symbol: FUND\n"
            "    instrument_class: equity_fund\n"
        )

        watchlist = loader.load_watchlist()

        assert [spec.symbol for spec in watchlist] == ["XAG", "XAU", "NIFTY50", "FUND"]

    def test_watchlist_must_be_list(self, write_instruments) -> None:
        loader = write_instruments("watchlist:\n  FUND: equity_fund\n")
        with pytest.raises(ConfigurationError, match="must be a list"):
            loader.load_watchlist()

    def test_global_config_skips_instrument_tier(self, write_instruments) -> None:
        loader = write_instruments(
            "instruments:\n"
            "  XAG:\n"
            "    fetch:\n"
            "      max_workers: 9\n"
        )

        assert loader.load_config(None).fetch.max_workers == get_default_config().fetch.max_workers
        assert loader.load_config(None, {"fetch": {"max_workers": 2}}).fetch.max_workers == 2
        assert loader.load_config("XAG").fetch.max_workers == 9

    def test_invalid_yaml(self, write_instruments) -> None:
        loader = write_instruments("instruments: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            loader.load_instrument_config("XAG")

    def test_empty_yaml(self, write_instruments) -> None:
        loader = write_instruments("")
        assert loader.load_instrument_config("XAG") == {}


class TestConfigValidator:
    """Test suite for configuration validation."""

    def test_defaults_are_valid(self, tmp_path) -> None:
        merged = ConfigLoader.create(tmp_path).merge_config("XAG")
        assert ConfigValidator.validate_config(merged) == []

    @pytest.mark.parametrize("params,field", [
        ({"rsi_period": 0}, "rsi_period"),
        ({"rolling_high_window": 2.5}, "rolling_high_window"),
        ({"sma_window": True}, "sma_window"),
        ({"rsi_neutral": 120.0}, "rsi_neutral"),
    ])
    def test_invalid_indicator_params(self, params, field) -> None:
        errors = ConfigValidator.validate_indicator_params(params)
        assert len(errors) == 1
        assert errors[0].field == field

    def test_commodity_green_dip_must_be_positive(self) -> None:
        errors = ConfigValidator.validate_commodity_rules({"green_min_dip_pct": 0.0})
        assert errors[0].field == "green_min_dip_pct"

    def test_equity_green_dip_may_be_zero(self) -> None:
        assert ConfigValidator.validate_equity_fund_rules({"green_min_dip_pct": 0.0}) == []

    def test_band_order(self) -> None:
        errors = ConfigValidator.validate_equity_fund_rules(
            {"yellow_rsi_min": 70.0, "yellow_rsi_max": 60.0}
        )
        assert errors[0].field == "yellow_rsi_min"

    def test_benchmark_kind(self) -> None:
        errors = ConfigValidator.validate_commodity_rules({"benchmark": "rolling_low"})
        assert errors[0].field == "benchmark"

    def test_fetch_params(self) -> None:
        errors = ConfigValidator.validate_fetch_params(
            {"timeout_seconds": 0, "max_workers": 0, "base_url": "ftp://x"}
        )
        assert {e.field for e in errors} == {"timeout_seconds", "max_workers", "base_url"}
