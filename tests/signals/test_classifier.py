"""Tests for the rule-based signal classifier"""

import math
import random

import pytest

from sniper_app.config.defaults import CommodityRules, EquityFundRules
from sniper_app.models.signals import InstrumentClass, SignalTier
from sniper_app.signals.classifier import (
    calculate_dip_percent,
    classify,
    classify_commodity,
    classify_equity_fund,
)

COMMODITY = InstrumentClass.COMMODITY
EQUITY = InstrumentClass.EQUITY_FUND


class TestDipPercent:
    """Dip below the rolling benchmark"""

    def test_zero_at_benchmark(self):
        assert calculate_dip_percent(100.0, 100.0) == 0.0

    def test_positive_below_benchmark(self):
        assert calculate_dip_percent(90.0, 100.0) == pytest.approx(10.0)

    def test_negative_above_benchmark(self):
        assert calculate_dip_percent(110.0, 100.0) == pytest.approx(-10.0)

    @pytest.mark.parametrize("benchmark", [0.0, -5.0])
    def test_non_positive_benchmark_clamped(self, benchmark):
        assert calculate_dip_percent(90.0, benchmark) == 0.0

    @pytest.mark.parametrize("price,benchmark", [
        (float("nan"), 100.0),
        (90.0, float("nan")),
        (float("inf"), 100.0),
        (90.0, float("inf")),
    ])
    def test_non_finite_inputs_clamped(self, price, benchmark):
        assert calculate_dip_percent(price, benchmark) == 0.0


class TestCommodityScenarios:
    """Metals ruleset"""

    def test_scenario_a_green(self):
        signal = classify(90.0, 35.0, 100.0, COMMODITY)
        assert signal.tier is SignalTier.GREEN
        assert signal.dip_percent == pytest.approx(10.0)
        assert signal.action == "AGGRESSIVE BUY"
        assert "10.0%" in signal.rationale
        assert "35.0" in signal.rationale

    def test_scenario_b_yellow(self):
        signal = classify(97.0, 50.0, 100.0, COMMODITY)
        assert signal.tier is SignalTier.YELLOW
        assert signal.dip_percent == pytest.approx(3.0)
        assert signal.action == "STANDARD TRANCHE"

    def test_scenario_c_red_overheated(self):
        signal = classify(99.5, 70.0, 100.0, COMMODITY)
        assert signal.tier is SignalTier.RED
        assert signal.dip_percent == pytest.approx(0.5)
        assert "overheated" in signal.rationale.lower()

    def test_red_noise_dip_rationale(self):
        signal = classify(99.0, 50.0, 100.0, COMMODITY)
        assert signal.tier is SignalTier.RED
        assert "overheated" not in signal.rationale.lower()
        assert "1.0%" in signal.rationale

    def test_green_boundaries_inclusive(self):
        assert classify(94.0, 40.0, 100.0, COMMODITY).tier is SignalTier.GREEN

    def test_rsi_at_40_with_small_dip_is_red(self):
        """rsi 40 fails GREEN on dip and YELLOW on its strict lower bound"""
        assert classify(97.0, 40.0, 100.0, COMMODITY).tier is SignalTier.RED

    def test_rsi_at_65_is_red_overheated(self):
        signal = classify(90.0, 65.0, 100.0, COMMODITY)
        assert signal.tier is SignalTier.RED
        assert "overheated" in signal.rationale.lower()

    def test_oversold_without_dip_is_red(self):
        assert classify(100.0, 20.0, 100.0, COMMODITY).tier is SignalTier.RED


class TestEquityFundScenarios:
    """Index and fund ruleset"""

    def test_scenario_d_boundary_red(self):
        signal = classify(96.0, 44.0, 100.0, EQUITY)
        assert signal.dip_percent == pytest.approx(4.0)
        assert signal.tier is SignalTier.RED
        assert "insufficient" in signal.rationale.lower()

    def test_scenario_e_green(self):
        signal = classify(95.0, 44.0, 100.0, EQUITY)
        assert signal.tier is SignalTier.GREEN
        assert signal.dip_percent == pytest.approx(5.0)
        assert signal.action == "ACCUMULATE"

    def test_neutral_band_yellow_regardless_of_dip(self):
        assert classify(100.0, 45.0, 100.0, EQUITY).tier is SignalTier.YELLOW
        assert classify(80.0, 59.9, 100.0, EQUITY).tier is SignalTier.YELLOW

    def test_overextended_red(self):
        signal = classify(100.0, 60.0, 100.0, EQUITY)
        assert signal.tier is SignalTier.RED
        assert "overextended" in signal.rationale.lower()


class TestClassifierTotality:
    """Determinism, totality and RSI clamping"""

    @pytest.mark.parametrize("seed", range(25))
    def test_deterministic_and_never_green_without_dip(self, seed):
        rng = random.Random(seed)
        for _ in range(40):
            price = rng.uniform(1.0, 200.0)
            rsi = rng.uniform(0.0, 100.0)
            benchmark = rng.uniform(1.0, 200.0)
            for instrument_class in InstrumentClass:
                first = classify(price, rsi, benchmark, instrument_class)
                second = classify(price, rsi, benchmark, instrument_class)

                assert first == second
                assert first.tier in SignalTier
                if first.dip_percent <= 0:
                    assert first.tier is not SignalTier.GREEN

    @pytest.mark.parametrize("instrument_class", list(InstrumentClass))
    def test_non_positive_benchmark_never_claims_dip(self, instrument_class):
        signal = classify(90.0, 10.0, 0.0, instrument_class)
        assert signal.dip_percent == 0.0
        assert signal.tier is not SignalTier.GREEN

    @pytest.mark.parametrize("instrument_class", list(InstrumentClass))
    def test_nan_inputs_produce_clean_rationale(self, instrument_class):
        signal = classify(float("nan"), float("nan"), 100.0, instrument_class)
        assert "nan" not in signal.rationale.lower()
        assert math.isfinite(signal.dip_percent)

    def test_rsi_clamped_into_range(self):
        assert "100.0" in classify(100.0, 250.0, 100.0, COMMODITY).rationale

    def test_wrong_rules_type_rejected(self):
        with pytest.raises(TypeError):
            classify(90.0, 35.0, 100.0, COMMODITY, EquityFundRules())


class TestAlternateRulesets:
    """Thresholds passed in as immutable config"""

    def test_stricter_commodity_dip(self):
        rules = CommodityRules(green_min_dip_pct=12.0)
        assert classify(90.0, 35.0, 100.0, COMMODITY, rules).tier is SignalTier.RED

    def test_ruleset_functions_directly(self):
        assert classify_commodity(35.0, 10.0, CommodityRules()).tier is SignalTier.GREEN
        assert classify_equity_fund(50.0, 0.0, EquityFundRules()).tier is SignalTier.YELLOW
