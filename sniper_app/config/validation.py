"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

BENCHMARK_KINDS = ("rolling_high", "rolling_average")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _check_rsi_bounds(params: dict[str, Any], names: tuple[str, ...]) -> list[ValidationError]:
    errors = []
    for name in names:
        if name in params:
            value = params[name]
            if not _is_number(value) or value < 0 or value > 100:
                errors.append(ValidationError(
                    field=name,
                    message="Must be a number between 0 and 100",
                    value=value
                ))
    return errors


def _check_benchmark(params: dict[str, Any]) -> list[ValidationError]:
    if "benchmark" in params and params["benchmark"] not in BENCHMARK_KINDS:
        return [ValidationError(
            field="benchmark",
            message=f"Must be one of {', '.join(BENCHMARK_KINDS)}",
            value=params["benchmark"]
        )]
    return []


def _check_band_order(params: dict[str, Any]) -> list[ValidationError]:
    low = params.get("yellow_rsi_min")
    high = params.get("yellow_rsi_max")
    if _is_number(low) and _is_number(high) and low > high:
        return [ValidationError(
            field="yellow_rsi_min",
            message="Must not exceed yellow_rsi_max",
            value=low
        )]
    return []


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_indicator_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate indicator window parameters."""
        errors = []

        for name in ("rsi_period", "rolling_high_window", "sma_window"):
            if name in params and not _is_positive_int(params[name]):
                errors.append(ValidationError(
                    field=name,
                    message="Must be a positive integer",
                    value=params[name]
                ))

        errors.extend(_check_rsi_bounds(params, ("rsi_neutral",)))

        return errors

    @staticmethod
    def validate_commodity_rules(params: dict[str, Any]) -> list[ValidationError]:
        """Validate commodity ruleset thresholds."""
        errors = _check_rsi_bounds(
            params, ("green_rsi_max", "yellow_rsi_min", "yellow_rsi_max", "overheated_rsi")
        )

        # GREEN uses an inclusive dip comparison, so zero would allow GREEN at no dip
        if "green_min_dip_pct" in params:
            value = params["green_min_dip_pct"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="green_min_dip_pct",
                    message="Must be a positive number",
                    value=value
                ))

        if "yellow_min_dip_pct" in params:
            value = params["yellow_min_dip_pct"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="yellow_min_dip_pct",
                    message="Must be a non-negative number",
                    value=value
                ))

        errors.extend(_check_band_order(params))
        errors.extend(_check_benchmark(params))

        return errors

    @staticmethod
    def validate_equity_fund_rules(params: dict[str, Any]) -> list[ValidationError]:
        """Validate equity/fund ruleset thresholds."""
        errors = _check_rsi_bounds(
            params, ("green_rsi_max", "yellow_rsi_min", "yellow_rsi_max", "overextended_rsi")
        )

        if "green_min_dip_pct" in params:
            value = params["green_min_dip_pct"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="green_min_dip_pct",
                    message="Must be a non-negative number",
                    value=value
                ))

        errors.extend(_check_band_order(params))
        errors.extend(_check_benchmark(params))

        return errors

    @staticmethod
    def validate_fetch_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate series retrieval parameters."""
        errors = []

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        if "max_workers" in params and not _is_positive_int(params["max_workers"]):
            errors.append(ValidationError(
                field="max_workers",
                message="Must be a positive integer",
                value=params["max_workers"]
            ))

        if "base_url" in params:
            value = params["base_url"]
            if not isinstance(value, str) or not value.startswith(("http://", "https://")):
                errors.append(ValidationError(
                    field="base_url",
                    message="Must be an http(s) URL",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "indicators" in config:
            errors.extend(ConfigValidator.validate_indicator_params(config["indicators"]))

        if "commodity" in config:
            errors.extend(ConfigValidator.validate_commodity_rules(config["commodity"]))

        if "equity_fund" in config:
            errors.extend(ConfigValidator.validate_equity_fund_rules(config["equity_fund"]))

        if "fetch" in config:
            errors.extend(ConfigValidator.validate_fetch_params(config["fetch"]))

        return errors
