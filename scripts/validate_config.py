#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sniper_app.config.loader import ConfigLoader
from sniper_app.config.validation import ConfigValidator, ValidationError
from sniper_app.errors import ConfigurationError


def validate_instrument_config(loader: ConfigLoader, symbol: str) -> List[ValidationError]:
    """Validate merged configuration for a specific instrument."""
    config = loader.merge_config(symbol)
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    print("🔍 Validating Sniper configuration...")

    loader = ConfigLoader.create()

    try:
        watchlist = loader.load_watchlist(strict=True)
    except ConfigurationError as e:
        print(f"❌ Watchlist could not be loaded: {e}")
        sys.exit(1)

    all_valid = True

    for spec in watchlist:
        print(f"\n📊 Validating {spec.symbol} ({spec.instrument_class.value}, "
              f"candidates: {', '.join(spec.candidates)})...")

        try:
            errors = validate_instrument_config(loader, spec.symbol)
        except ConfigurationError as e:
            print(f"❌ Error validating {spec.symbol}: {e}")
            all_valid = False
            continue

        if errors:
            print(f"❌ Found {len(errors)} validation errors:")
            for error in errors:
                print(f"  • {error.field}: {error.message} (value: {error.value})")
            all_valid = False
        else:
            print(f"✅ {spec.symbol} configuration is valid")

    if all_valid:
        print(f"\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print(f"\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
