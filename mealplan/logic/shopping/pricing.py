"""Ingredient cost estimation.

Rates are currency units per 100g or per discrete unit, looked up by
lower-cased ingredient name. The estimate knows nothing about real prices or
unit conversion beyond treating "kg" as ten 100g steps, so it is a rough
guide only.
"""
import json
import logging
import math
from pathlib import Path
from typing import Dict, Optional

from mealplan.utilities.constants import BASE_INGREDIENT_RATES, DEFAULT_INGREDIENT_RATE

logger = logging.getLogger(__name__)


def round_cost(value: float) -> float:
    """Round half up to 2 decimals."""
    return math.floor(value * 100 + 0.5) / 100


class RateTable:
    def __init__(self, rates: Optional[Dict[str, float]] = None,
                 default_rate: float = DEFAULT_INGREDIENT_RATE):
        source = BASE_INGREDIENT_RATES if rates is None else rates
        self.rates = {k.strip().lower(): float(v) for k, v in source.items()}
        self.default_rate = float(default_rate)

    def rate_for(self, name: str) -> float:
        return self.rates.get((name or "").strip().lower(), self.default_rate)

    def estimate_cost(self, name: str, quantity: float, unit: str) -> float:
        '''Estimated cost of `quantity` `unit` of the named ingredient.'''
        multiplier = quantity * 10 if unit == "kg" else quantity
        return round_cost(self.rate_for(name) * multiplier)

    @classmethod
    def from_file(cls, path: Path, default_rate: float = DEFAULT_INGREDIENT_RATE) -> "RateTable":
        """Built-in rates overlaid with the {name: rate} mapping stored in `path`."""
        rates = dict(BASE_INGREDIENT_RATES)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                overrides = json.load(f) or {}
            rates.update({k: float(v) for k, v in overrides.items()})
        except FileNotFoundError:
            logger.warning(f"Rate table file not found: {path}. Using built-in rates.")
        except (json.JSONDecodeError, AttributeError, TypeError, ValueError) as e:
            logger.error(f"Invalid rate table file {path}: {e}")
        return cls(rates, default_rate)

    @classmethod
    def from_config(cls) -> "RateTable":
        from mealplan.utilities.config import DEFAULT_INGREDIENT_RATE as configured_default, RATE_TABLE_FILE
        if RATE_TABLE_FILE is not None:
            return cls.from_file(RATE_TABLE_FILE, configured_default)
        return cls(default_rate=configured_default)


__all__ = ['RateTable', 'round_cost']
