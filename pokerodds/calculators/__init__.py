"""Equity calculators: exhaustive enumeration and Monte Carlo sampling."""

from .options import CalculationOptions
from .results import EquityResult, PlayerEquity
from .base import BaseCalculator, validate_composition
from .exhaustive import ExhaustiveCalculator
from .monte_carlo import MonteCarloCalculator

__all__ = [
    "CalculationOptions",
    "EquityResult",
    "PlayerEquity",
    "BaseCalculator",
    "validate_composition",
    "ExhaustiveCalculator",
    "MonteCarloCalculator",
]
