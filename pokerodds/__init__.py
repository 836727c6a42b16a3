"""
pokerodds: Poker Equity Calculator

Exact and Monte Carlo equity for Texas Hold'em and Omaha hands, with
per-category hand strength distributions for analytic tooling.
"""

__version__ = "0.1.0"

from .errors import (
    EquityError, CardError, CompositionError,
    InsufficientCardsError, CombinatorialOverflowError,
)
from .game import Card, Hand, Board, GameVariant, HandCategory, EvaluatedHand
from .calculators import CalculationOptions, EquityResult, PlayerEquity
from .game.equity import (
    EquityCalculator, calculate_equity, calculate_hand_strength, get_hand_class,
)

__all__ = [
    "EquityError",
    "CardError",
    "CompositionError",
    "InsufficientCardsError",
    "CombinatorialOverflowError",
    "Card",
    "Hand",
    "Board",
    "GameVariant",
    "HandCategory",
    "EvaluatedHand",
    "CalculationOptions",
    "EquityResult",
    "PlayerEquity",
    "EquityCalculator",
    "calculate_equity",
    "calculate_hand_strength",
    "get_hand_class",
]
