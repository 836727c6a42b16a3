"""Equity calculation entry points."""

import logging
from dataclasses import replace
from typing import Iterable, Optional, Union

from pokerodds.calculators.exhaustive import ExhaustiveCalculator
from pokerodds.calculators.monte_carlo import MonteCarloCalculator
from pokerodds.calculators.options import CalculationOptions
from pokerodds.calculators.base import validate_composition
from pokerodds.calculators.results import EquityResult
from pokerodds.errors import InsufficientCardsError
from .cards import Board, Card, CardsLike, GameVariant, Hand, to_cards
from .combinations import estimate_combinations
from .evaluator import EvaluatedHand, evaluate

logger = logging.getLogger(__name__)


class EquityCalculator:
    """
    Poker equity calculator.

    Collects hands, board and dead cards, then picks exhaustive
    enumeration when the number of scenarios is small enough and Monte
    Carlo sampling otherwise.

    Example:
        result = (
            EquityCalculator()
            .add_hand("AsKs")
            .add_hand("QhJh")
            .set_board("Ts9s2h")
            .calculate()
        )
    """

    def __init__(self, variant: GameVariant = GameVariant.TEXAS_HOLDEM):
        self.variant = GameVariant(variant)
        self.hands: list[Hand] = []
        self.board = Board()
        self.dead_cards: list[Card] = []

    def set_variant(self, variant: GameVariant) -> "EquityCalculator":
        self.variant = GameVariant(variant)
        return self

    def add_hand(self, hand: Union[CardsLike, Hand]) -> "EquityCalculator":
        """Add a player hand, e.g. 'AsKs'. May be partial or empty."""
        hand = Hand(to_cards(hand))
        hand.validate(self.variant)
        self.hands.append(hand)
        return self

    def set_board(self, board: Union[CardsLike, Board]) -> "EquityCalculator":
        board = Board(to_cards(board))
        board.validate(self.variant)
        self.board = board
        return self

    def add_dead_cards(self, cards: CardsLike) -> "EquityCalculator":
        """Add cards known to be unavailable for dealing."""
        self.dead_cards.extend(to_cards(cards))
        return self

    def clear_hands(self) -> "EquityCalculator":
        self.hands = []
        return self

    def clear_board(self) -> "EquityCalculator":
        self.board = Board()
        return self

    def clear_dead_cards(self) -> "EquityCalculator":
        self.dead_cards = []
        return self

    def reset(self) -> "EquityCalculator":
        """Clear hands, board and dead cards."""
        return self.clear_hands().clear_board().clear_dead_cards()

    def estimate_combinations(self) -> int:
        """Estimated number of scenarios an exhaustive run would visit."""
        return estimate_combinations(self.hands, self.board, self.dead_cards, self.variant)

    def calculate(
        self,
        options: Optional[CalculationOptions] = None,
        **overrides,
    ) -> EquityResult:
        """
        Calculate equity for all player hands.

        Args:
            options: Calculation configuration
            **overrides: Individual CalculationOptions fields,
                e.g. iterations=50000, force_exhaustive=True

        Returns:
            EquityResult with one PlayerEquity per hand, in insertion order

        Raises:
            InsufficientCardsError: fewer than two hands
            CompositionError: a card is used twice
        """
        if len(self.hands) < 2:
            raise InsufficientCardsError(
                f"At least two player hands are required for equity calculation, "
                f"got {len(self.hands)}"
            )

        options = options or CalculationOptions()
        if overrides:
            options = replace(options, **overrides)

        validate_composition(self.hands, self.board, self.dead_cards, self.variant)

        total = self.estimate_combinations()
        use_exhaustive = (
            options.force_exhaustive or total <= options.max_exhaustive_combinations
        )
        calculator_cls = ExhaustiveCalculator if use_exhaustive else MonteCarloCalculator
        logger.debug(
            "Estimated %d combinations (limit %d): using %s",
            total, options.max_exhaustive_combinations, calculator_cls.__name__,
        )

        calculator = calculator_cls(
            self.hands, self.board, self.dead_cards, self.variant, options
        )
        return calculator.calculate()

    def evaluate_hand(self, hand: Union[CardsLike, Hand]) -> EvaluatedHand:
        """Evaluate a single hand against the current board."""
        hand = Hand(to_cards(hand))
        hand.validate(self.variant)
        return evaluate(hand.cards, self.board.cards, self.variant)


def calculate_equity(
    hands: Iterable[Union[CardsLike, Hand]],
    board: CardsLike = "",
    dead_cards: CardsLike = "",
    variant: GameVariant = GameVariant.TEXAS_HOLDEM,
    **options,
) -> EquityResult:
    """
    Calculate equity for a list of hands.

    Args:
        hands: Player hands, e.g. ["AsKs", "QhJh"]
        board: Board cards, e.g. "Ts9s2h"
        dead_cards: Cards out of play
        variant: Game variant
        **options: CalculationOptions fields

    Returns:
        EquityResult
    """
    calc = EquityCalculator(variant)
    for hand in hands:
        calc.add_hand(hand)
    calc.set_board(board).add_dead_cards(dead_cards)
    return calc.calculate(CalculationOptions(**options))


def calculate_hand_strength(
    hand: CardsLike,
    board: CardsLike,
    variant: GameVariant = GameVariant.TEXAS_HOLDEM,
) -> int:
    """
    Calculate absolute hand strength.

    Higher is better; values are comparable across categories.

    Args:
        hand: Hole cards
        board: Board cards

    Returns:
        Tie-break value of the best hand
    """
    return EquityCalculator(variant).set_board(board).evaluate_hand(hand).value


def get_hand_class(
    hand: CardsLike,
    board: CardsLike,
    variant: GameVariant = GameVariant.TEXAS_HOLDEM,
) -> str:
    """
    Get the hand class (e.g., "Two Pair", "Flush").

    Args:
        hand: Hole cards
        board: Board cards

    Returns:
        Hand class string
    """
    return EquityCalculator(variant).set_board(board).evaluate_hand(hand).category.label
