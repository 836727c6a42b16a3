"""Shared state and validation for equity calculators."""

from typing import Iterable, Optional, Sequence

import numpy as np

from pokerodds.errors import CompositionError, InsufficientCardsError
from pokerodds.game.cards import FULL_DECK, Board, Card, Deck, GameVariant, Hand
from pokerodds.game.combinations import cards_missing, estimate_combinations
from pokerodds.game.evaluator import EvaluatedHand, get_evaluator
from .options import CalculationOptions
from .results import PlayerEquity


def validate_composition(
    hands: Sequence[Hand],
    board: Board,
    dead_cards: Sequence[Card],
    variant: GameVariant,
) -> None:
    """
    Check card limits and that no card appears twice anywhere.

    Also rejects inputs that leave too few cards to finish the deal.

    Raises:
        CompositionError: on a duplicate card or an oversized hand/board
        InsufficientCardsError: fewer cards left than are still to be dealt
    """
    board.validate(variant)
    for hand in hands:
        hand.validate(variant)

    owner: dict[Card, str] = {}

    def claim(card: Card, where: str) -> None:
        if card in owner:
            raise CompositionError(
                f"Card {card} appears in both {owner[card]} and {where}"
            )
        owner[card] = where

    for card in board.cards:
        claim(card, "the board")
    for card in dead_cards:
        claim(card, "the dead cards")
    for i, hand in enumerate(hands):
        for card in hand.cards:
            claim(card, f"hand {i + 1} ({hand})")

    per_hand, board_missing = cards_missing(hands, board, variant)
    missing = sum(per_hand) + board_missing
    available = len(FULL_DECK) - len(owner)
    if available < missing:
        raise InsufficientCardsError(
            f"Need {missing} cards to deal, only {available} remain"
        )


class BaseCalculator:
    """
    Base class for equity calculators.

    An instance owns its inputs for one calculate() call. Hands and board
    are immutable; each scenario is evaluated from fresh card tuples.
    """

    is_exact = False

    def __init__(
        self,
        hands: Sequence[Hand],
        board: Optional[Board] = None,
        dead_cards: Iterable[Card] = (),
        variant: GameVariant = GameVariant.TEXAS_HOLDEM,
        options: Optional[CalculationOptions] = None,
    ):
        """
        Initialize calculator.

        Args:
            hands: Player hands, possibly incomplete
            board: Community cards, possibly incomplete
            dead_cards: Cards known to be out of play
            variant: Game variant deciding hand sizes and evaluation
            options: Calculation configuration
        """
        self.hands = tuple(hands)
        self.board = board if board is not None else Board()
        self.dead_cards = tuple(dead_cards)
        self.variant = GameVariant(variant)
        self.options = options or CalculationOptions()
        self.evaluate = get_evaluator(self.variant)

        if len(self.hands) < 2:
            raise InsufficientCardsError(
                f"At least two player hands are required, got {len(self.hands)}"
            )
        validate_composition(self.hands, self.board, self.dead_cards, self.variant)

    def used_cards(self) -> list[Card]:
        """Cards unavailable for dealing: board, dead cards and hole cards."""
        used = list(self.board.cards) + list(self.dead_cards)
        for hand in self.hands:
            used.extend(hand.cards)
        return used

    def create_deck(self, rng: Optional[np.random.Generator] = None) -> Deck:
        return Deck(excluded=self.used_cards(), rng=rng)

    def cards_missing(self) -> tuple[list[int], int]:
        return cards_missing(self.hands, self.board, self.variant)

    def estimate_combinations(self) -> int:
        return estimate_combinations(self.hands, self.board, self.dead_cards, self.variant)

    def initial_results(self) -> list[PlayerEquity]:
        return [PlayerEquity(hand_index=i) for i in range(len(self.hands))]

    def evaluate_scenario(
        self,
        hole_cards: Sequence[tuple[Card, ...]],
        board_cards: tuple[Card, ...],
    ) -> list[EvaluatedHand]:
        return [self.evaluate(cards, board_cards) for cards in hole_cards]

    def calculate(self):
        raise NotImplementedError
