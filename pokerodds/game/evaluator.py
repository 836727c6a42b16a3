"""
Hand evaluation.

Every evaluator maps hole cards plus board cards to the best five-card
hand it can make, expressed as an EvaluatedHand whose integer value
totally orders all hands:

    value = category * CATEGORY_WEIGHT + sum(rank_i * 100 ** (4 - i))

The five ranks are ordered so the deciding cards come first: repeated
rank groups (largest group, then highest rank) before kickers, and plain
descending order for straights, flushes and high cards. In a wheel
(A-2-3-4-5) the Ace is ordered last and weighted 1.

Variants are a closed set: evaluate() dispatches on GameVariant.
"""

import itertools
from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Sequence

from pokerodds.errors import InsufficientCardsError
from .cards import GAME_CONFIGS, Card, GameVariant, Rank
from .combinations import combinations

# Larger than any kicker term (14 * 1.01010101e8 < 1.5e9)
CATEGORY_WEIGHT = 10 ** 10

_POSITION_WEIGHTS = (100 ** 4, 100 ** 3, 100 ** 2, 100, 1)

_WHEEL = frozenset({Rank.ACE, Rank.FIVE, Rank.FOUR, Rank.THREE, Rank.TWO})
_WHEEL_ORDER = (5, 4, 3, 2, 1)

HAND_SIZE = GAME_CONFIGS[GameVariant.TEXAS_HOLDEM].cards_used_in_hand


class HandCategory(IntEnum):
    """Poker hand categories, weakest first."""
    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    HandCategory.HIGH_CARD: "High Card",
    HandCategory.PAIR: "Pair",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.FLUSH: "Flush",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.ROYAL_FLUSH: "Royal Flush",
}

RANK_NAMES = {
    1: "Ace", 2: "Two", 3: "Three", 4: "Four", 5: "Five", 6: "Six",
    7: "Seven", 8: "Eight", 9: "Nine", 10: "Ten", 11: "Jack",
    12: "Queen", 13: "King", 14: "Ace",
}
RANK_PLURALS = {
    2: "Twos", 3: "Threes", 4: "Fours", 5: "Fives", 6: "Sixes",
    7: "Sevens", 8: "Eights", 9: "Nines", 10: "Tens", 11: "Jacks",
    12: "Queens", 13: "Kings", 14: "Aces",
}


@dataclass(frozen=True)
class EvaluatedHand:
    """The best five-card hand a player can make."""
    category: HandCategory
    value: int
    description: str
    cards: tuple[Card, ...] = ()

    def __str__(self) -> str:
        return self.description


def _straight_order(ranks: list[int]) -> tuple[int, ...] | None:
    """Ordered ranks if the five ranks form a straight, else None."""
    if len(set(ranks)) != 5:
        return None
    if ranks[0] - ranks[4] == 4:
        return tuple(ranks)
    if set(ranks) == _WHEEL:
        return _WHEEL_ORDER
    return None


def _grouped_order(counts: Counter) -> tuple[int, ...]:
    """Repeated ranks first (bigger group, then higher rank), then kickers."""
    groups = sorted(counts.items(), key=lambda rc: (rc[1], rc[0]), reverse=True)
    return tuple(rank for rank, n in groups for _ in range(n))


def hand_value(category: HandCategory, ordered: Sequence[int]) -> int:
    """Tie-break value for a category and its five ordered ranks."""
    return category * CATEGORY_WEIGHT + sum(
        rank * weight for rank, weight in zip(ordered, _POSITION_WEIGHTS)
    )


def describe(category: HandCategory, ordered: Sequence[int]) -> str:
    """Human-readable description, e.g. 'Full House, Kings full of Twos'."""
    top = ordered[0]
    if category == HandCategory.ROYAL_FLUSH:
        return "Royal Flush"
    if category == HandCategory.STRAIGHT_FLUSH:
        return f"Straight Flush, {RANK_NAMES[top]} high"
    if category == HandCategory.FOUR_OF_A_KIND:
        return f"Four of a Kind, {RANK_PLURALS[top]} with {RANK_NAMES[ordered[4]]} kicker"
    if category == HandCategory.FULL_HOUSE:
        return f"Full House, {RANK_PLURALS[top]} full of {RANK_PLURALS[ordered[3]]}"
    if category == HandCategory.FLUSH:
        return f"Flush, {RANK_NAMES[top]} high"
    if category == HandCategory.STRAIGHT:
        return f"Straight, {RANK_NAMES[top]} high"
    if category == HandCategory.THREE_OF_A_KIND:
        return f"Three of a Kind, {RANK_PLURALS[top]}"
    if category == HandCategory.TWO_PAIR:
        return f"Two Pair, {RANK_PLURALS[top]} and {RANK_PLURALS[ordered[2]]}"
    if category == HandCategory.PAIR:
        return f"Pair of {RANK_PLURALS[top]}"
    return f"High Card, {RANK_NAMES[top]}"


def score_five(cards: Sequence[Card]) -> EvaluatedHand:
    """Score exactly five cards."""
    if len(cards) != HAND_SIZE:
        raise InsufficientCardsError(
            f"Exactly {HAND_SIZE} cards required for scoring, got {len(cards)}"
        )

    ranks = sorted((c.rank for c in cards), reverse=True)
    counts = Counter(ranks)
    shape = sorted(counts.values(), reverse=True)
    is_flush = len({c.suit for c in cards}) == 1
    straight = _straight_order(ranks)

    if is_flush and straight:
        if straight[0] == Rank.ACE:
            category = HandCategory.ROYAL_FLUSH
        else:
            category = HandCategory.STRAIGHT_FLUSH
        ordered = straight
    elif shape[0] == 4:
        category = HandCategory.FOUR_OF_A_KIND
        ordered = _grouped_order(counts)
    elif shape == [3, 2]:
        category = HandCategory.FULL_HOUSE
        ordered = _grouped_order(counts)
    elif is_flush:
        category = HandCategory.FLUSH
        ordered = tuple(ranks)
    elif straight:
        category = HandCategory.STRAIGHT
        ordered = straight
    elif shape[0] == 3:
        category = HandCategory.THREE_OF_A_KIND
        ordered = _grouped_order(counts)
    elif shape[:2] == [2, 2]:
        category = HandCategory.TWO_PAIR
        ordered = _grouped_order(counts)
    elif shape[0] == 2:
        category = HandCategory.PAIR
        ordered = _grouped_order(counts)
    else:
        category = HandCategory.HIGH_CARD
        ordered = tuple(ranks)

    return EvaluatedHand(
        category=category,
        value=hand_value(category, ordered),
        description=describe(category, ordered),
        cards=tuple(cards),
    )


def _best(candidates) -> EvaluatedHand:
    return max((score_five(c) for c in candidates), key=lambda h: h.value)


def evaluate_holdem(hole_cards: Sequence[Card], board_cards: Sequence[Card]) -> EvaluatedHand:
    """
    Best five-card hand from any mix of hole and board cards.

    Raises:
        InsufficientCardsError: fewer than 5 cards in total
    """
    all_cards = tuple(hole_cards) + tuple(board_cards)
    if len(all_cards) < HAND_SIZE:
        raise InsufficientCardsError(
            f"Not enough cards to evaluate: got {len(all_cards)}, need at least {HAND_SIZE}"
        )
    return _best(combinations(all_cards, HAND_SIZE))


def evaluate_omaha(hole_cards: Sequence[Card], board_cards: Sequence[Card]) -> EvaluatedHand:
    """
    Best hand using exactly two hole cards and exactly three board cards.

    Raises:
        InsufficientCardsError: hole cards != 4 or fewer than 3 board cards
    """
    hole_size = GAME_CONFIGS[GameVariant.OMAHA].min_hole_cards
    if len(hole_cards) != hole_size:
        raise InsufficientCardsError(
            f"Omaha requires exactly {hole_size} hole cards, got {len(hole_cards)}"
        )
    if len(board_cards) < 3:
        raise InsufficientCardsError(
            f"Need at least 3 board cards for Omaha, got {len(board_cards)}"
        )
    return _best(
        hole + board
        for hole, board in itertools.product(
            combinations(tuple(hole_cards), 2), combinations(tuple(board_cards), 3)
        )
    )


EVALUATORS: dict[GameVariant, Callable[[Sequence[Card], Sequence[Card]], EvaluatedHand]] = {
    GameVariant.TEXAS_HOLDEM: evaluate_holdem,
    GameVariant.OMAHA: evaluate_omaha,
}


def get_evaluator(variant: GameVariant):
    """Evaluation function for a game variant."""
    try:
        return EVALUATORS[GameVariant(variant)]
    except (KeyError, ValueError):
        raise ValueError(f"No evaluator for variant: {variant!r}") from None


def evaluate(
    hole_cards: Sequence[Card],
    board_cards: Sequence[Card],
    variant: GameVariant = GameVariant.TEXAS_HOLDEM,
) -> EvaluatedHand:
    """Evaluate the best hand for the given variant."""
    return get_evaluator(variant)(hole_cards, board_cards)


def compare_hands(hand1: EvaluatedHand, hand2: EvaluatedHand) -> int:
    """1 if hand1 wins, -1 if hand2 wins, 0 on an exact tie."""
    if hand1.value > hand2.value:
        return 1
    if hand1.value < hand2.value:
        return -1
    return 0
