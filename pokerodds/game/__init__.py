"""Game representation module."""

from .cards import (
    Card, Rank, Suit, Hand, Board, BoardStage, Deck,
    GameVariant, GameConfig, GAME_CONFIGS, parse_cards,
)
from .combinations import combinations, n_choose_k, estimate_combinations
from .evaluator import (
    HandCategory, EvaluatedHand, evaluate, evaluate_holdem, evaluate_omaha,
    score_five, compare_hands,
)

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "Hand",
    "Board",
    "BoardStage",
    "Deck",
    "GameVariant",
    "GameConfig",
    "GAME_CONFIGS",
    "parse_cards",
    "combinations",
    "n_choose_k",
    "estimate_combinations",
    "HandCategory",
    "EvaluatedHand",
    "evaluate",
    "evaluate_holdem",
    "evaluate_omaha",
    "score_five",
    "compare_hands",
]
