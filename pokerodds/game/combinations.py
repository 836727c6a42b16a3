"""Combinatorics helpers for enumerating card completions."""

import itertools
import math
from typing import Iterable, Sequence, TypeVar

from .cards import Board, Card, GameVariant, Hand

T = TypeVar("T")


def combinations(items: Sequence[T], k: int) -> list[tuple[T, ...]]:
    """
    Generate every k-subset of items, each exactly once.

    Subsets keep the input order of their members. k == 0 gives a single
    empty subset and k > len(items) gives none.
    """
    if k < 0:
        raise ValueError(f"Subset size must be non-negative, got {k}")
    return list(itertools.combinations(items, k))


def n_choose_k(n: int, k: int) -> int:
    """Number of k-subsets of an n-element set (0 when k is out of range)."""
    if k < 0 or k > n:
        return 0
    return math.comb(n, k)


def cards_missing(
    hands: Sequence[Hand], board: Board, variant: GameVariant
) -> tuple[list[int], int]:
    """Cards still to be dealt per hand, and to the board."""
    return (
        [hand.cards_needed(variant) for hand in hands],
        board.cards_needed(variant),
    )


def estimate_combinations(
    hands: Sequence[Hand],
    board: Board,
    dead_cards: Iterable[Card],
    variant: GameVariant,
) -> int:
    """
    Estimate how many completion scenarios exhaustive enumeration visits.

    Counts the ways to choose every missing card from the remaining deck,
    ignoring order and which hand receives which card. Returns 1 when
    nothing is missing.
    """
    per_hand, board_missing = cards_missing(hands, board, variant)
    missing = sum(per_hand) + board_missing
    if missing == 0:
        return 1

    used = len(board) + len(tuple(dead_cards)) + sum(len(h) for h in hands)
    return n_choose_k(52 - used, missing)
