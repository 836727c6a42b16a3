"""Outcome tally shared by the exhaustive and Monte Carlo calculators."""

from typing import Sequence

from pokerodds.game.evaluator import EvaluatedHand
from .results import PlayerEquity


def find_winners(evaluated: Sequence[EvaluatedHand]) -> list[int]:
    """Indices of every hand holding the highest value."""
    best = max(hand.value for hand in evaluated)
    return [i for i, hand in enumerate(evaluated) if hand.value == best]


def tally_scenario(
    results: Sequence[PlayerEquity],
    evaluated: Sequence[EvaluatedHand],
) -> list[int]:
    """
    Record one fully dealt scenario.

    Every player's category count is incremented. A sole winner gets a
    win; tied winners each get a tie and 1/n of the pot.

    Returns:
        Indices of the winning hands
    """
    for result, hand in zip(results, evaluated):
        result.category_counts[hand.category] = result.category_counts.get(hand.category, 0) + 1

    winners = find_winners(evaluated)
    share = 1.0 / len(winners)

    for i in winners:
        result = results[i]
        category = evaluated[i].category
        if len(winners) == 1:
            result.wins += 1
        else:
            result.ties += 1
            result.tie_share += share
        result.winning_category_counts[category] = (
            result.winning_category_counts.get(category, 0.0) + share
        )

    return winners
