"""Exact equity by enumerating every way to complete the hands and board."""

import logging
import math
import time
from typing import Iterator

from pokerodds.errors import CombinatorialOverflowError
from pokerodds.game.cards import Card
from pokerodds.game.combinations import combinations
from .base import BaseCalculator
from .results import EquityResult
from .tally import tally_scenario

logger = logging.getLogger(__name__)

# Board completions between progress reports
PROGRESS_INTERVAL = 1000

Completion = tuple[Card, ...]


def iter_hand_completions(
    options: list[list[Completion]],
) -> Iterator[tuple[tuple[Completion, ...], frozenset[Card]]]:
    """
    Cross product of per-hand completions with no card dealt twice.

    Index-based backtracking: picks[level] is the position of the
    completion chosen for incomplete hand `level`, -1 when unset.

    Yields:
        (one completion per incomplete hand, set of all cards they use)
    """
    depth = len(options)
    if depth == 0:
        yield (), frozenset()
        return

    picks = [-1] * depth
    taken: set[Card] = set()
    level = 0

    while level >= 0:
        candidates = options[level]
        current = picks[level]
        if current >= 0:
            taken.difference_update(candidates[current])

        current += 1
        while current < len(candidates) and not taken.isdisjoint(candidates[current]):
            current += 1

        if current == len(candidates):
            picks[level] = -1
            level -= 1
            continue

        picks[level] = current
        taken.update(candidates[current])

        if level + 1 < depth:
            level += 1
        else:
            yield (
                tuple(options[i][picks[i]] for i in range(depth)),
                frozenset(taken),
            )


class ExhaustiveCalculator(BaseCalculator):
    """
    Calculator that evaluates every possible outcome exactly once.

    Refuses to start when the estimated number of scenarios exceeds
    options.max_exhaustive_combinations, unless force_exhaustive is set.
    """

    is_exact = True

    def check_size(self) -> int:
        """
        Estimated scenario count, if it is within the configured ceiling.

        Raises:
            CombinatorialOverflowError: estimate above the ceiling without force
        """
        total = self.estimate_combinations()
        limit = self.options.max_exhaustive_combinations
        if total > limit and not self.options.force_exhaustive:
            raise CombinatorialOverflowError(total, limit)
        return total

    def calculate(self) -> EquityResult:
        """
        Calculate exact equity.

        Returns:
            EquityResult with is_exact=True
        """
        start = time.perf_counter()
        estimate = self.check_size()
        results = self.initial_results()

        hand_missing, board_missing = self.cards_missing()
        remaining = self.create_deck().cards

        incomplete = [i for i, need in enumerate(hand_missing) if need > 0]
        hand_options = [combinations(remaining, hand_missing[i]) for i in incomplete]
        board_options = combinations(remaining, board_missing)

        logger.debug(
            "Exhaustive enumeration: ~%d scenarios, %d incomplete hands, %d board cards missing",
            estimate, len(incomplete), board_missing,
        )

        base_hole = [hand.cards for hand in self.hands]
        base_board = self.board.cards
        leaves = math.prod(len(o) for o in hand_options)
        total_hands = 0

        for leaf, (completions, taken) in enumerate(iter_hand_completions(hand_options)):
            hole_cards = list(base_hole)
            for i, extra in zip(incomplete, completions):
                hole_cards[i] = base_hole[i] + extra

            for b, extra_board in enumerate(board_options, start=1):
                if b % PROGRESS_INTERVAL == 0:
                    self.options.report_progress((leaf + b / len(board_options)) / leaves)

                if taken and not taken.isdisjoint(extra_board):
                    continue
                evaluated = self.evaluate_scenario(hole_cards, base_board + extra_board)
                tally_scenario(results, evaluated)
                total_hands += 1

        self.options.report_progress(1.0)

        for result in results:
            result.finalize(total_hands)

        elapsed = time.perf_counter() - start
        logger.info(
            "Exhaustive calculation finished: %d scenarios in %.3fs", total_hands, elapsed
        )
        return EquityResult(
            player_results=results,
            total_hands=total_hands,
            elapsed_time=elapsed,
            is_exact=True,
        )
