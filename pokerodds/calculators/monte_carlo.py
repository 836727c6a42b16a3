"""Approximate equity by sampling random completions."""

import logging
import time
from collections import deque

import numpy as np

from pokerodds.game.cards import Deck
from .base import BaseCalculator
from .results import EquityResult, PlayerEquity
from .tally import tally_scenario

logger = logging.getLogger(__name__)

BATCH_SIZE = 1000
CONVERGENCE_WINDOW = 10  # snapshots compared before stopping early


class MonteCarloCalculator(BaseCalculator):
    """
    Calculator that estimates equity from random runouts.

    Sampling runs in batches of BATCH_SIZE until options.iterations is
    reached, or until the running equities have moved less than
    options.accuracy_threshold against each of the last
    CONVERGENCE_WINDOW batch snapshots.
    """

    def calculate(self) -> EquityResult:
        """
        Calculate approximate equity.

        Returns:
            EquityResult with is_exact=False
        """
        start = time.perf_counter()
        max_iterations = self.options.iterations
        threshold = self.options.accuracy_threshold

        rng = np.random.default_rng(self.options.seed)
        deck = self.create_deck(rng)
        results = self.initial_results()

        history: deque[list[float]] = deque(maxlen=CONVERGENCE_WINDOW)
        completed = 0

        while completed < max_iterations:
            count = min(BATCH_SIZE, max_iterations - completed)
            self._run_batch(count, deck, results)
            completed += count

            current = [r.running_equity(completed) for r in results]
            self.options.report_progress(completed / max_iterations)

            if (
                threshold
                and len(history) == CONVERGENCE_WINDOW
                and self._has_converged(current, history, threshold)
            ):
                logger.debug(
                    "Monte Carlo converged after %d iterations (threshold %g)",
                    completed, threshold,
                )
                break

            history.append(current)

        for result in results:
            result.finalize(completed)

        elapsed = time.perf_counter() - start
        logger.info(
            "Monte Carlo calculation finished: %d iterations in %.3fs", completed, elapsed
        )
        return EquityResult(
            player_results=results,
            total_hands=completed,
            elapsed_time=elapsed,
            is_exact=False,
        )

    @staticmethod
    def _has_converged(
        current: list[float], history: deque, threshold: float
    ) -> bool:
        return all(
            abs(equity - snapshot[i]) < threshold
            for snapshot in history
            for i, equity in enumerate(current)
        )

    def _run_batch(self, count: int, deck: Deck, results: list[PlayerEquity]) -> None:
        """Deal and tally `count` independent random runouts."""
        hand_missing, board_missing = self.cards_missing()
        base_hole = [hand.cards for hand in self.hands]
        base_board = self.board.cards

        for _ in range(count):
            deck.reset()
            deck.shuffle()

            hole_cards = [
                cards + tuple(deck.deal(need)) if need else cards
                for cards, need in zip(base_hole, hand_missing)
            ]
            board_cards = base_board + tuple(deck.deal(board_missing))

            tally_scenario(results, self.evaluate_scenario(hole_cards, board_cards))
