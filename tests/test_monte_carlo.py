"""Tests for the Monte Carlo equity calculator."""

import pytest

from pokerodds.calculators.exhaustive import ExhaustiveCalculator
from pokerodds.calculators.monte_carlo import BATCH_SIZE, MonteCarloCalculator
from pokerodds.calculators.options import CalculationOptions
from pokerodds.game.cards import Board, Hand


def run(hands, board, **options):
    return MonteCarloCalculator(
        hands, board, options=CalculationOptions(**options)
    ).calculate()


class TestMonteCarloCalculator:
    def test_pair_vs_pair(self, flop_board):
        result = run(
            [Hand.from_string("AsAh"), Hand.from_string("KsKh")],
            flop_board,
            iterations=1000,
            seed=11,
        )

        assert not result.is_exact
        assert result.total_hands == 1000
        assert result.player_results[0].equity > 0.75
        assert result.player_results[1].equity < 0.25
        assert sum(result.equities) == pytest.approx(1.0, abs=1e-5)

    def test_converges_to_exact(self, flush_draw_hands, flop_board):
        exact = ExhaustiveCalculator(flush_draw_hands, flop_board).calculate()
        approx = run(
            flush_draw_hands, flop_board,
            iterations=10000, accuracy_threshold=None, seed=7,
        )

        assert approx.total_hands == 10000
        for e, a in zip(exact.equities, approx.equities):
            assert abs(e - a) < 0.02

    def test_three_way(self):
        hands = [Hand.from_string(h) for h in ("AsKs", "QhJh", "TdTc")]
        result = run(hands, Board.from_string("8s7s6h"), iterations=1000, seed=5)

        assert len(result.player_results) == 3
        assert sum(result.equities) == pytest.approx(1.0, abs=1e-5)

    def test_incomplete_hands_and_board(self):
        hands = [Hand.from_string("AsAd"), Hand(), Hand.from_string("7c")]
        result = run(hands, Board(), iterations=2000, seed=3)

        assert result.total_hands == 2000
        assert sum(result.equities) == pytest.approx(1.0, abs=1e-5)
        assert result.player_results[0].equity > result.player_results[1].equity
        for player in result.player_results:
            assert sum(player.category_counts.values()) == 2000

    def test_seed_reproducible(self, flush_draw_hands, flop_board):
        first = run(flush_draw_hands, flop_board, iterations=2000, seed=99)
        second = run(flush_draw_hands, flop_board, iterations=2000, seed=99)

        assert first.player_results[0].wins == second.player_results[0].wins
        assert first.player_results[0].ties == second.player_results[0].ties

    def test_partial_batch(self, flush_draw_hands, flop_board):
        result = run(flush_draw_hands, flop_board, iterations=2500, seed=1)
        assert result.total_hands == 2500


class TestConvergence:
    def test_stops_early_when_stable(self, flush_draw_hands, river_board):
        # Complete board: every sample has the same outcome
        result = run(
            flush_draw_hands, river_board,
            iterations=100000, accuracy_threshold=0.001,
        )

        assert result.total_hands == (10 + 1) * BATCH_SIZE
        assert result.player_results[0].equity == 1.0

    def test_no_threshold_runs_to_cap(self, flush_draw_hands, river_board):
        result = run(
            flush_draw_hands, river_board,
            iterations=15000, accuracy_threshold=None,
        )
        assert result.total_hands == 15000

    def test_needs_full_window(self, flush_draw_hands, river_board):
        result = run(
            flush_draw_hands, river_board,
            iterations=10000, accuracy_threshold=0.5,
        )
        assert result.total_hands == 10000


class TestProgress:
    def test_called_after_every_batch(self, flush_draw_hands, flop_board):
        seen = []
        run(
            flush_draw_hands, flop_board,
            iterations=3000, accuracy_threshold=None, seed=2,
            progress_callback=seen.append,
        )
        assert seen == pytest.approx([1 / 3, 2 / 3, 1.0])
