"""Tests for the equity calculator entry points."""

import pytest

from pokerodds import (
    CalculationOptions, EquityCalculator, GameVariant, HandCategory,
    calculate_equity, calculate_hand_strength, get_hand_class,
)
from pokerodds.errors import (
    CardError, CompositionError, InsufficientCardsError,
)
from pokerodds.game.cards import FULL_DECK, parse_cards
from pokerodds.game.combinations import n_choose_k


@pytest.fixture
def calculator():
    return EquityCalculator(GameVariant.TEXAS_HOLDEM)


class TestEquityCalculator:
    def test_exact_on_flop(self, calculator):
        calculator.add_hand("AsKs").add_hand("QhJh").set_board("Ts9s2h")

        result = calculator.calculate(force_exhaustive=True)

        assert result.is_exact
        assert len(result.player_results) == 2
        assert result.player_results[0].equity > 0.5
        assert result.player_results[1].equity < 0.5
        assert sum(result.equities) == pytest.approx(1.0, abs=1e-5)

    def test_river_clear_winner(self, calculator):
        calculator.add_hand("AsKs").add_hand("QhJh").set_board("Ts9s2h8c7s")

        result = calculator.calculate()

        assert result.player_results[0].equity == 1.0
        assert result.player_results[1].equity == 0.0

    def test_river_tie(self, calculator):
        calculator.add_hand("AsKs").add_hand("AhKh").set_board("2s3s4h5c7d")

        result = calculator.calculate()

        for player in result.player_results:
            assert player.equity == 0.5
            assert player.ties == 1
            assert player.wins == 0

    def test_player_order_preserved(self, calculator):
        calculator.add_hand("QhJh").add_hand("AsKs").set_board("Ts9s2h8c7s")

        result = calculator.calculate()

        assert [p.hand_index for p in result.player_results] == [0, 1]
        assert result.equities == [0.0, 1.0]

    def test_dead_cards(self, calculator):
        calculator.add_hand("AsKs").add_hand("QhJh").set_board("Ts9s2h").add_dead_cards("8s7s")
        assert calculator.estimate_combinations() == n_choose_k(43, 2)
        assert calculator.calculate().total_hands == 903


class TestStrategySelection:
    def test_small_scenario_is_exact(self, calculator):
        calculator.add_hand("AsKs").add_hand("QhJh").set_board("Ts9s2h")
        assert calculator.estimate_combinations() == 990
        assert calculator.calculate().is_exact

    def test_preflop_uses_monte_carlo(self, calculator):
        calculator.add_hand("AsAh").add_hand("KsKh")
        assert calculator.estimate_combinations() == n_choose_k(48, 5)

        result = calculator.calculate(iterations=2000, seed=4)

        assert not result.is_exact
        assert result.total_hands <= 2000
        assert result.player_results[0].equity > 0.7

    def test_lower_ceiling_switches_to_monte_carlo(self, calculator):
        calculator.add_hand("AsKs").add_hand("QhJh").set_board("Ts9s2h")

        result = calculator.calculate(
            CalculationOptions(max_exhaustive_combinations=500, iterations=1000, seed=8)
        )

        assert not result.is_exact
        assert result.total_hands == 1000

    def test_force_exhaustive_above_ceiling(self, calculator):
        calculator.add_hand("AsKs").add_hand("QhJh").set_board("Ts9s2h")

        result = calculator.calculate(max_exhaustive_combinations=500, force_exhaustive=True)

        assert result.is_exact
        assert result.total_hands == 990

    def test_overrides_do_not_mutate_options(self, calculator):
        calculator.add_hand("AsKs").add_hand("QhJh").set_board("Ts9s2h8c7s")
        options = CalculationOptions()
        calculator.calculate(options, force_exhaustive=True)
        assert options.force_exhaustive is False


class TestValidation:
    def test_requires_two_hands(self, calculator):
        calculator.add_hand("AsKs")
        with pytest.raises(InsufficientCardsError, match="got 1"):
            calculator.calculate()

    def test_requires_any_hands(self, calculator):
        with pytest.raises(InsufficientCardsError):
            calculator.calculate()

    def test_duplicate_across_hands(self, calculator):
        calculator.add_hand("AsKs").add_hand("AsQh")
        with pytest.raises(CompositionError, match="As"):
            calculator.calculate()

    def test_duplicate_with_dead_cards(self, calculator):
        calculator.add_hand("AsKs").add_hand("QhJh").add_dead_cards("Qh")
        with pytest.raises(CompositionError, match="Qh"):
            calculator.calculate()

    def test_too_many_hole_cards(self, calculator):
        with pytest.raises(CompositionError, match="max is 2"):
            calculator.add_hand("AsKsQs")

    def test_too_many_board_cards(self, calculator):
        with pytest.raises(CompositionError, match="max is 5"):
            calculator.set_board("AsKsQsJsTs9s")

    def test_deck_too_small_to_finish(self):
        used = parse_cards("AsKsQhJhTs9s2h3c")
        dead = [c for c in FULL_DECK if c not in used]

        with pytest.raises(InsufficientCardsError, match="Need 2 cards to deal, only 1 remain"):
            calculate_equity(["AsKs", "QhJh"], board="Ts9s2h", dead_cards=dead)

    def test_deck_too_small_preflop(self, calculator):
        used = parse_cards("AsKs3c")
        calculator.add_hand("AsKs").add_hand("")
        calculator.add_dead_cards([c for c in FULL_DECK if c not in used])

        with pytest.raises(InsufficientCardsError, match="only 1 remain"):
            calculator.calculate()

    def test_malformed_card(self, calculator):
        with pytest.raises(CardError):
            calculator.add_hand("AsK")

    def test_bad_option(self):
        with pytest.raises(ValueError, match="iterations"):
            CalculationOptions(iterations=0)

    def test_bad_threshold(self):
        with pytest.raises(ValueError, match="accuracy_threshold"):
            CalculationOptions(accuracy_threshold=1.5)


class TestBuilder:
    def test_reset(self, calculator):
        calculator.add_hand("AsKs").add_hand("QhJh").set_board("Ts9s2h").add_dead_cards("2c")
        calculator.reset()
        assert calculator.hands == []
        assert len(calculator.board) == 0
        assert calculator.dead_cards == []

    def test_clear_board(self, calculator):
        calculator.set_board("Ts9s2h").clear_board()
        assert len(calculator.board) == 0

    def test_set_variant(self, calculator):
        calculator.set_variant(GameVariant.OMAHA).add_hand("AsKsQsJs")
        assert len(calculator.hands[0]) == 4


class TestOmaha:
    def test_omaha_river_tie(self):
        calc = EquityCalculator(GameVariant.OMAHA)
        calc.add_hand("AsKsQsJs").add_hand("AhKhQhJh").set_board("Ts9s2h8c7d")

        result = calc.calculate()

        assert result.is_exact
        assert result.equities == [0.5, 0.5]

    def test_omaha_three_way_with_dead_cards(self):
        calc = EquityCalculator(GameVariant.OMAHA)
        calc.add_hand("AsKsQsJs").add_hand("AhKhQhJh").add_hand("AdKdQdJd")
        calc.set_board("Ts9s2h").add_dead_cards("8s7s")

        result = calc.calculate()

        assert result.is_exact
        assert result.total_hands == n_choose_k(35, 2)
        assert sum(result.equities) == pytest.approx(1.0, abs=1e-5)

    def test_evaluate_needs_flop(self):
        calc = EquityCalculator(GameVariant.OMAHA)
        with pytest.raises(InsufficientCardsError):
            calc.evaluate_hand("AsKsQsJs")


class TestSingleHandEvaluation:
    def test_evaluate_hand(self, calculator):
        calculator.set_board("Ts9s2h8c7s")
        hand = calculator.evaluate_hand("AsKs")
        assert hand.category == HandCategory.FLUSH
        assert hand.description == "Flush, Ace high"

    def test_evaluate_hand_needs_five_cards(self, calculator):
        calculator.set_board("Ts9s")
        with pytest.raises(InsufficientCardsError):
            calculator.evaluate_hand("AsKs")


class TestCalculateEquity:
    def test_calculate_equity(self):
        result = calculate_equity(["AsKs", "QhJh"], board="Ts9s2h")
        assert result.is_exact
        assert sum(result.equities) == pytest.approx(1.0, abs=1e-5)

    def test_calculate_equity_options(self):
        result = calculate_equity(
            ["AsAh", "KsKh"], iterations=1000, seed=12,
        )
        assert not result.is_exact
        assert result.player_results[0].equity > result.player_results[1].equity


class TestHandStrength:
    def test_calculate_hand_strength(self):
        board = "Ks7d2c9h3s"
        # Trips should rank better than one pair
        kk = calculate_hand_strength("KhKc", board)
        aa = calculate_hand_strength("AsAh", board)

        # Higher value is better
        assert kk > aa

    def test_get_hand_class(self):
        assert get_hand_class("KhKc", "Ks7d2c9h3s") == "Three of a Kind"
