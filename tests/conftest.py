"""Pytest configuration and fixtures."""

import pytest

from pokerodds.game.cards import Board, Hand, parse_cards


@pytest.fixture
def cards():
    """Parse a card string into a tuple of Card."""
    return parse_cards


@pytest.fixture
def flop_board():
    return Board.from_string("Ts9s2h")


@pytest.fixture
def river_board():
    return Board.from_string("Ts9s2h8c7s")


@pytest.fixture
def flush_draw_hands():
    return [Hand.from_string("AsKs"), Hand.from_string("QhJh")]
