"""Card, hand, board and deck representation utilities."""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterable, Optional, Union

import numpy as np
from treys import Card as TreysCard

from pokerodds.errors import CardError, CompositionError


class Rank(IntEnum):
    """Card ranks (2-14 where 14 is Ace)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


class Suit(IntEnum):
    """Card suits."""
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3


# Mapping for string conversion
RANK_STR = {
    2: "2", 3: "3", 4: "4", 5: "5", 6: "6", 7: "7", 8: "8", 9: "9",
    10: "T", 11: "J", 12: "Q", 13: "K", 14: "A"
}
STR_RANK = {v: k for k, v in RANK_STR.items()}

SUIT_STR = {0: "c", 1: "d", 2: "h", 3: "s"}
STR_SUIT = {v: k for k, v in SUIT_STR.items()}


@dataclass(frozen=True)
class Card:
    """A playing card."""
    rank: int  # 2-14
    suit: int  # 0-3

    def __str__(self) -> str:
        return f"{RANK_STR[self.rank]}{SUIT_STR[self.suit]}"

    def __repr__(self) -> str:
        return str(self)

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse card from string like 'As', 'Th', '2c'."""
        if not isinstance(s, str) or len(s) != 2:
            raise CardError(f"Invalid card string: {s!r}")
        rank_char = s[0].upper()
        suit_char = s[1].lower()

        if rank_char not in STR_RANK:
            raise CardError(f"Invalid rank: {s[0]!r} in card {s!r}")
        if suit_char not in STR_SUIT:
            raise CardError(f"Invalid suit: {s[1]!r} in card {s!r}")

        return cls(rank=STR_RANK[rank_char], suit=STR_SUIT[suit_char])

    def to_treys(self) -> int:
        """Convert to treys library card format."""
        return TreysCard.new(str(self))


def parse_cards(s: str) -> tuple[Card, ...]:
    """
    Parse a run of card tokens like 'AsKhQd' (or 'As Kh Qd').

    Raises:
        CardError: on odd-length input or an unknown rank/suit
    """
    cards = []
    for chunk in s.split():
        if len(chunk) % 2:
            raise CardError(
                f"Invalid card string {s!r}: token {chunk!r} has odd length {len(chunk)}"
            )
        cards.extend(Card.from_string(chunk[i:i + 2]) for i in range(0, len(chunk), 2))
    return tuple(cards)


def cards_to_string(cards: Iterable[Card]) -> str:
    return "".join(str(c) for c in cards)


class GameVariant(str, Enum):
    """Supported poker variants."""
    TEXAS_HOLDEM = "texas_holdem"
    OMAHA = "omaha"


@dataclass(frozen=True)
class GameConfig:
    """Card count limits for a game variant."""
    min_hole_cards: int
    max_hole_cards: int
    max_board_cards: int
    cards_used_in_hand: int = 5


GAME_CONFIGS = {
    GameVariant.TEXAS_HOLDEM: GameConfig(
        min_hole_cards=2, max_hole_cards=2, max_board_cards=5,
    ),
    GameVariant.OMAHA: GameConfig(
        min_hole_cards=4, max_hole_cards=4, max_board_cards=5,
    ),
}


def _check_unique(cards: tuple[Card, ...], where: str) -> None:
    seen: set[Card] = set()
    for card in cards:
        if card in seen:
            raise CompositionError(f"Duplicate card in {where}: {card}")
        seen.add(card)


@dataclass(frozen=True)
class Hand:
    """
    One player's hole cards.

    A hand may be incomplete (even empty); the calculators deal the
    missing cards. Completing a hand returns a new Hand.
    """
    cards: tuple[Card, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "cards", tuple(self.cards))
        _check_unique(self.cards, "hand")

    def __str__(self) -> str:
        return cards_to_string(self.cards)

    def __repr__(self) -> str:
        return f"Hand({self})"

    def __len__(self) -> int:
        return len(self.cards)

    @classmethod
    def from_string(
        cls, s: str, variant: GameVariant = GameVariant.TEXAS_HOLDEM
    ) -> "Hand":
        """Parse hand from string like 'AsKh' and validate it for the variant."""
        hand = cls(parse_cards(s))
        hand.validate(variant)
        return hand

    def validate(self, variant: GameVariant) -> None:
        max_cards = GAME_CONFIGS[variant].max_hole_cards
        if len(self.cards) > max_cards:
            raise CompositionError(
                f"Too many hole cards for {variant.value}: "
                f"got {len(self.cards)} ({self}), max is {max_cards}"
            )

    def cards_needed(self, variant: GameVariant) -> int:
        return max(0, GAME_CONFIGS[variant].max_hole_cards - len(self.cards))

    def is_complete(self, variant: GameVariant) -> bool:
        return len(self.cards) >= GAME_CONFIGS[variant].min_hole_cards

    def completed_with(self, extra: Iterable[Card]) -> "Hand":
        return Hand(self.cards + tuple(extra))


class BoardStage(str, Enum):
    """Street implied by the number of community cards."""
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"


_STAGE_BY_COUNT = {
    0: BoardStage.PREFLOP,
    3: BoardStage.FLOP,
    4: BoardStage.TURN,
    5: BoardStage.RIVER,
}


@dataclass(frozen=True)
class Board:
    """Community cards shared by every player (0-5 cards)."""
    cards: tuple[Card, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "cards", tuple(self.cards))
        _check_unique(self.cards, "board")

    def __str__(self) -> str:
        return cards_to_string(self.cards)

    def __repr__(self) -> str:
        return f"Board({self})"

    def __len__(self) -> int:
        return len(self.cards)

    @classmethod
    def from_string(
        cls, s: str, variant: GameVariant = GameVariant.TEXAS_HOLDEM
    ) -> "Board":
        """Parse board from string like 'Ts9s2h' and validate it."""
        board = cls(parse_cards(s))
        board.validate(variant)
        return board

    def validate(self, variant: GameVariant) -> None:
        max_cards = GAME_CONFIGS[variant].max_board_cards
        if len(self.cards) > max_cards:
            raise CompositionError(
                f"Too many board cards for {variant.value}: "
                f"got {len(self.cards)} ({self}), max is {max_cards}"
            )

    def cards_needed(self, variant: GameVariant) -> int:
        return max(0, GAME_CONFIGS[variant].max_board_cards - len(self.cards))

    def is_complete(self, variant: GameVariant) -> bool:
        return self.cards_needed(variant) == 0

    def completed_with(self, extra: Iterable[Card]) -> "Board":
        return Board(self.cards + tuple(extra))

    @property
    def stage(self) -> BoardStage:
        try:
            return _STAGE_BY_COUNT[len(self.cards)]
        except KeyError:
            raise CompositionError(
                f"Invalid board with {len(self.cards)} cards: {self}"
            ) from None


CardsLike = Union[str, Iterable[Card]]


def to_cards(value: CardsLike) -> tuple[Card, ...]:
    """Accept either a card string or an iterable of Card."""
    if isinstance(value, str):
        return parse_cards(value)
    if isinstance(value, (Hand, Board)):
        return value.cards
    return tuple(value)


FULL_DECK = tuple(
    Card(rank, suit)
    for rank in range(2, 15)
    for suit in range(4)
)


class Deck:
    """
    A standard 52-card deck minus a set of excluded (used) cards.

    reset() restores the deck to all 52 cards except the excluded ones.
    """

    def __init__(
        self,
        excluded: Iterable[Card] = (),
        rng: Optional[np.random.Generator] = None,
    ):
        self.excluded = frozenset(excluded)
        self.rng = rng if rng is not None else np.random.default_rng()
        self._base = [c for c in FULL_DECK if c not in self.excluded]
        self.cards: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Reset deck to the full deck minus excluded cards."""
        self.cards = list(self._base)

    def shuffle(self) -> None:
        """Shuffle the deck."""
        self.rng.shuffle(self.cards)

    def deal(self, n: int = 1) -> list[Card]:
        """Deal n cards from the deck."""
        if n > len(self.cards):
            raise ValueError(f"Cannot deal {n} cards, only {len(self.cards)} remaining")
        dealt = self.cards[:n]
        self.cards = self.cards[n:]
        return dealt

    def remove(self, cards: Iterable[Card]) -> None:
        """Remove specific cards from the deck."""
        gone = set(cards)
        self.cards = [c for c in self.cards if c not in gone]

    def peek_random_card(self) -> Card:
        """Return a random card without removing it."""
        if not self.cards:
            raise ValueError("No cards left in the deck")
        return self.cards[int(self.rng.integers(len(self.cards)))]

    def __contains__(self, card: Card) -> bool:
        return card in self.cards

    def __len__(self) -> int:
        return len(self.cards)
